"""Persistence operations on ALM integration settings."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from ..exceptions import RecordExistsException, RecordNotFoundException
from ..extensions import db
from ..models.alm_setting import AlmSetting
from ..utils.params import is_blank

logger = logging.getLogger(__name__)

RESOURCE_NAME = "ALM setting"


def find_by_key(key: str) -> AlmSetting | None:
    """Return the setting stored under ``key`` whatever its ALM kind."""

    return AlmSetting.query.filter_by(key=key).first()


def get_by_key(key: str) -> AlmSetting:
    setting = AlmSetting.query.filter_by(key=key).first()
    if setting is None:
        raise RecordNotFoundException(RESOURCE_NAME, key)
    return setting


def update_github_setting(
    key: str,
    url: str,
    app_id: str,
    private_key: str,
    new_key: str | None = None,
) -> AlmSetting:
    """Rewrite the setting ``key`` with GitHub connection fields and optionally rename it to ``new_key``.

    All connection fields are replaced. The collision check on ``new_key`` is
    not atomic with the write: a concurrent rename to the same key is caught
    by the unique constraint on commit and reported the same way.

    Raises:
        RecordNotFoundException: no setting exists under ``key``.
        RecordExistsException: ``new_key`` is already used by another setting.
    """

    target_key = key if is_blank(new_key) else new_key
    try:
        setting = get_by_key(key)
        if target_key != key:
            existing = find_by_key(target_key)
            if existing is not None:
                raise RecordExistsException(RESOURCE_NAME, existing.key)

        setting.key = target_key
        setting.url = url
        setting.app_id = app_id
        setting.private_key = private_key
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        logger.warning("Unique key conflict while renaming %r to %r", key, target_key)
        raise RecordExistsException(RESOURCE_NAME, target_key) from exc
    except Exception:
        db.session.rollback()
        raise

    if target_key != key:
        logger.info("Renamed GitHub ALM setting %r to %r", key, target_key)
    return setting
