"""REST actions managing ALM integration settings."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, request

from ..extensions import limiter
from ..models.alm_setting import (
    APP_ID_MAX_LENGTH,
    KEY_MAX_LENGTH,
    PRIVATE_KEY_MAX_LENGTH,
    URL_MAX_LENGTH,
)
from ..services.alm_settings import update_github_setting
from ..utils.auth import current_token, require_system_administrator
from ..utils.params import Param, read_params

bp = Blueprint("alm_settings", __name__)

PARAM_KEY = "key"
PARAM_NEW_KEY = "newKey"
PARAM_URL = "url"
PARAM_APP_ID = "appId"
PARAM_PRIVATE_KEY = "privateKey"

UPDATE_GITHUB_PARAMS = (
    Param(PARAM_KEY, KEY_MAX_LENGTH, description="Unique key of the GitHub instance setting"),
    Param(
        PARAM_NEW_KEY,
        KEY_MAX_LENGTH,
        required=False,
        description="Optional new value for an unique key of the GitHub instance setting",
    ),
    Param(PARAM_URL, URL_MAX_LENGTH, description="GitHub API URL"),
    Param(PARAM_APP_ID, APP_ID_MAX_LENGTH, description="GitHub App ID"),
    Param(PARAM_PRIVATE_KEY, PRIVATE_KEY_MAX_LENGTH, description="GitHub App private key"),
)


def _update_rate_limit() -> str:
    return current_app.config.get("ALM_UPDATE_RATE_LIMIT", "60 per minute")


@bp.post("/alm_settings/update_github")
@require_system_administrator
@limiter.limit(_update_rate_limit)
def update_github() -> tuple[str, int]:
    """Update GitHub ALM instance setting. Requires the 'Administer System' permission."""

    params = read_params(UPDATE_GITHUB_PARAMS, request.values)
    setting = update_github_setting(
        key=params[PARAM_KEY],
        new_key=params[PARAM_NEW_KEY],
        url=params[PARAM_URL],
        app_id=params[PARAM_APP_ID],
        private_key=params[PARAM_PRIVATE_KEY],
    )

    api_token = current_token()
    current_app.logger.info(
        "GitHub ALM setting %r updated by token %s",
        setting.key,
        api_token.id if api_token is not None else None,
    )
    return "", HTTPStatus.NO_CONTENT
