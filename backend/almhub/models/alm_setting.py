"""ALM integration settings stored in the database."""

from __future__ import annotations

from datetime import datetime, timezone

from ..extensions import db

ALM_GITHUB = "github"

ALM_MAX_LENGTH = 40
KEY_MAX_LENGTH = 40
URL_MAX_LENGTH = 2000
APP_ID_MAX_LENGTH = 80
PRIVATE_KEY_MAX_LENGTH = 2000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AlmSetting(db.Model):
    """Connection settings for one ALM instance, addressed by its unique key."""

    __tablename__ = "alm_settings"

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(KEY_MAX_LENGTH), unique=True, nullable=False)
    alm = db.Column(db.String(ALM_MAX_LENGTH), nullable=False, default=ALM_GITHUB)
    url = db.Column(db.String(URL_MAX_LENGTH), nullable=True)
    app_id = db.Column(db.String(APP_ID_MAX_LENGTH), nullable=True)
    private_key = db.Column(db.String(PRIVATE_KEY_MAX_LENGTH), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:  # pragma: no cover - repr not critical for tests
        return f"<AlmSetting {self.alm}:{self.key!r}>"
