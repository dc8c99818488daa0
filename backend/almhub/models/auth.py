"""API tokens identifying the actor behind each request."""

from __future__ import annotations

from datetime import datetime, timezone

from ..extensions import db

ROLE_ADMIN = "admin"
ROLE_READONLY = "readonly"
ROLES = (ROLE_READONLY, ROLE_ADMIN)


class ApiToken(db.Model):
    """API token used for authenticating requests.

    Only the SHA-256 hash of the token is stored; the plaintext is handed out
    once when the token is issued.
    """

    __tablename__ = "api_tokens"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    token_hash = db.Column(db.String(64), unique=True, nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_READONLY)
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    revoked_at = db.Column(db.DateTime, nullable=True)

    def is_active(self) -> bool:
        """Return whether the token is still active."""

        return self.revoked_at is None

    def is_system_administrator(self) -> bool:
        return self.is_active() and self.role == ROLE_ADMIN
