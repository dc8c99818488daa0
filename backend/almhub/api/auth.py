"""REST endpoints for API token management."""

from __future__ import annotations

from datetime import datetime, timezone
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request

from ..exceptions import RecordNotFoundException, ValidationException
from ..extensions import db
from ..models.auth import ROLE_READONLY, ROLES, ApiToken
from ..utils.auth import current_token, generate_token, hash_token, require_system_administrator

bp = Blueprint("auth", __name__)


def _isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.replace(tzinfo=None).isoformat() + "Z"


def _serialize(token: ApiToken) -> dict[str, object | None]:
    return {
        "id": token.id,
        "name": token.name,
        "role": token.role,
        "created_at": _isoformat(token.created_at),
        "revoked_at": _isoformat(token.revoked_at),
    }


@bp.post("/auth/tokens")
@require_system_administrator
def create_token() -> tuple[object, int]:
    payload = request.get_json(force=True, silent=True) or {}
    name = (payload.get("name") or "").strip()
    role = (payload.get("role") or ROLE_READONLY).strip().lower()

    if not name:
        raise ValidationException("name is required")
    if role not in ROLES:
        raise ValidationException("role must be 'admin' or 'readonly'")

    plaintext = generate_token()
    token = ApiToken(name=name, role=role, token_hash=hash_token(plaintext))
    db.session.add(token)
    db.session.commit()
    current_app.logger.info(
        "API token %s (%s) issued by token %s", token.id, role, current_token().id
    )

    response_payload = _serialize(token)
    response_payload["token"] = plaintext
    return jsonify(response_payload), HTTPStatus.CREATED


@bp.get("/auth/tokens")
@require_system_administrator
def list_tokens() -> tuple[object, int]:
    tokens = ApiToken.query.order_by(ApiToken.created_at.desc()).all()
    return jsonify([_serialize(token) for token in tokens]), HTTPStatus.OK


@bp.delete("/auth/tokens/<int:token_id>")
@require_system_administrator
def revoke_token(token_id: int) -> tuple[object, int]:
    token = db.session.get(ApiToken, token_id)
    if token is None:
        raise RecordNotFoundException("API token", str(token_id), attribute="id")
    if token.revoked_at is None:
        token.revoked_at = datetime.now(timezone.utc)
        db.session.commit()
        current_app.logger.info("API token %s revoked", token.id)
    return "", HTTPStatus.NO_CONTENT
