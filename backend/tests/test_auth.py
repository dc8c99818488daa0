"""Authentication and authorization tests for the API."""

from __future__ import annotations

import pytest


@pytest.mark.usefixtures("cleanup_tables")
def test_token_issuance_and_listing(client, admin_headers):
    response = client.post(
        "/api/auth/tokens",
        json={"name": "Readonly Token", "role": "readonly"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    created = response.get_json()
    assert created["role"] == "readonly"
    assert created["token"]

    list_response = client.get("/api/auth/tokens", headers=admin_headers)
    assert list_response.status_code == 200
    tokens = list_response.get_json()
    assert isinstance(tokens, list)
    stored = next(token for token in tokens if token["id"] == created["id"])
    assert "token" not in stored
    assert stored["revoked_at"] is None


def test_token_issuance_validates_payload(client, admin_headers):
    missing_name = client.post("/api/auth/tokens", json={"role": "admin"}, headers=admin_headers)
    assert missing_name.status_code == 400
    assert missing_name.get_json() == {"error": "name is required", "code": "VALIDATION_FAILED"}

    bad_role = client.post(
        "/api/auth/tokens", json={"name": "Weird", "role": "owner"}, headers=admin_headers
    )
    assert bad_role.status_code == 400
    assert bad_role.get_json()["code"] == "VALIDATION_FAILED"


def test_missing_token_is_unauthorized(client):
    response = client.get("/api/auth/tokens")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.get_json() == {
        "error": "missing bearer token",
        "code": "AUTHENTICATION_REQUIRED",
    }


@pytest.mark.parametrize(
    "authorization",
    ["Bearer not-a-known-token", "Basic dXNlcjpwYXNz", "Bearer "],
)
def test_unusable_token_is_unauthorized(client, authorization):
    response = client.get("/api/auth/tokens", headers={"Authorization": authorization})

    assert response.status_code == 401
    assert response.get_json()["code"] == "AUTHENTICATION_REQUIRED"


def test_readonly_token_cannot_manage_tokens(client, readonly_headers):
    response = client.post(
        "/api/auth/tokens",
        json={"name": "Escalation", "role": "admin"},
        headers=readonly_headers,
    )

    assert response.status_code == 403
    assert response.get_json()["code"] == "PERMISSION_DENIED"


def test_revoked_token_is_rejected(client, admin_headers):
    issued = client.post(
        "/api/auth/tokens",
        json={"name": "Temp", "role": "admin"},
        headers=admin_headers,
    )
    token_data = issued.get_json()
    temp_headers = {"Authorization": f"Bearer {token_data['token']}"}

    initial_access = client.get("/api/auth/tokens", headers=temp_headers)
    assert initial_access.status_code == 200

    revoke = client.delete(f"/api/auth/tokens/{token_data['id']}", headers=admin_headers)
    assert revoke.status_code == 204

    revoked_access = client.get("/api/auth/tokens", headers=temp_headers)
    assert revoked_access.status_code == 401
    assert revoked_access.get_json()["error"] == "token revoked"


def test_revoking_unknown_token_returns_404(client, admin_headers):
    response = client.delete("/api/auth/tokens/999999", headers=admin_headers)

    assert response.status_code == 404
    assert response.is_json
    assert response.get_json() == {
        "error": "No API token with id '999999' has been found",
        "code": "RECORD_NOT_FOUND",
    }


@pytest.mark.parametrize(
    ("role", "revoked", "expected"),
    [("admin", False, True), ("admin", True, False), ("readonly", False, False)],
)
def test_system_administrator_requires_active_admin_token(role, revoked, expected):
    from datetime import datetime, timezone

    from backend.almhub.models.auth import ApiToken

    token = ApiToken(
        name="Role check",
        role=role,
        token_hash="0" * 64,
        revoked_at=datetime.now(timezone.utc) if revoked else None,
    )

    assert token.is_system_administrator() is expected


def test_rate_limit_key_uses_authenticated_token(app):
    from types import SimpleNamespace

    from flask import g

    from backend.almhub.extensions import _rate_limit_key

    with app.test_request_context("/api/alm_settings/update_github", method="POST"):
        g.api_token = SimpleNamespace(id=42)
        assert _rate_limit_key() == "token:42"

    with app.test_request_context(
        "/api/alm_settings/update_github",
        method="POST",
        environ_base={"REMOTE_ADDR": "10.1.2.3"},
    ):
        g.pop("api_token", None)
        assert _rate_limit_key() == "10.1.2.3"
