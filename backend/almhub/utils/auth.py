"""Helper utilities for API token based authentication."""

from __future__ import annotations

import functools
import hashlib
import hmac
import secrets
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import g, request

from ..exceptions import AuthenticationException, AuthorizationException
from ..models.auth import ApiToken

TCallable = TypeVar("TCallable", bound=Callable[..., Any])


def hash_token(token: str) -> str:
    """Return a SHA-256 hash for the given token."""

    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_token() -> str:
    """Generate a secure random token string."""

    return secrets.token_urlsafe(32)


def _extract_bearer_token() -> str | None:
    authorization = request.headers.get("Authorization")
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def _find_token(token_hash: str) -> ApiToken | None:
    return ApiToken.query.filter_by(token_hash=token_hash).first()


def authenticate() -> ApiToken:
    """Resolve the active API token of the current request."""

    token_value = _extract_bearer_token()
    if not token_value:
        raise AuthenticationException("missing bearer token")

    token_hash = hash_token(token_value)
    api_token = _find_token(token_hash)
    if api_token is None or not hmac.compare_digest(token_hash, api_token.token_hash):
        raise AuthenticationException("invalid token")

    if not api_token.is_active():
        raise AuthenticationException("token revoked")

    return api_token


def current_token() -> ApiToken | None:
    """Return the token authenticated for this request, if any."""

    return getattr(g, "api_token", None)


def require_system_administrator(func: TCallable) -> TCallable:
    """Decorator for views that need the 'Administer System' permission.

    The check runs before the wrapped view touches the request payload, so an
    actor without the role is rejected whatever parameters it sent.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        api_token = authenticate()
        if not api_token.is_system_administrator():
            raise AuthorizationException("insufficient privileges")

        g.api_token = api_token
        return func(*args, **kwargs)

    return cast(TCallable, wrapper)
