"""Flask extension singletons shared by the ALM settings backend."""

from flask import g
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_sqlalchemy import SQLAlchemy


def _rate_limit_key() -> str:
    """Bucket requests per API token, or per client address before authentication."""

    api_token = getattr(g, "api_token", None)
    if api_token is None:
        return get_remote_address()
    return f"token:{api_token.id}"


db = SQLAlchemy()
cors = CORS()
limiter = Limiter(key_func=_rate_limit_key, default_limits=[])

__all__ = ["db", "cors", "limiter"]
