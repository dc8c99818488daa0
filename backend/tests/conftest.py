from __future__ import annotations

import pathlib
import secrets
import sys
from collections.abc import Callable

import pytest
from sqlalchemy.pool import StaticPool

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _load_dependencies():
    from almhub import Config, create_app
    from backend.almhub.extensions import db

    return Config, create_app, db


ConfigBase, create_app, db = _load_dependencies()


class TestConfig(ConfigBase):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite+pysqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    }
    CORS_ALLOWED_ORIGINS = "http://localhost"
    ALM_UPDATE_RATE_LIMIT = "5 per minute"


@pytest.fixture(scope="module")
def app():
    app = create_app(TestConfig)
    ctx = app.app_context()
    ctx.push()
    yield app
    db.session.remove()
    ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def auth_header_factory(app):
    from backend.almhub.models.auth import ApiToken
    from backend.almhub.utils.auth import hash_token

    def factory(role: str = "admin", name: str | None = None) -> dict[str, str]:
        token_value = secrets.token_urlsafe(16)
        token = ApiToken(
            name=name or f"Test {role.title()} Token",
            role=role,
            token_hash=hash_token(token_value),
        )
        db.session.add(token)
        db.session.commit()
        return {"Authorization": f"Bearer {token_value}"}

    return factory


@pytest.fixture(autouse=True)
def cleanup_tables(app):
    from backend.almhub.extensions import limiter
    from backend.almhub.models.alm_setting import AlmSetting
    from backend.almhub.models.auth import ApiToken

    yield

    db.session.rollback()
    limiter.reset()
    db.session.query(ApiToken).delete()
    db.session.query(AlmSetting).delete()
    db.session.commit()


@pytest.fixture()
def admin_headers(auth_header_factory: Callable[..., dict[str, str]]):
    return auth_header_factory(role="admin")


@pytest.fixture()
def readonly_headers(auth_header_factory: Callable[..., dict[str, str]]):
    return auth_header_factory(role="readonly")


@pytest.fixture()
def github_setting_factory(app):
    from backend.almhub.models.alm_setting import AlmSetting

    def factory(key: str, alm: str = "github", **fields: str) -> AlmSetting:
        setting = AlmSetting(
            key=key,
            alm=alm,
            url=fields.get("url", f"https://{key}.example.com/api/v3"),
            app_id=fields.get("app_id", "12345"),
            private_key=fields.get("private_key", f"private-key-of-{key}"),
        )
        db.session.add(setting)
        db.session.commit()
        return setting

    return factory
