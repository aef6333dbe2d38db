"""Shared pytest fixtures for the application and admin tool tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import User  # noqa: E402
from services.auth_service import hash_password  # noqa: E402

# A cheap work factor keeps hashing fast in tests.
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


class ToolTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length-for-hs256"
    PASSWORD_HASH_METHOD = FAST_HASH_METHOD
    LOG_LEVEL = "WARNING"


def file_config(db_path: Path) -> type[Config]:
    """Config pointing at an SQLite file so separate app instances share data."""

    class FileConfig(ToolTestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{db_path}"

    return FileConfig


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance with empty tables."""

    application = create_app(ToolTestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def db_session(app: Flask):
    """Push an application context and hand out the scoped session."""

    with app.app_context():
        yield db.session
        db.session.rollback()


@pytest.fixture()
def make_user(db_session) -> Callable[..., User]:
    """Factory creating and committing users, hashed the way the tools hash."""

    def _make_user(
        email: str,
        password: str | None = "Secret123",
        *,
        role: str = "user",
        auth_provider: str = "email",
        verified: bool = False,
        **fields,
    ) -> User:
        user = User(
            email=email,
            role=role,
            auth_provider=auth_provider,
            email_verified=verified,
            **fields,
        )
        if password is not None:
            user.password_hash = hash_password(password)
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def file_app_config(tmp_path) -> type[Config]:
    """Config for an SQLite file, used by tests that call a tool's ``main``."""

    return file_config(tmp_path / "tools.db")


@pytest.fixture()
def file_app(file_app_config) -> Flask:
    """App bound to the SQLite file with the schema created, for seeding and checks."""

    application = create_app(file_app_config)
    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.engine.dispose()
