"""Tests covering the login and logout endpoints."""

from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from models.user_session import UserSession


def _login(client: FlaskClient, email: str, password: str) -> str:
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    payload = response.get_json()
    return payload["access_token"]


def test_login_returns_access_token(client: FlaskClient, make_user):
    """Users should receive a JWT when providing valid credentials."""

    make_user("j1@example.com", "J1Pass123", name="J One")

    response = client.post(
        "/auth/login",
        json={"email": "J1@example.com", "password": "J1Pass123"},
    )

    assert response.status_code == 200
    data = response.get_json()
    assert "access_token" in data
    assert data["user"]["email"] == "j1@example.com"
    assert data["user"]["role"] == "user"
    assert "password_hash" not in data["user"]


@pytest.mark.parametrize(
    "payload, status_code",
    [
        ({"email": "j1@example.com"}, 400),
        ({"password": "J1Pass123"}, 400),
        ({"email": "j1@example.com", "password": "wrong"}, 401),
        ({"email": "nobody@example.com", "password": "J1Pass123"}, 401),
    ],
)
def test_login_validation(client: FlaskClient, make_user, payload, status_code):
    """Login endpoint should validate request bodies and credentials."""

    make_user("j1@example.com", "J1Pass123")

    response = client.post("/auth/login", json=payload)

    assert response.status_code == status_code
    assert response.get_json()["request_id"]


def test_login_requires_json(client: FlaskClient):
    response = client.post("/auth/login", data="not-json", content_type="text/plain")

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "Bad Request"
    assert "content type" in payload["detail"]


def test_logout_deactivates_session(client: FlaskClient, make_user, db_session):
    make_user("out@example.com", "OutPass123")
    token = _login(client, "out@example.com", "OutPass123")
    assert UserSession.query.filter_by(is_active=True).count() == 1

    response = client.post("/auth/logout", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.get_json()["session_revoked"] is True
    db_session.expire_all()
    assert UserSession.query.filter_by(is_active=True).count() == 0


def test_logout_requires_token(client: FlaskClient):
    response = client.post("/auth/logout")

    assert response.status_code == 401
