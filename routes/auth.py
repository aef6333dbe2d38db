"""Authentication blueprint providing login and logout endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import Unauthorized

from services import auth_service
from utils.request_validation import parse_credentials

auth_bp = Blueprint("auth", __name__)


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    return token.strip() if scheme.lower() == "bearer" else ""


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a JWT access token."""
    email, password = parse_credentials(request)

    result = auth_service.login(email, password)
    if result is None:
        raise Unauthorized("Invalid email or password.")

    return (
        jsonify({"access_token": result.token, "user": result.user.to_dict()}),
        HTTPStatus.OK,
    )


@auth_bp.route("/logout", methods=["POST"])
@jwt_required()
def logout() -> tuple:
    """Deactivate the session that belongs to the presented token."""
    revoked = auth_service.logout(_bearer_token())
    return jsonify({"message": "Logged out.", "session_revoked": revoked}), HTTPStatus.OK
