"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_request(req: Request) -> dict:
    """Return the parsed JSON object body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        raise BadRequest("Request JSON body must be a non-empty object.")
    return data


def parse_credentials(req: Request) -> tuple[str, str]:
    """Return ``(email, password)`` from a JSON login body.

    The email is stripped and lower-cased; both fields are required.
    """

    payload = parse_json_request(req)
    email = str(payload.get("email") or "").strip().lower()
    password = str(payload.get("password") or "").strip()
    if not email or not password:
        raise BadRequest("Email and password are required.")
    return email, password
