"""Password hashing, login token issuance and session bookkeeping."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime

from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy import func, update
from werkzeug.security import check_password_hash, generate_password_hash

from models import db
from models.user import User
from models.user_session import UserSession

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    """Successful login: the authenticated user and the issued access token."""

    user: User
    token: str


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return (raw_email or "").strip().lower()


def hash_password(password: str) -> str:
    """Hash a password with the configured method and work factor."""
    method = current_app.config.get("PASSWORD_HASH_METHOD")
    if method:
        return generate_password_hash(password, method=method)
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


def hash_token(token: str) -> str:
    """Sessions store a digest of the token, never the token itself."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def find_by_email(email: str) -> User | None:
    """Case-insensitive lookup of a user by email."""
    normalized = normalize_email(email)
    if not normalized:
        return None
    return User.query.filter(func.lower(User.email) == normalized).first()


def create_session(user: User, token: str) -> UserSession:
    expires = current_app.config.get("JWT_ACCESS_TOKEN_EXPIRES")
    session = UserSession(
        user_id=user.id,
        token_hash=hash_token(token),
        is_active=True,
        expires_at=datetime.utcnow() + expires if expires else None,
    )
    db.session.add(session)
    return session


def login(email: str, password: str) -> LoginResult | None:
    """Authenticate a user and issue an access token.

    Returns ``None`` for every rejected attempt (unknown email, externally
    authenticated account, wrong password, deactivated account) so callers
    never have to tell these cases apart.
    """
    user = find_by_email(email)
    if user is None:
        logger.info("Login rejected for %s: user not found", normalize_email(email))
        return None

    if not verify_password(password, user.password_hash):
        logger.info("Login rejected for %s: invalid password", user.email)
        return None

    if not user.is_active:
        logger.info("Login rejected for %s: account inactive", user.email)
        return None

    token = create_access_token(identity=str(user.id))
    create_session(user, token)
    db.session.commit()
    return LoginResult(user=user, token=token)


def logout(token: str) -> bool:
    """Deactivate the session matching ``token``. Returns whether one was active."""
    session = UserSession.query.filter_by(
        token_hash=hash_token(token), is_active=True
    ).first()
    if session is None:
        return False
    session.deactivate()
    db.session.commit()
    return True


def deactivate_user_sessions(user_id: int) -> int:
    """Deactivate every active session of a user without committing.

    Returns the number of sessions that were active before the update.
    """
    result = db.session.execute(
        update(UserSession)
        .where(UserSession.user_id == user_id, UserSession.is_active.is_(True))
        .values(is_active=False, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
