"""Reset a user's password and revoke every session they have open.

The password update and the session revocation are committed together: if
revoking sessions fails, the old password stays in place.
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from sqlalchemy import update

from config import Config
from models import db
from models.user import User
from scripts.runner import run_task
from services.auth_service import (
    deactivate_user_sessions,
    find_by_email,
    hash_password,
    verify_password,
)
from utils.errors import TaskFailed

logger = logging.getLogger(__name__)


@dataclass
class ResetResult:
    email: str
    found: bool
    user_id: int | None = None
    verified: bool = False
    sessions_deactivated: int = 0


def reset_password(email: str, new_password: str) -> ResetResult:
    user = find_by_email(email)
    if user is None:
        return ResetResult(email=email, found=False)

    password_hash = hash_password(new_password)
    try:
        row = db.session.execute(
            update(User)
            .where(User.email == user.email)
            .values(password_hash=password_hash, updated_at=datetime.utcnow())
            .returning(User.id, User.email, User.password_hash)
            .execution_options(synchronize_session=False)
        ).first()
        if row is None:
            raise TaskFailed(f"No rows updated for {user.email}")

        verified = verify_password(new_password, row.password_hash)
        if not verified:
            logger.warning("Stored hash for %s does not verify against the new password", row.email)

        deactivated = deactivate_user_sessions(row.id)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    return ResetResult(
        email=row.email,
        found=True,
        user_id=row.id,
        verified=verified,
        sessions_deactivated=deactivated,
    )


def report(result: ResetResult) -> None:
    if not result.found:
        print(f"[INFO] User not found: {result.email}")
        return
    print(f"[OK] Password updated for {result.email} (id={result.user_id})")
    if result.verified:
        print("[OK] New password verifies against the stored hash")
    else:
        print("[WARN] New password does NOT verify against the stored hash")
    print(f"[OK] Deactivated {result.sessions_deactivated} active session(s)")


def main(argv: Sequence[str] | None = None, config_class: type[Config] = Config) -> int:
    parser = argparse.ArgumentParser(description="Reset a user's password.")
    parser.add_argument("--email", default=os.getenv("RESET_EMAIL"))
    parser.add_argument("--password", default=os.getenv("RESET_PASSWORD"))
    args = parser.parse_args(argv)
    if not args.email or not args.password:
        parser.error("--email and --password (or RESET_EMAIL/RESET_PASSWORD) are required")

    return run_task(
        lambda: reset_password(args.email, args.password),
        report,
        config_class=config_class,
        name="reset_password",
    )


if __name__ == "__main__":
    raise SystemExit(main())
