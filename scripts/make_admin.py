"""Promote an existing user to administrator and set a new password."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from sqlalchemy import update

from config import Config
from models import db
from models.user import User
from scripts.runner import run_task
from services.auth_service import find_by_email, hash_password


@dataclass
class PromotionResult:
    email: str
    found: bool
    user: dict | None = None


def promote_to_admin(email: str, password: str) -> PromotionResult:
    """Set role, password hash and verification in one UPDATE statement."""

    existing = find_by_email(email)
    if existing is None:
        return PromotionResult(email=email, found=False)

    password_hash = hash_password(password)
    row = db.session.execute(
        update(User)
        .where(User.id == existing.id)
        .values(
            role="admin",
            password_hash=password_hash,
            email_verified=True,
            updated_at=datetime.utcnow(),
        )
        .returning(User.id, User.email, User.name, User.role, User.email_verified)
        .execution_options(synchronize_session=False)
    ).first()
    db.session.commit()

    return PromotionResult(email=email, found=True, user=dict(row._mapping))


def report(result: PromotionResult) -> None:
    if not result.found:
        print(f"[INFO] User not found: {result.email}")
        return
    user = result.user
    print(f"[OK] {user['email']} is now {user['role']} (id={user['id']})")
    print(f"     name={user['name']} email_verified={user['email_verified']}")


def main(argv: Sequence[str] | None = None, config_class: type[Config] = Config) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL"))
    parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
    args = parser.parse_args(argv)
    if not args.email or not args.password:
        parser.error("--email and --password (or ADMIN_EMAIL/ADMIN_PASSWORD) are required")

    return run_task(
        lambda: promote_to_admin(args.email, args.password),
        report,
        config_class=config_class,
        name="make_admin",
    )


if __name__ == "__main__":
    raise SystemExit(main())
