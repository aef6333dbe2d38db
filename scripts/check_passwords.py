"""Report which users have a stored password hash, without printing secrets."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Sequence

from config import Config
from models.user import User
from scripts.runner import run_task
from services.auth_service import find_by_email, normalize_email

HASH_PREFIX_LENGTH = 10


@dataclass
class CredentialReport:
    email: str
    found: bool
    auth_provider: str | None = None
    role: str | None = None
    has_password: bool = False
    hash_length: int = 0
    hash_prefix: str = "<none>"


def hash_prefix(value: str | None, length: int = HASH_PREFIX_LENGTH) -> str:
    """Display-only truncation: at most ``length`` chars and never more than half."""
    if not value:
        return "<none>"
    shown = min(length, len(value) // 2)
    return value[:shown] + "..."


def _report_for(user: User) -> CredentialReport:
    return CredentialReport(
        email=user.email,
        found=True,
        auth_provider=user.auth_provider,
        role=user.role,
        has_password=bool(user.password_hash),
        hash_length=len(user.password_hash or ""),
        hash_prefix=hash_prefix(user.password_hash),
    )


def audit_credentials(emails: Sequence[str] = ()) -> list[CredentialReport]:
    """Audit the given emails, or every user when none are given."""
    if not emails:
        return [_report_for(user) for user in User.query.order_by(User.id).all()]

    reports = []
    for email in emails:
        user = find_by_email(email)
        if user is None:
            reports.append(CredentialReport(email=normalize_email(email), found=False))
        else:
            reports.append(_report_for(user))
    return reports


def report(reports: list[CredentialReport]) -> None:
    print(f"[INFO] Checked {len(reports)} user(s)")
    for item in reports:
        if not item.found:
            print(f"[INFO] {item.email}: not found")
            continue
        print(
            f"[INFO] {item.email}: provider={item.auth_provider} role={item.role} "
            f"has_password={item.has_password} length={item.hash_length} "
            f"prefix={item.hash_prefix}"
        )


def main(argv: Sequence[str] | None = None, config_class: type[Config] = Config) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("emails", nargs="*", help="emails to check (default: all users)")
    args = parser.parse_args(argv)

    return run_task(
        lambda: audit_credentials(args.emails),
        report,
        config_class=config_class,
        name="check_passwords",
    )


if __name__ == "__main__":
    raise SystemExit(main())
