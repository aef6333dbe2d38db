"""Exercise the login flow end to end with the given credentials."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from typing import Sequence

from config import Config
from models import db
from scripts.runner import run_task
from services.auth_service import login

logger = logging.getLogger(__name__)

TOKEN_PREFIX_LENGTH = 20


@dataclass
class LoginProbe:
    email: str
    success: bool
    user: dict | None = None
    token_prefix: str | None = None
    error: str | None = None


def probe_login(email: str, password: str) -> LoginProbe:
    """Attempt a login; unexpected errors are captured, never raised."""
    try:
        result = login(email, password)
    except Exception as exc:
        db.session.rollback()
        logger.exception("Login probe for %s raised", email)
        return LoginProbe(email=email, success=False, error=str(exc))

    if not result:
        return LoginProbe(email=email, success=False)
    return LoginProbe(
        email=email,
        success=True,
        user=result.user.to_dict(),
        token_prefix=result.token[:TOKEN_PREFIX_LENGTH] + "...",
    )


def report(probe: LoginProbe) -> None:
    if probe.error:
        print(f"[ERROR] Login raised for {probe.email}: {probe.error}")
    elif not probe.success:
        print(f"[INFO] Invalid credentials for {probe.email}")
    else:
        user = probe.user
        print(f"[OK] Login succeeded for {user['email']}")
        print(f"     id={user['id']} name={user['name']} role={user['role']} "
              f"provider={user['auth_provider']}")
        print(f"     token={probe.token_prefix}")


def main(argv: Sequence[str] | None = None, config_class: type[Config] = Config) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--email", default=os.getenv("PROBE_EMAIL"))
    parser.add_argument("--password", default=os.getenv("PROBE_PASSWORD"))
    args = parser.parse_args(argv)
    if not args.email or not args.password:
        parser.error("--email and --password (or PROBE_EMAIL/PROBE_PASSWORD) are required")

    return run_task(
        lambda: probe_login(args.email, args.password),
        report,
        config_class=config_class,
        name="probe_login",
    )


if __name__ == "__main__":
    raise SystemExit(main())
