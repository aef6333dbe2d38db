"""Add the external-identity columns to the users table if they are missing.

Safe to run repeatedly: every column and index is checked against the
catalog before any DDL is issued.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from config import Config
from scripts.runner import run_task
from services.schema_inspector import ColumnSpec, SchemaChange, ensure_column

USERS_TABLE = "users"

USER_COLUMNS = (
    ColumnSpec("google_id", "VARCHAR(255)", unique=True),
    ColumnSpec("profile_picture", "TEXT", index=False),
    ColumnSpec("auth_provider", "VARCHAR(50) DEFAULT 'email'"),
)


def add_user_columns(columns: Sequence[ColumnSpec] = USER_COLUMNS) -> list[SchemaChange]:
    return [ensure_column(USERS_TABLE, spec) for spec in columns]


def report(changes: list[SchemaChange]) -> None:
    for change in changes:
        state = "added" if change.column_added else "already exists"
        print(f"[OK] {change.table}.{change.column}: {state}")
        if change.index_name:
            print(f"     index {change.index_name} ensured")


def main(argv: Sequence[str] | None = None, config_class: type[Config] = Config) -> int:
    parser = argparse.ArgumentParser(description="Add missing columns to the users table.")
    parser.parse_args(argv)
    return run_task(add_user_columns, report, config_class=config_class)


if __name__ == "__main__":
    raise SystemExit(main())
