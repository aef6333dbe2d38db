"""Tests for catalog checks and the add_user_columns tool."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect, text

from models import db
from scripts.add_user_columns import USER_COLUMNS, add_user_columns, main
from services import schema_inspector
from services.schema_inspector import ColumnSpec


@pytest.fixture()
def legacy_users(db_session):
    """Replace the model tables with a users table lacking identity columns."""

    db.drop_all()
    db_session.execute(
        text(
            "CREATE TABLE users ("
            "id INTEGER PRIMARY KEY, "
            "email VARCHAR(255) NOT NULL UNIQUE, "
            "name VARCHAR(255), "
            "password_hash VARCHAR(255))"
        )
    )
    db_session.execute(
        text("INSERT INTO users (email, name) VALUES ('old@example.com', 'Old')")
    )
    db_session.commit()
    return db_session


def _snapshot() -> tuple[list[str], list[tuple]]:
    inspector = inspect(db.engine)
    columns = [col["name"] for col in inspector.get_columns("users")]
    indexes = sorted(
        (idx["name"], tuple(idx["column_names"]), bool(idx["unique"]))
        for idx in inspector.get_indexes("users")
    )
    return columns, indexes


def test_catalog_queries(app, db_session):
    assert "users" in schema_inspector.list_tables()
    assert "user_sessions" in schema_inspector.list_tables()
    assert schema_inspector.table_exists("users") is True
    assert schema_inspector.table_exists("nope") is False
    assert schema_inspector.column_exists("users", "email") is True
    assert schema_inspector.column_exists("users", "nickname") is False


def test_add_user_columns_adds_missing_columns_and_indexes(legacy_users):
    changes = add_user_columns()

    assert [c.column for c in changes] == [spec.name for spec in USER_COLUMNS]
    assert all(c.column_added for c in changes)

    columns, indexes = _snapshot()
    assert {"google_id", "profile_picture", "auth_provider"} <= set(columns)
    assert ("idx_users_google_id", ("google_id",), True) in indexes
    assert ("idx_users_auth_provider", ("auth_provider",), False) in indexes

    provider = legacy_users.execute(
        text("SELECT auth_provider FROM users WHERE email = 'old@example.com'")
    ).scalar()
    assert provider == "email"


def test_add_user_columns_is_idempotent(legacy_users):
    add_user_columns()
    first = _snapshot()

    changes = add_user_columns()

    assert not any(c.column_added for c in changes)
    assert _snapshot() == first
    assert "column already present" in changes[0].notes
    assert "index already present" in changes[0].notes


def test_rerun_repairs_missing_index(legacy_users):
    """A column added without its index (an interrupted run) gets the index next time."""

    legacy_users.execute(text("ALTER TABLE users ADD COLUMN google_id VARCHAR(255)"))
    legacy_users.commit()

    changes = add_user_columns()

    assert changes[0].column_added is False
    _, indexes = _snapshot()
    assert ("idx_users_google_id", ("google_id",), True) in indexes


def test_missing_table_is_an_error(app, db_session):
    with pytest.raises(LookupError):
        schema_inspector.ensure_column("missing_table", ColumnSpec("x", "TEXT"))


@pytest.mark.parametrize("name", ["users; DROP TABLE users", "", "1abc", "a-b"])
def test_invalid_identifiers_rejected(app, db_session, name):
    with pytest.raises(ValueError):
        schema_inspector.column_exists("users", name)


def test_main_reports_and_exits_zero(file_app, file_app_config, capsys):
    assert main([], config_class=file_app_config) == 0
    assert main([], config_class=file_app_config) == 0

    out = capsys.readouterr().out
    assert "[OK] users.google_id: already exists" in out
    assert "idx_users_google_id" in out
