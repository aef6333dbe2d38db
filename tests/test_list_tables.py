"""Tests for the table listing tool."""

from __future__ import annotations

import pytest

from scripts.list_tables import list_tables, main


def test_lists_model_tables(app, db_session):
    listing = list_tables()

    assert listing.tables == sorted(listing.tables)
    assert {"users", "user_sessions"} <= set(listing.tables)
    assert listing.columns == []


def test_lists_columns_of_one_table(app, db_session):
    listing = list_tables("user_sessions")

    names = [col["name"] for col in listing.columns]
    assert names[:2] == ["id", "user_id"]
    assert "is_active" in names


def test_unknown_table_is_an_error(app, db_session):
    with pytest.raises(LookupError):
        list_tables("missing")


def test_main_exit_codes(file_app, file_app_config, capsys):
    assert main(["--columns", "users"], config_class=file_app_config) == 0
    out = capsys.readouterr().out
    assert "  - users" in out
    assert "  - email VARCHAR(255) NOT NULL" in out

    assert main(["--columns", "missing"], config_class=file_app_config) == 1
