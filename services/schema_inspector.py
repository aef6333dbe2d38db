"""Catalog-driven schema checks and additive, idempotent DDL."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Sequence

from sqlalchemy import inspect, text

from models import db

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class ColumnSpec:
    """An additive column change and the index that should back it."""

    name: str
    ddl_type: str
    unique: bool = False
    index: bool = True


@dataclass
class SchemaChange:
    """What ``ensure_column`` found and did for one column."""

    table: str
    column: str
    column_added: bool = False
    index_name: str | None = None
    notes: list[str] = field(default_factory=list)


def _check_identifier(name: str) -> str:
    if not name or not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def list_tables() -> list[str]:
    return sorted(inspect(db.engine).get_table_names())


def table_exists(table: str) -> bool:
    return inspect(db.engine).has_table(_check_identifier(table))


def get_columns(table: str) -> list[dict]:
    return inspect(db.engine).get_columns(_check_identifier(table))


def column_exists(table: str, column: str) -> bool:
    _check_identifier(column)
    return any(col["name"] == column for col in get_columns(table))


def index_exists(table: str, index_name: str) -> bool:
    _check_identifier(index_name)
    indexes = inspect(db.engine).get_indexes(_check_identifier(table))
    return any(idx["name"] == index_name for idx in indexes)


def add_column(table: str, column: str, ddl_type: str) -> bool:
    """Add ``column`` unless the catalog already lists it. Returns whether DDL ran."""
    if column_exists(table, column):
        logger.info("Column '%s' already exists in '%s'", column, table)
        return False
    logger.info("Adding column '%s' to '%s' (%s)", column, table, ddl_type)
    db.session.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl_type}"))
    db.session.commit()
    return True


def ensure_index(
    table: str,
    index_name: str,
    columns: Sequence[str],
    *,
    unique: bool = False,
) -> str:
    _check_identifier(table)
    _check_identifier(index_name)
    column_list = ", ".join(_check_identifier(col) for col in columns)
    unique_sql = "UNIQUE " if unique else ""
    db.session.execute(
        text(
            f"CREATE {unique_sql}INDEX IF NOT EXISTS {index_name} "
            f"ON {table} ({column_list})"
        )
    )
    db.session.commit()
    return index_name


def ensure_column(table: str, spec: ColumnSpec) -> SchemaChange:
    """Probe, add and index one column.

    The three steps are not one transaction; each re-checks what exists, so
    an interrupted run is repaired by running again.
    """
    if not table_exists(table):
        raise LookupError(f"Table '{table}' does not exist; cannot add '{spec.name}'")

    change = SchemaChange(table=table, column=spec.name)
    change.column_added = add_column(table, spec.name, spec.ddl_type)
    if not change.column_added:
        change.notes.append("column already present")

    if spec.index or spec.unique:
        index_name = f"idx_{table}_{spec.name}"
        existed = index_exists(table, index_name)
        change.index_name = ensure_index(table, index_name, [spec.name], unique=spec.unique)
        if existed:
            change.notes.append("index already present")
    return change
