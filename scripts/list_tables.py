"""List the tables in the configured database, optionally with one table's columns."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Sequence

from config import Config
from scripts.runner import run_task
from services import schema_inspector


@dataclass
class TableListing:
    tables: list[str]
    table: str | None = None
    columns: list[dict] = field(default_factory=list)


def list_tables(table: str | None = None) -> TableListing:
    listing = TableListing(tables=schema_inspector.list_tables(), table=table)
    if table:
        if not schema_inspector.table_exists(table):
            raise LookupError(f"Table '{table}' does not exist")
        listing.columns = [
            {"name": col["name"], "type": str(col["type"]), "nullable": col["nullable"]}
            for col in schema_inspector.get_columns(table)
        ]
    return listing


def report(listing: TableListing) -> None:
    print(f"[INFO] {len(listing.tables)} table(s)")
    for name in listing.tables:
        print(f"  - {name}")
    if listing.table:
        print(f"[INFO] columns of {listing.table}:")
        for col in listing.columns:
            nullable = "NULL" if col["nullable"] else "NOT NULL"
            print(f"  - {col['name']} {col['type']} {nullable}")


def main(argv: Sequence[str] | None = None, config_class: type[Config] = Config) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--columns", metavar="TABLE", help="also list this table's columns")
    args = parser.parse_args(argv)

    return run_task(
        lambda: list_tables(args.columns),
        report,
        config_class=config_class,
        name="list_tables",
    )


if __name__ == "__main__":
    raise SystemExit(main())
