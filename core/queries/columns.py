"""Helpers for selecting several tables in one query without name clashes."""

from typing import Any, Mapping

from sqlalchemy import Table


def prefixed(table: Table, prefix: str) -> list:
    """Label every column of a table as '<prefix>__<column>'."""
    return [column.label(f"{prefix}__{column.name}") for column in table.c]


def unprefix(row: Mapping[str, Any], table: Table, prefix: str) -> dict[str, Any] | None:
    """
    Extract one table's columns from a prefixed row.

    Returns None when the primary key is NULL (unmatched outer join).
    """
    record = {column.name: row[f"{prefix}__{column.name}"] for column in table.c}
    primary_key = list(table.primary_key.columns)[0].name
    if record[primary_key] is None:
        return None
    return record
