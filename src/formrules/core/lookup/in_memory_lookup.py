"""
InMemoryLookup - existence checks against rows held in memory.
"""

from typing import Any

from .base_lookup import ExistenceLookup


class InMemoryLookup(ExistenceLookup):
    """
    Answers existence checks from a mapping of table name to rows.

    Values are compared as strings, since form input always arrives as text.

    Usage:
        lookup = InMemoryLookup({"statuses": [{"id": 1, "name": "open"}]})
        lookup.exists("statuses", "id", "1")  # True
    """

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None):
        self.tables: dict[str, list[dict[str, Any]]] = {}
        for table, rows in (tables or {}).items():
            for row in rows:
                self.add(table, row)

    def add(self, table: str, row: dict[str, Any]) -> "InMemoryLookup":
        """Add a row to a table, creating the table if needed."""
        self.tables.setdefault(table, []).append(dict(row))
        return self

    def exists(self, table: str, column: str, value: str) -> bool:
        for row in self.tables.get(table, []):
            if column in row and row[column] is not None and str(row[column]) == value:
                return True
        return False

    def __repr__(self) -> str:
        return f"InMemoryLookup(tables={sorted(self.tables)})"
