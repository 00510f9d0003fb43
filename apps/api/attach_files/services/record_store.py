"""Storage handle used to write file references and record counts."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol

from sqlalchemy import column, insert, table as table_clause, update
from sqlalchemy.sql.expression import TableClause
from sqlalchemy.orm import Session

from attach_files.db.base import Base


class RecordStore(Protocol):
    """Minimal table-level write interface."""

    def insert(self, table: str, row: Mapping[str, Any]) -> None: ...

    def update(
        self, table: str, values: Mapping[str, Any], match: Mapping[str, Any]
    ) -> int: ...


class SqlRecordStore:
    """
    RecordStore backed by a SQLAlchemy session.

    Statements run inside the session's current transaction; committing or
    rolling back is left to the caller.
    """

    def __init__(self, db: Session):
        self.db = db

    def _resolve_table(self, name: str, column_names: Iterable[str]) -> TableClause:
        mapped = Base.metadata.tables.get(name)
        if mapped is not None:
            return mapped
        return table_clause(name, *(column(column_name) for column_name in column_names))

    def insert(self, table: str, row: Mapping[str, Any]) -> None:
        target = self._resolve_table(table, row.keys())
        self.db.execute(insert(target).values(dict(row)))

    def update(
        self, table: str, values: Mapping[str, Any], match: Mapping[str, Any]
    ) -> int:
        target = self._resolve_table(table, [*values.keys(), *match.keys()])
        stmt = update(target).values(dict(values))
        for column_name, expected in match.items():
            stmt = stmt.where(target.c[column_name] == expected)
        result = self.db.execute(stmt)
        return result.rowcount
