"""Dialect-aware INSERT ... ON CONFLICT construction."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


def upsert(db: AsyncSession, model: Any) -> Any:  # noqa: ANN401
    """Return an ``insert()`` for ``model`` that supports ``on_conflict_do_*``.

    Production runs on PostgreSQL; the SQLite variant keeps the same statements
    usable against the SQLite database of the test suite.
    """
    if db.get_bind().dialect.name == "sqlite":
        return sqlite_insert(model)
    return pg_insert(model)
