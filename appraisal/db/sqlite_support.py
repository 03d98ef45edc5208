"""SQLite adjustments for test runs that substitute an in-memory database.

SQLite ignores foreign keys unless asked per connection; the workflow relies
on them to reject item rows that point at a missing header or competency, so
enable them whenever the engine speaks SQLite. Other dialects are untouched.
"""
from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.engine import Engine


def _enable_foreign_keys(dbapi_connection, connection_record):  # pragma: no cover - trivial
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def install(engine: Engine) -> None:
    """Register SQLite connection hooks on ``engine`` if it targets SQLite."""
    if engine.dialect.name != "sqlite":
        return
    if not event.contains(engine, "connect", _enable_foreign_keys):
        event.listen(engine, "connect", _enable_foreign_keys)
