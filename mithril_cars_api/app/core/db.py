"""
SQLite integration: connection pool, generic data-access helpers and a
small versioned schema bootstrap.

The pool is created once per process (``init_pool``, called from the
application lifespan) and closed on shutdown (``close_pool``).  Route
handlers obtain one connection per request through the ``get_db``
dependency and hand it to the services, which call the helpers below:

* ``query`` runs a parametrized statement and returns plain dicts.
* ``insert_from_object`` / ``update_from_object`` build INSERT and
  UPDATE statements from a mapping of column names to values.
* ``delete`` removes a row by id.

Generated statements only ever name tables and columns listed in
``TABLE_COLUMNS``; anything else is refused before SQL is built.  All
statements bind values as named parameters (``:name``).

Any ``sqlite3.Error`` raised by the driver (and ``OverflowError`` for
integers SQLite cannot bind) is converted into
``StoreError`` carrying the driver's message, which the API renders in
its error envelope.
"""

import logging
import os
import sqlite3

from contextlib import closing, contextmanager
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from sqlalchemy import exc as sa_exc
from sqlalchemy.pool import QueuePool

from .config import settings
from .errors import StoreError

logger = logging.getLogger(__name__)

# Known columns per table.  Dynamic INSERT/UPDATE/DELETE statements are
# restricted to these names.
TABLE_COLUMNS: Dict[str, frozenset] = {
    "manufacturers": frozenset({"id", "name"}),
    "cars": frozenset({"id", "manufacturer_id", "model_name", "model_year"}),
}

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS manufacturers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL
        );

        -- model_year is kept as text so a 4-digit year round-trips exactly
        -- as submitted.
        CREATE TABLE IF NOT EXISTS cars (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            manufacturer_id INTEGER NOT NULL,
            model_name TEXT NOT NULL,
            model_year TEXT NOT NULL,
            FOREIGN KEY(manufacturer_id) REFERENCES manufacturers(id)
        );
        """,
    ),
    # Migration 2: speed up the dependent-car check on manufacturer delete
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_cars_manufacturer_id ON cars(manufacturer_id);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path (or ``:memory:``),
    use it directly.  Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(path: Optional[str] = None) -> sqlite3.Connection:
    """Open a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by name.
    ``check_same_thread`` is disabled because pooled connections are
    handed to whichever worker thread serves the request; the pool
    guarantees a connection is only used by one request at a time.
    """
    conn = sqlite3.connect(
        path or get_database_path(),
        timeout=settings.db_busy_timeout,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    # Foreign key enforcement is off by default in SQLite and must be
    # enabled on every connection.
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def create_pool(path: Optional[str] = None) -> QueuePool:
    """Build a SQLAlchemy ``QueuePool`` of raw sqlite3 connections.

    Connections are opened lazily up to ``db_pool_size`` and never
    beyond it; a checkout waits at most ``db_pool_timeout`` seconds.
    Returning a connection rolls back anything left uncommitted.
    """
    database_path = path or get_database_path()
    return QueuePool(
        lambda: get_connection(database_path),
        pool_size=settings.db_pool_size,
        max_overflow=0,
        timeout=settings.db_pool_timeout,
        reset_on_return="rollback",
    )


_pool: Optional[QueuePool] = None


def init_pool(path: Optional[str] = None) -> QueuePool:
    global _pool
    if _pool is not None:
        return _pool
    _pool = create_pool(path)
    logger.info("Opened connection pool (size %d)", _pool.size())
    return _pool


def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    _pool.dispose()
    logger.info("Closed connection pool")
    _pool = None


def pool() -> QueuePool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


@contextmanager
def connection(source: Optional[QueuePool] = None) -> Iterator[sqlite3.Connection]:
    """Borrow a sqlite3 connection from ``source`` (default: the app pool)."""
    try:
        pooled = (source or pool()).connect()
    except sa_exc.TimeoutError as exc:
        logger.error("No database connection became available: %s", exc)
        raise StoreError("timed out waiting for a database connection") from exc
    except sqlite3.Error as exc:
        logger.error("Could not open a database connection: %s", exc)
        raise StoreError(str(exc)) from exc
    try:
        yield pooled.dbapi_connection
    finally:
        pooled.close()


def get_db() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency yielding one pooled connection for the request."""
    with connection() as conn:
        yield conn


def _check_columns(table: str, names: Iterable[str]) -> None:
    columns = TABLE_COLUMNS.get(table)
    if columns is None:
        raise StoreError(f"unknown table: {table}")
    unknown = [name for name in names if name not in columns]
    if unknown:
        raise StoreError(f"table {table} has no column named {', '.join(unknown)}")


def _execute(conn: sqlite3.Connection, sql: str, params: Mapping[str, Any]) -> sqlite3.Cursor:
    """Run a mutating statement and commit it."""
    try:
        cursor = conn.execute(sql, params)
        conn.commit()
    except (sqlite3.Error, OverflowError) as exc:
        if conn.in_transaction:
            conn.rollback()
        logger.error("Statement failed: %s [%s]", exc, sql)
        raise StoreError(str(exc)) from exc
    return cursor


def query(
    conn: sqlite3.Connection, sql: str, params: Optional[Mapping[str, Any]] = None
) -> List[Dict[str, Any]]:
    """Run a parametrized query and return every row as a dict.

    Named placeholders (``:name``) bind by key from ``params``.  Returns
    an empty list when nothing matches.
    """
    try:
        rows = conn.execute(sql, dict(params or {})).fetchall()
    except (sqlite3.Error, OverflowError) as exc:
        logger.error("Query failed: %s [%s]", exc, sql)
        raise StoreError(str(exc)) from exc
    return [dict(row) for row in rows]


def insert_from_object(
    conn: sqlite3.Connection, table: str, obj: Mapping[str, Any]
) -> Optional[int]:
    """Insert ``obj`` into ``table`` and return the new row id.

    The column list is the object's keys.  Returns ``None`` without
    touching the store when ``table`` or ``obj`` is empty.
    """
    if not table or not obj:
        return None
    fields = dict(obj)
    _check_columns(table, fields)
    names = list(fields)
    sql = (
        f"INSERT INTO {table} ({', '.join(names)}) "
        f"VALUES ({', '.join(':' + name for name in names)})"
    )
    cursor = _execute(conn, sql, fields)
    return cursor.lastrowid


def update_from_object(
    conn: sqlite3.Connection,
    table: str,
    obj: Mapping[str, Any],
    record_id: Any,
    id_field: str = "id",
) -> None:
    """Overwrite the row identified by ``record_id`` with ``obj``.

    Every key of ``obj`` (other than ``id_field``) becomes a ``SET``
    assignment; the id is bound separately.  Does nothing when
    ``table``, ``obj`` or ``record_id`` is empty.
    """
    if not table or not obj or not record_id:
        return
    fields = {name: value for name, value in obj.items() if name != id_field}
    if not fields:
        return
    _check_columns(table, [*fields, id_field])
    assignments = ", ".join(f"{name}=:{name}" for name in fields)
    sql = f"UPDATE {table} SET {assignments} WHERE {id_field}=:{id_field}"
    _execute(conn, sql, {**fields, id_field: record_id})


def delete(conn: sqlite3.Connection, table: str, record_id: Any, id_field: str = "id") -> None:
    """Delete the row identified by ``record_id``; missing rows are ignored."""
    if not table or not record_id:
        return
    _check_columns(table, [id_field])
    sql = f"DELETE FROM {table} WHERE {id_field}=:{id_field}"
    _execute(conn, sql, {id_field: record_id})


def init_db(path: Optional[str] = None) -> int:
    """Create the schema and apply pending migrations.

    Applied versions are recorded in the ``migrations`` table; only
    newer entries of ``MIGRATIONS`` are executed.  Returns the schema
    version after the run.
    """
    with closing(get_connection(path)) as conn:
        conn.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                conn.executescript(sql)
                conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                conn.commit()
                logger.info("Applied database migration %d", version)
                current_version = version
        return current_version


def reset_db(path: Optional[str] = None) -> int:
    """Drop every table and rebuild the schema from scratch."""
    with closing(get_connection(path)) as conn:
        conn.executescript(
            """
            DROP TABLE IF EXISTS cars;
            DROP TABLE IF EXISTS manufacturers;
            DROP TABLE IF EXISTS migrations;
            """
        )
        conn.commit()
    logger.info("Dropped all tables")
    return init_db(path)
