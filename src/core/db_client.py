"""SQLite database handle with explicit open/close lifecycle."""

import logging
from collections.abc import Sequence
from pathlib import Path
from types import TracebackType
from typing import Any, Self

import aiosqlite

from src.core.config import settings
from src.core.errors import StorageError


logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"

# SQL function for Unicode-aware case-insensitive matching and sorting
CASEFOLD_FUNCTION = "casefold"

SQLParams = Sequence[str | int | float | None]


def get_db_path(db_path: str | None = None) -> str:
    """Get the resolved SQLite database file path."""
    path_str = db_path or settings.sqlite_db_path
    if path_str == IN_MEMORY:
        return path_str
    return str(Path(path_str).resolve())


class Database:
    """Owns a single aiosqlite connection.

    Constructed explicitly and injected into stores; opened at process start
    and closed at shutdown. Every driver failure surfaces as StorageError.
    """

    def __init__(self, db_path: str | None = None) -> None:
        self.db_path = get_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def open(self) -> None:
        """Open the connection and apply connection PRAGMAs."""
        if self._conn is not None:
            return

        try:
            if self.db_path != IN_MEMORY:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            conn = await aiosqlite.connect(self.db_path)
            conn.row_factory = aiosqlite.Row
            await conn.create_function(CASEFOLD_FUNCTION, 1, str.casefold, deterministic=True)
            await conn.execute("PRAGMA foreign_keys = ON")
            if self.db_path != IN_MEMORY:
                await conn.execute("PRAGMA journal_mode = WAL")
                await conn.execute("PRAGMA busy_timeout = 5000")
        except (aiosqlite.Error, OSError) as e:
            logger.error("db_open_failed", extra={"db_path": self.db_path, "error": str(e)})
            raise StorageError(f"Failed to open database at {self.db_path}: {e}") from e

        self._conn = conn
        logger.info("Opened SQLite connection", extra={"db_path": self.db_path})

    async def close(self) -> None:
        """Close the connection if open."""
        if self._conn is None:
            return

        conn, self._conn = self._conn, None
        try:
            await conn.close()
        except aiosqlite.Error as e:
            logger.warning("Error closing SQLite connection", extra={"db_path": self.db_path, "error": str(e)})
            return
        logger.info("Closed SQLite connection", extra={"db_path": self.db_path})

    async def __aenter__(self) -> Self:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StorageError("Database is not open. Call open() first.")
        return self._conn

    async def execute(self, query: str, params: SQLParams = ()) -> int:
        """Run a write statement, commit it, and return the affected row count."""
        conn = self.connection
        try:
            cursor = await conn.execute(query, params)
            await conn.commit()
        except aiosqlite.Error as e:
            await self._rollback()
            logger.error("db_execute_failed", extra={"error": str(e)})
            raise StorageError(f"Failed to execute statement: {e}") from e
        return cursor.rowcount

    async def execute_script(self, statements: Sequence[str]) -> None:
        """Run several statements in one transaction."""
        conn = self.connection
        try:
            for statement in statements:
                await conn.execute(statement)
            await conn.commit()
        except aiosqlite.Error as e:
            await self._rollback()
            logger.error("db_script_failed", extra={"error": str(e)})
            raise StorageError(f"Failed to execute script: {e}") from e

    async def fetch_one(self, query: str, params: SQLParams = ()) -> dict[str, Any] | None:
        """Return the first row of a query as a dict, or None."""
        try:
            cursor = await self.connection.execute(query, params)
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error("db_fetch_one_failed", extra={"error": str(e)})
            raise StorageError(f"Failed to fetch row: {e}") from e
        return dict(row) if row is not None else None

    async def fetch_all(self, query: str, params: SQLParams = ()) -> list[dict[str, Any]]:
        """Return all rows of a query as dicts."""
        try:
            cursor = await self.connection.execute(query, params)
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error("db_fetch_all_failed", extra={"error": str(e)})
            raise StorageError(f"Failed to fetch rows: {e}") from e
        return [dict(row) for row in rows]

    async def _rollback(self) -> None:
        try:
            await self.connection.rollback()
        except aiosqlite.Error as e:
            logger.warning("db_rollback_failed", extra={"error": str(e)})
