"""SQLite schema management (code-first approach)."""

import logging

from src.core.db_client import Database


logger = logging.getLogger(__name__)


TASKS_TABLE = "tasks"

_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    id          TEXT PRIMARY KEY,
    title       TEXT NOT NULL,
    description TEXT,
    status      TEXT NOT NULL DEFAULT 'PENDING'
                CHECK (status IN ('PENDING', 'COMPLETED', 'CANCELED')),
    user_id     TEXT NOT NULL,
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL
)
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_user_id ON tasks (user_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_user_status ON tasks (user_id, status)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_user_created_at ON tasks (user_id, created_at DESC)",
]


def get_schema_statements() -> list[str]:
    """Return every DDL statement needed for the schema, in execution order."""
    return [_TASKS_DDL, *_TASKS_INDEXES]


async def init_db(db: Database) -> None:
    """Create tables and indexes. Safe to run on every startup."""
    await db.execute_script(get_schema_statements())
    logger.info("Database schema initialized", extra={"db_path": db.db_path, "tables": [TASKS_TABLE]})
