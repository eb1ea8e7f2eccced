"""Unit tests for the Database handle."""

import pytest

from src.core.db_client import CASEFOLD_FUNCTION, IN_MEMORY, Database, get_db_path
from src.core.errors import StorageError
from src.core.schema import TASKS_TABLE, init_db


@pytest.mark.unit
class TestDatabaseLifecycle:
    """Open, close and the not-open guard."""

    async def test_open_and_close(self):
        database = Database(IN_MEMORY)

        await database.open()
        assert database.is_open

        await database.close()
        assert not database.is_open

    async def test_context_manager(self):
        async with Database(IN_MEMORY) as database:
            assert database.is_open

        assert not database.is_open

    async def test_use_before_open(self):
        with pytest.raises(StorageError, match="not open"):
            await Database(IN_MEMORY).fetch_one("SELECT 1")

    async def test_close_twice_is_harmless(self):
        database = Database(IN_MEMORY)
        await database.open()

        await database.close()
        await database.close()

    async def test_file_database_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "tasks.db"

        async with Database(str(path)) as database:
            await init_db(database)

        assert path.exists()


@pytest.mark.unit
class TestDatabaseQueries:
    """Statement helpers."""

    async def test_schema_is_idempotent(self, db):
        await init_db(db)

        row = await db.fetch_one("SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?", (TASKS_TABLE,))

        assert row == {"name": TASKS_TABLE}

    async def test_fetch_all_returns_dicts(self, db):
        rows = await db.fetch_all("SELECT 1 AS one UNION ALL SELECT 2")

        assert rows == [{"one": 1}, {"one": 2}]

    async def test_bad_sql_is_storage_error(self, db):
        with pytest.raises(StorageError):
            await db.execute("INSERT INTO missing_table VALUES (1)")

    async def test_status_check_constraint(self, db):
        with pytest.raises(StorageError):
            await db.execute(
                "INSERT INTO tasks (id, title, status, user_id, created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?)",
                ("t1", "Buy milk", "DONE", "user-1", "2026-01-19", "2026-01-19"),
            )


@pytest.mark.unit
def test_get_db_path_keeps_memory_marker():
    assert get_db_path(IN_MEMORY) == IN_MEMORY


@pytest.mark.unit
async def test_casefold_function_is_registered(db):
    row = await db.fetch_one(f"SELECT {CASEFOLD_FUNCTION}(?) AS folded", ("ÄPFEL Straße",))

    assert row == {"folded": "äpfel strasse"}
