"""
Unit tests for the SQLite adapter and schema migrations.
"""

import sqlite3
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from hiretrack.domain.entities import Application, ApplicationStatus, Candidate
from hiretrack.domain.errors import ConflictError, ReferentialError, StorageError
from hiretrack.domain.value_objects import ApplicationQuery
from hiretrack.infrastructure.storage import SQLiteAdapter, run_migrations
from hiretrack.infrastructure.storage.migrations import SCHEMA_VERSION


class TestMigrations:
    """Tests for schema setup."""

    def test_creates_tables(self, tmp_path: Path):
        """Should create every table and record the version."""
        db_path = tmp_path / "test.db"

        assert run_migrations(db_path) == SCHEMA_VERSION

        conn = sqlite3.connect(str(db_path))
        try:
            tables = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            }
        finally:
            conn.close()
        assert {"candidates", "applications", "application_events", "schema_version"} <= tables

    def test_idempotent(self, tmp_path: Path):
        """Running twice keeps the same version."""
        db_path = tmp_path / "test.db"
        run_migrations(db_path)

        assert run_migrations(db_path) == SCHEMA_VERSION

    def test_status_constrained(self, tmp_path: Path):
        """The schema refuses statuses outside the enum."""
        db_path = tmp_path / "test.db"
        run_migrations(db_path)
        conn = sqlite3.connect(str(db_path))
        try:
            conn.execute(
                "INSERT INTO candidates VALUES ('c1', 'Ada', 'Lovelace', 'ada@example.com', '2024')"
            )
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute(
                    "INSERT INTO applications VALUES ('a1', 'c1', 'dev', 'ghosted', 1, '2024', '2024')"
                )
        finally:
            conn.close()

    def test_version_defaults_to_one(self, tmp_path: Path):
        """Applications inserted without a version start at 1."""
        db_path = tmp_path / "test.db"
        run_migrations(db_path)
        conn = sqlite3.connect(str(db_path))
        try:
            conn.execute(
                "INSERT INTO candidates VALUES ('c1', 'Ada', 'Lovelace', 'ada@example.com', '2024')"
            )
            conn.execute(
                "INSERT INTO applications (id, candidate_id, role, created_at, updated_at) "
                "VALUES ('a1', 'c1', 'dev', '2024', '2024')"
            )
            row = conn.execute("SELECT status, version FROM applications").fetchone()
        finally:
            conn.close()
        assert row == ("applied", 1)


class TestAdapter:
    """Tests for adapter operations."""

    @pytest.mark.asyncio
    async def test_requires_initialize(self, tmp_path: Path):
        """Using the adapter before initialize() fails loudly."""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        with pytest.raises(RuntimeError, match="not initialized"):
            await adapter.get_application("a1")

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path):
        """initialize() creates missing directories."""
        adapter = SQLiteAdapter(tmp_path / "nested" / "dir" / "test.db")
        await adapter.initialize()
        await adapter.close()

        assert (tmp_path / "nested" / "dir" / "test.db").exists()

    @pytest.mark.asyncio
    async def test_duplicate_email(self, storage: SQLiteAdapter):
        """Unique email violations become ConflictError."""
        await storage.insert_candidate(Candidate("Ada", "Lovelace", "ada@example.com"))

        with pytest.raises(ConflictError):
            await storage.insert_candidate(Candidate("Other", "Person", "ada@example.com"))

    @pytest.mark.asyncio
    async def test_foreign_key_enforced(self, storage: SQLiteAdapter):
        """Applications must reference a stored candidate."""
        with pytest.raises(ReferentialError):
            await storage.insert_application(Application(candidate_id="missing", role="dev"))

    @pytest.mark.asyncio
    async def test_duplicate_id_is_storage_error(self, storage: SQLiteAdapter):
        """Other integrity failures surface as opaque storage errors."""
        candidate = Candidate("Ada", "Lovelace", "ada@example.com")
        await storage.insert_candidate(candidate)
        app = Application(candidate_id=candidate.id, role="dev")
        await storage.insert_application(app)

        with pytest.raises(StorageError):
            await storage.insert_application(app)

    @pytest.mark.asyncio
    async def test_update_status_compare_and_swap(self, storage: SQLiteAdapter):
        """Only the writer holding the current version succeeds."""
        candidate = Candidate("Ada", "Lovelace", "ada@example.com")
        await storage.insert_candidate(candidate)
        app = Application(candidate_id=candidate.id, role="dev")
        await storage.insert_application(app)
        now = datetime.now(timezone.utc)

        updated = await storage.update_status(app.id, 1, ApplicationStatus.SCREENING, now)
        stale = await storage.update_status(app.id, 1, ApplicationStatus.REJECTED, now)
        missing = await storage.update_status("missing", 1, ApplicationStatus.SCREENING, now)

        assert updated is not None
        assert (updated.status, updated.version, updated.updated_at) == (
            ApplicationStatus.SCREENING,
            2,
            now,
        )
        assert stale is None
        assert missing is None
        assert await storage.get_application(app.id) == updated

    @pytest.mark.asyncio
    async def test_update_status_refused_after_not_after(self, storage: SQLiteAdapter):
        """A write executed after its cutoff changes nothing."""
        candidate = Candidate("Ada", "Lovelace", "ada@example.com")
        await storage.insert_candidate(candidate)
        app = Application(candidate_id=candidate.id, role="dev")
        await storage.insert_application(app)
        now = datetime.now(timezone.utc)

        late = await storage.update_status(
            app.id, 1, ApplicationStatus.SCREENING, now, not_after=now - timedelta(seconds=1)
        )
        in_time = await storage.update_status(
            app.id, 1, ApplicationStatus.SCREENING, now, not_after=now + timedelta(minutes=1)
        )

        assert late is None
        assert in_time is not None
        assert in_time.version == 2

    @pytest.mark.asyncio
    async def test_list_applications_join(self, storage: SQLiteAdapter):
        """Listing joins candidate identity onto each application."""
        candidate = Candidate("Ada", "Lovelace", "ada@example.com")
        await storage.insert_candidate(candidate)
        app = Application(candidate_id=candidate.id, role="dev")
        await storage.insert_application(app)

        [result] = await storage.list_applications(ApplicationQuery())

        assert result.application == app
        assert result.candidate == candidate.summary

    @pytest.mark.asyncio
    async def test_get_candidate_summary_missing(self, storage: SQLiteAdapter):
        """Unknown candidates have no summary."""
        assert await storage.get_candidate_summary("missing") is None
