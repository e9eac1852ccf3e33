"""
SQLite Adapter - Database operations for HireTrack.

The connection runs in autocommit mode: every write below is one
statement and therefore atomic on its own. Status changes are a single
conditional UPDATE keyed on id and version, which is the only
synchronization the transition protocol relies on.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Optional

import aiosqlite

from hiretrack.application.interfaces import StoragePort
from hiretrack.domain.entities import (
    Application,
    ApplicationEvent,
    ApplicationWithCandidate,
    Candidate,
)
from hiretrack.domain.errors import ConflictError, ReferentialError, StorageError
from hiretrack.domain.value_objects import (
    ApplicationQuery,
    ApplicationStatus,
    CandidateSummary,
)
from .migrations import run_migrations


logger = logging.getLogger(__name__)

APPLICATION_COLUMNS = "id, candidate_id, role, status, version, created_at, updated_at"


def _sqlite_timestamp(value: datetime) -> str:
    """UTC timestamp in the millisecond format of SQLite's strftime('%f')."""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3]


@contextmanager
def _translate_errors(
    operation: str,
    conflict: Optional[str] = None,
    referential: Optional[str] = None,
) -> Iterator[None]:
    """Turn sqlite errors into domain errors so they never leak past the adapter."""
    try:
        yield
    except aiosqlite.IntegrityError as e:
        message = str(e)
        if referential and "FOREIGN KEY" in message:
            raise ReferentialError(referential) from e
        if conflict and "UNIQUE" in message:
            raise ConflictError(conflict) from e
        raise StorageError(f"{operation} failed: {message}") from e
    except aiosqlite.Error as e:
        raise StorageError(f"{operation} failed: {e}") from e


class SQLiteAdapter(StoragePort):
    """
    SQLite database adapter for HireTrack.

    Provides async persistence for candidates, applications and the
    application event log.
    """

    def __init__(self, db_path: Path) -> None:
        """
        Initialize the adapter.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def initialize(self) -> None:
        """Initialize database and run migrations."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        # Run migrations synchronously first
        run_migrations(self.db_path)

        self._connection = await aiosqlite.connect(str(self.db_path), isolation_level=None)
        self._connection.row_factory = aiosqlite.Row
        await self._connection.execute("PRAGMA foreign_keys = ON")
        logger.info("Database ready at %s", self.db_path)

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    @property
    def conn(self) -> aiosqlite.Connection:
        """Get the active connection or raise error."""
        if not self._connection:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._connection

    # ==================== Candidate Operations ====================

    async def insert_candidate(self, candidate: Candidate) -> None:
        """Insert a candidate record."""
        data = candidate.to_dict()
        with _translate_errors(
            "insert candidate",
            conflict=f"email {candidate.email!r} is already registered",
        ):
            await self.conn.execute(
                """
                INSERT INTO candidates (id, first_name, last_name, email, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    data["id"],
                    data["first_name"],
                    data["last_name"],
                    data["email"],
                    data["created_at"],
                )
            )

    async def candidate_exists(self, candidate_id: str) -> bool:
        """Check if a candidate id is known."""
        with _translate_errors("candidate lookup"):
            cursor = await self.conn.execute(
                "SELECT 1 FROM candidates WHERE id = ?",
                (candidate_id,)
            )
            return await cursor.fetchone() is not None

    async def get_candidate_summary(self, candidate_id: str) -> Optional[CandidateSummary]:
        """Get minimal identity for a candidate."""
        with _translate_errors("candidate lookup"):
            cursor = await self.conn.execute(
                "SELECT id, first_name, last_name, email FROM candidates WHERE id = ?",
                (candidate_id,)
            )
            row = await cursor.fetchone()
        if row:
            return CandidateSummary(**dict(row))
        return None

    # ==================== Application Operations ====================

    async def insert_application(self, application: Application) -> None:
        """Insert a new application record."""
        data = application.to_dict()
        with _translate_errors(
            "insert application",
            referential=f"candidate {application.candidate_id!r} does not exist",
        ):
            await self.conn.execute(
                f"""
                INSERT INTO applications ({APPLICATION_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["id"],
                    data["candidate_id"],
                    data["role"],
                    data["status"],
                    data["version"],
                    data["created_at"],
                    data["updated_at"],
                )
            )

    async def get_application(self, application_id: str) -> Optional[Application]:
        """Get an application by id."""
        with _translate_errors("application lookup"):
            cursor = await self.conn.execute(
                f"SELECT {APPLICATION_COLUMNS} FROM applications WHERE id = ?",
                (application_id,)
            )
            row = await cursor.fetchone()
        if row:
            return Application.from_dict(dict(row))
        return None

    async def update_status(
        self,
        application_id: str,
        expected_version: int,
        status: ApplicationStatus,
        updated_at: datetime,
        not_after: Optional[datetime] = None,
    ) -> Optional[Application]:
        """
        Compare-and-swap the status of an application.

        A statement queued behind slower work may run after the caller's
        deadline; the `not_after` check, evaluated by SQLite at execution
        time, turns such a late write into a no-op.

        Returns:
            The updated row, or None if the row is gone, its version moved,
            or `not_after` had passed when the statement ran.
        """
        cutoff = _sqlite_timestamp(not_after) if not_after else None
        with _translate_errors("update application status"):
            cursor = await self.conn.execute(
                f"""
                UPDATE applications
                SET status = ?, version = version + 1, updated_at = ?
                WHERE id = ? AND version = ?
                  AND (? IS NULL OR strftime('%Y-%m-%dT%H:%M:%f', 'now') <= ?)
                RETURNING {APPLICATION_COLUMNS}
                """,
                (
                    status.value,
                    updated_at.isoformat(timespec="microseconds"),
                    application_id,
                    expected_version,
                    cutoff,
                    cutoff,
                )
            )
            rows = await cursor.fetchall()
        if not rows:
            return None
        return Application.from_dict(dict(rows[0]))

    async def list_applications(self, query: ApplicationQuery) -> list[ApplicationWithCandidate]:
        """Get applications with optional filters, newest first."""
        sql = f"""
            SELECT {', '.join('a.' + c for c in APPLICATION_COLUMNS.split(', '))},
                   c.first_name, c.last_name, c.email
            FROM applications a
            JOIN candidates c ON c.id = a.candidate_id
            WHERE 1=1
        """
        params: list[Any] = []

        if query.role is not None:
            sql += " AND a.role = ?"
            params.append(query.role)

        if query.status is not None:
            sql += " AND a.status = ?"
            params.append(query.status.value)

        sql += " ORDER BY a.created_at DESC, a.rowid DESC LIMIT ? OFFSET ?"
        params.extend([query.limit, query.offset])

        with _translate_errors("list applications"):
            cursor = await self.conn.execute(sql, params)
            rows = await cursor.fetchall()

        results = []
        for row in rows:
            data = dict(row)
            candidate = CandidateSummary(
                id=data["candidate_id"],
                first_name=data["first_name"],
                last_name=data["last_name"],
                email=data["email"],
            )
            results.append(
                ApplicationWithCandidate(
                    application=Application.from_dict(data),
                    candidate=candidate,
                )
            )
        return results

    # ==================== Event Operations ====================

    async def append_event(self, event: ApplicationEvent) -> None:
        """Append an event to the audit trail."""
        data = event.to_dict()
        with _translate_errors(
            "append event",
            referential=f"application {event.application_id!r} does not exist",
        ):
            await self.conn.execute(
                """
                INSERT INTO application_events (id, application_id, type, payload, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    data["id"],
                    data["application_id"],
                    data["type"],
                    data["payload"],
                    data["created_at"],
                )
            )

    async def list_events(self, application_id: str) -> list[ApplicationEvent]:
        """Get the events of an application in append order."""
        with _translate_errors("list events"):
            cursor = await self.conn.execute(
                """
                SELECT id, application_id, type, payload, created_at
                FROM application_events
                WHERE application_id = ?
                ORDER BY created_at, rowid
                """,
                (application_id,)
            )
            rows = await cursor.fetchall()
        return [ApplicationEvent.from_dict(dict(row)) for row in rows]
