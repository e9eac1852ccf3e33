"""
Application Entity - A candidate's application to a role.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Union
from uuid import uuid4

from hiretrack.domain.value_objects import (
    TRANSITIONS,
    ApplicationStatus,
    CandidateSummary,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: Union[str, datetime]) -> datetime:
    return datetime.fromisoformat(value) if isinstance(value, str) else value


@dataclass
class Application:
    """
    Application entity representing one candidate applying to one role.

    Corresponds to the `applications` table in the database schema.

    Attributes:
        candidate_id: Owning candidate (foreign key)
        role: Role applied for (free text)
        status: Current pipeline stage
        version: Optimistic concurrency counter, 1 on creation
        id: Opaque unique id
        created_at: Creation timestamp (UTC)
        updated_at: Last status change timestamp (UTC)
    """

    candidate_id: str
    role: str
    status: ApplicationStatus = ApplicationStatus.APPLIED
    version: int = 1
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate and normalize application data."""
        if isinstance(self.status, str):
            self.status = ApplicationStatus(self.status)
        if self.updated_at is None:
            self.updated_at = self.created_at
        if self.version < 1:
            raise ValueError("version must be >= 1")
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not precede created_at")

    @property
    def is_terminal(self) -> bool:
        """Hired and rejected applications can no longer move."""
        return not TRANSITIONS[self.status]

    @property
    def legal_targets(self) -> frozenset[ApplicationStatus]:
        return TRANSITIONS[self.status]

    def to_dict(self) -> dict:
        """Convert to dictionary for database storage."""
        return {
            "id": self.id,
            "candidate_id": self.candidate_id,
            "role": self.role,
            "status": self.status.value,
            "version": self.version,
            "created_at": self.created_at.isoformat(timespec="microseconds"),
            "updated_at": self.updated_at.isoformat(timespec="microseconds"),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Application":
        """Create Application from dictionary (database row)."""
        return cls(
            id=data["id"],
            candidate_id=data["candidate_id"],
            role=data["role"],
            status=ApplicationStatus(data["status"]),
            version=data["version"],
            created_at=_parse_datetime(data["created_at"]),
            updated_at=_parse_datetime(data["updated_at"]),
        )


@dataclass(frozen=True)
class ApplicationWithCandidate:
    """An application joined with the identity of the candidate who owns it."""

    application: Application
    candidate: CandidateSummary

    def to_dict(self) -> dict:
        data = self.application.to_dict()
        data["candidate"] = self.candidate.to_dict()
        return data
