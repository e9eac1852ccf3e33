"""
Storage Ports - Abstract interfaces for data persistence.

The use cases depend only on these contracts, so any store (SQLite, a
test double) can be injected into them.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from hiretrack.domain.entities import (
    Application,
    ApplicationEvent,
    ApplicationWithCandidate,
    Candidate,
)
from hiretrack.domain.value_objects import (
    ApplicationQuery,
    ApplicationStatus,
    CandidateSummary,
)


class CandidateStorePort(ABC):
    """Abstract interface for candidate records."""

    @abstractmethod
    async def insert_candidate(self, candidate: Candidate) -> None:
        """Insert a candidate. Raises ConflictError on duplicate email."""
        pass

    @abstractmethod
    async def candidate_exists(self, candidate_id: str) -> bool:
        """Check whether a candidate id is known."""
        pass

    @abstractmethod
    async def get_candidate_summary(self, candidate_id: str) -> Optional[CandidateSummary]:
        """Get minimal identity for a candidate."""
        pass


class ApplicationStorePort(ABC):
    """Abstract interface for application records."""

    @abstractmethod
    async def insert_application(self, application: Application) -> None:
        """Insert an application. Raises ReferentialError for unknown candidates."""
        pass

    @abstractmethod
    async def get_application(self, application_id: str) -> Optional[Application]:
        """Get an application by id."""
        pass

    @abstractmethod
    async def update_status(
        self,
        application_id: str,
        expected_version: int,
        status: ApplicationStatus,
        updated_at: datetime,
        not_after: Optional[datetime] = None,
    ) -> Optional[Application]:
        """
        Atomically change status if the row is still at expected_version.

        When `not_after` is given, the write only applies if the store
        executes it no later than that instant.

        Returns:
            The updated row (version incremented), or None when no row
            matched id and version.
        """
        pass

    @abstractmethod
    async def list_applications(self, query: ApplicationQuery) -> list[ApplicationWithCandidate]:
        """Get applications joined with candidate identity, newest first."""
        pass


class EventStorePort(ABC):
    """Abstract interface for the append-only event log."""

    @abstractmethod
    async def append_event(self, event: ApplicationEvent) -> None:
        """Append an event row."""
        pass

    @abstractmethod
    async def list_events(self, application_id: str) -> list[ApplicationEvent]:
        """Get events for an application in append order."""
        pass


class StoragePort(CandidateStorePort, ApplicationStorePort, EventStorePort):
    """A store backing every port, with a connection lifecycle."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize storage connection."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close storage connection."""
        pass
