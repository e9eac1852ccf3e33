"""
Domain Errors - Failure taxonomy shared by every layer.

Each error carries the HTTP status a calling facade should answer with,
so the mapping lives next to the error instead of in every handler.
"""

from typing import Optional


class HireTrackError(Exception):
    """Base class for all HireTrack errors."""

    http_status = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(HireTrackError):
    """Bad input supplied by the caller."""

    http_status = 400


class ReferentialError(ValidationError):
    """Input references an entity that does not exist."""

    http_status = 422


class NotFoundError(HireTrackError):
    """Requested record does not exist."""

    http_status = 404

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} {entity_id!r} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(HireTrackError):
    """Status change not permitted by the hiring pipeline."""

    http_status = 422

    def __init__(self, from_status: str, to_status: str) -> None:
        super().__init__(f"cannot transition from {from_status!r} to {to_status!r}")
        self.from_status = from_status
        self.to_status = to_status


class ConflictError(HireTrackError):
    """Write collides with existing state (e.g. duplicate email)."""

    http_status = 409


class ConcurrentModificationError(ConflictError):
    """
    Optimistic concurrency check failed.

    The row changed between read and write. Callers should re-read and
    retry the read-modify-write, or abort.
    """

    def __init__(self, application_id: str, expected_version: int) -> None:
        super().__init__(
            f"application {application_id!r} was modified concurrently "
            f"(expected version {expected_version})"
        )
        self.application_id = application_id
        self.expected_version = expected_version


class StorageError(HireTrackError):
    """Underlying persistence failure."""

    http_status = 500


class DeadlineExceededError(StorageError):
    """Store call did not finish before the caller's deadline."""

    def __init__(self, operation: str, timeout: Optional[float]) -> None:
        super().__init__(f"{operation} exceeded deadline of {timeout}s")
        self.operation = operation
        self.timeout = timeout


def http_status_for(exc: BaseException) -> int:
    """Map any exception to the HTTP status a facade should return."""
    if isinstance(exc, HireTrackError):
        return exc.http_status
    return 500
