"""
ApplicationQuery Value Object - Immutable listing filters and paging.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .application_status import ApplicationStatus


@dataclass(frozen=True)
class ApplicationQuery:
    """
    Immutable value object for listing applications.

    Filters are optional equality predicates. Results are ordered newest
    created first.

    Attributes:
        role: Only applications for exactly this role
        status: Only applications currently in this status
        limit: Maximum rows to return
        offset: Rows to skip
    """

    role: Optional[str] = None
    status: Optional[ApplicationStatus] = None
    limit: int = 20
    offset: int = 0

    def __post_init__(self) -> None:
        """Validate paging and normalize the status filter."""
        if isinstance(self.status, str):
            parsed = ApplicationStatus.parse(self.status)
            if parsed is None:
                raise ValueError(f"unknown status filter {self.status!r}")
            object.__setattr__(self, "status", parsed)
        if self.role is not None:
            object.__setattr__(self, "role", self.role.strip() or None)
        if self.limit < 1:
            raise ValueError("limit must be >= 1")
        if self.offset < 0:
            raise ValueError("offset must be >= 0")

    @classmethod
    def build(
        cls,
        role: Optional[str] = None,
        status: Union[ApplicationStatus, str, None] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        default_limit: int = 20,
        max_limit: int = 100,
    ) -> "ApplicationQuery":
        """Create a query, applying the default page size and capping the limit."""
        effective = default_limit if limit is None else min(limit, max_limit)
        return cls(role=role, status=status, limit=effective, offset=offset)
