"""
ApplicationStatus Value Object - Hiring pipeline stages and their legal moves.

The transition table is the single source of truth for the pipeline:

    applied   -> screening, rejected
    screening -> interview, rejected
    interview -> offer, rejected
    offer     -> hired, rejected
    hired     -> (terminal)
    rejected  -> (terminal)
"""

from enum import Enum
from typing import Optional, Union


class ApplicationStatus(Enum):
    """Stage of an application in the hiring pipeline."""

    APPLIED = "applied"
    SCREENING = "screening"
    INTERVIEW = "interview"
    OFFER = "offer"
    HIRED = "hired"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: Union["ApplicationStatus", str]) -> Optional["ApplicationStatus"]:
        """Return the matching status, or None for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


# Directed, no self-loops. Statuses mapping to an empty set are terminal.
TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.APPLIED: frozenset({ApplicationStatus.SCREENING, ApplicationStatus.REJECTED}),
    ApplicationStatus.SCREENING: frozenset({ApplicationStatus.INTERVIEW, ApplicationStatus.REJECTED}),
    ApplicationStatus.INTERVIEW: frozenset({ApplicationStatus.OFFER, ApplicationStatus.REJECTED}),
    ApplicationStatus.OFFER: frozenset({ApplicationStatus.HIRED, ApplicationStatus.REJECTED}),
    ApplicationStatus.HIRED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
}


def legal_targets(status: Union[ApplicationStatus, str]) -> frozenset[ApplicationStatus]:
    """
    Statuses reachable in one step from `status`.

    Unknown statuses have no outgoing transitions.
    """
    parsed = ApplicationStatus.parse(status)
    if parsed is None:
        return frozenset()
    return TRANSITIONS.get(parsed, frozenset())


def can_transition(
    from_status: Union[ApplicationStatus, str],
    to_status: Union[ApplicationStatus, str],
) -> bool:
    """Check whether from_status -> to_status is a legal pipeline move."""
    target = ApplicationStatus.parse(to_status)
    return target is not None and target in legal_targets(from_status)
