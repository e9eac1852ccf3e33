# Domain Value Objects
from .application_status import (
    ApplicationStatus,
    TRANSITIONS,
    can_transition,
    legal_targets,
)
from .application_query import ApplicationQuery
from .candidate_summary import CandidateSummary

__all__ = [
    "ApplicationStatus",
    "ApplicationQuery",
    "CandidateSummary",
    "TRANSITIONS",
    "can_transition",
    "legal_targets",
]
