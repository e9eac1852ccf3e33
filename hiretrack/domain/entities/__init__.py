# Domain Entities
from hiretrack.domain.value_objects import ApplicationStatus

from .candidate import Candidate
from .application import Application, ApplicationWithCandidate
from .application_event import ApplicationEvent

__all__ = [
    "Candidate",
    "Application",
    "ApplicationStatus",
    "ApplicationWithCandidate",
    "ApplicationEvent",
]
