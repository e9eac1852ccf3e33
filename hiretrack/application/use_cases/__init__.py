# Use Cases Package
from .candidate_registry import CandidateRegistry
from .event_recorder import EventRecorder
from .lifecycle_manager import LifecycleManager

__all__ = ["CandidateRegistry", "EventRecorder", "LifecycleManager"]
