# Interfaces Package
from .storage_port import (
    ApplicationStorePort,
    CandidateStorePort,
    EventStorePort,
    StoragePort,
)

__all__ = [
    "ApplicationStorePort",
    "CandidateStorePort",
    "EventStorePort",
    "StoragePort",
]
