"""
ApplicationEvent Entity - One immutable row of an application's audit trail.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4


@dataclass(frozen=True)
class ApplicationEvent:
    """
    Append-only record of something that happened to an application.
    
    Attributes:
        application_id: Owning application (foreign key)
        event_type: Type tag, e.g. "update"
        payload: Structured description of the event (JSON object)
        id: Opaque unique id
        created_at: When the event was appended (UTC)
    """

    application_id: str
    event_type: str
    payload: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert to dictionary for database storage."""
        return {
            "id": self.id,
            "application_id": self.application_id,
            "type": self.event_type,
            "payload": json.dumps(self.payload, sort_keys=True),
            "created_at": self.created_at.isoformat(timespec="microseconds"),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ApplicationEvent":
        """Create ApplicationEvent from dictionary (database row)."""
        payload = data.get("payload") or "{}"
        return cls(
            id=data["id"],
            application_id=data["application_id"],
            event_type=data["type"],
            payload=json.loads(payload) if isinstance(payload, str) else dict(payload),
            created_at=datetime.fromisoformat(data["created_at"])
            if isinstance(data["created_at"], str)
            else data["created_at"],
        )
