"""
Candidate Entity - A person applying to roles.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from hiretrack.domain.value_objects import CandidateSummary


@dataclass(frozen=True)
class Candidate:
    """
    Candidate identity record.
    
    Immutable once created; no update flow exists.
    
    Attributes:
        first_name: Given name
        last_name: Family name
        email: Normalized contact email (unique)
        id: Opaque unique id
        created_at: Creation timestamp (UTC)
    """

    first_name: str
    last_name: str
    email: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def summary(self) -> CandidateSummary:
        """Minimal identity used when joining with applications."""
        return CandidateSummary(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for database storage."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "created_at": self.created_at.isoformat(timespec="microseconds"),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Candidate":
        """Create Candidate from dictionary (database row)."""
        return cls(
            id=data["id"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            email=data["email"],
            created_at=datetime.fromisoformat(data["created_at"])
            if isinstance(data["created_at"], str)
            else data["created_at"],
        )
