"""
CandidateSummary Value Object - Minimal candidate identity.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CandidateSummary:
    """Identity fields joined onto application listings."""

    id: str
    first_name: str
    last_name: str
    email: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
        }
