"""
Candidate Registry Use Case - Registers candidates and answers lookups.
"""

import logging
from typing import Optional

from pydantic import validate_email

from hiretrack.application.interfaces import CandidateStorePort
from hiretrack.config.settings import Settings
from hiretrack.domain.entities import Candidate
from hiretrack.domain.errors import NotFoundError, ValidationError
from hiretrack.domain.value_objects import CandidateSummary
from .deadline import Deadline


logger = logging.getLogger(__name__)


class CandidateRegistry:
    """Creates candidates and exposes the existence checks applications rely on."""

    def __init__(self, candidates: CandidateStorePort, settings: Settings) -> None:
        self.candidates = candidates
        self.settings = settings

    async def create(
        self,
        first_name: str,
        last_name: str,
        email: str,
        timeout: Optional[float] = None,
    ) -> Candidate:
        """
        Register a new candidate.

        Raises:
            ValidationError: Blank names or malformed email.
            ConflictError: Email already registered.
        """
        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        if not first_name or not last_name:
            raise ValidationError("first_name and last_name are required")

        try:
            _, normalized_email = validate_email((email or "").strip())
        except ValueError as e:
            raise ValidationError(f"invalid email {email!r}") from e

        candidate = Candidate(
            first_name=first_name,
            last_name=last_name,
            email=normalized_email,
        )
        await Deadline.resolve(timeout, self.settings.operation_timeout).run(
            self.candidates.insert_candidate(candidate),
            "create candidate",
        )
        logger.info("Registered candidate %s", candidate.id)
        return candidate

    async def exists(self, candidate_id: str, timeout: Optional[float] = None) -> bool:
        """Check whether a candidate id is registered."""
        if not candidate_id:
            return False
        return await Deadline.resolve(timeout, self.settings.operation_timeout).run(
            self.candidates.candidate_exists(candidate_id),
            "candidate exists",
        )

    async def get_summary(
        self,
        candidate_id: str,
        timeout: Optional[float] = None,
    ) -> CandidateSummary:
        """Get minimal identity for a candidate, or raise NotFoundError."""
        summary = None
        if candidate_id:
            summary = await Deadline.resolve(timeout, self.settings.operation_timeout).run(
                self.candidates.get_candidate_summary(candidate_id),
                "get candidate summary",
            )
        if summary is None:
            raise NotFoundError("candidate", candidate_id)
        return summary
