"""
Unit tests for CandidateRegistry.
"""

import pytest

from hiretrack.application.use_cases import CandidateRegistry
from hiretrack.domain.entities import Candidate
from hiretrack.domain.errors import ConflictError, DeadlineExceededError, NotFoundError, ValidationError


class TestCreateCandidate:
    """Tests for registering candidates."""

    @pytest.mark.asyncio
    async def test_create(self, registry: CandidateRegistry):
        """Should register a candidate with trimmed fields."""
        candidate = await registry.create(" Grace ", "Hopper", " grace@example.com ")

        assert candidate.first_name == "Grace"
        assert candidate.last_name == "Hopper"
        assert candidate.email == "grace@example.com"
        assert await registry.exists(candidate.id) is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("first,last", [("", "Hopper"), ("Grace", ""), ("  ", "Hopper")])
    async def test_requires_names(self, registry: CandidateRegistry, first: str, last: str):
        """Blank names are rejected."""
        with pytest.raises(ValidationError, match="required"):
            await registry.create(first, last, "grace@example.com")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["", "not-an-email", "grace@", "@example.com"])
    async def test_rejects_malformed_email(self, registry: CandidateRegistry, email: str):
        """Malformed emails are rejected."""
        with pytest.raises(ValidationError, match="invalid email"):
            await registry.create("Grace", "Hopper", email)

    @pytest.mark.asyncio
    async def test_duplicate_email(self, registry: CandidateRegistry, candidate: Candidate):
        """A second candidate with the same email conflicts."""
        with pytest.raises(ConflictError, match="already registered"):
            await registry.create("Another", "Person", candidate.email)


class TestLookups:
    """Tests for existence checks and summaries."""

    @pytest.mark.asyncio
    async def test_exists(self, registry: CandidateRegistry, candidate: Candidate):
        """Known ids exist, unknown and empty ids do not."""
        assert await registry.exists(candidate.id) is True
        assert await registry.exists("missing") is False
        assert await registry.exists("") is False

    @pytest.mark.asyncio
    async def test_get_summary(self, registry: CandidateRegistry, candidate: Candidate):
        """Should return identity fields."""
        assert await registry.get_summary(candidate.id) == candidate.summary

    @pytest.mark.asyncio
    async def test_get_summary_missing(self, registry: CandidateRegistry):
        """Unknown ids raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await registry.get_summary("missing")

    @pytest.mark.asyncio
    async def test_zero_timeout_is_honored(self, registry: CandidateRegistry, candidate: Candidate):
        """A zero timeout expires at once rather than falling back to the default."""
        with pytest.raises(DeadlineExceededError):
            await registry.exists(candidate.id, timeout=0)
