"""
Shared fixtures: settings pointed at a temporary directory and a real
SQLite store behind every use case.
"""

from pathlib import Path

import pytest
import pytest_asyncio

from hiretrack.application.use_cases import (
    CandidateRegistry,
    EventRecorder,
    LifecycleManager,
)
from hiretrack.config.settings import Settings
from hiretrack.domain.entities import Candidate
from hiretrack.infrastructure.storage import SQLiteAdapter


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create test settings."""
    return Settings(
        env="test",
        data_dir=tmp_path,
        default_page_size=20,
        max_page_size=100,
        operation_timeout=5.0,
    )


@pytest_asyncio.fixture
async def storage(settings: Settings):
    """Initialized SQLite store, closed after the test."""
    adapter = SQLiteAdapter(settings.database_path)
    await adapter.initialize()
    yield adapter
    await adapter.close()


@pytest.fixture
def recorder(storage: SQLiteAdapter, settings: Settings) -> EventRecorder:
    return EventRecorder(storage, settings)


@pytest.fixture
def registry(storage: SQLiteAdapter, settings: Settings) -> CandidateRegistry:
    return CandidateRegistry(storage, settings)


@pytest.fixture
def manager(
    storage: SQLiteAdapter,
    settings: Settings,
    recorder: EventRecorder,
) -> LifecycleManager:
    return LifecycleManager(storage, settings, recorder=recorder)


@pytest_asyncio.fixture
async def candidate(registry: CandidateRegistry) -> Candidate:
    """A registered candidate to own applications."""
    return await registry.create("Ada", "Lovelace", "ada@example.com")
