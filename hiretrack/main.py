"""
HireTrack - Applicant tracking core.

Entry point: wires the store and use cases together for a calling layer
(HTTP facade, worker, shell) and prepares the database schema.
"""

import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import Optional

from hiretrack.application.use_cases import (
    CandidateRegistry,
    EventRecorder,
    LifecycleManager,
)
from hiretrack.config.settings import Settings, get_settings
from hiretrack.infrastructure.storage import SQLiteAdapter


logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


@dataclass
class Services:
    """Everything a calling layer needs, sharing one store."""

    storage: SQLiteAdapter
    candidates: CandidateRegistry
    recorder: EventRecorder
    lifecycle: LifecycleManager

    async def close(self) -> None:
        await self.storage.close()


async def create_services(settings: Optional[Settings] = None) -> Services:
    """
    Open the database (creating the schema if missing) and build the use cases.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
    """
    settings = settings or get_settings()
    storage = SQLiteAdapter(settings.database_path)
    await storage.initialize()

    recorder = EventRecorder(storage, settings)
    return Services(
        storage=storage,
        candidates=CandidateRegistry(storage, settings),
        recorder=recorder,
        lifecycle=LifecycleManager(storage, settings, recorder=recorder),
    )


async def bootstrap(settings: Settings) -> None:
    """Prepare the database and report readiness."""
    services = await create_services(settings)
    logger.info("candidates, applications and application_events tables ready")
    await services.close()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    asyncio.run(bootstrap(settings))


if __name__ == "__main__":
    main()
