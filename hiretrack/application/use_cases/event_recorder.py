"""
Event Recorder Use Case - Appends to an application's audit trail.
"""

import logging
from typing import Any, Optional

from hiretrack.application.interfaces import EventStorePort
from hiretrack.config.settings import Settings
from hiretrack.domain.entities import ApplicationEvent
from hiretrack.domain.errors import ValidationError
from .deadline import Deadline


logger = logging.getLogger(__name__)


class EventRecorder:
    """
    Writes ApplicationEvent rows.

    Events are appended only, never updated or deleted. Store failures
    raise out of `record`; whether they matter is the caller's call.
    """

    def __init__(self, events: EventStorePort, settings: Settings) -> None:
        self.events = events
        self.settings = settings

    async def record(
        self,
        application_id: str,
        event_type: str,
        payload: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> ApplicationEvent:
        """
        Append one event for an application.

        Args:
            application_id: Application the event belongs to.
            event_type: Type tag, e.g. "update".
            payload: JSON-serializable description of what happened.
            timeout: Deadline in seconds (defaults to settings).

        Returns:
            The stored event.
        """
        if not application_id:
            raise ValidationError("application_id is required")
        if not event_type:
            raise ValidationError("event_type is required")

        event = ApplicationEvent(
            application_id=application_id,
            event_type=event_type,
            payload=dict(payload or {}),
        )
        deadline = Deadline.resolve(timeout, self.settings.operation_timeout)
        await deadline.run(self.events.append_event(event), "record event")
        logger.debug("Recorded %s event %s for application %s", event_type, event.id, application_id)
        return event
