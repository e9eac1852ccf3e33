"""
Lifecycle Manager Use Case - Creates applications and moves them through
the hiring pipeline.

Transition protocol:
1. Read the current row
2. Check the move against the transition table
3. Write the new status conditioned on the version read in step 1
4. Append an "update" event to the audit trail

A lost race in step 3 surfaces as ConcurrentModificationError; nothing
here retries. Step 4 runs after the write has committed, so a failure
there is logged and the transition still stands.

One deadline covers steps 1 and 3. Once the write is handed to the
store, steps 3 and 4 run as a unit that neither the deadline nor a
cancelled caller can split: the store refuses the write if it executes
after the deadline, and a write that did commit always gets its event.
A caller cancelled during step 3 sees CancelledError while the commit
and its event finish in the background.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional, Union

from hiretrack.application.interfaces import ApplicationStorePort
from hiretrack.config.settings import Settings
from hiretrack.domain.entities import Application, ApplicationWithCandidate
from hiretrack.domain.errors import (
    ConcurrentModificationError,
    DeadlineExceededError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from hiretrack.domain.value_objects import (
    ApplicationQuery,
    ApplicationStatus,
    can_transition,
)
from .deadline import Deadline
from .event_recorder import EventRecorder


logger = logging.getLogger(__name__)


def _consume_outcome(task: "asyncio.Future[Application]") -> None:
    # Failures are logged where they happen; nobody may be left to await them
    if not task.cancelled():
        task.exception()


class LifecycleManager:
    """
    Owns application rows: creation, status transitions and reads.

    The store is injected, so the manager holds no state of its own
    between calls.
    """

    UPDATE_EVENT = "update"

    def __init__(
        self,
        applications: ApplicationStorePort,
        settings: Settings,
        recorder: Optional[EventRecorder] = None,
    ) -> None:
        """
        Initialize the manager.

        Args:
            applications: Application store.
            settings: Paging limits and default deadline.
            recorder: Audit trail writer; transitions are not recorded without one.
        """
        self.applications = applications
        self.settings = settings
        self.recorder = recorder

    def _deadline(self, timeout: Optional[float]) -> Deadline:
        return Deadline.resolve(timeout, self.settings.operation_timeout)

    async def create(
        self,
        candidate_id: str,
        role: str,
        timeout: Optional[float] = None,
    ) -> Application:
        """
        Create an application in the `applied` state at version 1.

        Raises:
            ValidationError: Empty candidate_id or role.
            ReferentialError: candidate_id does not reference a candidate.
        """
        candidate_id = (candidate_id or "").strip()
        role = (role or "").strip()
        if not candidate_id:
            raise ValidationError("candidate_id is required")
        if not role:
            raise ValidationError("role is required")

        application = Application(candidate_id=candidate_id, role=role)
        await self._deadline(timeout).run(
            self.applications.insert_application(application),
            "create application",
        )
        logger.info("Created application %s for candidate %s (%s)", application.id, candidate_id, role)
        return application

    async def get(self, application_id: str, timeout: Optional[float] = None) -> Application:
        """Get an application by id, or raise NotFoundError."""
        return await self._get(application_id, self._deadline(timeout))

    async def _get(self, application_id: str, deadline: Deadline) -> Application:
        application = None
        if application_id:
            application = await deadline.run(
                self.applications.get_application(application_id),
                "get application",
            )
        if application is None:
            raise NotFoundError("application", application_id)
        return application

    async def transition(
        self,
        application_id: str,
        target_status: Union[ApplicationStatus, str],
        reason: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Application:
        """
        Move an application to `target_status`.

        Returns:
            The updated application, version incremented by one.

        Raises:
            NotFoundError: No such application.
            InvalidTransitionError: The move is not in the transition table.
            ConcurrentModificationError: Another writer changed the row first.
            DeadlineExceededError: The deadline passed before the write ran;
                the row is unchanged.
        """
        deadline = self._deadline(timeout)
        current = await self._get(application_id, deadline)

        target = ApplicationStatus.parse(target_status)
        if target is None or not can_transition(current.status, target):
            requested = target.value if target else str(target_status)
            logger.warning(
                "Rejected transition %s -> %s for application %s",
                current.status.value,
                requested,
                application_id,
            )
            raise InvalidTransitionError(current.status.value, requested)

        if deadline.expired:
            raise DeadlineExceededError("transition application", deadline.timeout)

        commit = asyncio.ensure_future(self._commit_transition(current, target, reason, deadline))
        commit.add_done_callback(_consume_outcome)
        return await asyncio.shield(commit)

    async def _commit_transition(
        self,
        current: Application,
        target: ApplicationStatus,
        reason: Optional[str],
        deadline: Deadline,
    ) -> Application:
        """Conditional write plus its audit event. Runs shielded from the caller."""
        # Never move updated_at backwards, even if the clock does
        updated_at = max(datetime.now(timezone.utc), current.updated_at)

        updated = await self.applications.update_status(
            current.id,
            current.version,
            target,
            updated_at,
            not_after=deadline.not_after,
        )
        if updated is None:
            if deadline.expired:
                logger.warning(
                    "Transition of application %s ran past its %.3gs deadline; row unchanged",
                    current.id,
                    deadline.timeout,
                )
                raise DeadlineExceededError("transition application", deadline.timeout)
            logger.warning(
                "Lost concurrent update on application %s at version %d",
                current.id,
                current.version,
            )
            raise ConcurrentModificationError(current.id, current.version)

        logger.info(
            "Application %s: %s -> %s (version %d)",
            current.id,
            current.status.value,
            updated.status.value,
            updated.version,
        )
        await self._record_transition(current, updated, reason)
        return updated

    async def _record_transition(
        self,
        previous: Application,
        updated: Application,
        reason: Optional[str],
    ) -> None:
        """Append the audit event. The status change is already committed."""
        if self.recorder is None:
            return

        payload = {
            "to_status": updated.status.value,
            "from_status": previous.status.value,
            "version": updated.version,
            "reason": reason,
        }
        # Runs inside the shielded commit, so a cancelled caller cannot
        # interrupt it; only store failures and the recorder's own deadline land here.
        try:
            await self.recorder.record(updated.id, self.UPDATE_EVENT, payload)
        except Exception:
            logger.exception(
                "Failed to record %s event for application %s (version %d); transition kept",
                self.UPDATE_EVENT,
                updated.id,
                updated.version,
            )

    async def list(
        self,
        role: Optional[str] = None,
        status: Union[ApplicationStatus, str, None] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        timeout: Optional[float] = None,
    ) -> list[ApplicationWithCandidate]:
        """
        List applications with candidate identity, newest created first.

        `limit` defaults to the configured page size and is capped at the
        configured maximum. The role filter is trimmed like the role given
        to `create`.
        """
        try:
            query = ApplicationQuery.build(
                role=role,
                status=status,
                limit=limit,
                offset=offset,
                default_limit=self.settings.default_page_size,
                max_limit=self.settings.max_page_size,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        return await self._deadline(timeout).run(
            self.applications.list_applications(query),
            "list applications",
        )
