"""
Deadline helper shared by the use cases.

One Deadline covers a whole operation: every store call it makes draws
from the same budget.
"""

import asyncio
import time
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Optional, TypeVar

from hiretrack.domain.errors import DeadlineExceededError


T = TypeVar("T")


class Deadline:
    """
    A point in time an operation must finish by.

    Attributes:
        timeout: Total budget in seconds.
        not_after: Wall-clock expiry (UTC), for writes the store must
            refuse once the budget is spent.
    """

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        self._expires_at = time.monotonic() + timeout
        self.not_after = datetime.now(timezone.utc) + timedelta(seconds=timeout)

    @classmethod
    def resolve(cls, timeout: Optional[float], default: float) -> "Deadline":
        """Start a deadline, using `default` only when no timeout was given."""
        return cls(default if timeout is None else timeout)

    def remaining(self) -> float:
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0

    async def run(self, awaitable: Awaitable[T], operation: str) -> T:
        """
        Await a store call with whatever budget is left.

        Raises:
            DeadlineExceededError: If the call did not finish in time.
        """
        try:
            return await asyncio.wait_for(awaitable, self.remaining())
        except asyncio.TimeoutError as e:
            raise DeadlineExceededError(operation, self.timeout) from e
