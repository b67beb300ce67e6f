"""Resilience – RetryConfig and per-flight RetryState."""
from __future__ import annotations

import dataclasses
import uuid
from typing import Generic, TypeVar

from mp_retry.resilience.retry.delay import DelayPolicy
from mp_retry.resilience.retry.errors import InvalidRetryConfigError

E = TypeVar("E")


@dataclasses.dataclass(frozen=True)
class RetryConfig:
    """Immutable per call-site configuration.

    ``max_retries`` counts re-invocations only; the original attempt is
    never charged against it.  ``delay_for_attempt`` is consulted with the
    1-based number of the retry about to be scheduled.
    """

    max_retries: int
    delay_for_attempt: DelayPolicy

    def __post_init__(self) -> None:
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise InvalidRetryConfigError("max_retries", self.max_retries, "must be an int")
        if self.max_retries < 0:
            raise InvalidRetryConfigError("max_retries", self.max_retries, "must be >= 0")
        if not callable(self.delay_for_attempt):
            raise InvalidRetryConfigError(
                "delay_for_attempt", self.delay_for_attempt, "must be callable"
            )


@dataclasses.dataclass(frozen=True)
class RetryState(Generic[E]):
    """State of one flight; every transition returns a new instance."""

    attempt: int = 1
    pending_operation: E | None = None
    flight_id: str = dataclasses.field(default_factory=lambda: str(uuid.uuid4()))
    concluded: bool = False

    def advance(self, operation: E | None) -> RetryState[E]:
        """Record a failure that will be retried."""
        return dataclasses.replace(self, attempt=self.attempt + 1, pending_operation=operation)

    def conclude(self) -> RetryState[E]:
        """Mark the flight as over after the terminal failure was forwarded."""
        return dataclasses.replace(self, concluded=True)

    def reset(self) -> RetryState[E]:
        """Restart the budget at attempt 1; the operation's sink stays valid."""
        return dataclasses.replace(self, attempt=1, concluded=False)

    @property
    def retries_performed(self) -> int:
        return self.attempt - 1


__all__ = ["RetryConfig", "RetryState"]
