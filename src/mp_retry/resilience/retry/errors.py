"""Resilience – retry coordinator errors."""
from __future__ import annotations

from typing import Any

from mp_retry.kernel.errors import ApplicationError


class RetryError(ApplicationError):
    """Root for errors raised by the retry coordinator itself.

    Failures of the retried operation are never wrapped in this type; they
    are forwarded to the caller unchanged.
    """

    default_code = "retry_error"


class InvalidRetryConfigError(RetryError):
    """A :class:`RetryConfig` was built with unusable values."""

    default_code = "invalid_retry_config"

    def __init__(self, field: str, value: object, reason: str) -> None:
        super().__init__(
            f"Invalid retry config {field}={value!r}: {reason}",
            detail={"field": field, "reason": reason},
        )
        self.field = field
        self.value = value


class UnknownRetryMessageError(RetryError):
    """``handle_message`` received something outside the coordinator's message set."""

    default_code = "unknown_retry_message"

    def __init__(self, message: Any) -> None:
        super().__init__(
            f"Unsupported retry message type {type(message).__name__}",
            detail={"type": type(message).__name__},
        )
        self.retry_message = message


__all__ = ["InvalidRetryConfigError", "RetryError", "UnknownRetryMessageError"]
