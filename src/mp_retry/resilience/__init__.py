"""Resilience – bounded retry with scheduled, non-blocking delays."""

from mp_retry.resilience.retry import (
    RetryConfig,
    RetryCoordinator,
    RetryState,
    constant_delay,
    exponential_delay,
    handle_message,
    retry,
)

__all__ = [
    "RetryConfig",
    "RetryCoordinator",
    "RetryState",
    "constant_delay",
    "exponential_delay",
    "handle_message",
    "retry",
]
