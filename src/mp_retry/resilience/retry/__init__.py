"""Resilience – single-flight retry coordinator and delay policies."""
from mp_retry.resilience.retry.coordinator import RetryCoordinator, Transition, handle_message, retry
from mp_retry.resilience.retry.delay import (
    ConstantDelay,
    DelayPolicy,
    ExponentialDelay,
    constant_delay,
    exponential_delay,
)
from mp_retry.resilience.retry.errors import InvalidRetryConfigError, RetryError, UnknownRetryMessageError
from mp_retry.resilience.retry.messages import (
    DelayedMessage,
    NoOp,
    OperationFailed,
    RetryMessage,
    RetryRequest,
    ReturnMessage,
)
from mp_retry.resilience.retry.settings import RetrySettings
from mp_retry.resilience.retry.state import RetryConfig, RetryState
from mp_retry.resilience.retry.timer import AsyncioTimerService, TimerService

__all__ = [
    "AsyncioTimerService", "ConstantDelay", "DelayPolicy", "DelayedMessage",
    "ExponentialDelay", "InvalidRetryConfigError", "NoOp", "OperationFailed",
    "RetryConfig", "RetryCoordinator", "RetryError", "RetryMessage", "RetryRequest",
    "RetrySettings", "RetryState", "ReturnMessage", "TimerService", "Transition",
    "UnknownRetryMessageError", "constant_delay", "exponential_delay",
    "handle_message", "retry",
]
