"""Resilience – messages exchanged between a retry flight and its host.

The coordinator never knows the host's message type ``M``.  It only ever
produces host messages through taggers the host supplies, and otherwise
speaks the closed set below::

    RetryMessage = NoOp | OperationFailed | ReturnMessage
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Generic, TypeVar, Union

M = TypeVar("M")
F = TypeVar("F")
E = TypeVar("E")


@dataclasses.dataclass(frozen=True)
class RetryRequest(Generic[F, E]):
    """Handed to the host's retry tagger when a re-run is due."""

    attempt: int
    failure: F
    operation: E


@dataclasses.dataclass(frozen=True)
class NoOp:
    """A timer fired with nothing attached."""


@dataclasses.dataclass(frozen=True, kw_only=True)
class OperationFailed(Generic[M, F, E]):
    """Routed back into the coordinator when the wrapped operation reports failure."""

    flight_id: str
    failure: F
    operation: E | None
    failure_tagger: Callable[[F], M]
    retry_tagger: Callable[[RetryRequest[F, E]], M]


@dataclasses.dataclass(frozen=True)
class ReturnMessage(Generic[M]):
    """Pass a host message straight upward once its delay has elapsed."""

    message: M
    flight_id: str | None = None


RetryMessage = Union[NoOp, OperationFailed[Any, Any, Any], ReturnMessage[Any]]


@dataclasses.dataclass(frozen=True)
class DelayedMessage:
    """Ask the host's timer to feed *message* back to the coordinator after *delay* seconds."""

    delay: float
    message: RetryMessage


__all__ = [
    "DelayedMessage",
    "NoOp",
    "OperationFailed",
    "RetryMessage",
    "RetryRequest",
    "ReturnMessage",
]
