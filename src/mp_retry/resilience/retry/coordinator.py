"""Resilience – retry coordinator.

A flight starts with :func:`retry`, which hands the caller's operation
builder an interception sink in place of its failure callback.  Every failure
reported through that sink is routed back as :class:`OperationFailed` and
resolved by :func:`handle_message`:

* within budget, a :class:`ReturnMessage` carrying the host's re-run request
  is scheduled after ``delay_for_attempt(attempt)``;
* past the budget, the failure is forwarded upward and the flight concludes.

:func:`handle_message` is pure: state in, :class:`Transition` out.
:class:`RetryCoordinator` binds it to a timer and an upward callback for
hosts that want the bookkeeping done for them.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Generic, NamedTuple, TypeVar

from mp_retry.resilience.retry.errors import UnknownRetryMessageError
from mp_retry.resilience.retry.messages import (
    DelayedMessage,
    NoOp,
    OperationFailed,
    RetryMessage,
    RetryRequest,
    ReturnMessage,
)
from mp_retry.resilience.retry.state import RetryConfig, RetryState
from mp_retry.resilience.retry.timer import TimerService

M = TypeVar("M")
F = TypeVar("F")
E = TypeVar("E")
logger = logging.getLogger(__name__)


class Transition(NamedTuple):
    """Result of one :func:`handle_message` call."""

    state: RetryState[Any]
    schedule: DelayedMessage | None = None
    emit: Any = None


class _FailureSink(Generic[M, F, E]):
    """Stands in for the caller's failure callback inside the built operation."""

    def __init__(
        self,
        flight_id: str,
        route_back: Callable[[RetryMessage], Any],
        failure_tagger: Callable[[F], M],
        retry_tagger: Callable[[RetryRequest[F, E]], M],
    ) -> None:
        self._flight_id = flight_id
        self._route_back = route_back
        self._failure_tagger = failure_tagger
        self._retry_tagger = retry_tagger
        self.operation: E | None = None

    def __call__(self, failure: F) -> Any:
        return self._route_back(
            OperationFailed(
                flight_id=self._flight_id,
                failure=failure,
                operation=self.operation,
                failure_tagger=self._failure_tagger,
                retry_tagger=self._retry_tagger,
            )
        )


def retry(
    route_back: Callable[[RetryMessage], Any],
    failure_tagger: Callable[[F], M],
    retry_tagger: Callable[[RetryRequest[F, E]], M],
    operation_builder: Callable[[Callable[[F], Any]], E],
) -> tuple[RetryState[E], E]:
    """Start a new flight and return its initial state with the operation to launch.

    *operation_builder* receives the sink to report failures through; the
    caller never passes *failure_tagger* to the operation directly.
    """
    state: RetryState[E] = RetryState()
    sink: _FailureSink[M, F, E] = _FailureSink(state.flight_id, route_back, failure_tagger, retry_tagger)
    operation = operation_builder(sink)
    sink.operation = operation
    logger.debug("retry.flight_started flight=%s", state.flight_id)
    return dataclasses.replace(state, pending_operation=operation), operation


def handle_message(config: RetryConfig, state: RetryState[E], message: RetryMessage) -> Transition:
    """Apply *message* to *state*."""
    if isinstance(message, NoOp):
        return Transition(state)

    if isinstance(message, ReturnMessage):
        if state.concluded or (message.flight_id is not None and message.flight_id != state.flight_id):
            logger.debug("retry.stale_return flight=%s", message.flight_id)
            return Transition(state)
        return Transition(state, emit=message.message)

    if isinstance(message, OperationFailed):
        if state.concluded or message.flight_id != state.flight_id:
            logger.debug("retry.stale_failure flight=%s", message.flight_id)
            return Transition(state)
        return _on_failure(config, state, message)

    raise UnknownRetryMessageError(message)


def _on_failure(config: RetryConfig, state: RetryState[E], message: OperationFailed[Any, Any, Any]) -> Transition:
    operation = message.operation if message.operation is not None else state.pending_operation

    if state.attempt > config.max_retries:
        logger.info(
            "retry.exhausted flight=%s retries=%d", state.flight_id, state.retries_performed,
        )
        return Transition(state.conclude(), emit=message.failure_tagger(message.failure))

    delay = config.delay_for_attempt(state.attempt)
    request = RetryRequest(attempt=state.attempt, failure=message.failure, operation=operation)
    logger.debug(
        "retry.scheduled flight=%s attempt=%d/%d delay=%.3fs",
        state.flight_id, state.attempt, config.max_retries, delay,
    )
    scheduled = DelayedMessage(
        delay=delay,
        message=ReturnMessage(message.retry_tagger(request), flight_id=state.flight_id),
    )
    return Transition(state.advance(operation), schedule=scheduled)


class RetryCoordinator(Generic[M, F, E]):
    """Owns the state of one call site and wires transitions to a timer.

    Example::

        coordinator = RetryCoordinator(
            RetryConfig(max_retries=3, delay_for_attempt=exponential_delay(0.5, 8)),
            timer=AsyncioTimerService(),
            emit=host_inbox.put_nowait,
        )
        operation = coordinator.start(FetchFailed, RerunFetch, build_fetch)
        launch(operation)

    ``emit`` receives the terminal ``failure_tagger(failure)`` or, after each
    delay, ``retry_tagger(RetryRequest(...))``.  On the latter the host
    re-launches ``request.operation``.
    """

    def __init__(self, config: RetryConfig, timer: TimerService, emit: Callable[[M], Any]) -> None:
        self._config = config
        self._timer = timer
        self._emit = emit
        self._state: RetryState[E] | None = None

    @property
    def config(self) -> RetryConfig:
        return self._config

    @property
    def state(self) -> RetryState[E] | None:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._state is not None and not self._state.concluded

    def start(
        self,
        failure_tagger: Callable[[F], M],
        retry_tagger: Callable[[RetryRequest[F, E]], M],
        operation_builder: Callable[[Callable[[F], Any]], E],
    ) -> E:
        """Begin a flight; any flight already running on this coordinator is abandoned."""
        self._state, operation = retry(self.dispatch, failure_tagger, retry_tagger, operation_builder)
        return operation

    def dispatch(self, message: RetryMessage) -> None:
        """Host entry point for every message addressed to this coordinator."""
        if self._state is None:
            logger.debug("retry.no_flight message=%s", type(message).__name__)
            return
        transition = handle_message(self._config, self._state, message)
        self._state = transition.state
        if transition.schedule is not None:
            self._timer.schedule(transition.schedule.delay, transition.schedule.message, self.dispatch)
        if transition.emit is not None:
            self._emit(transition.emit)

    def reset(self) -> None:
        """Discard the current flight, e.g. once the host observed success."""
        self._state = None


__all__ = ["RetryCoordinator", "Transition", "handle_message", "retry"]
