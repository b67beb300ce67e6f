"""Unit tests for RetryCoordinator wired to manual and asyncio timers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

import pytest

from mp_retry.resilience.retry import (
    AsyncioTimerService,
    NoOp,
    RetryConfig,
    RetryCoordinator,
    RetryRequest,
    ReturnMessage,
    TimerService,
    constant_delay,
    exponential_delay,
)
from mp_retry.testing.fakes import ManualTimerService


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FlakyOperation:
    """Fails a set number of times, then succeeds; failures go to the sink."""

    def __init__(self, on_failure: Callable[[Any], Any], failures: int) -> None:
        self.on_failure = on_failure
        self.remaining_failures = failures
        self.runs = 0
        self.succeeded = False

    def run(self) -> None:
        self.runs += 1
        if self.remaining_failures > 0:
            self.remaining_failures -= 1
            self.on_failure(f"fail-{self.runs}")
        else:
            self.succeeded = True


class Host:
    """Minimal host: re-runs the operation whenever the coordinator asks."""

    def __init__(self, config: RetryConfig, timer: TimerService) -> None:
        self.emitted: list[Any] = []
        self.coordinator: RetryCoordinator[Any, Any, FlakyOperation] = RetryCoordinator(
            config, timer, self.on_message
        )

    def on_message(self, message: Any) -> None:
        self.emitted.append(message)
        if isinstance(message, RetryRequest):
            message.operation.run()

    def launch(self, failures: int) -> FlakyOperation:
        operation = self.coordinator.start(
            failure_tagger=lambda error: ("gave_up", error),
            retry_tagger=lambda request: request,
            operation_builder=lambda sink: FlakyOperation(sink, failures),
        )
        operation.run()
        return operation


# ---------------------------------------------------------------------------
# RetryCoordinator + ManualTimerService
# ---------------------------------------------------------------------------


class TestRetryCoordinatorManualTimer:
    def test_success_schedules_and_emits_nothing(self) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=3, delay_for_attempt=constant_delay(1)), timer)
        operation = host.launch(failures=0)
        assert operation.succeeded
        assert timer.history == []
        assert host.emitted == []
        assert host.coordinator.in_flight

    def test_recovers_within_budget(self) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=3, delay_for_attempt=constant_delay(1)), timer)
        operation = host.launch(failures=2)
        timer.fire_all()
        assert operation.succeeded
        assert operation.runs == 3
        assert timer.delays == [1, 1]
        assert not any(isinstance(m, tuple) for m in host.emitted)

    def test_constant_scenario_exhausts(self) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=3, delay_for_attempt=constant_delay(1000)), timer)
        operation = host.launch(failures=10)
        timer.fire_all()
        assert operation.runs == 4
        assert timer.delays == [1000, 1000, 1000]
        assert host.emitted[-1] == ("gave_up", "fail-4")
        assert not host.coordinator.in_flight

    def test_exponential_scenario_exhausts(self) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=2, delay_for_attempt=exponential_delay(500, 4000)), timer)
        operation = host.launch(failures=10)
        timer.fire_all()
        assert operation.runs == 3
        assert timer.delays == [500, 1000]
        assert host.emitted[-1] == ("gave_up", "fail-3")

    def test_zero_retries_forwards_immediately(self) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=0, delay_for_attempt=constant_delay(1)), timer)
        operation = host.launch(failures=1)
        assert operation.runs == 1
        assert timer.history == []
        assert host.emitted == [("gave_up", "fail-1")]

    def test_retry_requests_carry_attempt_and_failure(self) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=2, delay_for_attempt=constant_delay(0)), timer)
        operation = host.launch(failures=2)
        timer.fire_all()
        requests = [m for m in host.emitted if isinstance(m, RetryRequest)]
        assert [(r.attempt, r.failure) for r in requests] == [(1, "fail-1"), (2, "fail-2")]
        assert all(r.operation is operation for r in requests)

    def test_rerun_waits_for_timer(self) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=2, delay_for_attempt=constant_delay(5)), timer)
        operation = host.launch(failures=1)
        assert operation.runs == 1
        assert len(timer.pending) == 1
        timer.fire_next()
        assert operation.runs == 2
        assert operation.succeeded

    def test_timer_firing_after_new_flight_is_ignored(self) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=2, delay_for_attempt=constant_delay(5)), timer)
        stale = host.launch(failures=1)
        fresh = host.launch(failures=0)
        timer.fire_all()
        assert stale.runs == 1
        assert fresh.runs == 1
        assert host.emitted == []
        assert host.coordinator.state.attempt == 1

    def test_dispatch_after_reset_is_noop(self) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=2, delay_for_attempt=constant_delay(5)), timer)
        host.launch(failures=1)
        host.coordinator.reset()
        timer.fire_all()
        assert host.coordinator.state is None
        assert not host.coordinator.in_flight
        assert host.emitted == []

    def test_noop_message(self) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=2, delay_for_attempt=constant_delay(5)), timer)
        host.launch(failures=0)
        before = host.coordinator.state
        host.coordinator.dispatch(NoOp())
        assert host.coordinator.state == before
        assert host.emitted == []

    def test_exhaustion_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        timer = ManualTimerService()
        host = Host(RetryConfig(max_retries=1, delay_for_attempt=constant_delay(0)), timer)
        with caplog.at_level(logging.DEBUG, logger="mp_retry.resilience.retry.coordinator"):
            host.launch(failures=5)
            timer.fire_all()
        messages = [r.getMessage() for r in caplog.records]
        assert any("retry.scheduled" in m for m in messages)
        assert any("retry.exhausted" in m for m in messages)


# ---------------------------------------------------------------------------
# RetryCoordinator + AsyncioTimerService
# ---------------------------------------------------------------------------


class TestRetryCoordinatorAsyncio:
    def test_satisfies_timer_protocol(self) -> None:
        assert isinstance(AsyncioTimerService(), TimerService)
        assert isinstance(ManualTimerService(), TimerService)

    def test_async_operation_retried_until_success(self) -> None:
        async def run() -> tuple[int, list[Any]]:
            timer = AsyncioTimerService()
            outcome: asyncio.Queue[Any] = asyncio.Queue()
            calls = 0

            def build(on_failure: Callable[[Any], Any]) -> Callable[[], Any]:
                async def fetch() -> None:
                    nonlocal calls
                    calls += 1
                    if calls < 3:
                        on_failure(ConnectionError(f"down {calls}"))
                    else:
                        outcome.put_nowait("ok")

                return fetch

            def on_message(message: Any) -> None:
                if isinstance(message, RetryRequest):
                    asyncio.get_running_loop().create_task(message.operation())
                else:
                    outcome.put_nowait(message)

            coordinator: RetryCoordinator[Any, Any, Any] = RetryCoordinator(
                RetryConfig(max_retries=3, delay_for_attempt=constant_delay(0)),
                timer,
                on_message,
            )
            operation = coordinator.start(lambda e: ("gave_up", e), lambda r: r, build)
            await operation()
            result = await asyncio.wait_for(outcome.get(), timeout=2)
            await timer.aclose()
            return calls, [result]

        calls, results = asyncio.run(run())
        assert calls == 3
        assert results == ["ok"]

    def test_async_operation_gives_up(self) -> None:
        async def run() -> Any:
            timer = AsyncioTimerService()
            outcome: asyncio.Queue[Any] = asyncio.Queue()

            def build(on_failure: Callable[[Any], Any]) -> Callable[[], Any]:
                async def fetch() -> None:
                    on_failure("unavailable")

                return fetch

            def on_message(message: Any) -> None:
                if isinstance(message, RetryRequest):
                    asyncio.get_running_loop().create_task(message.operation())
                else:
                    outcome.put_nowait(message)

            coordinator: RetryCoordinator[Any, Any, Any] = RetryCoordinator(
                RetryConfig(max_retries=2, delay_for_attempt=exponential_delay(0.001, 0.01)),
                timer,
                on_message,
            )
            operation = coordinator.start(lambda e: ("gave_up", e), lambda r: r, build)
            await operation()
            return await asyncio.wait_for(outcome.get(), timeout=2)

        assert asyncio.run(run()) == ("gave_up", "unavailable")

    def test_aclose_cancels_pending_timers(self) -> None:
        async def run() -> tuple[int, int, list[Any]]:
            timer = AsyncioTimerService()
            delivered: list[Any] = []
            timer.schedule(60, ReturnMessage("late"), delivered.append)
            pending_before = timer.pending
            await timer.aclose()
            return pending_before, timer.pending, delivered

        before, after, delivered = asyncio.run(run())
        assert before == 1
        assert after == 0
        assert delivered == []

    def test_delivery_error_is_logged_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        async def run() -> None:
            timer = AsyncioTimerService()

            def explode(message: Any) -> None:
                raise RuntimeError("host gone")

            timer.schedule(0, NoOp(), explode)
            await asyncio.sleep(0.01)

        with caplog.at_level(logging.ERROR, logger="mp_retry.resilience.retry.timer"):
            asyncio.run(run())
        assert any("retry.timer_delivery_failed" in r.getMessage() for r in caplog.records)

    def test_schedule_outside_loop_raises(self) -> None:
        with pytest.raises(RuntimeError):
            AsyncioTimerService().schedule(0, NoOp(), lambda m: None)
