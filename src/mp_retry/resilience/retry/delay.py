"""Resilience – delay policies mapping a retry attempt to a wait duration."""
from __future__ import annotations

import abc
import math
from typing import Protocol, runtime_checkable


@runtime_checkable
class DelayPolicy(Protocol):
    """Anything callable as ``policy(attempt) -> seconds``."""

    def __call__(self, attempt: int) -> float: ...


def _check_duration(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a finite number >= 0, got {value}")


class _Delay(abc.ABC):
    """Pure policy: the same *attempt* always yields the same delay."""

    def __call__(self, attempt: int) -> float:
        if attempt < 1:
            raise ValueError(f"attempt must be >= 1, got {attempt}")
        return self.compute(attempt)

    @abc.abstractmethod
    def compute(self, attempt: int) -> float: ...


class ConstantDelay(_Delay):
    """Fixed delay before every retry."""

    def __init__(self, base: float) -> None:
        _check_duration("base", base)
        self.base = base

    def compute(self, attempt: int) -> float:  # noqa: ARG002
        return self.base

    def __repr__(self) -> str:
        return f"ConstantDelay(base={self.base!r})"


class ExponentialDelay(_Delay):
    """Delay doubles per retry, starting at ``base``: ``min(cap, base * 2^(attempt-1))``."""

    def __init__(self, base: float, cap: float) -> None:
        _check_duration("base", base)
        _check_duration("cap", cap)
        self.base = base
        self.cap = cap

    def compute(self, attempt: int) -> float:
        try:
            grown = math.ldexp(self.base, attempt - 1)
        except OverflowError:
            return self.cap
        return min(self.cap, grown)

    def __repr__(self) -> str:
        return f"ExponentialDelay(base={self.base!r}, cap={self.cap!r})"


def constant_delay(base: float) -> ConstantDelay:
    """Return a policy that waits *base* before every retry."""
    return ConstantDelay(base)


def exponential_delay(base: float, cap: float) -> ExponentialDelay:
    """Return a policy waiting *base*, then doubling per retry, clamped at *cap*."""
    return ExponentialDelay(base, cap)


__all__ = [
    "ConstantDelay",
    "DelayPolicy",
    "ExponentialDelay",
    "constant_delay",
    "exponential_delay",
]
