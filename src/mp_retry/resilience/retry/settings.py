"""Resilience – environment-driven retry settings.

Example::

    RETRY_MAX_RETRIES=5 RETRY_STRATEGY=constant RETRY_BASE_DELAY=2

    config = EnvSettingsLoader().load(RetrySettings).to_config()
"""
from __future__ import annotations

import dataclasses
import math
from typing import ClassVar

from mp_retry.config.settings import Settings
from mp_retry.config.validation import InvalidSettingValueError
from mp_retry.resilience.retry.delay import DelayPolicy, constant_delay, exponential_delay
from mp_retry.resilience.retry.state import RetryConfig

STRATEGIES = ("constant", "exponential")


@dataclasses.dataclass
class RetrySettings(Settings):
    _prefix: ClassVar[str] = "RETRY"

    max_retries: int = 3
    strategy: str = "exponential"
    base_delay: float = 0.5
    max_delay: float = 30.0

    def _validate(self) -> None:
        if self.max_retries < 0:
            raise InvalidSettingValueError("max_retries", self.max_retries, "must be >= 0")
        if self.strategy not in STRATEGIES:
            raise InvalidSettingValueError(
                "strategy", self.strategy, f"expected one of {', '.join(STRATEGIES)}"
            )
        for name in ("base_delay", "max_delay"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidSettingValueError(name, value, "must be a finite number >= 0")
        if self.max_delay < self.base_delay:
            raise InvalidSettingValueError("max_delay", self.max_delay, "must be >= base_delay")

    def delay_policy(self) -> DelayPolicy:
        if self.strategy == "constant":
            return constant_delay(self.base_delay)
        return exponential_delay(self.base_delay, self.max_delay)

    def to_config(self) -> RetryConfig:
        return RetryConfig(max_retries=self.max_retries, delay_for_attempt=self.delay_policy())


__all__ = ["RetrySettings"]
