"""Testing support – fakes for driving retry flights without real timers."""

from mp_retry.testing.fakes import ManualTimerService, ScheduledCall

__all__ = ["ManualTimerService", "ScheduledCall"]
