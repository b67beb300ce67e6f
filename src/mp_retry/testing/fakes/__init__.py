"""Testing fakes – deterministic stand-ins for runtime collaborators."""
from mp_retry.testing.fakes.timer import ManualTimerService, ScheduledCall

__all__ = ["ManualTimerService", "ScheduledCall"]
