"""
mp_retry – single-flight retry coordinator.

Import path convention::

    from mp_retry.resilience.retry import RetryConfig, RetryCoordinator, exponential_delay
    from mp_retry.testing.fakes import ManualTimerService
    from mp_retry.observability.logging import JsonLoggerFactory
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
