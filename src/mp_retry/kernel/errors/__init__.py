"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    └── ApplicationError
        ├── ConfigError              (mp_retry.config.validation)
        └── RetryError               (mp_retry.resilience.retry.errors)
"""

from mp_retry.kernel.errors.application import ApplicationError
from mp_retry.kernel.errors.base import BaseError

__all__ = ["ApplicationError", "BaseError"]
