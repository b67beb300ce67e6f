"""Kernel – framework-agnostic building blocks."""

from mp_retry.kernel.errors import ApplicationError, BaseError

__all__ = ["ApplicationError", "BaseError"]
