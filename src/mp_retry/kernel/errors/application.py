"""Application-layer errors raised by the library itself."""

from __future__ import annotations

from mp_retry.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Misuse of a library component by the calling application."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
