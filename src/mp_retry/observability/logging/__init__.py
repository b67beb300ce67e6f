"""Observability – structured logging setup."""
from mp_retry.observability.logging.factory import JsonLoggerFactory

__all__ = ["JsonLoggerFactory"]
