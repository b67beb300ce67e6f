"""Observability – logging configuration."""

from mp_retry.observability.logging import JsonLoggerFactory

__all__ = ["JsonLoggerFactory"]
