"""conftest.py for benchmarks.

``bench_*.py`` files are collected through ``python_files`` in
``pyproject.toml``.
"""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _quiet_retry_logging():
    """Keep debug formatting out of the timed loop."""
    logger = logging.getLogger("mp_retry")
    previous = logger.level
    logger.setLevel(logging.WARNING)
    yield
    logger.setLevel(previous)
