"""Retry coordinator benchmarks — uses pytest-benchmark.

Run with::

    pytest tests/benchmarks/ -v --benchmark-sort=median

To run as plain functional tests without benchmark overhead::

    pytest tests/benchmarks/ --benchmark-disable
"""
