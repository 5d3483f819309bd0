"""Fixtures for streaming tests.

Provides fast controller/supervisor factories, a recording chunk callback and
capture of records emitted on the shared ``gemini`` logger.
"""
from __future__ import annotations

import logging
from typing import List

import pytest

from gemini_client.base.logging import configure_logger, get_logger
from gemini_client.base.streaming import StreamController, StreamSupervisor
from gemini_client.tests.streaming.helpers import Recorder


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture()
def fast_controller():
    """Factory for a controller with no chunk delay and a 5 ms poll."""

    def _make(client, **kwargs) -> StreamController:
        kwargs.setdefault("poll_interval", 0.005)
        kwargs.setdefault("chunk_delay", 0.0)
        return StreamController(client, **kwargs)

    return _make


@pytest.fixture()
def fast_supervisor():
    """Factory for a supervisor whose producer never sleeps between chunks."""

    def _make(client, **kwargs) -> StreamSupervisor:
        kwargs.setdefault("chunk_delay", 0.0)
        return StreamSupervisor(client, **kwargs)

    return _make


@pytest.fixture()
def log_capture():
    """Collect records reaching the shared ``gemini`` logger at DEBUG level."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = lambda record: records.append(record)  # type: ignore
    base = get_logger()
    previous = base.level
    configure_logger(level=logging.DEBUG)
    base.addHandler(handler)
    try:
        yield records
    finally:
        base.removeHandler(handler)
        configure_logger(level=previous)
