"""Tests for chunking and the simulated producer, run synchronously."""
from __future__ import annotations

import math

import pytest

from gemini_client.base.cancellation import CancellationToken
from gemini_client.base.errors import ErrorCode
from gemini_client.base.streaming import (
    ChunkEvent,
    CompleteEvent,
    ErrorEvent,
    StreamRequest,
    chunk_text,
    run_simulated_stream,
)
from gemini_client.tests.streaming.helpers import FakeClient, event_names, upstream_error

REQUEST = StreamRequest(model="gemini-2.0-flash", contents=[{"parts": [{"text": "hi"}]}])


def _run(client, token=None, **kwargs):
    emitted = []
    sleeps = []
    run_simulated_stream(
        client,
        REQUEST,
        emitted.append,
        token or CancellationToken(),
        sleep=sleeps.append,
        **kwargs,
    )
    return emitted, sleeps


@pytest.mark.parametrize("length", [1, 19, 20, 21, 40, 41, 100])
def test_chunk_count_is_ceiling(length):
    text = "x" * length
    chunks = chunk_text(text, 20)
    assert len(chunks) == math.ceil(length / 20)  # nosec B101
    assert "".join(chunks) == text  # nosec B101
    assert all(len(c) <= 20 for c in chunks)  # nosec B101


def test_chunking_counts_code_points_not_bytes():
    text = "é" * 25 + "日本語"
    chunks = chunk_text(text, 20)
    assert [len(c) for c in chunks] == [20, 8]  # nosec B101
    assert "".join(chunks) == text  # nosec B101


def test_empty_or_missing_text_has_no_chunks():
    assert chunk_text("") == []  # nosec B101
    assert chunk_text(None) == []  # nosec B101


def test_chunk_size_must_be_positive():
    with pytest.raises(ValueError):
        chunk_text("abc", 0)


def test_producer_emits_chunks_then_original_response():
    client = FakeClient("Hello world, this is a streaming test.")
    emitted, sleeps = _run(client, chunk_delay=0.05)
    assert [type(e) for e in emitted] == [ChunkEvent, ChunkEvent, CompleteEvent]  # nosec B101
    assert [e.response.text for e in emitted[:2]] == ["Hello world, this is", " a streaming test."]  # nosec B101
    assert emitted[-1].response is client.response  # nosec B101
    assert sleeps == [0.05, 0.05]  # nosec B101
    assert client.calls[0][0] == "gemini-2.0-flash"  # nosec B101


def test_producer_forwards_gemini_error_unchanged():
    err = upstream_error(429, "rate limited")
    emitted, _ = _run(FakeClient(error=err))
    assert len(emitted) == 1  # nosec B101
    assert isinstance(emitted[0], ErrorEvent)  # nosec B101
    assert emitted[0].error is err  # nosec B101


def test_unexpected_exception_becomes_internal_error():
    emitted, _ = _run(FakeClient(error=KeyError("oops")))
    assert isinstance(emitted[0], ErrorEvent)  # nosec B101
    assert emitted[0].error.kind is ErrorCode.INTERNAL  # nosec B101
    assert emitted[0].error.code == 0  # nosec B101


def test_cancelled_token_stops_emission():
    token = CancellationToken()
    emitted = []

    def emit(event):
        emitted.append(event)
        token.cancel("stopped")

    run_simulated_stream(FakeClient("a" * 60), REQUEST, emit, token, chunk_size=20, sleep=lambda _s: None)
    assert len(emitted) == 1  # nosec B101
    assert isinstance(emitted[0], ChunkEvent)  # nosec B101


def test_empty_text_emits_only_completion():
    emitted, sleeps = _run(FakeClient(None))
    assert [type(e) for e in emitted] == [CompleteEvent]  # nosec B101
    assert sleeps == []  # nosec B101


def test_cancel_before_completion_skips_terminal_event(log_capture):
    token = CancellationToken()
    emitted = []

    def sleep(_seconds):
        token.cancel("timeout")

    run_simulated_stream(FakeClient("a" * 20), REQUEST, emitted.append, token, chunk_size=20, sleep=sleep)
    assert [type(e) for e in emitted] == [ChunkEvent]  # nosec B101
    assert "stream.cancelled" in event_names(log_capture)  # nosec B101


def test_pre_cancelled_token_emits_nothing():
    token = CancellationToken()
    token.cancel("stopped")
    emitted, _ = _run(FakeClient("abc"), token=token)
    assert emitted == []  # nosec B101
