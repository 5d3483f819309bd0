"""End-to-end tests for the polling ``StreamController``."""
from __future__ import annotations

import itertools
import math
import threading
import time

import pytest
from pydantic import ValidationError

from gemini_client.base.errors import ErrorCode, GeminiError
from gemini_client.base.streaming import CompleteEvent, ErrorEvent, StreamController, StreamSupervisor
from gemini_client.tests.streaming.helpers import (
    FakeClient,
    text_response,
    event_names,
    upstream_error,
    wait_for,
)

SCENARIO_TEXT = "Hello world, this is a streaming test."


def test_two_chunk_scenario_returns_original_response(fast_controller, recorder):
    client = FakeClient(SCENARIO_TEXT)
    controller = fast_controller(client)
    result = controller.stream_content("Tell me something", recorder)

    assert recorder.texts == ["Hello world, this is", " a streaming test."]  # nosec B101
    assert "".join(recorder.texts) == SCENARIO_TEXT  # nosec B101
    assert result is client.response  # nosec B101
    assert result.text == SCENARIO_TEXT  # nosec B101
    assert controller.supervisor.active_sessions() == []  # nosec B101


def test_upstream_failure_passes_through_unchanged(fast_controller, recorder, log_capture):
    err = upstream_error(429, "rate limited")
    controller = fast_controller(FakeClient(error=err))
    with pytest.raises(GeminiError) as info:
        controller.stream_content("hi", recorder)

    assert info.value is err  # nosec B101
    assert info.value.kind is ErrorCode.RATE_LIMIT  # nosec B101
    assert info.value.code == 429  # nosec B101
    assert info.value.message == "rate limited"  # nosec B101
    assert recorder.chunks == []  # nosec B101
    names = event_names(log_capture)
    assert "stream.error" in names  # nosec B101
    assert "stream.end" not in names  # nosec B101
    assert controller.supervisor.active_sessions() == []  # nosec B101


def test_timeout_raises_408_and_discards_the_session(fast_controller, recorder, log_capture):
    gate = threading.Event()
    controller = fast_controller(FakeClient("late text arriving after the deadline", gate=gate))
    with pytest.raises(GeminiError) as info:
        controller.stream_content("hi", recorder, timeout_ms=30)

    assert info.value.kind is ErrorCode.TIMEOUT  # nosec B101
    assert info.value.code == 408  # nosec B101
    assert info.value.message == "Streaming timed out"  # nosec B101
    assert info.value.details is None  # nosec B101
    assert controller.supervisor.active_sessions() == []  # nosec B101
    assert "stream.timeout" in event_names(log_capture)  # nosec B101

    # The producer wakes up later and must not deliver anything.
    gate.set()
    time.sleep(0.05)
    assert recorder.chunks == []  # nosec B101


def test_timeout_with_deterministic_clock():
    gate = threading.Event()
    ticks = itertools.count()
    sleeps = []
    controller = StreamController(
        FakeClient("never seen", gate=gate),
        poll_interval=0.1,
        sleep=sleeps.append,
        clock=lambda: float(next(ticks)),
    )
    try:
        with pytest.raises(GeminiError) as info:
            controller.stream_content("hi", lambda _c: None, timeout_ms=2500)
    finally:
        gate.set()
    assert info.value.code == 408  # nosec B101
    assert sleeps == [0.1, 0.1, 0.1]  # nosec B101


def test_first_poll_waits_one_interval(recorder):
    sleeps = []

    def sleep(seconds):
        sleeps.append(seconds)
        time.sleep(0.002)

    controller = StreamController(FakeClient("abc"), poll_interval=0.25, sleep=sleep, chunk_delay=0.0)
    controller.stream_content("hi", recorder)
    assert sleeps and sleeps[0] == 0.25  # nosec B101


def test_empty_text_never_invokes_callback(fast_controller, recorder):
    client = FakeClient(None)
    result = fast_controller(client).stream_content("hi", recorder)
    assert recorder.chunks == []  # nosec B101
    assert result is client.response  # nosec B101
    assert result.text is None  # nosec B101


@pytest.mark.parametrize("length", [1, 20, 21, 59, 60, 61])
def test_callback_count_matches_chunking(fast_controller, recorder, length):
    text = "".join(chr(ord("a") + i % 26) for i in range(length))
    fast_controller(FakeClient(text)).stream_content("hi", recorder)
    assert len(recorder.chunks) == math.ceil(length / 20)  # nosec B101
    assert "".join(recorder.texts) == text  # nosec B101


def test_options_shape_the_request(fast_controller, recorder):
    client = FakeClient("ok")
    tool = {"functionDeclarations": [{"name": "f", "description": "d", "parameters": {}}]}
    fast_controller(client).stream_content(
        ["part one", "part two"],
        recorder,
        model="gemini-custom",
        temperature=0.0,
        max_tokens=64,
        system_instruction="be brief",
        tools=[tool],
    )
    model, contents, params = client.calls[0]
    assert model == "gemini-custom"  # nosec B101
    assert contents == [{"parts": [{"text": "part one"}, {"text": "part two"}]}]  # nosec B101
    assert params["generationConfig"] == {"temperature": 0.0, "maxOutputTokens": 64}  # nosec B101
    assert params["systemInstruction"] == {"parts": [{"text": "be brief"}]}  # nosec B101
    assert params["tools"] == [{"functionDeclarations": tool["functionDeclarations"]}]  # nosec B101


def test_default_model_used_when_not_given(fast_controller, recorder):
    client = FakeClient("ok")
    fast_controller(client).stream_content("hi", recorder)
    assert client.calls[0][0] == "gemini-2.0-flash"  # nosec B101


def test_invalid_options_fail_before_starting(recorder):
    sup = StreamSupervisor(FakeClient("x"), chunk_delay=0.0)
    controller = StreamController(supervisor=sup, poll_interval=0.005)
    with pytest.raises(ValidationError):
        controller.stream_content("hi", recorder, temperature=5.0)
    with pytest.raises(ValidationError):
        controller.stream_content("hi", recorder, not_an_option=1)
    assert sup.active_sessions() == []  # nosec B101


def test_timeout_default_comes_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_STREAM_TIMEOUT_MS", "1234")
    monkeypatch.setenv("GEMINI_STREAM_POLL_SECONDS", "0.02")
    controller = StreamController(FakeClient("x"))
    assert controller._timeout_ms == 1234  # nosec B101
    assert controller._poll_interval == 0.02  # nosec B101


def test_concurrent_streams_are_independent(fast_controller):
    controller = fast_controller(FakeClient("y" * 50))
    results = {}

    def run(name):
        chunks = []
        controller.stream_content(name, chunks.append)
        results[name] = "".join(c.text for c in chunks)

    threads = [threading.Thread(target=run, args=(f"s{i}",)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)
    assert results == {f"s{i}": "y" * 50 for i in range(4)}  # nosec B101
    assert wait_for(lambda: controller.supervisor.active_sessions() == [])  # nosec B101


def _idle_producer(client, request, emit, token, **kwargs):
    """Producer that emits nothing; the test's sleep drives the session."""


@pytest.mark.parametrize(
    "late_event",
    [
        lambda: CompleteEvent(text_response("too late")),
        lambda: ErrorEvent(upstream_error(500, "too late")),
    ],
    ids=["complete", "error"],
)
def test_budget_expiring_during_a_poll_sleep_wins(recorder, late_event):
    sup = StreamSupervisor(FakeClient(), producer=_idle_producer)
    now = [0.0]

    def sleep(_seconds):
        # The session finishes in the same interval that the budget runs out.
        for sid in sup.active_sessions():
            sup.dispatch(sid, late_event())
        now[0] = 10.0

    controller = StreamController(supervisor=sup, poll_interval=0.1, sleep=sleep, clock=lambda: now[0])
    with pytest.raises(GeminiError) as info:
        controller.stream_content("hi", recorder, timeout_ms=100)
    assert info.value.kind is ErrorCode.TIMEOUT  # nosec B101
    assert info.value.code == 408  # nosec B101
    assert sup.active_sessions() == []  # nosec B101


def test_slow_callback_does_not_delay_the_timeout():
    release = threading.Event()

    def slow(_chunk):
        release.wait(1.5)

    controller = StreamController(FakeClient("first chunk then more"), poll_interval=0.005, chunk_delay=0.0)
    started = time.monotonic()
    try:
        with pytest.raises(GeminiError) as info:
            controller.stream_content("hi", slow, timeout_ms=50)
        elapsed = time.monotonic() - started
    finally:
        release.set()
    assert info.value.code == 408  # nosec B101
    assert elapsed < 0.5  # nosec B101
