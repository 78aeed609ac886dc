from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

import pytest

from multisplice import OverlapError, Splicer
from multisplice.runtime import telemetry


class RecordingLogger:
    """Stands in for a telelog logger and keeps every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.context: dict[str, str] = {}

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.calls.append(("component", name))
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.calls.append(("profile", name))
        yield

    def debug_with(self, message: str, pairs: list[tuple[str, str]]) -> None:
        self.calls.append(("debug", message, dict(pairs)))

    def warning_with(self, message: str, pairs: list[tuple[str, str]]) -> None:
        self.calls.append(("warning", message, dict(pairs)))

    def error_with(self, message: str, pairs: list[tuple[str, str]]) -> None:
        self.calls.append(("error", message, dict(pairs)))

    def logged(self, level: str) -> list[tuple[str, dict[str, str]]]:
        return [(call[1], call[2]) for call in self.calls if call[0] == level]


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_splice_runs_in_splicer_span(recorder: RecordingLogger) -> None:
    splicer = Splicer("abcdef")
    splicer.splice(1, 3, "xy")

    assert recorder.calls == [
        ("component", "splicer"),
        ("profile", "splicer::splice"),
    ]
    assert recorder.context == {}


@pytest.mark.parametrize(
    ("start", "end", "replacement", "reason"),
    [
        (5, 9, "x", "OutOfRangeError"),
        (4, 2, "x", "InvalidRangeError"),
        (0, 1, b"x", "TypeError"),
    ],
)
def test_rejected_splice_fails_span_with_reason(
    recorder: RecordingLogger, start: int, end: int, replacement: Any, reason: str
) -> None:
    splicer = Splicer("abcdef")

    with pytest.raises((ValueError, TypeError)):
        splicer.splice(start, end, replacement)

    failures = recorder.logged("error")
    assert len(failures) == 1
    message, payload = failures[0]
    assert message == "span::fail"
    assert payload["span"] == "splicer::splice"
    assert payload["component"] == "splicer"
    assert payload["reason"] == reason
    assert payload["start"] == str(start)
    assert recorder.context == {}
    assert len(splicer) == 0


def test_render_records_window_event(recorder: RecordingLogger) -> None:
    splicer = Splicer("abcdef")
    splicer.splice(1, 3, "xy")
    recorder.calls.clear()

    assert splicer.slice(0, 4) == "axyd"

    assert ("profile", "splicer::render") in recorder.calls
    assert recorder.logged("debug") == [
        (
            "event::splicer.render",
            {
                "event": "splicer.render",
                "window": "(0, 4)",
                "edits": "1",
                "borrowed": "False",
            },
        )
    ]


def test_unedited_render_reports_borrowed_original(recorder: RecordingLogger) -> None:
    source = "".join(["ab", "cd"])
    splicer = Splicer(source)

    assert splicer.slice() is source
    assert recorder.logged("debug")[0][1]["borrowed"] == "True"


def test_overlap_records_warning_and_fails_render_span(
    recorder: RecordingLogger,
) -> None:
    splicer = Splicer("abcdef")
    splicer.splice(1, 4, "Z")
    splicer.splice(3, 5, "Q")

    with pytest.raises(OverlapError):
        splicer.slice()

    assert recorder.logged("warning") == [
        (
            "event::splicer.overlap",
            {"event": "splicer.overlap", "first": "(1, 4)", "second": "(3, 5)"},
        )
    ]
    (message, payload), = recorder.logged("error")
    assert message == "span::fail"
    assert payload["span"] == "splicer::render"
    assert payload["conflict"] == "(1, 4)/(3, 5)"
    assert recorder.logged("debug") == []


def test_get_logger_is_cached_per_name() -> None:
    assert telemetry.get_logger("multisplice.cache") is telemetry.get_logger(
        "multisplice.cache"
    )
