from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Tuple

import pytest

from text_engine.runtime import telemetry
from text_engine.runtime.telemetry import LogSettings
from text_engine.session import TextSession


class RecordingLogger:
    def __init__(self) -> None:
        self.messages: List[Tuple[str, str, dict]] = []
        self.profiled: List[str] = []
        self.components: List[str] = []
        self.context: dict = {}

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiled.append(name)
        yield

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    def _record(self, level: str):
        def log(message: str, pairs: Any) -> None:
            self.messages.append((level, message, dict(pairs)))

        return log

    def __getattr__(self, name: str) -> Any:
        if name.endswith("_with"):
            return self._record(name[: -len("_with")])
        raise AttributeError(name)

    def events(self, level: str | None = None) -> List[str]:
        return [
            message
            for lvl, message, _ in self.messages
            if level is None or lvl == level
        ]


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_mutations_run_inside_session_spans(recorder: RecordingLogger) -> None:
    session = TextSession(name="notes")

    session.apply_edit("hello")
    session.apply_transform("upper")
    session.undo()

    assert recorder.profiled == ["session::edit", "session::transform:upper", "session::undo"]
    assert recorder.components == ["session"] * 3
    assert recorder.context == {}


def test_bad_pattern_emits_a_warning_event(recorder: RecordingLogger) -> None:
    session = TextSession("text")

    result = session.find_and_replace("(", "x")

    assert result.status == "pattern_error"
    assert recorder.events("warning") == ["event::session.pattern_error"]
    _, _, payload = recorder.messages[0]
    assert payload["pattern"] == "("
    assert recorder.profiled == []


def test_failing_listener_is_logged_as_an_error(recorder: RecordingLogger) -> None:
    session = TextSession()

    def explode(state: object) -> None:
        raise OSError("disk full")

    session.subscribe(explode)
    result = session.apply_edit("kept")

    assert result.ok and isinstance(result.error, OSError)
    assert recorder.events("error") == ["event::session.listener_error"]
    assert recorder.messages[0][2]["revision"] == "1"


def test_span_reports_failures_and_clears_context(recorder: RecordingLogger) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("job", component="worker", metadata={"path": "out.csv"}) as handle:
            assert recorder.context == {"path": "out.csv"}
            handle.add_metadata("rows", 3)
            raise RuntimeError("boom")

    level, message, payload = recorder.messages[-1]
    assert (level, message) == ("error", "span::fail")
    assert payload == {
        "span": "job",
        "path": "out.csv",
        "rows": "3",
        "reason": "boom",
        "component": "worker",
    }
    assert recorder.context == {}


def test_log_settings_from_env() -> None:
    settings = LogSettings.from_env(
        {
            "TEXT_ENGINE_LOG_LEVEL": "debug",
            "TEXT_ENGINE_DISABLE_CONSOLE": "yes",
            "TEXT_ENGINE_LOG_JSON": "1",
            "TEXT_ENGINE_LOG_FILE": "engine.log",
        }
    )

    assert settings == LogSettings(
        level="DEBUG", console=False, color=True, json=True, log_file="engine.log"
    )
    assert LogSettings.from_env({}) == LogSettings()
