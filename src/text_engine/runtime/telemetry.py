"""Structured logging and profiling spans for the text engine, via telelog.

Callers use ``record_event`` for one-off events and ``span`` around a
session operation. The telelog config is built from ``TEXT_ENGINE_*``
environment variables the first time a logger is requested.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TEXT_ENGINE_"
DEFAULT_LOGGER_NAME = "text_engine"
DEFAULT_LEVEL = "WARNING"
_TRUTHY = {"1", "true", "yes", "on"}

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Logging knobs read from the environment."""

    level: str = DEFAULT_LEVEL
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogSettings":
        env = os.environ if environ is None else environ

        def flag(name: str) -> bool:
            return env.get(f"{ENV_PREFIX}{name}", "").lower() in _TRUTHY

        return cls(
            level=(env.get(f"{ENV_PREFIX}LOG_LEVEL") or DEFAULT_LEVEL).upper(),
            console=not flag("DISABLE_CONSOLE"),
            color=not flag("NO_COLOR"),
            json=flag("LOG_JSON"),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        config.with_profiling(True)
        return config


def configure(config: Optional[Any] = None) -> None:
    """Install ``config`` (or one rebuilt from the environment) and drop cached loggers."""

    global _config
    _config = config if config is not None else LogSettings.from_env().build()
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    if _config is None:
        configure()
    key = name or DEFAULT_LOGGER_NAME
    log = _loggers.get(key)
    if log is None:
        log = _loggers[key] = tl.Logger.with_config(key, _config)
    return log


def _text(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _log(log: Any, level: str, message: str, payload: Mapping[str, Any]) -> None:
    pairs = [(str(key), _text(value)) for key, value in payload.items()]
    method = getattr(log, f"{level.lower()}_with", None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'")
    method(message, pairs)


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _log(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            payload["component"] = self.component
        _log(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``; ``metadata`` is logger context while it runs."""

    log = get_logger(logger_name)
    handle = SpanHandle(logger=log, name=name, component=component)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
        log.add_context(key, handle.metadata[key])
    pushed = list(handle.metadata)

    try:
        with ExitStack() as stack:
            if component:
                stack.enter_context(log.track_component(component))
            stack.enter_context(log.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in pushed:
            log.remove_context(key)


__all__ = [
    "LogSettings",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
