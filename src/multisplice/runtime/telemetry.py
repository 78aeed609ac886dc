"""telelog-backed logging for splice and render calls.

Every span is tracked under the ``splicer`` component. Configuration comes
from ``MULTISPLICE_*`` environment variables unless ``configure`` is handed
an explicit ``telelog.Config``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MULTISPLICE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "multisplice")
COMPONENT = "splicer"

_loggers: dict[str, Any] = {}
_config: Any | None = None


def _env_flag(name: str) -> bool:
    return os.getenv(f"{ENV_PREFIX}{name}", "").lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (bytes, tuple, list, dict)) else str(value)


def default_config() -> Any:
    """Build a config from ``LOG_LEVEL`` (default WARNING), ``LOG_FILE``,
    ``LOG_JSON``, ``NO_COLOR``, ``DISABLE_CONSOLE`` and ``PROFILE``."""

    config = tl.Config()
    config.with_min_level(os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper())

    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)

    log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    config.with_profiling(_env_flag("PROFILE"))
    return config


def configure(config: Any | None = None) -> None:
    """Adopt ``config`` (or a fresh ``default_config()``) and drop cached loggers."""

    global _config
    _config = config if config is not None else default_config()
    _loggers.clear()


def get_logger(name: str | None = None) -> Any:
    global _config
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _loggers:
        if _config is None:
            _config = default_config()
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _emit(logger: Any, level: str, message: str, payload: dict[str, Any]) -> None:
    pairs = [(str(key), _text(value)) for key, value in payload.items()]
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, pairs)
        return
    method = getattr(logger, level, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: dict[str, Any] | None = None,
    logger_name: str | None = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` as structured pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here rides along on ``span::fail``."""

    logger: Any
    name: str
    metadata: dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, error: str) -> None:
        payload = {"span": self.name, "component": COMPONENT, **self.metadata}
        payload["error"] = error
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name`` inside the ``splicer`` component.

    ``metadata`` is pushed as logger context for the duration of the block.
    An exception escaping the block emits ``span::fail`` and propagates.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(
        logger=log,
        name=name,
        metadata={key: _text(value) for key, value in (metadata or {}).items()},
    )
    context_keys = list(handle.metadata)

    with ExitStack() as stack:
        stack.enter_context(log.track_component(COMPONENT))
        stack.enter_context(log.profile(name))
        for key in context_keys:
            log.add_context(key, handle.metadata[key])
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context_keys:
                log.remove_context(key)


__all__ = [
    "COMPONENT",
    "SpanHandle",
    "configure",
    "default_config",
    "get_logger",
    "record_event",
    "span",
]
