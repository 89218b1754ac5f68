"""Logging for heks, on top of telelog.

While the viewer runs the terminal belongs to Textual, so records go to
``~/.heks.log`` and the console stays silent unless ``HEKS_LOG_CONSOLE`` is
set. Everything else in the package goes through four calls:

* :func:`configure` picks the active telelog configuration
* :func:`get_logger` returns a cached logger built from it
* :func:`record_event` writes one ``event::<name>`` record
* :func:`span` profiles a block, optionally as a tracked component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "HEKS_"
DEFAULT_LOGGER_NAME = "heks"
DEFAULT_LOG_FILE = str(Path.home() / ".heks.log")
_TRUTHY = {"1", "true", "yes", "on"}


def _getenv(name: str) -> Optional[str]:
    return os.environ.get(ENV_PREFIX + name)


def _flag(name: str, default: bool = False) -> bool:
    raw = _getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def _int(name: str, default: int) -> int:
    raw = _getenv(name)
    if raw is None:
        return default
    try:
        return int(raw, 0)
    except ValueError:
        return default


@dataclass(frozen=True)
class LogSettings:
    level: str = "INFO"
    file: Optional[str] = DEFAULT_LOG_FILE
    console: bool = False
    color: bool = True
    json: bool = False
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls) -> "LogSettings":
        """Read ``HEKS_LOG_*``; an empty ``HEKS_LOG_FILE`` disables the file."""

        log_file = _getenv("LOG_FILE")
        return cls(
            level=(_getenv("LOG_LEVEL") or "INFO").upper(),
            file=DEFAULT_LOG_FILE if log_file is None else log_file,
            console=_flag("LOG_CONSOLE"),
            color=not _flag("NO_COLOR"),
            json=_flag("LOG_JSON"),
            buffered=_flag("LOG_BUFFERED"),
            buffer_size=_int("LOG_BUFFER_SIZE", 2048),
        )


def build_config(settings: LogSettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level.upper())
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.color)
    config.with_json_format(settings.json)
    if settings.file:
        config.with_file_output(settings.file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    return config


PRESETS: Dict[str, LogSettings] = {
    "development": LogSettings(level="DEBUG", file=None, console=True),
    "tui": LogSettings(buffered=True),
    "quiet": LogSettings(level="ERROR", file=None),
}

_config: Optional[Any] = None
_loggers: Dict[str, Any] = {}


def configure(
    settings: Optional[LogSettings] = None,
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    level: Optional[str] = None,
) -> None:
    """Replace the active configuration and drop cached loggers.

    With no arguments the environment decides. ``level`` overrides the level
    of whichever settings end up in use; it has no effect with ``config``.
    """

    global _config
    if sum(arg is not None for arg in (settings, config, preset)) > 1:
        raise ValueError("pass only one of settings, config or preset")

    if config is None:
        if preset is not None:
            try:
                settings = PRESETS[preset.lower()]
            except KeyError:
                raise ValueError(f"Unknown preset '{preset}'.") from None
        settings = settings or LogSettings.from_env()
        if level:
            settings = replace(settings, level=level.upper())
        config = build_config(settings)

    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    if _config is None:
        configure()
    key = name or DEFAULT_LOGGER_NAME
    if key not in _loggers:
        _loggers[key] = tl.Logger.with_config(key, _config)
    return _loggers[key]


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _write(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    # telelog exposes ``<level>_with`` for structured records on most levels.
    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        pairs: List[Tuple[str, str]] = [
            (str(key), _text(value)) for key, value in payload.items()
        ]
        structured(message, pairs)
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _write(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Lets the body of a :func:`span` attach fields to its failure record."""

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
        _write(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``.

    ``component`` tracks the block as a telelog component (``True`` reuses
    ``name``). ``metadata`` becomes logger context while the block runs. An
    exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    handle = SpanHandle(log, name, component_name)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
        log.add_context(key, handle.metadata[key])
    context_keys = list(handle.metadata)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context_keys:
                log.remove_context(key)


configure()
logger = get_logger()

__all__ = [
    "LogSettings",
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "logger",
    "record_event",
    "span",
]
