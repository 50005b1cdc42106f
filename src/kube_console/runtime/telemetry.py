"""Telemetry services built on the standard ``logging`` module.

This module exposes a narrow surface area for the rest of the console:

``configure(...)`` -- override or preset the logging configuration
``get_logger(name)`` -- fetch a logger under the package namespace
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager timing a block and tagging its component
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from rich.logging import RichHandler

ENV_PREFIX = "KUBE_CONSOLE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "kube_console")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_ACTIVE_CONFIG: Optional["TelemetryConfig"] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


@dataclass
class TelemetryConfig:
    """Handler and level settings applied to the package logger."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    log_file: str = ""

    def build_handlers(self) -> list[logging.Handler]:
        handlers: list[logging.Handler] = []
        if self.console:
            if self.colored:
                handlers.append(RichHandler(show_path=False, rich_tracebacks=True))
            else:
                stream = logging.StreamHandler()
                stream.setFormatter(logging.Formatter(_FILE_FORMAT))
                handlers.append(stream)
        if self.log_file:
            file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
            handlers.append(file_handler)
        return handlers


def _build_preset_config(preset: str) -> TelemetryConfig:
    key = preset.lower()
    if key == "development":
        return TelemetryConfig(level="DEBUG", console=True, colored=True)
    if key == "production":
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "kube_console.log"
        return TelemetryConfig(level="INFO", console=False, log_file=log_path)
    if key == "headless":
        # Full-screen hosts own the terminal; only a file sink is safe.
        return TelemetryConfig(
            level=(_env("LOG_LEVEL") or "INFO").upper(),
            console=False,
            log_file=_env("LOG_FILE", DEFAULT_LOG_FILE) or "",
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default_config() -> TelemetryConfig:
    return TelemetryConfig(
        level=(_env("LOG_LEVEL") or "INFO").upper(),
        console=not _env_flag("DISABLE_CONSOLE", False),
        colored=not _env_flag("NO_COLOR", False),
        log_file=_env("LOG_FILE") or DEFAULT_LOG_FILE,
    )


def configure(
    *, config: Optional[TelemetryConfig] = None, preset: Optional[str] = None
) -> TelemetryConfig:
    """Replace the handlers attached to the package logger.

    Parameters
    ----------
    config:
        Explicit ``TelemetryConfig`` instance to adopt.
    preset:
        Named preset (``"development"``, ``"production"``, ``"headless"``).
        ``config`` and ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    handlers = config.build_handlers()
    for handler in handlers:
        root.addHandler(handler)
    if not handlers:
        root.addHandler(logging.NullHandler())
    root.setLevel(config.level)
    root.propagate = not config.console

    _ACTIVE_CONFIG = config
    return config


def active_config() -> Optional[TelemetryConfig]:
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger living under the package namespace."""

    return logging.getLogger(name or DEFAULT_LOGGER_NAME)


def _level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(str(level).upper())
    if not isinstance(number, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return number


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` line with key/value pairs."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    log.log(_level_number(level), "event::%s %s", name, _format_pairs(payload))


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(_level_number(level), "%s %s", message, _format_pairs(payload))

    def fail(self, reason: str) -> None:
        self._emit("error", "span::fail", {"reason": reason})

    def cancel(self, reason: str | None = None) -> None:
        extra = {"reason": reason} if reason else None
        self._emit("warning", "span::cancel", extra)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a code block and log it at debug level.

    Parameters
    ----------
    name:
        Operation name written with every span line.
    logger_name:
        Target logger; defaults to the package logger.
    component:
        If ``True`` use the span name as the component; if a string, use it as
        the component identifier.
    metadata:
        Optional key/value pairs attached to the span lines.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    else:
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        if log.isEnabledFor(logging.DEBUG):
            handle._emit("debug", "span::done", {"elapsed_ms": f"{elapsed_ms:.3f}"})


configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "TelemetryConfig",
    "active_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
