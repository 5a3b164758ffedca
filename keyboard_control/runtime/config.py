"""Keyboard-control configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from keyboard_control.api.logging import LoggingConfig

_LOG_FORMATS = {"text", "json"}


@dataclass(frozen=True, slots=True)
class KeyboardControlConfig:
    """Immutable dispatch engine configuration."""

    trace_enabled: bool = False
    log_level: str = "INFO"
    log_format: str = "text"
    log_file_path: str | None = None

    def logging_config(self) -> LoggingConfig:
        # Trace records are DEBUG; tracing lowers the package level to match.
        return LoggingConfig(
            level_name="DEBUG" if self.trace_enabled else self.log_level,
            console_format=self.log_format,
            file_path=self.log_file_path,
            file_format="json",
        )


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("KEYBOARD_CONTROL_LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = _text("LOG_LEVEL", default, env=env)
    return value.strip().upper()


def load_keyboard_control_config(*, env: Mapping[str, str] | None = None) -> KeyboardControlConfig:
    """Load immutable configuration from env vars."""
    log_format = _text("KEYBOARD_CONTROL_LOG_FORMAT", "text", env=env).lower()
    if log_format not in _LOG_FORMATS:
        log_format = "text"
    log_file = _text("KEYBOARD_CONTROL_LOG_FILE", "", env=env)
    return KeyboardControlConfig(
        trace_enabled=_flag("KEYBOARD_CONTROL_TRACE_ENABLED", False, env=env),
        log_level=resolve_log_level_name(env=env),
        log_format=log_format,
        log_file_path=log_file or None,
    )
