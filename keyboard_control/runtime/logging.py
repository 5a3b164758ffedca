"""Logging pipeline for the ``keyboard_control`` package logger.

Handlers are attached to the package logger only, so host applications keep
full control of the root logger. Dispatch trace records carry their key and
state as record attributes; the JSON formatter emits them under ``fields``.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from keyboard_control.api.logging import LoggingConfig
from keyboard_control.runtime.config import KeyboardControlConfig, load_keyboard_control_config

PACKAGE_LOGGER = "keyboard_control"
KEY_TRACE_FIELDS = ("key", "keys", "state", "previous", "action_id")
_HANDLER_PREFIX = "keyboard_control."


class JsonFormatter(logging.Formatter):
    """One JSON object per record with dispatch trace fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {name: getattr(record, name) for name in KEY_TRACE_FIELDS if hasattr(record, name)}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Replace package handlers with console and optional file output."""
    logger = reset_logging()
    console = logging.StreamHandler()
    console.set_name(_HANDLER_PREFIX + "console")
    console.setFormatter(_resolve_formatter(config.console_format))
    logger.addHandler(console)

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.set_name(_HANDLER_PREFIX + "file")
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        logger.addHandler(file_handler)

    logger.setLevel(_level_number(config.level_name))
    logger.propagate = False


def reset_logging() -> logging.Logger:
    """Close handlers installed by ``configure_logging`` and restore propagation."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if (handler.get_name() or "").startswith(_HANDLER_PREFIX):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def setup_logging(config: KeyboardControlConfig | None = None) -> bool:
    """Configure package logging unless the host already set up handlers.

    Returns True when handlers were installed.
    """
    if logging.getLogger().handlers or logging.getLogger(PACKAGE_LOGGER).handlers:
        return False
    resolved = config if config is not None else load_keyboard_control_config()
    configure_logging(resolved.logging_config())
    return True


def _level_number(level_name: str) -> int:
    return logging.getLevelNamesMapping().get(level_name.strip().upper(), logging.INFO)


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
