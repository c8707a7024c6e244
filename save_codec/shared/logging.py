"""Shared logging utilities for the codec pipeline."""
from __future__ import annotations

import logging

from ..domain.configuration import LoggingSettings


class TruncatingFormatter(logging.Formatter):
    """Formatter that shortens oversized messages such as payload previews."""

    def __init__(self, fmt: str, settings: LoggingSettings) -> None:
        super().__init__(fmt)
        self._limit = settings.max_message_chars

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - doc inherited
        message = super().format(record)
        if len(message) <= self._limit:
            return message
        return message[: self._limit] + f"... [{len(message) - self._limit} chars truncated]"


def configure_logger(settings: LoggingSettings, level: int = logging.INFO) -> logging.Logger:
    """Configure the package logger once; later calls only adjust the level."""

    logger = logging.getLogger("save_codec")
    logger.setLevel(level)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(TruncatingFormatter(settings.fmt, settings))
    logger.addHandler(handler)
    return logger
