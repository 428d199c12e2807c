"""Telemetry contract and the logging-backed sink used by default."""

from __future__ import annotations

import logging
from typing import Protocol

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class Telemetry(Protocol):
    """Reports notification outcomes."""

    def emit(self, event_name: str, payload: dict) -> None:
        """Publish telemetry event to the configured sink."""


class LoggingTelemetry:
    """Writes telemetry events to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger("spawn_notification.telemetry")
        self._level = level

    def emit(self, event_name: str, payload: dict) -> None:
        self._logger.log(self._level, event_name, extra={"telemetry": payload})


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler; raises ``ValueError`` for an unknown level name."""
    name = level.upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(level=name, format=LOG_FORMAT)
