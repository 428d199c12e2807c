"""Live Minecraft command adapter.

Notification commands run against a real game instance through minescript,
while the rest of the package stays testable where the mod is not available.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from typing import Callable

from spawn_notification.adapters.game_command import MinescriptCommand

logger = logging.getLogger("spawn_notification.adapters.minescript")

CommandExecutor = Callable[[str], "str | None"]


class MinescriptUnavailableError(RuntimeError):
    """Raised when minescript is not installed or has no supported command API."""


@dataclass(slots=True)
class MinescriptGameCommandAdapter:
    """Sends commands through the `minescript` module, or an injected executor."""

    command_prefix: str = "/"
    executor: CommandExecutor | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.executor is None:
            self.executor = resolve_minescript_executor()

    def send(self, payload: MinescriptCommand) -> str | None:
        command = payload.command
        if self.command_prefix and not command.startswith(self.command_prefix):
            command = f"{self.command_prefix}{command}"

        logger.debug("minescript_command", extra={"command": command})
        result = self.executor(command)
        return "" if result is None else str(result)


def resolve_minescript_executor() -> CommandExecutor:
    try:
        module = importlib.import_module("minescript")
    except ImportError as exc:
        raise MinescriptUnavailableError(
            "Unable to import minescript. Install it and ensure Minecraft + the mod are running."
        ) from exc

    for attr in ("execute", "run", "command", "chat_command"):
        fn = getattr(module, attr, None)
        if callable(fn):
            return fn

    raise MinescriptUnavailableError(
        "Imported minescript but found no supported API (expected execute/run/command/chat_command)."
    )
