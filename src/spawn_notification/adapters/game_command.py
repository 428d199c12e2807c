"""Command transport used to deliver rendered notifications to the game."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True)
class MinescriptCommand:
    """One server command line, with or without the leading slash."""

    command: str


class GameCommandAdapter(Protocol):
    """Runs ``tellraw``/``playsound`` lines against a server or client."""

    def send(self, payload: MinescriptCommand) -> str | None:
        """Run the command and return whatever feedback the game printed."""


class EchoGameCommandAdapter:
    """Offline adapter that records commands instead of running them."""

    def __init__(self) -> None:
        self.sent: list[str] = []

    def send(self, payload: MinescriptCommand) -> str:
        self.sent.append(payload.command)
        return f"executed: {payload.command}"
