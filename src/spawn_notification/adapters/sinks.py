"""Contracts for the external broadcast and sound side-effect sinks."""

from typing import Protocol

from spawn_notification.models import BroadcastInstruction, SoundInstruction


class BroadcastSink(Protocol):
    """Delivers a composed message to the players named by the instruction's scope."""

    def broadcast(self, instruction: BroadcastInstruction) -> None:
        """Deliver the message; fire-and-forget."""


class SoundSink(Protocol):
    """Plays a sound cue either at a world position or on individual clients."""

    def play(self, instruction: SoundInstruction) -> None:
        """Play the cue; fire-and-forget."""
