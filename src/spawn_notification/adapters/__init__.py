"""Game command adapters and notification sinks."""

from .console import ConsoleSink
from .game_command import EchoGameCommandAdapter, GameCommandAdapter, MinescriptCommand
from .live_minecraft import MinescriptGameCommandAdapter, MinescriptUnavailableError
from .minecraft_commands import MinecraftCommandSink
from .sinks import BroadcastSink, SoundSink

__all__ = [
    "BroadcastSink",
    "ConsoleSink",
    "EchoGameCommandAdapter",
    "GameCommandAdapter",
    "MinecraftCommandSink",
    "MinescriptCommand",
    "MinescriptGameCommandAdapter",
    "MinescriptUnavailableError",
    "SoundSink",
]
