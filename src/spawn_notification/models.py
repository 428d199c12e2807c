from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from spawn_notification.formatting import ChatFormatting

MOD_ID = "spawn_notification"
SHINY_SOUND_ID = f"{MOD_ID}:pla_shiny"


def notification_key(suffix: str) -> str:
    return f"{MOD_ID}.notification.{suffix}"


def to_translation_key(identifier: str) -> str:
    """Turn ``namespace:path`` into Minecraft's ``namespace.path`` form."""
    namespace, sep, path = identifier.partition(":")
    if not sep:
        namespace, path = "minecraft", identifier
    return f"{namespace}.{path.replace('/', '.')}"


@dataclass(frozen=True, slots=True)
class Position:
    x: float
    y: float
    z: float

    def block(self) -> tuple[int, int, int]:
        return math.floor(self.x), math.floor(self.y), math.floor(self.z)

    def block_center(self) -> Position:
        bx, by, bz = self.block()
        return Position(bx + 0.5, by + 0.5, bz + 0.5)

    def distance_to(self, other: Position) -> float:
        return math.dist((self.x, self.y, self.z), (other.x, other.y, other.z))


@dataclass(frozen=True, slots=True)
class CreatureSnapshot:
    """Read-only view of a creature supplied by the event source."""

    display_name: str
    player_owned: bool = False
    shiny: bool = False
    legendary: bool = False
    labels: frozenset[str] = frozenset()
    position: Position | None = None
    dimension: str | None = None


@dataclass(frozen=True, slots=True)
class PlayerInfo:
    name: str
    position: Position
    dimension: str


class DespawnReason(str, Enum):
    CAPTURED = "captured"
    FAINTED = "fainted"
    DESPAWNED = "despawned"

    @property
    def translation_key(self) -> str:
        return notification_key(self.value)


@dataclass(frozen=True, slots=True)
class SpawnEvent:
    creature: CreatureSnapshot
    position: Position
    dimension: str
    biome: str


@dataclass(frozen=True, slots=True)
class SentOutEvent:
    """A player sent the creature out to the field."""

    creature: CreatureSnapshot


@dataclass(frozen=True, slots=True)
class CapturedEvent:
    creature: CreatureSnapshot


@dataclass(frozen=True, slots=True)
class FaintedEvent:
    creature: CreatureSnapshot


@dataclass(frozen=True, slots=True)
class CreatureEntity:
    """Host game entity that carries a tracked creature."""

    creature: CreatureSnapshot


@dataclass(frozen=True, slots=True)
class EntityUnloadEvent:
    entity: Any


LifecycleEvent = Union[SpawnEvent, SentOutEvent, CapturedEvent, FaintedEvent, EntityUnloadEvent]


@dataclass(frozen=True, slots=True)
class LiteralText:
    text: str
    formatting: ChatFormatting | None = None


@dataclass(frozen=True, slots=True)
class TranslatableText:
    """Template key plus ordered substitution arguments."""

    key: str
    args: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Message:
    """Base text followed by appended annotation segments."""

    segments: tuple[TranslatableText, ...]

    @property
    def key(self) -> str:
        return self.segments[0].key

    def append(self, segment: TranslatableText) -> Message:
        return Message(segments=(*self.segments, segment))


class RecipientScope(str, Enum):
    ALL = "all"
    ALL_CROSS_DIMENSION = "all_cross_dimension"
    SAME_DIMENSION = "same_dimension"
    EXPLICIT = "explicit"


class SoundDelivery(str, Enum):
    WORLD = "world"
    CLIENT = "client"


@dataclass(frozen=True, slots=True)
class BroadcastInstruction:
    message: Message
    scope: RecipientScope
    dimension: str | None = None
    recipients: tuple[PlayerInfo, ...] = ()


@dataclass(frozen=True, slots=True)
class SoundInstruction:
    cue: str
    delivery: SoundDelivery
    position: Position | None = None
    dimension: str | None = None
    recipients: tuple[PlayerInfo, ...] = ()
    category: str = "neutral"
    volume: float = 10.0
    pitch: float = 1.0


@dataclass(frozen=True, slots=True)
class Instructions:
    broadcast: BroadcastInstruction | None = None
    sound: SoundInstruction | None = None

    @property
    def empty(self) -> bool:
        return self.broadcast is None and self.sound is None


NO_INSTRUCTIONS = Instructions()

