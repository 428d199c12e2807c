from __future__ import annotations

from spawn_notification.models import CreatureSnapshot, Position, SpawnEvent

OVERWORLD = "minecraft:overworld"


def make_creature(**overrides) -> CreatureSnapshot:
    values = {
        "display_name": "Mewtwo",
        "labels": frozenset({"legendary"}),
        "position": Position(10.7, 64.2, -3.5),
        "dimension": OVERWORLD,
    }
    values.update(overrides)
    return CreatureSnapshot(**values)


def make_spawn(creature: CreatureSnapshot | None = None, **overrides) -> SpawnEvent:
    creature = creature or make_creature()
    values = {
        "creature": creature,
        "position": Position(10.7, 64.2, -3.5),
        "dimension": OVERWORLD,
        "biome": "minecraft:plains",
    }
    values.update(overrides)
    return SpawnEvent(**values)
