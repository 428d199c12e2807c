"""CLI entrypoint for previewing spawn notifications outside the game."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich import print

from spawn_notification.adapters import (
    ConsoleSink,
    EchoGameCommandAdapter,
    MinecraftCommandSink,
    MinescriptGameCommandAdapter,
    MinescriptUnavailableError,
)
from spawn_notification.config import ConfigError, ConfigStore, settings
from spawn_notification.models import (
    CapturedEvent,
    CreatureEntity,
    CreatureSnapshot,
    DespawnReason,
    EntityUnloadEvent,
    FaintedEvent,
    LifecycleEvent,
    PlayerInfo,
    Position,
    SentOutEvent,
    SpawnEvent,
)
from spawn_notification.recipients import StaticRoster
from spawn_notification.service import InstructionDispatcher, SpawnNotificationService
from spawn_notification.telemetry import configure_logging

app = typer.Typer(help="Spawn notification rules engine")


@app.callback()
def _main(log_level: str = typer.Option(None, help="Override SPAWN_NOTIFICATION_LOG_LEVEL")) -> None:
    try:
        configure_logging(log_level or settings.log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level")


def _build_game_adapter():
    if settings.minecraft_adapter.lower() == "minescript":
        try:
            return MinescriptGameCommandAdapter(command_prefix=settings.minescript_command_prefix)
        except MinescriptUnavailableError as exc:
            print({"warning": str(exc), "fallback": "echo"})
    return EchoGameCommandAdapter()


def _load_store(config_path: str | None) -> ConfigStore:
    try:
        return ConfigStore(config_path or settings.config_path)
    except ConfigError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=2)


def load_roster(path: str | None) -> StaticRoster:
    """Read a JSON list of ``{"name", "x", "y", "z", "dimension"}`` objects."""
    if not path:
        return StaticRoster()
    try:
        entries = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"Cannot read roster file {path}: {exc}")
    return StaticRoster(
        PlayerInfo(
            name=entry["name"],
            position=Position(float(entry["x"]), float(entry["y"]), float(entry["z"])),
            dimension=entry.get("dimension", "minecraft:overworld"),
        )
        for entry in entries
    )


def _run(event: LifecycleEvent, config_path: str | None, roster_file: str | None, minecraft: bool) -> None:
    store = _load_store(config_path)
    adapter = None
    if minecraft:
        adapter = _build_game_adapter()
        sink = MinecraftCommandSink(adapter)
    else:
        sink = ConsoleSink()

    service = SpawnNotificationService(store, load_roster(roster_file), InstructionDispatcher(sink, sink))
    instructions = service.handle(event)
    if instructions.empty:
        print({"notification": None})
    if isinstance(adapter, EchoGameCommandAdapter):
        print({"commands": adapter.sent})


@app.command()
def start() -> None:
    """Show runtime settings."""
    print(settings.model_dump())


@app.command("show-config")
def show_config(config: str = typer.Option(None, help="Notification config JSON file")) -> None:
    """Print the effective notification config, creating the defaults if missing."""
    store = _load_store(config)
    print({"path": str(store.path), "config": store.current.model_dump(by_alias=True)})


@app.command("simulate-spawn")
def simulate_spawn(
    name: str = typer.Option(..., help="Creature display name"),
    label: list[str] = typer.Option(None, "--label", help="Classification label, repeatable"),
    shiny: bool = typer.Option(False, help="Shiny variant"),
    legendary: bool = typer.Option(False, help="Legendary creature"),
    owned: bool = typer.Option(False, help="Player-owned creature"),
    x: float = typer.Option(0.0),
    y: float = typer.Option(64.0),
    z: float = typer.Option(0.0),
    dimension: str = typer.Option("minecraft:overworld"),
    biome: str = typer.Option("minecraft:plains"),
    roster: str = typer.Option(None, help="JSON file with online players"),
    config: str = typer.Option(None, help="Notification config JSON file"),
    minecraft: bool = typer.Option(False, help="Render game commands instead of console text"),
) -> None:
    """Evaluate a spawn event and show what would be announced."""
    position = Position(x, y, z)
    creature = CreatureSnapshot(
        display_name=name,
        player_owned=owned,
        shiny=shiny,
        legendary=legendary,
        labels=frozenset(label or ()),
        position=position,
        dimension=dimension,
    )
    _run(SpawnEvent(creature, position, dimension, biome), config, roster, minecraft)


@app.command("simulate-send")
def simulate_send(
    name: str = typer.Option(..., help="Creature display name"),
    shiny: bool = typer.Option(False, help="Shiny variant"),
    x: float = typer.Option(0.0),
    y: float = typer.Option(64.0),
    z: float = typer.Option(0.0),
    dimension: str = typer.Option("minecraft:overworld"),
    config: str = typer.Option(None, help="Notification config JSON file"),
    minecraft: bool = typer.Option(False, help="Render game commands instead of console text"),
) -> None:
    """Evaluate a player sending a creature out."""
    creature = CreatureSnapshot(
        display_name=name,
        player_owned=True,
        shiny=shiny,
        position=Position(x, y, z),
        dimension=dimension,
    )
    _run(SentOutEvent(creature), config, None, minecraft)


@app.command("simulate-despawn")
def simulate_despawn(
    name: str = typer.Option(..., help="Creature display name"),
    reason: DespawnReason = typer.Option(DespawnReason.DESPAWNED, help="captured/fainted/despawned"),
    shiny: bool = typer.Option(False, help="Shiny variant"),
    legendary: bool = typer.Option(False, help="Legendary creature"),
    owned: bool = typer.Option(False, help="Player-owned creature"),
    config: str = typer.Option(None, help="Notification config JSON file"),
    minecraft: bool = typer.Option(False, help="Render game commands instead of console text"),
) -> None:
    """Evaluate a capture, faint or unload of a creature."""
    creature = CreatureSnapshot(display_name=name, player_owned=owned, shiny=shiny, legendary=legendary)
    if reason is DespawnReason.CAPTURED:
        event: LifecycleEvent = CapturedEvent(creature)
    elif reason is DespawnReason.FAINTED:
        event = FaintedEvent(creature)
    else:
        event = EntityUnloadEvent(CreatureEntity(creature))
    _run(event, config, None, minecraft)


if __name__ == "__main__":
    app()
