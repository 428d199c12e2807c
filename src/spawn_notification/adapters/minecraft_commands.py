"""Renders notification instructions as vanilla ``tellraw`` / ``playsound`` commands."""

from __future__ import annotations

import json
import logging
from typing import Any

from spawn_notification.adapters.game_command import GameCommandAdapter, MinescriptCommand
from spawn_notification.formatting import ChatFormatting
from spawn_notification.models import (
    BroadcastInstruction,
    LiteralText,
    Message,
    RecipientScope,
    SoundDelivery,
    SoundInstruction,
    TranslatableText,
)

logger = logging.getLogger("spawn_notification.adapters.commands")


def text_component(component: Any) -> dict[str, Any]:
    """Convert a message component into Minecraft's JSON text format."""
    if isinstance(component, LiteralText):
        payload: dict[str, Any] = {"text": component.text}
        formatting = component.formatting
        if formatting is not None and formatting is not ChatFormatting.RESET:
            if formatting.is_color:
                payload["color"] = formatting.value
            else:
                payload[formatting.value] = True
        return payload
    if isinstance(component, TranslatableText):
        payload = {"translate": component.key}
        if component.args:
            payload["with"] = [text_component(arg) for arg in component.args]
        return payload
    return {"text": str(component)}


def message_json(message: Message) -> str:
    base, *extra = message.segments
    payload = text_component(base)
    if extra:
        payload["extra"] = [text_component(segment) for segment in extra]
    return json.dumps(payload, separators=(",", ":"))


def _num(value: float) -> str:
    return f"{value:g}"


def broadcast_commands(instruction: BroadcastInstruction) -> list[str]:
    body = message_json(instruction.message)
    scope = instruction.scope
    if scope in (RecipientScope.ALL, RecipientScope.ALL_CROSS_DIMENSION):
        return [f"tellraw @a {body}"]
    if scope is RecipientScope.SAME_DIMENSION:
        # @a with a distance filter only matches players in the executing dimension.
        return [f"execute in {instruction.dimension} run tellraw @a[distance=0..] {body}"]
    return [f"tellraw {player.name} {body}" for player in instruction.recipients]


def sound_commands(instruction: SoundInstruction) -> list[str]:
    tail = f"{_num(instruction.volume)} {_num(instruction.pitch)}"
    if instruction.delivery is SoundDelivery.CLIENT:
        return [
            f"execute as {player.name} at @s run playsound {instruction.cue} {instruction.category} @s ~ ~ ~ {tail}"
            for player in instruction.recipients
        ]
    pos = instruction.position
    return [
        f"execute in {instruction.dimension} run playsound {instruction.cue} {instruction.category} @a "
        f"{_num(pos.x)} {_num(pos.y)} {_num(pos.z)} {tail}"
    ]


class MinecraftCommandSink:
    """Broadcast and sound sink backed by a game command adapter."""

    def __init__(self, adapter: GameCommandAdapter) -> None:
        self._adapter = adapter

    def broadcast(self, instruction: BroadcastInstruction) -> None:
        self._send_all(broadcast_commands(instruction))

    def play(self, instruction: SoundInstruction) -> None:
        self._send_all(sound_commands(instruction))

    def _send_all(self, commands: list[str]) -> None:
        for command in commands:
            self._adapter.send(MinescriptCommand(command=command))
            logger.debug("game_command_sent", extra={"command": command})
