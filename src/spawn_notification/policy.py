"""Decides whether, what, and to whom a creature lifecycle event is announced."""

from __future__ import annotations

import logging

from spawn_notification.config import NotificationConfig
from spawn_notification.formatting import FormattingResolver
from spawn_notification.labels import LabelMatcher
from spawn_notification.models import (
    NO_INSTRUCTIONS,
    SHINY_SOUND_ID,
    BroadcastInstruction,
    CapturedEvent,
    CreatureEntity,
    CreatureSnapshot,
    DespawnReason,
    EntityUnloadEvent,
    FaintedEvent,
    Instructions,
    LifecycleEvent,
    LiteralText,
    Message,
    PlayerInfo,
    Position,
    RecipientScope,
    SentOutEvent,
    SoundDelivery,
    SoundInstruction,
    SpawnEvent,
    TranslatableText,
    notification_key,
    to_translation_key,
)
from spawn_notification.recipients import PlayerRoster, RecipientSelector

logger = logging.getLogger("spawn_notification.policy")


class MalformedEventError(ValueError):
    """Raised when the event source hands over a snapshot missing a required field."""


class NotificationPolicy:
    """Stateless evaluator for one config snapshot and one player roster.

    Every method returns an :class:`Instructions` value and never mutates
    anything, so the same event evaluated twice yields equal results.
    """

    def __init__(self, config: NotificationConfig, roster: PlayerRoster) -> None:
        self._config = config
        self._labels = LabelMatcher(config.labels_for_broadcast)
        self._formatting = FormattingResolver(config.formatting)
        self._selector = RecipientSelector(roster)

    def evaluate(self, event: LifecycleEvent) -> Instructions:
        if isinstance(event, SpawnEvent):
            return self.on_spawn(event)
        if isinstance(event, SentOutEvent):
            return self.on_sent_out(event)
        if isinstance(event, CapturedEvent):
            return self.on_despawn(event.creature, DespawnReason.CAPTURED)
        if isinstance(event, FaintedEvent):
            return self.on_despawn(event.creature, DespawnReason.FAINTED)
        if isinstance(event, EntityUnloadEvent):
            return self.on_unload(event)
        raise TypeError(f"Unsupported lifecycle event: {type(event).__name__}")

    def on_spawn(self, event: SpawnEvent) -> Instructions:
        creature = event.creature
        _require_display_name(creature)
        if creature.player_owned:
            return NO_INSTRUCTIONS

        config = self._config
        nearby: list[PlayerInfo] | None = None
        if config.broadcast_range_enabled:
            nearby = self._selector.select(
                event.dimension, event.position, config.broadcast_range, config.player_cap
            )

        broadcast = self._spawn_broadcast(event, nearby)

        sound = None
        if config.play_shiny_sound and creature.shiny:
            if nearby is not None:
                sound = SoundInstruction(
                    cue=SHINY_SOUND_ID,
                    delivery=SoundDelivery.CLIENT,
                    dimension=event.dimension,
                    recipients=tuple(nearby),
                )
            else:
                sound = _world_sound(event.position, event.dimension)

        return Instructions(broadcast=broadcast, sound=sound)

    def on_sent_out(self, event: SentOutEvent) -> Instructions:
        creature = event.creature
        if not self._config.play_shiny_sound_player or not creature.shiny:
            return NO_INSTRUCTIONS
        if creature.position is None or creature.dimension is None:
            raise MalformedEventError("sent-out creature snapshot has no position or dimension")
        return Instructions(sound=_world_sound(creature.position, creature.dimension))

    def on_despawn(self, creature: CreatureSnapshot, reason: DespawnReason) -> Instructions:
        _require_display_name(creature)
        if not self._config.broadcast_despawns:
            return NO_INSTRUCTIONS
        if creature.player_owned:
            return NO_INSTRUCTIONS
        if not (creature.shiny or creature.legendary):
            return NO_INSTRUCTIONS

        message = Message(
            segments=(TranslatableText(reason.translation_key, (LiteralText(creature.display_name),)),)
        )
        logger.debug("despawn_broadcast", extra={"creature": creature.display_name, "reason": reason.value})
        return Instructions(broadcast=BroadcastInstruction(message=message, scope=RecipientScope.ALL))

    def on_unload(self, event: EntityUnloadEvent) -> Instructions:
        if not isinstance(event.entity, CreatureEntity):
            return NO_INSTRUCTIONS
        return self.on_despawn(event.entity.creature, DespawnReason.DESPAWNED)

    def spawn_message_key(self, matched_label: str | None, shiny: bool) -> str | None:
        """Template key for a spawn, or ``None`` when the spawn is not announced."""
        shiny_broadcast = shiny and self._config.broadcast_shiny
        if matched_label is not None and shiny_broadcast:
            return notification_key(f"{matched_label}.shiny")
        if matched_label is not None:
            return notification_key(matched_label)
        if shiny_broadcast:
            return notification_key("shiny")
        return None

    def _spawn_broadcast(self, event: SpawnEvent, nearby: list[PlayerInfo] | None) -> BroadcastInstruction | None:
        creature = event.creature
        config = self._config

        matched_label = self._labels.match(creature.labels)
        key = self.spawn_message_key(matched_label, creature.shiny)
        if key is None:
            return None

        name = LiteralText(creature.display_name, self._formatting.resolve(matched_label, creature.shiny))
        message = Message(segments=(TranslatableText(key, (name,)),))

        if config.broadcast_coords:
            message = message.append(TranslatableText(notification_key("coords"), event.position.block()))
        if config.broadcast_biome:
            biome = TranslatableText(f"biome.{to_translation_key(event.biome)}")
            message = message.append(TranslatableText(notification_key("biome"), (biome,)))

        if config.announce_cross_dimensions:
            dimension = TranslatableText(f"dimension.{to_translation_key(event.dimension)}")
            message = message.append(TranslatableText(notification_key("dimension"), (dimension,)))
            instruction = BroadcastInstruction(message=message, scope=RecipientScope.ALL_CROSS_DIMENSION)
        elif nearby is not None:
            instruction = BroadcastInstruction(
                message=message,
                scope=RecipientScope.EXPLICIT,
                dimension=event.dimension,
                recipients=tuple(nearby),
            )
        else:
            instruction = BroadcastInstruction(
                message=message, scope=RecipientScope.SAME_DIMENSION, dimension=event.dimension
            )

        logger.debug(
            "spawn_broadcast",
            extra={"creature": creature.display_name, "key": key, "scope": instruction.scope.value},
        )
        return instruction


def evaluate(event: LifecycleEvent, config: NotificationConfig, roster: PlayerRoster) -> Instructions:
    """Evaluate one lifecycle event against a config snapshot."""
    return NotificationPolicy(config, roster).evaluate(event)


def _world_sound(position: Position, dimension: str) -> SoundInstruction:
    return SoundInstruction(
        cue=SHINY_SOUND_ID,
        delivery=SoundDelivery.WORLD,
        position=position.block_center(),
        dimension=dimension,
    )


def _require_display_name(creature: CreatureSnapshot) -> None:
    if creature.display_name is None:
        raise MalformedEventError("creature snapshot has no display name")
