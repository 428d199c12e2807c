"""Host-facing entry point: evaluate lifecycle events and deliver the result."""

from __future__ import annotations

import logging

from spawn_notification.adapters.sinks import BroadcastSink, SoundSink
from spawn_notification.config import ConfigStore, NotificationConfig
from spawn_notification.models import Instructions, LifecycleEvent
from spawn_notification.policy import MalformedEventError, NotificationPolicy
from spawn_notification.recipients import PlayerRoster
from spawn_notification.telemetry import LoggingTelemetry, Telemetry


class InstructionDispatcher:
    """Executes an :class:`Instructions` value against the external sinks."""

    def __init__(self, broadcast_sink: BroadcastSink, sound_sink: SoundSink) -> None:
        self._broadcast_sink = broadcast_sink
        self._sound_sink = sound_sink

    def dispatch(self, instructions: Instructions) -> None:
        if instructions.broadcast is not None:
            self._broadcast_sink.broadcast(instructions.broadcast)
        if instructions.sound is not None:
            self._sound_sink.play(instructions.sound)


class SpawnNotificationService:
    """Evaluates each event against the config snapshot current at call time."""

    def __init__(
        self,
        config: ConfigStore | NotificationConfig,
        roster: PlayerRoster,
        dispatcher: InstructionDispatcher,
        *,
        telemetry: Telemetry | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._roster = roster
        self._dispatcher = dispatcher
        self._telemetry = telemetry or LoggingTelemetry()
        self._logger = logger or logging.getLogger("spawn_notification.service")

    @property
    def config(self) -> NotificationConfig:
        if isinstance(self._config, ConfigStore):
            return self._config.current
        return self._config

    def handle(self, event: LifecycleEvent) -> Instructions:
        """Evaluate and deliver one event, returning what was delivered."""
        try:
            instructions = NotificationPolicy(self.config, self._roster).evaluate(event)
        except (MalformedEventError, TypeError):
            self._logger.exception("event_rejected", extra={"event_type": type(event).__name__})
            raise

        if instructions.empty:
            self._logger.debug("event_ignored", extra={"event_type": type(event).__name__})
            return instructions

        self._dispatcher.dispatch(instructions)
        self._telemetry.emit("notification_delivered", _summary(event, instructions))
        return instructions


def _summary(event: LifecycleEvent, instructions: Instructions) -> dict:
    payload: dict = {"event_type": type(event).__name__}
    if instructions.broadcast is not None:
        payload["message_key"] = instructions.broadcast.message.key
        payload["scope"] = instructions.broadcast.scope.value
        payload["recipients"] = [player.name for player in instructions.broadcast.recipients]
    if instructions.sound is not None:
        payload["sound"] = instructions.sound.cue
        payload["sound_delivery"] = instructions.sound.delivery.value
    return payload
