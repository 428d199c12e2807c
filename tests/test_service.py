from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from factories import make_creature, make_spawn

from spawn_notification.config import ConfigStore, NotificationConfig
from spawn_notification.models import (
    BroadcastInstruction,
    CapturedEvent,
    CreatureSnapshot,
    SoundInstruction,
)
from spawn_notification.policy import MalformedEventError
from spawn_notification.recipients import StaticRoster
from spawn_notification.service import InstructionDispatcher, SpawnNotificationService


class RecordingSink:
    def __init__(self) -> None:
        self.broadcasts: list[BroadcastInstruction] = []
        self.sounds: list[SoundInstruction] = []

    def broadcast(self, instruction: BroadcastInstruction) -> None:
        self.broadcasts.append(instruction)

    def play(self, instruction: SoundInstruction) -> None:
        self.sounds.append(instruction)


class RecordingTelemetry:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def emit(self, event_name: str, payload: dict) -> None:
        self.events.append((event_name, payload))


def _service(config, sink: RecordingSink, telemetry: RecordingTelemetry | None = None) -> SpawnNotificationService:
    return SpawnNotificationService(
        config,
        StaticRoster(),
        InstructionDispatcher(sink, sink),
        telemetry=telemetry or RecordingTelemetry(),
    )


def test_handle_dispatches_broadcast_and_sound() -> None:
    sink = RecordingSink()
    telemetry = RecordingTelemetry()
    service = _service(NotificationConfig(), sink, telemetry)

    service.handle(make_spawn(make_creature(shiny=True)))

    assert len(sink.broadcasts) == 1
    assert len(sink.sounds) == 1
    name, payload = telemetry.events[0]
    assert name == "notification_delivered"
    assert payload["message_key"] == "spawn_notification.notification.legendary.shiny"
    assert payload["scope"] == "same_dimension"


def test_ignored_event_touches_no_sink() -> None:
    sink = RecordingSink()
    telemetry = RecordingTelemetry()

    result = _service(NotificationConfig(), sink, telemetry).handle(CapturedEvent(make_creature(shiny=True)))

    assert result.empty
    assert sink.broadcasts == [] and sink.sounds == []
    assert telemetry.events == []


def test_service_follows_reloaded_config(tmp_path: Path) -> None:
    path = tmp_path / "spawn_notification.json"
    store = ConfigStore(path)
    sink = RecordingSink()
    service = _service(store, sink)
    event = CapturedEvent(make_creature(legendary=True))

    service.handle(event)
    path.write_text(json.dumps({"broadcastDespawns": True}), encoding="utf-8")
    store.reload()
    service.handle(event)

    assert [b.message.key for b in sink.broadcasts] == ["spawn_notification.notification.captured"]


def test_malformed_event_is_logged_and_raised(caplog: pytest.LogCaptureFixture) -> None:
    creature = CreatureSnapshot(display_name=None)  # type: ignore[arg-type]
    service = _service(NotificationConfig(), RecordingSink())

    with caplog.at_level(logging.ERROR, logger="spawn_notification.service"):
        with pytest.raises(MalformedEventError):
            service.handle(make_spawn(creature))

    assert "event_rejected" in caplog.text
