from __future__ import annotations

import pytest
from factories import OVERWORLD

from spawn_notification.models import PlayerInfo, Position
from spawn_notification.recipients import StaticRoster


@pytest.fixture
def roster() -> StaticRoster:
    return StaticRoster(
        [
            PlayerInfo("alex", Position(40.0, 64.0, -3.0), OVERWORLD),
            PlayerInfo("steve", Position(20.0, 64.0, -3.0), OVERWORLD),
            PlayerInfo("faraway", Position(500.0, 64.0, 0.0), OVERWORLD),
            PlayerInfo("netherite", Position(10.0, 64.0, -3.0), "minecraft:the_nether"),
        ]
    )
