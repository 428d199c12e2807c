"""Spatial recipient selection over the live player roster."""

from __future__ import annotations

import heapq
from collections.abc import Iterable, Sequence
from typing import Protocol

from spawn_notification.models import PlayerInfo, Position


class PlayerRoster(Protocol):
    """Read-only view of the currently connected players."""

    def online_players(self) -> Sequence[PlayerInfo]:
        """Return connected players with their position and dimension."""


class StaticRoster:
    """Fixed roster, used by the CLI simulator and tests."""

    def __init__(self, players: Iterable[PlayerInfo] = ()) -> None:
        self._players = tuple(players)

    def online_players(self) -> Sequence[PlayerInfo]:
        return self._players


class RecipientSelector:
    """Selects players in the same dimension within ``radius`` of an origin.

    Uncapped results keep roster order. With a cap the nearest players are kept,
    nearest first, and equal distances keep roster order.
    """

    def __init__(self, roster: PlayerRoster) -> None:
        self._roster = roster

    def select(
        self,
        dimension: str,
        origin: Position,
        radius: float,
        cap: int | None = None,
    ) -> list[PlayerInfo]:
        in_range: list[tuple[float, PlayerInfo]] = []
        seen: set[str] = set()
        for player in self._roster.online_players():
            if player.name in seen or player.dimension != dimension:
                continue
            distance = player.position.distance_to(origin)
            if distance > radius:
                continue
            seen.add(player.name)
            in_range.append((distance, player))

        if cap is None:
            return [player for _, player in in_range]
        if cap <= 0:
            return []
        nearest = heapq.nsmallest(cap, in_range, key=lambda item: item[0])
        return [player for _, player in nearest]
