from __future__ import annotations

import pytest
from factories import OVERWORLD, make_creature, make_spawn

from spawn_notification.config import NotificationConfig
from spawn_notification.formatting import ChatFormatting
from spawn_notification.models import (
    NO_INSTRUCTIONS,
    SHINY_SOUND_ID,
    LiteralText,
    Position,
    RecipientScope,
    SentOutEvent,
    SoundDelivery,
    TranslatableText,
)
from spawn_notification.policy import MalformedEventError, NotificationPolicy, evaluate
from spawn_notification.recipients import StaticRoster


def _policy(roster=None, **config) -> NotificationPolicy:
    return NotificationPolicy(NotificationConfig(**config), roster or StaticRoster())


def test_player_owned_spawn_is_silent(roster) -> None:
    creature = make_creature(player_owned=True, shiny=True)
    policy = _policy(roster, broadcast_range_enabled=True, broadcast_coords=True)

    assert policy.on_spawn(make_spawn(creature)) == NO_INSTRUCTIONS


def test_shiny_labelled_spawn_selects_label_shiny_key() -> None:
    result = _policy().on_spawn(make_spawn(make_creature(shiny=True)))

    assert result.broadcast is not None
    assert result.broadcast.message.key == "spawn_notification.notification.legendary.shiny"


def test_shiny_broadcast_disabled_falls_back_to_label_key() -> None:
    result = _policy(broadcast_shiny=False).on_spawn(make_spawn(make_creature(shiny=True)))

    assert result.broadcast.message.key == "spawn_notification.notification.legendary"


def test_unlabelled_shiny_uses_shiny_key() -> None:
    creature = make_creature(shiny=True, labels=frozenset({"gen1"}))
    result = _policy().on_spawn(make_spawn(creature))

    assert result.broadcast.message.key == "spawn_notification.notification.shiny"


def test_earlier_configured_label_wins() -> None:
    creature = make_creature(labels=frozenset({"legendary", "mythical"}))
    result = _policy(labels_for_broadcast=["mythical", "legendary"]).on_spawn(make_spawn(creature))

    assert result.broadcast.message.key == "spawn_notification.notification.mythical"


def test_ordinary_spawn_produces_nothing() -> None:
    creature = make_creature(labels=frozenset({"gen1"}))
    assert _policy().on_spawn(make_spawn(creature)).empty


def test_shiny_sound_plays_even_without_broadcast() -> None:
    creature = make_creature(shiny=True, labels=frozenset())
    result = _policy(broadcast_shiny=False).on_spawn(make_spawn(creature))

    assert result.broadcast is None
    assert result.sound is not None
    assert result.sound.delivery is SoundDelivery.WORLD
    assert result.sound.cue == SHINY_SOUND_ID
    assert result.sound.position == Position(10.5, 64.5, -3.5)


def test_shiny_sound_disabled() -> None:
    result = _policy(play_shiny_sound=False).on_spawn(make_spawn(make_creature(shiny=True)))
    assert result.sound is None


def test_display_name_carries_resolved_formatting() -> None:
    policy = _policy(formatting={"legendary.shiny": "gold", "shiny": "aqua"})
    result = policy.on_spawn(make_spawn(make_creature(shiny=True)))

    assert result.broadcast.message.segments[0].args == (LiteralText("Mewtwo", ChatFormatting.GOLD),)


def test_unknown_style_name_keeps_default_formatting() -> None:
    policy = _policy(formatting={"legendary": "rainbow"})
    result = policy.on_spawn(make_spawn())

    assert result.broadcast.message.segments[0].args == (LiteralText("Mewtwo", None),)


def test_coords_and_biome_segments_follow_base_text() -> None:
    result = _policy(broadcast_coords=True, broadcast_biome=True).on_spawn(make_spawn())
    segments = result.broadcast.message.segments

    assert segments[1] == TranslatableText("spawn_notification.notification.coords", (10, 64, -4))
    assert segments[2] == TranslatableText(
        "spawn_notification.notification.biome", (TranslatableText("biome.minecraft.plains"),)
    )
    assert len(segments) == 3


def test_default_scope_is_same_dimension() -> None:
    result = _policy().on_spawn(make_spawn())

    assert result.broadcast.scope is RecipientScope.SAME_DIMENSION
    assert result.broadcast.dimension == OVERWORLD
    assert result.broadcast.recipients == ()


def test_range_limited_broadcast_targets_nearby_players(roster) -> None:
    policy = _policy(roster, broadcast_range_enabled=True, broadcast_range=64)
    result = policy.on_spawn(make_spawn(make_creature(shiny=True)))

    assert result.broadcast.scope is RecipientScope.EXPLICIT
    assert [player.name for player in result.broadcast.recipients] == ["alex", "steve"]
    assert result.sound.delivery is SoundDelivery.CLIENT
    assert result.sound.recipients == result.broadcast.recipients


def test_player_limit_caps_nearest_first(roster) -> None:
    policy = _policy(
        roster,
        broadcast_range_enabled=True,
        broadcast_range=64,
        player_limit_enabled=True,
        player_limit=1,
    )
    result = policy.on_spawn(make_spawn())

    assert [player.name for player in result.broadcast.recipients] == ["steve"]


def test_player_limit_ignored_unless_enabled(roster) -> None:
    policy = _policy(roster, broadcast_range_enabled=True, broadcast_range=64, player_limit=1)
    result = policy.on_spawn(make_spawn())

    assert len(result.broadcast.recipients) == 2


def test_cross_dimension_takes_precedence_over_range(roster) -> None:
    policy = _policy(
        roster,
        announce_cross_dimensions=True,
        broadcast_range_enabled=True,
        broadcast_range=64,
    )
    result = policy.on_spawn(make_spawn(make_creature(shiny=True)))

    assert result.broadcast.scope is RecipientScope.ALL_CROSS_DIMENSION
    assert result.broadcast.recipients == ()
    assert result.broadcast.message.segments[-1] == TranslatableText(
        "spawn_notification.notification.dimension",
        (TranslatableText("dimension.minecraft.overworld"),),
    )
    # The cue still goes to the players in range.
    assert result.sound.delivery is SoundDelivery.CLIENT
    assert [player.name for player in result.sound.recipients] == ["alex", "steve"]


def test_range_with_nobody_nearby_yields_empty_recipient_set() -> None:
    result = _policy(broadcast_range_enabled=True).on_spawn(make_spawn())

    assert result.broadcast.scope is RecipientScope.EXPLICIT
    assert result.broadcast.recipients == ()


def test_same_event_evaluates_identically(roster) -> None:
    config = NotificationConfig(
        broadcast_coords=True,
        broadcast_biome=True,
        broadcast_range_enabled=True,
        player_limit_enabled=True,
        player_limit=2,
        formatting={"shiny": "aqua"},
    )
    event = make_spawn(make_creature(shiny=True))

    assert evaluate(event, config, roster) == evaluate(event, config, roster)


def test_sent_out_shiny_plays_world_sound() -> None:
    creature = make_creature(player_owned=True, shiny=True, position=Position(1.2, 70.0, 3.9))
    result = _policy(play_shiny_sound_player=True).on_sent_out(SentOutEvent(creature))

    assert result.broadcast is None
    assert result.sound.delivery is SoundDelivery.WORLD
    assert result.sound.position == Position(1.5, 70.5, 3.5)
    assert result.sound.dimension == OVERWORLD


def test_sent_out_requires_toggle_and_shiny() -> None:
    shiny = SentOutEvent(make_creature(shiny=True))
    plain = SentOutEvent(make_creature())

    assert _policy().on_sent_out(shiny).empty
    assert _policy(play_shiny_sound_player=True).on_sent_out(plain).empty


def test_sent_out_without_position_is_a_defect() -> None:
    event = SentOutEvent(make_creature(shiny=True, position=None))
    with pytest.raises(MalformedEventError):
        _policy(play_shiny_sound_player=True).on_sent_out(event)


def test_unknown_event_type_is_rejected() -> None:
    with pytest.raises(TypeError):
        _policy().evaluate(object())
