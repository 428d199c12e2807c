"""Bundled ``en_us`` templates and a renderer for console previews.

In game, the client resolves translation keys itself; this module only exists so
messages can be previewed outside the game.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from rich.style import Style
from rich.text import Text

from spawn_notification.formatting import ChatFormatting
from spawn_notification.models import LiteralText, Message, TranslatableText, notification_key

EN_US: dict[str, str] = {
    notification_key("shiny"): "A shiny %s has spawned!",
    notification_key("legendary"): "A legendary %s has spawned!",
    notification_key("legendary.shiny"): "A shiny legendary %s has spawned!",
    notification_key("mythical"): "A mythical %s has spawned!",
    notification_key("mythical.shiny"): "A shiny mythical %s has spawned!",
    notification_key("ultra_beast"): "An ultra beast %s has spawned!",
    notification_key("ultra_beast.shiny"): "A shiny ultra beast %s has spawned!",
    notification_key("paradox"): "A paradox %s has spawned!",
    notification_key("paradox.shiny"): "A shiny paradox %s has spawned!",
    notification_key("coords"): " at (%s, %s, %s)",
    notification_key("biome"): " in a %s biome",
    notification_key("dimension"): " in %s",
    notification_key("captured"): "%s was captured!",
    notification_key("fainted"): "%s fainted!",
    notification_key("despawned"): "%s has despawned.",
    "dimension.minecraft.overworld": "the Overworld",
    "dimension.minecraft.the_nether": "the Nether",
    "dimension.minecraft.the_end": "the End",
    "biome.minecraft.plains": "Plains",
    "biome.minecraft.forest": "Forest",
    "biome.minecraft.desert": "Desert",
    "biome.minecraft.taiga": "Taiga",
    "biome.minecraft.swamp": "Swamp",
    "biome.minecraft.jungle": "Jungle",
    "biome.minecraft.savanna": "Savanna",
    "biome.minecraft.ocean": "Ocean",
    "biome.minecraft.cherry_grove": "Cherry Grove",
    "biome.minecraft.nether_wastes": "Nether Wastes",
    "biome.minecraft.the_end": "The End",
}

# Vanilla chat palette.
_COLOR_HEX = {
    ChatFormatting.BLACK: "#000000",
    ChatFormatting.DARK_BLUE: "#0000AA",
    ChatFormatting.DARK_GREEN: "#00AA00",
    ChatFormatting.DARK_AQUA: "#00AAAA",
    ChatFormatting.DARK_RED: "#AA0000",
    ChatFormatting.DARK_PURPLE: "#AA00AA",
    ChatFormatting.GOLD: "#FFAA00",
    ChatFormatting.GRAY: "#AAAAAA",
    ChatFormatting.DARK_GRAY: "#555555",
    ChatFormatting.BLUE: "#5555FF",
    ChatFormatting.GREEN: "#55FF55",
    ChatFormatting.AQUA: "#55FFFF",
    ChatFormatting.RED: "#FF5555",
    ChatFormatting.LIGHT_PURPLE: "#FF55FF",
    ChatFormatting.YELLOW: "#FFFF55",
    ChatFormatting.WHITE: "#FFFFFF",
}
_MODIFIER_STYLE = {
    ChatFormatting.BOLD: Style(bold=True),
    ChatFormatting.ITALIC: Style(italic=True),
    ChatFormatting.UNDERLINE: Style(underline=True),
    ChatFormatting.STRIKETHROUGH: Style(strike=True),
    ChatFormatting.OBFUSCATED: Style(reverse=True),
}

_PLACEHOLDER = re.compile(r"%(?:(\d+)\$)?s|%%")


def rich_style(formatting: ChatFormatting | None) -> Style:
    if formatting is None or formatting is ChatFormatting.RESET:
        return Style.null()
    if formatting in _COLOR_HEX:
        return Style(color=_COLOR_HEX[formatting])
    return _MODIFIER_STYLE[formatting]


class MessageRenderer:
    """Substitutes ``%s`` / ``%1$s`` placeholders the way the game client does."""

    def __init__(self, templates: Mapping[str, str] | None = None) -> None:
        self._templates = EN_US if templates is None else templates

    def render(self, message: Message) -> Text:
        out = Text()
        for segment in message.segments:
            self._append(out, segment)
        return out

    def render_plain(self, message: Message) -> str:
        return self.render(message).plain

    def _append(self, out: Text, component: Any) -> None:
        if isinstance(component, LiteralText):
            out.append(component.text, style=rich_style(component.formatting))
        elif isinstance(component, TranslatableText):
            self._append_translatable(out, component)
        else:
            out.append(str(component))

    def _append_translatable(self, out: Text, component: TranslatableText) -> None:
        # Unknown keys render as the raw key, as in game.
        template = self._templates.get(component.key, component.key)
        cursor = 0
        next_arg = 0
        for match in _PLACEHOLDER.finditer(template):
            out.append(template[cursor : match.start()])
            cursor = match.end()
            if match.group(0) == "%%":
                out.append("%")
                continue
            if match.group(1):
                # Positional placeholders do not advance the sequential counter.
                index = int(match.group(1)) - 1
            else:
                index = next_arg
                next_arg += 1
            if 0 <= index < len(component.args):
                self._append(out, component.args[index])
        out.append(template[cursor:])
