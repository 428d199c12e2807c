"""Display-name formatting lookup over the configured formatting table."""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum

_NAME_SANITIZER = re.compile(r"[^a-z]")


class ChatFormatting(str, Enum):
    """Minecraft chat formatting codes, keyed by their lower-case names."""

    BLACK = "black"
    DARK_BLUE = "dark_blue"
    DARK_GREEN = "dark_green"
    DARK_AQUA = "dark_aqua"
    DARK_RED = "dark_red"
    DARK_PURPLE = "dark_purple"
    GOLD = "gold"
    GRAY = "gray"
    DARK_GRAY = "dark_gray"
    BLUE = "blue"
    GREEN = "green"
    AQUA = "aqua"
    RED = "red"
    LIGHT_PURPLE = "light_purple"
    YELLOW = "yellow"
    WHITE = "white"
    OBFUSCATED = "obfuscated"
    BOLD = "bold"
    STRIKETHROUGH = "strikethrough"
    UNDERLINE = "underline"
    ITALIC = "italic"
    RESET = "reset"

    @property
    def is_color(self) -> bool:
        return self not in _MODIFIERS

    @classmethod
    def by_name(cls, name: str | None) -> ChatFormatting | None:
        """Case-insensitive lookup; returns ``None`` for unknown names."""
        if name is None:
            return None
        return _BY_SANITIZED_NAME.get(_NAME_SANITIZER.sub("", name.lower()))


_MODIFIERS = frozenset(
    {
        ChatFormatting.OBFUSCATED,
        ChatFormatting.BOLD,
        ChatFormatting.STRIKETHROUGH,
        ChatFormatting.UNDERLINE,
        ChatFormatting.ITALIC,
        ChatFormatting.RESET,
    }
)
_BY_SANITIZED_NAME = {_NAME_SANITIZER.sub("", member.value): member for member in ChatFormatting}


class FormattingResolver:
    """Resolves the style for a (label, shiny) pair through an ordered fallback chain.

    Candidate keys, first hit wins:

    1. ``"<label>.shiny"`` when shiny, otherwise ``"<label>"``
    2. ``"<label>"`` when shiny
    3. ``"shiny"`` when shiny

    A non-shiny creature only ever consults its bare label key. A hit whose value
    is not a recognised formatting name resolves to ``None`` rather than continuing
    down the chain.
    """

    def __init__(self, table: Mapping[str, str]) -> None:
        self._table = table

    @staticmethod
    def candidate_keys(label: str | None, shiny: bool) -> list[str]:
        keys: list[str] = []
        if label is not None:
            keys.append(f"{label}.shiny" if shiny else label)
            if shiny:
                keys.append(label)
        if shiny:
            keys.append("shiny")
        return keys

    def lookup(self, label: str | None, shiny: bool) -> str | None:
        for key in self.candidate_keys(label, shiny):
            style = self._table.get(key)
            if style is not None:
                return style
        return None

    def resolve(self, label: str | None, shiny: bool) -> ChatFormatting | None:
        return ChatFormatting.by_name(self.lookup(label, shiny))


def resolve_formatting(label: str | None, shiny: bool, table: Mapping[str, str]) -> ChatFormatting | None:
    return FormattingResolver(table).resolve(label, shiny)
