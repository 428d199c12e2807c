"""Terminal preview sink used by the simulator CLI."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from spawn_notification.lang import MessageRenderer
from spawn_notification.models import BroadcastInstruction, RecipientScope, SoundDelivery, SoundInstruction


class ConsoleSink:
    """Prints each instruction with its recipients and the rendered message."""

    def __init__(self, console: Console | None = None, renderer: MessageRenderer | None = None) -> None:
        self._console = console or Console()
        self._renderer = renderer or MessageRenderer()

    def broadcast(self, instruction: BroadcastInstruction) -> None:
        line = Text(f"[{self._audience(instruction)}] ", style="dim")
        line.append_text(self._renderer.render(instruction.message))
        self._console.print(line)

    def play(self, instruction: SoundInstruction) -> None:
        if instruction.delivery is SoundDelivery.CLIENT:
            names = ", ".join(player.name for player in instruction.recipients) or "nobody"
            where = f"for {names}"
        else:
            pos = instruction.position
            where = f"at {pos.x:g} {pos.y:g} {pos.z:g} in {instruction.dimension}"
        self._console.print(Text(f"[sound] {instruction.cue} {where}", style="cyan"))

    @staticmethod
    def _audience(instruction: BroadcastInstruction) -> str:
        if instruction.scope is RecipientScope.EXPLICIT:
            return "to " + (", ".join(player.name for player in instruction.recipients) or "nobody")
        if instruction.scope is RecipientScope.SAME_DIMENSION:
            return f"everyone in {instruction.dimension}"
        return "everyone"
