from __future__ import annotations

from collections.abc import Iterable, Sequence


class LabelMatcher:
    """Picks the broadcast label for a creature by configured priority order."""

    def __init__(self, priority: Sequence[str]) -> None:
        self._priority = tuple(priority)

    def match(self, labels: Iterable[str]) -> str | None:
        present = labels if isinstance(labels, (set, frozenset)) else set(labels)
        for label in self._priority:
            if label in present:
                return label
        return None


def match_label(labels: Iterable[str], priority: Sequence[str]) -> str | None:
    return LabelMatcher(priority).match(labels)
