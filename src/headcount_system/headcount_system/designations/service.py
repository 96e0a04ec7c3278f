from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.constants import MAX_AREA_DESIGNATION_HISTORY, MAX_GLOBAL_DESIGNATION_HISTORY, MAX_SUGGESTIONS
from .repository import DesignationHistoryRepository


def normalize_designation(label: str) -> str:
    """Merge key for designations: trimmed, single-spaced, lower-case."""
    return " ".join(str(label).split()).lower()


def _push_recent(labels: Sequence[str], label: str, cap: int) -> List[str]:
    key = normalize_designation(label)
    kept = [x for x in labels if normalize_designation(x) != key]
    return [label, *kept][:cap]


class DesignationIndex:
    """Recency-ranked autocomplete for designation labels.

    Not authoritative data: losing the history only degrades suggestions.
    """

    def __init__(self, history: DesignationHistoryRepository):
        self._history = history

    def record_usage(self, label: str, area: str) -> None:
        history = self._history.get()
        history.global_labels = _push_recent(history.global_labels, label, MAX_GLOBAL_DESIGNATION_HISTORY)
        history.by_area[area] = _push_recent(history.by_area.get(area, []), label, MAX_AREA_DESIGNATION_HISTORY)
        self._history.save(history)

    def suggest(self, partial: str, area: Optional[str] = None, *, limit: int = MAX_SUGGESTIONS) -> List[str]:
        needle = normalize_designation(partial or "")
        history = self._history.get()

        suggestions: List[str] = []
        seen: set[str] = set()

        def collect(labels: Sequence[str]) -> None:
            for label in labels:
                if len(suggestions) >= limit:
                    return
                key = normalize_designation(label)
                if needle in key and key not in seen:
                    seen.add(key)
                    suggestions.append(label)

        if area:
            collect(history.by_area.get(area, []))
        collect(history.global_labels)
        return suggestions

    def rename_area(self, old_name: str, new_name: str) -> None:
        history = self._history.get()
        if old_name not in history.by_area:
            return
        merged: List[str] = []
        for label in history.by_area.pop(old_name) + history.by_area.get(new_name, []):
            if all(normalize_designation(x) != normalize_designation(label) for x in merged):
                merged.append(label)
        history.by_area[new_name] = merged[:MAX_AREA_DESIGNATION_HISTORY]
        self._history.save(history)
