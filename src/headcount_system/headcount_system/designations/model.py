from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from ..common.coercion import as_dict, str_list


@dataclass
class DesignationHistory:
    """Recency-ordered labels used for autocomplete (newest first)."""

    global_labels: List[str] = field(default_factory=list)
    by_area: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"global": list(self.global_labels), "byArea": {k: list(v) for k, v in self.by_area.items()}}

    @classmethod
    def from_dict(cls, data: dict) -> "DesignationHistory":
        return cls(
            global_labels=str_list(data.get("global")),
            by_area={area: str_list(labels) for area, labels in as_dict(data.get("byArea")).items()},
        )
