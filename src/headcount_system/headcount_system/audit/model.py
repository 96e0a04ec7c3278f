from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..common.coercion import int_or_default, str_or_none
from ..core.enums import AuditField


@dataclass(frozen=True)
class AuditEntry:
    """One field-level change on a ledger row."""

    ts: int
    user: str
    area: str
    designation_key: str
    field: AuditField
    old_value: Any
    new_value: Any

    def to_dict(self) -> dict:
        return {
            "ts": self.ts,
            "user": self.user,
            "area": self.area,
            "designationKey": self.designation_key,
            "field": self.field.value,
            "from": self.old_value,
            "to": self.new_value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Optional["AuditEntry"]:
        try:
            field = AuditField(data.get("field"))
        except (TypeError, ValueError):
            return None
        return cls(
            ts=int_or_default(data.get("ts"), 0),
            user=str_or_none(data.get("user")) or "",
            area=str_or_none(data.get("area")) or "",
            designation_key=str_or_none(data.get("designationKey")) or "",
            field=field,
            old_value=data.get("from"),
            new_value=data.get("to"),
        )
