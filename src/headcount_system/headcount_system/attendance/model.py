from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..audit.model import AuditEntry
from ..common.coercion import as_dict, as_list, int_or_none, str_or_none


def _present_from_raw(value) -> Optional[int]:
    # Older documents may hold "" or floats for an unfilled count.
    if isinstance(value, bool) or value is None or value == "":
        return None
    if isinstance(value, float):
        count = int(value) if math.isfinite(value) else None
    elif isinstance(value, int):
        count = value
    else:
        try:
            count = int(str(value).strip())
        except ValueError:
            return None
    return count if count is not None and count >= 0 else None


@dataclass(frozen=True)
class AttendanceRow:
    """One designation's headcount within an area on a date."""

    designation_key: str
    designation_label: str
    present: Optional[int] = None
    confirmed: bool = False
    updated_at: Optional[int] = None
    updated_by: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "designationKey": self.designation_key,
            "designationLabel": self.designation_label,
            "present": self.present,
            "confirmed": self.confirmed,
            "updatedAt": self.updated_at,
            "updatedBy": self.updated_by,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRow":
        key = str_or_none(data.get("designationKey")) or ""
        label = str_or_none(data.get("designationLabel")) or key
        return cls(
            designation_key=key,
            designation_label=label,
            present=_present_from_raw(data.get("present")),
            confirmed=data.get("confirmed") is True,
            updated_at=int_or_none(data.get("updatedAt")),
            updated_by=str_or_none(data.get("updatedBy")),
        )


@dataclass
class AreaAttendance:
    rows: List[AttendanceRow] = field(default_factory=list)

    def find(self, designation_key: str) -> Optional[AttendanceRow]:
        for row in self.rows:
            if row.designation_key == designation_key:
                return row
        return None

    def index_of(self, designation_key: str) -> int:
        for i, row in enumerate(self.rows):
            if row.designation_key == designation_key:
                return i
        return -1

    def to_dict(self) -> dict:
        return {"rows": [r.to_dict() for r in self.rows]}

    @classmethod
    def from_dict(cls, data: dict) -> "AreaAttendance":
        rows = as_list(as_dict(data).get("rows"))
        return cls(rows=[AttendanceRow.from_dict(r) for r in rows if isinstance(r, dict)])


@dataclass
class DateAttendance:
    """All headcount rows and the audit ring for a single date.

    A transient copy: mutate it, then hand it back to the repository.
    """

    date: str
    areas: Dict[str, AreaAttendance] = field(default_factory=dict)
    audit: List[AuditEntry] = field(default_factory=list)
    updated_at: Optional[int] = None
    updated_by: Optional[str] = None

    def stamp(self, *, at: int, by: str) -> None:
        self.updated_at = at
        self.updated_by = by

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "areas": {name: area.to_dict() for name, area in self.areas.items()},
            "audit": [e.to_dict() for e in self.audit],
            "updatedAt": self.updated_at,
            "updatedBy": self.updated_by,
        }

    @classmethod
    def from_dict(cls, date: str, data: dict) -> "DateAttendance":
        areas = as_dict(data.get("areas"))
        audit = []
        for raw in as_list(data.get("audit")):
            entry = AuditEntry.from_dict(raw) if isinstance(raw, dict) else None
            if entry:
                audit.append(entry)
        return cls(
            date=date,
            areas={name: AreaAttendance.from_dict(a) for name, a in areas.items()},
            audit=audit,
            updated_at=int_or_none(data.get("updatedAt")),
            updated_by=str_or_none(data.get("updatedBy")),
        )


@dataclass(frozen=True)
class AreaTotals:
    total: int
    confirmed_count: int
    row_count: int

    def to_dict(self) -> dict:
        return {"total": self.total, "confirmedCount": self.confirmed_count, "rowCount": self.row_count}
