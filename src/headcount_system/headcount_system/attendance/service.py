from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional

from ..audit.service import AuditLog
from ..common.datetime_utils import now_local, require_iso_date, to_epoch_ms
from ..common.validators import require_non_empty, require_present_count
from ..core.enums import AreaStatus, AuditField
from ..core.exceptions import ValidationError
from ..designations.service import DesignationIndex, normalize_designation
from ..sessions.service import AuthService
from .model import AreaAttendance, AreaTotals, AttendanceRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = (AuditField.PRESENT.value, AuditField.CONFIRMED.value)


class AttendanceLedger:
    """Per-date, per-area, per-designation headcount rows.

    Mutations need a live session; without one they are silent no-ops and
    return None (or 0). Aggregates take the caller's role-scoped area list.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        auth: AuthService,
        designations: DesignationIndex,
        audit: AuditLog,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._auth = auth
        self._designations = designations
        self._audit = audit
        self._clock = clock

    def get_area(self, date_str: str, area: str) -> AreaAttendance:
        doc = self._attendance.get_for_date(require_iso_date(date_str))
        return doc.areas.get(area) or AreaAttendance()

    def get_row(self, date_str: str, area: str, designation_key: str) -> Optional[AttendanceRow]:
        return self.get_area(date_str, area).find(designation_key)

    def add_or_update_row(self, date_str: str, area: str, label: str) -> Optional[AttendanceRow]:
        user = self._auth.get_current_user()
        if not user:
            return None

        label = require_non_empty(label, "Designation")
        key = normalize_designation(label)
        doc = self._attendance.get_for_date(require_iso_date(date_str))
        area_doc = doc.areas.setdefault(area, AreaAttendance())

        existing = area_doc.find(key)
        if existing:
            return existing

        row = AttendanceRow(designation_key=key, designation_label=label)
        area_doc.rows.append(row)
        self._designations.record_usage(label, area)
        doc.stamp(at=to_epoch_ms(self._clock()), by=user.username)
        self._attendance.save(doc)
        return row

    def update_row(
        self,
        date_str: str,
        area: str,
        designation_key: str,
        updates: Mapping[str, Any],
    ) -> Optional[AttendanceRow]:
        """Apply `present` and/or `confirmed`, auditing each value that changes.

        Setting `confirmed` to True requires a present count; clearing the
        count later leaves an existing confirmation in place.
        """
        unknown = set(updates) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unsupported field(s): {', '.join(sorted(unknown))}")
        changes = dict(updates)
        if "present" in changes:
            changes["present"] = require_present_count(changes["present"])
        if "confirmed" in changes and not isinstance(changes["confirmed"], bool):
            raise ValidationError("Confirmed must be true or false")

        user = self._auth.get_current_user()
        if not user:
            return None

        doc = self._attendance.get_for_date(require_iso_date(date_str))
        area_doc = doc.areas.get(area)
        idx = area_doc.index_of(designation_key) if area_doc else -1
        if idx < 0:
            return None

        row = area_doc.rows[idx]
        new_present = changes.get("present", row.present)
        if changes.get("confirmed") is True and not row.confirmed and new_present is None:
            raise ValidationError("Enter a present count before confirming")

        for field in _UPDATABLE_FIELDS:
            if field in changes and changes[field] != getattr(row, field):
                self._audit.record(
                    doc,
                    user=user.username,
                    area=area,
                    designation_key=designation_key,
                    field=AuditField(field),
                    old_value=getattr(row, field),
                    new_value=changes[field],
                )

        now_ms = to_epoch_ms(self._clock())
        updated = replace(row, **changes, updated_at=now_ms, updated_by=user.username)
        area_doc.rows[idx] = updated
        doc.stamp(at=now_ms, by=user.username)
        self._attendance.save(doc)
        return updated

    def delete_row(self, date_str: str, area: str, designation_key: str) -> bool:
        """Remove a row. Row lifecycle is not audited."""
        doc = self._attendance.get_for_date(require_iso_date(date_str))
        area_doc = doc.areas.get(area)
        idx = area_doc.index_of(designation_key) if area_doc else -1
        if idx < 0:
            return False
        del area_doc.rows[idx]
        self._attendance.save(doc)
        return True

    def clear_areas(self, date_str: str, areas: Iterable[str]) -> int:
        """Delete every row in the given areas; returns how many rows went."""
        doc = self._attendance.get_for_date(require_iso_date(date_str))
        removed = 0
        for area in areas:
            area_doc = doc.areas.get(area)
            if area_doc and area_doc.rows:
                removed += len(area_doc.rows)
                area_doc.rows.clear()
        if removed:
            self._attendance.save(doc)
            logger.info("Cleared %d row(s) on %s", removed, doc.date)
        return removed

    def area_totals(self, date_str: str, area: str) -> AreaTotals:
        rows = self.get_area(date_str, area).rows
        return AreaTotals(
            total=sum(r.present for r in rows if r.present is not None),
            confirmed_count=sum(1 for r in rows if r.confirmed),
            row_count=len(rows),
        )

    def grand_total(self, date_str: str, areas: Iterable[str]) -> int:
        return sum(self.area_totals(date_str, a).total for a in areas)

    def area_status(self, date_str: str, area: str) -> AreaStatus:
        totals = self.area_totals(date_str, area)
        if totals.row_count == 0:
            return AreaStatus.NOT_STARTED
        if totals.confirmed_count == totals.row_count:
            return AreaStatus.CONFIRMED
        return AreaStatus.IN_PROGRESS

    def area_last_updated(self, date_str: str, area: str) -> Optional[int]:
        stamps = [r.updated_at for r in self.get_area(date_str, area).rows if r.updated_at]
        return max(stamps) if stamps else None

    def confirm_all_valid(self, date_str: str, areas: Iterable[str]) -> int:
        """Confirm every unconfirmed row that has a present count."""
        flipped = 0
        for area in areas:
            for row in list(self.get_area(date_str, area).rows):
                if row.confirmed or row.present is None:
                    continue
                if self.update_row(date_str, area, row.designation_key, {"confirmed": True}):
                    flipped += 1
        return flipped
