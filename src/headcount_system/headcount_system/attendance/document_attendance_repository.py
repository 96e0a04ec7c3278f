from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from ..common.coercion import int_or_none
from ..database.storage import LedgerStorage
from .model import DateAttendance
from .repository import AttendanceRepository


class DocumentAttendanceRepository(AttendanceRepository):
    """Attendance for every date is a single document keyed by YYYY-MM-DD."""

    def __init__(self, storage: LedgerStorage):
        self._storage = storage

    def get_for_date(self, date_str: str) -> DateAttendance:
        return DateAttendance.from_dict(date_str, self._storage.get_attendance_for_date(date_str))

    def save(self, doc: DateAttendance) -> None:
        self._storage.save_attendance_for_date(doc.date, doc.to_dict())

    def list_dates(self) -> Sequence[str]:
        return sorted(self._storage.get_attendance())

    def delete_dates(self, dates: Iterable[str]) -> int:
        attendance = self._storage.get_attendance()
        deleted = 0
        for date_str in dates:
            if attendance.pop(date_str, None) is not None:
                deleted += 1
        if deleted:
            self._storage.save_attendance(attendance)
        return deleted

    def rename_area(self, old_name: str, new_name: str) -> int:
        attendance = self._storage.get_attendance()
        touched = 0
        for data in attendance.values():
            areas = data.get("areas") if isinstance(data, dict) else None
            if not isinstance(areas, dict) or old_name not in areas:
                continue
            moved = areas[old_name]
            if new_name in areas:
                moved = _merge_area_rows(areas[new_name], moved)
            # Rebuild so the renamed area keeps the old name's position.
            data["areas"] = {
                (new_name if k == old_name else k): (moved if k == old_name else v)
                for k, v in areas.items()
                if k != new_name
            }
            touched += 1
        if touched:
            self._storage.save_attendance(attendance)
        return touched

    def drop_area(self, name: str) -> int:
        attendance = self._storage.get_attendance()
        touched = 0
        for data in attendance.values():
            areas = data.get("areas") if isinstance(data, dict) else None
            if isinstance(areas, dict) and areas.pop(name, None) is not None:
                touched += 1
        if touched:
            self._storage.save_attendance(attendance)
        return touched


def _merge_area_rows(existing: dict, incoming: dict) -> dict:
    """Union of two raw area documents by designationKey.

    On a clash the more recently updated row wins; ties keep `existing`.
    """
    merged: Dict[str, dict] = {}
    order: List[str] = []
    for area_doc in (existing, incoming):
        rows = area_doc.get("rows") if isinstance(area_doc, dict) else None
        for row in rows if isinstance(rows, list) else []:
            if not isinstance(row, dict):
                continue
            key = str(row.get("designationKey") or "")
            if key not in merged:
                order.append(key)
                merged[key] = row
            elif (int_or_none(row.get("updatedAt")) or 0) > (int_or_none(merged[key].get("updatedAt")) or 0):
                merged[key] = row
    return {"rows": [merged[k] for k in order]}
