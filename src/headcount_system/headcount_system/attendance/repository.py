from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import DateAttendance


class AttendanceRepository(Protocol):
    def get_for_date(self, date_str: str) -> DateAttendance:
        """Stored document for the date, or a fresh empty one (never persisted here)."""

        raise NotImplementedError

    def save(self, doc: DateAttendance) -> None:
        raise NotImplementedError

    def list_dates(self) -> Sequence[str]:
        raise NotImplementedError

    def delete_dates(self, dates: Iterable[str]) -> int:
        raise NotImplementedError

    def rename_area(self, old_name: str, new_name: str) -> int:
        """Move the area key on every date; returns the number of dates touched."""

        raise NotImplementedError

    def drop_area(self, name: str) -> int:
        raise NotImplementedError
