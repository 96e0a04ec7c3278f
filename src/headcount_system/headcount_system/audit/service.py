from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, List, Optional

from ..attendance.model import DateAttendance
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, require_iso_date, to_epoch_ms
from ..core.constants import MAX_AUDIT_ENTRIES
from ..core.enums import AuditField
from ..sessions.service import AuthService
from .model import AuditEntry


class AuditLog:
    """Per-date ring of the most recent field changes, newest first."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        auth: AuthService,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._auth = auth
        self._clock = clock

    def record(
        self,
        doc: DateAttendance,
        *,
        user: str,
        area: str,
        designation_key: str,
        field: AuditField,
        old_value: Any,
        new_value: Any,
    ) -> AuditEntry:
        """Push an entry onto an already-loaded date document (caller saves it)."""
        entry = AuditEntry(
            ts=to_epoch_ms(self._clock()),
            user=user,
            area=area,
            designation_key=designation_key,
            field=AuditField(field),
            old_value=old_value,
            new_value=new_value,
        )
        doc.audit.insert(0, entry)
        del doc.audit[MAX_AUDIT_ENTRIES:]
        return entry

    def append(
        self,
        date_str: str,
        area: str,
        designation_key: str,
        field: AuditField,
        old_value: Any,
        new_value: Any,
    ) -> Optional[AuditEntry]:
        user = self._auth.get_current_user()
        if not user:
            return None

        doc = self._attendance.get_for_date(require_iso_date(date_str))
        entry = self.record(
            doc,
            user=user.username,
            area=area,
            designation_key=designation_key,
            field=field,
            old_value=old_value,
            new_value=new_value,
        )
        self._attendance.save(doc)
        return entry

    def read(self, date_str: str) -> List[AuditEntry]:
        return list(self._attendance.get_for_date(require_iso_date(date_str)).audit)
