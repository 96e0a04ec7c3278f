from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_int_in_range
from ..core.constants import MAX_RETENTION_DAYS, MIN_RETENTION_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import Settings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    """Use case: client preferences and attendance retention."""

    def __init__(
        self,
        settings: SettingsRepository,
        attendance: AttendanceRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._settings = settings
        self._attendance = attendance
        self._clock = clock

    def get_settings(self) -> Settings:
        return self._settings.get()

    def set_dark_mode(self, enabled: bool) -> Settings:
        updated = replace(self._settings.get(), dark_mode=bool(enabled))
        self._settings.save(updated)
        return updated

    def set_retention_days(self, *, current_role: Role, days) -> Settings:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
        days = require_int_in_range(days, "retention days", MIN_RETENTION_DAYS, MAX_RETENTION_DAYS)
        updated = replace(self._settings.get(), retention_days=days)
        self._settings.save(updated)
        return updated

    def expired_dates(self, today: Optional[date] = None) -> List[str]:
        """Dates strictly older than today minus the retention window."""
        cutoff = (today or self._clock().date()) - timedelta(days=self._settings.get().retention_days)
        expired = []
        for date_str in self._attendance.list_dates():
            try:
                if parse_iso_date(date_str) < cutoff:
                    expired.append(date_str)
            except ValueError:
                continue
        return expired

    def count_expired_dates(self, today: Optional[date] = None) -> int:
        return len(self.expired_dates(today))

    def purge_expired_dates(self, *, current_role: Role, today: Optional[date] = None) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
        deleted = self._attendance.delete_dates(self.expired_dates(today))
        logger.info("Purged %d expired date(s)", deleted)
        return deleted
