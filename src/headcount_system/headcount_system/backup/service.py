from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Mapping

from ..common.datetime_utils import now_local, to_epoch_ms
from ..core.constants import BACKUP_VERSION
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InvalidBackupError
from ..database.storage import LedgerStorage

logger = logging.getLogger(__name__)

# payload key -> (expected type, storage writer name)
_SECTIONS = {
    "settings": (dict, "save_settings"),
    "areas": (list, "save_areas"),
    "users": (list, "save_users"),
    "attendance": (dict, "save_attendance"),
    "designationHistory": (dict, "save_designation_history"),
}


class BackupService:
    """Full-state export and wholesale import of the persisted documents.

    The session document is never part of a backup.
    """

    def __init__(self, storage: LedgerStorage, *, clock: Callable[[], datetime] = now_local):
        self._storage = storage
        self._clock = clock

    def export_backup(self) -> dict:
        return {
            "version": BACKUP_VERSION,
            "exportedAt": to_epoch_ms(self._clock()),
            "settings": self._storage.get_settings(),
            "areas": self._storage.get_areas(),
            "users": self._storage.get_users(),
            "attendance": self._storage.get_attendance(),
            "designationHistory": self._storage.get_designation_history(),
        }

    def import_backup(self, *, current_role: Role, payload: Mapping[str, Any]) -> list[str]:
        """Replace each document present in the payload; returns the keys written."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
        if not isinstance(payload, Mapping) or not payload.get("version") or not payload.get("settings"):
            raise InvalidBackupError()

        for key, (expected, _) in _SECTIONS.items():
            if key in payload and not isinstance(payload[key], expected):
                raise InvalidBackupError(f"Invalid backup: {key} must be a {expected.__name__}")

        written = []
        for key, (_, writer) in _SECTIONS.items():
            if key in payload:
                getattr(self._storage, writer)(payload[key])
                written.append(key)
        logger.info("Imported backup version %s (%s)", payload.get("version"), ", ".join(written))
        return written

    def import_backup_json(self, *, current_role: Role, text: str) -> list[str]:
        try:
            payload = json.loads(text)
        except ValueError:
            raise InvalidBackupError("Invalid backup: not valid JSON")
        return self.import_backup(current_role=current_role, payload=payload)
