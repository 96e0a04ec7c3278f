from __future__ import annotations

import json
import logging
from typing import Any, Callable

from ..core.constants import DEFAULT_RETENTION_DAYS
from .document_store import DocumentKey, DocumentStore

logger = logging.getLogger(__name__)


def default_settings() -> dict:
    return {"darkMode": False, "retentionDays": DEFAULT_RETENTION_DAYS}


def default_session() -> dict:
    return {"currentUser": None, "expiresAt": None, "failedLogin": {"count": 0, "cooldownUntil": None}}


def default_designation_history() -> dict:
    return {"global": [], "byArea": {}}


def empty_date_attendance() -> dict:
    return {"areas": {}, "audit": [], "updatedAt": None, "updatedBy": None}


class LedgerStorage:
    """Typed access to the six persisted documents.

    Reads never raise on bad data: a missing, malformed or wrongly shaped
    document is replaced by its default. Callers get a fresh copy on every
    read and must write the whole document back.
    """

    def __init__(self, store: DocumentStore):
        self._store = store

    def _read(self, key: DocumentKey, expected: type, default: Callable[[], Any]) -> Any:
        raw = self._store.load(key)
        if raw is None:
            return default()
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Discarding malformed %s document", key.value)
            return default()
        if not isinstance(value, expected):
            logger.warning("Discarding %s document of type %s", key.value, type(value).__name__)
            return default()
        return value

    def _write(self, key: DocumentKey, value: Any) -> None:
        self._store.save(key, json.dumps(value, ensure_ascii=False))

    def get_settings(self) -> dict:
        settings = default_settings()
        settings.update(self._read(DocumentKey.SETTINGS, dict, default_settings))
        return settings

    def save_settings(self, settings: dict) -> None:
        self._write(DocumentKey.SETTINGS, settings)

    def get_areas(self) -> list:
        return self._read(DocumentKey.AREAS, list, list)

    def save_areas(self, areas: list) -> None:
        self._write(DocumentKey.AREAS, list(areas))

    def get_users(self) -> list:
        return self._read(DocumentKey.USERS, list, list)

    def save_users(self, users: list) -> None:
        self._write(DocumentKey.USERS, list(users))

    def get_session(self) -> dict:
        return self._read(DocumentKey.SESSION, dict, default_session)

    def save_session(self, session: dict) -> None:
        self._write(DocumentKey.SESSION, session)

    def get_attendance(self) -> dict:
        return self._read(DocumentKey.ATTENDANCE, dict, dict)

    def save_attendance(self, attendance: dict) -> None:
        self._write(DocumentKey.ATTENDANCE, attendance or {})

    def get_attendance_for_date(self, date_str: str) -> dict:
        """Stored document for one date, or an empty one (not persisted)."""
        data = self.get_attendance().get(date_str)
        if not isinstance(data, dict):
            return empty_date_attendance()
        return data

    def save_attendance_for_date(self, date_str: str, data: dict) -> None:
        attendance = self.get_attendance()
        attendance[date_str] = data
        self.save_attendance(attendance)

    def get_designation_history(self) -> dict:
        return self._read(DocumentKey.DESIGNATION_HISTORY, dict, default_designation_history)

    def save_designation_history(self, history: dict) -> None:
        self._write(DocumentKey.DESIGNATION_HISTORY, history)
