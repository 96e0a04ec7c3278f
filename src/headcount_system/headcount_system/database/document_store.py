from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol


class DocumentKey(str, Enum):
    """Logical documents held by the persistent store.

    Values match the keys written by earlier browser-based installs so their
    backups stay importable.
    """

    SETTINGS = "hc_settings"
    AREAS = "hc_areas"
    USERS = "hc_users"
    SESSION = "hc_session"
    ATTENDANCE = "hc_attendance"
    DESIGNATION_HISTORY = "hc_designation_history"


class DocumentStore(Protocol):
    """Key/value persistence surface.

    Every value is one whole JSON document; there are no partial updates and
    no transactions spanning more than one key.
    """

    def load(self, key: DocumentKey) -> Optional[str]:
        raise NotImplementedError

    def save(self, key: DocumentKey, value: str) -> None:
        raise NotImplementedError
