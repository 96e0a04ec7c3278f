from __future__ import annotations

from dataclasses import dataclass

from ..common.coercion import int_or_none
from ..core.constants import DEFAULT_RETENTION_DAYS, MAX_RETENTION_DAYS, MIN_RETENTION_DAYS


@dataclass(frozen=True)
class Settings:
    dark_mode: bool = False
    retention_days: int = DEFAULT_RETENTION_DAYS

    def to_dict(self) -> dict:
        return {"darkMode": self.dark_mode, "retentionDays": self.retention_days}

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        retention_days = int_or_none(data.get("retentionDays"))
        if retention_days is None or not MIN_RETENTION_DAYS <= retention_days <= MAX_RETENTION_DAYS:
            retention_days = DEFAULT_RETENTION_DAYS
        return cls(dark_mode=data.get("darkMode") is True, retention_days=retention_days)
