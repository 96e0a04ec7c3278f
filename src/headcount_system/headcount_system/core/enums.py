from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for area visibility and admin-only actions."""

    ADMIN = "admin"
    USER = "user"


class AuditField(str, Enum):
    """Row fields whose changes are written to the audit ring."""

    PRESENT = "present"
    CONFIRMED = "confirmed"


class AreaStatus(str, Enum):
    """Progress of an area's headcount for one date."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    CONFIRMED = "CONFIRMED"
