from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..common.coercion import as_dict, int_or_default, int_or_none, str_or_none


@dataclass(frozen=True)
class FailedLogin:
    """Global failed-attempt throttle, shared by every username."""

    count: int = 0
    cooldown_until: Optional[int] = None

    def is_locked(self, now_ms: int) -> bool:
        return self.cooldown_until is not None and now_ms < self.cooldown_until


@dataclass(frozen=True)
class SessionState:
    """The single active identity of this client instance.

    Timestamps are epoch milliseconds.
    """

    current_user: Optional[str] = None
    expires_at: Optional[int] = None
    failed_login: FailedLogin = field(default_factory=FailedLogin)

    def to_dict(self) -> dict:
        return {
            "currentUser": self.current_user,
            "expiresAt": self.expires_at,
            "failedLogin": {
                "count": self.failed_login.count,
                "cooldownUntil": self.failed_login.cooldown_until,
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionState":
        failed = as_dict(data.get("failedLogin"))
        current_user = str_or_none(data.get("currentUser"))
        expires_at = int_or_none(data.get("expiresAt"))
        if expires_at is None:
            # A login without a readable expiry is treated as logged out.
            current_user = None
        return cls(
            current_user=current_user,
            expires_at=expires_at if current_user else None,
            failed_login=FailedLogin(
                count=max(int_or_default(failed.get("count"), 0), 0),
                cooldown_until=int_or_none(failed.get("cooldownUntil")),
            ),
        )
