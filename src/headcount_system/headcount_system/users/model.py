from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..common.coercion import int_or_none, str_list
from ..core.enums import Role


def unique_areas(areas: Iterable[str]) -> tuple[str, ...]:
    seen: list[str] = []
    for area in areas or ():
        if area not in seen:
            seen.append(area)
    return tuple(seen)


@dataclass(frozen=True)
class User:
    """Domain entity: an account allowed to record headcount.

    `assigned_areas` only matters for regular users; admins see every area.
    Accounts are disabled, never deleted.
    """

    username: str
    role: Role
    salt: str
    password_hash: str
    assigned_areas: tuple[str, ...] = ()
    disabled: bool = False
    created_at: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can_access(self, area: str) -> bool:
        return self.is_admin or area in self.assigned_areas

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "role": self.role.value,
            "salt": self.salt,
            "passwordHash": self.password_hash,
            "assignedAreas": list(self.assigned_areas),
            "disabled": self.disabled,
            "createdAt": self.created_at,
        }

    def to_public_dict(self) -> dict:
        return {
            "username": self.username,
            "role": self.role.value,
            "assignedAreas": list(self.assigned_areas),
            "disabled": self.disabled,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            username=str(data["username"]),
            role=Role(data.get("role", Role.USER.value)),
            salt=str(data.get("salt", "")),
            password_hash=str(data.get("passwordHash", "")),
            assigned_areas=unique_areas(str_list(data.get("assignedAreas"))),
            disabled=data.get("disabled") is True,
            created_at=int_or_none(data.get("createdAt")),
        )
