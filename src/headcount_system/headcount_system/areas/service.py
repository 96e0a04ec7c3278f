from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_AREAS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..designations.service import DesignationIndex
from ..users.model import User
from ..users.repository import UserRepository
from .repository import AreaRepository

logger = logging.getLogger(__name__)


def seed_default_areas(areas: AreaRepository) -> bool:
    """Fill an empty area list with the default site areas."""
    if areas.list_all():
        return False
    areas.save_all(list(DEFAULT_AREAS))
    logger.info("Seeded %d default areas", len(DEFAULT_AREAS))
    return True


class AreaService:
    """Use case: maintain the area list.

    Attendance rows and user assignments refer to areas by name, so a rename
    or delete rewrites every document holding that name.
    """

    def __init__(
        self,
        areas: AreaRepository,
        users: UserRepository,
        attendance: AttendanceRepository,
        designations: DesignationIndex,
    ):
        self._areas = areas
        self._users = users
        self._attendance = attendance
        self._designations = designations

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

    def list_areas(self) -> Sequence[str]:
        return list(self._areas.list_all())

    def visible_areas(self, user: User) -> Sequence[str]:
        """All areas for admins, otherwise the user's assignments in list order."""
        areas = self.list_areas()
        if user.is_admin:
            return areas
        return [a for a in areas if a in user.assigned_areas]

    def add_area(self, *, current_role: Role, name: str) -> Sequence[str]:
        self._require_admin(current_role)
        name = require_non_empty(name, "Area name")
        areas = self.list_areas()
        if name in areas:
            raise ValidationError("Area already exists")
        areas.append(name)
        self._areas.save_all(areas)
        return areas

    def delete_area(self, *, current_role: Role, name: str) -> Sequence[str]:
        self._require_admin(current_role)
        areas = self.list_areas()
        if name not in areas:
            raise ValidationError("Area not found")
        areas.remove(name)
        self._areas.save_all(areas)

        self._rewrite_assignments(lambda assigned: tuple(a for a in assigned if a != name))
        dates = self._attendance.drop_area(name)
        logger.info("Deleted area %r (removed from %d date(s))", name, dates)
        return areas

    def rename_area(self, *, current_role: Role, old_name: str, new_name: str) -> Sequence[str]:
        self._require_admin(current_role)
        new_name = require_non_empty(new_name, "Area name")
        areas = self.list_areas()
        if old_name not in areas:
            raise ValidationError("Area not found")
        if new_name == old_name:
            return areas
        if new_name in areas:
            raise ValidationError("Area already exists")

        areas[areas.index(old_name)] = new_name
        self._areas.save_all(areas)

        self._rewrite_assignments(
            lambda assigned: tuple(new_name if a == old_name else a for a in assigned)
        )
        dates = self._attendance.rename_area(old_name, new_name)
        self._designations.rename_area(old_name, new_name)
        logger.info("Renamed area %r to %r (%d date(s) rewritten)", old_name, new_name, dates)
        return areas

    def _rewrite_assignments(self, rewrite) -> None:
        users = list(self._users.list_all())
        changed = False
        for i, user in enumerate(users):
            assigned = rewrite(user.assigned_areas)
            if assigned != user.assigned_areas:
                users[i] = replace(user, assigned_areas=assigned)
                changed = True
        if changed:
            self._users.save_all(users)
