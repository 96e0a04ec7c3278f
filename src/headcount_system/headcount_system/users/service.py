from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Sequence

from ..areas.repository import AreaRepository
from ..areas.service import seed_default_areas
from ..common.datetime_utils import now_local, to_epoch_ms
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_ADMIN_PASSWORD_LENGTH, TEMP_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    DuplicateUsernameError,
    UserNotFoundError,
    ValidationError,
)
from .credentials import check_password, generate_salt, generate_temporary_password, hash_password
from .model import User, unique_areas
from .repository import UserRepository

logger = logging.getLogger(__name__)


class CredentialService:
    """Use case: create accounts, verify and reset passwords."""

    def __init__(self, users: UserRepository, *, clock: Callable[[], datetime] = now_local):
        self._users = users
        self._clock = clock

    def create_user(
        self,
        username: str,
        password: str,
        role: Role,
        assigned_areas: Iterable[str] = (),
    ) -> User:
        if self._users.get_by_username(username):
            raise DuplicateUsernameError(username)

        salt = generate_salt()
        user = User(
            username=username,
            role=Role(role),
            salt=salt,
            password_hash=hash_password(password, salt),
            assigned_areas=unique_areas(assigned_areas),
            disabled=False,
            created_at=to_epoch_ms(self._clock()),
        )
        self._users.add(user)
        logger.info("Created %s account %r", user.role.value, username)
        return user

    def verify(self, username: str, password: str) -> bool:
        user = self._users.get_by_username(username)
        if not user or user.disabled:
            return False
        return self.check(user, password)

    @staticmethod
    def check(user: User, password: str) -> bool:
        return check_password(user.password_hash, user.salt, password)

    def reset_password(self, username: str, new_password: str) -> User:
        user = self._users.get_by_username(username)
        if not user:
            raise UserNotFoundError(username)

        salt = generate_salt()
        # Salt and hash change in the same write.
        updated = replace(user, salt=salt, password_hash=hash_password(new_password, salt))
        self._users.update(updated)
        logger.info("Password reset for %r", username)
        return updated

    @staticmethod
    def generate_temporary_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
        return generate_temporary_password(length)


class UserService:
    """Use case: manage users (admin) and the first-run admin bootstrap."""

    def __init__(self, users: UserRepository, areas: AreaRepository, credentials: CredentialService):
        self._users = users
        self._areas = areas
        self._credentials = credentials

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

    def _require_user(self, username: str) -> User:
        user = self._users.get_by_username(username)
        if not user:
            raise UserNotFoundError(username)
        return user

    def _require_known_areas(self, areas: Iterable[str]) -> tuple[str, ...]:
        known = set(self._areas.list_all())
        selected = unique_areas(areas)
        unknown = [a for a in selected if a not in known]
        if unknown:
            raise ValidationError(f"Unknown area(s): {', '.join(unknown)}")
        return selected

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def needs_first_admin(self) -> bool:
        return not any(u.is_admin and not u.disabled for u in self._users.list_all())

    def create_first_admin(self, *, username: str, password: str) -> User:
        if not self.needs_first_admin():
            raise AuthorizationError("Setup already completed")

        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_ADMIN_PASSWORD_LENGTH)

        seed_default_areas(self._areas)

        return self._credentials.create_user(username, password, Role.ADMIN)

    def create_account(
        self,
        *,
        current_role: Role,
        username: str,
        role: Role,
        assigned_areas: Iterable[str] = (),
    ) -> tuple[User, str]:
        """Create an account with a temporary password, returned once and never stored."""
        self._require_admin(current_role)
        username = require_non_empty(username, "Username")
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError("Invalid role")
        areas = self._require_known_areas(assigned_areas)

        temp_password = self._credentials.generate_temporary_password()
        user = self._credentials.create_user(username, temp_password, role, areas)
        return user, temp_password

    def reset_password(self, *, current_role: Role, username: str) -> str:
        self._require_admin(current_role)
        temp_password = self._credentials.generate_temporary_password()
        self._credentials.reset_password(username, temp_password)
        return temp_password

    def toggle_disabled(self, *, current_role: Role, username: str) -> User:
        self._require_admin(current_role)
        user = self._require_user(username)
        updated = replace(user, disabled=not user.disabled)
        self._users.update(updated)
        logger.info("User %r %s", username, "disabled" if updated.disabled else "enabled")
        return updated

    def set_role(self, *, current_role: Role, username: str, role: Role) -> User:
        self._require_admin(current_role)
        user = self._require_user(username)
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError("Invalid role")
        updated = replace(user, role=role)
        self._users.update(updated)
        return updated

    def set_assigned_areas(self, *, current_role: Role, username: str, areas: Iterable[str]) -> User:
        self._require_admin(current_role)
        user = self._require_user(username)
        updated = replace(user, assigned_areas=self._require_known_areas(areas))
        self._users.update(updated)
        return updated
