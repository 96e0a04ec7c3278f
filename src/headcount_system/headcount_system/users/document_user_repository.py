from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..database.storage import LedgerStorage
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class DocumentUserRepository(UserRepository):
    """Users live in one list document; every change rewrites the list."""

    def __init__(self, storage: LedgerStorage):
        self._storage = storage

    def list_all(self) -> Sequence[User]:
        users: list[User] = []
        for raw in self._storage.get_users():
            if not isinstance(raw, dict) or not isinstance(raw.get("username"), str) or not raw["username"]:
                logger.warning("Skipping malformed user record")
                continue
            try:
                users.append(User.from_dict(raw))
            except (TypeError, ValueError):
                logger.warning("Skipping user record %r with unknown role", raw.get("username"))
        return users

    def get_by_username(self, username: str) -> Optional[User]:
        for user in self.list_all():
            if user.username == username:
                return user
        return None

    def add(self, user: User) -> None:
        users = list(self.list_all())
        users.append(user)
        self.save_all(users)

    def update(self, user: User) -> bool:
        users = list(self.list_all())
        for i, existing in enumerate(users):
            if existing.username == user.username:
                users[i] = user
                self.save_all(users)
                return True
        return False

    def save_all(self, users: Sequence[User]) -> None:
        self._storage.save_users([u.to_dict() for u in users])
