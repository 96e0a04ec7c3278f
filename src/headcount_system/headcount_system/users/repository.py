from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def add(self, user: User) -> None:
        raise NotImplementedError

    def update(self, user: User) -> bool:
        raise NotImplementedError

    def save_all(self, users: Sequence[User]) -> None:
        raise NotImplementedError
