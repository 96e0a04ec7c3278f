from __future__ import annotations

from ..database.storage import LedgerStorage
from .model import SessionState
from .repository import SessionRepository


class DocumentSessionRepository(SessionRepository):
    def __init__(self, storage: LedgerStorage):
        self._storage = storage

    def get(self) -> SessionState:
        return SessionState.from_dict(self._storage.get_session())

    def save(self, state: SessionState) -> None:
        self._storage.save_session(state.to_dict())
