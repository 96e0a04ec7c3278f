from __future__ import annotations

from ..database.storage import LedgerStorage
from .model import DesignationHistory
from .repository import DesignationHistoryRepository


class DocumentDesignationHistoryRepository(DesignationHistoryRepository):
    def __init__(self, storage: LedgerStorage):
        self._storage = storage

    def get(self) -> DesignationHistory:
        return DesignationHistory.from_dict(self._storage.get_designation_history())

    def save(self, history: DesignationHistory) -> None:
        self._storage.save_designation_history(history.to_dict())
