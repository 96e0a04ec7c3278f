from __future__ import annotations

from typing import Sequence

from ..database.storage import LedgerStorage
from .repository import AreaRepository


class DocumentAreaRepository(AreaRepository):
    def __init__(self, storage: LedgerStorage):
        self._storage = storage

    def list_all(self) -> Sequence[str]:
        areas: list[str] = []
        for name in self._storage.get_areas():
            if isinstance(name, str) and name not in areas:
                areas.append(name)
        return areas

    def save_all(self, areas: Sequence[str]) -> None:
        self._storage.save_areas(list(areas))
