from __future__ import annotations

from ..database.storage import LedgerStorage
from .model import Settings
from .repository import SettingsRepository


class DocumentSettingsRepository(SettingsRepository):
    def __init__(self, storage: LedgerStorage):
        self._storage = storage

    def get(self) -> Settings:
        return Settings.from_dict(self._storage.get_settings())

    def save(self, settings: Settings) -> None:
        self._storage.save_settings(settings.to_dict())
