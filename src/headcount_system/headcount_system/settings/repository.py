from __future__ import annotations

from typing import Protocol

from .model import Settings


class SettingsRepository(Protocol):
    def get(self) -> Settings:
        raise NotImplementedError

    def save(self, settings: Settings) -> None:
        raise NotImplementedError
