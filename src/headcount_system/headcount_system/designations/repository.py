from __future__ import annotations

from typing import Protocol

from .model import DesignationHistory


class DesignationHistoryRepository(Protocol):
    def get(self) -> DesignationHistory:
        raise NotImplementedError

    def save(self, history: DesignationHistory) -> None:
        raise NotImplementedError
