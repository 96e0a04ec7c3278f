from __future__ import annotations

from typing import Protocol, Sequence


class AreaRepository(Protocol):
    """Ordered area names; list order is display order."""

    def list_all(self) -> Sequence[str]:
        raise NotImplementedError

    def save_all(self, areas: Sequence[str]) -> None:
        raise NotImplementedError
