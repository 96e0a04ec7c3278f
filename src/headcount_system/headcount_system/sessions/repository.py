from __future__ import annotations

from typing import Protocol

from .model import SessionState


class SessionRepository(Protocol):
    def get(self) -> SessionState:
        raise NotImplementedError

    def save(self, state: SessionState) -> None:
        raise NotImplementedError
