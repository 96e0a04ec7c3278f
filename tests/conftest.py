from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.headcount_system.headcount_system.container import build_container
from src.headcount_system.headcount_system.core.enums import Role
from src.headcount_system.headcount_system.database.memory_document_store import InMemoryDocumentStore


class FakeClock:
    """Callable clock that only moves when a test advances it."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 18, 7, 30, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def container(store, clock):
    return build_container(store=store, clock=clock)


@pytest.fixture
def areas(container):
    container.areas_repo.save_all(["Spool Yard", "PWHT", "Precast S2A"])
    return list(container.area_service.list_areas())


@pytest.fixture
def admin(container, areas):
    container.credential_service.create_user("admin", "admin123", Role.ADMIN)
    return container.auth_service.login("admin", "admin123")


@pytest.fixture
def ledger(container, admin):
    return container.ledger
