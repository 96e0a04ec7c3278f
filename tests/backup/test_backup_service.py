from __future__ import annotations

import json

import pytest

from src.headcount_system.headcount_system.common.datetime_utils import to_epoch_ms
from src.headcount_system.headcount_system.core.enums import Role
from src.headcount_system.headcount_system.core.exceptions import AuthorizationError, InvalidBackupError

DAY = "2026-10-18"


def test_export_contains_every_document_but_session(container, ledger, clock):
    ledger.add_or_update_row(DAY, "PWHT", "Welder")

    backup = container.backup_service.export_backup()

    assert backup["version"] == 1
    assert backup["exportedAt"] == to_epoch_ms(clock())
    assert set(backup) == {"version", "exportedAt", "settings", "areas", "users", "attendance", "designationHistory"}
    assert backup["attendance"][DAY]["areas"]["PWHT"]["rows"][0]["designationKey"] == "welder"
    assert backup["users"][0]["username"] == "admin"


@pytest.mark.parametrize(
    "payload",
    [
        {"settings": {"darkMode": True}},
        {"version": 1},
        {"version": 1, "settings": {}},
        ["not", "a", "mapping"],
        {"version": 1, "settings": {"darkMode": True}, "areas": "PWHT"},
    ],
)
def test_invalid_backups_are_rejected(container, admin, payload):
    with pytest.raises(InvalidBackupError):
        container.backup_service.import_backup(current_role=Role.ADMIN, payload=payload)
    assert container.storage.get_users()[0]["username"] == "admin"


def test_import_replaces_only_present_documents(container, ledger):
    ledger.add_or_update_row(DAY, "PWHT", "Welder")

    written = container.backup_service.import_backup(
        current_role=Role.ADMIN,
        payload={"version": 1, "settings": {"darkMode": True, "retentionDays": 90}, "areas": ["Laydown"]},
    )

    assert written == ["settings", "areas"]
    assert container.settings_service.get_settings().retention_days == 90
    assert list(container.area_service.list_areas()) == ["Laydown"]
    assert container.attendance_repo.list_dates() == [DAY]
    assert container.users_repo.get_by_username("admin") is not None


def test_round_trip_into_fresh_install(container, ledger):
    from src.headcount_system.headcount_system.container import build_container
    from src.headcount_system.headcount_system.database.memory_document_store import InMemoryDocumentStore

    ledger.add_or_update_row(DAY, "PWHT", "Welder")
    ledger.update_row(DAY, "PWHT", "welder", {"present": 12})
    text = json.dumps(container.backup_service.export_backup())

    fresh = build_container(store=InMemoryDocumentStore())
    fresh.backup_service.import_backup_json(current_role=Role.ADMIN, text=text)

    fresh.auth_service.login("admin", "admin123")
    assert fresh.ledger.get_row(DAY, "PWHT", "welder").present == 12
    assert fresh.audit_log.read(DAY)[0].new_value == 12


def test_import_json_errors(container):
    with pytest.raises(InvalidBackupError):
        container.backup_service.import_backup_json(current_role=Role.ADMIN, text="{oops")
    with pytest.raises(AuthorizationError):
        container.backup_service.import_backup_json(current_role=Role.USER, text="{}")
