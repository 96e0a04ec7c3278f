from __future__ import annotations

from src.headcount_system.headcount_system.core.enums import AuditField

DAY = "2026-10-18"


def test_read_unknown_date_is_empty(container):
    assert container.audit_log.read("2020-01-01") == []


def test_append_without_session_is_a_no_op(container):
    assert container.audit_log.append(DAY, "PWHT", "welder", AuditField.PRESENT, None, 3) is None
    assert container.audit_log.read(DAY) == []


def test_append_attributes_current_user(container, admin, clock):
    entry = container.audit_log.append(DAY, "PWHT", "welder", AuditField.PRESENT, None, 3)

    assert entry.user == "admin"
    assert entry.ts == int(clock().timestamp() * 1000)
    assert container.audit_log.read(DAY) == [entry]


def test_ring_keeps_ten_most_recent_newest_first(container, ledger):
    ledger.add_or_update_row(DAY, "PWHT", "Welder")
    for count in range(1, 12):
        ledger.update_row(DAY, "PWHT", "welder", {"present": count})

    entries = container.audit_log.read(DAY)

    assert len(entries) == 10
    assert [(e.old_value, e.new_value) for e in entries] == [(n - 1, n) for n in range(11, 1, -1)]
    assert all(e.old_value is not None for e in entries)


def test_audit_is_per_date(container, ledger):
    ledger.add_or_update_row(DAY, "PWHT", "Welder")
    ledger.update_row(DAY, "PWHT", "welder", {"present": 4})

    assert len(container.audit_log.read(DAY)) == 1
    assert container.audit_log.read("2026-10-19") == []
