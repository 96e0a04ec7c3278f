from __future__ import annotations

import pytest

from src.headcount_system.headcount_system.core.exceptions import ValidationError

DAY = "2026-10-18"


@pytest.fixture
def filled(container, ledger):
    ledger.add_or_update_row(DAY, "Spool Yard", "Welder")
    ledger.add_or_update_row(DAY, "Spool Yard", "Rigger")
    ledger.add_or_update_row(DAY, "PWHT", "welder")
    ledger.update_row(DAY, "Spool Yard", "welder", {"present": 5, "confirmed": True})
    ledger.update_row(DAY, "PWHT", "welder", {"present": 3})
    return container.export_service


def test_detailed_report(filled, areas):
    report = filled.report("detailed", DAY, areas)

    assert report.filename == "headcount_detailed_2026-10-18.csv"
    assert report.content.splitlines() == [
        "date,area,designation,present,confirmed,updated_at,updated_by",
        "2026-10-18,Spool Yard,Welder,5,true,2026-10-18T07:30:00,admin",
        "2026-10-18,Spool Yard,Rigger,,false,,",
        "2026-10-18,PWHT,welder,3,false,2026-10-18T07:30:00,admin",
    ]


def test_area_summary_covers_every_area(filled, areas):
    lines = filled.report("area-summary", DAY, areas).content.splitlines()

    assert lines == [
        "date,area,present_total,rows_total,rows_confirmed,status,last_updated",
        "2026-10-18,Spool Yard,5,2,1,IN_PROGRESS,2026-10-18T07:30:00",
        "2026-10-18,PWHT,3,1,0,IN_PROGRESS,2026-10-18T07:30:00",
        "2026-10-18,Precast S2A,0,0,0,NOT_STARTED,",
    ]


def test_designation_summary_merges_by_normalized_key(filled, areas):
    rows = filled.designation_summary_rows(DAY, areas)

    assert rows == [
        {"date": DAY, "designation": "Welder", "present_total": 8, "total_rows": 2, "areas_count": 2},
        {"date": DAY, "designation": "Rigger", "present_total": 0, "total_rows": 0, "areas_count": 1},
    ]


def test_reports_only_cover_given_areas(filled):
    rows = filled.detailed_rows(DAY, ["PWHT"])
    assert [r["area"] for r in rows] == ["PWHT"]


def test_quotes_values_with_commas(container, ledger):
    ledger.add_or_update_row(DAY, "PWHT", "Fitter, Senior")
    content = container.export_service.report("detailed", DAY, ["PWHT"]).content
    assert '"Fitter, Senior"' in content


def test_unknown_report_and_bad_date(container, areas):
    with pytest.raises(ValidationError):
        container.export_service.report("payroll", DAY, areas)
    with pytest.raises(ValidationError):
        container.export_service.report("detailed", "18/10/2026", areas)
