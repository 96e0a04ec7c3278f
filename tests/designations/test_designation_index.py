from __future__ import annotations

import pytest

from src.headcount_system.headcount_system.designations.service import normalize_designation


@pytest.mark.parametrize(
    "a, b",
    [
        ("Spool  Yard", "spool yard"),
        ("  Welder ", "WELDER"),
        ("Pipe\tFitter", "pipe fitter"),
        ("Helper\n  Grade 2", "helper grade 2"),
    ],
)
def test_labels_differing_in_case_or_whitespace_share_a_key(a, b):
    assert normalize_designation(a) == normalize_designation(b)


def test_different_words_get_different_keys():
    assert normalize_designation("Pipe Fitter") != normalize_designation("PipeFitter")
    assert normalize_designation("Welder") != normalize_designation("Welders")


def test_record_usage_keeps_latest_casing_first(container):
    index = container.designation_index
    index.record_usage("Welder", "PWHT")
    index.record_usage("Rigger", "PWHT")
    index.record_usage("WELDER ", "PWHT")

    history = container.designations_repo.get()
    assert history.global_labels == ["WELDER ", "Rigger"]
    assert history.by_area["PWHT"] == ["WELDER ", "Rigger"]


def test_history_caps(container):
    index = container.designation_index
    for i in range(120):
        index.record_usage(f"Trade {i}", "PWHT")

    history = container.designations_repo.get()
    assert len(history.global_labels) == 100
    assert len(history.by_area["PWHT"]) == 50
    assert history.global_labels[0] == "Trade 119"
    assert history.by_area["PWHT"][-1] == "Trade 70"


def test_suggest_prefers_area_then_global_and_matches_substrings(container):
    index = container.designation_index
    index.record_usage("Spool Yard Helper", "Precast S2A")
    index.record_usage("Yard Foreman", "Precast S2A")
    index.record_usage("Yard Rigger", "PWHT")

    assert index.suggest("yard", "PWHT") == ["Yard Rigger", "Yard Foreman", "Spool Yard Helper"]
    assert index.suggest("  YARD  hel", None) == ["Spool Yard Helper"]


def test_suggest_limits_to_five_and_skips_duplicates(container):
    index = container.designation_index
    for label in ("Welder A", "Welder B", "Welder C"):
        index.record_usage(label, "PWHT")
    for label in ("Welder D", "Welder E", "Welder F"):
        index.record_usage(label, "Spool Yard")

    suggestions = index.suggest("welder", "PWHT")

    assert suggestions == ["Welder C", "Welder B", "Welder A", "Welder F", "Welder E"]
    assert len(set(suggestions)) == 5


def test_rename_area_moves_history(container):
    index = container.designation_index
    index.record_usage("Welder", "Spool Yard")

    index.rename_area("Spool Yard", "Spool Yard Renamed")

    assert index.suggest("weld", "Spool Yard Renamed") == ["Welder"]
    assert "Spool Yard" not in container.designations_repo.get().by_area
