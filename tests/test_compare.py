# tests/test_compare.py
from __future__ import annotations

import pytest

from elemental.core.compare import (
    DEFAULT_FULL_MARK,
    DEFAULT_LABELS,
    RADAR_ORDER,
    ChartSettings,
    compare_profiles,
    dominant_elements,
)
from elemental.core.errors import ConfigError
from elemental.core.profile import ElementalProfile, compute_profile

PARENT = ElementalProfile(fire=5, earth=0, air=3, water=5)
CHILD = ElementalProfile(fire=0, earth=8, air=5, water=0)


def test_rows_follow_radar_order_with_shared_scale():
    cmp = compare_profiles(PARENT, CHILD)
    rows = cmp.rows
    assert [r["element"] for r in rows] == list(RADAR_ORDER) == ["air", "fire", "water", "earth"]
    assert all(r["full_mark"] == 20 for r in rows)
    air = rows[0]
    assert air == {"element": "air", "subject": "Air (thinking)", "child": 5, "parent": 3, "full_mark": 20}


def test_difference_and_shared():
    cmp = compare_profiles(PARENT, CHILD)
    assert cmp.difference == {"fire": -5, "earth": 8, "air": 2, "water": -5}
    assert cmp.shared == {"fire": 0, "earth": 0, "air": 3, "water": 0}


def test_full_mark_grows_to_fit_largest_value():
    big = ElementalProfile(fire=30, earth=0, air=0, water=0)
    assert compare_profiles(PARENT, big).full_mark == 30
    assert compare_profiles(PARENT, CHILD, full_mark=10).full_mark == 10
    assert compare_profiles(PARENT, CHILD, full_mark=4).full_mark == 8


def test_labels_override_known_elements_only():
    cmp = compare_profiles(PARENT, CHILD, labels={"fire": "Feu", "aether": "x"})
    subjects = {r["element"]: r["subject"] for r in cmp.rows}
    assert subjects["fire"] == "Feu"
    assert subjects["water"] == DEFAULT_LABELS["water"]
    assert "aether" not in cmp.labels


def test_dominant_elements():
    assert dominant_elements(PARENT) == ["fire", "water"]
    assert dominant_elements(CHILD) == ["earth"]
    assert dominant_elements(ElementalProfile()) == ["fire", "earth", "air", "water"]


def test_to_dict_shape():
    out = compare_profiles(PARENT, CHILD).to_dict()
    assert set(out) == {"parent", "child", "difference", "shared", "dominant", "full_mark", "rows"}
    assert out["dominant"] == {"parent": ["fire", "water"], "child": ["earth"]}


@pytest.mark.parametrize("a, b", [((1985, 4, 2), (2015, 9, 30)), ((1960, 1, 1), (1990, 12, 31))])
def test_real_profiles_keep_sum_on_both_sides(a, b):
    cmp = compare_profiles(compute_profile(a), compute_profile(b))
    assert sum(r["parent"] for r in cmp.rows) == 13
    assert sum(r["child"] for r in cmp.rows) == 13
    assert sum(cmp.difference.values()) == 0


def test_chart_settings_defaults_and_overrides():
    assert ChartSettings.from_config(None) == ChartSettings()
    assert ChartSettings.from_config({}).full_mark == DEFAULT_FULL_MARK
    s = ChartSettings.from_config({"chart": {"full_mark": 16, "labels": {"fire": "Feu"}}})
    assert s.full_mark == 16
    assert s.labels["fire"] == "Feu"
    assert s.labels["air"] == DEFAULT_LABELS["air"]


@pytest.mark.parametrize(
    "chart",
    [
        {"full_mark": "big"},
        {"full_mark": 0},
        {"full_mark": True},
        {"full_mark": 12.5},
        {"labels": ["fire"]},
        {"labels": {"fire": 3}},
        {"labels": {"aether": "Aether"}},
        "wide",
    ],
)
def test_chart_settings_reject_bad_config(chart):
    with pytest.raises(ConfigError) as ei:
        ChartSettings.from_config({"chart": chart})
    assert ei.value.code == "invalid_config"
