# tests/test_orbital.py
from __future__ import annotations

import dataclasses
import math

import pytest

from elemental.core.errors import ConfigError, InvalidBody, InvalidElements
from elemental.core.orbital import (
    BODIES,
    DEFAULT_CATALOG,
    BodyCatalog,
    OrbitalElements,
    elements_of,
)


def _el(**kw) -> OrbitalElements:
    base = dict(epoch=2451545.0, mean_motion=1.0, mean_longitude=10.0,
                eccentricity=0.1, perihelion=20.0, semi_major_axis=1.0)
    base.update(kw)
    return OrbitalElements(**base)


def test_catalog_is_the_closed_three_body_set():
    assert BODIES == ("sun", "moon", "mercury")
    assert set(DEFAULT_CATALOG) == {"sun", "moon", "mercury"}
    assert len(DEFAULT_CATALOG) == 3


def test_default_values():
    sun = elements_of("sun")
    assert sun.epoch == 2451545.0
    assert sun.mean_motion == 0.0
    assert sun.mean_longitude == 280.459
    assert sun.eccentricity == 0.016709
    assert sun.perihelion == 282.9404
    moon = elements_of("moon")
    assert moon.mean_motion == 13.1763965268
    assert moon.semi_major_axis == 60.2666
    mercury = elements_of("mercury")
    assert mercury.eccentricity == 0.205635
    assert mercury.perihelion == 77.456


@pytest.mark.parametrize("name", ["venus", "Sun", "", "north node"])
def test_unknown_body_raises(name):
    with pytest.raises(InvalidBody) as ei:
        elements_of(name)
    assert ei.value.code == "invalid_body"
    assert ei.value.body == name
    with pytest.raises(InvalidBody):
        DEFAULT_CATALOG[name]


def test_unknown_body_is_not_membership():
    assert "venus" not in DEFAULT_CATALOG
    assert DEFAULT_CATALOG.get("venus") is None


def test_elements_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        elements_of("sun").eccentricity = 0.5  # type: ignore[misc]


@pytest.mark.parametrize("e", [1.0, 1.5, -0.01])
def test_eccentricity_outside_unit_interval_rejected(e):
    with pytest.raises(InvalidElements):
        _el(eccentricity=e)


@pytest.mark.parametrize("bad", [math.nan, math.inf, "1.0", None, True])
def test_non_finite_or_non_numeric_rejected(bad):
    with pytest.raises(InvalidElements):
        _el(perihelion=bad)


def test_overrides_replace_fields_and_validate_eagerly():
    cat = DEFAULT_CATALOG.with_overrides({"moon": {"eccentricity": 0.06}})
    assert cat.elements_of("moon").eccentricity == 0.06
    assert cat.elements_of("moon").mean_longitude == 318.351
    # source catalog untouched
    assert DEFAULT_CATALOG.elements_of("moon").eccentricity == 0.0549

    with pytest.raises(InvalidElements):
        DEFAULT_CATALOG.with_overrides({"mercury": {"eccentricity": 1.0}})
    with pytest.raises(InvalidBody):
        DEFAULT_CATALOG.with_overrides({"venus": {"eccentricity": 0.007}})
    with pytest.raises(ConfigError):
        DEFAULT_CATALOG.with_overrides({"sun": {"inclination": 0.0}})
    with pytest.raises(ConfigError):
        DEFAULT_CATALOG.with_overrides({"sun": 0.5})


def test_empty_overrides_return_same_catalog():
    assert DEFAULT_CATALOG.with_overrides(None) is DEFAULT_CATALOG
    assert DEFAULT_CATALOG.with_overrides({}) is DEFAULT_CATALOG


def test_catalog_rejects_non_elements():
    with pytest.raises(InvalidElements):
        BodyCatalog({"sun": {"eccentricity": 0.1}})  # type: ignore[dict-item]


def test_to_dict_round_shape():
    d = DEFAULT_CATALOG.to_dict()
    assert set(d["sun"]) == {"epoch", "mean_motion", "mean_longitude",
                             "eccentricity", "perihelion", "semi_major_axis"}
