# -*- coding: utf-8 -*-
"""
Ecliptic longitude from simplified Keplerian elements.

Pipeline per body:
    T = (jd - epoch) / 36525
    M = (L + n*T) mod 360                   mean anomaly, deg
    E = M + e*sin(E)                        exactly KEPLER_ITERATIONS fixed-point steps
    v = 2*atan(sqrt((1+e)/(1-e)) * tan(E/2))
    lon = (v + perihelion) mod 360          in [0, 360)

`n` is applied per unit of T (centuries) exactly as written. The Kepler loop
has no tolerance test; results are bit-reproducible for a given (body, jd).

Public API:
    ecliptic_longitude(body, jd, catalog=DEFAULT_CATALOG) -> float
    longitudes(jd, bodies=None, catalog=DEFAULT_CATALOG) -> dict
"""
from __future__ import annotations

import math
from typing import Dict, Iterable, Optional

from elemental.core.orbital import DEFAULT_CATALOG, BodyCatalog, OrbitalElements

__all__ = [
    "KEPLER_ITERATIONS",
    "DAYS_PER_CENTURY",
    "norm360",
    "mean_anomaly",
    "solve_kepler",
    "true_anomaly",
    "longitude_from_elements",
    "ecliptic_longitude",
    "longitudes",
]

KEPLER_ITERATIONS = 10
DAYS_PER_CENTURY = 36525.0


def norm360(x: float) -> float:
    r = math.fmod(float(x), 360.0)
    if r < 0.0:
        r += 360.0
    # -tiny + 360.0 rounds to 360.0
    if r >= 360.0:
        r -= 360.0
    return r


def mean_anomaly(elements: OrbitalElements, jd: float) -> float:
    """Mean anomaly in degrees, [0, 360). Equals L mod 360 at jd == epoch."""
    t = (float(jd) - elements.epoch) / DAYS_PER_CENTURY
    return norm360(elements.mean_longitude + elements.mean_motion * t)


def solve_kepler(m_rad: float, e: float, iterations: int = KEPLER_ITERATIONS) -> float:
    """Eccentric anomaly (radians) by fixed-point iteration seeded at M. No early exit."""
    ecc = m_rad
    for _ in range(iterations):
        ecc = m_rad + e * math.sin(ecc)
    return ecc


def true_anomaly(ecc_rad: float, e: float) -> float:
    """True anomaly in radians, (-pi, pi]."""
    return 2.0 * math.atan(math.sqrt((1.0 + e) / (1.0 - e)) * math.tan(ecc_rad / 2.0))


def longitude_from_elements(elements: OrbitalElements, jd: float) -> float:
    e = elements.eccentricity
    m_rad = math.radians(mean_anomaly(elements, jd))
    v = true_anomaly(solve_kepler(m_rad, e), e)
    return norm360(math.degrees(v) + elements.perihelion)


def ecliptic_longitude(body: str, jd: float, catalog: BodyCatalog = DEFAULT_CATALOG) -> float:
    """Ecliptic longitude of `body` at Julian Day `jd`, degrees in [0, 360)."""
    return longitude_from_elements(catalog.elements_of(body), jd)


def longitudes(
    jd: float,
    bodies: Optional[Iterable[str]] = None,
    catalog: BodyCatalog = DEFAULT_CATALOG,
) -> Dict[str, float]:
    names = list(catalog) if bodies is None else list(bodies)
    return {b: ecliptic_longitude(b, jd, catalog) for b in names}
