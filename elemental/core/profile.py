# -*- coding: utf-8 -*-
"""
Elemental profile of a birth moment.

Each tracked body is placed in a 30° zodiac sign; sign indices map to the
four elements cyclically (fire, earth, air, water, fire, ...), i.e.
`ELEMENTS[sign % 4]`. That grouping is the engine's own and is kept as is,
even though astrological tables group the signs differently. The body's
weight is added to its element; the four totals form the profile.

Public API:
    compute_profile(date, time=(12, 0)) -> ElementalProfile
    ElementProfiler(catalog, weights, bodies).compute(date, time)
    ElementProfiler.from_config(cfg)
"""
from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from elemental.core.errors import ConfigError
from elemental.core.orbital import BODIES, DEFAULT_CATALOG, BodyCatalog
from elemental.core.position import ecliptic_longitude
from elemental.core.timescales import DEFAULT_TIME, to_julian_day

__all__ = [
    "ELEMENTS",
    "SIGN_NAMES",
    "DEFAULT_WEIGHTS",
    "sign_index",
    "element_of_sign",
    "ElementWeights",
    "ElementalProfile",
    "BodyPlacement",
    "ElementProfiler",
    "DEFAULT_PROFILER",
    "compute_profile",
]

log = logging.getLogger(__name__)

ELEMENTS: Tuple[str, ...] = ("fire", "earth", "air", "water")

SIGN_NAMES: Tuple[str, ...] = (
    "Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
    "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces",
)

DEFAULT_WEIGHTS: Mapping[str, int] = MappingProxyType({"sun": 5, "moon": 5, "mercury": 3})


def sign_index(longitude: float) -> int:
    """Zodiac sign 0..11 for an ecliptic longitude (30° per sign)."""
    return int(math.floor(float(longitude) / 30.0)) % 12


def element_of_sign(index: int) -> str:
    return ELEMENTS[int(index) % 4]

# ───────────────────────────── Weights ─────────────────────────────

class ElementWeights:
    """Body → positive integer weight; unlisted bodies weigh `default`."""

    def __init__(self, weights: Optional[Mapping[str, Any]] = None, default: Any = 1):
        self.default = self._check("default_weight", default)
        src = DEFAULT_WEIGHTS if weights is None else weights
        self._weights = MappingProxyType({str(b): self._check(f"weights.{b}", w) for b, w in src.items()})

    @staticmethod
    def _check(name: str, w: Any) -> int:
        if isinstance(w, bool) or not isinstance(w, int) or w <= 0:
            raise ConfigError(f"{name} must be a positive integer, got {w!r}")
        return w

    def of(self, body: str) -> int:
        return self._weights.get(body, self.default)

    def total(self, bodies: Iterable[str]) -> int:
        return sum(self.of(b) for b in bodies)

    def to_dict(self) -> Dict[str, int]:
        return dict(self._weights)

# ───────────────────────────── Results ─────────────────────────────

@dataclass(frozen=True)
class ElementalProfile:
    fire: int = 0
    earth: int = 0
    air: int = 0
    water: int = 0

    @classmethod
    def from_totals(cls, totals: Mapping[str, int]) -> "ElementalProfile":
        return cls(**{el: totals.get(el, 0) for el in ELEMENTS})

    @property
    def total(self) -> int:
        return self.fire + self.earth + self.air + self.water

    def __getitem__(self, element: str) -> int:
        if element not in ELEMENTS:
            raise KeyError(element)
        return getattr(self, element)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class BodyPlacement:
    body: str
    longitude: float
    sign_index: int
    sign: str
    element: str
    weight: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

# ───────────────────────────── Profiler ─────────────────────────────

class ElementProfiler:
    """
    Immutable engine: catalog + weights + tracked bodies.

    Every tracked body must exist in the catalog; that is checked here so a
    bad configuration fails at start-up rather than on the first request.
    """

    def __init__(
        self,
        catalog: BodyCatalog = DEFAULT_CATALOG,
        weights: Optional[ElementWeights] = None,
        bodies: Iterable[str] = BODIES,
    ):
        self.catalog = catalog
        self.weights = weights if weights is not None else ElementWeights()
        self.bodies: Tuple[str, ...] = tuple(bodies)
        if not self.bodies:
            raise ConfigError("at least one tracked body is required")
        for b in self.bodies:
            catalog.elements_of(b)  # raises InvalidBody

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, Any]]) -> "ElementProfiler":
        """Build from a loaded config dict (see config/defaults.yaml)."""
        cfg = cfg or {}
        catalog = DEFAULT_CATALOG.with_overrides(cfg.get("bodies"))
        weights = ElementWeights(cfg.get("weights"), cfg.get("default_weight", 1))
        bodies = cfg.get("tracked_bodies") or BODIES
        if isinstance(bodies, str):
            raise ConfigError("tracked_bodies must be a list of body names")
        prof = cls(catalog, weights, [str(b) for b in bodies])
        log.info("Element profiler ready; bodies=%s weights=%s", ",".join(prof.bodies), weights.to_dict())
        return prof

    @property
    def expected_total(self) -> int:
        return self.weights.total(self.bodies)

    def placements_at(self, jd: float) -> List[BodyPlacement]:
        out: List[BodyPlacement] = []
        for body in self.bodies:
            lon = ecliptic_longitude(body, jd, self.catalog)
            idx = sign_index(lon)
            out.append(BodyPlacement(
                body=body,
                longitude=lon,
                sign_index=idx,
                sign=SIGN_NAMES[idx],
                element=element_of_sign(idx),
                weight=self.weights.of(body),
            ))
        return out

    def placements(self, date: Any, time: Any = DEFAULT_TIME) -> List[BodyPlacement]:
        return self.placements_at(to_julian_day(date, time))

    def profile_at(self, jd: float) -> ElementalProfile:
        totals = dict.fromkeys(ELEMENTS, 0)
        for p in self.placements_at(jd):
            totals[p.element] += p.weight
        profile = ElementalProfile.from_totals(totals)
        log.debug("profile jd=%.6f -> %s", jd, totals)
        return profile

    def compute(self, date: Any, time: Any = DEFAULT_TIME) -> ElementalProfile:
        """Profile for a civil date and clock time (noon when time is omitted)."""
        return self.profile_at(to_julian_day(date, time))


DEFAULT_PROFILER = ElementProfiler()


def compute_profile(date: Any, time: Any = DEFAULT_TIME) -> ElementalProfile:
    return DEFAULT_PROFILER.compute(date, time)
