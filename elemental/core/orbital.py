# -*- coding: utf-8 -*-
"""
Orbital elements for the tracked bodies.

Low-precision, single-epoch elements (J2000). They are descriptive enough to
place the Sun, Moon and Mercury in a zodiac sign and nothing more; this is
not an ephemeris.

Public API:
    OrbitalElements          frozen record, validated on construction
    BodyCatalog              read-only body → elements mapping
    DEFAULT_CATALOG          the built-in catalog
    elements_of(body)        lookup in DEFAULT_CATALOG
"""
from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from elemental.core.errors import ConfigError, InvalidBody, InvalidElements
from elemental.core.timescales import J2000

__all__ = [
    "OrbitalElements",
    "BodyCatalog",
    "BODIES",
    "DEFAULT_ELEMENTS",
    "DEFAULT_CATALOG",
    "elements_of",
]


@dataclass(frozen=True)
class OrbitalElements:
    epoch: float            # JD at which the elements hold
    mean_motion: float      # n [deg per unit T]
    mean_longitude: float   # L [deg] at epoch
    eccentricity: float     # e, 0 <= e < 1
    perihelion: float       # argument of perihelion [deg]
    semi_major_axis: float  # a; descriptive only

    def __post_init__(self) -> None:
        for f in fields(self):
            v = getattr(self, f.name)
            if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
                raise InvalidElements(f"{f.name} must be a finite number, got {v!r}")
        if not 0.0 <= self.eccentricity < 1.0:
            raise InvalidElements(f"eccentricity must be in [0, 1), got {self.eccentricity}")

    def to_dict(self) -> Dict[str, float]:
        return {f.name: float(getattr(self, f.name)) for f in fields(self)}


_FIELD_NAMES = frozenset(f.name for f in fields(OrbitalElements))

BODIES: Tuple[str, ...] = ("sun", "moon", "mercury")

DEFAULT_ELEMENTS: Mapping[str, OrbitalElements] = MappingProxyType({
    "sun": OrbitalElements(
        epoch=J2000, mean_motion=0.0, mean_longitude=280.459,
        eccentricity=0.016709, perihelion=282.9404, semi_major_axis=1.0,
    ),
    "moon": OrbitalElements(
        epoch=J2000, mean_motion=13.1763965268, mean_longitude=318.351,
        eccentricity=0.0549, perihelion=36.340, semi_major_axis=60.2666,
    ),
    "mercury": OrbitalElements(
        epoch=J2000, mean_motion=4.092317, mean_longitude=252.251,
        eccentricity=0.205635, perihelion=77.456, semi_major_axis=0.387098,
    ),
})


class BodyCatalog(Mapping[str, OrbitalElements]):
    """Closed, read-only set of bodies. Unknown ids raise InvalidBody."""

    def __init__(self, elements: Mapping[str, OrbitalElements]):
        for body, el in elements.items():
            if not isinstance(el, OrbitalElements):
                raise InvalidElements(f"{body}: expected OrbitalElements, got {type(el).__name__}")
        self._elements = MappingProxyType(dict(elements))

    def __getitem__(self, body: str) -> OrbitalElements:
        return self.elements_of(body)

    def __contains__(self, body: object) -> bool:
        return body in self._elements

    def get(self, body: str, default: Optional[OrbitalElements] = None) -> Optional[OrbitalElements]:
        return self._elements.get(body, default)

    def __iter__(self) -> Iterator[str]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"BodyCatalog({', '.join(self._elements)})"

    def elements_of(self, body: str) -> OrbitalElements:
        try:
            return self._elements[body]
        except KeyError:
            raise InvalidBody(body, self._elements.keys()) from None

    def with_overrides(self, overrides: Optional[Mapping[str, Mapping[str, Any]]]) -> "BodyCatalog":
        """
        New catalog with per-body field overrides, e.g. {"moon": {"eccentricity": 0.05}}.
        Only existing bodies and known fields are accepted; the result is validated eagerly.
        """
        if not overrides:
            return self
        out: Dict[str, OrbitalElements] = dict(self._elements)
        for body, patch in overrides.items():
            base = self.elements_of(str(body))
            if not isinstance(patch, Mapping):
                raise ConfigError(f"bodies.{body} must be a mapping of element fields")
            unknown = set(patch) - _FIELD_NAMES
            if unknown:
                raise ConfigError(f"bodies.{body}: unknown fields {sorted(unknown)}")
            out[str(body)] = replace(base, **dict(patch))
        return BodyCatalog(out)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {body: el.to_dict() for body, el in self._elements.items()}


DEFAULT_CATALOG = BodyCatalog(DEFAULT_ELEMENTS)


def elements_of(body: str) -> OrbitalElements:
    return DEFAULT_CATALOG.elements_of(body)
