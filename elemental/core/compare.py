# elemental/core/compare.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from elemental.core.errors import ConfigError
from elemental.core.profile import ELEMENTS, ElementalProfile

__all__ = [
    "RADAR_ORDER",
    "DEFAULT_LABELS",
    "DEFAULT_FULL_MARK",
    "ChartSettings",
    "ProfileComparison",
    "compare_profiles",
    "dominant_elements",
]

# Axis order of the two-series radar chart
RADAR_ORDER: Tuple[str, ...] = ("air", "fire", "water", "earth")

DEFAULT_LABELS: Dict[str, str] = {
    "air": "Air (thinking)",
    "fire": "Fire (intuition)",
    "water": "Water (feeling)",
    "earth": "Earth (sensation)",
}

DEFAULT_FULL_MARK = 20


@dataclass(frozen=True)
class ChartSettings:
    """Radar scale and axis labels from the `chart` config section."""
    full_mark: int = DEFAULT_FULL_MARK
    labels: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_LABELS))

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, Any]]) -> "ChartSettings":
        chart = (cfg or {}).get("chart") or {}
        if not isinstance(chart, Mapping):
            raise ConfigError("chart must be a mapping")

        full_mark = chart.get("full_mark", DEFAULT_FULL_MARK)
        if isinstance(full_mark, bool) or not isinstance(full_mark, int) or full_mark <= 0:
            raise ConfigError(f"chart.full_mark must be a positive integer, got {full_mark!r}")

        raw = chart.get("labels") or {}
        if not isinstance(raw, Mapping):
            raise ConfigError("chart.labels must map element names to strings")
        labels = dict(DEFAULT_LABELS)
        for el, text in raw.items():
            if el not in ELEMENTS:
                raise ConfigError(f"chart.labels: unknown element {el!r}")
            if not isinstance(text, str):
                raise ConfigError(f"chart.labels.{el} must be a string, got {text!r}")
            labels[el] = text
        return cls(full_mark=full_mark, labels=labels)


@dataclass(frozen=True)
class ProfileComparison:
    parent: ElementalProfile
    child: ElementalProfile
    full_mark: int
    labels: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_LABELS))

    @property
    def difference(self) -> Dict[str, int]:
        """child - parent, per element."""
        return {el: self.child[el] - self.parent[el] for el in ELEMENTS}

    @property
    def shared(self) -> Dict[str, int]:
        """Overlap of the two series, per element."""
        return {el: min(self.child[el], self.parent[el]) for el in ELEMENTS}

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return [
            {
                "element": el,
                "subject": self.labels.get(el, el),
                "child": self.child[el],
                "parent": self.parent[el],
                "full_mark": self.full_mark,
            }
            for el in RADAR_ORDER
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parent": self.parent.to_dict(),
            "child": self.child.to_dict(),
            "difference": self.difference,
            "shared": self.shared,
            "dominant": {
                "parent": dominant_elements(self.parent),
                "child": dominant_elements(self.child),
            },
            "full_mark": self.full_mark,
            "rows": self.rows,
        }


def dominant_elements(profile: ElementalProfile) -> List[str]:
    """Element(s) holding the largest value, in ELEMENTS order."""
    top = max(profile[el] for el in ELEMENTS)
    return [el for el in ELEMENTS if profile[el] == top]


def compare_profiles(
    parent: ElementalProfile,
    child: ElementalProfile,
    *,
    full_mark: int = DEFAULT_FULL_MARK,
    labels: Optional[Mapping[str, str]] = None,
) -> ProfileComparison:
    """
    Pair two profiles for a shared-scale overlay.

    `full_mark` is a floor: it is raised to the largest element value so the
    scale bounds both series.
    """
    peak = max(max(p[el] for el in ELEMENTS) for p in (parent, child))
    merged = dict(DEFAULT_LABELS)
    if labels:
        merged.update({str(k): str(v) for k, v in labels.items() if k in ELEMENTS})
    return ProfileComparison(parent=parent, child=child, full_mark=max(int(full_mark), peak), labels=merged)
