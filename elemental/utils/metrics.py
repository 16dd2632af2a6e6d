from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Gauge, Histogram

# Keep names stable; dashboards key on them.
MET_REQUESTS: Final = Counter("elemental_api_requests_total", "API requests", ["route"])
REQ_LATENCY: Final = Histogram("elemental_request_seconds", "API request latency", ["route"])
MET_PROFILES: Final = Counter(
    "elemental_profiles_total", "Profiles computed, by dominant element", ["dominant"]
)
MET_ERRORS: Final = Counter("elemental_errors_total", "Rejected requests", ["code"])
GAUGE_APP_UP: Final = Gauge("elemental_app_up", "1 if app is running")

TRACKED_PATHS: Final = ("/", "/health", "/healthz", "/metrics")


def is_tracked(path: str) -> bool:
    return path.startswith("/api/") or path in TRACKED_PATHS


def seed(routes) -> None:
    """Create label children up front so series exist before the first hit."""
    for route in routes:
        MET_REQUESTS.labels(route=route).inc(0)
        REQ_LATENCY.labels(route=route)
    for el in ("fire", "earth", "air", "water", "mixed"):
        MET_PROFILES.labels(dominant=el).inc(0)
    GAUGE_APP_UP.set(1.0)
