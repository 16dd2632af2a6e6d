from __future__ import annotations

"""
Pytest configuration for the elemental suite.

- Registers Hypothesis profiles for local dev and CI.
- Provides a Flask app/client built from the repo's default config.
- Sanity-checks ERFA availability (used as an independent Julian Day reference).
"""

import os
import pytest
from hypothesis import settings, HealthCheck


# ──────────────────────────────────────────────────────────────────────────────
# Hypothesis profiles
# ──────────────────────────────────────────────────────────────────────────────
settings.register_profile(
    "dev",
    settings(
        deadline=None,           # avoid flaky timeouts on slower runners
        max_examples=60,         # fast local runs
        suppress_health_check=[HealthCheck.too_slow],
    ),
)
settings.register_profile(
    "ci",
    settings(
        deadline=None,
        max_examples=200,        # a bit more coverage in CI
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

_profile = (
    "ci"
    if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)
settings.load_profile(_profile)

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULTS_YAML = os.path.join(ROOT, "config", "defaults.yaml")


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "slow: mark test as slow")


def pytest_report_header(config: pytest.Config) -> str:
    return f"Hypothesis profile: '{_profile}'"


# ──────────────────────────────────────────────────────────────────────────────
# Global fixtures
# ──────────────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def ensure_erfa():
    """
    Fail early if ERFA/pyERFA isn't importable or missing cal2jd.
    """
    import erfa  # pyERFA exposes the ERFA namespace as 'erfa'
    assert hasattr(erfa, "cal2jd"), "ERFA.cal2jd not available"
    return erfa


@pytest.fixture()
def app():
    from elemental.main import create_app
    from elemental.utils.config import load_config

    application = create_app(load_config(DEFAULTS_YAML))
    application.testing = True
    return application


@pytest.fixture()
def client(app):
    return app.test_client()
