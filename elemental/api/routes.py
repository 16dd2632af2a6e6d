# elemental/api/routes.py
"""
Elemental API routes
- Julian Day for a civil date/time
- Body placements (longitude, sign, element)
- Elemental profile for one subject
- Parent/child comparison with radar-chart rows
- Ops: /api/health, /api/config

Inputs are text or numeric dates ('YYYY-MM-DD' or {year, month, day}) and
optional times ('HH:MM' or {hour, minute}); a missing time means 12:00.
Time zones are not applied: the clock time is used as given.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from elemental.core.compare import ChartSettings, compare_profiles, dominant_elements
from elemental.core.errors import ElementalError
from elemental.core.profile import ElementalProfile, ElementProfiler
from elemental.core.timescales import to_julian_day
from elemental.core.validators import ValidationError, parse_labels, parse_subject
from elemental.utils.metrics import MET_ERRORS, MET_PROFILES
from elemental.version import VERSION

log = logging.getLogger(__name__)
api = Blueprint("api", __name__)


# ───────────────────────── helpers ─────────────────────────
def _json_error(code: str, details: Any = None, http: int = 400):
    out: Dict[str, Any] = {"ok": False, "error": code}
    if details is not None:
        out["details"] = details
    MET_ERRORS.labels(code=code).inc()
    return jsonify(out), http


def _body_json() -> Dict[str, Any]:
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise BadRequest("JSON body must be an object")
    return data


def _profiler() -> ElementProfiler:
    return current_app.extensions["elemental"]["profiler"]


def _chart() -> ChartSettings:
    return current_app.extensions["elemental"]["chart"]


def _count_profile(profile: ElementalProfile) -> None:
    top = dominant_elements(profile)
    MET_PROFILES.labels(dominant=top[0] if len(top) == 1 else "mixed").inc()


@api.errorhandler(ValidationError)
def _validation_error(e: ValidationError):
    log.info("validation_error at %s: %s", request.path, e.errors())
    return _json_error("validation_error", e.errors(), 400)


@api.errorhandler(ElementalError)
def _elemental_error(e: ElementalError):
    log.warning("%s at %s: %s", e.code, request.path, e)
    return _json_error(e.code, str(e), 400)


# ───────────────────────── health / ops ─────────────────────────
@api.get("/api/health")
def health():
    return jsonify({"ok": True, "status": "up", "version": VERSION}), 200


@api.get("/api/config")
def config_info():
    prof = _profiler()
    chart = _chart()
    return jsonify(
        {
            "ok": True,
            "tracked_bodies": list(prof.bodies),
            "weights": prof.weights.to_dict(),
            "default_weight": prof.weights.default,
            "expected_total": prof.expected_total,
            "catalog": prof.catalog.to_dict(),
            "full_mark": chart.full_mark,
            "version": VERSION,
        }
    ), 200


# ───────────────────────── single subject ─────────────────────────
@api.post("/api/julian-day")
def julian_day():
    date, time_ = parse_subject(_body_json())
    return jsonify({"ok": True, "jd": to_julian_day(date, time_)}), 200


@api.post("/api/positions")
def positions():
    date, time_ = parse_subject(_body_json())
    jd = to_julian_day(date, time_)
    rows = [p.to_dict() for p in _profiler().placements_at(jd)]
    return jsonify({"ok": True, "jd": jd, "bodies": rows}), 200


@api.post("/api/profile")
def profile():
    date, time_ = parse_subject(_body_json())
    jd = to_julian_day(date, time_)
    prof = _profiler().profile_at(jd)
    _count_profile(prof)
    return jsonify(
        {
            "ok": True,
            "jd": jd,
            "profile": prof.to_dict(),
            "total": prof.total,
            "dominant": dominant_elements(prof),
        }
    ), 200


# ───────────────────────── comparison ─────────────────────────
@api.post("/api/compare")
def compare():
    body = _body_json()
    errs = []
    subjects = {}
    for key in ("parent", "child"):
        try:
            subjects[key] = parse_subject(body, key)
        except ValidationError as e:
            errs.extend(e.errors())
    if errs:
        raise ValidationError(errs)

    chart = _chart()
    labels = dict(chart.labels)
    labels.update(parse_labels(body.get("labels")) or {})

    prof = _profiler()
    parent = prof.compute(*subjects["parent"])
    child = prof.compute(*subjects["child"])
    for p in (parent, child):
        _count_profile(p)

    cmp = compare_profiles(
        parent,
        child,
        full_mark=chart.full_mark,
        labels=labels,
    )
    return jsonify({"ok": True, **cmp.to_dict()}), 200
