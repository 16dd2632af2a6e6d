# elemental/core/validators.py
from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Tuple, Union

from elemental.core.errors import InvalidDateTime
from elemental.core.timescales import DEFAULT_TIME, coerce_date, coerce_time

__all__ = [
    "ValidationError",
    "parse_date",
    "parse_time",
    "parse_subject",
    "parse_labels",
]

# ───────────────────────── errors ─────────────────────────

class ValidationError(ValueError):
    """Request-level validation error; `.errors()` lists {loc, msg, type} dicts."""
    def __init__(self, details: Union[str, Dict[str, Any], List[Dict[str, Any]]]):
        if isinstance(details, str):
            self._details = [{"loc": [], "msg": details, "type": "value_error"}]
        elif isinstance(details, dict):
            self._details = [details]
        else:
            self._details = list(details)
        super().__init__(self._details[0]["msg"] if self._details else "validation_error")

    def errors(self) -> List[Dict[str, Any]]:
        return list(self._details)


def _err(loc: List[str] | str, msg: str, typ: str = "value_error") -> Dict[str, Any]:
    return {"loc": [loc] if isinstance(loc, str) else loc, "msg": msg, "type": typ}

# ───────────────────────── atomic parsers ─────────────────────────

_DATE_RE = re.compile(r"^\s*(?P<y>-?\d{4,6})-(?P<m>\d{2})-(?P<d>\d{2})\s*$")
_TIME_RE = re.compile(r"^\s*(?P<h>\d{1,2}):(?P<m>\d{2})(?::(?P<s>\d{2}))?\s*$")


def parse_date(value: Any, loc: List[str] | None = None) -> Tuple[int, int, int]:
    """'YYYY-MM-DD' or {'year','month','day'} → (y, m, d)."""
    loc = loc or ["date"]
    if isinstance(value, str):
        m = _DATE_RE.match(value)
        if not m:
            raise ValidationError(_err(loc, "date must be 'YYYY-MM-DD'", "value_error.date"))
        value = (int(m.group("y")), int(m.group("m")), int(m.group("d")))
    elif value is None:
        raise ValidationError(_err(loc, "date is required ('YYYY-MM-DD' or {year, month, day})", "value_error.missing"))
    elif not isinstance(value, Mapping):
        raise ValidationError(_err(loc, "date must be 'YYYY-MM-DD' or {year, month, day}", "type_error.date"))
    try:
        return coerce_date(value)
    except InvalidDateTime as e:
        raise ValidationError(_err(loc, str(e), "value_error.date")) from e


def parse_time(value: Any, loc: List[str] | None = None) -> Tuple[int, int]:
    """
    'HH:MM' (':SS' tolerated and dropped), {'hour','minute'}, or missing/blank → 12:00.
    """
    loc = loc or ["time"]
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_TIME
    if isinstance(value, str):
        m = _TIME_RE.match(value)
        if not m:
            raise ValidationError(_err(loc, "time must be 'HH:MM'", "value_error.time"))
        value = (int(m.group("h")), int(m.group("m")))
    elif not isinstance(value, Mapping):
        raise ValidationError(_err(loc, "time must be 'HH:MM' or {hour, minute}", "type_error.time"))
    try:
        return coerce_time(value)
    except InvalidDateTime as e:
        raise ValidationError(_err(loc, str(e), "value_error.time")) from e

# ───────────────────────── payload parsers ─────────────────────────

def parse_subject(body: Mapping[str, Any], key: str | None = None) -> Tuple[Tuple[int, int, int], Tuple[int, int]]:
    """
    Pull (date, time) for one subject. With `key`, reads body[key]; otherwise the
    body itself. Date and time errors are reported together.
    """
    prefix: List[str] = [key] if key else []
    src = body.get(key) if key else body
    if not isinstance(src, Mapping):
        raise ValidationError(_err(prefix or ["body"], "subject must be an object with 'date' and optional 'time'"))

    errs: List[Dict[str, Any]] = []
    date = time = None
    try:
        date = parse_date(src.get("date"), prefix + ["date"])
    except ValidationError as e:
        errs.extend(e.errors())
    try:
        time = parse_time(src.get("time"), prefix + ["time"])
    except ValidationError as e:
        errs.extend(e.errors())
    if errs:
        raise ValidationError(errs)
    return date, time  # type: ignore[return-value]


def parse_labels(value: Any) -> Dict[str, str] | None:
    if value is None:
        return None
    if not isinstance(value, Mapping) or not all(isinstance(v, str) for v in value.values()):
        raise ValidationError(_err("labels", "labels must map element names to strings"))
    return {str(k): v for k, v in value.items()}
