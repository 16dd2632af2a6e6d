# elemental/core/errors.py
from __future__ import annotations

__all__ = [
    "ElementalError",
    "InvalidBody",
    "InvalidElements",
    "InvalidDateTime",
    "ConfigError",
]


class ElementalError(ValueError):
    """Base error for the elemental core. `code` is stable and safe to put on the wire."""
    code = "elemental_error"

    def __init__(self, message: str, code: str | None = None):
        if code is not None:
            self.code = code
        super().__init__(f"{self.code}: {message}")


class InvalidBody(ElementalError):
    code = "invalid_body"

    def __init__(self, body: str, allowed=()):
        self.body = body
        detail = f"'{body}' is not in the body catalog"
        if allowed:
            detail += f" (allowed: {', '.join(sorted(allowed))})"
        super().__init__(detail)


class InvalidElements(ElementalError):
    code = "invalid_elements"


class InvalidDateTime(ElementalError):
    code = "invalid_datetime"


class ConfigError(ElementalError):
    code = "invalid_config"
