from __future__ import annotations

from enum import Enum
from typing import TypeVar

from app.application.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_MARKUP_CHARS = str.maketrans("", "", "<>")


def sanitize_text(value: str | None) -> str:
    """Drop markup angle brackets and surrounding whitespace."""
    return (value or "").translate(_MARKUP_CHARS).strip()


def require_text(value: str | None, field_name: str) -> str:
    cleaned = sanitize_text(value)
    if not cleaned:
        raise ValidationError(f"{field_name} is required")
    return cleaned


def parse_enum(enum_cls: type[E], value: str | E | None, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls((value or "").strip())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None
