from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

E = TypeVar("E", bound=Enum)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_fields(data: Mapping[str, Any], *fields: str, message: Optional[str] = None) -> None:
    """Reject the payload when any of ``fields`` is missing or blank."""
    missing = [f for f in fields if is_blank(data.get(f))]
    if missing:
        raise ValidationError(message or f"Missing required fields: {', '.join(missing)}")


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_bool(value: Any, field_name: str) -> bool:
    """Only a real JSON boolean is accepted; ``"false"`` is not ``False``."""
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")
    return value


def require_enum(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None


def require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None


def require_iso_date(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    try:
        parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date") from None
    return value


def require_key_part(value: Any, field_name: str) -> str:
    """Identifier used inside a record key: non-empty and free of ':'."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError(f"{field_name} is required")
    value = str(value).strip()
    if not value:
        raise ValidationError(f"{field_name} is required")
    if ":" in value:
        raise ValidationError(f"{field_name} must not contain ':'")
    return value
