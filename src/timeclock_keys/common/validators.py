from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return str(value).strip()


def require_keys(patch: dict, allowed: set[str], what: str) -> dict:
    unknown = set(patch or {}) - allowed
    if unknown:
        raise ValidationError(f"{what} cannot change: {', '.join(sorted(unknown))}")
    return dict(patch or {})
