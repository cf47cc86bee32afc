from __future__ import annotations

from typing import Any, Mapping

from ..core.exceptions import InvalidCallError, ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_field(data: Mapping[str, Any], *names: str) -> Any:
    """Return the first present value among ``names`` (aliases of one field)."""
    for name in names:
        value = data.get(name)
        if value is not None and value != "":
            return value
    raise ValidationError(f"{names[0]} is required")


def require_list(value: Any, arg_name: str) -> list:
    """Programmer-error guard: operations over collections never accept None or a scalar."""
    if value is None or isinstance(value, (str, bytes, Mapping)):
        raise InvalidCallError(f"{arg_name} must be a list, got {type(value).__name__}")
    try:
        return list(value)
    except TypeError:
        raise InvalidCallError(f"{arg_name} must be a list, got {type(value).__name__}")
