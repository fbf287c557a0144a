from __future__ import annotations

import re
from typing import Any


class ValidationError(ValueError):
    """400-level input problem."""


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_quantity(value: Any, *, default: int = 1) -> int:
    """
    Parse a requested kit quantity permissively.

    Missing or empty values fall back to `default`. Strings are read up to the
    first non-digit ("3abc" -> 3), the way storefront webhooks send them.
    No upper bound is applied.
    """
    if value is None or value == "":
        return default

    if isinstance(value, bool):
        raise ValidationError("quantity must be an integer")

    if isinstance(value, int):
        quantity = value
    elif isinstance(value, float):
        try:
            quantity = int(value)
        except (OverflowError, ValueError):
            raise ValidationError("quantity must be an integer") from None
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            raise ValidationError("quantity must be an integer")
        quantity = int(match.group(1))
    else:
        raise ValidationError("quantity must be an integer")

    if quantity <= 0:
        raise ValidationError("quantity must be positive")
    return quantity


def parse_id_list(value: Any) -> list[int]:
    """Validate an `ids` payload: non-empty list of integer ids, duplicates dropped."""
    if not isinstance(value, list) or not value:
        raise ValidationError("Invalid request. Provide an array of IDs.")

    ids: list[int] = []
    for raw in value:
        if isinstance(raw, bool):
            raise ValidationError(f"Invalid id: {raw!r}")
        try:
            kit_id = int(raw)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid id: {raw!r}") from None
        if kit_id not in ids:
            ids.append(kit_id)
    return ids


def require_fields(payload: dict, fields: list[str]) -> None:
    missing = [f for f in fields if payload.get(f) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def optional_str(payload: dict, key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    return str(value).strip() or None
