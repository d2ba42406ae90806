"""Common types and helpers shared across models."""

import math
from datetime import UTC, datetime
from typing import Any, TypeAlias

UnixSeconds: TypeAlias = int
OffsetSeconds: TypeAlias = int


def utc_now() -> datetime:
    return datetime.now(UTC)


def finite_number(value: Any) -> float | None:
    """Coerce a provider value to a float, or None if it is not finite.

    Numeric strings are accepted the same way the provider's own clients
    accept them; booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def real_number(value: Any) -> float | None:
    """Like finite_number but only for values that are already numeric."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return finite_number(value)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
