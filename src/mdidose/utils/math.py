from __future__ import annotations

import math
import time
from typing import Any, Dict

# Scaled values are snapped to this many decimals before rounding so that
# float drift such as 4.4999999999 cannot flip a half-step.
ROUNDING_PRECISION = 9

# Carbohydrate absorption duration in hours, keyed by meal type.
ABSORPTION_HOURS: Dict[str, float] = {
    "fast": 3.0,       # juices, candy
    "normal": 4.0,     # balanced meal
    "slow": 5.0,       # high in fat/protein
    "very_slow": 6.0,  # pizza, very fatty meal
}

MS_PER_HOUR = 3_600_000.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return int(math.floor(round(value, ROUNDING_PRECISION) + 0.5))


def round_dose(value: float, increment: float = 0.5) -> float:
    """
    Rounds an insulin dose to the pen increment.

    Examples:
        round_dose(3.7) -> 3.5
        round_dose(3.8) -> 4.0
    """
    if increment <= 0:
        return value
    return round_half_up(value / increment) * increment


def round_decimals(value: float, decimals: int = 1) -> float:
    factor = 10 ** decimals
    return round_half_up(value * factor) / factor


def clamp_value(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def determine_absorption_duration(meal_type: Any) -> float:
    """Absorption duration in hours for a meal type (enum member or plain string)."""
    key = getattr(meal_type, "value", meal_type)
    try:
        return ABSORPTION_HOURS[key]
    except KeyError:
        raise ValueError(
            f"Unknown meal type {meal_type!r}. Expected one of {sorted(ABSORPTION_HOURS)}."
        ) from None


def hours_between(now_ms: float, timestamp_ms: float) -> float:
    return (now_ms - timestamp_ms) / MS_PER_HOUR


def now_ms() -> float:
    """Current wall-clock time as epoch milliseconds."""
    return time.time() * 1000.0
