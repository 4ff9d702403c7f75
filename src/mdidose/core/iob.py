"""
Insulin On Board (IOB) with a linear decay model.

An injection contributes ``units * (1 - hours_since / dia_hours)`` while
``0 <= hours_since < dia_hours`` and nothing otherwise, so future-dated
injections and those older than the DIA window are ignored. Tracking IOB is
what prevents insulin stacking from repeated corrections.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from mdidose.core.models import Injection
from mdidose.utils.math import hours_between

# Decay fractions are snapped to this many decimals for reproducibility.
DECAY_PRECISION = 10


def _remaining_fraction(hours_since: float, duration_hours: float) -> float:
    return max(0.0, round(1.0 - hours_since / duration_hours, DECAY_PRECISION))


def calculate_remaining_iob(units: float, hours_since: float, dia_hours: float) -> float:
    """Remaining active insulin from a single injection."""
    if hours_since >= dia_hours or hours_since < 0:
        return 0.0
    return units * _remaining_fraction(hours_since, dia_hours)


def calculate_iob(injections: Iterable[Injection], now: float, dia_hours: float) -> float:
    """
    Total active insulin at ``now`` (epoch ms).

    Example:
        Six units injected two hours ago with a 4h DIA leave 3.0U on board.
    """
    total_iob = 0.0
    for injection in injections:
        total_iob += calculate_remaining_iob(
            injection.units, hours_between(now, injection.timestamp), dia_hours
        )
    return total_iob


def hours_since_last_injection(injections: Sequence[Injection], now: float) -> Optional[float]:
    if not injections:
        return None
    # Most recent by timestamp, not by position in the list.
    last_injection = max(injections, key=lambda injection: injection.timestamp)
    return hours_between(now, last_injection.timestamp)


def is_safe_for_new_dose(
    injections: Sequence[Injection], now: float, minimum_hours: float = 3.0
) -> bool:
    """True when no injection happened within the last ``minimum_hours``."""
    hours_since_last = hours_since_last_injection(injections, now)
    if hours_since_last is None:
        return True
    return hours_since_last >= minimum_hours
