"""
Carbs On Board (COB) with a linear absorption model.

Absorption duration depends on the meal type (3-6 hours). The model does not
see real absorption and ignores individual factors such as gastroparesis.
"""
from __future__ import annotations

from typing import Iterable

from mdidose.core.iob import DECAY_PRECISION
from mdidose.core.models import Meal
from mdidose.utils.math import clamp_value, determine_absorption_duration, hours_between, round_half_up


def calculate_remaining_cob(
    carbohydrates: float, hours_since: float, absorption_hours: float
) -> float:
    if hours_since >= absorption_hours or hours_since < 0:
        return 0.0
    absorbed_fraction = round(hours_since / absorption_hours, DECAY_PRECISION)
    return max(0.0, carbohydrates * (1.0 - absorbed_fraction))


def calculate_cob(meals: Iterable[Meal], now: float) -> int:
    """Pending carbohydrates at ``now`` (epoch ms), rounded to whole grams."""
    total_cob = 0.0
    for meal in meals:
        total_cob += calculate_remaining_cob(
            meal.carbohydrates,
            hours_between(now, meal.timestamp),
            determine_absorption_duration(meal.type),
        )
    return round_half_up(total_cob)


def percentage_absorbed(meal: Meal, now: float) -> int:
    """Share of the meal already absorbed, as an integer percentage 0-100."""
    hours_since = hours_between(now, meal.timestamp)
    absorption_hours = determine_absorption_duration(meal.type)
    return int(clamp_value(round_half_up(hours_since / absorption_hours * 100), 0, 100))
