"""
MDI dose calculation.

    TOTAL = CARBOHYDRATES / IC_RATIO + max(0, (GLUCOSE - TARGET) / ISF - IOB)

The total is halved for between-meal corrections, scaled by the context
safety factors and rounded to the 0.5U pen increment.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from mdidose.core.iob import calculate_iob
from mdidose.core.models import (
    DoseAdjustments,
    DoseBreakdown,
    DoseCalculationInput,
    DoseContext,
    DoseResult,
    InsulinProfile,
    TimeOfDay,
)
from mdidose.core.safety.config import SafetyConfig
from mdidose.core.safety.input_validator import InputValidator
from mdidose.core.safety.rules import apply_safety_factor, generate_warnings, safety_multipliers
from mdidose.i18n import Message
from mdidose.utils.math import now_ms, round_decimals, round_dose, round_half_up

logger = logging.getLogger("mdidose.dose")

_ADJUSTMENT_FIELDS = {
    "exercise": "exercise",
    "alcohol": "alcohol",
    "illness": "illness",
    "stress": "stress",
    "menstruation": "menstruation",
    "late_night": "nocturnal",
    "evening": "nocturnal",
    "high_fat_meal": "high_fat_meal",
}


def _build_adjustments(
    data: DoseCalculationInput, is_correction: bool, config: SafetyConfig
) -> Optional[DoseAdjustments]:
    percentages = {}
    for name, factor in safety_multipliers(data.context, config).items():
        percentages[_ADJUSTMENT_FIELDS[name]] = round_half_up((factor - 1.0) * 100)
    if is_correction:
        percentages["between_meals"] = round_half_up((config.between_meals_factor - 1.0) * 100)
    if not percentages:
        return None
    return DoseAdjustments(**percentages)


def calculate_dose(
    profile: InsulinProfile,
    data: DoseCalculationInput,
    now: Optional[float] = None,
    config: Optional[SafetyConfig] = None,
) -> DoseResult:
    """
    Calculates the recommended insulin dose.

    Args:
        profile: ISF, IC ratios, DIA and target of the patient.
        data: Current glucose, carbohydrates, slot, injection history and context.
        now: Epoch milliseconds used for the IOB decay. Defaults to the current time;
             pass it explicitly for reproducible results.
        config: Safety thresholds and multipliers.

    Returns:
        DoseResult: Rounded dose, its breakdown and the advisory warnings.

    Raises:
        ValueError: If an input is NaN, negative where it cannot be, or the
                    profile holds non-positive parameters.

    Example:
        With ISF 50, breakfast IC ratio 15, target 100 and no IOB, 60g at
        150 mg/dL gives 4.0U prandial + 1.0U correction = 5.0U.
    """
    if config is None:
        config = SafetyConfig()
    if now is None:
        now = now_ms()
    InputValidator().validate_dose_input(profile, data)

    time_of_day = TimeOfDay(data.time_of_day)
    is_correction = time_of_day is TimeOfDay.CORRECTION
    carbohydrates = data.carbohydrates
    context = data.context

    iob = calculate_iob(data.previous_injections, now, profile.dia_hours)

    ic_ratio = profile.ic_ratio.for_time_of_day(time_of_day)
    prandial_insulin = carbohydrates / ic_ratio if carbohydrates > 0 else 0.0

    correction_insulin = (data.glucose - profile.target) / profile.isf - iob
    # Large negative corrections would only hide a real prandial need.
    if correction_insulin < config.negative_correction_floor:
        correction_insulin = 0.0

    total_dose = prandial_insulin + max(0.0, correction_insulin)
    dose_before_adjustment = total_dose

    if is_correction:
        total_dose *= config.between_meals_factor

    total_dose = apply_safety_factor(total_dose, context, config)
    total_dose = max(0.0, round_dose(total_dose, config.dose_increment))

    logger.debug(
        "%s dose: prandial=%.2fU correction=%.2fU iob=%.2fU before=%.2fU final=%.1fU",
        time_of_day.value,
        prandial_insulin,
        correction_insulin,
        iob,
        dose_before_adjustment,
        total_dose,
    )

    warnings = generate_warnings(data.glucose, iob, total_dose, carbohydrates, context, config)
    if (
        dose_before_adjustment > 0
        and total_dose > 0
        and total_dose / dose_before_adjustment < config.reduction_warning_ratio
    ):
        warnings.append(
            Message(
                "dose.reduced_by_factors",
                {"reduction": round_half_up((1 - total_dose / dose_before_adjustment) * 100)},
            )
        )

    breakdown = DoseBreakdown(
        prandial=round_decimals(prandial_insulin, 1),
        correction=round_decimals(max(0.0, correction_insulin + iob), 1),
        iob=round_decimals(iob, 1),
        adjustments=_build_adjustments(data, is_correction, config),
    )
    return DoseResult(dose=total_dose, breakdown=breakdown, warnings=warnings)


def calculate_breakfast_dose(
    profile: InsulinProfile,
    data: DoseCalculationInput,
    now: Optional[float] = None,
    config: Optional[SafetyConfig] = None,
) -> DoseResult:
    return calculate_dose(profile, dataclasses.replace(data, time_of_day=TimeOfDay.BREAKFAST), now, config)


def calculate_lunch_dose(
    profile: InsulinProfile,
    data: DoseCalculationInput,
    now: Optional[float] = None,
    config: Optional[SafetyConfig] = None,
) -> DoseResult:
    return calculate_dose(profile, dataclasses.replace(data, time_of_day=TimeOfDay.LUNCH), now, config)


def calculate_dinner_dose(
    profile: InsulinProfile,
    data: DoseCalculationInput,
    now: Optional[float] = None,
    config: Optional[SafetyConfig] = None,
) -> DoseResult:
    """Dinner dose; an unknown hour defaults to 19:00 so the evening factor applies."""
    if config is None:
        config = SafetyConfig()
    context = data.context if data.context is not None else DoseContext()
    if context.hour_of_day is None:
        context = dataclasses.replace(context, hour_of_day=config.default_dinner_hour)
    dinner_data = dataclasses.replace(data, time_of_day=TimeOfDay.DINNER, context=context)
    return calculate_dose(profile, dinner_data, now, config)


def calculate_correction_dose(
    profile: InsulinProfile,
    data: DoseCalculationInput,
    now: Optional[float] = None,
    config: Optional[SafetyConfig] = None,
) -> DoseResult:
    """Between-meal correction through the dose engine; carbohydrates are ignored."""
    correction_data = dataclasses.replace(
        data, time_of_day=TimeOfDay.CORRECTION, carbohydrates=0.0
    )
    return calculate_dose(profile, correction_data, now, config)
