"""
Contextual safety rules for MDI dosing: context multipliers, the minimum
interval between doses, pre-sleep evaluation, conservative between-meal
corrections and advisory warnings.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from mdidose.core.iob import calculate_iob, hours_since_last_injection, is_safe_for_new_dose
from mdidose.core.models import (
    CorrectionResult,
    DoseContext,
    Injection,
    PreSleepAction,
    PreSleepEvaluation,
)
from mdidose.core.safety.config import SafetyConfig
from mdidose.i18n import Message
from mdidose.utils.math import now_ms, round_dose, round_half_up

logger = logging.getLogger("mdidose.safety")

MULTIPLIER_PRECISION = 10


def is_late_night(hour_of_day: Optional[float]) -> bool:
    """22:00 to 06:59 inclusive of hour 6."""
    return hour_of_day is not None and (hour_of_day >= 22 or hour_of_day <= 6)


def is_evening(hour_of_day: Optional[float]) -> bool:
    """Dinner window, 19:00-21:59."""
    return hour_of_day is not None and 19 <= hour_of_day < 22


def safety_multipliers(
    context: Optional[DoseContext], config: Optional[SafetyConfig] = None
) -> Dict[str, float]:
    """Applied factor name -> multiplier, for every factor active in ``context``."""
    if context is None:
        return {}
    if config is None:
        config = SafetyConfig()

    checks = (
        ("exercise", context.recent_exercise, config.exercise_factor),
        ("alcohol", context.alcohol, config.alcohol_factor),
        ("illness", context.illness, config.illness_factor),
        ("stress", context.stress, config.stress_factor),
        ("menstruation", context.menstruation, config.menstruation_factor),
        ("late_night", is_late_night(context.hour_of_day), config.late_night_factor),
        ("evening", is_evening(context.hour_of_day), config.evening_factor),
        ("high_fat_meal", context.high_fat_meal, config.high_fat_meal_factor),
    )
    return {name: factor for name, active, factor in checks if active}


def apply_safety_factor(
    calculated_dose: float,
    context: Optional[DoseContext] = None,
    config: Optional[SafetyConfig] = None,
) -> float:
    """
    Scales a dose by every applicable context multiplier.

    Exercise -20%, alcohol -30%, illness +20%, stress +10%, menstruation
    +10%, late night or evening -5%, high-fat meal -15%. Without a context
    the dose is returned unchanged.
    """
    if context is None:
        return calculated_dose

    safety_factor = 1.0
    for factor in safety_multipliers(context, config).values():
        safety_factor *= factor
    return round(calculated_dose * safety_factor, MULTIPLIER_PRECISION)


def check_3_hour_rule(
    previous_injections: Sequence[Injection],
    now: float,
    config: Optional[SafetyConfig] = None,
) -> bool:
    """Never correct again within 3 hours of the last dose (insulin stacking)."""
    if config is None:
        config = SafetyConfig()
    return is_safe_for_new_dose(previous_injections, now, config.minimum_hours_between_doses)


def evaluate_pre_sleep(
    glucose: float,
    previous_injections: Sequence[Injection],
    dia_hours: float,
    isf: float,
    now: Optional[float] = None,
    config: Optional[SafetyConfig] = None,
) -> PreSleepEvaluation:
    """
    Decides what to do before going to sleep.

    - glucose < 100, or < 120 with IOB > 1U: eat a 15g snack without insulin
    - glucose > 250: 70% of the correction toward 140 mg/dL, if above 0.5U
    - glucose 180-250: monitor, check around 3 AM
    - otherwise: sleep
    """
    if config is None:
        config = SafetyConfig()
    if now is None:
        now = now_ms()

    iob = calculate_iob(previous_injections, now, dia_hours)

    if glucose < config.pre_sleep_low_glucose or (
        glucose < config.pre_sleep_caution_glucose and iob > config.high_iob_threshold
    ):
        return PreSleepEvaluation(
            action=PreSleepAction.EAT_SNACK,
            correction_dose=0.0,
            snack=True,
            carbohydrates=config.pre_sleep_snack_carbs,
            warning=Message(
                "pre_sleep.risk_nocturnal_hypo",
                {"carbohydrates": round_half_up(config.pre_sleep_snack_carbs)},
            ),
            iob=iob,
        )

    if glucose > config.pre_sleep_very_high_glucose:
        correction = (glucose - config.pre_sleep_target) / isf - iob
        if correction > config.pre_sleep_min_correction:
            return PreSleepEvaluation(
                action=PreSleepAction.SMALL_CORRECTION,
                correction_dose=round_dose(
                    correction * config.pre_sleep_correction_fraction, config.dose_increment
                ),
                snack=False,
                warning=Message("pre_sleep.very_high_glucose"),
                iob=iob,
            )

    if config.pre_sleep_high_glucose <= glucose <= config.pre_sleep_very_high_glucose:
        return PreSleepEvaluation(
            action=PreSleepAction.MONITOR,
            correction_dose=0.0,
            snack=False,
            warning=Message("pre_sleep.monitor_trend"),
            iob=iob,
        )

    return PreSleepEvaluation(
        action=PreSleepAction.SLEEP,
        correction_dose=0.0,
        snack=False,
        warning=None,
        iob=iob,
    )


def calculate_between_meal_correction(
    glucose: float,
    target_glucose: float,
    previous_injections: Sequence[Injection],
    dia_hours: float,
    isf: float,
    now: Optional[float] = None,
    config: Optional[SafetyConfig] = None,
) -> CorrectionResult:
    """
    Conservative correction outside meals.

    Waits for the 3-hour rule, aims at a target 20% above the meal target,
    subtracts IOB, then applies only half of the result ("50% rule") with a
    0.5U minimum whenever a correction is warranted.
    """
    if config is None:
        config = SafetyConfig()
    if now is None:
        now = now_ms()

    if not check_3_hour_rule(previous_injections, now, config):
        hours_since_last = hours_since_last_injection(previous_injections, now) or 0.0
        logger.info(
            "Between-meal correction blocked: last dose %.2f h ago (minimum %.1f h)",
            hours_since_last,
            config.minimum_hours_between_doses,
        )
        return CorrectionResult(
            dose=0.0,
            reason=Message("correction.wait_3_hours", {"hours": round_half_up(hours_since_last)}),
            recommended_action="monitor",
        )

    iob = calculate_iob(previous_injections, now, dia_hours)
    target = target_glucose * config.between_meals_target_multiplier
    correction = (glucose - target) / isf - iob

    if correction > 0:
        correction *= config.between_meals_factor
        dose = max(config.minimum_correction_dose, round_dose(correction, config.dose_increment))
        return CorrectionResult(
            dose=dose,
            reason=Message("correction.conservative_correction", {"iob": f"{iob:.1f}"}),
            iob=iob,
            precaution=Message("correction.check_glucose"),
        )

    return CorrectionResult(
        dose=0.0,
        reason=Message("correction.no_correction_needed"),
        iob=iob,
    )


def generate_warnings(
    glucose: float,
    iob: float,
    dose: float,
    carbohydrates: float,
    context: Optional[DoseContext] = None,
    config: Optional[SafetyConfig] = None,
) -> List[Message]:
    """
    Advisory warnings for a computed dose. Every check runs; none of them
    aborts the calculation.
    """
    if config is None:
        config = SafetyConfig()
    warnings: List[Message] = []

    if glucose < config.hypoglycemia_threshold:
        warnings.append(Message("warnings.hypoglycemia"))

    if glucose < config.low_glucose_threshold and iob > config.high_iob_threshold:
        warnings.append(Message("warnings.high_iob_low_glucose"))

    if glucose > config.very_high_glucose_threshold:
        warnings.append(Message("warnings.very_high_glucose"))

    if dose == 0 and carbohydrates > 0:
        warnings.append(Message("warnings.carbs_without_insulin"))

    hour = context.hour_of_day if context is not None else None
    if hour is not None and hour >= config.nocturnal_warning_hour and dose > config.high_nocturnal_dose:
        warnings.append(Message("warnings.high_nocturnal_dose"))

    if dose > config.very_high_dose:
        warnings.append(Message("warnings.very_high_dose"))

    if context is not None:
        for flag in context.active_flags():
            warnings.append(Message(f"warnings.{flag}"))

    return warnings
