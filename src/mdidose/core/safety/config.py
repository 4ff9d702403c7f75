from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SafetyConfig:
    """
    Central safety configuration for the dose engine, safety rules and
    input validation. The defaults are the clinical values the engine is
    specified with; override only under medical supervision.
    """
    # Context multipliers
    exercise_factor: float = 0.8
    alcohol_factor: float = 0.7
    illness_factor: float = 1.2
    stress_factor: float = 1.1
    menstruation_factor: float = 1.1
    late_night_factor: float = 0.95  # 22:00-06:59
    evening_factor: float = 0.95  # 19:00-21:59
    high_fat_meal_factor: float = 0.85
    between_meals_factor: float = 0.5  # "50% rule"

    # Dose engine
    dose_increment: float = 0.5
    negative_correction_floor: float = -1.0
    reduction_warning_ratio: float = 0.7
    default_dinner_hour: int = 19

    # Minimum interval between doses ("3-hour rule")
    minimum_hours_between_doses: float = 3.0

    # Between-meal correction
    between_meals_target_multiplier: float = 1.2
    minimum_correction_dose: float = 0.5

    # Pre-sleep evaluation
    pre_sleep_target: float = 140.0
    pre_sleep_low_glucose: float = 100.0
    pre_sleep_caution_glucose: float = 120.0
    pre_sleep_high_glucose: float = 180.0
    pre_sleep_very_high_glucose: float = 250.0
    pre_sleep_snack_carbs: float = 15.0
    pre_sleep_correction_fraction: float = 0.7
    pre_sleep_min_correction: float = 0.5

    # Warning thresholds
    hypoglycemia_threshold: float = 70.0
    low_glucose_threshold: float = 100.0
    very_high_glucose_threshold: float = 300.0
    high_iob_threshold: float = 1.0
    nocturnal_warning_hour: float = 22.0
    high_nocturnal_dose: float = 5.0
    very_high_dose: float = 15.0
