from .config import SafetyConfig
from .input_validator import InputValidator
from .rules import (
    apply_safety_factor,
    calculate_between_meal_correction,
    check_3_hour_rule,
    evaluate_pre_sleep,
    generate_warnings,
    safety_multipliers,
)

__all__ = [
    "SafetyConfig",
    "InputValidator",
    "apply_safety_factor",
    "calculate_between_meal_correction",
    "check_3_hour_rule",
    "evaluate_pre_sleep",
    "generate_warnings",
    "safety_multipliers",
]
