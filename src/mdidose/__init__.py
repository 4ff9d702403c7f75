# src/mdidose/__init__.py

__version__ = "0.1.0"

# Domain types
from .core.models import (
    CorrectionResult,
    DayRecord,
    DoseAdjustments,
    DoseBreakdown,
    DoseCalculationInput,
    DoseContext,
    DoseResult,
    GlucoseMeasurement,
    ICRatio,
    Injection,
    InsulinProfile,
    Meal,
    MealType,
    PatternReport,
    PreSleepAction,
    PreSleepEvaluation,
    TimeOfDay,
    ValidationResult,
)

# Decay models
from .core.iob import calculate_iob, calculate_remaining_iob, hours_since_last_injection, is_safe_for_new_dose
from .core.cob import calculate_cob, calculate_remaining_cob, percentage_absorbed

# Safety rules
from .core.safety import (
    InputValidator,
    SafetyConfig,
    apply_safety_factor,
    calculate_between_meal_correction,
    check_3_hour_rule,
    evaluate_pre_sleep,
    generate_warnings,
    safety_multipliers,
)

# Dose engine
from .core.dose import (
    calculate_breakfast_dose,
    calculate_correction_dose,
    calculate_dinner_dose,
    calculate_dose,
    calculate_lunch_dose,
)

# Retrospective analysis
from .analysis.model_validator import (
    analyze_patterns,
    generate_adjustment_recommendation,
    measurements_frame,
    validate_weekly_model,
)

# Localization
from .i18n import SUPPORTED_LANGUAGES, Message, Translator

# Input schemas and configuration files
from .validation import (
    format_validation_error,
    load_insulin_profile,
    load_safety_config,
    validate_dose_calculation_input,
    validate_insulin_profile,
    validate_weekly_record,
)

from .utils.math import determine_absorption_duration, round_dose

__all__ = [
    # Domain types
    "CorrectionResult",
    "DayRecord",
    "DoseAdjustments",
    "DoseBreakdown",
    "DoseCalculationInput",
    "DoseContext",
    "DoseResult",
    "GlucoseMeasurement",
    "ICRatio",
    "Injection",
    "InsulinProfile",
    "Meal",
    "MealType",
    "PatternReport",
    "PreSleepAction",
    "PreSleepEvaluation",
    "TimeOfDay",
    "ValidationResult",
    # Decay models
    "calculate_iob",
    "calculate_remaining_iob",
    "hours_since_last_injection",
    "is_safe_for_new_dose",
    "calculate_cob",
    "calculate_remaining_cob",
    "percentage_absorbed",
    # Safety rules
    "InputValidator",
    "SafetyConfig",
    "apply_safety_factor",
    "calculate_between_meal_correction",
    "check_3_hour_rule",
    "evaluate_pre_sleep",
    "generate_warnings",
    "safety_multipliers",
    # Dose engine
    "calculate_breakfast_dose",
    "calculate_correction_dose",
    "calculate_dinner_dose",
    "calculate_dose",
    "calculate_lunch_dose",
    # Retrospective analysis
    "analyze_patterns",
    "generate_adjustment_recommendation",
    "measurements_frame",
    "validate_weekly_model",
    # Localization
    "SUPPORTED_LANGUAGES",
    "Message",
    "Translator",
    # Input schemas and configuration files
    "format_validation_error",
    "load_insulin_profile",
    "load_safety_config",
    "validate_dose_calculation_input",
    "validate_insulin_profile",
    "validate_weekly_record",
    # Utilities
    "determine_absorption_duration",
    "round_dose",
]
