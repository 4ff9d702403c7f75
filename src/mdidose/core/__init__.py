from .models import (
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
from .iob import calculate_iob, calculate_remaining_iob, hours_since_last_injection, is_safe_for_new_dose
from .cob import calculate_cob, calculate_remaining_cob, percentage_absorbed
from .safety import (
    InputValidator,
    SafetyConfig,
    apply_safety_factor,
    calculate_between_meal_correction,
    check_3_hour_rule,
    evaluate_pre_sleep,
    generate_warnings,
    safety_multipliers,
)
from .dose import (
    calculate_breakfast_dose,
    calculate_correction_dose,
    calculate_dinner_dose,
    calculate_dose,
    calculate_lunch_dose,
)
