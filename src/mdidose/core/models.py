from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from mdidose.i18n import Message
from mdidose.utils.math import determine_absorption_duration


class MealType(str, Enum):
    """Meal classification by carbohydrate absorption speed."""
    FAST = "fast"
    NORMAL = "normal"
    SLOW = "slow"
    VERY_SLOW = "very_slow"

    @property
    def absorption_hours(self) -> float:
        return determine_absorption_duration(self.value)


class TimeOfDay(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    CORRECTION = "correction"


class PreSleepAction(str, Enum):
    SLEEP = "sleep"
    EAT_SNACK = "eat_snack"
    SMALL_CORRECTION = "small_correction"
    MONITOR = "monitor"


@dataclass(frozen=True)
class ICRatio:
    """Grams of carbohydrate covered by 1U of insulin, per meal slot."""
    breakfast: float
    lunch: float
    dinner: float

    def for_time_of_day(self, time_of_day: Union[TimeOfDay, str]) -> float:
        slot = TimeOfDay(time_of_day)
        # Corrections carry no carbohydrates; lunch is the neutral default.
        if slot is TimeOfDay.CORRECTION:
            slot = TimeOfDay.LUNCH
        return getattr(self, slot.value)


@dataclass(frozen=True)
class InsulinProfile:
    """
    Per-patient dosing parameters, supplied by the calling layer.
    """
    isf: float  # mg/dL lowered by 1U
    ic_ratio: ICRatio
    dia_hours: float  # Duration of insulin action, typically 3-5h
    target: float = 100.0  # mg/dL


@dataclass(frozen=True)
class Injection:
    timestamp: float  # epoch milliseconds
    units: float


@dataclass(frozen=True)
class Meal:
    timestamp: float  # epoch milliseconds
    carbohydrates: float  # grams
    type: MealType = MealType.NORMAL


@dataclass(frozen=True)
class DoseContext:
    """
    Situational modifiers for a dose. Every flag is independent; all active
    multipliers compose.
    """
    recent_exercise: bool = False  # exercise in the last 4-6 hours
    alcohol: bool = False
    illness: bool = False
    stress: bool = False
    menstruation: bool = False
    high_fat_meal: bool = False
    hour_of_day: Optional[float] = None  # 0-23, None when unknown

    def active_flags(self) -> List[str]:
        flags = (
            "recent_exercise",
            "alcohol",
            "high_fat_meal",
            "illness",
            "stress",
            "menstruation",
        )
        return [name for name in flags if getattr(self, name)]


@dataclass(frozen=True)
class DoseCalculationInput:
    """
    Inputs for one dose. ``time_of_day`` may be left unset when the input is
    handed to a slot-specific helper such as ``calculate_breakfast_dose``.
    """
    glucose: float  # mg/dL
    time_of_day: Optional[TimeOfDay] = None
    carbohydrates: float = 0.0
    previous_injections: Sequence[Injection] = ()
    context: Optional[DoseContext] = field(default_factory=DoseContext)  # None means no modifiers


@dataclass(frozen=True)
class DoseAdjustments:
    """Signed percentage applied by each factor, e.g. exercise=-20."""
    exercise: Optional[int] = None
    alcohol: Optional[int] = None
    illness: Optional[int] = None
    stress: Optional[int] = None
    menstruation: Optional[int] = None
    nocturnal: Optional[int] = None
    high_fat_meal: Optional[int] = None
    between_meals: Optional[int] = None

    def to_dict(self) -> Dict[str, int]:
        return {name: value for name, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class DoseBreakdown:
    prandial: float
    correction: float  # gross correction, before the IOB offset
    iob: float
    adjustments: Optional[DoseAdjustments] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "prandial": self.prandial,
            "correction": self.correction,
            "iob": self.iob,
        }
        if self.adjustments is not None:
            data["adjustments"] = self.adjustments.to_dict()
        return data


@dataclass(frozen=True)
class DoseResult:
    """Recommended dose, rounded to the pen increment, with its derivation."""
    dose: float
    breakdown: DoseBreakdown
    warnings: List[Message] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dose": self.dose,
            "breakdown": self.breakdown.to_dict(),
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


@dataclass(frozen=True)
class PreSleepEvaluation:
    action: PreSleepAction
    correction_dose: float
    snack: bool
    carbohydrates: Optional[float] = None
    warning: Optional[Message] = None
    iob: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "correction_dose": self.correction_dose,
            "snack": self.snack,
            "carbohydrates": self.carbohydrates,
            "warning": self.warning.to_dict() if self.warning else None,
            "iob": self.iob,
        }


@dataclass(frozen=True)
class CorrectionResult:
    """Outcome of a between-meal correction request."""
    dose: float
    reason: Message
    recommended_action: Optional[str] = None
    iob: Optional[float] = None
    precaution: Optional[Message] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dose": self.dose,
            "reason": self.reason.to_dict(),
            "recommended_action": self.recommended_action,
            "iob": self.iob,
            "precaution": self.precaution.to_dict() if self.precaution else None,
        }


@dataclass(frozen=True)
class GlucoseMeasurement:
    timestamp: float  # epoch milliseconds
    glucose: float
    glucose_3h_later: Optional[float] = None
    insulin: Optional[float] = None
    carbs: Optional[float] = None

    @property
    def analyzed_glucose(self) -> float:
        """Post-treatment reading when available, otherwise the raw one."""
        return self.glucose_3h_later if self.glucose_3h_later is not None else self.glucose


@dataclass(frozen=True)
class DayRecord:
    date: str
    measurements: Sequence[GlucoseMeasurement] = ()


@dataclass(frozen=True)
class ValidationResult:
    days_in_range: float  # fraction of days, 0-1
    hypoglycemia_rate: float  # fraction of measurements
    hyperglycemia_rate: float
    recommendation: Message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days_in_range": self.days_in_range,
            "hypoglycemia_rate": self.hypoglycemia_rate,
            "hyperglycemia_rate": self.hyperglycemia_rate,
            "recommendation": self.recommendation.to_dict(),
        }


@dataclass(frozen=True)
class PatternReport:
    identified_patterns: List[Message]
    suggestions: List[Message]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identified_patterns": [pattern.to_dict() for pattern in self.identified_patterns],
            "suggestions": [suggestion.to_dict() for suggestion in self.suggestions],
        }
