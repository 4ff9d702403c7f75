import math
import numbers
from typing import Iterable, Optional

from mdidose.core.models import DoseCalculationInput, Injection, InsulinProfile


class InputValidator:
    """
    Guards against semantically impossible inputs before a dose is computed.

    The algorithms themselves clamp rather than throw, and plausibility
    ranges (20-600 mg/dL and so on) belong to the schema layer. This filter
    only rejects values no calculation can be based on: NaN, infinities,
    negative glucose or insulin, and non-positive profile parameters.
    """

    @staticmethod
    def _is_finite_number(value: Optional[float]) -> bool:
        return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)

    def validate_glucose(self, glucose_value: float) -> float:
        """
        Validates a glucose reading.

        Raises:
            ValueError: If the value is not a finite, non-negative number.
        """
        if not self._is_finite_number(glucose_value) or glucose_value < 0:
            raise ValueError(
                f"INVALID_GLUCOSE_ERROR: Glucose {glucose_value!r} mg/dL is not a finite, "
                "non-negative number."
            )
        return glucose_value

    def validate_carbohydrates(self, carbohydrates: float) -> float:
        if not self._is_finite_number(carbohydrates) or carbohydrates < 0:
            raise ValueError(
                f"INVALID_CARBOHYDRATES_ERROR: Carbohydrates {carbohydrates!r} g cannot be negative or NaN."
            )
        return carbohydrates

    def validate_insulin(self, dose: float) -> float:
        """Validates that an insulin amount is non-negative."""
        if not self._is_finite_number(dose) or dose < 0:
            raise ValueError(f"INVALID_DOSE_ERROR: Insulin dose {dose!r} U cannot be negative or NaN.")
        return dose

    def validate_injections(self, injections: Iterable[Injection]) -> None:
        for injection in injections:
            if not self._is_finite_number(injection.timestamp):
                raise ValueError(
                    f"INVALID_TIMESTAMP_ERROR: Injection timestamp {injection.timestamp!r} is not a number."
                )
            self.validate_insulin(injection.units)

    def validate_profile(self, profile: InsulinProfile) -> InsulinProfile:
        parameters = {
            "isf": profile.isf,
            "dia_hours": profile.dia_hours,
            "ic_ratio.breakfast": profile.ic_ratio.breakfast,
            "ic_ratio.lunch": profile.ic_ratio.lunch,
            "ic_ratio.dinner": profile.ic_ratio.dinner,
        }
        for name, value in parameters.items():
            if not self._is_finite_number(value) or value <= 0:
                raise ValueError(f"INVALID_PROFILE_ERROR: {name} must be a positive value, got {value!r}.")
        if not self._is_finite_number(profile.target):
            raise ValueError(f"INVALID_PROFILE_ERROR: target {profile.target!r} is not a number.")
        return profile

    def validate_dose_input(self, profile: InsulinProfile, data: DoseCalculationInput) -> None:
        if data.time_of_day is None:
            raise ValueError("MISSING_TIME_OF_DAY_ERROR: time_of_day is required to select an IC ratio.")
        self.validate_profile(profile)
        self.validate_glucose(data.glucose)
        self.validate_carbohydrates(data.carbohydrates)
        self.validate_injections(data.previous_injections)
