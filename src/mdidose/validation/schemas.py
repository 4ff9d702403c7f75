from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel
from pydantic.alias_generators import to_camel

from mdidose.core.models import (
    DayRecord,
    DoseCalculationInput,
    DoseContext,
    GlucoseMeasurement,
    ICRatio,
    Injection,
    InsulinProfile,
    Meal,
    MealType,
    TimeOfDay,
)

MIN_WEEKLY_DAYS = 3
MAX_WEEKLY_DAYS = 14

# Both the snake_case field names and the camelCase spellings of the
# service layer are accepted.
_MODEL_CONFIG = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


class InjectionModel(BaseModel):
    model_config = _MODEL_CONFIG

    timestamp: float = Field(gt=0)
    units: float = Field(gt=0, le=50)

    def to_domain(self) -> Injection:
        return Injection(timestamp=self.timestamp, units=self.units)


class MealModel(BaseModel):
    model_config = _MODEL_CONFIG

    timestamp: float = Field(gt=0)
    carbohydrates: float = Field(ge=0, le=300)
    type: MealType

    def to_domain(self) -> Meal:
        return Meal(timestamp=self.timestamp, carbohydrates=self.carbohydrates, type=self.type)


class ICRatioModel(BaseModel):
    model_config = _MODEL_CONFIG

    breakfast: float = Field(ge=3, le=30)
    lunch: float = Field(ge=3, le=30)
    dinner: float = Field(ge=3, le=30)

    def to_domain(self) -> ICRatio:
        return ICRatio(breakfast=self.breakfast, lunch=self.lunch, dinner=self.dinner)


class InsulinProfileModel(BaseModel):
    model_config = _MODEL_CONFIG

    isf: float = Field(ge=10, le=200)
    ic_ratio: ICRatioModel
    dia_hours: float = Field(ge=2, le=8)
    target: float = Field(default=100.0, ge=70, le=180)

    def to_domain(self) -> InsulinProfile:
        return InsulinProfile(
            isf=self.isf,
            ic_ratio=self.ic_ratio.to_domain(),
            dia_hours=self.dia_hours,
            target=self.target,
        )


class DoseContextModel(BaseModel):
    model_config = _MODEL_CONFIG

    recent_exercise: bool = False
    alcohol: bool = False
    illness: bool = False
    stress: bool = False
    menstruation: bool = False
    high_fat_meal: bool = False
    hour_of_day: Optional[float] = Field(default=None, ge=0, le=23)

    def to_domain(self) -> DoseContext:
        return DoseContext(**self.model_dump())


class DoseCalculationInputModel(BaseModel):
    model_config = _MODEL_CONFIG

    time_of_day: TimeOfDay
    glucose: float = Field(ge=20, le=600)
    carbohydrates: float = Field(default=0.0, ge=0)
    previous_injections: List[InjectionModel] = Field(default_factory=list)
    context: Optional[DoseContextModel] = None

    def to_domain(self) -> DoseCalculationInput:
        return DoseCalculationInput(
            glucose=self.glucose,
            time_of_day=self.time_of_day,
            carbohydrates=self.carbohydrates,
            previous_injections=tuple(injection.to_domain() for injection in self.previous_injections),
            context=self.context.to_domain() if self.context is not None else DoseContext(),
        )


class GlucoseMeasurementModel(BaseModel):
    model_config = _MODEL_CONFIG

    timestamp: float = Field(gt=0)
    glucose: float = Field(ge=20, le=600)
    # to_camel would spell this "glucose3HLater"
    glucose_3h_later: Optional[float] = Field(default=None, ge=20, le=600, alias="glucose3hLater")
    insulin: Optional[float] = Field(default=None, ge=0)
    carbs: Optional[float] = Field(default=None, ge=0)

    def to_domain(self) -> GlucoseMeasurement:
        return GlucoseMeasurement(
            timestamp=self.timestamp,
            glucose=self.glucose,
            glucose_3h_later=self.glucose_3h_later,
            insulin=self.insulin,
            carbs=self.carbs,
        )


class DayRecordModel(BaseModel):
    model_config = _MODEL_CONFIG

    date: str
    measurements: List[GlucoseMeasurementModel] = Field(min_length=1)

    def to_domain(self) -> DayRecord:
        return DayRecord(
            date=self.date,
            measurements=tuple(measurement.to_domain() for measurement in self.measurements),
        )


class WeeklyRecordModel(RootModel[List[DayRecordModel]]):
    root: List[DayRecordModel] = Field(min_length=MIN_WEEKLY_DAYS, max_length=MAX_WEEKLY_DAYS)

    def to_domain(self) -> List[DayRecord]:
        return [day.to_domain() for day in self.root]
