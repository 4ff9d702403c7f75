import pytest
from pydantic import ValidationError

from mdidose.core.models import (
    DayRecord,
    DoseCalculationInput,
    DoseContext,
    ICRatio,
    InsulinProfile,
    MealType,
    TimeOfDay,
)
from mdidose.validation import (
    format_validation_error,
    load_insulin_profile,
    validate_dose_calculation_input,
    validate_insulin_profile,
    validate_weekly_record,
)
from mdidose.validation.schemas import MealModel


def _profile_payload(**overrides):
    payload = {
        "isf": 50,
        "icRatio": {"breakfast": 15, "lunch": 12, "dinner": 10},
        "diaHours": 4,
        "target": 100,
    }
    payload.update(overrides)
    return payload


def test_valid_profile_converts_to_domain():
    profile = validate_insulin_profile(_profile_payload())
    assert profile == InsulinProfile(
        isf=50.0,
        ic_ratio=ICRatio(breakfast=15.0, lunch=12.0, dinner=10.0),
        dia_hours=4.0,
        target=100.0,
    )


def test_profile_accepts_snake_case_names():
    profile = validate_insulin_profile(
        {"isf": 40, "ic_ratio": {"breakfast": 10, "lunch": 10, "dinner": 10}, "dia_hours": 5}
    )
    assert profile.dia_hours == 5.0


def test_profile_default_target():
    payload = _profile_payload()
    del payload["target"]
    assert validate_insulin_profile(payload).target == 100.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"isf": 5},
        {"icRatio": {"breakfast": 35, "lunch": 12, "dinner": 10}},
        {"diaHours": 1},
        {"target": 50},
        {"units": "mg/dL"},
    ],
)
def test_invalid_profiles_are_rejected(overrides):
    with pytest.raises(ValidationError):
        validate_insulin_profile(_profile_payload(**overrides))


def test_valid_dose_input_converts_to_domain():
    data = validate_dose_calculation_input(
        {
            "timeOfDay": "dinner",
            "glucose": 160,
            "carbohydrates": 70,
            "previousInjections": [{"timestamp": 1_736_931_600_000, "units": 5}],
            "context": {"recentExercise": True, "hourOfDay": 20},
        }
    )

    assert isinstance(data, DoseCalculationInput)
    assert data.time_of_day is TimeOfDay.DINNER
    assert data.previous_injections[0].units == 5.0
    assert data.context == DoseContext(recent_exercise=True, hour_of_day=20)


def test_dose_input_defaults():
    data = validate_dose_calculation_input({"timeOfDay": "breakfast", "glucose": 120})
    assert data.carbohydrates == 0.0
    assert tuple(data.previous_injections) == ()
    assert data.context == DoseContext()


@pytest.mark.parametrize(
    "payload",
    [
        {"timeOfDay": "lunch", "glucose": 15, "carbohydrates": 60},
        {"timeOfDay": "lunch", "glucose": 650, "carbohydrates": 60},
        {"timeOfDay": "snack", "glucose": 150, "carbohydrates": 60},
        {"timeOfDay": "lunch", "glucose": 150, "carbohydrates": -10},
        {"timeOfDay": "lunch", "glucose": 150, "previousInjections": [{"timestamp": 1, "units": 60}]},
        {"timeOfDay": "lunch", "glucose": 150, "context": {"hourOfDay": 24}},
        {"glucose": 150},
    ],
)
def test_invalid_dose_inputs_are_rejected(payload):
    with pytest.raises(ValidationError):
        validate_dose_calculation_input(payload)


def _week(days):
    return [
        {
            "date": f"2025-01-{13 + day}",
            "measurements": [{"timestamp": 1_736_726_400_000 + day * 86_400_000, "glucose": 120}],
        }
        for day in range(days)
    ]


def test_weekly_record_converts_to_day_records():
    records = validate_weekly_record(_week(3))
    assert len(records) == 3
    assert all(isinstance(record, DayRecord) for record in records)
    assert records[0].measurements[0].glucose == 120.0


def test_weekly_record_accepts_post_treatment_alias():
    payload = _week(3)
    payload[0]["measurements"][0]["glucose3hLater"] = 140
    records = validate_weekly_record(payload)
    assert records[0].measurements[0].glucose_3h_later == 140.0


@pytest.mark.parametrize("days", [2, 15])
def test_weekly_record_length_is_bounded(days):
    with pytest.raises(ValidationError):
        validate_weekly_record(_week(days))


def test_day_record_needs_a_measurement():
    payload = _week(3)
    payload[1]["measurements"] = []
    with pytest.raises(ValidationError):
        validate_weekly_record(payload)


def test_meal_model_limits():
    meal = MealModel.model_validate({"timestamp": 1, "carbohydrates": 300, "type": "slow"}).to_domain()
    assert meal.type is MealType.SLOW
    with pytest.raises(ValidationError):
        MealModel.model_validate({"timestamp": 1, "carbohydrates": 301, "type": "normal"})


def test_meal_model_requires_type():
    with pytest.raises(ValidationError):
        MealModel.model_validate({"timestamp": 1, "carbohydrates": 60})


def test_load_insulin_profile_from_yaml(tmp_path):
    profile_path = tmp_path / "profile.yaml"
    profile_path.write_text(
        "isf: 45\n"
        "icRatio:\n"
        "  breakfast: 12\n"
        "  lunch: 10\n"
        "  dinner: 9\n"
        "diaHours: 4.5\n"
    )

    profile = load_insulin_profile(profile_path)

    assert profile.isf == 45.0
    assert profile.ic_ratio.dinner == 9.0
    assert profile.target == 100.0


def test_format_validation_error():
    with pytest.raises(ValidationError) as excinfo:
        validate_insulin_profile(_profile_payload(isf=5))
    lines = format_validation_error(excinfo.value)
    assert len(lines) == 1
    assert lines[0].startswith("isf: ")
