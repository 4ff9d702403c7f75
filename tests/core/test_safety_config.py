import pytest

from mdidose.core.dose import calculate_dose
from mdidose.core.models import DoseCalculationInput, DoseContext, TimeOfDay
from mdidose.core.safety import SafetyConfig, evaluate_pre_sleep
from mdidose.validation import load_safety_config, safety_config_from_dict


def test_default_config_values():
    config = SafetyConfig()
    assert config.exercise_factor == 0.8
    assert config.alcohol_factor == 0.7
    assert config.late_night_factor == config.evening_factor == 0.95
    assert config.between_meals_factor == 0.5
    assert config.minimum_hours_between_doses == 3.0
    assert config.dose_increment == 0.5


def test_load_safety_config_from_yaml(tmp_path):
    config_path = tmp_path / "safety.yaml"
    config_path.write_text("exercise_factor: 0.7\npre_sleep_snack_carbs: 20\n")

    config = load_safety_config(config_path)

    assert config.exercise_factor == 0.7
    assert config.pre_sleep_snack_carbs == 20
    assert config.alcohol_factor == 0.7  # default kept


def test_empty_yaml_gives_defaults(tmp_path):
    config_path = tmp_path / "safety.yaml"
    config_path.write_text("")
    assert load_safety_config(config_path) == SafetyConfig()


def test_unknown_keys_are_rejected():
    with pytest.raises(ValueError, match="Unknown safety configuration keys: max_bolus"):
        safety_config_from_dict({"max_bolus": 10})


def test_non_mapping_yaml_is_rejected(tmp_path):
    config_path = tmp_path / "safety.yaml"
    config_path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_safety_config(config_path)


def test_dose_engine_uses_configured_factors(reference_profile, now):
    config = SafetyConfig(evening_factor=0.9)
    data = DoseCalculationInput(
        time_of_day=TimeOfDay.DINNER,
        glucose=100,
        carbohydrates=60,
        context=DoseContext(hour_of_day=20),
    )
    result = calculate_dose(reference_profile, data, now=now, config=config)

    # 6U * 0.9 = 5.4U -> 5.5U
    assert result.dose == 5.5
    assert result.breakdown.adjustments.to_dict() == {"nocturnal": -10}


def test_pre_sleep_uses_configured_snack(now):
    config = SafetyConfig(pre_sleep_snack_carbs=20)
    result = evaluate_pre_sleep(90, [], 4, 50, now=now, config=config)
    assert result.carbohydrates == 20
    assert result.warning.params == {"carbohydrates": 20}
