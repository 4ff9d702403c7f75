import pytest

from mdidose.core.models import DoseContext, Injection, PreSleepAction
from mdidose.core.safety import (
    SafetyConfig,
    apply_safety_factor,
    calculate_between_meal_correction,
    check_3_hour_rule,
    evaluate_pre_sleep,
    generate_warnings,
    safety_multipliers,
)
from mdidose.core.safety.rules import is_evening, is_late_night


def _keys(messages):
    return [message.key for message in messages]


# --- context multipliers -------------------------------------------------

def test_apply_safety_factor_without_context_is_identity():
    assert apply_safety_factor(5.0) == 5.0
    assert apply_safety_factor(5.0, DoseContext()) == 5.0


@pytest.mark.parametrize(
    "context, expected",
    [
        (DoseContext(recent_exercise=True), 8.0),
        (DoseContext(alcohol=True), 7.0),
        (DoseContext(illness=True), 12.0),
        (DoseContext(stress=True), 11.0),
        (DoseContext(menstruation=True), 11.0),
        (DoseContext(high_fat_meal=True), 8.5),
        (DoseContext(hour_of_day=23), 9.5),
        (DoseContext(hour_of_day=20), 9.5),
        (DoseContext(hour_of_day=12), 10.0),
    ],
)
def test_single_factor(context, expected):
    assert apply_safety_factor(10.0, context) == pytest.approx(expected)


def test_factors_compose_multiplicatively():
    context = DoseContext(recent_exercise=True, alcohol=True, illness=True)
    assert apply_safety_factor(10.0, context) == pytest.approx(10.0 * 0.8 * 0.7 * 1.2)


@pytest.mark.parametrize("hour", [22, 23, 0, 3, 6])
def test_late_night_window(hour):
    assert is_late_night(hour)
    assert not is_evening(hour)


@pytest.mark.parametrize("hour", [19, 20, 21])
def test_evening_window(hour):
    assert is_evening(hour)
    assert not is_late_night(hour)


@pytest.mark.parametrize("hour", [7, 12, 18, None])
def test_daytime_has_no_nocturnal_factor(hour):
    assert not is_late_night(hour)
    assert not is_evening(hour)


def test_safety_multipliers_names_each_applied_factor():
    context = DoseContext(recent_exercise=True, high_fat_meal=True, hour_of_day=20)
    assert safety_multipliers(context) == {
        "exercise": 0.8,
        "evening": 0.95,
        "high_fat_meal": 0.85,
    }
    assert safety_multipliers(None) == {}


def test_custom_multiplier_from_config():
    config = SafetyConfig(exercise_factor=0.5)
    assert apply_safety_factor(10.0, DoseContext(recent_exercise=True), config) == pytest.approx(5.0)


# --- 3-hour rule ---------------------------------------------------------

def test_3_hour_rule(now, hours_ago):
    assert check_3_hour_rule([], now) is True
    assert check_3_hour_rule([Injection(hours_ago(2), 4.0)], now) is False
    assert check_3_hour_rule([Injection(hours_ago(3.5), 4.0)], now) is True


def test_3_hour_rule_uses_configured_interval(now, hours_ago):
    config = SafetyConfig(minimum_hours_between_doses=2.0)
    assert check_3_hour_rule([Injection(hours_ago(2.5), 4.0)], now, config) is True


# --- pre-sleep -----------------------------------------------------------

def test_pre_sleep_low_glucose_eats_snack(now):
    result = evaluate_pre_sleep(90, [], 4, 50, now=now)
    assert result.action is PreSleepAction.EAT_SNACK
    assert result.snack is True
    assert result.carbohydrates == 15
    assert result.correction_dose == 0.0
    assert result.warning.key == "pre_sleep.risk_nocturnal_hypo"
    assert result.warning.params == {"carbohydrates": 15}


def test_pre_sleep_caution_zone_with_high_iob_eats_snack(now, hours_ago):
    injections = [Injection(timestamp=hours_ago(1), units=4.0)]  # 3U on board
    result = evaluate_pre_sleep(110, injections, 4, 50, now=now)
    assert result.action is PreSleepAction.EAT_SNACK
    assert result.iob == pytest.approx(3.0)


def test_pre_sleep_caution_zone_without_iob_sleeps(now):
    result = evaluate_pre_sleep(110, [], 4, 50, now=now)
    assert result.action is PreSleepAction.SLEEP
    assert result.warning is None


def test_pre_sleep_very_high_glucose_small_correction(now):
    # (300 - 140) / 50 = 3.2U, 70% = 2.24U -> 2.0U
    result = evaluate_pre_sleep(300, [], 4, 50, now=now)
    assert result.action is PreSleepAction.SMALL_CORRECTION
    assert result.correction_dose == 2.0
    assert result.snack is False
    assert result.warning.key == "pre_sleep.very_high_glucose"


def test_pre_sleep_very_high_glucose_with_enough_iob_falls_through_to_sleep(now, hours_ago):
    injections = [Injection(timestamp=hours_ago(1), units=4.0)]  # 3U on board
    result = evaluate_pre_sleep(260, injections, 4, 50, now=now)
    assert result.action is PreSleepAction.SLEEP
    assert result.correction_dose == 0.0


@pytest.mark.parametrize("glucose", [180, 200, 250])
def test_pre_sleep_high_glucose_monitors(now, glucose):
    result = evaluate_pre_sleep(glucose, [], 4, 50, now=now)
    assert result.action is PreSleepAction.MONITOR
    assert result.warning.key == "pre_sleep.monitor_trend"


@pytest.mark.parametrize("glucose", [100, 140, 179])
def test_pre_sleep_in_range_sleeps(now, glucose):
    result = evaluate_pre_sleep(glucose, [], 4, 50, now=now)
    assert result.action is PreSleepAction.SLEEP


# --- between-meal correction ---------------------------------------------

@pytest.mark.parametrize("glucose", [150, 250, 400, 600])
@pytest.mark.parametrize("hours", [0.5, 1.0, 2.9])
def test_between_meal_correction_blocked_by_3_hour_rule(now, hours_ago, glucose, hours):
    injections = [Injection(timestamp=hours_ago(hours), units=2.0)]
    result = calculate_between_meal_correction(glucose, 100, injections, 4, 50, now=now)
    assert result.dose == 0.0
    assert result.recommended_action == "monitor"
    assert result.reason.key == "correction.wait_3_hours"


def test_blocked_correction_reports_rounded_hours(now, hours_ago):
    injections = [Injection(timestamp=hours_ago(1.6), units=2.0)]
    result = calculate_between_meal_correction(250, 100, injections, 4, 50, now=now)
    assert result.reason.params == {"hours": 2}


def test_between_meal_correction_applies_50_percent_rule(now):
    # target 120; (250 - 120) / 50 = 2.6U, half = 1.3U -> 1.5U
    result = calculate_between_meal_correction(250, 100, [], 4, 50, now=now)
    assert result.dose == 1.5
    assert result.iob == 0.0
    assert result.reason.key == "correction.conservative_correction"
    assert result.reason.params == {"iob": "0.0"}
    assert result.precaution.key == "correction.check_glucose"


def test_between_meal_correction_minimum_dose(now):
    # (135 - 120) / 50 = 0.3U, half = 0.15U -> rounds to 0 but floor is 0.5U
    result = calculate_between_meal_correction(135, 100, [], 4, 50, now=now)
    assert result.dose == 0.5


def test_between_meal_correction_subtracts_iob(now, hours_ago):
    injections = [Injection(timestamp=hours_ago(3), units=8.0)]  # 2U on board
    result = calculate_between_meal_correction(200, 100, injections, 4, 50, now=now)
    assert result.dose == 0.0
    assert result.iob == pytest.approx(2.0)
    assert result.reason.key == "correction.no_correction_needed"


def test_between_meal_correction_in_range(now):
    result = calculate_between_meal_correction(110, 100, [], 4, 50, now=now)
    assert result.dose == 0.0
    assert result.reason.key == "correction.no_correction_needed"


# --- warnings ------------------------------------------------------------

def test_warnings_hypoglycemia_and_high_iob():
    warnings = generate_warnings(glucose=65, iob=2.0, dose=0.0, carbohydrates=0.0)
    assert _keys(warnings) == ["warnings.hypoglycemia", "warnings.high_iob_low_glucose"]


def test_warnings_very_high_glucose_and_dose():
    warnings = generate_warnings(glucose=350, iob=0.0, dose=16.0, carbohydrates=100.0)
    assert _keys(warnings) == ["warnings.very_high_glucose", "warnings.very_high_dose"]


def test_warnings_carbs_without_insulin():
    warnings = generate_warnings(glucose=90, iob=0.5, dose=0.0, carbohydrates=20.0)
    assert _keys(warnings) == ["warnings.carbs_without_insulin"]


def test_warnings_high_nocturnal_dose():
    context = DoseContext(hour_of_day=22)
    warnings = generate_warnings(glucose=150, iob=0.0, dose=6.0, carbohydrates=60.0, context=context)
    assert _keys(warnings) == ["warnings.high_nocturnal_dose"]

    early = DoseContext(hour_of_day=21)
    assert generate_warnings(glucose=150, iob=0.0, dose=6.0, carbohydrates=60.0, context=early) == []


def test_warnings_context_flags_follow_checks_in_order():
    context = DoseContext(
        recent_exercise=True,
        alcohol=True,
        illness=True,
        stress=True,
        menstruation=True,
        high_fat_meal=True,
    )
    warnings = generate_warnings(glucose=65, iob=0.0, dose=1.0, carbohydrates=10.0, context=context)
    assert _keys(warnings) == [
        "warnings.hypoglycemia",
        "warnings.recent_exercise",
        "warnings.alcohol",
        "warnings.high_fat_meal",
        "warnings.illness",
        "warnings.stress",
        "warnings.menstruation",
    ]


def test_no_warnings_for_routine_dose():
    assert generate_warnings(glucose=140, iob=0.0, dose=4.0, carbohydrates=50.0) == []
