#!/usr/bin/env python3
"""
Retrospective Model Validation - mdidose
Checks how well the dosing model performed over a window of daily records.

Calculates:
- Share of days with good control (>=70% of readings in 70-180 mg/dL)
- Hypoglycemia rate (<70 mg/dL) over all readings
- Hyperglycemia rate (>180 mg/dL) over all readings
- Priority-ordered adjustment recommendation
- Hour-of-day patterns (recurring hypo/hyper clusters, overall variability)

Each reading is judged on its post-treatment value (``glucose_3h_later``)
when one was recorded, otherwise on the raw glucose.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np
import pandas as pd

from mdidose.core.models import DayRecord, PatternReport, ValidationResult
from mdidose.i18n import Message
from mdidose.utils.math import round_decimals, round_half_up

logger = logging.getLogger("mdidose.analysis")

# Target range
GLUCOSE_MIN = 70.0
GLUCOSE_MAX = 180.0
DAY_IN_RANGE_FRACTION = 0.7

# Pattern detection
MIN_SAMPLES_PER_HOUR = 2
RECURRING_EVENT_COUNT = 2
HYPO_FRACTION_THRESHOLD = 0.4
HYPER_FRACTION_THRESHOLD = 0.5
HYPER_AVERAGE_THRESHOLD = 200.0
HIGH_VARIABILITY_SD = 50.0

_FRAME_COLUMNS = ["day", "date", "timestamp", "glucose", "hour"]


def measurements_frame(day_records: Sequence[DayRecord], tz: str = "UTC") -> pd.DataFrame:
    """
    Flattens day records into one row per reading.

    Columns: ``day`` (position of the record), ``date``, ``timestamp`` (epoch ms),
    ``glucose`` (the analyzed value) and ``hour`` (hour of day in ``tz``).
    """
    rows = [
        {
            "day": day_index,
            "date": record.date,
            "timestamp": measurement.timestamp,
            "glucose": float(measurement.analyzed_glucose),
        }
        for day_index, record in enumerate(day_records)
        for measurement in record.measurements
    ]
    if not rows:
        return pd.DataFrame(
            {
                "day": pd.Series(dtype="int64"),
                "date": pd.Series(dtype="object"),
                "timestamp": pd.Series(dtype="float64"),
                "glucose": pd.Series(dtype="float64"),
                "hour": pd.Series(dtype="int64"),
            },
            columns=_FRAME_COLUMNS,
        )

    frame = pd.DataFrame(rows)
    local_times = pd.to_datetime(frame["timestamp"], unit="ms", utc=True).dt.tz_convert(tz)
    frame["hour"] = local_times.dt.hour.astype("int64")
    return frame[_FRAME_COLUMNS]


def validate_weekly_model(day_records: Sequence[DayRecord]) -> ValidationResult:
    """
    Validates the insulin model against a multi-day record.

    Goal: >70% of days in range and <10% hypoglycemias. Rates are fractions
    of all readings; ``days_in_range`` is a fraction of all supplied days.
    Every figure is rounded to 2 decimals.
    """
    if not day_records:
        logger.warning("Model validation requested without any day records")
        return ValidationResult(
            days_in_range=0.0,
            hypoglycemia_rate=0.0,
            hyperglycemia_rate=0.0,
            recommendation=Message("validation.insufficient_data"),
        )

    frame = measurements_frame(day_records)
    glucose = frame["glucose"]
    frame["in_range"] = (glucose >= GLUCOSE_MIN) & (glucose <= GLUCOSE_MAX)

    # Days without readings never count as in range.
    in_range_share = frame.groupby("day")["in_range"].mean()
    days_in_range = int((in_range_share >= DAY_IN_RANGE_FRACTION).sum())

    total_measurements = len(frame)
    total_hypos = int((glucose < GLUCOSE_MIN).sum())
    total_hypers = int((glucose > GLUCOSE_MAX).sum())

    percentage_days_in_range = days_in_range / len(day_records)
    hypoglycemia_rate = total_hypos / total_measurements if total_measurements else 0.0
    hyperglycemia_rate = total_hypers / total_measurements if total_measurements else 0.0

    logger.debug(
        "Validated %d days / %d readings: days_in_range=%.3f hypo=%.3f hyper=%.3f",
        len(day_records),
        total_measurements,
        percentage_days_in_range,
        hypoglycemia_rate,
        hyperglycemia_rate,
    )

    return ValidationResult(
        days_in_range=round_decimals(percentage_days_in_range, 2),
        hypoglycemia_rate=round_decimals(hypoglycemia_rate, 2),
        hyperglycemia_rate=round_decimals(hyperglycemia_rate, 2),
        recommendation=generate_adjustment_recommendation(
            percentage_days_in_range, hypoglycemia_rate, hyperglycemia_rate
        ),
    )


def generate_adjustment_recommendation(
    days_in_range: float, hypo_rate: float, hyper_rate: float
) -> Message:
    """
    Priority-ordered recommendation, first match wins:
    safety (hypoglycemias), then control (days in range), then optimization.
    """
    percentage_range = round_half_up(days_in_range * 100)

    if hypo_rate > 0.10:
        return Message("validation.urgent_adjustment", {"hypo_rate": round_half_up(hypo_rate * 100)})

    if hypo_rate > 0.05:
        return Message("validation.caution", {"hypo_rate": round_half_up(hypo_rate * 100)})

    if days_in_range < 0.50:
        if hyper_rate > 0.4:
            return Message(
                "validation.review_poor_control_hyper",
                {"percentage_range": percentage_range, "hyper_rate": round_half_up(hyper_rate * 100)},
            )
        return Message("validation.review_poor_control", {"percentage_range": percentage_range})

    if days_in_range < 0.70:
        if hyper_rate > 0.3:
            return Message(
                "validation.optimize",
                {"percentage_range": percentage_range, "hyper_rate": round_half_up(hyper_rate * 100)},
            )
        return Message("validation.continue", {"percentage_range": percentage_range})

    if hypo_rate < 0.05:
        if hypo_rate == 0 and hyper_rate < 0.1:
            return Message("validation.excellent", {"percentage_range": percentage_range})
        return Message(
            "validation.model_working",
            {"percentage_range": percentage_range, "hypo_rate": round_half_up(hypo_rate * 100)},
        )

    return Message("validation.continue_monitoring")


def _time_of_day_description(hour: int) -> Message:
    if 6 <= hour < 10:
        return Message("patterns.time.morning")
    if 10 <= hour < 14:
        return Message("patterns.time.midday")
    if 14 <= hour < 20:
        return Message("patterns.time.afternoon")
    return Message("patterns.time.night")


def analyze_patterns(day_records: Sequence[DayRecord], tz: str = "UTC") -> PatternReport:
    """
    Looks for recurring problems by hour of day.

    Hours with at least two readings are flagged for recurring hypoglycemia
    (two or more, or over 40% of the hour's readings) and for consistent
    hyperglycemia (two or more, or over 50%, with an hourly average above
    200 mg/dL). A standard deviation above 50 mg/dL over the whole window is
    flagged as high variability.
    """
    identified_patterns: List[Message] = []
    suggestions: List[Message] = []

    frame = measurements_frame(day_records, tz=tz)

    for hour, readings in frame.groupby("hour")["glucose"]:
        sample_count = len(readings)
        if sample_count < MIN_SAMPLES_PER_HOUR:
            continue

        hour = int(hour)
        average = float(readings.mean())
        hypos_at_hour = int((readings < GLUCOSE_MIN).sum())
        hypers_at_hour = int((readings > GLUCOSE_MAX).sum())

        if (
            hypos_at_hour >= RECURRING_EVENT_COUNT
            or hypos_at_hour / sample_count > HYPO_FRACTION_THRESHOLD
        ):
            identified_patterns.append(
                Message(
                    "patterns.recurring_hypos",
                    {"time_desc": _time_of_day_description(hour), "hour": hour},
                )
            )
            suggestions.append(Message("patterns.suggest_reduce_dose", {"hour": hour}))

        if (
            hypers_at_hour >= RECURRING_EVENT_COUNT
            or hypers_at_hour / sample_count > HYPER_FRACTION_THRESHOLD
        ) and average > HYPER_AVERAGE_THRESHOLD:
            identified_patterns.append(
                Message("patterns.consistent_hyper", {"hour": hour, "average": round_half_up(average)})
            )
            suggestions.append(Message("patterns.suggest_increase_dose", {"hour": hour}))

    if len(frame) > 0:
        # Population standard deviation over every reading in the window.
        standard_deviation = float(np.std(frame["glucose"].to_numpy()))
        if standard_deviation > HIGH_VARIABILITY_SD:
            identified_patterns.append(
                Message(
                    "patterns.high_variability",
                    {"standard_deviation": round_half_up(standard_deviation)},
                )
            )
            suggestions.append(Message("patterns.suggest_consistency"))

    if not identified_patterns:
        identified_patterns.append(Message("patterns.no_patterns"))

    return PatternReport(identified_patterns=identified_patterns, suggestions=suggestions)
