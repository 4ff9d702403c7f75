from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import ValidationError

from mdidose.core.models import DayRecord, DoseCalculationInput, InsulinProfile
from mdidose.core.safety import SafetyConfig
from mdidose.validation.schemas import (
    DayRecordModel,
    DoseCalculationInputModel,
    DoseContextModel,
    GlucoseMeasurementModel,
    ICRatioModel,
    InjectionModel,
    InsulinProfileModel,
    MealModel,
    WeeklyRecordModel,
)

logger = logging.getLogger("mdidose.validation")


def _read_yaml_mapping(path: Union[str, Path]) -> Dict[str, Any]:
    config_path = Path(path)
    data = yaml.safe_load(config_path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


def validate_insulin_profile(data: Dict[str, Any]) -> InsulinProfile:
    return InsulinProfileModel.model_validate(data).to_domain()


def validate_dose_calculation_input(data: Dict[str, Any]) -> DoseCalculationInput:
    return DoseCalculationInputModel.model_validate(data).to_domain()


def validate_weekly_record(data: List[Dict[str, Any]]) -> List[DayRecord]:
    """Validates 3 to 14 day records, each with at least one measurement."""
    return WeeklyRecordModel.model_validate(data).to_domain()


def load_insulin_profile(path: Union[str, Path]) -> InsulinProfile:
    return validate_insulin_profile(_read_yaml_mapping(path))


def safety_config_from_dict(data: Dict[str, Any]) -> SafetyConfig:
    """
    Builds a SafetyConfig from overrides; keys left out keep their defaults.

    Raises:
        ValueError: If a key does not name a SafetyConfig field.
    """
    known = {config_field.name for config_field in dataclasses.fields(SafetyConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown safety configuration keys: {', '.join(unknown)}")
    if data:
        logger.info("Safety configuration overrides: %s", ", ".join(sorted(data)))
    return SafetyConfig(**data)


def load_safety_config(path: Union[str, Path]) -> SafetyConfig:
    return safety_config_from_dict(_read_yaml_mapping(path))


def format_validation_error(error: ValidationError) -> List[str]:
    lines: List[str] = []
    for entry in error.errors():
        loc = ".".join(str(item) for item in entry.get("loc", []))
        msg = entry.get("msg", "Invalid value")
        lines.append(f"{loc}: {msg}")
    return lines


__all__ = [
    "DayRecordModel",
    "DoseCalculationInputModel",
    "DoseContextModel",
    "GlucoseMeasurementModel",
    "ICRatioModel",
    "InjectionModel",
    "InsulinProfileModel",
    "MealModel",
    "WeeklyRecordModel",
    "format_validation_error",
    "load_insulin_profile",
    "load_safety_config",
    "safety_config_from_dict",
    "validate_dose_calculation_input",
    "validate_insulin_profile",
    "validate_weekly_record",
]
