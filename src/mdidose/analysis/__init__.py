from .model_validator import (
    analyze_patterns,
    generate_adjustment_recommendation,
    measurements_frame,
    validate_weekly_model,
)

__all__ = [
    "analyze_patterns",
    "generate_adjustment_recommendation",
    "measurements_frame",
    "validate_weekly_model",
]
