from pathlib import Path
import sys

import pytest

project_root = Path(__file__).resolve().parents[1]
src_path = project_root / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from mdidose.core.models import ICRatio, InsulinProfile  # noqa: E402

HOUR_MS = 3_600_000

# 2025-01-15 10:00:00 UTC
FIXED_NOW_MS = 1_736_935_200_000


@pytest.fixture
def now() -> int:
    return FIXED_NOW_MS


@pytest.fixture
def hours_ago(now):
    def _hours_ago(hours: float) -> float:
        return now - hours * HOUR_MS

    return _hours_ago


@pytest.fixture
def reference_profile() -> InsulinProfile:
    return InsulinProfile(
        isf=50.0,
        ic_ratio=ICRatio(breakfast=15.0, lunch=12.0, dinner=10.0),
        dia_hours=4.0,
        target=100.0,
    )
