import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from glucoview.services.forecast_engine import ForecastEngine  # noqa: E402
from glucoview.services.prediction_config import PredictionConfigStore  # noqa: E402


@pytest.fixture
def reference_time() -> datetime:
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def config_store() -> PredictionConfigStore:
    return PredictionConfigStore()


@pytest.fixture
def engine(config_store) -> ForecastEngine:
    return ForecastEngine(config_store)
