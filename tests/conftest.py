"""Shared fixtures."""

import pytest

from billinsight.config import get_settings
from billinsight.models.bill import BillInput


# Young family scenario: $102.00 last month, $128.80 this month
BASE_BILL = {
    "prev_kwh": 850,
    "curr_kwh": 920,
    "prev_rate": "0.12",
    "curr_rate": "0.14",
    "days_prev": 30,
    "days_curr": 31,
    "weather_idx_prev": "1.0",
    "weather_idx_curr": "1.2",
    "plan_type": "variable",
    "tenure_months": 18,
    "digital_activity_score": 45,
}


@pytest.fixture
def bill_data():
    """A fresh copy of the raw base record."""
    return dict(BASE_BILL)


@pytest.fixture
def make_bill():
    """Build a BillInput from the base record with overrides."""
    def _make(**overrides) -> BillInput:
        return BillInput(**{**BASE_BILL, **overrides})
    return _make


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; reload them around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
