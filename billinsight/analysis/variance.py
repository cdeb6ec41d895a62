"""
Variance Analyzer

Decomposes the month-over-month bill change into usage, rate and
seasonal contributions.

    usage_effect    = (curr_kwh - prev_kwh) * curr_rate
    rate_effect     = curr_kwh * (curr_rate - prev_rate)
    seasonal_effect = delta - usage_effect - rate_effect

Usage and rate are both valued at current terms, so together they can
overshoot or undershoot delta. The seasonal effect takes up the
remainder; that is what keeps the three effects summing to delta
exactly. The weather-index estimate
(index change * sensitivity * current bill) is reported next to it as
`weather_estimate`.

Pure function: no I/O, no state, same input gives the same output.
"""

from decimal import Decimal, localcontext
from typing import Optional

from billinsight.config import AnalyzerSettings, get_settings
from billinsight.models.bill import (
    EXACT_CONTEXT,
    BillAnalysis,
    BillDriver,
    BillInput,
    DriverName,
)


_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def display_weight(effect: Decimal, delta: Decimal) -> Decimal:
    """
    Weight of one effect relative to |delta|, in percent.

    Not a share of delta: the result can be negative or above 100.
    Zero when the effect itself is zero, and zero when delta is zero.
    """
    if effect == _ZERO:
        return _ZERO
    if delta == _ZERO:
        return _ZERO
    return effect / abs(delta) * _HUNDRED


def weather_estimate(
    bill: BillInput,
    curr_bill: Decimal,
    sensitivity: Decimal,
) -> Decimal:
    """Seasonal impact implied by the weather index change."""
    return (bill.weather_idx_curr - bill.weather_idx_prev) * sensitivity * curr_bill


def analyze(
    bill: BillInput,
    settings: Optional[AnalyzerSettings] = None,
) -> BillAnalysis:
    """
    Break the bill change down into its drivers.

    Args:
        bill: Validated bill record
        settings: Analyzer policy constants. Defaults to the loaded settings.

    Returns:
        BillAnalysis whose effects sum to delta exactly
    """
    settings = settings or get_settings().analyzer
    sensitivity = Decimal(str(settings.seasonal_sensitivity))

    with localcontext(EXACT_CONTEXT):
        prev_bill = bill.prev_kwh * bill.prev_rate
        curr_bill = bill.curr_kwh * bill.curr_rate
        delta = curr_bill - prev_bill

        usage_effect = (bill.curr_kwh - bill.prev_kwh) * bill.curr_rate
        rate_effect = bill.curr_kwh * (bill.curr_rate - bill.prev_rate)
        seasonal_effect = delta - usage_effect - rate_effect
        estimate = weather_estimate(bill, curr_bill, sensitivity)

    # Display weights only need ordinary precision
    drivers = tuple(
        BillDriver(
            name=name,
            value=effect,
            percentage=display_weight(effect, delta),
        )
        for name, effect in (
            (DriverName.USAGE, usage_effect),
            (DriverName.RATE, rate_effect),
            (DriverName.SEASONAL, seasonal_effect),
        )
    )

    return BillAnalysis(
        prev_bill=prev_bill,
        curr_bill=curr_bill,
        delta=delta,
        usage_effect=usage_effect,
        rate_effect=rate_effect,
        seasonal_effect=seasonal_effect,
        weather_estimate=estimate,
        drivers=drivers,
    )
