# afriscan/core/finance/feasibility.py
"""
Feasibility metrics for a scraped listing.

  annual_revenue = rent_per_unit × unit_count
  roi_ratio      = annual_revenue / price
  payback_years  = price / annual_revenue

Payback → tag:
  - None, 0 or NaN        → needs_review
  - 2 ≤ payback ≤ 5       → strong_candidate
  - 5 < payback ≤ 10      → needs_review
  - payback < 2 or > 10   → low_priority  (implausibly fast paybacks are treated as data errors)
"""

from __future__ import annotations

import math
from decimal import Decimal

from afriscan.schemas.labels import FeasibilityTag

STRONG_MIN_YEARS = 2.0
STRONG_MAX_YEARS = 5.0
REVIEW_MAX_YEARS = 10.0


def evaluate_feasibility(payback_years: float | None) -> FeasibilityTag:
    if payback_years is None or math.isnan(payback_years) or payback_years == 0:
        return FeasibilityTag.needs_review
    if STRONG_MIN_YEARS <= payback_years <= STRONG_MAX_YEARS:
        return FeasibilityTag.strong_candidate
    if STRONG_MAX_YEARS < payback_years <= REVIEW_MAX_YEARS:
        return FeasibilityTag.needs_review
    return FeasibilityTag.low_priority


def _dec(x: Decimal | float | int | None) -> Decimal | None:
    if x is None:
        return None
    return x if isinstance(x, Decimal) else Decimal(str(x))


def compute_financials(
    price: Decimal | float | None,
    rent_per_unit: Decimal | float | None,
    unit_count: int | None,
) -> tuple[float | None, float | None, float | None]:
    """
    Return (annual_revenue, roi_ratio, payback_years).

    Each value is None unless its operands are present and its denominator is non-zero.
    Arithmetic is done in Decimal and converted to float at the edge.
    """
    p = _dec(price)
    r = _dec(rent_per_unit)

    annual: Decimal | None = None
    if r is not None and unit_count is not None:
        annual = r * Decimal(unit_count)

    roi: Decimal | None = None
    payback: Decimal | None = None
    if annual is not None and p is not None:
        if p != 0:
            roi = annual / p
        if annual != 0:
            payback = p / annual

    return (
        float(annual) if annual is not None else None,
        float(roi) if roi is not None else None,
        float(payback) if payback is not None else None,
    )


__all__ = ["evaluate_feasibility", "compute_financials"]
