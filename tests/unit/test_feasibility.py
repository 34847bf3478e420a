# tests/unit/test_feasibility.py
from __future__ import annotations

import math

import pytest

from afriscan.core.finance import compute_financials, evaluate_feasibility
from afriscan.schemas.labels import FeasibilityTag


@pytest.mark.parametrize(
    "payback, tag",
    [
        (2.0, FeasibilityTag.strong_candidate),
        (3.5, FeasibilityTag.strong_candidate),
        (5.0, FeasibilityTag.strong_candidate),
        (5.01, FeasibilityTag.needs_review),
        (7.5, FeasibilityTag.needs_review),
        (10.0, FeasibilityTag.needs_review),
        (10.01, FeasibilityTag.low_priority),
        (1.99, FeasibilityTag.low_priority),
        (0.5, FeasibilityTag.low_priority),
        (None, FeasibilityTag.needs_review),
        (0, FeasibilityTag.needs_review),
        (math.nan, FeasibilityTag.needs_review),
    ],
)
def test_feasibility_boundaries(payback, tag):
    assert evaluate_feasibility(payback) is tag


def test_compute_financials_hotel():
    annual, roi, payback = compute_financials(750_000_000, 1_000_000, 100)
    assert annual == pytest.approx(100_000_000)
    assert roi == pytest.approx(0.1333, rel=1e-3)
    assert payback == pytest.approx(7.5)


def test_compute_financials_needs_both_operands():
    assert compute_financials(None, 1_000_000, 10) == (10_000_000.0, None, None)
    assert compute_financials(5_000_000, None, 10) == (None, None, None)
    assert compute_financials(5_000_000, 1_000_000, None) == (None, None, None)


def test_compute_financials_zero_denominators():
    # zero price: no ROI, payback is 0
    annual, roi, payback = compute_financials(0, 1_000_000, 10)
    assert annual == pytest.approx(10_000_000)
    assert roi is None
    assert payback == 0.0
    # zero revenue: ROI is 0, no payback
    annual, roi, payback = compute_financials(5_000_000, 0, 10)
    assert annual == 0.0
    assert roi == 0.0
    assert payback is None
