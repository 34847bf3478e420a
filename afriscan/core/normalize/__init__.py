# afriscan/core/normalize/__init__.py
from __future__ import annotations

from .extract import (
    build_listing_hash,
    detect_location,
    normalize_building_type,
    parse_monetary_value,
    parse_unit_count,
)
from .listing import BASELINE_RENT_SOURCE, DEFAULT_UNIT_HINT, RENT_BASELINE, apply_override, normalize_listing

__all__ = [
    "parse_monetary_value",
    "parse_unit_count",
    "detect_location",
    "normalize_building_type",
    "build_listing_hash",
    "normalize_listing",
    "apply_override",
    "RENT_BASELINE",
    "DEFAULT_UNIT_HINT",
    "BASELINE_RENT_SOURCE",
]
