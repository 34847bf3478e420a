# afriscan/schemas/labels.py
from __future__ import annotations

import re
from enum import Enum
from re import Pattern

# =========================
# Canonical label enums
# =========================


class Currency(str, Enum):
    NGN = "NGN"  # primary
    USD = "USD"  # secondary


class KnownLocation(str, Enum):
    Lagos = "Lagos"
    Abuja = "Abuja"
    Enugu = "Enugu"
    Ghana = "Ghana"
    Accra = "Accra"
    Ibadan = "Ibadan"
    Casablanca = "Casablanca"
    Marrakesh = "Marrakesh"


class BuildingType(str, Enum):
    multipurpose = "multipurpose"
    hotel = "hotel"
    apartment = "apartment"
    other = "other"


class FeasibilityTag(str, Enum):
    strong_candidate = "strong_candidate"
    needs_review = "needs_review"
    low_priority = "low_priority"


class QualityFlag(str, Enum):
    """
    Machine-readable data-quality annotations attached to a normalized listing.
    Estimation flags and missing flags are independent and may co-occur.
    """

    # --- Estimated via heuristic ---
    rent_estimated_from_baseline = "rent_estimated_from_baseline"
    unit_count_assumed_baseline = "unit_count_assumed_baseline"

    # --- Still absent after normalization ---
    missing_price = "missing_price"
    missing_rent = "missing_rent"
    missing_units = "missing_units"

    # --- Edited from the dashboard ---
    manual_override = "manual_override"


# =========================
# Alias / keyword tables
# =========================

# Ordered: the first location whose alias matches wins.
LOCATION_ALIASES: dict[KnownLocation, list[Pattern[str]]] = {
    KnownLocation.Lagos: [re.compile(r"lagos", re.IGNORECASE)],
    KnownLocation.Abuja: [re.compile(r"abuja", re.IGNORECASE)],
    KnownLocation.Enugu: [re.compile(r"enugu", re.IGNORECASE)],
    KnownLocation.Ghana: [re.compile(r"ghana", re.IGNORECASE)],
    KnownLocation.Accra: [re.compile(r"accra", re.IGNORECASE)],
    KnownLocation.Ibadan: [re.compile(r"ibadan", re.IGNORECASE)],
    KnownLocation.Casablanca: [re.compile(r"casablanca", re.IGNORECASE)],
    KnownLocation.Marrakesh: [re.compile(r"marrakech|marrakesh", re.IGNORECASE)],
}

# Priority order matters: "office hotel" is multipurpose.
BUILDING_TYPE_KEYWORDS: list[tuple[Pattern[str], BuildingType]] = [
    (re.compile(r"multipurpose|multi-purpose|office"), BuildingType.multipurpose),
    (re.compile(r"hotel"), BuildingType.hotel),
    (re.compile(r"apartment|self-contained"), BuildingType.apartment),
]

ESTIMATION_FLAGS: frozenset[QualityFlag] = frozenset(
    {QualityFlag.rent_estimated_from_baseline, QualityFlag.unit_count_assumed_baseline}
)

MISSING_FLAGS: frozenset[QualityFlag] = frozenset(
    {QualityFlag.missing_price, QualityFlag.missing_rent, QualityFlag.missing_units}
)

CURRENCY_SYMBOLS: dict[Currency, str] = {
    Currency.NGN: "₦",
    Currency.USD: "$",
}


__all__ = [
    "Currency",
    "KnownLocation",
    "BuildingType",
    "FeasibilityTag",
    "QualityFlag",
    "LOCATION_ALIASES",
    "BUILDING_TYPE_KEYWORDS",
    "ESTIMATION_FLAGS",
    "MISSING_FLAGS",
    "CURRENCY_SYMBOLS",
]
