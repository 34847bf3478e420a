# afriscan/core/normalize/extract.py
"""
Pure text → primitive extractors used by the listing normalizer.

Every function is total: missing, empty or unparseable input yields None
(or BuildingType.other) instead of raising.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from hashlib import sha256

from afriscan.schemas.labels import (
    BUILDING_TYPE_KEYWORDS,
    LOCATION_ALIASES,
    BuildingType,
    Currency,
    KnownLocation,
)
from afriscan.schemas.models import MonetaryValue, UnitCount

# ---------- Regex & keyword tables ----------

_WS_RE = re.compile(r"\s+")
_MONEY_RE = re.compile(r"(?:(₦|\$)\s*)?([\d,.]+)(\s*(k|m|million|thousand))?", re.IGNORECASE)
_USD_RE = re.compile(r"usd|\$", re.IGNORECASE)
_UNITS_RE = re.compile(r"(\d{1,4})\s*(units|rooms|tenants|apartments)?", re.IGNORECASE)
_UNITS_KEYWORD_RE = re.compile(r"(\d{1,4})\s*(units|rooms|tenants|apartments)", re.IGNORECASE)
_HUNDRED_RE = re.compile(r"hundred", re.IGNORECASE)

_MAGNITUDES: dict[str, Decimal] = {
    "k": Decimal(1_000),
    "thousand": Decimal(1_000),
    "m": Decimal(1_000_000),
    "million": Decimal(1_000_000),
}
_CENTS = Decimal("0.01")

# ---------- Helpers ----------


def _collapse(text: str | None) -> str:
    if not text:
        return ""
    return _WS_RE.sub(" ", text).strip()


def _clean_decimal(text: str) -> Decimal | None:
    t = text.replace(",", "")
    t = _WS_RE.sub("", t)
    if not t:
        return None
    try:
        value = Decimal(t)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


# ---------- Public API ----------


def parse_monetary_value(text: str | None) -> MonetaryValue | None:
    """
    Parse "₦2.5m", "$137,000", "NGN 750,000,000" style text.

    Currency: '$' as the matched symbol, or "usd"/"$" anywhere in the text → USD;
    otherwise NGN. The magnitude suffix only counts when it directly follows
    the numeric token.
    """
    cleaned = _collapse(text)
    if not cleaned:
        return None

    match = _MONEY_RE.search(cleaned)
    if not match:
        return None

    symbol, numeric, _, suffix = match.groups()
    currency = Currency.USD if symbol == "$" or _USD_RE.search(cleaned) else Currency.NGN

    base = _clean_decimal(numeric)
    if base is None:
        return None

    multiplier = _MAGNITUDES[suffix.lower()] if suffix else Decimal(1)
    try:
        amount = (base * multiplier).quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the decimal context holds (phone numbers, reference codes)
        return None
    return MonetaryValue(amount=amount, currency=currency, source_text=cleaned)


def parse_unit_count(text: str | None, *, require_keyword: bool = False) -> UnitCount | None:
    """
    Parse "100 units", "24 rooms", "60 apartments"; "one hundred tenants" → 100.
    A digit match wins over the "hundred" fallback; a zero count is not a count.

    With `require_keyword`, bare numbers are ignored and only "<n> units|rooms|
    tenants|apartments" counts (used when scanning a whole HTML fragment).
    """
    cleaned = _collapse(text)
    if not cleaned:
        return None

    match = (_UNITS_KEYWORD_RE if require_keyword else _UNITS_RE).search(cleaned)
    if match and int(match.group(1)) > 0:
        return UnitCount(value=int(match.group(1)), source=cleaned)
    if _HUNDRED_RE.search(cleaned):
        return UnitCount(value=100, source=cleaned)
    return None


def detect_location(text: str | None) -> KnownLocation | None:
    """Return the first known market whose alias appears in `text`."""
    if not text:
        return None
    for location, patterns in LOCATION_ALIASES.items():
        if any(p.search(text) for p in patterns):
            return location
    return None


def normalize_building_type(text: str | None) -> BuildingType:
    if not text:
        return BuildingType.other
    lt = text.lower()
    return next((bt for pattern, bt in BUILDING_TYPE_KEYWORDS if pattern.search(lt)), BuildingType.other)


def build_listing_hash(source_id: str, url: str, title: str | None = None) -> str:
    """Deterministic upsert key: sha256 hex of "sourceId|url|title"."""
    return sha256(f"{source_id}|{url}|{title or ''}".encode("utf-8")).hexdigest()


__all__ = [
    "parse_monetary_value",
    "parse_unit_count",
    "detect_location",
    "normalize_building_type",
    "build_listing_hash",
]
