# afriscan/core/normalize/listing.py


"""
Deterministic listing normalizer (RawListing → NormalizedListing).

Never raises on bad text: unparseable fields stay None and are flagged.
Fields filled by a heuristic are flagged separately from fields still missing.
"""

from __future__ import annotations

import re
from decimal import Decimal

from afriscan.core.finance.feasibility import compute_financials, evaluate_feasibility
from afriscan.schemas.labels import ESTIMATION_FLAGS, MISSING_FLAGS, Currency, QualityFlag
from afriscan.schemas.models import ListingOverride, MonetaryValue, NormalizedListing, RawListing

from .extract import (
    build_listing_hash,
    detect_location,
    normalize_building_type,
    parse_monetary_value,
    parse_unit_count,
)

RENT_BASELINE = 1_000_000  # ₦1M yearly per tenant benchmark
DEFAULT_UNIT_HINT = 100
BASELINE_RENT_SOURCE = "Heuristic ₦1M tenant baseline"

_BASELINE_RENT_RE = re.compile(r"₦?1\s?m", re.IGNORECASE)


def _fallback(text: str | None, snippet: str) -> str:
    return text if text is not None else snippet


def _missing_flags(price: object, rent: object, units: object) -> list[QualityFlag]:
    flags: list[QualityFlag] = []
    if price is None:
        flags.append(QualityFlag.missing_price)
    if rent is None:
        flags.append(QualityFlag.missing_rent)
    if units is None:
        flags.append(QualityFlag.missing_units)
    return flags


def normalize_listing(
    raw: RawListing,
    *,
    rent_baseline: int | float = RENT_BASELINE,
    default_units: int = DEFAULT_UNIT_HINT,
) -> NormalizedListing:
    """Normalize one RawListing. Pure; the same input always yields the same output."""
    flags: list[QualityFlag] = []
    snippet = raw.html_snippet

    price = parse_monetary_value(raw.price_text)

    rent = parse_monetary_value(raw.rent_text)
    if rent is None and _BASELINE_RENT_RE.search(snippet):
        rent = MonetaryValue(amount=Decimal(str(rent_baseline)), currency=Currency.NGN, source_text=BASELINE_RENT_SOURCE)
        flags.append(QualityFlag.rent_estimated_from_baseline)

    if raw.unit_text is not None:
        unit_info = parse_unit_count(raw.unit_text)
    else:
        # prices and ids in the fragment are not unit counts
        unit_info = parse_unit_count(snippet, require_keyword=True)
    location = detect_location(_fallback(raw.location_text, snippet))
    building_type = normalize_building_type(_fallback(raw.type_text, snippet))

    unit_count: int | None = None
    if unit_info is not None:
        unit_count = unit_info.value
    elif rent is not None:
        unit_count = default_units
        flags.append(QualityFlag.unit_count_assumed_baseline)

    annual, roi, payback = compute_financials(
        price.amount if price else None,
        rent.amount if rent else None,
        unit_count,
    )

    flags.extend(_missing_flags(price, rent, unit_count))

    return NormalizedListing(
        hash=build_listing_hash(raw.source_id, raw.url, raw.title),
        source_id=raw.source_id,
        source_label=raw.source_label,
        url=raw.url,
        title=raw.title,
        price_value=float(price.amount) if price else None,
        price_currency=price.currency if price else None,
        rent_per_unit=float(rent.amount) if rent else None,
        rent_currency=rent.currency if rent else None,
        unit_count=unit_count,
        building_type=building_type,
        location=location,
        annual_revenue=annual,
        roi_ratio=roi,
        payback_years=payback,
        feasibility=evaluate_feasibility(payback),
        price_source_text=price.source_text if price else None,
        rent_source_text=rent.source_text if rent else None,
        unit_source_text=unit_info.source if unit_info else None,
        flags=flags,
        raw_snippet=snippet,
    )


def apply_override(listing: NormalizedListing, override: ListingOverride) -> NormalizedListing:
    """
    Apply manual dashboard corrections and recompute derived metrics.

    The hash is kept so the persisted document is updated in place. Estimation
    flags for overridden fields are dropped; missing flags are recomputed.
    """
    if override.is_empty():
        return listing

    updates: dict[str, object] = {}
    dropped: set[str] = set()

    if override.price_value is not None:
        updates["price_value"] = override.price_value
        updates["price_currency"] = listing.price_currency or Currency.NGN
        updates["price_source_text"] = "manual override"
    if override.rent_per_unit is not None:
        updates["rent_per_unit"] = override.rent_per_unit
        updates["rent_currency"] = listing.rent_currency or Currency.NGN
        updates["rent_source_text"] = "manual override"
        dropped.add(QualityFlag.rent_estimated_from_baseline.value)
    if override.unit_count is not None:
        updates["unit_count"] = override.unit_count
        updates["unit_source_text"] = "manual override"
        dropped.add(QualityFlag.unit_count_assumed_baseline.value)
    if override.location is not None:
        updates["location"] = override.location

    price = updates.get("price_value", listing.price_value)
    rent = updates.get("rent_per_unit", listing.rent_per_unit)
    units = updates.get("unit_count", listing.unit_count)

    annual, roi, payback = compute_financials(price, rent, units)  # type: ignore[arg-type]

    estimation = {f.value for f in ESTIMATION_FLAGS}
    missing = {f.value for f in MISSING_FLAGS}
    flags: list[str] = [f for f in listing.flags if f not in missing and f not in dropped]
    flags.extend(f.value for f in _missing_flags(price, rent, units))
    flags.append(QualityFlag.manual_override.value)
    # keep estimation flags ahead of missing ones, as the normalizer does
    flags.sort(key=lambda f: 0 if f in estimation else 1 if f in missing else 2)

    updates.update(
        annual_revenue=annual,
        roi_ratio=roi,
        payback_years=payback,
        feasibility=evaluate_feasibility(payback),
        flags=flags,
    )
    return NormalizedListing.model_validate({**listing.model_dump(), **updates})


__all__ = [
    "RENT_BASELINE",
    "DEFAULT_UNIT_HINT",
    "BASELINE_RENT_SOURCE",
    "normalize_listing",
    "apply_override",
]
