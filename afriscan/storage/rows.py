# afriscan/storage/rows.py
"""
Flat row contract shared by the spreadsheet export and the dashboard.

The column names and their order are consumed by existing sheets and
dashboards; do not reorder or rename.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any

from afriscan.schemas.labels import BuildingType, Currency, FeasibilityTag, KnownLocation
from afriscan.schemas.models import ListingRecord, NormalizedListing

SHEET_HEADERS: list[str] = [
    "Hash",
    "Source",
    "Title",
    "URL",
    "Price",
    "Price Currency",
    "Rent",
    "Rent Currency",
    "Units",
    "Building Type",
    "Location",
    "Annual Revenue",
    "ROI",
    "Payback Years",
    "Feasibility",
    "Price Source",
    "Rent Source",
    "Unit Source",
    "Flags",
    "Captured At",
]

_SOURCE_CELL_RE = re.compile(r"^(.*)\s+\((.*)\)$")


def _enum_value(v: Any) -> Any:
    return v.value if hasattr(v, "value") else v


def _blank(v: Any) -> Any:
    return "" if v is None else v


def format_source_cell(label: str, source_id: str) -> str:
    return f"{label} ({source_id})"


def parse_source_cell(cell: str | None) -> tuple[str, str]:
    """ "PropertyPro (Nigeria) (propertypro_ng)" → ("PropertyPro (Nigeria)", "propertypro_ng")."""
    if not cell:
        return "Unknown source", "unknown"
    m = _SOURCE_CELL_RE.match(cell)
    if m:
        return m.group(1).strip(), m.group(2).strip()
    return cell, cell


def _to_float(v: Any) -> float | None:
    if v is None or v == "":
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _to_int(v: Any) -> int | None:
    f = _to_float(v)
    return int(f) if f is not None else None


def _to_str(v: Any) -> str | None:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def split_flags(cell: Any) -> list[str]:
    return [f.strip() for f in str(cell or "").split(",") if f.strip()]


def listing_to_row(listing: NormalizedListing, captured_at: datetime) -> dict[str, Any]:
    """NormalizedListing → ordered sheet row (None becomes an empty cell)."""
    values = [
        listing.hash,
        format_source_cell(listing.source_label, listing.source_id),
        listing.title,
        listing.url,
        listing.price_value,
        _enum_value(listing.price_currency),
        listing.rent_per_unit,
        _enum_value(listing.rent_currency),
        listing.unit_count,
        _enum_value(listing.building_type),
        _enum_value(listing.location),
        listing.annual_revenue,
        listing.roi_ratio,
        listing.payback_years,
        _enum_value(listing.feasibility),
        listing.price_source_text,
        listing.rent_source_text,
        listing.unit_source_text,
        ",".join(listing.flags),
        captured_at.isoformat(),
    ]
    return {header: _blank(v) for header, v in zip(SHEET_HEADERS, values)}


def row_to_record(row: dict[str, Any]) -> ListingRecord:
    """Sheet row → dashboard record. Unparseable numeric cells become None."""
    label, _ = parse_source_cell(_to_str(row.get("Source")))
    return ListingRecord(
        hash=_to_str(row.get("Hash")) or "",
        title=_to_str(row.get("Title")) or "Untitled property",
        source_label=label,
        url=_to_str(row.get("URL")) or "",
        price_value=_to_float(row.get("Price")),
        price_currency=_to_str(row.get("Price Currency")),
        rent_per_unit=_to_float(row.get("Rent")),
        rent_currency=_to_str(row.get("Rent Currency")),
        unit_count=_to_int(row.get("Units")),
        building_type=_to_str(row.get("Building Type")) or BuildingType.other.value,
        location=_to_str(row.get("Location")),
        annual_revenue=_to_float(row.get("Annual Revenue")),
        roi_ratio=_to_float(row.get("ROI")),
        payback_years=_to_float(row.get("Payback Years")),
        feasibility=_to_str(row.get("Feasibility")) or FeasibilityTag.needs_review.value,
        flags=split_flags(row.get("Flags")),
        updated_at=_to_str(row.get("Captured At")),
    )


def row_to_listing(row: dict[str, Any]) -> NormalizedListing:
    """
    Sheet row → NormalizedListing (for manual overrides on the spreadsheet backend).
    The raw snippet is not part of the sheet and comes back empty.
    """
    label, source_id = parse_source_cell(_to_str(row.get("Source")))
    price_cur = _to_str(row.get("Price Currency"))
    rent_cur = _to_str(row.get("Rent Currency"))
    location = _to_str(row.get("Location"))
    units = _to_int(row.get("Units"))
    return NormalizedListing(
        hash=_to_str(row.get("Hash")) or "",
        source_id=source_id,
        source_label=label,
        url=_to_str(row.get("URL")) or "",
        title=_to_str(row.get("Title")),
        price_value=_to_float(row.get("Price")),
        price_currency=Currency(price_cur) if price_cur else None,
        rent_per_unit=_to_float(row.get("Rent")),
        rent_currency=Currency(rent_cur) if rent_cur else None,
        unit_count=units if units and units > 0 else None,
        building_type=BuildingType(_to_str(row.get("Building Type")) or BuildingType.other.value),
        location=KnownLocation(location) if location else None,
        annual_revenue=_to_float(row.get("Annual Revenue")),
        roi_ratio=_to_float(row.get("ROI")),
        payback_years=_to_float(row.get("Payback Years")),
        feasibility=FeasibilityTag(_to_str(row.get("Feasibility")) or FeasibilityTag.needs_review.value),
        price_source_text=_to_str(row.get("Price Source")),
        rent_source_text=_to_str(row.get("Rent Source")),
        unit_source_text=_to_str(row.get("Unit Source")),
        flags=split_flags(row.get("Flags")),
    )


def listing_to_record(listing: NormalizedListing, updated_at: str | None = None) -> ListingRecord:
    return ListingRecord(
        hash=listing.hash,
        title=listing.title or "Untitled property",
        source_label=listing.source_label,
        url=listing.url,
        price_value=listing.price_value,
        price_currency=_enum_value(listing.price_currency),
        rent_per_unit=listing.rent_per_unit,
        rent_currency=_enum_value(listing.rent_currency),
        unit_count=listing.unit_count,
        building_type=_enum_value(listing.building_type),
        location=_enum_value(listing.location),
        annual_revenue=listing.annual_revenue,
        roi_ratio=listing.roi_ratio,
        payback_years=listing.payback_years,
        feasibility=_enum_value(listing.feasibility),
        flags=list(listing.flags),
        updated_at=updated_at,
    )


__all__ = [
    "SHEET_HEADERS",
    "format_source_cell",
    "parse_source_cell",
    "split_flags",
    "listing_to_row",
    "row_to_record",
    "row_to_listing",
    "listing_to_record",
]
