# afriscan/dashboard/query.py
"""
Read-side helpers behind the dashboard: filtering, headline numbers and
manual overrides of a stored listing.
"""

from __future__ import annotations

from collections.abc import Iterable

from afriscan.core.log import get_logger
from afriscan.core.normalize import apply_override
from afriscan.schemas.labels import FeasibilityTag
from afriscan.schemas.models import (
    DashboardSummary,
    ListingFilters,
    ListingOverride,
    ListingRecord,
    NormalizedListing,
)
from afriscan.storage import ListingStore

log = get_logger(__name__)

_ANY = "all"


def _active(value: str | None) -> bool:
    return bool(value) and value != _ANY


def _matches(record: ListingRecord, filters: ListingFilters) -> bool:
    if _active(filters.location) and record.location != filters.location:
        return False
    if _active(filters.building_type) and record.building_type != filters.building_type:
        return False
    if _active(filters.feasibility) and record.feasibility != filters.feasibility:
        return False
    if filters.search:
        target = f"{record.title} {record.location or ''} {record.source_label}".lower()
        if filters.search.lower() not in target:
            return False
    return True


def filter_listings(records: Iterable[ListingRecord], filters: ListingFilters | None = None) -> list[ListingRecord]:
    """Records matching every active filter, in input order."""
    f = filters or ListingFilters()
    return [r for r in records if _matches(r, f)]


def summarize_listings(records: Iterable[ListingRecord]) -> DashboardSummary:
    """
    Headline numbers for a set of records.

    Averages divide by the total count (absent ROI/payback count as 0) and are
    None for an empty set. `last_updated` is the greatest ISO timestamp seen.
    """
    items = list(records)
    if not items:
        return DashboardSummary()

    total = len(items)
    strong = sum(1 for r in items if r.feasibility == FeasibilityTag.strong_candidate.value)
    avg_roi = sum(r.roi_ratio or 0.0 for r in items) / total
    avg_payback = sum(r.payback_years or 0.0 for r in items) / total
    stamps = [r.updated_at for r in items if r.updated_at]

    return DashboardSummary(
        total=total,
        strong_candidates=strong,
        avg_roi=avg_roi,
        avg_payback=avg_payback,
        last_updated=max(stamps) if stamps else None,
    )


def override_listing(
    store: ListingStore,
    listing_hash: str,
    override: ListingOverride,
    *,
    run_id: str = "manual-override",
) -> NormalizedListing:
    """
    Apply a manual correction to a stored listing, recompute its metrics and
    write it back. Raises KeyError when the hash is unknown.
    """
    current = store.get_listing(listing_hash)
    if current is None:
        raise KeyError(f"No listing with hash {listing_hash}")
    if override.is_empty():
        return current

    updated = apply_override(current, override)
    store.upsert(updated, run_id)
    log.info("override applied to %s: feasibility %s -> %s", listing_hash[:12], current.feasibility.value, updated.feasibility.value)
    return updated


__all__ = ["filter_listings", "summarize_listings", "override_listing"]
