# afriscan/storage/base.py
"""
Persistence seam for the run aggregator and the dashboard.

Backends are interchangeable: the aggregator only needs `upsert` and
`record_run_summary`; the dashboard reads through `load_records` and
`get_listing`. Upserts are keyed on `NormalizedListing.hash`, so re-scraping
the same listing overwrites it in place.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from afriscan.schemas.models import ListingRecord, NormalizedListing, RunSummary


class StorageError(RuntimeError):
    """Store unreachable, unreadable or unwritable. Fatal for the current run."""


@runtime_checkable
class ListingStore(Protocol):
    def upsert(self, listing: NormalizedListing, run_id: str) -> None: ...

    def record_run_summary(self, summary: RunSummary) -> None: ...

    def get_listing(self, listing_hash: str) -> NormalizedListing | None: ...

    def load_records(self) -> list[ListingRecord]: ...


__all__ = ["StorageError", "ListingStore"]
