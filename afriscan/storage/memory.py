# afriscan/storage/memory.py
from __future__ import annotations

from datetime import datetime, timezone

from afriscan.schemas.models import ListingRecord, NormalizedListing, RunSummary

from .rows import listing_to_record


class MemoryStore:
    """Process-local store (tests, dry runs). Same upsert-by-hash semantics as the file stores."""

    def __init__(self) -> None:
        self.listings: dict[str, NormalizedListing] = {}
        self.listing_runs: dict[str, str] = {}
        self.updated_at: dict[str, str] = {}
        self.runs: dict[str, RunSummary] = {}

    def upsert(self, listing: NormalizedListing, run_id: str) -> None:
        self.listings[listing.hash] = listing
        self.listing_runs[listing.hash] = run_id
        self.updated_at[listing.hash] = datetime.now(timezone.utc).isoformat()

    def record_run_summary(self, summary: RunSummary) -> None:
        self.runs[summary.run_id] = summary

    def get_listing(self, listing_hash: str) -> NormalizedListing | None:
        return self.listings.get(listing_hash)

    def load_records(self) -> list[ListingRecord]:
        return [listing_to_record(lst, self.updated_at.get(h)) for h, lst in self.listings.items()]
