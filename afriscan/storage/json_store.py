# afriscan/storage/json_store.py
"""
Document store on the local filesystem.

Layout under `root`:

    listings_processed/<hash>.json   normalized listing + runId + updatedAt
    listings_raw/<hash>.json         sourceId, url, rawSnippet, runId, updatedAt
    scrape_runs/<run_id>.json        run summary document

Writes merge into the existing document (keys present in the new payload
replace old ones, other keys are kept), so the "running" summary and the
"completed" summary end up in one document per run.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from afriscan.core.log import get_logger
from afriscan.schemas.models import ListingRecord, NormalizedListing, RunSummary

from .base import StorageError
from .rows import listing_to_record

log = get_logger(__name__)

PROCESSED = "listings_processed"
RAW = "listings_raw"
RUNS = "scrape_runs"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonDocumentStore:
    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _doc_path(self, collection: str, doc_id: str) -> Path:
        return self.root / collection / f"{doc_id}.json"

    def _read(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read {path}: {exc}") from exc
        return data if isinstance(data, dict) else {}

    def _merge(self, collection: str, doc_id: str, payload: dict[str, Any]) -> None:
        path = self._doc_path(collection, doc_id)
        doc = self._read(path)
        doc.update(payload)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot write {path}: {exc}") from exc

    # ---- ListingStore -------------------------------------------------------

    def upsert(self, listing: NormalizedListing, run_id: str) -> None:
        ts = _utc_now_iso()
        doc = listing.model_dump(mode="json")
        doc.update({"run_id": run_id, "updated_at": ts})
        self._merge(PROCESSED, listing.hash, doc)
        self._merge(
            RAW,
            listing.hash,
            {
                "source_id": listing.source_id,
                "url": listing.url,
                "raw_snippet": listing.raw_snippet,
                "run_id": run_id,
                "updated_at": ts,
            },
        )

    def record_run_summary(self, summary: RunSummary) -> None:
        # exclude_none keeps completed_at from a previous write when absent
        self._merge(RUNS, summary.run_id, summary.model_dump(mode="json", exclude_none=True))
        log.debug("run %s recorded as %s", summary.run_id, summary.status)

    def get_listing(self, listing_hash: str) -> NormalizedListing | None:
        doc = self._read(self._doc_path(PROCESSED, listing_hash))
        if not doc:
            return None
        return NormalizedListing.model_validate(doc)

    def get_run(self, run_id: str) -> RunSummary | None:
        doc = self._read(self._doc_path(RUNS, run_id))
        return RunSummary.model_validate(doc) if doc else None

    def load_records(self) -> list[ListingRecord]:
        folder = self.root / PROCESSED
        if not folder.exists():
            return []
        records: list[ListingRecord] = []
        for path in sorted(folder.glob("*.json")):
            doc = self._read(path)
            if not doc:
                continue
            records.append(listing_to_record(NormalizedListing.model_validate(doc), doc.get("updated_at")))
        return records


__all__ = ["JsonDocumentStore", "PROCESSED", "RAW", "RUNS"]
