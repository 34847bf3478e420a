# afriscan/storage/sheet_store.py
"""
Spreadsheet backend: one CSV of listing rows (SHEET_HEADERS order, upsert
by Hash) and a sibling `<stem>_runs.csv` with one row per run.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd

from afriscan.core.log import get_logger
from afriscan.schemas.models import ListingRecord, NormalizedListing, RunSummary

from .base import StorageError
from .rows import SHEET_HEADERS, listing_to_row, row_to_listing, row_to_record

log = get_logger(__name__)

RUN_HEADERS: list[str] = [
    "Run ID",
    "Status",
    "Triggered By",
    "Started At",
    "Completed At",
    "Total Sources",
    "Processed Listings",
    "Error Count",
    "Errors",
]


def _read_rows(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        return []
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
    except pd.errors.EmptyDataError:
        return []
    except (OSError, pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise StorageError(f"Cannot read {path}: {exc}") from exc
    return df.to_dict(orient="records")


def _write_rows(path: Path, rows: list[dict[str, Any]], columns: list[str]) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        pd.DataFrame(rows, columns=columns).to_csv(path, index=False, encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Cannot write {path}: {exc}") from exc


def _upsert_row(rows: list[dict[str, Any]], key: str, row: dict[str, Any]) -> list[dict[str, Any]]:
    for i, existing in enumerate(rows):
        if existing.get(key) == row[key]:
            merged = dict(existing)
            merged.update({k: v for k, v in row.items() if v != "" or k not in existing})
            rows[i] = merged
            return rows
    rows.append(row)
    return rows


class SpreadsheetStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.runs_path = self.path.with_name(f"{self.path.stem}_runs.csv")

    def upsert(self, listing: NormalizedListing, run_id: str) -> None:
        row = listing_to_row(listing, datetime.now(timezone.utc))
        rows = _read_rows(self.path)
        for i, existing in enumerate(rows):
            if existing.get("Hash") == listing.hash:
                rows[i] = row
                break
        else:
            rows.append(row)
        _write_rows(self.path, rows, SHEET_HEADERS)
        log.debug("sheet upsert %s (run %s)", listing.hash[:12], run_id)

    def record_run_summary(self, summary: RunSummary) -> None:
        row = {
            "Run ID": summary.run_id,
            "Status": summary.status,
            "Triggered By": summary.triggered_by,
            "Started At": summary.started_at.isoformat(),
            "Completed At": summary.completed_at.isoformat() if summary.completed_at else "",
            "Total Sources": str(summary.total_sources),
            "Processed Listings": str(summary.processed_listings),
            "Error Count": str(summary.error_count),
            "Errors": " | ".join(summary.errors),
        }
        rows = _upsert_row(_read_rows(self.runs_path), "Run ID", row)
        _write_rows(self.runs_path, rows, RUN_HEADERS)

    def load_runs(self) -> list[dict[str, Any]]:
        return _read_rows(self.runs_path)

    def get_listing(self, listing_hash: str) -> NormalizedListing | None:
        for row in _read_rows(self.path):
            if row.get("Hash") == listing_hash:
                return row_to_listing(row)
        return None

    def load_records(self) -> list[ListingRecord]:
        return [row_to_record(r) for r in _read_rows(self.path) if r.get("Hash")]


__all__ = ["SpreadsheetStore", "RUN_HEADERS"]
