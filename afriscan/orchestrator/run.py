# afriscan/orchestrator/run.py
"""
Run aggregator (deterministic, store-agnostic)

Purpose
-------
Execute one scrape run over every configured source:
  1) record a "running" summary
  2) for each source in order: crawl → normalize → upsert
  3) record a "completed" summary with counts and per-source errors

Design
------
- A failing crawl for one source is recorded as "<source_id>: <message>"
  and the run moves on to the next source.
- Normalization never raises; persistence errors are not caught and abort
  the run (the "completed" summary is then never written).
- Collaborators are injected (crawl callable, ListingStore), so every
  caller (CLI, tests, schedulers) runs the exact same core.

Public API
----------
run_scrape(triggered_by, *, sources=None, crawl=None, store=None, settings=None, run_id=None)
  -> RunResult(run_id, triggered_by, started_at, completed_at, listings, errors)
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from afriscan.core.crawl import crawl_source
from afriscan.core.log import get_logger
from afriscan.core.normalize import normalize_listing
from afriscan.inputs.settings import Settings
from afriscan.schemas.models import NormalizedListing, RawListing, RunResult, RunSummary, ScrapeSource
from afriscan.storage import JsonDocumentStore, ListingStore, MemoryStore, SpreadsheetStore

log = get_logger(__name__)

# (source) -> raw listings; may raise anything
SourceCrawler = Callable[[ScrapeSource], list[RawListing]]


def build_store(settings: Settings) -> ListingStore:
    """Instantiate the backend named by `settings.store`."""
    if settings.store == "sheet":
        return SpreadsheetStore(settings.sheet_path)
    if settings.store == "memory":
        return MemoryStore()
    return JsonDocumentStore(settings.json_store_dir)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def run_scrape(
    triggered_by: str = "manual",
    *,
    sources: Sequence[ScrapeSource] | None = None,
    crawl: SourceCrawler | None = None,
    store: ListingStore | None = None,
    settings: Settings | None = None,
    run_id: str | None = None,
) -> RunResult:
    """
    Execute one run over all sources, sequentially.

    Args:
        triggered_by: free-form label of the caller ("manual", "cron", ...).
        sources: sources to crawl (default: settings.sources).
        crawl: per-source crawler (default: crawl_source with settings.fetch).
        store: persistence collaborator (default: built from settings.store).
        settings: validated settings (default: Settings()).
        run_id: explicit run id (default: random uuid4 hex).

    Returns:
        RunResult; `errors` holds one entry per failed source.

    Raises:
        Whatever the store raises (StorageError for the shipped backends).
    """
    cfg = settings or Settings()
    srcs = list(sources) if sources is not None else list(cfg.sources)
    crawler: SourceCrawler = crawl or (lambda s: crawl_source(s, policy=cfg.fetch))
    sink = store if store is not None else build_store(cfg)
    rid = run_id or uuid.uuid4().hex
    started_at = _utc_now()

    sink.record_run_summary(
        RunSummary(
            run_id=rid,
            status="running",
            triggered_by=triggered_by,
            started_at=started_at,
            total_sources=len(srcs),
        )
    )
    log.info("run %s started by %s over %d sources", rid, triggered_by, len(srcs))

    listings: list[NormalizedListing] = []
    errors: list[str] = []

    for source in srcs:
        try:
            raw_listings = crawler(source)
        except Exception as exc:  # noqa: BLE001
            message = str(exc) or type(exc).__name__
            errors.append(f"{source.id}: {message}")
            log.warning("source %s failed: %s", source.id, message)
            continue

        for raw in raw_listings:
            listing = normalize_listing(raw, rent_baseline=cfg.rent_baseline, default_units=cfg.default_units)
            sink.upsert(listing, rid)
            listings.append(listing)
        log.info("source %s: %d listings", source.id, len(raw_listings))

    completed_at = _utc_now()
    sink.record_run_summary(
        RunSummary(
            run_id=rid,
            status="completed",
            triggered_by=triggered_by,
            started_at=started_at,
            completed_at=completed_at,
            total_sources=len(srcs),
            processed_listings=len(listings),
            error_count=len(errors),
            errors=errors,
        )
    )
    log.info("run %s completed: %d listings, %d errors", rid, len(listings), len(errors))

    return RunResult(
        run_id=rid,
        triggered_by=triggered_by,
        started_at=started_at,
        completed_at=completed_at,
        listings=tuple(listings),
        errors=tuple(errors),
    )


__all__ = ["SourceCrawler", "build_store", "run_scrape"]
