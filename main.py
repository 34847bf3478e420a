# main.py
"""
Entry Point: Afriscan Property Finder

Purpose
-------
Command-line front end over the core:
  scrape    run one scrape over every configured source, persist, optionally write a report
  list      print stored listings matching the dashboard filters
  summary   print the dashboard headline numbers
  override  correct price / rent / units / location of one stored listing

Usage
-----
    python main.py --store json --data-dir data scrape --online 1 --report run.md
    python main.py list --location Lagos --feasibility strong_candidate
    python main.py summary
    python main.py override <hash> --rent 1500000 --units 40

Exit code is 0 when a run completes (even with per-source errors) and 1 on
fatal errors (bad settings, unreadable or unwritable store, unknown hash).
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from afriscan.core.log import get_logger
from afriscan.dashboard import filter_listings, override_listing, summarize_listings
from afriscan.inputs import Settings, SettingsLoader
from afriscan.orchestrator import build_store, run_scrape
from afriscan.reports import write_report
from afriscan.schemas.labels import BuildingType, FeasibilityTag, KnownLocation
from afriscan.schemas.models import ListingFilters, ListingOverride
from afriscan.storage import StorageError

log = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Afriscan Property Finder")
    p.add_argument("--config", type=str, default=None, help="Path to JSON settings (default: ./config.json if present).")
    p.add_argument("--store", type=str, default=None, choices=["json", "sheet", "memory"], help="Persistence backend.")
    p.add_argument("--data-dir", type=str, default=None, help="Root directory for the json/sheet stores.")

    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("scrape", help="Run one scrape over all sources.")
    s.add_argument("--online", type=int, choices=(0, 1), default=None, help="Allow network fetches (default: cache only).")
    s.add_argument("--report", type=str, default=None, help="Write a Markdown run report to this path.")
    s.add_argument("--triggered-by", type=str, default="manual")

    ls = sub.add_parser("list", help="List stored listings.")
    ls.add_argument("--location", type=str, default="all", choices=["all", *[v.value for v in KnownLocation]])
    ls.add_argument("--building-type", type=str, default="all", choices=["all", *[v.value for v in BuildingType]])
    ls.add_argument("--feasibility", type=str, default="all", choices=["all", *[v.value for v in FeasibilityTag]])
    ls.add_argument("--search", type=str, default="")

    sub.add_parser("summary", help="Print dashboard headline numbers.")

    o = sub.add_parser("override", help="Manually correct one stored listing.")
    o.add_argument("hash", type=str)
    o.add_argument("--price", type=float, default=None)
    o.add_argument("--rent", type=float, default=None)
    o.add_argument("--units", type=int, default=None)
    o.add_argument("--location", type=str, default=None, choices=[v.value for v in KnownLocation])
    return p


def _load_settings(args: argparse.Namespace) -> Settings:
    loader = SettingsLoader()
    cfg = loader.load(args.config)
    online = getattr(args, "online", None)
    return loader.with_overrides(
        cfg,
        store=args.store,
        data_dir=args.data_dir,
        online=bool(online) if online is not None else None,
    )


def _cmd_scrape(args: argparse.Namespace, cfg: Settings) -> int:
    print("Running Afriscan Property Finder scrape...")
    result = run_scrape(args.triggered_by, settings=cfg, store=build_store(cfg))
    print(f"Run {result.run_id}: {len(result.listings)} listings, {len(result.errors)} source errors")
    for err in result.errors:
        print(f"  ! {err}")
    if args.report:
        path = write_report(result, args.report)
        print(f"Report written to {path}")
    return 0


def _cmd_list(args: argparse.Namespace, cfg: Settings) -> int:
    filters = ListingFilters(
        location=args.location,
        building_type=args.building_type,
        feasibility=args.feasibility,
        search=args.search,
    )
    records = filter_listings(build_store(cfg).load_records(), filters)
    for r in records:
        payback = f"{r.payback_years:.1f}y" if r.payback_years is not None else "—"
        print(f"{r.hash[:12]}  {r.feasibility:<16} {payback:>7}  {r.location or '—':<10} {r.title}")
    print(f"{len(records)} listings")
    return 0


def _cmd_summary(args: argparse.Namespace, cfg: Settings) -> int:
    s = summarize_listings(build_store(cfg).load_records())
    print(f"Total listings:    {s.total}")
    print(f"Strong candidates: {s.strong_candidates}")
    print(f"Avg ROI:           {f'{s.avg_roi * 100:.1f}%' if s.avg_roi is not None else '—'}")
    print(f"Avg payback:       {f'{s.avg_payback:.1f} yrs' if s.avg_payback is not None else '—'}")
    print(f"Last updated:      {s.last_updated or '—'}")
    return 0


def _cmd_override(args: argparse.Namespace, cfg: Settings) -> int:
    override = ListingOverride(
        price_value=args.price,
        rent_per_unit=args.rent,
        unit_count=args.units,
        location=args.location,
    )
    updated = override_listing(build_store(cfg), args.hash, override)
    print(updated.summary())
    return 0


_COMMANDS = {
    "scrape": _cmd_scrape,
    "list": _cmd_list,
    "summary": _cmd_summary,
    "override": _cmd_override,
}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = _load_settings(args)
        return _COMMANDS[args.command](args, cfg)
    except (StorageError, ValueError, FileNotFoundError, KeyError) as e:
        log.error("%s failed: %s", args.command, e)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
