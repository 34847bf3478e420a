# afriscan/reports/generator.py
from __future__ import annotations

from collections import Counter
from pathlib import Path

from afriscan.schemas.labels import CURRENCY_SYMBOLS, Currency, FeasibilityTag
from afriscan.schemas.models import NormalizedListing, RunResult


def _fmt_money(x: float | None, currency: Currency | None) -> str:
    """
    Format an amount with its currency symbol and thousands separators.

    Example:
        (750000000, NGN) -> ₦750,000,000.00
        (1200.5, USD)    -> $1,200.50
        (None, ...)      -> —
    """
    if x is None:
        return "—"
    symbol = CURRENCY_SYMBOLS.get(currency, "") if currency is not None else ""
    sign = "-" if x < 0 else ""
    return f"{sign}{symbol}{abs(x):,.2f}"


def _fmt_pct(x: float | None) -> str:
    """
    Format a fraction as a percentage with two decimals.

    Example:
        0.1333 -> 13.33%
    """
    return "—" if x is None else f"{x * 100:.2f}%"


def _fmt_years(x: float | None) -> str:
    return "—" if x is None else f"{x:.1f}"


def _section(title: str) -> str:
    """
    Render a level-2 heading for Markdown sections.
    """
    return f"\n## {title}\n"


def _cell(text: str | None) -> str:
    return (text or "").replace("|", "\\|").replace("\n", " ").strip()


def _render_header(result: RunResult) -> str:
    lines = [
        f"# Scrape Run – {result.run_id}",
        "",
        f"- **Triggered by:** {result.triggered_by}",
        f"- **Started:** {result.started_at.isoformat()}",
        f"- **Completed:** {result.completed_at.isoformat()}",
        f"- **Listings processed:** {len(result.listings)}",
        f"- **Source errors:** {len(result.errors)}",
    ]
    return "\n".join(lines) + "\n"


def _render_feasibility(listings: tuple[NormalizedListing, ...]) -> str:
    """
    Count of listings per feasibility tag, always listing every tag.
    """
    counts = Counter(lst.feasibility for lst in listings)
    lines = [
        _section("Feasibility Breakdown"),
        "| Tag | Listings |",
        "| :--- | ---: |",
    ]
    for tag in FeasibilityTag:
        lines.append(f"| {tag.value} | {counts.get(tag, 0)} |")
    lines += [
        "",
        "Payback of 2–5 years is a strong candidate, above 5 and up to 10 needs review, "
        "anything else (including under 2 years) is low priority. Listings without a payback are flagged for review.",
    ]
    return "\n".join(lines) + "\n"


def _render_listings_table(listings: tuple[NormalizedListing, ...]) -> str:
    if not listings:
        return _section("Listings") + "\nNo listings were processed in this run.\n"

    header = [
        _section("Listings"),
        "| Title | Source | Location | Type | Price | Rent / Unit | Units | Annual Revenue | ROI | Payback (yrs) | Feasibility | Flags |",
        "| :--- | :--- | :--- | :--- | ---: | ---: | ---: | ---: | ---: | ---: | :--- | :--- |",
    ]
    rows = []
    for lst in listings:
        rows.append(
            f"| {_cell(lst.title or lst.url)} "
            f"| {_cell(lst.source_label)} "
            f"| {lst.location.value if lst.location else '—'} "
            f"| {lst.building_type.value} "
            f"| {_fmt_money(lst.price_value, lst.price_currency)} "
            f"| {_fmt_money(lst.rent_per_unit, lst.rent_currency)} "
            f"| {lst.unit_count if lst.unit_count is not None else '—'} "
            f"| {_fmt_money(lst.annual_revenue, lst.rent_currency)} "
            f"| {_fmt_pct(lst.roi_ratio)} "
            f"| {_fmt_years(lst.payback_years)} "
            f"| {lst.feasibility.value} "
            f"| {', '.join(lst.flags) or '—'} |"
        )
    return "\n".join(header + rows) + "\n"


def _render_flags(listings: tuple[NormalizedListing, ...]) -> str:
    counts = Counter(flag for lst in listings for flag in lst.flags)
    if not counts:
        return ""
    lines = [_section("Data Quality Flags")]
    for flag, n in sorted(counts.items()):
        lines.append(f"- `{flag}`: {n}")
    return "\n".join(lines) + "\n"


def _render_errors(errors: tuple[str, ...]) -> str:
    if not errors:
        return ""
    lines = [_section("Source Errors")]
    for err in errors:
        lines.append(f"- {err}")
    return "\n".join(lines) + "\n"


def render_run_report(result: RunResult, title_override: str | None = None) -> str:
    """
    Generate a Markdown report for one scrape run.

    Sections:
      - Header: run id, trigger, timestamps, counts
      - Feasibility Breakdown
      - Listings table (currency-aware money columns)
      - Data Quality Flags (if any)
      - Source Errors (if any)
    """
    header = _render_header(result)
    if title_override:
        header_lines = header.splitlines()
        header_lines[0] = f"# {title_override}"
        header = "\n".join(header_lines) + "\n"

    parts = [
        header,
        _render_feasibility(result.listings),
        _render_listings_table(result.listings),
        _render_flags(result.listings),
        _render_errors(result.errors),
    ]
    return "\n".join(part for part in parts if part).strip() + "\n"


def write_report(result: RunResult, path: str | Path) -> Path:
    """
    Convenience helper to write the run report to disk.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(render_run_report(result), encoding="utf-8")
    return p
