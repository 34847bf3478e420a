# tests/reports/test_run_report.py

from afriscan.reports import render_run_report, write_report
from afriscan.reports.generator import _fmt_money
from afriscan.schemas.labels import Currency
from afriscan.schemas.models import RunResult
from tests import make_normalized, utc


def _result(listings=(), errors=()) -> RunResult:
    return RunResult(
        run_id="run-42",
        triggered_by="unit-test",
        started_at=utc(2024, 5, 1, 9),
        completed_at=utc(2024, 5, 1, 10),
        listings=tuple(listings),
        errors=tuple(errors),
    )


def test_report_contains_key_sections(tmp_path):
    hotel = make_normalized()
    usd = make_normalized(url="https://example.com/usd", price_text="$1.5m", rent_text="$9,000", title="USD | listing")
    res = _result([hotel, usd], ["meqasa_gh: HTTP 503 for https://meqasa.com/houses-for-sale-in-ghana"])

    md = render_run_report(res)
    assert md.startswith("# Scrape Run – run-42")
    assert "**Triggered by:** unit-test" in md
    assert "Feasibility Breakdown" in md
    assert "| needs_review | 1 |" in md
    assert "| low_priority | 1 |" in md
    assert "| strong_candidate | 0 |" in md
    assert "₦750,000,000.00" in md
    assert "$1,500,000.00" in md
    assert "13.33%" in md
    assert "| 7.5 |" in md
    assert "USD \\| listing" in md  # pipes in titles are escaped
    assert "## Source Errors" in md
    assert "- meqasa_gh: HTTP 503" in md

    out_path = tmp_path / "reports" / "run.md"
    written = write_report(res, out_path)
    assert written == out_path
    assert out_path.read_text(encoding="utf-8") == md


def test_report_for_empty_run():
    md = render_run_report(_result(errors=["propertypro_ng: boom", "meqasa_gh: boom"]))
    assert "No listings were processed in this run." in md
    assert "Data Quality Flags" not in md
    assert md.count("boom") == 2


def test_flags_section_counts_flags():
    flagged = make_normalized(rent_text=None, unit_text=None, html_snippet="<p>plot</p>")
    md = render_run_report(_result([flagged]))
    assert "## Data Quality Flags" in md
    assert "- `missing_rent`: 1" in md
    assert "Source Errors" not in md


def test_title_override():
    md = render_run_report(_result(), title_override="Weekly Lagos sweep")
    assert md.startswith("# Weekly Lagos sweep")


def test_fmt_money():
    assert _fmt_money(750_000_000, Currency.NGN) == "₦750,000,000.00"
    assert _fmt_money(1200.5, Currency.USD) == "$1,200.50"
    assert _fmt_money(None, Currency.NGN) == "—"
    assert _fmt_money(10, None) == "10.00"
