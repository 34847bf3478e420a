# afriscan/schemas/models.py

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from afriscan.schemas.labels import BuildingType, Currency, FeasibilityTag, KnownLocation

# Upper bound on the raw text kept per listing (card inner HTML or page head).
SNIPPET_MAX_CHARS = 6000

# =========================
# Parsed primitives
# =========================


class MonetaryValue(BaseModel):
    """An amount parsed from free text. Amounts are Decimal to avoid float drift in currency math."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    amount: Decimal = Field(..., ge=0, description="Parsed amount after magnitude suffix (k/m) is applied.")
    currency: Currency = Field(..., description="NGN (primary) unless the text mentions USD or '$'.")
    source_text: str = Field(..., description="Whitespace-collapsed text the amount was parsed from.")


class UnitCount(BaseModel):
    """A positive unit/room/tenant count parsed from free text."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    value: int = Field(..., gt=0)
    source: str = Field(..., description="Whitespace-collapsed text the count was parsed from.")


# =========================
# Sources & crawl output
# =========================


class SourceSelectors(BaseModel):
    """CSS selectors applied to one listing card (all but `card` are relative to the card)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    card: str
    title: str | None = None
    price: str | None = None
    rent: str | None = None
    units: str | None = None
    location: str | None = None
    type: str | None = None
    description: str | None = None


class ScrapeSource(BaseModel):
    """One configured listing site."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1, description="Stable source id, e.g. 'propertypro_ng'.")
    label: str = Field(..., description="Human-readable source label.")
    entry_urls: list[str] = Field(default_factory=list, description="Search/result pages to crawl.")
    selectors: SourceSelectors
    location_hints: list[KnownLocation] = Field(
        default_factory=list, description="Markets covered by the source; used when no card matches."
    )


class RawListing(BaseModel):
    """
    Raw text fragments for one discovered card (or one fallback per entry page).

    Blank optional fields are coerced to None so the normalizer falls back to
    the snippet the same way whether a selector is missing or matched nothing.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    source_id: str
    source_label: str
    url: str
    html_snippet: str = ""
    title: str | None = None
    price_text: str | None = None
    rent_text: str | None = None
    unit_text: str | None = None
    location_text: str | None = None
    type_text: str | None = None

    @field_validator("html_snippet", mode="before")
    @classmethod
    def _bounded_snippet(cls, v: object) -> str:
        s = "" if v is None else str(v)
        return s[:SNIPPET_MAX_CHARS]

    @field_validator("title", "price_text", "rent_text", "unit_text", "location_text", "type_text", mode="before")
    @classmethod
    def _blank_to_none(cls, v: object) -> object:
        # an empty matched cell counts as unobserved, so the normalizer falls back to the snippet
        if isinstance(v, str) and not v.strip():
            return None
        return v


# =========================
# Normalized output
# =========================


class NormalizedListing(BaseModel):
    """
    Typed listing produced by the normalizer. `hash` is the upsert key.

    Derived fields (annual_revenue, roi_ratio, payback_years) are None unless
    both operands were present and the denominator is non-zero.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    hash: str = Field(..., min_length=64, max_length=64, description="sha256(sourceId|url|title).")
    source_id: str
    source_label: str
    url: str
    title: str | None = None

    price_value: float | None = Field(default=None, ge=0)
    price_currency: Currency | None = None
    rent_per_unit: float | None = Field(default=None, ge=0)
    rent_currency: Currency | None = None
    unit_count: int | None = Field(default=None, gt=0)

    building_type: BuildingType = BuildingType.other
    location: KnownLocation | None = None

    annual_revenue: float | None = Field(default=None, ge=0)
    roi_ratio: float | None = Field(default=None, ge=0)
    payback_years: float | None = Field(default=None, ge=0)
    feasibility: FeasibilityTag = FeasibilityTag.needs_review

    price_source_text: str | None = None
    rent_source_text: str | None = None
    unit_source_text: str | None = None

    flags: tuple[str, ...] = Field(default_factory=tuple, description="Ordered, de-duplicated quality flags.")
    raw_snippet: str = ""

    @field_validator("flags", mode="before")
    @classmethod
    def _ordered_unique(cls, v: object) -> tuple[str, ...]:
        if v is None:
            return ()
        out: list[str] = []
        for f in v:  # type: ignore[union-attr]
            s = f.value if hasattr(f, "value") else str(f)
            if s not in out:
                out.append(s)
        return tuple(out)

    def summary(self) -> str:
        bits: list[str] = [self.title or self.url]
        if self.price_value is not None:
            bits.append(f"price={self.price_value:,.0f} {self.price_currency.value if self.price_currency else ''}".rstrip())
        if self.unit_count is not None:
            bits.append(f"{self.unit_count} units")
        if self.payback_years is not None:
            bits.append(f"payback={self.payback_years:.1f}y")
        bits.append(self.feasibility.value)
        if self.flags:
            bits.append(f"flags={','.join(self.flags)}")
        return " | ".join(bits)


# =========================
# Runs
# =========================

RunStatus = Literal["running", "completed"]


class RunSummary(BaseModel):
    """Run-level bookkeeping handed to the persistence collaborator."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    run_id: str
    status: RunStatus
    triggered_by: str
    started_at: datetime
    completed_at: datetime | None = None
    total_sources: int = Field(0, ge=0)
    processed_listings: int = Field(0, ge=0)
    error_count: int = Field(0, ge=0)
    errors: list[str] = Field(default_factory=list)


class RunResult(BaseModel):
    """Outcome of one aggregator invocation; partial success shows up as non-empty `errors`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    run_id: str
    triggered_by: str
    started_at: datetime
    completed_at: datetime
    listings: tuple[NormalizedListing, ...] = Field(default_factory=tuple)
    errors: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors


# =========================
# Dashboard contracts
# =========================


class ListingRecord(BaseModel):
    """Flat dashboard row, reconstructed from a persisted listing."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    hash: str
    title: str = "Untitled property"
    source_label: str = "Unknown source"
    url: str = ""
    price_value: float | None = None
    price_currency: str | None = None
    rent_per_unit: float | None = None
    rent_currency: str | None = None
    unit_count: int | None = None
    building_type: str = BuildingType.other.value
    location: str | None = None
    annual_revenue: float | None = None
    roi_ratio: float | None = None
    payback_years: float | None = None
    feasibility: str = FeasibilityTag.needs_review.value
    flags: list[str] = Field(default_factory=list)
    updated_at: str | None = None


class ListingFilters(BaseModel):
    """Dashboard filters. "all" or empty means no filtering on that field."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    location: str = "all"
    building_type: str = "all"
    feasibility: str = "all"
    search: str = ""


class ListingOverride(BaseModel):
    """Manual corrections entered from the dashboard. None means keep the current value."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    price_value: float | None = Field(default=None, ge=0)
    rent_per_unit: float | None = Field(default=None, ge=0)
    unit_count: int | None = Field(default=None, gt=0)
    location: KnownLocation | None = None

    def is_empty(self) -> bool:
        return all(v is None for v in (self.price_value, self.rent_per_unit, self.unit_count, self.location))


class DashboardSummary(BaseModel):
    """Headline numbers shown above the listings table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    total: int = 0
    strong_candidates: int = 0
    avg_roi: float | None = None
    avg_payback: float | None = None
    last_updated: str | None = None


# ============================================================
# Page fetching
# ============================================================


class HtmlSnapshot(BaseModel):
    """One listing page as handed from the fetcher to the crawler; the body lives in the page cache."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="ignore")

    url: str
    fetched_at: datetime = Field(..., description="UTC time the page was fetched (cache file mtime on replay).")
    status_code: int
    html_path: Path = Field(..., description="Cached page.html for this URL.")
    bytes_size: int = Field(..., ge=0)
    sha256: str = Field(..., description="Digest of the page bytes.")

    def read_text(self) -> str:
        return self.html_path.read_text(encoding="utf-8", errors="ignore")


class FetchPolicy(BaseModel):
    """
    How the crawler may reach a listing portal.

    Networking is opt-in so tests and replays run from the cache; live runs
    enable it explicitly (CLI --online 1 or AFRISCAN_ONLINE=1).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="ignore")

    captcha_mode: Literal["strict", "soft", "off"] = Field(
        "soft",
        description="strict raises BlockedByWafError; soft keeps the page and marks fetch.json; off ignores challenges.",
    )
    allow_network: bool = Field(False, description="Off means cache replay only; a miss is an error.")
    use_cache: bool = Field(True, description="Replay a cached page before going to the network.")
    allow_non_200: bool = Field(False, description="Keep pages answered with HTTP >= 400 instead of raising.")
    respect_robots: bool = Field(True, description="Consult the portal's robots.txt before a live GET.")
    timeout_s: float = Field(20.0, gt=0, description="Per-request timeout in seconds.")
    user_agent: str = "AfriscanPropertyFinderBot/0.1 (+contact owner)"
    cache_dir: Path = Field(default=Path("data/cache"), description="Root of the page cache.")
