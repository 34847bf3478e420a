# tests/utils.py
"""
Shared factories for Afriscan tests.

Factories return validated pydantic models with realistic defaults; every
field can be overridden by keyword.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from afriscan.core.normalize import normalize_listing
from afriscan.schemas.labels import KnownLocation
from afriscan.schemas.models import NormalizedListing, RawListing, ScrapeSource, SourceSelectors

# Card markup in the PropertyPro layout (selectors from the default settings).
PROPERTYPRO_PAGE_HTML = """
<html><body>
  <div class="single-room-sale">
    <h4 class="content-title">Hotel for sale in Victoria Island</h4>
    <h3 class="price">₦750,000,000 <span>₦1,000,000</span></h3>
    <h4 class="location">Victoria Island, Lagos</h4>
    <p class="description">Hotel with 100 units, pool and gym</p>
  </div>
  <div class="single-room-sale">
    <h4 class="content-title">Block of flats in Wuse</h4>
    <h3 class="price">₦120m</h3>
    <h4 class="location">Wuse 2, Abuja</h4>
    <p class="description">Self-contained apartment block</p>
  </div>
</body></html>
"""

EMPTY_PAGE_HTML = "<html><body><p>No results in Ghana right now.</p></body></html>"


def make_selectors(**overrides: Any) -> SourceSelectors:
    data: dict[str, Any] = {
        "card": ".single-room-sale",
        "title": ".content-title",
        "price": ".content-title + .price",
        "rent": ".content-title + .price span",
        "units": ".description",
        "location": ".content-title + .price + .location",
        "description": ".description",
    }
    data.update(overrides)
    return SourceSelectors(**data)


def make_source(
    source_id: str = "propertypro_ng",
    *,
    label: str = "PropertyPro (Nigeria)",
    entry_urls: list[str] | None = None,
    selectors: SourceSelectors | None = None,
    location_hints: list[KnownLocation] | None = None,
) -> ScrapeSource:
    return ScrapeSource(
        id=source_id,
        label=label,
        entry_urls=entry_urls if entry_urls is not None else [f"https://example.com/{source_id}/for-sale"],
        selectors=selectors or make_selectors(),
        location_hints=location_hints if location_hints is not None else [KnownLocation.Lagos, KnownLocation.Abuja],
    )


def make_raw_listing(**overrides: Any) -> RawListing:
    """
    Default: the canonical Victoria Island hotel (₦750M price, ₦1M rent, 100 units).
    """
    data: dict[str, Any] = {
        "source_id": "propertypro_ng",
        "source_label": "PropertyPro (Nigeria)",
        "url": "https://example.com/listing/vi-hotel",
        "html_snippet": "<div>Hotel listing</div>",
        "title": "Hotel for sale in Victoria Island",
        "price_text": "₦750,000,000",
        "rent_text": "₦1,000,000",
        "unit_text": "100 units",
        "location_text": "Victoria Island, Lagos",
        "type_text": "Hotel",
    }
    data.update(overrides)
    return RawListing(**data)


def make_normalized(**overrides: Any) -> NormalizedListing:
    """Normalize `make_raw_listing(**overrides)`."""
    return normalize_listing(make_raw_listing(**overrides))


def utc(year: int = 2024, month: int = 1, day: int = 1, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)
