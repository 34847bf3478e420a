# afriscan/core/crawl/crawler.py
"""
Selector-driven crawler: one ScrapeSource → RawListing fragments.

For every entry URL the page is fetched (offline-first cache, robots.txt),
parsed with BeautifulSoup/lxml and split into cards with `selectors.card`.
Pages with no matching card still yield one fallback RawListing carrying
the head of the page and the source's location hints, so the normalizer
can try its snippet heuristics on it.

Fetch errors are not caught here; the run aggregator records them per source.
"""

from __future__ import annotations

from collections.abc import Callable

from bs4 import BeautifulSoup, Tag

from afriscan.core.fetch import fetch_page_text
from afriscan.core.log import get_logger
from afriscan.schemas.models import SNIPPET_MAX_CHARS, FetchPolicy, RawListing, ScrapeSource

log = get_logger(__name__)

# (url) -> page html
PageFetcher = Callable[[str], str]


def _select_text(card: Tag, selector: str | None) -> str | None:
    """Concatenated, trimmed text of every node matching `selector` inside the card."""
    if not selector:
        return None
    text = "".join(node.get_text() for node in card.select(selector)).strip()
    return text or None


def _card_to_raw(source: ScrapeSource, url: str, card: Tag) -> RawListing:
    sel = source.selectors
    return RawListing(
        source_id=source.id,
        source_label=source.label,
        url=url,
        html_snippet=card.decode_contents()[:SNIPPET_MAX_CHARS],
        title=_select_text(card, sel.title),
        price_text=_select_text(card, sel.price),
        rent_text=_select_text(card, sel.rent),
        unit_text=_select_text(card, sel.units),
        location_text=_select_text(card, sel.location),
        type_text=_select_text(card, sel.type),
    )


def parse_listings_page(source: ScrapeSource, url: str, html: str) -> list[RawListing]:
    """Split one fetched page into RawListings (or a single fallback listing)."""
    soup = BeautifulSoup(html, "lxml")
    cards = soup.select(source.selectors.card)

    if not cards:
        log.info("%s: no '%s' cards on %s; emitting page fallback", source.id, source.selectors.card, url)
        return [
            RawListing(
                source_id=source.id,
                source_label=source.label,
                url=url,
                html_snippet=html[:SNIPPET_MAX_CHARS],
                location_text=", ".join(h.value for h in source.location_hints) or None,
            )
        ]

    return [_card_to_raw(source, url, card) for card in cards]


def crawl_source(
    source: ScrapeSource,
    *,
    policy: FetchPolicy | None = None,
    fetch: PageFetcher | None = None,
) -> list[RawListing]:
    """
    Crawl every entry URL of `source` in order.

    Args:
        source: configured site (entry URLs + selectors + location hints).
        policy: fetch policy for the default fetcher (ignored when `fetch` is given).
        fetch:  optional page fetcher (url → html), e.g. for tests or replays.
    """
    pol = policy or FetchPolicy()
    get_page: PageFetcher = fetch or (lambda u: fetch_page_text(u, policy=pol))

    listings: list[RawListing] = []
    for url in source.entry_urls:
        html = get_page(url)
        found = parse_listings_page(source, url, html)
        log.debug("%s: %d raw listings from %s", source.id, len(found), url)
        listings.extend(found)
    return listings


__all__ = ["PageFetcher", "parse_listings_page", "crawl_source"]
