# afriscan/core/fetch/html_fetcher.py
"""
Offline-first page fetcher for listing portals.

Order of play for one URL:
  1. cached page present and `use_cache` -> replay it, no network
  2. networking disabled                 -> CacheMissError
  3. robots.txt disallows                -> RobotsDisallowedError
  4. GET; WAF/CAPTCHA handling per `captcha_mode`
       strict -> BlockedByWafError
       soft   -> keep the page, mark `captcha_suspected` in fetch.json
       off    -> ignore
  5. HTTP >= 400 without `allow_non_200` -> NetworkError (nothing cached)
"""

from __future__ import annotations

from datetime import datetime, timezone

import requests

from afriscan.core.log import get_logger
from afriscan.schemas.models import FetchPolicy, HtmlSnapshot

from .cache import CacheEntry, cache_entry, content_digest
from .errors import (
    WAF_MARKERS,
    BlockedByWafError,
    CacheMissError,
    NetworkError,
    RobotsDisallowedError,
    typed_fetch_errors,
)
from .robots import is_allowed

log = get_logger(__name__)

# statuses portals use when they challenge or throttle scrapers
_CHALLENGE_STATUS = frozenset({401, 403, 429, 451, 503, 520, 521, 522, 523, 524, 525, 526})


def _get(url: str, policy: FetchPolicy) -> tuple[int, bytes]:
    try:
        resp = requests.get(url, headers={"User-Agent": policy.user_agent}, timeout=policy.timeout_s)
    except requests.RequestException as e:
        raise NetworkError(str(e)) from e
    return resp.status_code, resp.content


def _robots_getter(policy: FetchPolicy):
    def fetch(robots_url: str) -> tuple[int, str]:
        try:
            status, body = _get(robots_url, policy)
        except NetworkError:
            return 599, ""
        return status, body.decode("utf-8", errors="ignore")

    return fetch


def _snapshot(url: str, entry: CacheEntry, content: bytes, status: int, fetched_at: datetime) -> HtmlSnapshot:
    return HtmlSnapshot(
        url=url,
        fetched_at=fetched_at,
        status_code=status,
        html_path=entry.page,
        bytes_size=len(content),
        sha256=content_digest(content),
    )


def _replay(url: str, entry: CacheEntry) -> HtmlSnapshot:
    content = entry.page.read_bytes()
    try:
        status = int(entry.read_info().get("status_code", 200))
    except (TypeError, ValueError):
        status = 200
    fetched_at = datetime.fromtimestamp(entry.page.stat().st_mtime, tz=timezone.utc)
    log.debug("cache hit for %s", url)
    return _snapshot(url, entry, content, status, fetched_at)


def fetch_html(url: str, *, policy: FetchPolicy | None = None) -> HtmlSnapshot:
    pol = policy or FetchPolicy()
    entry = cache_entry(url, pol.cache_dir)

    with typed_fetch_errors():
        if pol.use_cache and entry.page.exists():
            return _replay(url, entry)

        if not pol.allow_network:
            raise CacheMissError(f"Cache miss for {url} and networking is disabled by policy.")

        if pol.respect_robots and not is_allowed(url, pol.user_agent, _robots_getter(pol)):
            raise RobotsDisallowedError(f"robots.txt disallows fetching {url}")

        log.info("GET %s", url)
        status, content = _get(url, pol)

        challenged = status in _CHALLENGE_STATUS or bool(WAF_MARKERS.search(content.decode("utf-8", errors="ignore")))
        if challenged and pol.captcha_mode == "strict":
            raise BlockedByWafError(f"WAF/CAPTCHA suspected for {url} (status={status})")
        if status >= 400 and not pol.allow_non_200:
            raise NetworkError(f"HTTP {status} for {url}")

        now = datetime.now(timezone.utc)
        info: dict[str, object] = {"url": url, "status_code": status, "last_fetched_at": now.isoformat()}
        if challenged and pol.captcha_mode == "soft":
            log.warning("WAF/CAPTCHA suspected for %s (status=%s); keeping page", url, status)
            info["captcha_suspected"] = True
        entry.store(content, **info)
        return _snapshot(url, entry, content, status, now)


def fetch_page_text(url: str, *, policy: FetchPolicy | None = None) -> str:
    """Fetch (or replay from cache) and return the decoded page body."""
    return fetch_html(url, policy=policy).read_text()
