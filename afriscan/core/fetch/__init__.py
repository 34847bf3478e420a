from .cache import CacheEntry, cache_entry, content_digest, seed_cache
from .errors import (
    FETCH_ERRORS,
    BlockedByWafError,
    CacheMissError,
    FetchError,
    NetworkError,
    RobotsDisallowedError,
    UndecodablePageError,
    classify_fetch_error,
    typed_fetch_errors,
)
from .html_fetcher import fetch_html, fetch_page_text
from .robots import clear_robots_cache, is_allowed

__all__ = [
    "FetchError",
    "CacheMissError",
    "RobotsDisallowedError",
    "NetworkError",
    "UndecodablePageError",
    "BlockedByWafError",
    "FETCH_ERRORS",
    "classify_fetch_error",
    "typed_fetch_errors",
    "is_allowed",
    "clear_robots_cache",
    "CacheEntry",
    "cache_entry",
    "seed_cache",
    "content_digest",
    "fetch_html",
    "fetch_page_text",
]
