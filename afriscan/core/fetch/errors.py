# afriscan/core/fetch/errors.py
"""
Typed failures of the listing-page fetcher.

A crawl that raises any of these is recorded by the run aggregator as a
per-source error string; the remaining sources are still crawled.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager

import requests


class FetchError(RuntimeError):
    """Root of every listing-page fetch failure."""


class CacheMissError(FetchError):
    """Page is not cached and the fetch policy keeps us offline."""


class RobotsDisallowedError(FetchError):
    """The portal's robots.txt forbids this URL."""


class NetworkError(FetchError):
    """Transport failure, or an HTTP error status the policy does not accept."""


class UndecodablePageError(FetchError):
    """Response bytes were not decodable text."""


class BlockedByWafError(FetchError):
    """The portal answered with a CAPTCHA or WAF challenge (strict mode)."""


FETCH_ERRORS: tuple[type[FetchError], ...] = (
    CacheMissError,
    RobotsDisallowedError,
    NetworkError,
    UndecodablePageError,
    BlockedByWafError,
)

WAF_MARKERS = re.compile(
    r"captcha|cf-chl|cloudflare|recaptcha|hcaptcha|incapsula|imperva|akamai|access\s*denied|robot\s*check",
    re.IGNORECASE,
)

# checked in order; first match wins
_TRANSLATIONS: tuple[tuple[type[BaseException], type[FetchError]], ...] = (
    (requests.RequestException, NetworkError),
    (UnicodeDecodeError, UndecodablePageError),
)


def classify_fetch_error(exc: Exception) -> FetchError:
    """Turn any exception escaping the fetcher into a `FetchError`."""
    if isinstance(exc, FetchError):
        return exc
    for source_type, target in _TRANSLATIONS:
        if isinstance(exc, source_type):
            return target(str(exc) or type(exc).__name__)
    text = f"{type(exc).__name__}: {exc}"
    if WAF_MARKERS.search(text):
        return BlockedByWafError(text)
    return FetchError(text)


@contextmanager
def typed_fetch_errors() -> Iterator[None]:
    try:
        yield
    except FETCH_ERRORS:
        raise
    except Exception as exc:  # noqa: BLE001
        raise classify_fetch_error(exc) from exc
