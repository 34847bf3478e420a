# afriscan/core/fetch/robots.py
"""
robots.txt helper using urllib.robotparser with pluggable fetch.
"""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import urljoin, urlparse
from urllib.robotparser import RobotFileParser

# Fetch signature: (url) -> (status_code, body_text)
FetchFn = Callable[[str], tuple[int, str]]

# robots.txt bodies per scheme://host, kept for the life of the process
_ROBOTS_CACHE: dict[str, RobotFileParser | None] = {}


def _robots_for(origin: str, fetch: FetchFn) -> RobotFileParser | None:
    if origin in _ROBOTS_CACHE:
        return _ROBOTS_CACHE[origin]

    status, text = fetch(urljoin(origin, "/robots.txt"))
    rp: RobotFileParser | None = None
    if status < 400 and text:
        rp = RobotFileParser()
        rp.parse(text.splitlines())
    _ROBOTS_CACHE[origin] = rp
    return rp


def is_allowed(url: str, ua: str, fetch: FetchFn) -> bool:
    """
    Return True if `ua` may fetch `url` per the site's robots.txt.
    A missing or unreadable robots.txt allows everything.
    """
    parsed = urlparse(url)
    rp = _robots_for(f"{parsed.scheme}://{parsed.netloc}", fetch)
    if rp is None:
        return True
    return rp.can_fetch(ua, url)


def clear_robots_cache() -> None:
    _ROBOTS_CACHE.clear()
