# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_raw_listing, make_source
"""

import os

# Keep test runs from writing ./logs/afriscan.log
os.environ.setdefault("AFRISCAN_LOG_FILE", "0")

from .utils import (  # noqa: E402
    EMPTY_PAGE_HTML,
    PROPERTYPRO_PAGE_HTML,
    make_normalized,
    make_raw_listing,
    make_selectors,
    make_source,
    utc,
)

__all__ = [
    "EMPTY_PAGE_HTML",
    "PROPERTYPRO_PAGE_HTML",
    "make_normalized",
    "make_raw_listing",
    "make_selectors",
    "make_source",
    "utc",
]
