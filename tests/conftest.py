# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

from afriscan.core.fetch import clear_robots_cache
from afriscan.schemas.models import FetchPolicy
from afriscan.storage import JsonDocumentStore, MemoryStore, SpreadsheetStore
from tests.utils import make_normalized, make_raw_listing, make_source

_ENV_KEYS = (
    "AFRISCAN_STORE",
    "AFRISCAN_DATA_DIR",
    "AFRISCAN_ONLINE",
    "AFRISCAN_RENT_BASELINE",
    "AFRISCAN_DEFAULT_UNITS",
)


# -------- Isolation --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Settings overrides from the developer's shell must not leak into tests."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    clear_robots_cache()
    yield
    clear_robots_cache()


# -------- Domain fixtures --------
@pytest.fixture
def raw_listing_factory():
    """
    Callable factory for RawListing with overridable fields.

    Usage:
        raw = raw_listing_factory(rent_text=None, unit_text=None)
    """
    return make_raw_listing


@pytest.fixture
def hotel_listing():
    """Normalized Victoria Island hotel (payback 7.5 years)."""
    return make_normalized()


@pytest.fixture
def source_factory():
    return make_source


@pytest.fixture
def offline_policy(tmp_path: Path) -> FetchPolicy:
    """Cache-only policy rooted in the test's tmp path."""
    return FetchPolicy(allow_network=False, use_cache=True, cache_dir=tmp_path / "cache")


# -------- Stores --------
@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def json_store(tmp_path: Path) -> JsonDocumentStore:
    return JsonDocumentStore(tmp_path / "store")


@pytest.fixture
def sheet_store(tmp_path: Path) -> SpreadsheetStore:
    return SpreadsheetStore(tmp_path / "sheet" / "listings.csv")


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: marks integration tests")
