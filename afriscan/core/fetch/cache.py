# afriscan/core/fetch/cache.py
"""
On-disk page cache, one directory per URL:

    <cache_dir>/<sha256(url)[:16]>/page.html
    <cache_dir>/<sha256(url)[:16]>/fetch.json
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path


def content_digest(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8", errors="ignore")
    return hashlib.sha256(data).hexdigest()


@dataclass(frozen=True)
class CacheEntry:
    root: Path

    @property
    def page(self) -> Path:
        return self.root / "page.html"

    @property
    def info(self) -> Path:
        return self.root / "fetch.json"

    def read_info(self) -> dict[str, object]:
        if not self.info.exists():
            return {}
        try:
            data = json.loads(self.info.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}

    def store(self, content: bytes, **info: object) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self.page.write_bytes(content)
        merged = self.read_info()
        merged.setdefault("first_fetched_at", info.get("last_fetched_at"))
        merged.update(info)
        self.info.write_text(json.dumps(merged), encoding="utf-8")


def cache_entry(url: str, base_dir: Path) -> CacheEntry:
    return CacheEntry(root=(Path(base_dir) / content_digest(url)[:16]).resolve())


def seed_cache(url: str, html: str, base_dir: Path) -> Path:
    """Store `html` as the cached page for `url` (offline replays and tests)."""
    entry = cache_entry(url, base_dir)
    entry.root.mkdir(parents=True, exist_ok=True)
    entry.page.write_text(html, encoding="utf-8")
    return entry.page
