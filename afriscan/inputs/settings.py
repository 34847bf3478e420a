# afriscan/inputs/settings.py
"""
Settings loader for Afriscan Property Finder.

Goals
-----
- File-first settings validated with Pydantic.
- Works with no file at all: built-in defaults cover both shipped sources.
- Small set of environment overrides for CI/CLI convenience.

JSON shape (every key optional)
-------------------------------
    {
      "sources": [ { "id": ..., "label": ..., "entry_urls": [...],
                     "selectors": {"card": ..., ...}, "location_hints": [...] } ],
      "rent_baseline": 1000000,
      "default_units": 100,
      "store": "json",
      "data_dir": "data",
      "fetch": { "allow_network": false, "captcha_mode": "soft", ... }
    }

Environment overrides (optional)
--------------------------------
- AFRISCAN_STORE          -> Settings.store ("json" | "sheet" | "memory")
- AFRISCAN_DATA_DIR       -> Settings.data_dir
- AFRISCAN_ONLINE         -> Settings.fetch.allow_network (1/0, true/false)
- AFRISCAN_RENT_BASELINE  -> Settings.rent_baseline (number > 0)
- AFRISCAN_DEFAULT_UNITS  -> Settings.default_units (int > 0)

Bad override values are ignored and the validated file value is kept.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import BaseModel, Field, ValidationError

from afriscan.core.normalize.listing import DEFAULT_UNIT_HINT, RENT_BASELINE
from afriscan.schemas.labels import KnownLocation
from afriscan.schemas.models import FetchPolicy, ScrapeSource, SourceSelectors

StoreBackend = Literal["json", "sheet", "memory"]

DEFAULT_SOURCES: tuple[ScrapeSource, ...] = (
    ScrapeSource(
        id="propertypro_ng",
        label="PropertyPro (Nigeria)",
        entry_urls=["https://www.propertypro.ng/property-for-sale"],
        selectors=SourceSelectors(
            card=".single-room-sale",
            title=".content-title",
            price=".content-title + .price",
            rent=".content-title + .price span",
            units=".description",
            location=".content-title + .price + .location",
            description=".description",
        ),
        location_hints=[KnownLocation.Lagos, KnownLocation.Abuja, KnownLocation.Enugu, KnownLocation.Ibadan],
    ),
    ScrapeSource(
        id="meqasa_gh",
        label="Meqasa (Ghana)",
        entry_urls=["https://meqasa.com/houses-for-sale-in-ghana"],
        selectors=SourceSelectors(
            card=".property-list-card",
            title=".property-list-card-title",
            price=".price",
            location=".details-location",
            description=".property-list-card-description",
        ),
        location_hints=[KnownLocation.Ghana, KnownLocation.Accra],
    ),
)


class Settings(BaseModel):
    """Validated runtime settings for one process."""

    sources: list[ScrapeSource] = Field(default_factory=lambda: list(DEFAULT_SOURCES))
    rent_baseline: float = Field(float(RENT_BASELINE), gt=0, description="Yearly per-tenant rent used by the ₦1m heuristic.")
    default_units: int = Field(DEFAULT_UNIT_HINT, gt=0, description="Unit count assumed when rent is known but units are not.")
    store: StoreBackend = Field("json", description="Persistence backend.")
    data_dir: str = Field("data", description="Root directory for the json/sheet stores.")
    fetch: FetchPolicy = Field(default_factory=FetchPolicy)

    @property
    def json_store_dir(self) -> Path:
        return Path(self.data_dir) / "store"

    @property
    def sheet_path(self) -> Path:
        return Path(self.data_dir) / "listings.csv"


def _parse_bool(value: str) -> bool | None:
    v = value.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    return None


@dataclass(frozen=True)
class SettingsLoader:
    """
    File-first settings loader with light env overrides.

    Default search (when path=None):
        1) ./config.json
        2) built-in defaults
    """

    env_prefix: str = "AFRISCAN_"

    def load(self, path: str | Path | None = None) -> Settings:
        p = self._resolve_path(path)
        raw = self._read_json_file(p) if p is not None else {}
        cfg = self._parse_root(raw)
        return self._apply_env_overrides(cfg)

    def load_json(self, text: str) -> Settings:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Settings payload must be a JSON object.")
        return self._apply_env_overrides(self._parse_root(raw))

    def with_overrides(
        self,
        cfg: Settings,
        *,
        store: str | None = None,
        data_dir: str | None = None,
        online: bool | None = None,
    ) -> Settings:
        """Return a new Settings with the non-null CLI overrides applied."""
        updates: dict[str, Any] = {}
        if store is not None:
            if store not in ("json", "sheet", "memory"):
                raise ValueError(f"Unknown store backend: {store!r}")
            updates["store"] = store
        if data_dir is not None:
            updates["data_dir"] = data_dir
        if online is not None:
            updates["fetch"] = cfg.fetch.model_copy(update={"allow_network": online})
        if not updates:
            return cfg
        return cfg.model_copy(update=updates)

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path | None:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Settings file not found: {p}")
            return p
        candidate = Path("config.json")
        return candidate if candidate.exists() else None

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported settings format for {p.name}; only .json is supported.")
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Settings in {p} must be a JSON object.")
        return cast(dict[str, Any], data)

    def _parse_root(self, data: dict[str, Any]) -> Settings:
        try:
            return Settings.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Settings validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: Settings) -> Settings:
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        store = os.getenv(f"{prefix}STORE")
        if store:
            normalized = store.strip().lower()
            if normalized in ("json", "sheet", "memory"):
                updates["store"] = normalized

        data_dir = os.getenv(f"{prefix}DATA_DIR")
        if data_dir:
            updates["data_dir"] = data_dir

        online = os.getenv(f"{prefix}ONLINE")
        if online:
            flag = _parse_bool(online)
            if flag is not None:
                updates["fetch"] = cfg.fetch.model_copy(update={"allow_network": flag})

        baseline = os.getenv(f"{prefix}RENT_BASELINE")
        if baseline:
            try:
                value = float(baseline)
                if value > 0:
                    updates["rent_baseline"] = value
            except ValueError:
                pass

        units = os.getenv(f"{prefix}DEFAULT_UNITS")
        if units:
            try:
                count = int(units)
                if count > 0:
                    updates["default_units"] = count
            except ValueError:
                pass

        if not updates:
            return cfg
        return cfg.model_copy(update=updates)


def load_settings(path: str | Path | None = None) -> Settings:
    """Convenience wrapper for one-shot callers."""
    return SettingsLoader().load(path)


__all__ = ["DEFAULT_SOURCES", "Settings", "SettingsLoader", "StoreBackend", "load_settings"]
