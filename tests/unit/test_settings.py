# tests/unit/test_settings.py
from __future__ import annotations

import json
from pathlib import Path

import pytest

from afriscan.inputs import DEFAULT_SOURCES, Settings, SettingsLoader, load_settings
from afriscan.schemas.labels import KnownLocation


def test_defaults_without_any_file(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_settings()
    assert [s.id for s in cfg.sources] == ["propertypro_ng", "meqasa_gh"]
    assert cfg.rent_baseline == 1_000_000
    assert cfg.default_units == 100
    assert cfg.store == "json"
    assert cfg.fetch.allow_network is False
    assert cfg.sheet_path == Path("data") / "listings.csv"


def test_default_sources_carry_selectors_and_hints():
    pp, mq = DEFAULT_SOURCES
    assert pp.label == "PropertyPro (Nigeria)"
    assert pp.entry_urls == ["https://www.propertypro.ng/property-for-sale"]
    assert pp.selectors.card == ".single-room-sale"
    assert pp.selectors.rent == ".content-title + .price span"
    assert KnownLocation.Ibadan in pp.location_hints
    assert mq.label == "Meqasa (Ghana)"
    assert mq.selectors.card == ".property-list-card"
    assert mq.location_hints == [KnownLocation.Ghana, KnownLocation.Accra]


def test_config_json_in_cwd_is_picked_up(tmp_path: Path, monkeypatch):
    (tmp_path / "config.json").write_text(json.dumps({"store": "sheet", "default_units": 40}), encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    cfg = load_settings()
    assert cfg.store == "sheet"
    assert cfg.default_units == 40


def test_explicit_path_with_custom_source(tmp_path: Path):
    p = tmp_path / "afriscan.json"
    p.write_text(
        json.dumps(
            {
                "sources": [
                    {
                        "id": "demo",
                        "label": "Demo",
                        "entry_urls": ["https://demo.example.com/list"],
                        "selectors": {"card": ".card", "price": ".price"},
                        "location_hints": ["Casablanca"],
                    }
                ],
                "fetch": {"allow_network": True, "timeout_s": 5},
            }
        ),
        encoding="utf-8",
    )
    cfg = SettingsLoader().load(p)
    assert [s.id for s in cfg.sources] == ["demo"]
    assert cfg.sources[0].location_hints == [KnownLocation.Casablanca]
    assert cfg.fetch.allow_network is True
    assert cfg.fetch.timeout_s == 5


def test_missing_explicit_path(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        SettingsLoader().load(tmp_path / "nope.json")


def test_invalid_payloads_raise_value_error(tmp_path: Path):
    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{oops", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON"):
        SettingsLoader().load(bad_json)

    with pytest.raises(ValueError, match="validation failed"):
        SettingsLoader().load_json(json.dumps({"default_units": 0}))

    yaml_file = tmp_path / "cfg.yaml"
    yaml_file.write_text("store: json", encoding="utf-8")
    with pytest.raises(ValueError, match="only .json"):
        SettingsLoader().load(yaml_file)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AFRISCAN_STORE", "SHEET")
    monkeypatch.setenv("AFRISCAN_DATA_DIR", "/tmp/afriscan")
    monkeypatch.setenv("AFRISCAN_ONLINE", "1")
    monkeypatch.setenv("AFRISCAN_RENT_BASELINE", "750000")
    monkeypatch.setenv("AFRISCAN_DEFAULT_UNITS", "50")
    cfg = SettingsLoader().load_json("{}")
    assert cfg.store == "sheet"
    assert cfg.data_dir == "/tmp/afriscan"
    assert cfg.fetch.allow_network is True
    assert cfg.rent_baseline == 750_000
    assert cfg.default_units == 50


def test_bad_env_values_are_ignored(monkeypatch):
    monkeypatch.setenv("AFRISCAN_STORE", "postgres")
    monkeypatch.setenv("AFRISCAN_ONLINE", "maybe")
    monkeypatch.setenv("AFRISCAN_RENT_BASELINE", "lots")
    monkeypatch.setenv("AFRISCAN_DEFAULT_UNITS", "-3")
    cfg = SettingsLoader().load_json(json.dumps({"store": "memory", "default_units": 12}))
    assert cfg.store == "memory"
    assert cfg.fetch.allow_network is False
    assert cfg.rent_baseline == 1_000_000
    assert cfg.default_units == 12


def test_with_overrides_is_non_destructive():
    loader = SettingsLoader()
    base = Settings()
    out = loader.with_overrides(base, store="sheet", data_dir="elsewhere", online=True)
    assert out.store == "sheet"
    assert out.data_dir == "elsewhere"
    assert out.fetch.allow_network is True
    assert base.store == "json"
    assert base.fetch.allow_network is False
    assert loader.with_overrides(base) is base
    with pytest.raises(ValueError):
        loader.with_overrides(base, store="ftp")
