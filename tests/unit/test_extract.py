# tests/unit/test_extract.py
from __future__ import annotations

from decimal import Decimal

import pytest

from afriscan.core.normalize import (
    build_listing_hash,
    detect_location,
    normalize_building_type,
    parse_monetary_value,
    parse_unit_count,
)
from afriscan.schemas.labels import BuildingType, Currency, KnownLocation


@pytest.mark.parametrize(
    "text, amount, currency",
    [
        ("₦2.5m", Decimal("2500000"), Currency.NGN),
        ("$137,000", Decimal("137000"), Currency.USD),
        ("₦750,000,000", Decimal("750000000"), Currency.NGN),
        ("NGN 45 million", Decimal("45000000"), Currency.NGN),
        ("850k", Decimal("850000"), Currency.NGN),
        ("120 thousand USD", Decimal("120000"), Currency.USD),
        ("  ₦  1,200,000 \n per annum ", Decimal("1200000"), Currency.NGN),
    ],
)
def test_parse_monetary_value_amounts_and_currency(text, amount, currency):
    mv = parse_monetary_value(text)
    assert mv is not None
    assert mv.amount == amount
    assert mv.currency is currency


def test_parse_monetary_value_usd_keyword_anywhere_wins_over_default():
    mv = parse_monetary_value("₦500,000 (approx usd)")
    assert mv is not None
    assert mv.currency is Currency.USD
    assert mv.amount == Decimal("500000")


def test_parse_monetary_value_is_decimal_exact():
    mv = parse_monetary_value("₦0.1m")
    assert mv is not None
    assert mv.amount == Decimal("100000.00")


def test_parse_monetary_value_keeps_collapsed_source_text():
    mv = parse_monetary_value("₦2.5m\n\n  per year")
    assert mv is not None
    assert mv.source_text == "₦2.5m per year"


def test_magnitude_suffix_only_counts_right_after_number():
    mv = parse_monetary_value("₦2,500 per month, 3m from the road")
    assert mv is not None
    assert mv.amount == Decimal("2500")


@pytest.mark.parametrize("text", [None, "", "   ", "Price on request", "call for price"])
def test_parse_monetary_value_absent(text):
    assert parse_monetary_value(text) is None


def test_parse_monetary_value_rejects_unparseable_number():
    assert parse_monetary_value("₦1.2.3") is None


@pytest.mark.parametrize(
    "text",
    [
        "Ref 123456789012345678901234567",
        "₦1,000,000,000,000,000,000,000,000,000",
        "$99999999999999999999999999m",
    ],
)
def test_parse_monetary_value_oversized_number_is_absent(text):
    assert parse_monetary_value(text) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("100 units", 100),
        ("24 rooms", 24),
        ("60 Apartments", 60),
        ("Built for 12 tenants", 12),
        ("7", 7),
        ("one hundred tenants", 100),
    ],
)
def test_parse_unit_count(text, expected):
    uc = parse_unit_count(text)
    assert uc is not None
    assert uc.value == expected


def test_parse_unit_count_digit_beats_hundred_fallback():
    uc = parse_unit_count("hundred-year-old building with 40 rooms")
    assert uc is not None and uc.value == 40


@pytest.mark.parametrize("text", [None, "", "spacious compound", "0 units"])
def test_parse_unit_count_absent(text):
    assert parse_unit_count(text) is None


def test_parse_unit_count_keyword_mode_ignores_bare_numbers():
    snippet = "<div>₦1m yearly, plot 14, 30 rooms</div>"
    assert parse_unit_count(snippet, require_keyword=True).value == 30
    assert parse_unit_count("<div>plot 14 ₦1m</div>", require_keyword=True) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Victoria Island, Lagos", KnownLocation.Lagos),
        ("Wuse 2, ABUJA", KnownLocation.Abuja),
        ("East Legon, Accra", KnownLocation.Accra),
        ("Gueliz, Marrakech", KnownLocation.Marrakesh),
        ("Casablanca Finance City", KnownLocation.Casablanca),
        ("Bodija, Ibadan", KnownLocation.Ibadan),
        ("Houses in Ghana", KnownLocation.Ghana),
    ],
)
def test_detect_location(text, expected):
    assert detect_location(text) is expected


def test_detect_location_first_table_entry_wins():
    # Ghana precedes Accra in the table
    assert detect_location("Accra, Ghana") is KnownLocation.Ghana


@pytest.mark.parametrize("text", [None, "", "Nairobi, Kenya"])
def test_detect_location_absent(text):
    assert detect_location(text) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Multi-purpose complex", BuildingType.multipurpose),
        ("Office and hotel building", BuildingType.multipurpose),
        ("Boutique HOTEL", BuildingType.hotel),
        ("Self-contained flats", BuildingType.apartment),
        ("Luxury apartment block", BuildingType.apartment),
        ("Detached duplex", BuildingType.other),
        (None, BuildingType.other),
    ],
)
def test_normalize_building_type(text, expected):
    assert normalize_building_type(text) is expected


def test_listing_hash_is_deterministic_and_sensitive_to_each_part():
    base = build_listing_hash("propertypro_ng", "https://x/1", "Hotel")
    assert base == build_listing_hash("propertypro_ng", "https://x/1", "Hotel")
    assert len(base) == 64
    variants = {
        build_listing_hash("meqasa_gh", "https://x/1", "Hotel"),
        build_listing_hash("propertypro_ng", "https://x/2", "Hotel"),
        build_listing_hash("propertypro_ng", "https://x/1", "Hotel 2"),
        build_listing_hash("propertypro_ng", "https://x/1", None),
    }
    assert base not in variants
    assert len(variants) == 4


def test_listing_hash_absent_title_equals_empty_title():
    assert build_listing_hash("s", "u", None) == build_listing_hash("s", "u", "")
