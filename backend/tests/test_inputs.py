from __future__ import annotations

import pytest

from core.inputs import (
    normalize_amount_text,
    params_from_form,
    parse_amount,
    parse_rate,
    parse_years,
    to_half_width,
)


def test_full_width_digits_become_ascii():
    assert to_half_width("１２３円") == "123円"


@pytest.mark.parametrize(
    ("typed", "expected"),
    [
        ("１２３４５", "12,345"),
        ("1,234a5", "12,345"),
        ("abc", ""),
        ("", ""),
        ("999999999999", "999,999,999,999"),
    ],
)
def test_normalize_amount_text(typed, expected):
    assert normalize_amount_text(typed) == expected


def test_normalize_amount_text_refuses_too_many_digits():
    assert normalize_amount_text("1234567890123", previous="1,234") == "1,234"
    assert normalize_amount_text("123456", previous="1,234", max_digits=5) == "1,234"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1,234", 1234),
        ("30000", 30000),
        ("12abc", 12),
        ("", 0),
        (None, 0),
        ("abc", 0),
        ("-5", 0),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("5", 5.0),
        ("5.5", 5.5),
        (".5", 0.5),
        ("3%", 3.0),
        ("abc", 0.0),
        ("-1", 0.0),
        ("1e999", 0.0),
        (None, 0.0),
    ],
)
def test_parse_rate(text, expected):
    assert parse_rate(text) == expected


def test_parse_years():
    assert parse_years("20") == 20
    assert parse_years("２０") == 20
    assert parse_years("twenty") == 0


def test_params_from_form():
    params = params_from_form(
        {
            "initialAmount": "1,000,000",
            "monthlyAmount": "３００００",
            "annualRate": "5",
            "durationYears": "20",
        }
    )

    assert params.initialAmount == 1_000_000
    assert params.monthlyAmount == 30000
    assert params.annualRate == 5.0
    assert params.durationYears == 20


def test_params_from_form_defaults_missing_fields_to_zero():
    params = params_from_form({})

    assert params.model_dump() == {
        "initialAmount": 0,
        "monthlyAmount": 0,
        "annualRate": 0.0,
        "durationYears": 0,
    }


def test_params_from_form_drops_oversized_amounts():
    params = params_from_form({"monthlyAmount": "1234567890123", "durationYears": "5"})

    assert params.monthlyAmount == 0
    assert params.durationYears == 5


@pytest.mark.parametrize("typed", ["١٢٣", "१२३", "๑๒๓"])
def test_digits_from_other_scripts_resolve_to_zero(typed):
    assert normalize_amount_text(typed) == ""
    assert parse_amount(typed) == 0
    assert parse_years(typed) == 0
    assert parse_rate(typed) == 0.0
