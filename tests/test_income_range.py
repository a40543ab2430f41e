"""Tests for the chart income range and its controls."""

from mountain_taxes import config
from mountain_taxes.calculators.income_range import (
    IncomeRange,
    RangeHistory,
    extend_range,
    format_currency,
    format_income_label,
    reduce_range,
    sanitize_income_range,
    validate_income_range,
)


def test_default_range():
    assert IncomeRange() == IncomeRange(0, 100000, 10000)


def test_validate_good_range():
    result = validate_income_range(IncomeRange(0, 500000, 25000))
    assert result.is_valid
    assert result.warnings == []


def test_validate_bad_range():
    result = validate_income_range(IncomeRange(-1, -1, 0))
    assert not result.is_valid
    assert len(result.errors) == 4


def test_validate_large_range_warns():
    result = validate_income_range(IncomeRange(0, 200_000_000, 1_000_000))
    assert result.is_valid
    assert result.warnings


def test_sanitize_replaces_bad_values():
    assert sanitize_income_range(-500, float("nan"), 0) == IncomeRange(0, 100000, 10000)
    assert sanitize_income_range(50000, 20000, 5000) == IncomeRange(50000, 150000, 5000)
    assert sanitize_income_range(0, 250000, 50000) == IncomeRange(0, 250000, 50000)


def test_extend_range():
    assert extend_range(IncomeRange(), 100000).max == 200000
    assert extend_range(IncomeRange(), 0) == IncomeRange()
    assert extend_range(IncomeRange(), -10) == IncomeRange()
    assert extend_range(IncomeRange(), float("inf")) == IncomeRange()
    assert extend_range(IncomeRange(), 10 ** 400) == IncomeRange()


def test_extend_range_is_capped():
    huge = IncomeRange(0, config.MAX_INCOME - 5, 10000)
    assert extend_range(huge, 10_000_000).max == config.MAX_INCOME


def test_reduce_range_keeps_one_step():
    assert reduce_range(IncomeRange(0, 1_100_000, 10000), 1_000_000).max == 100000
    assert reduce_range(IncomeRange(0, 100000, 10000), 1_000_000).max == 10000
    assert reduce_range(IncomeRange(), 0) == IncomeRange()


def test_history_undoes_last_increment_once():
    history = RangeHistory()
    assert not history.can_undo
    r = history.extend(IncomeRange(), 10000)
    r = history.extend(r, 1_000_000)
    assert r.max == 1_110_000
    assert history.last_increment == 1_000_000

    r = history.undo(r)
    assert r.max == 110000
    assert not history.can_undo
    assert history.undo(r) == r


def test_history_ignores_rejected_increment():
    history = RangeHistory()
    r = history.extend(IncomeRange(), -5)
    assert r == IncomeRange()
    assert not history.can_undo


def test_format_income_label():
    assert format_income_label(0) == "$0"
    assert format_income_label(500) == "$500"
    assert format_income_label(50000) == "$50K"
    assert format_income_label(1500000) == "$1.5M"


def test_format_currency():
    assert format_currency(9999) == "$9,999"
    assert format_currency(12.5) == "$12.50"
    assert format_currency(50000) == "$50K"
    assert format_currency(2_500_000) == "$2.5M"
    assert format_currency(1_200_000_000) == "$1.2B"
