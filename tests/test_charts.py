"""Tests for the Plotly chart builders."""

import plotly.graph_objects as go
import pytest

from mountain_taxes.calculators.income_range import IncomeRange
from mountain_taxes.calculators.state_data import FilingType
from mountain_taxes.calculators.taxes import calculate_tax_comparison, generate_income_range
from mountain_taxes.components import charts
from mountain_taxes.config import COLOR_PALETTE
from mountain_taxes.errors import StateNotFoundError


def test_build_datasets_one_per_state():
    datasets = charts.build_datasets(["Colorado", "Texas"], IncomeRange(), FilingType.SINGLE)
    assert [d.label for d in datasets] == ["Colorado", "Texas"]
    assert all(len(d.data) == 11 for d in datasets)
    assert datasets[1].data == [0.0] * 11
    assert [d.color for d in datasets] == COLOR_PALETTE[:2]


def test_colors_cycle_over_palette():
    names = ["Texas"] * (len(COLOR_PALETTE) + 1)
    datasets = charts.build_datasets(names, IncomeRange(0, 10000, 10000), FilingType.SINGLE)
    assert datasets[-1].color == COLOR_PALETTE[0]


def test_build_datasets_fails_fast():
    with pytest.raises(StateNotFoundError):
        charts.build_datasets(["Colorado", "Atlantis"], IncomeRange(), FilingType.SINGLE)


def test_tax_comparison_chart_traces():
    income_range = IncomeRange(0, 200000, 20000)
    incomes = generate_income_range(income_range.min, income_range.max, income_range.step)
    datasets = charts.build_datasets(["Colorado", "California"], income_range, FilingType.MARRIED)
    fig = charts.tax_comparison_chart(incomes, datasets)
    assert isinstance(fig, go.Figure)
    assert [t.name for t in fig.data] == ["Colorado", "California"]
    assert list(fig.data[0].x) == incomes
    assert list(fig.data[1].y) == datasets[1].data
    assert fig.layout.xaxis.ticktext[0] == "$0"


def test_tax_comparison_chart_empty():
    fig = charts.tax_comparison_chart([], [])
    assert len(fig.data) == 0


def test_comparison_bar_chart():
    comparisons = calculate_tax_comparison(100000, ["Colorado", "Texas"], FilingType.SINGLE)
    fig = charts.comparison_bar_chart(comparisons)
    bar = fig.data[0]
    assert list(bar.x) == ["Colorado", "Texas"]
    assert bar.y[0] == pytest.approx(3830.2)
    assert bar.y[1] == 0


def test_comparison_bar_chart_keeps_selection_order():
    # Texas owes least and California most; bars follow the selection, not the amounts
    comparisons = calculate_tax_comparison(100000, ["Texas", "California", "Colorado"], FilingType.SINGLE)
    bar = charts.comparison_bar_chart(comparisons).data[0]
    assert list(bar.x) == ["Texas", "California", "Colorado"]
    assert list(bar.y) != sorted(bar.y)
