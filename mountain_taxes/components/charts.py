# components/charts.py
# Plotly chart helpers used by the app.
# All functions return a Plotly Figure that Streamlit can display with st.plotly_chart(...).

from dataclasses import dataclass
from typing import List, Sequence

import plotly.graph_objects as go

from ..calculators.income_range import IncomeRange, format_income_label
from ..calculators.state_data import FilingType
from ..calculators.taxes import StateComparison, calculate_tax_for_incomes, generate_income_range
from ..config import COLOR_PALETTE


@dataclass
class ChartDataset:
    label: str
    data: List[float]
    color: str


# ---------- Series ----------
def build_datasets(state_names: Sequence[str],
                   income_range: IncomeRange,
                   filing_type: FilingType) -> List[ChartDataset]:
    """
    One dataset per state, colored by selection order.
    Any bad state aborts the whole build.
    """
    incomes = generate_income_range(income_range.min, income_range.max, income_range.step)
    return [
        ChartDataset(
            label=name,
            data=calculate_tax_for_incomes(incomes, name, filing_type),
            color=COLOR_PALETTE[i % len(COLOR_PALETTE)],
        )
        for i, name in enumerate(state_names)
    ]


# ---------- Tax owed by income (one line per state) ----------
def tax_comparison_chart(incomes: Sequence[float],
                         datasets: Sequence[ChartDataset],
                         title: str = "State Income Tax by Income") -> go.Figure:
    """Line per state; click a legend entry to hide/show it."""
    fig = go.Figure()
    for ds in datasets:
        fig.add_trace(go.Scatter(
            x=list(incomes), y=ds.data, mode="lines+markers", name=ds.label,
            line=dict(color=ds.color, width=2), marker=dict(size=4),
            hovertemplate=ds.label + "<br>Income $%{x:,.0f}<br>Tax $%{y:,.0f}<extra></extra>"
        ))

    # Sparse tick labels keep long ranges readable
    tick_every = max(1, len(incomes) // 10)
    tickvals = list(incomes)[::tick_every]
    fig.update_layout(
        title=title,
        template="plotly_white",
        height=480,
        margin=dict(l=10, r=10, t=40, b=10),
        xaxis=dict(title="Income", tickvals=tickvals, ticktext=[format_income_label(v) for v in tickvals]),
        yaxis=dict(title="Tax owed", tickprefix="$", tickformat=",.0f"),
        legend=dict(orientation="h", yanchor="top", y=-0.15, xanchor="left", x=0, title_text="Selected States"),
        hovermode="closest",
    )
    return fig


# ---------- Point-in-time comparison ----------
def comparison_bar_chart(comparisons: Sequence[StateComparison],
                         title: str = "Tax Owed at Selected Income") -> go.Figure:
    """Bars of tax owed per state, in the order given."""
    names = [c.state_name for c in comparisons]
    fig = go.Figure(go.Bar(
        x=names,
        y=[c.result.tax_owed for c in comparisons],
        marker_color=[COLOR_PALETTE[i % len(COLOR_PALETTE)] for i in range(len(names))],
        customdata=[[c.result.effective_rate * 100, c.result.marginal_rate * 100] for c in comparisons],
        hovertemplate="%{x}<br>Tax $%{y:,.0f}<br>Effective %{customdata[0]:.2f}%"
                      "<br>Marginal %{customdata[1]:.2f}%<extra></extra>",
    ))
    fig.update_layout(
        title=title,
        template="plotly_white",
        height=380,
        margin=dict(l=10, r=10, t=40, b=10),
        xaxis_title="",
        yaxis=dict(title="Tax owed", tickprefix="$", tickformat=",.0f"),
    )
    return fig


__all__ = ["ChartDataset", "build_datasets", "tax_comparison_chart", "comparison_bar_chart"]
