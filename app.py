# app.py
import logging

import pandas as pd
import streamlit as st

from mountain_taxes.calculators.income_range import format_currency
from mountain_taxes.calculators.taxes import calculate_tax_comparison, generate_income_range
from mountain_taxes.components.charts import build_datasets, comparison_bar_chart, tax_comparison_chart
from mountain_taxes.components.forms import calculator_form
from mountain_taxes.config import configure_logging
from mountain_taxes.errors import ErrorKind, TaxCalculationError, TaxTableError

configure_logging()
logger = logging.getLogger("mountain_taxes.app")


# ---------- Page config ----------
st.set_page_config(
    page_title="Mountain Taxes",
    page_icon="⛰️",
    layout="wide",
    initial_sidebar_state="auto",
)

# Hide Streamlit's default menu and footer
HIDE_STREAMLIT_STYLE = """
    <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
    </style>
"""
st.markdown(HIDE_STREAMLIT_STYLE, unsafe_allow_html=True)

# ---------- Session boot ----------
st.session_state.setdefault("last_figure", None)      # last successfully drawn line chart


def _report(exc: TaxCalculationError) -> None:
    """Show an engine error as a dismissible notice; the page keeps running."""
    if exc.kind is ErrorKind.STATE_NOT_FOUND:
        st.toast(f"Unknown state: {exc.detail!r}", icon="⚠️")
    else:
        st.toast(exc.message, icon="⚠️")
    logger.info("Calculation rejected: %s", exc.to_dict())


# ---------- Header bar ----------
def header_bar():
    st.markdown(
        """
        ### **Mountain Taxes**
        _Compare state income tax on earned income across income levels (2025 rates)._
        """
    )


header_bar()

try:
    inputs = calculator_form()
except TaxTableError as exc:
    logger.exception("Tax tables failed to load")
    st.error(f"Tax data could not be loaded: {exc}")
    st.stop()

filing_type = inputs["filing_type"]
states = inputs["states"]
income_range = inputs["income_range"]

# ---------- Tax owed by income ----------
if not states:
    st.info("Select one or more states in the sidebar to draw the chart.")
else:
    incomes = generate_income_range(income_range.min, income_range.max, income_range.step)
    try:
        datasets = build_datasets(states, income_range, filing_type)
        fig = tax_comparison_chart(incomes, datasets)
        st.session_state["last_figure"] = fig
    except TaxCalculationError as exc:
        _report(exc)
        fig = st.session_state["last_figure"]
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)
    st.caption(
        f"{filing_type.value} filer, {format_currency(income_range.min)} to "
        f"{format_currency(income_range.max)} in {format_currency(income_range.step)} steps. "
        "Standard deduction and personal exemption applied; dependents are not."
    )

# ---------- Point-in-time comparison ----------
income = inputs["comparison_income"]
if states and income is not None:
    st.subheader(f"At {format_currency(income)} of earned income")
    try:
        comparisons = calculate_tax_comparison(income, states, filing_type)
    except TaxCalculationError as exc:
        _report(exc)
    else:
        c1, c2 = st.columns([3, 2])
        with c1:
            st.plotly_chart(comparison_bar_chart(comparisons), use_container_width=True)
        with c2:
            table = pd.DataFrame(
                {
                    "State": [c.state_name for c in comparisons],
                    "Tax owed": [c.result.tax_owed for c in comparisons],
                    "Effective %": [c.result.effective_rate * 100 for c in comparisons],
                    "Marginal %": [c.result.marginal_rate * 100 for c in comparisons],
                }
            )
            st.dataframe(
                table,
                hide_index=True,
                use_container_width=True,
                column_config={
                    "Tax owed": st.column_config.NumberColumn(format="$%.0f"),
                    "Effective %": st.column_config.NumberColumn(format="%.2f%%"),
                    "Marginal %": st.column_config.NumberColumn(format="%.2f%%"),
                },
            )

st.caption("Rates: Tax Foundation, 2025 state individual income tax rates and brackets.")
