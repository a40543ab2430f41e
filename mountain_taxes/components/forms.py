# components/forms.py
# Streamlit sidebar controls for filing status, state selection and income range.

import logging
from typing import Iterable, List

import streamlit as st

from ..calculators.income_range import IncomeRange, RangeHistory, format_currency
from ..calculators.state_data import FilingType, list_state_names, no_income_tax_states
from ..calculators.taxes import is_valid_earned_income
from ..config import DEFAULT_STATE, RANGE_INCREMENTS

logger = logging.getLogger(__name__)

# Stable widget keys so callbacks can set values before widgets render
WIDGET_KEYS = {
    "filing": "in_filing",
    "states": "in_states",
    "comparison_income": "in_comparison_income",
}

BULK_ACTIONS = ("all", "no_tax", "clear")


# ---------- Pure selection helpers ----------
def apply_bulk_action(selected: Iterable[str], action: str) -> List[str]:
    """
    'all'    -> every state, already-selected ones keep their position
    'no_tax' -> adds the states without a wage income tax
    'clear'  -> nothing selected
    """
    current = list(selected)
    if action == "clear":
        return []
    if action == "all":
        extra = list_state_names()
    elif action == "no_tax":
        extra = no_income_tax_states()
    else:
        raise ValueError(f"Unknown bulk action: {action}")
    return current + [s for s in extra if s not in current]


# ---------- Session plumbing ----------
def init_session() -> None:
    st.session_state.setdefault(WIDGET_KEYS["states"], [DEFAULT_STATE])
    st.session_state.setdefault("income_range", IncomeRange())
    st.session_state.setdefault("range_history", RangeHistory())


def _bulk(action: str) -> None:
    key = WIDGET_KEYS["states"]
    st.session_state[key] = apply_bulk_action(st.session_state.get(key, []), action)


def _extend(increment: float) -> None:
    history: RangeHistory = st.session_state["range_history"]
    st.session_state["income_range"] = history.extend(st.session_state["income_range"], increment)
    logger.info("Extended income range by %s", format_currency(increment))


def _undo() -> None:
    history: RangeHistory = st.session_state["range_history"]
    st.session_state["income_range"] = history.undo(st.session_state["income_range"])


# ---------- Sidebar ----------
def calculator_form():
    init_session()

    # -------- Filer --------
    st.sidebar.header("Filer")
    filing_value = st.sidebar.radio(
        "Filing status", [ft.value for ft in FilingType], horizontal=True,
        key=WIDGET_KEYS["filing"],
        help="Single and married filers get different deductions and brackets."
    )

    # -------- States --------
    st.sidebar.header("States")
    c1, c2, c3 = st.sidebar.columns(3)
    c1.button("All states", on_click=_bulk, args=("all",), use_container_width=True)
    c2.button("No-tax", on_click=_bulk, args=("no_tax",), use_container_width=True,
              help="States with no tax on wages.")
    c3.button("Clear", on_click=_bulk, args=("clear",), use_container_width=True)
    states = st.sidebar.multiselect(
        "Compare", list_state_names(), key=WIDGET_KEYS["states"],
        help="Each selected state becomes one line on the chart."
    )

    # -------- Income range --------
    st.sidebar.header("Income range")
    cols = st.sidebar.columns(len(RANGE_INCREMENTS))
    for col, (label, amount) in zip(cols, RANGE_INCREMENTS.items()):
        col.button(label, on_click=_extend, args=(amount,), use_container_width=True)

    history: RangeHistory = st.session_state["range_history"]
    st.sidebar.button(
        "Remove last increment", on_click=_undo, disabled=not history.can_undo,
        help=(f"Remove last increment of {format_currency(history.last_increment)}"
              if history.can_undo else "No increment to remove"),
    )
    income_range: IncomeRange = st.session_state["income_range"]
    st.sidebar.caption(
        f"Current range: {format_currency(income_range.min)} - {format_currency(income_range.max)}"
    )

    # -------- Point comparison --------
    st.sidebar.header("Compare at one income")
    comparison_income = st.sidebar.number_input(
        "Earned income ($)", min_value=0.0, value=100000.0, step=5000.0,
        key=WIDGET_KEYS["comparison_income"],
        help="Wages and salary only; investment income is not modeled."
    )
    if not is_valid_earned_income(comparison_income):
        st.sidebar.error("Income must be a non-negative amount.")
        comparison_income = None

    return {
        "filing_type": FilingType(filing_value),
        "states": list(states),
        "income_range": income_range,
        "comparison_income": comparison_income,
    }
