"""Tax table and tax engine.

The `calculators` package holds the pure, Streamlit-free part of the app:

* ``state_data`` – the 50-state bracket table, lookups and data validation.
* ``taxes`` – progressive state income tax for one income, a range of incomes or several states.
* ``income_range`` – the chart's income range and the controls that widen or narrow it.

Each module exposes a few public functions with clear parameters and returns.  See
individual docstrings for details.
"""

from . import state_data, taxes, income_range  # noqa: F401
from .state_data import FilingType, get_state_profile, list_state_names  # noqa: F401
from .taxes import (  # noqa: F401
    TaxCalculationResult,
    calculate_tax,
    calculate_tax_comparison,
    calculate_tax_for_incomes,
    generate_income_range,
    is_valid_earned_income,
)

__all__ = [
    "state_data",
    "taxes",
    "income_range",
    "FilingType",
    "get_state_profile",
    "list_state_names",
    "TaxCalculationResult",
    "calculate_tax",
    "calculate_tax_comparison",
    "calculate_tax_for_incomes",
    "generate_income_range",
    "is_valid_earned_income",
]
