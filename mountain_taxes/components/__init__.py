"""Expose component submodules for convenience."""

from .forms import calculator_form, apply_bulk_action
from .charts import build_datasets, tax_comparison_chart, comparison_bar_chart

__all__ = [
    "calculator_form",
    "apply_bulk_action",
    "build_datasets",
    "tax_comparison_chart",
    "comparison_bar_chart",
]
