"""Income range shown on the chart's x axis, and the controls that move it.

The range starts at $0–$100K in $10K steps.  Users widen it with the
+$10K / +$100K / +$1M / +$10M buttons and can undo the most recent widening
once.  Ranges are immutable; every operation returns a new one.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

from .. import config
from .state_data import ValidationResult

logger = logging.getLogger(__name__)

FALLBACK_SPAN = 100_000
FALLBACK_STEP = 10_000
LARGE_SPAN_WARNING = 100_000_000


@dataclass(frozen=True)
class IncomeRange:
    min: float = config.DEFAULT_INCOME_RANGE[0]
    max: float = config.DEFAULT_INCOME_RANGE[1]
    step: float = config.DEFAULT_INCOME_RANGE[2]


def _finite(value) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def validate_income_range(income_range: IncomeRange) -> ValidationResult:
    result = ValidationResult()
    lo, hi, step = income_range.min, income_range.max, income_range.step
    if not _finite(lo) or lo < 0:
        result.errors.append("Minimum income must be a non-negative finite number")
    if not _finite(hi) or hi < 0:
        result.errors.append("Maximum income must be a non-negative finite number")
    if not _finite(step) or step <= 0:
        result.errors.append("Step size must be a positive finite number")
    if _finite(lo) and _finite(hi):
        if hi <= lo:
            result.errors.append("Maximum income must be greater than minimum income")
        elif hi - lo > LARGE_SPAN_WARNING:
            result.warnings.append("Income range is very large and may cause performance issues")
    return result


def sanitize_income_range(min_income: float, max_income: float, step: float) -> IncomeRange:
    """Build a usable range from raw control values.

    Problems are logged and replaced with safe values rather than raised.
    """
    result = validate_income_range(IncomeRange(min_income, max_income, step))
    for error in result.errors:
        logger.warning("[VALIDATION_ERROR] %s (min=%r, max=%r, step=%r)", error, min_income, max_income, step)
    for warning in result.warnings:
        logger.info("[VALIDATION_WARNING] %s", warning)

    lo = max(0, min_income) if _finite(min_income) else 0
    hi = max_income if _finite(max_income) and max_income > lo else lo + FALLBACK_SPAN
    step_size = step if _finite(step) and step > 0 else FALLBACK_STEP
    return IncomeRange(lo, hi, step_size)


def extend_range(income_range: IncomeRange, increment: float) -> IncomeRange:
    """Raise the upper bound by ``increment`` (capped at ``MAX_INCOME``).

    Non-positive or non-finite increments leave the range unchanged.
    """
    if not _finite(increment) or increment <= 0:
        return income_range
    return replace(income_range, max=min(config.MAX_INCOME, income_range.max + increment))


def reduce_range(income_range: IncomeRange, decrement: float) -> IncomeRange:
    """Lower the upper bound, never below one step above the minimum."""
    if not _finite(decrement) or decrement <= 0:
        return income_range
    floor = income_range.min + income_range.step
    return replace(income_range, max=max(floor, income_range.max - decrement))


class RangeHistory:
    """Remembers the last widening so it can be undone exactly once."""

    def __init__(self, last_increment: float = 0):
        self.last_increment = last_increment

    @property
    def can_undo(self) -> bool:
        return self.last_increment > 0

    def extend(self, income_range: IncomeRange, increment: float) -> IncomeRange:
        extended = extend_range(income_range, increment)
        if extended != income_range:
            self.last_increment = increment
        return extended

    def undo(self, income_range: IncomeRange) -> IncomeRange:
        if not self.can_undo:
            logger.debug("No previous increment to remove")
            return income_range
        reduced = reduce_range(income_range, self.last_increment)
        self.last_increment = 0
        return reduced


def format_income_label(value: float) -> str:
    """Axis label: $1.5M, $50K, $500."""
    if value >= 1_000_000:
        return f"${value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"${value / 1_000:.0f}K"
    return f"${value:,.0f}"


def format_currency(value: float, precision: Optional[int] = None) -> str:
    """Compact dollar amount for range captions: $1.2B, $1.5M, $50K, $9,999."""
    if value >= 1_000_000_000:
        return f"${value / 1_000_000_000:.1f}B"
    if value >= 1_000_000:
        return f"${value / 1_000_000:.1f}M"
    if value >= 10_000:
        return f"${value / 1_000:.0f}K"
    if precision is None:
        return f"${value:,.0f}" if float(value).is_integer() else f"${value:,.2f}"
    return f"${value:,.{precision}f}"


__all__ = [
    "IncomeRange",
    "validate_income_range",
    "sanitize_income_range",
    "extend_range",
    "reduce_range",
    "RangeHistory",
    "format_income_label",
    "format_currency",
]
