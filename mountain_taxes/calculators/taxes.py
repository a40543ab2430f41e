"""State income tax calculation engine.

This module turns a state's bracket schedule and a filer's earned income into
tax owed, effective rate and marginal rate.  Income is first reduced by the
schedule's standard deduction and personal exemption (never below zero) and
the remainder is taxed progressively: each bracket's rate applies only to the
slice of taxable income between its start and the next bracket's start.

The per-state dependent deduction is part of the table but is not applied
here; dependents are supplied by the filer and are not derivable from income.

Example
-------

>>> # Colorado: flat 4.4% after a $12,950 standard deduction
>>> round(calculate_tax(100000, "Colorado", FilingType.SINGLE).tax_owed, 2)
3830.2

>>> generate_income_range(0, 50000, 10000)
[0, 10000, 20000, 30000, 40000, 50000]

All functions are pure and may be called from any number of callers.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Iterable, List, Sequence

from .. import config
from ..errors import InvalidIncomeError, TaxCalculationError
from .state_data import FilingType, TaxBracket, get_state_profile, parse_filing_type

logger = logging.getLogger(__name__)

STEP_TOLERANCE = 1e-9


@dataclass(frozen=True)
class TaxCalculationResult:
    income: float
    tax_owed: float
    effective_rate: float
    marginal_rate: float


@dataclass(frozen=True)
class StateComparison:
    state_name: str
    result: TaxCalculationResult


def _is_finite(value: Any) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False


def is_valid_earned_income(value: Any) -> bool:
    """True if ``value`` is a finite, non-negative real number.

    Booleans, strings, ``None``, containers and ints too large for a float are
    rejected even though some of them compare like numbers.
    """
    return (
        isinstance(value, Real)
        and not isinstance(value, bool)
        and _is_finite(value)
        and value >= 0
    )


def _progressive_tax(taxable_income: float, brackets: Sequence[TaxBracket]) -> float:
    if taxable_income <= 0:
        return 0.0
    tax = 0.0
    for i, bracket in enumerate(brackets):
        if taxable_income <= bracket.start:
            break
        upper = brackets[i + 1].start if i + 1 < len(brackets) else float("inf")
        amount = min(taxable_income, upper) - bracket.start
        if amount > 0:
            tax += amount * bracket.rate
    return tax


def _marginal_rate(taxable_income: float, brackets: Sequence[TaxBracket]) -> float:
    rate = brackets[0].rate if brackets else 0.0
    for bracket in brackets:
        if taxable_income >= bracket.start:
            rate = bracket.rate
        else:
            break
    return rate


def calculate_tax(income: float, state_name: str, filing_type: FilingType) -> TaxCalculationResult:
    """Compute state income tax for one filer.

    Parameters
    ----------
    income : float
        Earned income in dollars; must be finite and non-negative.
    state_name : str
        Full state name, e.g. ``"New York"`` (case-sensitive).
    filing_type : FilingType or str
        ``FilingType.SINGLE`` / ``FilingType.MARRIED`` or their values.

    Returns
    -------
    TaxCalculationResult
        ``income`` echoed back with the tax owed, effective rate (tax over
        gross income, 0 when income is 0) and marginal rate (rate of the
        bracket holding the last dollar of taxable income).

    Raises
    ------
    InvalidIncomeError, InvalidFilingTypeError, StateNotFoundError
        Checked in that order.
    """
    try:
        if not is_valid_earned_income(income):
            raise InvalidIncomeError(income)
        ftype = parse_filing_type(filing_type)
        profile = get_state_profile(state_name)
    except TaxCalculationError as exc:
        logger.warning(
            "[%s] %s (income=%r, state=%r, filing_type=%r)",
            exc.kind.value, exc.message, income, state_name, filing_type,
        )
        raise

    schedule = profile.schedule(ftype)
    taxable_income = max(0, income - schedule.standard_deduction - schedule.personal_exemption)
    tax_owed = _progressive_tax(taxable_income, schedule.brackets)
    marginal_rate = _marginal_rate(taxable_income, schedule.brackets)
    # float division can land one ulp above a flat rate
    effective_rate = min(tax_owed / income, marginal_rate) if income > 0 else 0.0

    return TaxCalculationResult(
        income=income,
        tax_owed=tax_owed,
        effective_rate=effective_rate,
        marginal_rate=marginal_rate,
    )


def calculate_tax_for_incomes(
    incomes: Iterable[float],
    state_name: str,
    filing_type: FilingType,
) -> List[float]:
    """Tax owed at each income, in order.  Used to build one chart line.

    The first invalid input aborts the whole batch; no partial list is
    returned.
    """
    return [calculate_tax(income, state_name, filing_type).tax_owed for income in incomes]


def generate_income_range(min_income: float, max_income: float, step: float) -> List[float]:
    """Evenly spaced incomes from ``min_income`` up to ``max_income``.

    ``max_income`` is included when it falls on a step.  Degenerate input
    never raises: a non-positive (or non-finite) step yields ``[min_income]``
    and ``max_income < min_income`` (or a non-finite bound) yields ``[]``.
    Ranges that would need more than ``MAX_CHART_POINTS`` points are resampled
    to exactly that many, first and last points on the bounds.
    """
    if not _is_finite(step) or step <= 0:
        return [min_income]
    if not (_is_finite(min_income) and _is_finite(max_income)) or max_income < min_income:
        return []

    # tolerance keeps a max that sits on a step when the division lands just below it
    count = math.floor((max_income - min_income) / step + STEP_TOLERANCE) + 1
    if count > config.MAX_CHART_POINTS:
        count = config.MAX_CHART_POINTS
        step = (max_income - min_income) / (count - 1)
        points = [min_income + i * step for i in range(count - 1)]
        points.append(max_income)
        return points
    points = [min_income + i * step for i in range(count)]
    while len(points) > 1 and points[-1] - max_income > step * STEP_TOLERANCE:
        points.pop()
    if abs(points[-1] - max_income) <= step * STEP_TOLERANCE:
        points[-1] = max_income
    return points


def calculate_tax_comparison(
    income: float,
    state_names: Iterable[str],
    filing_type: FilingType,
) -> List[StateComparison]:
    """Tax at one income for each state, in the order given."""
    return [
        StateComparison(state_name=name, result=calculate_tax(income, name, filing_type))
        for name in state_names
    ]


__all__ = [
    "TaxCalculationResult",
    "StateComparison",
    "calculate_tax",
    "calculate_tax_for_incomes",
    "generate_income_range",
    "is_valid_earned_income",
    "calculate_tax_comparison",
]
