"""Error types raised by the tax engine.

Each error carries an :class:`ErrorKind` so calling code (the Streamlit app,
notably) can branch on what went wrong without parsing messages::

    try:
        result = calculate_tax(income, state, filing_type)
    except TaxCalculationError as exc:
        if exc.kind is ErrorKind.STATE_NOT_FOUND:
            ...
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict


class ErrorKind(str, Enum):
    INVALID_INCOME = "INVALID_INCOME"
    INVALID_FILING_TYPE = "INVALID_FILING_TYPE"
    STATE_NOT_FOUND = "STATE_NOT_FOUND"


class TaxCalculationError(ValueError):
    """Base class for rejected engine inputs."""

    kind: ErrorKind

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message, "detail": self.detail}


class InvalidIncomeError(TaxCalculationError):
    kind = ErrorKind.INVALID_INCOME

    def __init__(self, income: Any):
        super().__init__("Income must be non-negative", detail=income)


class InvalidFilingTypeError(TaxCalculationError):
    kind = ErrorKind.INVALID_FILING_TYPE

    def __init__(self, filing_type: Any):
        super().__init__("Invalid filing type", detail=filing_type)


class StateNotFoundError(TaxCalculationError):
    kind = ErrorKind.STATE_NOT_FOUND

    def __init__(self, state_name: Any):
        super().__init__(f"State not found: {'' if state_name is None else state_name}", detail=state_name)


class TaxTableError(RuntimeError):
    """The state tax table file is missing or malformed."""


__all__ = [
    "ErrorKind",
    "TaxCalculationError",
    "InvalidIncomeError",
    "InvalidFilingTypeError",
    "StateNotFoundError",
    "TaxTableError",
]
