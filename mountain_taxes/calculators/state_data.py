"""State income tax tables.

The table lives in ``data/state_tax_tables.json`` (Tax Foundation 2025 rates
for all 50 states) and is parsed once into immutable dataclasses.  Each state
carries one schedule per filing status with a standard deduction, a personal
exemption and progressive brackets.  Flat-tax states have a single bracket and
states without a wage income tax have a single 0% bracket.

Example
-------

>>> profile = get_state_profile("Colorado")
>>> profile.schedule(FilingType.SINGLE).brackets[0].rate
0.044

The JSON schema is::

    {"states": [{"name": "Alabama",
                 "dependent_deduction": 1000,
                 "filing_status": {"single": {"standard_deduction": 2500,
                                              "personal_exemption": 1500,
                                              "brackets": [{"start": 0, "rate": 0.02}, ...]},
                                   "married": {...}}}, ...]}
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .. import config
from ..errors import InvalidFilingTypeError, StateNotFoundError, TaxTableError

logger = logging.getLogger(__name__)

EXPECTED_STATE_COUNT = 50


class FilingType(str, Enum):
    SINGLE = "Single"
    MARRIED = "Married"


def parse_filing_type(value: Any) -> FilingType:
    """Return ``value`` as a :class:`FilingType`.

    Accepts the enum members or their exact string values ("Single",
    "Married").  Anything else, ``None`` included, raises
    :class:`InvalidFilingTypeError`.
    """
    if isinstance(value, FilingType):
        return value
    if isinstance(value, str):
        try:
            return FilingType(value)
        except ValueError:
            pass
    raise InvalidFilingTypeError(value)


@dataclass(frozen=True)
class TaxBracket:
    start: float  # income threshold where this rate begins
    rate: float   # e.g. 0.044 for 4.4%


@dataclass(frozen=True)
class FilingStatusSchedule:
    filing_type: FilingType
    standard_deduction: float
    personal_exemption: float
    brackets: Tuple[TaxBracket, ...]


@dataclass(frozen=True)
class StateTaxProfile:
    name: str
    dependent_deduction: float
    schedules: Tuple[FilingStatusSchedule, ...]

    def schedule(self, filing_type: FilingType) -> FilingStatusSchedule:
        for sched in self.schedules:
            if sched.filing_type is filing_type:
                return sched
        raise InvalidFilingTypeError(filing_type)


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


# ---------- Loading ----------
def _parse_schedule(key: str, raw: Dict[str, Any]) -> FilingStatusSchedule:
    return FilingStatusSchedule(
        filing_type=FilingType(key.capitalize()),
        standard_deduction=raw.get("standard_deduction", 0),
        personal_exemption=raw.get("personal_exemption", 0),
        brackets=tuple(TaxBracket(start=b["start"], rate=b["rate"]) for b in raw["brackets"]),
    )


def _parse_state(raw: Dict[str, Any]) -> StateTaxProfile:
    schedules = tuple(_parse_schedule(k, v) for k, v in raw["filing_status"].items())
    return StateTaxProfile(
        name=raw["name"],
        dependent_deduction=raw.get("dependent_deduction", 0),
        schedules=schedules,
    )


def _load_tax_tables(path: Optional[Path] = None) -> Dict[str, Any]:
    """Read the raw JSON table.

    Parameters
    ----------
    path : Path, optional
        JSON file to read.  Defaults to :data:`config.TAX_TABLE_PATH`.

    Returns
    -------
    dict
        The parsed JSON document.
    """
    p = Path(path) if path is not None else config.TAX_TABLE_PATH
    try:
        with open(p, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise TaxTableError(f"Unable to read tax tables from {p}: {exc}") from exc


@lru_cache(maxsize=None)
def load_state_profiles(path: Optional[Path] = None) -> Mapping[str, StateTaxProfile]:
    """Parse the tax table into profiles keyed by state name.

    The result is cached per ``path`` and keeps the file's state order.  A
    table with missing keys, unknown filing statuses, duplicate names or
    invalid values raises :class:`TaxTableError`; suspicious but usable data
    (for example a rate above 50%) is only logged.
    """
    tables = _load_tax_tables(path)
    profiles: Dict[str, StateTaxProfile] = {}
    try:
        for raw in tables["states"]:
            profile = _parse_state(raw)
            if profile.name in profiles:
                raise TaxTableError(f"Duplicate state in tax tables: {profile.name}")
            profiles[profile.name] = profile
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise TaxTableError(f"Malformed tax tables: {exc!r}") from exc

    for profile in profiles.values():
        result = validate_state_profile(profile)
        for warning in result.warnings:
            logger.warning("[VALIDATION_WARNING] %s: %s", profile.name, warning)
        if not result.is_valid:
            raise TaxTableError(f"Invalid tax data for {profile.name}: {'; '.join(result.errors)}")

    logger.debug("Loaded tax tables for %d states (year %s)", len(profiles), tables.get("year"))
    return MappingProxyType(profiles)


# ---------- Lookup ----------
def get_state_profile(name: str) -> StateTaxProfile:
    """Return the profile for ``name`` (exact, case-sensitive match)."""
    profile = load_state_profiles().get(name) if isinstance(name, str) else None
    if profile is None:
        raise StateNotFoundError(name)
    return profile


def list_state_names() -> List[str]:
    """All state names in table order."""
    return list(load_state_profiles())


def no_income_tax_states() -> List[str]:
    """States that tax no wage income under either filing status."""
    return [
        p.name
        for p in load_state_profiles().values()
        if all(b.rate == 0 for s in p.schedules for b in s.brackets)
    ]


# ---------- Validation ----------
def _is_amount(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value) and value >= 0
    except OverflowError:
        return False


def _validate_brackets(brackets: Sequence[TaxBracket], result: ValidationResult, prefix: str) -> None:
    if not brackets:
        result.errors.append(f"{prefix}: at least one tax bracket is required")
        return
    for i, b in enumerate(brackets):
        if not _is_amount(b.start):
            result.errors.append(f"{prefix} bracket {i}: start must be a non-negative finite number")
        if not _is_amount(b.rate) or b.rate > 1:
            result.errors.append(f"{prefix} bracket {i}: rate must be a finite number between 0 and 1")
        elif b.rate > 0.5:
            result.warnings.append(f"{prefix} bracket {i}: rate {b.rate} is unusually high (>50%)")
    if brackets[0].start != 0:
        result.warnings.append(f"{prefix}: first bracket does not start at 0")
    for i in range(1, len(brackets)):
        prev, cur = brackets[i - 1], brackets[i]
        if not (_is_amount(prev.start) and _is_amount(cur.start)):
            continue
        if cur.start < prev.start:
            result.warnings.append(f"{prefix}: brackets are not in ascending order at index {i}")
        if _is_amount(prev.rate) and _is_amount(cur.rate) and cur.rate < prev.rate:
            result.warnings.append(f"{prefix}: rate decreases at index {i}")


def validate_state_profile(profile: StateTaxProfile) -> ValidationResult:
    """Check one profile for data-quality problems.

    Errors make the profile unusable by the engine; warnings flag data that
    still computes but breaks the progressive-table assumptions.
    """
    result = ValidationResult()
    if not isinstance(profile.name, str) or not profile.name.strip():
        result.errors.append("State name is required and must be a non-empty string")
    if not _is_amount(profile.dependent_deduction):
        result.errors.append("Dependent deduction must be a non-negative finite number")

    seen = [s.filing_type for s in profile.schedules]
    for ft in FilingType:
        if seen.count(ft) != 1:
            result.errors.append(f"Exactly one {ft.value} filing schedule is required")

    for sched in profile.schedules:
        prefix = sched.filing_type.value
        if not _is_amount(sched.standard_deduction):
            result.errors.append(f"{prefix}: standard deduction must be a non-negative finite number")
        if not _is_amount(sched.personal_exemption):
            result.errors.append(f"{prefix}: personal exemption must be a non-negative finite number")
        _validate_brackets(sched.brackets, result, prefix)
    return result


def validate_all_state_data(profiles: Optional[Mapping[str, StateTaxProfile]] = None) -> bool:
    """Validate every profile and the 50-state count, logging each problem."""
    profiles = load_state_profiles() if profiles is None else profiles
    all_valid = True
    if len(profiles) != EXPECTED_STATE_COUNT:
        logger.error("[INCOMPLETE_STATE_DATA] Expected %d states, found %d", EXPECTED_STATE_COUNT, len(profiles))
        all_valid = False
    for name, profile in profiles.items():
        result = validate_state_profile(profile)
        for error in result.errors:
            logger.error("[VALIDATION_ERROR] %s: %s", name, error)
        for warning in result.warnings:
            logger.warning("[VALIDATION_WARNING] %s: %s", name, warning)
        all_valid = all_valid and result.is_valid
    return all_valid


__all__ = [
    "FilingType",
    "parse_filing_type",
    "TaxBracket",
    "FilingStatusSchedule",
    "StateTaxProfile",
    "ValidationResult",
    "load_state_profiles",
    "get_state_profile",
    "list_state_names",
    "no_income_tax_states",
    "validate_state_profile",
    "validate_all_state_data",
]
