"""Factories for value checks that are used by the xml_structure properties.

Every factory returns a callable that gets the assigned python value and raises if it is not acceptable.
"""
from __future__ import annotations

import math
from typing import Any, Callable

from hvtypes.exceptions import OutOfRangeError


def not_blank(name: str) -> Callable[[Any], None]:
    """Value must be a string that contains at least one non-whitespace character."""
    def _check(value):
        if value is None or not value.strip():
            raise ValueError(f'{name} must not be None, empty or whitespace')
    return _check


def not_whitespace(name: str) -> Callable[[Any], None]:
    """None and '' mean "absent" and are accepted; a string of only whitespace is rejected."""
    def _check(value):
        if value and not value.strip():
            raise ValueError(f'{name} must not be whitespace')
    return _check


def not_empty(name: str) -> Callable[[Any], None]:
    """None is accepted, an empty or whitespace string is rejected."""
    def _check(value):
        if value is not None and not value.strip():
            raise ValueError(f'{name} must not be empty or whitespace')
    return _check


def in_range(name: str,  # noqa: PLR0913
             lower: float | None = None,
             upper: float | None = None,
             lower_inclusive: bool = True,
             upper_inclusive: bool = True,
             allow_none: bool = True) -> Callable[[Any], None]:
    """Value must be inside the given bounds, a missing bound is not checked."""
    def _check(value):
        if value is None:
            if not allow_none:
                raise OutOfRangeError(name, value, 'value is mandatory')
            return
        if isinstance(value, float) and math.isnan(value):
            raise OutOfRangeError(name, value, 'not a number')
        if lower is not None:
            if value < lower or (value == lower and not lower_inclusive):
                raise OutOfRangeError(name, value, f'must be {">=" if lower_inclusive else ">"} {lower}')
        if upper is not None:
            if value > upper or (value == upper and not upper_inclusive):
                raise OutOfRangeError(name, value, f'must be {"<=" if upper_inclusive else "<"} {upper}')
    return _check


def non_negative(name: str, allow_none: bool = True) -> Callable[[Any], None]:
    return in_range(name, lower=0, allow_none=allow_none)
