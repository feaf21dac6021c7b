#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/utils/validate.py
"""Strict validators for element property values.

Element properties arrive from the driving framework as a free-form mapping.
These helpers extract a single value and check its type, raising
:class:`~mdtree.exceptions.PropertyTypeError` on mismatch. A missing value
(``None``) is never an error: the optional variants return ``None`` and the
required variants return their default.

"""

from __future__ import annotations

import math
from typing import Any, Optional

from mdtree.constants import ALIGNMENT_VALUES, MAX_HEADING_DEPTH, MIN_HEADING_DEPTH
from mdtree.exceptions import InvariantError, PropertyTypeError


def invariant(condition: Any, message: str) -> None:
    """Raise InvariantError when ``condition`` is falsy.

    Parameters
    ----------
    condition : Any
        Condition that must hold
    message : str
        Description of the violated invariant

    Raises
    ------
    InvariantError
        If the condition is falsy

    """
    if not condition:
        raise InvariantError(f"Invariant failed: {message}")


def maybe_string(value: Any, name: str | None = None) -> Optional[str]:
    """Return a string or None, rejecting any other type."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise PropertyTypeError("string or None", value, name)
    return value


def string(value: Any, default: str = "", name: str | None = None) -> str:
    """Return a string, using ``default`` when the value is missing."""
    if value is None:
        return default
    if not isinstance(value, str):
        raise PropertyTypeError("string", value, name)
    return value


def maybe_boolean(value: Any, name: str | None = None) -> Optional[bool]:
    """Return a bool or None, rejecting any other type."""
    if value is None:
        return None
    if not isinstance(value, bool):
        raise PropertyTypeError("boolean or None", value, name)
    return value


def boolean(value: Any, default: bool = False, name: str | None = None) -> bool:
    """Return a bool, using ``default`` when the value is missing."""
    if value is None:
        return default
    if not isinstance(value, bool):
        raise PropertyTypeError("boolean", value, name)
    return value


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a meaningful number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def maybe_number(value: Any, name: str | None = None) -> Optional[int | float]:
    """Return a number or None, rejecting any other type (NaN included)."""
    if value is None:
        return None
    if not _is_number(value):
        raise PropertyTypeError("number or None", value, name)
    return value


def number(value: Any, default: int | float = 0, name: str | None = None) -> int | float:
    """Return a number, using ``default`` when the value is missing."""
    if value is None:
        return default
    if not _is_number(value):
        raise PropertyTypeError("number", value, name)
    return value


def heading_depth(value: Any, default: int = MIN_HEADING_DEPTH, name: str | None = "depth") -> int:
    """Return a heading depth clamped to the 1-6 range.

    A missing depth gives the default. A numeric depth outside 1-6 is clamped,
    but a non-numeric, boolean or NaN depth is a type error rather than a
    silent default.

    Parameters
    ----------
    value : Any
        Raw property value
    default : int, default 1
        Depth used when the value is missing
    name : str or None, default "depth"
        Property name for error messages

    Returns
    -------
    int
        Depth between 1 and 6

    Raises
    ------
    PropertyTypeError
        If the value is present but not a number

    Examples
    --------
        >>> heading_depth(None)
        1
        >>> heading_depth(9)
        6

    """
    depth = number(value, default, name)
    return int(max(MIN_HEADING_DEPTH, min(MAX_HEADING_DEPTH, depth)))


def alignment(value: Any, name: str | None = "align") -> Optional[str]:
    """Return a table cell alignment, mapping ``"none"`` to None.

    Raises
    ------
    PropertyTypeError
        If the value is not a string or not one of left, center, right, none

    """
    align = maybe_string(value, name)
    if align is None:
        return None
    if align not in ALIGNMENT_VALUES:
        raise PropertyTypeError(
            "one of " + ", ".join(ALIGNMENT_VALUES),
            value,
            name,
            message=f"Invalid alignment {align!r}; expected one of {', '.join(ALIGNMENT_VALUES)}",
        )
    return None if align == "none" else align
