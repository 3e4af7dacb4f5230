"""
Cell kinds for py-join tables.

Pure metadata design:
  - A cell holds a str, a number, a bool, a date/datetime, or the missing marker
  - Kinds are plain Python types; a column's kind is inferred from its values
  - Inference is functional (never mutates, always returns a new kind)
"""

from __future__ import annotations
from datetime import date, datetime
from typing import Any, Iterable, Optional, Type
import math

from .errors import SchemaError


MISSING = None


def is_missing(value: Any) -> bool:
    """
    True if value is the missing marker.

    A float NaN is treated as missing too, since it never compares
    equal to anything (itself included).

    Examples
    --------
    >>> is_missing(None)
    True
    >>> is_missing(float("nan"))
    True
    >>> is_missing(0)
    False
    """
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def infer_kind(value: Any) -> Optional[Type]:
    """
    Infer the kind of a single cell.

    Returns None for missing values (NaN included) and object for
    unsupported values.
    """
    if is_missing(value):
        return None

    # Check bool BEFORE int (bool is subclass of int)
    if isinstance(value, bool):
        return bool
    if isinstance(value, int):
        return int
    if isinstance(value, float):
        return float
    if isinstance(value, str):
        return str

    # Check datetime BEFORE date (datetime is subclass of date)
    if isinstance(value, datetime):
        return datetime
    if isinstance(value, date):
        return date

    return object


def promote_kind(kind: Optional[Type], value: Any) -> Optional[Type]:
    """
    Promote a column kind to accommodate a new cell value.

    Parameters
    ----------
    kind : type or None
        Kind inferred so far (None if only missing values were seen)
    value : Any
        Cell to accommodate

    Returns
    -------
    type or None
        New (possibly promoted) kind; object when kinds cannot be reconciled
    """
    vkind = infer_kind(value)

    # Case 1: missing values never change the kind
    if vkind is None:
        return kind
    if kind is None or kind is vkind:
        return vkind

    # Case 2: numeric ladder (int -> float); bool is NOT numeric here
    if kind in (int, float) and vkind in (int, float):
        return float

    # Case 3: degrade to object (date and datetime never compare equal)
    return object


def infer_column_kind(values: Iterable[Any]) -> Optional[Type]:
    """
    Infer the kind of a column from its cells.

    Examples
    --------
    >>> infer_column_kind([1, 2, 3])
    <class 'int'>
    >>> infer_column_kind([1, 2.5, None])
    <class 'float'>
    >>> infer_column_kind([None, None]) is None
    True
    >>> infer_column_kind([1, "a"])
    <class 'object'>
    """
    kind: Optional[Type] = None
    for v in values:
        kind = promote_kind(kind, v)
        if kind is object:
            break
    return kind


def kinds_compatible(a: Optional[Type], b: Optional[Type]) -> bool:
    """
    True if cells of kind a can be compared for equality with cells of kind b.

    An unknown kind (all-missing column) is compatible with everything.
    """
    if a is None or b is None:
        return True
    if a is object or b is object:
        return False
    if a in (int, float) and b in (int, float):
        return True
    return a is b


def kind_name(kind: Optional[Type]) -> str:
    if kind is None:
        return "missing"
    if kind is object:
        return "mixed"
    return kind.__name__


def validate_cell(value: Any, column: str, row_idx: int) -> Any:
    """
    Validate a cell before it is stored in a table.

    Raises
    ------
    SchemaError
        If value is not one of the supported cell kinds
    """
    if infer_kind(value) is object:
        raise SchemaError(
            f"Unsupported value {value!r} of type {type(value).__name__} "
            f"in column '{column}' at row {row_idx}"
        )
    return value
