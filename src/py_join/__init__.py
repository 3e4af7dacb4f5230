"""
py-join: A Pythonic, zero-dependency relational join engine

Joins small in-memory tables the way SQL and dplyr do, with correct
fan-out under duplicate keys and SQL null semantics for missing keys.

Main classes:
    - Table: immutable table (ordered unique columns, ordered rows)
    - JoinKeySpec: (left_column, right_column) pairs to match on

Join variants:
    - inner_join, left_join, right_join, full_join (combine columns)
    - semi_join, anti_join (filter the left table)

Zero external dependencies - pure Python stdlib only.
"""

from .table import Table, Row
from .keys import JoinKeySpec, extract_key
from .index import JoinIndex, build_index
from .executor import join, inner_join, left_join, right_join, full_join, semi_join, anti_join
from .typing import MISSING, is_missing
from .errors import (
	PyJoinError,
	SchemaError,
	DuplicateColumnError,
	MissingColumnError,
	KeySpecError,
	EmptyKeySpecError,
	KeyTypeError,
	CardinalityError,
	PyJoinValueError,
	PyJoinTypeError,
	JoinWarning,
)

__version__ = "0.1.0"
__all__ = [
	"Table",
	"Row",
	"JoinKeySpec",
	"JoinIndex",
	"extract_key",
	"build_index",
	"join",
	"inner_join",
	"left_join",
	"right_join",
	"full_join",
	"semi_join",
	"anti_join",
	"MISSING",
	"is_missing",
	"PyJoinError",
	"SchemaError",
	"DuplicateColumnError",
	"MissingColumnError",
	"KeySpecError",
	"EmptyKeySpecError",
	"KeyTypeError",
	"CardinalityError",
	"PyJoinValueError",
	"PyJoinTypeError",
	"JoinWarning",
]
