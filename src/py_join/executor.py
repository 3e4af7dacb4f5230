"""
Join executor: the six relational join variants over two Tables.

The right table is hashed once; the left table is scanned in order and each
row probes the index. Output keeps left row order first and, among several
matches for one left row, right row order. Unmatched right rows (right/full)
follow, in right row order.
"""

from __future__ import annotations
import logging
import warnings

from .assemble import ResultAssembler, filter_rows
from .config import (
	DEFAULT_SUFFIX,
	EXPECTATIONS,
	FILTERING_VARIANTS,
	JOIN_VARIANTS,
	LEFT,
	RIGHT,
)
from .index import build_index
from .keys import JoinKeySpec, key_extractor, key_is_matchable
from .table import Table
from .errors import CardinalityError, JoinWarning, PyJoinTypeError, PyJoinValueError

logger = logging.getLogger(__name__)


def _check_cardinality(left_keys, index, expect):
	"""
	Enforce ``expect`` on both sides before any output is produced.

	Only matchable keys count; rows with a missing key component never
	take part in a match and so cannot break uniqueness.
	"""
	if expect in ('one_to_one', 'one_to_many'):
		seen = set()
		for key in left_keys:
			if not key_is_matchable(key):
				continue
			if key in seen:
				raise CardinalityError(
					f"Join expectation '{expect}' violated: Left side has duplicate key {key}"
				)
			seen.add(key)

	if expect in ('one_to_one', 'many_to_one'):
		duplicates = index.duplicates()
		if duplicates:
			example_key, example_rows = next(iter(duplicates.items()))
			raise CardinalityError(
				f"Join expectation '{expect}' violated: Right side has duplicate keys.\n"
				f"Found at least {len(duplicates)} duplicate key(s), e.g., {example_key} "
				f"appears {len(example_rows)} times."
			)


def join(left, right, by=None, how="inner", *, left_on=None, right_on=None,
		suffix=DEFAULT_SUFFIX, expect=None):
	"""
	Join two Tables on key columns.

	Args:
		left: Left Table (``x``)
		right: Right Table (``y``)
		by: Key specification: a column name, a list of names, a
			``{left_name: right_name}`` mapping, a list mixing names and
			``(left, right)`` pairs, or a JoinKeySpec. None joins on every
			column name the tables share.
		how: 'inner', 'left', 'right', 'full', 'semi' or 'anti'
		left_on: Left key column name(s), used together with right_on instead of by
		right_on: Right key column name(s)
		suffix: (left, right) suffixes for non-key columns present on both sides
		expect: Cardinality expectation - None, 'one_to_one', 'one_to_many',
			'many_to_one' or 'many_to_many'. Ignored by semi and anti joins.

	Returns:
		New Table. Inputs are never modified.

	Raises:
		EmptyKeySpecError: No key pairs given (or none shared for by=None)
		KeySpecError: Malformed key specification
		MissingColumnError: Key column absent from its table
		KeyTypeError: Paired key columns hold incomparable kinds
		CardinalityError: ``expect`` violated
		PyJoinValueError: Unknown ``how`` / ``expect`` or bad ``suffix``
	"""
	# ------------------------------------------------------------------
	# 1. Validate arguments (nothing is scanned until all checks pass)
	# ------------------------------------------------------------------
	if not isinstance(left, Table) or not isinstance(right, Table):
		raise PyJoinTypeError(
			f"join expects two Tables, got {type(left).__name__} and {type(right).__name__}"
		)
	if how not in JOIN_VARIANTS:
		raise PyJoinValueError(
			f"Invalid how='{how}'. Must be one of {', '.join(repr(v) for v in JOIN_VARIANTS)}."
		)
	if expect is not None and expect not in EXPECTATIONS:
		raise PyJoinValueError(
			f"Invalid expect='{expect}'. "
			"Must be None, 'one_to_one', 'many_to_one', 'one_to_many', or 'many_to_many'."
		)

	spec = JoinKeySpec.from_by(by, left, right, left_on=left_on, right_on=right_on)
	spec.validate(left, right)

	filtering = how in FILTERING_VARIANTS
	assembler = None if filtering else ResultAssembler(left, right, spec, suffix)

	# ------------------------------------------------------------------
	# 2. Hash the right side, extract left keys
	# ------------------------------------------------------------------
	index = build_index(right, spec, RIGHT)
	left_key = key_extractor(left, spec, LEFT)
	left_keys = [left_key(values) for values in left._rows]
	lookup = index.lookup

	# ------------------------------------------------------------------
	# 3. Filtering joins: each left row at most once, left schema
	# ------------------------------------------------------------------
	if filtering:
		keep_matched = how == "semi"
		positions = [
			left_idx for left_idx, key in enumerate(left_keys)
			if bool(lookup(key)) is keep_matched
		]
		result = filter_rows(left, positions)
		logger.debug(
			"%s join: %d x %d rows on %s -> %d rows",
			how, len(left), len(right), spec.pairs, len(result),
		)
		return result

	# ------------------------------------------------------------------
	# 4. Mutating joins
	# ------------------------------------------------------------------
	_check_cardinality(left_keys, index, expect)

	left_rows = left._rows
	right_rows = right._rows
	keep_left = how in ("left", "full")
	keep_right = how in ("right", "full")
	matched_right = bytearray(len(right_rows)) if keep_right else None

	fanout_seen = set()
	many_to_many_key = None

	for left_idx, lvalues in enumerate(left_rows):
		key = left_keys[left_idx]
		matches = lookup(key)

		if matches:
			if len(matches) > 1 and expect is None and many_to_many_key is None:
				if key in fanout_seen:
					many_to_many_key = key
				fanout_seen.add(key)
			for right_idx in matches:
				assembler.combine(lvalues, right_rows[right_idx])
				if keep_right:
					matched_right[right_idx] = 1
		elif keep_left:
			assembler.left_only(lvalues)

	if keep_right:
		for right_idx, flag in enumerate(matched_right):
			if not flag:
				assembler.right_only(right_rows[right_idx])

	if many_to_many_key is not None:
		warnings.warn(
			f"Detected an unexpected many-to-many relationship between left and right: "
			f"key {many_to_many_key} repeats on both sides. "
			"Pass expect='many_to_many' to silence this warning.",
			JoinWarning,
			stacklevel=2,
		)

	result = assembler.build()
	logger.debug(
		"%s join: %d x %d rows on %s -> %d rows",
		how, len(left), len(right), spec.pairs, len(result),
	)
	return result


def inner_join(left, right, by=None, **kwargs):
	"""One row per matching (left, right) pair."""
	return join(left, right, by, "inner", **kwargs)


def left_join(left, right, by=None, **kwargs):
	"""Inner pairs plus every unmatched left row, right columns missing."""
	return join(left, right, by, "left", **kwargs)


def right_join(left, right, by=None, **kwargs):
	"""Inner pairs plus every unmatched right row, left columns missing."""
	return join(left, right, by, "right", **kwargs)


def full_join(left, right, by=None, **kwargs):
	"""Inner pairs plus unmatched rows from both sides."""
	return join(left, right, by, "full", **kwargs)


def semi_join(left, right, by=None, **kwargs):
	"""Left rows with at least one match, each kept once."""
	return join(left, right, by, "semi", **kwargs)


def anti_join(left, right, by=None, **kwargs):
	"""Left rows with no match."""
	return join(left, right, by, "anti", **kwargs)
