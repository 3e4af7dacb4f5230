"""Output schema and row construction for join results."""

from __future__ import annotations

from .naming import _qualify_collisions
from .table import Table
from .errors import PyJoinValueError


def _validate_suffix(suffix):
	if (
		not isinstance(suffix, (tuple, list))
		or len(suffix) != 2
		or not all(isinstance(s, str) for s in suffix)
	):
		raise PyJoinValueError(f"suffix must be a pair of strings, got {suffix!r}")
	if suffix[0] == suffix[1]:
		raise PyJoinValueError(f"suffix entries must differ, got {suffix!r}")
	return tuple(suffix)


class ResultAssembler:
	"""
	Builds the combined schema and rows for inner/left/right/full joins.

	Output columns, in order:
		1. left non-key columns (original names, left suffix on collision)
		2. key columns, one per pair, under their left-side names
		3. right non-key columns (right suffix on collision)
	"""

	def __init__(self, left, right, spec, suffix):
		suffix = _validate_suffix(suffix)
		left_keys = set(spec.left_columns)
		right_keys = set(spec.right_columns)

		self._left_keys = [left.column_index(name) for name in spec.left_columns]
		self._right_keys = [right.column_index(name) for name in spec.right_columns]
		self._left_cols = [i for i, name in enumerate(left.columns) if name not in left_keys]
		self._right_cols = [i for i, name in enumerate(right.columns) if name not in right_keys]

		left_names, right_names = _qualify_collisions(
			[left.columns[i] for i in self._left_cols],
			spec.left_columns,
			[right.columns[i] for i in self._right_cols],
			suffix,
		)
		self.columns = tuple(left_names) + spec.left_columns + tuple(right_names)

		self._left_pad = (None,) * len(self._left_cols)
		self._right_pad = (None,) * len(self._right_cols)
		self._rows = []

	def combine(self, lvalues, rvalues):
		"""Append the row for a matched (left, right) pair."""
		self._rows.append(
			tuple(lvalues[i] for i in self._left_cols)
			+ tuple(lvalues[i] for i in self._left_keys)
			+ tuple(rvalues[i] for i in self._right_cols)
		)

	def left_only(self, lvalues):
		"""Append an unmatched left row; right-side columns are missing."""
		self._rows.append(
			tuple(lvalues[i] for i in self._left_cols)
			+ tuple(lvalues[i] for i in self._left_keys)
			+ self._right_pad
		)

	def right_only(self, rvalues):
		"""Append an unmatched right row; keys come from the right row."""
		self._rows.append(
			self._left_pad
			+ tuple(rvalues[i] for i in self._right_keys)
			+ tuple(rvalues[i] for i in self._right_cols)
		)

	def __len__(self):
		return len(self._rows)

	def build(self):
		return Table._from_validated(self.columns, self._rows)


def filter_rows(table, positions):
	"""Table with the schema of ``table`` holding the given rows, in order."""
	rows = table._rows
	return Table._from_validated(table.columns, [rows[i] for i in positions])
