"""Join key specifications and key extraction."""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from operator import itemgetter
import logging

from .config import LEFT, RIGHT
from .typing import is_missing, kind_name, kinds_compatible
from .errors import EmptyKeySpecError, KeySpecError, KeyTypeError, MissingColumnError

logger = logging.getLogger(__name__)


def _as_pair(entry, position):
	"""Normalize one ``by`` entry to a (left, right) pair."""
	if isinstance(entry, str):
		return (entry, entry)
	if isinstance(entry, (tuple, list)) and len(entry) == 2 and all(isinstance(e, str) for e in entry):
		return (entry[0], entry[1])
	raise KeySpecError(
		f"Join key at position {position} must be a column name or a "
		f"(left, right) pair of names, got {entry!r}"
	)


def _as_list(spec):
	if isinstance(spec, str):
		return [spec]
	if isinstance(spec, (list, tuple)):
		return list(spec)
	raise KeySpecError(f"Join columns must be a string or a list of strings, got {type(spec).__name__}")


@dataclass(frozen=True)
class JoinKeySpec:
	"""
	Ordered (left_column, right_column) pairs a join matches on.

	Attributes
	----------
	pairs : tuple of (str, str)
		Left and right column names; they may differ (renamed keys)

	Examples
	--------
	>>> JoinKeySpec.from_by("id").pairs
	(('id', 'id'),)
	>>> JoinKeySpec.from_by({"id": "customer_id"}).pairs
	(('id', 'customer_id'),)
	"""

	pairs: tuple

	def __post_init__(self):
		if isinstance(self.pairs, str):
			raise KeySpecError(
				f"pairs must be a sequence of names or (left, right) pairs, not the "
				f"string {self.pairs!r}; use JoinKeySpec.from_by({self.pairs!r})"
			)
		pairs = tuple(_as_pair(p, i) for i, p in enumerate(self.pairs))
		if not pairs:
			raise EmptyKeySpecError("Must specify at least 1 join key")

		for side, names in ((LEFT, [l for l, _ in pairs]), (RIGHT, [r for _, r in pairs])):
			seen = set()
			for name in names:
				if name in seen:
					raise KeySpecError(f"Column '{name}' is used more than once as a {side} join key")
				seen.add(name)

		object.__setattr__(self, "pairs", pairs)

	@classmethod
	def from_by(cls, by=None, left=None, right=None, left_on=None, right_on=None):
		"""
		Build a key spec from the user-facing ``by`` / ``left_on`` / ``right_on`` forms.

		Accepted forms:
			by="id"                          -> (("id", "id"),)
			by=["a", "b"]                    -> (("a", "a"), ("b", "b"))
			by={"id": "customer_id"}         -> (("id", "customer_id"),)
			by=[("id", "cid"), "date"]       -> (("id", "cid"), ("date", "date"))
			left_on="id", right_on="cid"     -> (("id", "cid"),)
			by=None (with both tables)       -> every shared column name

		Raises:
			KeySpecError: For malformed specs
			EmptyKeySpecError: When no pairs result
		"""
		if isinstance(by, JoinKeySpec):
			return by

		if left_on is not None or right_on is not None:
			if by is not None:
				raise KeySpecError("Pass either by or left_on/right_on, not both")
			if left_on is None or right_on is None:
				raise KeySpecError("left_on and right_on must be given together")
			left_on = _as_list(left_on)
			right_on = _as_list(right_on)
			if len(left_on) != len(right_on):
				raise KeySpecError(
					f"left_on and right_on must have same length: "
					f"got {len(left_on)} and {len(right_on)}"
				)
			return cls(tuple(zip(left_on, right_on)))

		if by is None:
			if left is None or right is None:
				raise EmptyKeySpecError("A natural join (by=None) needs both tables")
			shared = [name for name in left.columns if name in right]
			if not shared:
				raise EmptyKeySpecError(
					"by must be supplied when the tables share no column names"
				)
			logger.info("Joining with by=%r", shared)
			return cls(tuple(shared))

		if isinstance(by, Mapping):
			return cls(tuple(by.items()))
		if isinstance(by, str):
			return cls((by,))
		if isinstance(by, (list, tuple)):
			# A bare ("a", "b") tuple is a list of two names, not a renamed pair
			return cls(tuple(by))
		raise KeySpecError(f"by must be a string, list, or mapping, got {type(by).__name__}")

	def __len__(self):
		return len(self.pairs)

	def __iter__(self):
		return iter(self.pairs)

	@property
	def left_columns(self):
		return tuple(l for l, _ in self.pairs)

	@property
	def right_columns(self):
		return tuple(r for _, r in self.pairs)

	def columns(self, side):
		if side == LEFT:
			return self.left_columns
		if side == RIGHT:
			return self.right_columns
		raise KeySpecError(f"side must be '{LEFT}' or '{RIGHT}', got {side!r}")

	def validate(self, left, right):
		"""
		Check the key pairs against both tables before any row is scanned.

		Raises:
			MissingColumnError: If a named key column is absent from its table
			KeyTypeError: If paired key columns hold incomparable kinds
		"""
		for side, table in ((LEFT, left), (RIGHT, right)):
			for name in self.columns(side):
				if name not in table:
					raise MissingColumnError(f"Join column '{name}' not found in {side} table")

		for i, (lname, rname) in enumerate(self.pairs):
			lkind = left.kind(lname)
			rkind = right.kind(rname)
			for side, name, kind in ((LEFT, lname, lkind), (RIGHT, rname, rkind)):
				if kind is object:
					raise KeyTypeError(
						f"Join key '{name}' at position {i} on {side} side holds mixed kinds "
						"of values and cannot be matched reliably."
					)
			if not kinds_compatible(lkind, rkind):
				raise KeyTypeError(
					f"Join key at index {i} has mismatched kinds: "
					f"{kind_name(lkind)} (left '{lname}') vs {kind_name(rkind)} (right '{rname}')"
				)
		return self


def extract_key(row, spec, side):
	"""Key tuple of ``row`` (a mapping) for one side of ``spec``, in pair order."""
	return tuple(row[name] for name in spec.columns(side))


def key_extractor(table, spec, side):
	"""
	Return a function mapping a raw row tuple of ``table`` to its key tuple.

	Column positions are resolved once here, so a missing key column fails
	before any row is read.
	"""
	positions = [table.column_index(name, context=f"{side} table") for name in spec.columns(side)]
	if len(positions) == 1:
		(pos,) = positions
		return lambda values: (values[pos],)
	return itemgetter(*positions)


def key_is_matchable(key):
	"""False when any component is missing; such a key matches nothing."""
	for value in key:
		if is_missing(value):
			return False
	return True
