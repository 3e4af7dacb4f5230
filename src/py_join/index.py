"""Hash index over one side of a join."""

from __future__ import annotations
import logging

from .keys import key_extractor, key_is_matchable

logger = logging.getLogger(__name__)


class JoinIndex:
	"""
	Mapping from key tuple to the row positions sharing that key.

	Buckets keep row order of first appearance. Rows whose key has a missing
	component are never bucketed; their positions are kept in ``unmatchable``.
	The index lives for one join call and is never shared.
	"""
	__slots__ = ('buckets', 'unmatchable', 'n_rows')

	def __init__(self, buckets, unmatchable, n_rows):
		self.buckets = buckets
		self.unmatchable = unmatchable
		self.n_rows = n_rows

	def lookup(self, key):
		"""Row positions matching ``key`` (empty for unknown or unmatchable keys)."""
		if not key_is_matchable(key):
			return ()
		return self.buckets.get(key, ())

	def __len__(self):
		return self.n_rows - len(self.unmatchable)

	@property
	def n_keys(self):
		return len(self.buckets)

	def duplicates(self):
		"""``{key: positions}`` for every key held by more than one row."""
		return {key: bucket for key, bucket in self.buckets.items() if len(bucket) > 1}

	def __repr__(self):
		return (
			f"JoinIndex(rows={len(self)}, keys={self.n_keys}, "
			f"unmatchable={len(self.unmatchable)})"
		)


def build_index(table, spec, side):
	"""
	Index every row of ``table`` by its key for ``side`` of ``spec``.

	Args:
		table: Table to index
		spec: JoinKeySpec naming the key columns
		side: 'left' or 'right'

	Returns:
		JoinIndex over the table's row positions
	"""
	get_key = key_extractor(table, spec, side)

	buckets = {}
	buckets_get = buckets.get
	unmatchable = []

	for row_idx, values in enumerate(table._rows):
		key = get_key(values)
		if not key_is_matchable(key):
			unmatchable.append(row_idx)
			continue
		bucket = buckets_get(key)
		if bucket is None:
			buckets[key] = [row_idx]
		else:
			bucket.append(row_idx)

	index = JoinIndex(buckets, unmatchable, table.n_rows)
	logger.debug("Built %s on %s side keyed by %s", index, side, spec.columns(side))
	return index
