from collections.abc import Mapping

from .naming import _build_attribute_map
from .typing import infer_column_kind, validate_cell
from .errors import (
	DuplicateColumnError,
	MissingColumnError,
	PyJoinTypeError,
	PyJoinValueError,
	SchemaError,
)


def _missing_col_error(name, context="Table"):
	return MissingColumnError(f"Column '{name}' not found in {context}")


class Row(Mapping):
	"""Read-only view of one table row: column name -> cell value.

	Supports attribute access by sanitized column name, so ``row.customer_id``
	works for a column called ``'Customer ID'``.
	"""
	__slots__ = ('_table', '_values')

	def __init__(self, table, values):
		self._table = table
		self._values = values

	def __getitem__(self, key):
		"""Access a cell by column name or position."""
		if isinstance(key, str):
			idx = self._table._positions.get(key)
			if idx is None:
				raise _missing_col_error(key, context="row")
			return self._values[idx]
		if isinstance(key, int):
			return self._values[key]
		raise PyJoinTypeError(f"Row indices must be int or str, not {type(key).__name__}")

	def __getattr__(self, attr):
		"""Access cell values by sanitized attribute name."""
		if attr.startswith('__'):
			raise AttributeError(attr)
		idx = self._table._attr_map.get(attr.lower())
		if idx is None:
			raise AttributeError(f"Row has no attribute '{attr}'")
		return self._values[idx]

	def __iter__(self):
		"""Iterate over column names, like a dict."""
		return iter(self._table._columns)

	def __contains__(self, key):
		return key in self._table._positions

	def __len__(self):
		return len(self._values)

	def __repr__(self):
		cells = ", ".join(f"{name}={value!r}" for name, value in zip(self._table._columns, self._values))
		return f"Row({cells})"


class Table:
	"""Immutable table: ordered, uniquely named columns and ordered rows.

	Rows may be given as mappings (keys must be exactly the column set) or as
	sequences in column order. Missing cells must be explicit ``None`` values.

	Examples:
		>>> t = Table(['id', 'name'], [{'id': 1, 'name': 'Ann'}, (2, None)])
		>>> t.n_rows
		2
		>>> t['name']
		('Ann', None)
	"""

	def __init__(self, columns=(), rows=()):
		columns = self._validate_columns(columns)
		width = len(columns)
		column_set = set(columns)

		validated = []
		for row_idx, record in enumerate(rows):
			if isinstance(record, Mapping):
				if len(record) != width or set(record) != column_set:
					raise SchemaError(self._describe_mismatch(record, columns, row_idx))
				values = tuple(record[name] for name in columns)
			elif isinstance(record, (list, tuple)):
				if len(record) != width:
					raise SchemaError(
						f"Row {row_idx} has {len(record)} values, "
						f"but table has {width} columns"
					)
				values = tuple(record)
			else:
				raise SchemaError(
					f"Row {row_idx} must be a mapping or a sequence, "
					f"got {type(record).__name__}"
				)

			for name, value in zip(columns, values):
				validate_cell(value, name, row_idx)
			validated.append(values)

		self._init_validated(columns, tuple(validated))

	def _init_validated(self, columns, rows):
		self._columns = columns
		self._rows = rows
		self._positions = {name: idx for idx, name in enumerate(columns)}
		self._attr_map = _build_attribute_map(columns)
		self._kinds = {}

	@classmethod
	def _from_validated(cls, columns, rows):
		"""Build a table from trusted tuples without re-validating (join output)."""
		table = cls.__new__(cls)
		table._init_validated(tuple(columns), tuple(rows))
		return table

	@staticmethod
	def _validate_columns(columns):
		if isinstance(columns, str):
			raise SchemaError("columns must be a sequence of names, not a single string")
		columns = tuple(columns)
		seen = set()
		for name in columns:
			if not isinstance(name, str):
				raise SchemaError(f"Column names must be strings, got {type(name).__name__}: {name!r}")
			if name in seen:
				raise DuplicateColumnError(f"Duplicate column name '{name}'")
			seen.add(name)
		return columns

	@staticmethod
	def _describe_mismatch(record, columns, row_idx):
		missing = [name for name in columns if name not in record]
		extra = [name for name in record if name not in columns]
		parts = []
		if missing:
			parts.append(f"missing {missing}")
		if extra:
			parts.append(f"unexpected {extra}")
		return f"Row {row_idx} does not match table columns: " + ", ".join(parts)

	# ------------------------------------------------------------------
	# Alternate constructors
	# ------------------------------------------------------------------

	@classmethod
	def from_columns(cls, data):
		"""Build a table from ``{name: values, ...}`` (column-major)."""
		if not isinstance(data, Mapping):
			raise PyJoinTypeError(f"from_columns expects a mapping, got {type(data).__name__}")
		names = list(data)
		cols = [list(values) for values in data.values()]
		lengths = {len(col) for col in cols}
		if len(lengths) > 1:
			detail = ", ".join(f"{name}={len(col)}" for name, col in zip(names, cols))
			raise SchemaError(f"Columns must all have the same length: {detail}")
		nrows = lengths.pop() if lengths else 0
		return cls(names, [tuple(col[i] for col in cols) for i in range(nrows)])

	@classmethod
	def from_records(cls, records, columns=None):
		"""Build a table from a list of dicts.

		Column order is taken from ``columns`` or, if omitted, from the first record.
		"""
		records = list(records)
		if columns is None:
			columns = list(records[0]) if records else []
		return cls(columns, records)

	# ------------------------------------------------------------------
	# Read-only access
	# ------------------------------------------------------------------

	@property
	def columns(self):
		return self._columns

	@property
	def n_rows(self):
		return len(self._rows)

	@property
	def rows(self):
		return tuple(Row(self, values) for values in self._rows)

	def __len__(self):
		return len(self._rows)

	def __iter__(self):
		"""Iterate over rows. Each call starts a fresh pass over the same data."""
		for values in self._rows:
			yield Row(self, values)

	def __contains__(self, name):
		return name in self._positions

	def __getitem__(self, key):
		"""``table['col']`` returns the column values; ``table[i]`` returns row i."""
		if isinstance(key, str):
			return self.column(key)
		if isinstance(key, int):
			return Row(self, self._rows[key])
		raise PyJoinTypeError(f"Table indices must be int or str, not {type(key).__name__}")

	def __getattr__(self, attr):
		"""Access columns by sanitized attribute name."""
		if attr.startswith('_'):
			raise AttributeError(attr)
		idx = self._attr_map.get(attr.lower())
		if idx is not None:
			return tuple(values[idx] for values in self._rows)
		raise AttributeError(f"{self.__class__.__name__!s} object has no attribute '{attr}'")

	def __dir__(self):
		base_attrs = object.__dir__(self)
		return sorted(set(base_attrs + list(self._attr_map.keys())))

	def column_index(self, name, context="Table"):
		idx = self._positions.get(name)
		if idx is None:
			raise _missing_col_error(name, context)
		return idx

	def column(self, name):
		"""Values of one column as a tuple."""
		idx = self.column_index(name)
		return tuple(values[idx] for values in self._rows)

	def kind(self, name):
		"""Inferred cell kind of a column (None if every cell is missing)."""
		if name not in self._kinds:
			self._kinds[name] = infer_column_kind(self.column(name))
		return self._kinds[name]

	def to_dicts(self):
		return [dict(zip(self._columns, values)) for values in self._rows]

	def to_columns(self):
		return {name: [values[idx] for values in self._rows] for idx, name in enumerate(self._columns)}

	def __eq__(self, other):
		if not isinstance(other, Table):
			return NotImplemented
		return self._columns == other._columns and self._rows == other._rows

	__hash__ = None

	def __repr__(self):
		return f"Table(columns={list(self._columns)!r}, n_rows={len(self._rows)})"

	# ------------------------------------------------------------------
	# Derivations (always return a new Table)
	# ------------------------------------------------------------------

	def rename(self, mapping):
		"""
		Return a copy with columns renamed per ``{old: new, ...}``.

		Rules:
		- every old name must exist, otherwise nothing is renamed and
		  MissingColumnError is raised
		- the renamed column set must still be unique (DuplicateColumnError)
		"""
		if not isinstance(mapping, Mapping):
			raise PyJoinTypeError(f"rename expects a mapping, got {type(mapping).__name__}")

		# Simulate renames on a temporary list (no partial renames)
		simulated = list(self._columns)
		for old, new in mapping.items():
			idx = self.column_index(old)
			if not isinstance(new, str):
				raise SchemaError(f"Column names must be strings, got {type(new).__name__}: {new!r}")
			simulated[idx] = new

		return Table._from_validated(self._validate_columns(simulated), self._rows)

	def select(self, *names):
		"""Return a copy holding only the named columns, in the given order."""
		if len(names) == 1 and isinstance(names[0], (list, tuple)):
			names = tuple(names[0])
		if not names:
			raise PyJoinValueError("select() needs at least one column name")
		positions = [self.column_index(name) for name in names]
		columns = self._validate_columns(names)
		rows = tuple(tuple(values[i] for i in positions) for values in self._rows)
		return Table._from_validated(columns, rows)

	# ------------------------------------------------------------------
	# Joins (delegate to py_join.executor)
	# ------------------------------------------------------------------

	def join(self, other, by=None, how="inner", **kwargs):
		"""Join with ``other``; see :func:`py_join.executor.join`."""
		from .executor import join
		return join(self, other, by, how, **kwargs)

	def inner_join(self, other, by=None, **kwargs):
		"""Rows of self with at least one match in other, one row per matched pair."""
		return self.join(other, by, "inner", **kwargs)

	def left_join(self, other, by=None, **kwargs):
		"""Every row of self; right-side columns missing where nothing matched."""
		return self.join(other, by, "left", **kwargs)

	def right_join(self, other, by=None, **kwargs):
		"""Every row of other; left-side columns missing where nothing matched."""
		return self.join(other, by, "right", **kwargs)

	def full_join(self, other, by=None, **kwargs):
		"""Every row of both tables, matched where possible."""
		return self.join(other, by, "full", **kwargs)

	def semi_join(self, other, by=None, **kwargs):
		"""Rows of self that have a match in other (each kept once)."""
		return self.join(other, by, "semi", **kwargs)

	def anti_join(self, other, by=None, **kwargs):
		"""Rows of self that have no match in other."""
		return self.join(other, by, "anti", **kwargs)
