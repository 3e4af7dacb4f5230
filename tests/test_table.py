"""
Test Table construction, read-only access and derivations.
"""

from datetime import date

import pytest
from py_join import Table, Row
from py_join.errors import (
	DuplicateColumnError,
	MissingColumnError,
	PyJoinTypeError,
	PyJoinValueError,
	SchemaError,
)


class TestConstruction:
	"""Tables are rectangular with unique names and explicit missing cells."""

	def test_from_mapping_rows(self):
		t = Table(['id', 'name'], [{'name': 'Ann', 'id': 1}, {'id': 2, 'name': None}])
		assert t.columns == ('id', 'name')
		assert t.n_rows == 2
		assert t['name'] == ('Ann', None)

	def test_from_sequence_rows(self):
		t = Table(['a', 'b'], [(1, 2), [3, 4]])
		assert t.to_dicts() == [{'a': 1, 'b': 2}, {'a': 3, 'b': 4}]

	def test_missing_cell_must_be_explicit(self):
		with pytest.raises(SchemaError, match=r"missing \['name'\]"):
			Table(['id', 'name'], [{'id': 1}])

	def test_extra_cell_rejected(self):
		with pytest.raises(SchemaError, match="unexpected"):
			Table(['id'], [{'id': 1, 'other': 2}])

	def test_sequence_row_wrong_length(self):
		with pytest.raises(SchemaError, match="Row 1 has 1 values"):
			Table(['a', 'b'], [(1, 2), (3,)])

	def test_row_of_wrong_type(self):
		with pytest.raises(SchemaError, match="mapping or a sequence"):
			Table(['a'], ['x'])

	def test_duplicate_columns(self):
		with pytest.raises(DuplicateColumnError, match="'a'"):
			Table(['a', 'b', 'a'], [])

	def test_duplicate_column_is_schema_error(self):
		with pytest.raises(SchemaError):
			Table(['a', 'a'], [])

	def test_non_string_column_name(self):
		with pytest.raises(SchemaError):
			Table(['a', 1], [])

	def test_single_string_columns_rejected(self):
		with pytest.raises(SchemaError):
			Table('ab', [])

	def test_unsupported_cell_type(self):
		with pytest.raises(SchemaError, match="column 'b' at row 0"):
			Table(['a', 'b'], [(1, [1, 2])])

	def test_supported_cell_kinds(self):
		t = Table(['v'], [('s',), (1,), (2.5,), (True,), (date(2020, 1, 1),), (None,)])
		assert t.n_rows == 6

	def test_empty_table(self):
		t = Table()
		assert t.columns == ()
		assert len(t) == 0
		assert list(t) == []


class TestAlternateConstructors:

	def test_from_columns(self):
		t = Table.from_columns({'a': [1, 2], 'b': ['x', 'y']})
		assert t.columns == ('a', 'b')
		assert t.rows == ({'a': 1, 'b': 'x'}, {'a': 2, 'b': 'y'})

	def test_from_columns_unequal_lengths(self):
		with pytest.raises(SchemaError, match="same length"):
			Table.from_columns({'a': [1, 2], 'b': ['x']})

	def test_from_columns_requires_mapping(self):
		with pytest.raises(PyJoinTypeError):
			Table.from_columns([[1, 2]])

	def test_from_records_infers_columns(self):
		t = Table.from_records([{'b': 1, 'a': 2}, {'a': 3, 'b': 4}])
		assert t.columns == ('b', 'a')
		assert t['a'] == (2, 3)

	def test_from_records_empty(self):
		assert Table.from_records([]) == Table()
		assert Table.from_records([], columns=['a']).columns == ('a',)


class TestAccess:

	def setup_method(self):
		self.t = Table.from_columns({'Customer ID': [1, 2, 3], 'name': ['a', 'b', None]})

	def test_iteration_is_restartable(self):
		first = [dict(row) for row in self.t]
		second = [dict(row) for row in self.t]
		assert first == second == self.t.to_dicts()

	def test_rows_are_read_only_mappings(self):
		row = self.t[0]
		assert isinstance(row, Row)
		assert row == {'Customer ID': 1, 'name': 'a'}
		assert list(row) == ['Customer ID', 'name']
		assert 'name' in row
		assert 'missing' not in row
		with pytest.raises(TypeError):
			row['name'] = 'z'

	def test_row_access_by_position_and_attribute(self):
		row = self.t[1]
		assert row[0] == 2
		assert row.customer_id == 2
		assert row.name == 'b'
		with pytest.raises(AttributeError):
			row.nope

	def test_row_missing_column(self):
		with pytest.raises(MissingColumnError):
			self.t[0]['nope']

	def test_column_access(self):
		assert self.t['name'] == ('a', 'b', None)
		assert self.t.column('Customer ID') == (1, 2, 3)
		assert self.t.customer_id == (1, 2, 3)

	def test_missing_column(self):
		with pytest.raises(MissingColumnError, match="'nope' not found"):
			self.t['nope']
		with pytest.raises(KeyError):
			self.t.column('nope')

	def test_bad_index_type(self):
		with pytest.raises(PyJoinTypeError):
			self.t[1.5]

	def test_contains(self):
		assert 'name' in self.t
		assert 'nope' not in self.t

	def test_kind(self):
		t = Table.from_columns({'i': [1, None], 'f': [1, 2.5], 'n': [None, None], 'm': [1, 'a']})
		assert t.kind('i') is int
		assert t.kind('f') is float
		assert t.kind('n') is None
		assert t.kind('m') is object

	def test_to_columns(self):
		assert self.t.to_columns() == {'Customer ID': [1, 2, 3], 'name': ['a', 'b', None]}

	def test_equality(self):
		same = Table(['Customer ID', 'name'], [(1, 'a'), (2, 'b'), (3, None)])
		assert self.t == same
		assert self.t != same.select('name', 'Customer ID')
		assert self.t != "not a table"

	def test_repr(self):
		assert repr(self.t) == "Table(columns=['Customer ID', 'name'], n_rows=3)"


class TestDerivations:

	def setup_method(self):
		self.t = Table.from_columns({'a': [1, 2], 'b': ['x', 'y'], 'c': [True, False]})

	def test_rename_returns_new_table(self):
		renamed = self.t.rename({'a': 'id'})
		assert renamed.columns == ('id', 'b', 'c')
		assert renamed['id'] == (1, 2)
		assert self.t.columns == ('a', 'b', 'c')

	def test_rename_swap(self):
		assert self.t.rename({'a': 'b', 'b': 'a'}).columns == ('b', 'a', 'c')

	def test_rename_missing_is_atomic(self):
		with pytest.raises(MissingColumnError):
			self.t.rename({'a': 'id', 'nope': 'x'})
		assert self.t.columns == ('a', 'b', 'c')

	def test_rename_to_duplicate(self):
		with pytest.raises(DuplicateColumnError):
			self.t.rename({'a': 'b'})

	def test_rename_requires_mapping(self):
		with pytest.raises(PyJoinTypeError):
			self.t.rename([('a', 'id')])

	def test_select(self):
		assert self.t.select('c', 'a').to_dicts() == [{'c': True, 'a': 1}, {'c': False, 'a': 2}]
		assert self.t.select(['b']).columns == ('b',)

	def test_select_errors(self):
		with pytest.raises(PyJoinValueError):
			self.t.select()
		with pytest.raises(MissingColumnError):
			self.t.select('nope')
		with pytest.raises(DuplicateColumnError):
			self.t.select('a', 'a')
