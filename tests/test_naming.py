import pytest
from py_join.naming import _sanitize_user_name, _uniquify, _build_attribute_map, _qualify_collisions


def test_sanitize_simple_name():
	"""Test that simple valid names are lowercased"""
	assert _sanitize_user_name("column") == "column"
	assert _sanitize_user_name("MyColumn") == "mycolumn"


def test_sanitize_special_chars():
	"""Test that runs of special characters become one underscore"""
	assert _sanitize_user_name("Customer ID") == "customer_id"
	assert _sanitize_user_name("var.x") == "var_x"
	assert _sanitize_user_name("price$") == "price"


def test_sanitize_starts_with_digit():
	assert _sanitize_user_name("2nd") == "c2nd"


def test_sanitize_empty_result():
	assert _sanitize_user_name("$$$") is None
	assert _sanitize_user_name("") is None


def test_uniquify():
	assert _uniquify("a", set()) == "a"
	assert _uniquify("a", {"a"}) == "a__2"
	assert _uniquify("a", {"a", "a__2"}) == "a__3"


def test_attribute_map():
	assert _build_attribute_map(["A b", "a_b", "$$"]) == {"a_b": 0, "a_b__2": 1, "col2_": 2}


class TestQualifyCollisions:
	"""Output names for combined join schemas."""

	def test_no_collisions(self):
		assert _qualify_collisions(["a"], ["id"], ["b"], (".x", ".y")) == (["a"], ["b"])

	def test_shared_non_key(self):
		assert _qualify_collisions(["v", "a"], ["id"], ["v"], (".x", ".y")) == (["v.x", "a"], ["v.y"])

	def test_right_column_named_like_key(self):
		assert _qualify_collisions(["name"], ["id"], ["id"], (".x", ".y")) == (["name"], ["id.y"])

	def test_qualified_name_already_taken(self):
		left, right = _qualify_collisions(["v", "v.x"], ["id"], ["v"], (".x", ".y"))
		assert left == ["v.x__2", "v.x"]
		assert right == ["v.y"]

	def test_right_original_clashes_with_left_qualified(self):
		left, right = _qualify_collisions(["v"], ["id"], ["v", "v.x"], (".x", ".y"))
		assert left == ["v.x__2"]
		assert right == ["v.y", "v.x"]

	@pytest.mark.parametrize("left_names,keys,right_names", [
		(["a", "b", "a.x"], ["k"], ["a", "b", "k", "b.y"]),
		(["k.y"], ["k"], ["k", "k.y"]),
		(["x"], ["x.x"], ["x"]),
	])
	def test_output_names_unique(self, left_names, keys, right_names):
		left, right = _qualify_collisions(left_names, keys, right_names, (".x", ".y"))
		names = left + keys + right
		assert len(names) == len(set(names))
