"""Column name sanitization, qualification and uniquification utilities."""

from __future__ import annotations
import re


def _sanitize_user_name(name) -> str | None:
	"""Sanitize column name to valid Python identifier.

	Rules:
	- Convert to lowercase
	- Replace runs of non-alphanumeric chars (except _) with single _
	- Strip leading/trailing underscores
	- Prefix with 'c' if starts with digit
	- Return None if empty after sanitization
	"""
	if not isinstance(name, str):
		name = str(name)

	name = name.lower()
	sanitized = re.sub(r'[^a-z0-9_]+', '_', name)
	sanitized = sanitized.strip('_')

	if sanitized == "":
		return None

	if sanitized[0].isdigit():
		sanitized = "c" + sanitized

	return sanitized


def _uniquify(base: str, seen: set[str]) -> str:
	"""Make a unique name by adding __2, __3, etc if needed."""
	if base not in seen:
		return base

	i = 2
	while f"{base}__{i}" in seen:
		i += 1

	return f"{base}__{i}"


def _build_attribute_map(columns) -> dict[str, int]:
	"""Map sanitized attribute names to column positions.

	Unnamed or unsanitizable columns get the system name ``col{idx}_``.
	"""
	attr_map = {}
	seen = set()
	for idx, name in enumerate(columns):
		base = _sanitize_user_name(name)
		if base is None:
			attr = f'col{idx}_'
		else:
			attr = _uniquify(base, seen)
			seen.add(attr)
		attr_map[attr] = idx
	return attr_map


def _qualify_collisions(left_names, key_names, right_names, suffix):
	"""Resolve output names for a combined join schema.

	Args:
		left_names: Left non-key column names
		key_names: Key column names (left-side names), never renamed
		right_names: Right non-key column names
		suffix: (left_suffix, right_suffix)

	Returns:
		(left_out, right_out) lists of output names, parallel to the inputs

	A name shared by a left and a right non-key column gets the left suffix on
	the left copy and the right suffix on the right copy. A right non-key column
	named like a key column only gets the right suffix. Anything still clashing
	afterwards is made unique with ``__2``, ``__3``, ...
	"""
	left_suffix, right_suffix = suffix
	left_set = set(left_names)
	right_set = set(right_names)
	key_set = set(key_names)

	shared = left_set & right_set

	left_out = [
		f"{name}{left_suffix}" if name in shared else name
		for name in left_names
	]
	right_out = [
		f"{name}{right_suffix}" if (name in shared or name in key_set) else name
		for name in right_names
	]

	# Keys and untouched names are fixed; qualified names yield on clash
	seen = set(key_names)
	for i, name in enumerate(left_out):
		if name != left_names[i] or name in seen:
			name = _uniquify(name, seen | left_set | right_set)
		left_out[i] = name
		seen.add(name)
	for i, name in enumerate(right_out):
		if name != right_names[i] or name in seen:
			name = _uniquify(name, seen | left_set | right_set)
		right_out[i] = name
		seen.add(name)

	return left_out, right_out
