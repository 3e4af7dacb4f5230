class PyJoinError(Exception):
	"""Base exception for py-join library."""
	pass


class SchemaError(PyJoinError, ValueError):
	"""Raised when a table is constructed from malformed columns or rows."""
	pass


class DuplicateColumnError(SchemaError):
	"""Raised when a column name appears more than once in a table."""
	pass


class MissingColumnError(PyJoinError, KeyError):
	"""Raised when a column/key is missing."""
	pass


class KeySpecError(PyJoinError, ValueError):
	"""Raised for malformed join key specifications."""
	pass


class EmptyKeySpecError(KeySpecError):
	"""Raised when a join is requested without any key pairs."""
	pass


class KeyTypeError(PyJoinError, TypeError):
	"""Raised when paired key columns hold incomparable kinds of values."""
	pass


class CardinalityError(PyJoinError, ValueError):
	"""Raised when a join violates its declared key cardinality."""
	pass


class PyJoinValueError(PyJoinError, ValueError):
	"""Raised for invalid argument values."""
	pass


class PyJoinTypeError(PyJoinError, TypeError):
	"""Raised for invalid types in API calls."""
	pass


class JoinWarning(UserWarning):
	"""Non-fatal join diagnostics (e.g. unexpected many-to-many keys)."""
	pass
