"""Library-wide defaults for join operations.

Every value here can be overridden per call through keyword arguments.
"""

# Suffixes appended to non-key columns present in both inputs
DEFAULT_SUFFIX = (".x", ".y")

# Variants that combine columns from both sides
MUTATING_VARIANTS = ("inner", "left", "right", "full")

# Variants that only filter the left table
FILTERING_VARIANTS = ("semi", "anti")

JOIN_VARIANTS = MUTATING_VARIANTS + FILTERING_VARIANTS

# Cardinality expectations accepted by ``expect=``
EXPECTATIONS = ("one_to_one", "one_to_many", "many_to_one", "many_to_many")

# Sides of a join, used by the key extractor and index builder
LEFT = "left"
RIGHT = "right"
