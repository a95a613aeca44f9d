"""
Default tolerances shared across the library.

Do not change these values without auditing the tests that pin them.
"""

# Double precision default maximum units in the last place
DBL_DEFAULT_MAX_ULPS: int = 10

# Double precision default test tolerance (relative, |x - y| <= tol * |x + y|).
# For loose checks in test assertions only; use is_equal for real comparisons.
DBL_DEFAULT_TEST_TOLERANCE: float = 1e-10
