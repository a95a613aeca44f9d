"""
ULP Comparison Library

Equality tests for IEEE-754 floating-point values that tolerate rounding
error by measuring the distance between two values in units in the last
place (ULPs) rather than comparing them bit for bit.

This library provides:
- ULP-tolerant equality for half, single and double precision
- Raw ULP distance between two values
- Bit-field access (sign, exponent, fraction) per precision
- Default tolerances for production and test comparisons
"""

from .core import FloatingPoint, type_with_size, to_bits, default_max_ulps
from .algorithms import (
    is_equal,
    is_not_equal,
    ulp_distance
)
from .constants import DBL_DEFAULT_MAX_ULPS, DBL_DEFAULT_TEST_TOLERANCE
from .exceptions import (
    UlpCompareError,
    UnsupportedPrecisionError,
    PrecisionMismatchError,
    InvalidToleranceError
)

__version__ = "1.0.0"
__author__ = "ULP Compare Contributors"

__all__ = [
    "FloatingPoint",
    "type_with_size",
    "to_bits",
    "default_max_ulps",
    "is_equal",
    "is_not_equal",
    "ulp_distance",
    "DBL_DEFAULT_MAX_ULPS",
    "DBL_DEFAULT_TEST_TOLERANCE",
    "UlpCompareError",
    "UnsupportedPrecisionError",
    "PrecisionMismatchError",
    "InvalidToleranceError"
]
