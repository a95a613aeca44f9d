"""
ULP-based equality tests for floating-point values.

Two floats are considered equal when the distance between their biased bit
patterns, in units in the last place, does not exceed a tolerance. There is
no special handling of NaN or infinity: their outcome follows from the bit
arithmetic like any other pattern.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from .core import FloatingPoint, FloatLike, resolve_dtype
from .exceptions import InvalidToleranceError, PrecisionMismatchError

logger = logging.getLogger(__name__)


def _common_traits(left: FloatLike, right: FloatLike) -> FloatingPoint:
    """Resolve the shared precision of two operands."""
    left_dtype = resolve_dtype(left)
    right_dtype = resolve_dtype(right)

    if left_dtype.itemsize != right_dtype.itemsize:
        logger.debug("Rejecting comparison of %s with %s", left_dtype, right_dtype)
        raise PrecisionMismatchError(left_dtype, right_dtype)

    return FloatingPoint.for_dtype(left_dtype)


def _check_max_ulps(max_ulps) -> int:
    if isinstance(max_ulps, bool) or not isinstance(max_ulps, (int, np.integer)):
        raise InvalidToleranceError(
            f"max_ulps must be a non-negative integer, got {max_ulps!r}"
        )
    if max_ulps < 0:
        raise InvalidToleranceError(f"max_ulps must be non-negative, got {max_ulps}")
    return int(max_ulps)


def _bit_patterns(left: FloatLike, right: FloatLike) -> Tuple[FloatingPoint, int, int]:
    traits = _common_traits(left, right)
    return traits, traits.to_bits(left), traits.to_bits(right)


def ulp_distance(left: FloatLike, right: FloatLike) -> int:
    """
    Compute the distance between two floats in units in the last place.

    Adjacent representable values are 1 apart, +0.0 and -0.0 are 0 apart.

    Args:
        left: First value
        right: Second value, of the same precision as `left`

    Returns:
        Non-negative ULP distance

    Raises:
        PrecisionMismatchError: If the operands differ in bit width
        UnsupportedPrecisionError: If an operand is not a supported float
    """
    traits, left_bits, right_bits = _bit_patterns(left, right)
    return traits.distance_between_sign_and_magnitude_numbers(left_bits, right_bits)


def is_equal(left: FloatLike, right: FloatLike, max_ulps: Optional[int] = None) -> bool:
    """
    Test two floats for equality within a ULP tolerance.

    Args:
        left: First value
        right: Second value, of the same precision as `left`
        max_ulps: Maximum allowed ULP distance (default: precision default, 10)

    Returns:
        True if the values are at most `max_ulps` apart

    Raises:
        PrecisionMismatchError: If the operands differ in bit width
        UnsupportedPrecisionError: If an operand is not a supported float
        InvalidToleranceError: If `max_ulps` is not a non-negative integer
    """
    traits, left_bits, right_bits = _bit_patterns(left, right)

    if max_ulps is None:
        max_ulps = traits.max_ulps
    else:
        max_ulps = _check_max_ulps(max_ulps)

    distance = traits.distance_between_sign_and_magnitude_numbers(left_bits, right_bits)
    return distance <= max_ulps


def is_not_equal(left: FloatLike, right: FloatLike, max_ulps: Optional[int] = None) -> bool:
    """Negation of is_equal."""
    return not is_equal(left, right, max_ulps)
