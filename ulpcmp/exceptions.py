"""
Exceptions raised by the ULP comparison library.

All library errors derive from UlpCompareError. The concrete classes also
inherit from the matching builtin (TypeError, ValueError) so callers that
already catch those keep working.
"""


class UlpCompareError(Exception):
    """Base class for all errors raised by ulpcmp."""
    pass


class UnsupportedPrecisionError(UlpCompareError, TypeError):
    """
    Raised when an operand is not a recognised IEEE-754 precision, or when
    the unsigned integer mapping is requested for an unsupported width.
    """
    pass


class PrecisionMismatchError(UlpCompareError, TypeError):
    """Raised when the two operands of a comparison differ in bit width."""

    def __init__(self, left_dtype, right_dtype):
        self.left_dtype = left_dtype
        self.right_dtype = right_dtype
        super().__init__(
            f"Cannot compare operands of different precision: "
            f"{left_dtype} ({left_dtype.itemsize * 8} bits) vs "
            f"{right_dtype} ({right_dtype.itemsize * 8} bits)"
        )


class InvalidToleranceError(UlpCompareError, ValueError):
    """Raised when max_ulps is not a non-negative integer."""
    pass
