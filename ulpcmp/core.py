"""
Core IEEE-754 bit manipulation for ULP comparison.

This module contains the precision traits (FloatingPoint), the mapping from
a floating-point width to the unsigned integer type of the same size, and
the single helper that reinterprets a float's storage as that integer.

Format of an IEEE floating-point number, most significant bit first:

    sign_bit exponent_bits fraction_bits

binary16 has 5 exponent and 10 fraction bits, binary32 has 8 and 23,
binary64 has 11 and 52.
"""

import logging
from functools import lru_cache
from typing import Union

import numpy as np
import torch

from .constants import DBL_DEFAULT_MAX_ULPS
from .exceptions import PrecisionMismatchError, UnsupportedPrecisionError

logger = logging.getLogger(__name__)

# Unsigned integer dtype with the same item size as a float dtype, by bytes.
_UNSIGNED_BY_SIZE = {
    2: np.dtype(np.uint16),
    4: np.dtype(np.uint32),
    8: np.dtype(np.uint64),
}

_SUPPORTED_FLOATS = (
    np.dtype(np.float16),
    np.dtype(np.float32),
    np.dtype(np.float64),
)

_TORCH_TO_NUMPY = {
    torch.float16: np.dtype(np.float16),
    torch.float32: np.dtype(np.float32),
    torch.float64: np.dtype(np.float64),
}

# Only double precision has a dedicated default; others fall back to it.
_DEFAULT_MAX_ULPS = {
    np.dtype(np.float64): DBL_DEFAULT_MAX_ULPS,
}

FloatLike = Union[float, np.floating, np.ndarray, torch.Tensor]


def type_with_size(size: int) -> np.dtype:
    """
    Get the unsigned integer dtype that has exactly `size` bytes.

    Args:
        size: Width in bytes of the floating-point type

    Returns:
        NumPy unsigned integer dtype of the same width

    Raises:
        UnsupportedPrecisionError: If no unsigned type of that width is mapped
    """
    try:
        return _UNSIGNED_BY_SIZE[size]
    except KeyError:
        logger.debug("No unsigned integer type mapped for %d-byte floats", size)
        raise UnsupportedPrecisionError(
            f"No unsigned integer type of {size} bytes; "
            f"supported sizes are {sorted(_UNSIGNED_BY_SIZE)}"
        ) from None


def default_max_ulps(dtype) -> int:
    """Default ULP tolerance for a precision."""
    return _DEFAULT_MAX_ULPS.get(_as_float_dtype(dtype), DBL_DEFAULT_MAX_ULPS)


def _as_float_dtype(dtype) -> np.dtype:
    """Normalize a NumPy or PyTorch dtype spec to a supported NumPy dtype."""
    if isinstance(dtype, torch.dtype):
        if dtype not in _TORCH_TO_NUMPY:
            raise UnsupportedPrecisionError(f"Unsupported tensor dtype: {dtype}")
        return _TORCH_TO_NUMPY[dtype]

    # np.dtype(None) is float64
    if dtype is None:
        raise UnsupportedPrecisionError("A floating-point dtype is required, got None")

    try:
        dtype = np.dtype(dtype)
    except TypeError:
        raise UnsupportedPrecisionError(f"Not a floating-point type: {dtype!r}") from None

    # Byte order is a storage detail; views are taken in native order.
    dtype = dtype.newbyteorder("=")
    if dtype not in _SUPPORTED_FLOATS:
        raise UnsupportedPrecisionError(
            f"Unsupported floating-point precision: {dtype}"
        )
    return dtype


def resolve_dtype(value: FloatLike) -> np.dtype:
    """
    Determine the IEEE-754 precision of an operand.

    Python floats are binary64. NumPy scalars and one-element arrays, and
    one-element tensors, carry their own dtype.

    Args:
        value: Operand to inspect

    Returns:
        Supported NumPy floating dtype

    Raises:
        UnsupportedPrecisionError: If the operand is not a supported float
        ValueError: If an array or tensor operand holds more than one element
    """
    if isinstance(value, torch.Tensor):
        if value.numel() != 1:
            raise ValueError(
                f"Expected a single-element tensor, got shape {tuple(value.shape)}"
            )
        return _as_float_dtype(value.dtype)

    if isinstance(value, (np.generic, np.ndarray)):
        if np.size(value) != 1:
            raise ValueError(
                f"Expected a single-element array, got shape {np.shape(value)}"
            )
        return _as_float_dtype(value.dtype)

    if isinstance(value, float):
        return np.dtype(np.float64)

    raise UnsupportedPrecisionError(
        f"Not a floating-point value: {value!r} ({type(value).__name__})"
    )


def to_bits(value: FloatLike, dtype=None) -> int:
    """
    Reinterpret the storage of a floating-point value as an unsigned integer.

    The bits are viewed, not converted: the result is the raw pattern of the
    value in its own precision.

    Args:
        value: Floating-point operand
        dtype: Expected precision of the operand (resolved from the value if
            omitted); it must match the operand's own precision

    Returns:
        Bit pattern as a non-negative Python int below 2**bitcount

    Raises:
        PrecisionMismatchError: If `dtype` differs from the operand's precision
    """
    value_dtype = resolve_dtype(value)
    if dtype is None:
        dtype = value_dtype
    else:
        dtype = _as_float_dtype(dtype)
        if dtype != value_dtype:
            raise PrecisionMismatchError(value_dtype, dtype)

    bits_dtype = type_with_size(dtype.itemsize)
    if bits_dtype.itemsize != dtype.itemsize:
        raise UnsupportedPrecisionError(
            f"Size mismatch reinterpreting {dtype} as {bits_dtype}"
        )

    if isinstance(value, torch.Tensor):
        value = value.detach().cpu().numpy()

    raw = np.asarray(value, dtype=dtype).reshape(())
    return int(raw.view(bits_dtype))


class FloatingPoint:
    """
    Traits of one IEEE-754 precision.

    Holds the field widths and masks of the format and implements the
    sign-and-magnitude to biased conversion on bit patterns. Instances are
    shared per dtype; obtain them with for_dtype or for_value.

    Attributes:
        dtype: NumPy floating dtype
        bits_dtype: Same-size NumPy unsigned dtype
        bitcount: Number of bits in a number
        fraction_bitcount: Number of fraction (explicit mantissa) bits
        exponent_bitcount: Number of exponent bits
        sign_bitmask: Mask for the sign bit
        fraction_bitmask: Mask for the fraction bits
        exponent_bitmask: Mask for the exponent bits
        max_ulps: Default ULP tolerance for this precision
    """

    def __init__(self, dtype):
        """
        Build the traits of a precision.

        Args:
            dtype: NumPy or PyTorch floating dtype
        """
        self.dtype = _as_float_dtype(dtype)
        self.bits_dtype = type_with_size(self.dtype.itemsize)

        self.bitcount = 8 * self.dtype.itemsize
        self.fraction_bitcount = int(np.finfo(self.dtype).nmant)
        self.exponent_bitcount = self.bitcount - 1 - self.fraction_bitcount

        self.all_ones = (1 << self.bitcount) - 1
        self.sign_bitmask = 1 << (self.bitcount - 1)
        self.fraction_bitmask = self.all_ones >> (self.exponent_bitcount + 1)
        self.exponent_bitmask = self.all_ones & ~(self.sign_bitmask | self.fraction_bitmask)

        # How many ULPs to tolerate by default. 0 means bit-identical only.
        self.max_ulps = default_max_ulps(self.dtype)

    @classmethod
    def for_dtype(cls, dtype) -> "FloatingPoint":
        """Get the shared traits for a dtype."""
        return _traits_for(_as_float_dtype(dtype))

    @classmethod
    def for_value(cls, value: FloatLike) -> "FloatingPoint":
        """Get the shared traits for the precision of an operand."""
        return _traits_for(resolve_dtype(value))

    def to_bits(self, value: FloatLike) -> int:
        """Bit pattern of a value of this precision."""
        return to_bits(value, self.dtype)

    def sign_bit(self, bits: int) -> bool:
        return bool(self.sign_bitmask & bits)

    def exponent_bits(self, bits: int) -> int:
        """Returns the exponent bits of a bit pattern, left in place."""
        return self.exponent_bitmask & bits

    def fraction_bits(self, bits: int) -> int:
        """Returns the fraction bits of a bit pattern."""
        return self.fraction_bitmask & bits

    def sign_and_magnitude_to_biased(self, sam: int) -> int:
        """
        Convert a sign-and-magnitude bit pattern to the biased representation.

        Let N be 2 ** (bitcount - 1). An integer x is represented by the
        unsigned number x + N, so -N + 1 maps to 1, 0 maps to N and N - 1
        maps to 2N - 1. Both zeros map to N.

        Args:
            sam: Bit pattern in sign-and-magnitude form

        Returns:
            Biased unsigned value, monotonic in the represented real
        """
        if self.sign_bitmask & sam:
            # Negative: two's complement negation within the width
            return (~sam + 1) & self.all_ones
        return self.sign_bitmask | sam

    def distance_between_sign_and_magnitude_numbers(self, sam1: int, sam2: int) -> int:
        """
        Distance in ULPs between two sign-and-magnitude bit patterns.

        Args:
            sam1: First bit pattern
            sam2: Second bit pattern

        Returns:
            Non-negative distance between their biased representations
        """
        biased1 = self.sign_and_magnitude_to_biased(sam1)
        biased2 = self.sign_and_magnitude_to_biased(sam2)
        return (biased1 - biased2) if biased1 >= biased2 else (biased2 - biased1)

    def __repr__(self) -> str:
        return (f"FloatingPoint(dtype={self.dtype}, exponent_bits={self.exponent_bitcount}, "
                f"fraction_bits={self.fraction_bitcount})")


@lru_cache(maxsize=None)
def _traits_for(dtype: np.dtype) -> FloatingPoint:
    traits = FloatingPoint(dtype)
    logger.debug("Built traits %r", traits)
    return traits
