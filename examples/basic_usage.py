#!/usr/bin/env python3
"""
Basic usage examples for the ULP Comparison Library.

This script demonstrates why bitwise equality fails for computed floats and
how ULP-tolerant comparison handles it.
"""

import numpy as np
import torch

# Import the ULP comparison library
import sys
sys.path.append('..')

from ulpcmp import (
    is_equal,
    ulp_distance,
    FloatingPoint,
    PrecisionMismatchError,
    DBL_DEFAULT_MAX_ULPS
)


def demonstrate_rounding_error():
    """Show how == fails after ordinary arithmetic."""
    print("=" * 60)
    print("DEMONSTRATION: Rounding Error and ==")
    print("=" * 60)

    computed = 0.1 + 0.2
    expected = 0.3

    print(f"0.1 + 0.2 == 0.3:     {computed == expected}")
    print(f"ULP distance:         {ulp_distance(computed, expected)}")
    print(f"is_equal (default):   {is_equal(computed, expected)}")
    print()

    total = 0.0
    for _ in range(1000):
        total += 0.001
    print(f"sum of 1000 x 0.001:  {total!r}")
    print(f"ULP distance to 1.0:  {ulp_distance(total, 1.0)}")
    print(f"is_equal (default):   {is_equal(total, 1.0)}")
    print(f"is_equal (100 ULPs):  {is_equal(total, 1.0, 100)}")
    print()


def demonstrate_tolerance_boundary():
    """Show the default tolerance boundary around 1.0."""
    print("=" * 60)
    print(f"DEMONSTRATION: Default Tolerance ({DBL_DEFAULT_MAX_ULPS} ULPs)")
    print("=" * 60)

    eps = np.finfo(np.float64).eps
    for n in (1, 5, 10, 11, 20):
        value = 1.0 + n * eps
        print(f"1.0 vs 1.0 + {n:2d} eps:  distance={ulp_distance(1.0, value):2d}  "
              f"equal={is_equal(1.0, value)}")
    print()


def demonstrate_bit_fields():
    """Show the IEEE-754 layout for each supported precision."""
    print("=" * 60)
    print("DEMONSTRATION: Bit Fields")
    print("=" * 60)

    for dtype in (np.float16, np.float32, np.float64):
        fp = FloatingPoint.for_dtype(dtype)
        bits = fp.to_bits(dtype(-1.5))
        width = fp.bitcount // 4

        print(f"{fp}")
        print(f"  -1.5 bits:     0x{bits:0{width}X}")
        print(f"  sign:          {fp.sign_bit(bits)}")
        print(f"  exponent bits: 0x{fp.exponent_bits(bits):0{width}X}")
        print(f"  fraction bits: 0x{fp.fraction_bits(bits):0{width}X}")
    print()


def demonstrate_tensors_and_precision():
    """Compare tensor operands and show mixed-precision rejection."""
    print("=" * 60)
    print("DEMONSTRATION: Tensors and Precision")
    print("=" * 60)

    a = torch.tensor(1.0) / torch.tensor(3.0)
    b = torch.tensor(1.0 / 3.0, dtype=torch.float32)
    print(f"float32 tensors 1/3:  equal={is_equal(a, b)} distance={ulp_distance(a, b)}")

    try:
        is_equal(np.float32(1.0), 1.0)
    except PrecisionMismatchError as e:
        print(f"Mixed precision:      {e}")
    print()


if __name__ == "__main__":
    demonstrate_rounding_error()
    demonstrate_tolerance_boundary()
    demonstrate_bit_fields()
    demonstrate_tensors_and_precision()
