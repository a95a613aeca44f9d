"""
Test suite for the ULP Comparison Library.

Test Structure:
- test_core.py: Tests for precision traits and bit reinterpretation
- test_algorithms.py: Tests for the comparison functions
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run tests with coverage
    pytest --cov=ulpcmp

    # Skip tensor operand tests
    pytest -m "not torch"
"""

__version__ = "1.0.0"
