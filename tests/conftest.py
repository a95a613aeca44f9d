#!/usr/bin/env python3
"""
Pytest configuration and fixtures for ULP comparison tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite.
"""

import pytest
import numpy as np
import torch

from ulpcmp import DBL_DEFAULT_TEST_TOLERANCE


@pytest.fixture(scope="session")
def random_seed():
    """Set random seed for reproducible tests."""
    seed = 42
    np.random.seed(seed)
    torch.manual_seed(seed)
    return seed


@pytest.fixture(params=[np.float16, np.float32, np.float64])
def dtype(request):
    """Parameterized fixture for the supported precisions."""
    return request.param


@pytest.fixture
def sample_values():
    """Finite values of both signs spanning normal and subnormal ranges."""
    return [
        0.0, -0.0, 1.0, -1.0, 0.1, -0.1, 3.14159, -2.71828,
        1e-3, -1e-3, 65000.0, -65000.0, 6e-8, -6e-8,
    ]


@pytest.fixture
def random_doubles(random_seed):
    """Random binary64 values spread over many orders of magnitude."""
    rng = np.random.default_rng(random_seed)
    exponents = rng.uniform(-300, 300, 200)
    signs = rng.choice([-1.0, 1.0], 200)
    return (signs * 10.0 ** exponents).astype(np.float64)


@pytest.fixture
def random_singles(random_seed):
    """Random binary32 values spread over many orders of magnitude."""
    rng = np.random.default_rng(random_seed)
    exponents = rng.uniform(-30, 30, 200)
    signs = rng.choice([-1.0, 1.0], 200)
    return (signs * 10.0 ** exponents).astype(np.float32)


def next_up(value, dtype=np.float64):
    """Next representable value above `value` in the given precision."""
    value = dtype(value)
    return np.nextafter(value, dtype(np.inf))


def next_down(value, dtype=np.float64):
    """Next representable value below `value` in the given precision."""
    value = dtype(value)
    return np.nextafter(value, dtype(-np.inf))


def ulps_away(value, n, dtype=np.float64):
    """Step `n` representable values away from `value` (negative n steps down)."""
    result = dtype(value)
    step = next_up if n >= 0 else next_down
    for _ in range(abs(n)):
        result = step(result, dtype)
    return result


@pytest.fixture
def stepper():
    """Fixture exposing the representable-value stepping helpers."""

    class Stepper:
        up = staticmethod(next_up)
        down = staticmethod(next_down)
        away = staticmethod(ulps_away)

    return Stepper()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "torch: marks tests that compare tensor operands"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "exhaustive" in item.name or "random" in item.name:
            item.add_marker(pytest.mark.slow)

        if "tensor" in item.name:
            item.add_marker(pytest.mark.torch)


def assert_relative_error(computed, reference, max_relative_error=DBL_DEFAULT_TEST_TOLERANCE):
    """Assert |computed - reference| <= tol * |computed + reference|."""
    difference = abs(computed - reference)
    bound = max_relative_error * abs(computed + reference)
    assert difference <= bound, (
        f"Relative error exceeds threshold {max_relative_error}\n"
        f"Computed: {computed}, Reference: {reference}"
    )


@pytest.fixture
def relative_checker():
    """Fixture providing the loose relative-tolerance assertion."""
    return assert_relative_error
