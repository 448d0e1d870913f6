"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyblas.core.compute.tolerances import select_tolerance
from pyblas.core.domains import ALL_DOMAINS, COMPLEX_DOMAINS, REAL_DOMAINS


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(params=ALL_DOMAINS, ids=lambda d: d.name)
def domain(request):
    """Every numeric domain; the conformance suite runs once per domain."""
    return request.param


@pytest.fixture(params=REAL_DOMAINS, ids=lambda d: d.name)
def real_domain(request):
    return request.param


@pytest.fixture(params=COMPLEX_DOMAINS, ids=lambda d: d.name)
def complex_domain(request):
    return request.param


@pytest.fixture
def random_array(rng):
    """Factory: standard normal values (complex parts too) in a domain's dtype."""
    def make(domain, shape):
        values = rng.standard_normal(shape)
        if domain.is_complex:
            values = values + 1j * rng.standard_normal(shape)
        return values.astype(domain.dtype)
    return make


@pytest.fixture
def assert_close():
    """Factory: assert_allclose with the domain's tolerance tier."""
    def check(actual, expected, domain, solve=False):
        tol = select_tolerance(domain, solve=solve)
        np.testing.assert_allclose(actual, expected, rtol=tol.rtol, atol=tol.atol)
    return check
