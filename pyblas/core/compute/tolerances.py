"""
Tolerance tiers for numerical validation.

Defines precision expectations per numeric domain:
- REAL64 / COMPLEX128: double precision, tight
- REAL32 / COMPLEX64: relaxed for single-precision arithmetic

Used by the conformance test suite and by callers comparing two kernel
backends against each other.
"""

from dataclasses import dataclass

from pyblas.core.domains import NumericDomain, get_domain


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='Double precision: real64 and complex128',
)

FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='Single precision: real32 and complex64',
)

# Triangular solves amplify rounding by the condition number of A
FP64_SOLVE = ToleranceTier(
    rtol=1e-8,
    atol=1e-10,
    name='fp64_solve',
    description='Double precision triangular solves',
)

FP32_SOLVE = ToleranceTier(
    rtol=1e-3,
    atol=1e-4,
    name='fp32_solve',
    description='Single precision triangular solves',
)


def select_tolerance(domain, solve: bool = False) -> ToleranceTier:
    """Select the tolerance tier for a numeric domain."""
    domain: NumericDomain = get_domain(domain)
    if domain.real_dtype.itemsize == 8:
        return FP64_SOLVE if solve else FP64
    return FP32_SOLVE if solve else FP32
