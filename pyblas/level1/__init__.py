"""
Level 1 BLAS: vector-vector operations.

Public API:
    rotg, rotmg          - Rotation setup
    rot, rotm            - Rotation application
    swap, scal, rscal    - In-place updates
    copy, axpy           - y := x, y := alpha*x + y
    dot, dotu, dotc      - Inner products
    sdsdot, dsdot        - Float32 inner products accumulated in float64
    nrm2, asum, iamax    - Reductions
"""

from pyblas.level1.rotation import GivensRotation, ModifiedGivens
from pyblas.level1.solvers import (
    rotg,
    rotmg,
    rot,
    rotm,
    swap,
    scal,
    rscal,
    copy,
    axpy,
    dot,
    dotu,
    dotc,
    sdsdot,
    dsdot,
    nrm2,
    asum,
    iamax,
)

__all__ = [
    "rotg",
    "rotmg",
    "rot",
    "rotm",
    "swap",
    "scal",
    "rscal",
    "copy",
    "axpy",
    "dot",
    "dotu",
    "dotc",
    "sdsdot",
    "dsdot",
    "nrm2",
    "asum",
    "iamax",
    "GivensRotation",
    "ModifiedGivens",
]
