"""
Level 3 BLAS: matrix-matrix operations.

Public API:
    gemm          - General multiply
    symm, hemm    - Symmetric/Hermitian multiply
    syrk, herk    - Rank-k update
    syr2k, her2k  - Rank-2k update
    trmm, trsm    - Triangular multiply and solve
"""

from pyblas.level3.solvers import (
    gemm,
    symm,
    hemm,
    syrk,
    herk,
    syr2k,
    her2k,
    trmm,
    trsm,
)

__all__ = [
    "gemm",
    "symm",
    "hemm",
    "syrk",
    "herk",
    "syr2k",
    "her2k",
    "trmm",
    "trsm",
]
