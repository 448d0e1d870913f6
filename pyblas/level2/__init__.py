"""
Level 2 BLAS: matrix-vector operations.

Public API:
    gemv, gbmv                          - General (dense, banded)
    symv, sbmv, spmv                    - Symmetric (dense, banded, packed)
    hemv, hbmv, hpmv                    - Hermitian (dense, banded, packed)
    trmv, tbmv, tpmv                    - Triangular multiply
    trsv, tbsv, tpsv                    - Triangular solve
    ger, geru, gerc                     - General rank-1 update
    syr, spr, syr2, spr2                - Symmetric rank-1/rank-2 update
    her, hpr, her2, hpr2                - Hermitian rank-1/rank-2 update
"""

from pyblas.level2.solvers import (
    gemv,
    gbmv,
    symv,
    hemv,
    sbmv,
    hbmv,
    spmv,
    hpmv,
    trmv,
    tbmv,
    tpmv,
    trsv,
    tbsv,
    tpsv,
    ger,
    geru,
    gerc,
    syr,
    her,
    spr,
    hpr,
    syr2,
    her2,
    spr2,
    hpr2,
)

__all__ = [
    "gemv",
    "gbmv",
    "symv",
    "hemv",
    "sbmv",
    "hbmv",
    "spmv",
    "hpmv",
    "trmv",
    "tbmv",
    "tpmv",
    "trsv",
    "tbsv",
    "tpsv",
    "ger",
    "geru",
    "gerc",
    "syr",
    "her",
    "spr",
    "hpr",
    "syr2",
    "her2",
    "spr2",
    "hpr2",
]
