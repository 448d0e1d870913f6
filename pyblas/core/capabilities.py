"""
Operation mnemonic constants for PyBLAS.

This module is the SINGLE SOURCE OF TRUTH for operation mnemonics and
which numeric domains define them. The catalog, the Blas family and the
conformance tests all import from here, never use raw strings.

Usage:
    from pyblas.core.capabilities import LEVEL2_OPERATIONS, supports

    if supports('hemv', domain):
        ...
"""

from pyblas.core.domains import NumericDomain

# Defined for all four domains
LEVEL1_COMMON = frozenset({
    'rotg', 'rot', 'swap', 'scal', 'copy', 'axpy', 'nrm2', 'asum', 'iamax',
})

# Real domains only
LEVEL1_REAL = frozenset({'rotm', 'rotmg', 'dot'})

# Complex domains only
LEVEL1_COMPLEX = frozenset({'dotu', 'dotc', 'rscal', 'rrot'})

LEVEL2_COMMON = frozenset({
    'gemv', 'gbmv',
    'trmv', 'tbmv', 'tpmv',
    'trsv', 'tbsv', 'tpsv',
})

LEVEL2_REAL = frozenset({
    'symv', 'sbmv', 'spmv',
    'ger', 'syr', 'spr', 'syr2', 'spr2',
})

LEVEL2_COMPLEX = frozenset({
    'hemv', 'hbmv', 'hpmv',
    'geru', 'gerc', 'her', 'hpr', 'her2', 'hpr2',
})

LEVEL3_COMMON = frozenset({'gemm', 'symm', 'syrk', 'syr2k', 'trmm', 'trsm'})

LEVEL3_COMPLEX = frozenset({'hemm', 'herk', 'her2k'})

LEVEL1_OPERATIONS = LEVEL1_COMMON | LEVEL1_REAL | LEVEL1_COMPLEX
LEVEL2_OPERATIONS = LEVEL2_COMMON | LEVEL2_REAL | LEVEL2_COMPLEX
LEVEL3_OPERATIONS = LEVEL3_COMMON | LEVEL3_COMPLEX

ALL_OPERATIONS = LEVEL1_OPERATIONS | LEVEL2_OPERATIONS | LEVEL3_OPERATIONS

# Operations that only make sense on float32 input (mixed precision dots)
MIXED_PRECISION = frozenset({'sdsdot', 'dsdot'})


def operations_for(domain: NumericDomain) -> frozenset[str]:
    """All mnemonics the catalog exposes for a domain."""
    common = LEVEL1_COMMON | LEVEL2_COMMON | LEVEL3_COMMON
    if domain.is_complex:
        return common | LEVEL1_COMPLEX | LEVEL2_COMPLEX | LEVEL3_COMPLEX
    return common | LEVEL1_REAL | LEVEL2_REAL


def supports(operation: str, domain: NumericDomain) -> bool:
    """
    Check whether the catalog defines an operation for a domain.

    Unknown operations return False, never raise.
    """
    return operation in operations_for(domain)


__all__ = [
    'LEVEL1_COMMON',
    'LEVEL1_REAL',
    'LEVEL1_COMPLEX',
    'LEVEL2_COMMON',
    'LEVEL2_REAL',
    'LEVEL2_COMPLEX',
    'LEVEL3_COMMON',
    'LEVEL3_COMPLEX',
    'LEVEL1_OPERATIONS',
    'LEVEL2_OPERATIONS',
    'LEVEL3_OPERATIONS',
    'ALL_OPERATIONS',
    'MIXED_PRECISION',
    'operations_for',
    'supports',
]
