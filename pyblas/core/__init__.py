"""
Core infrastructure for PyBLAS.

Shared abstractions used by every level:

Key components:
    domains: NumericDomain and the four concrete domains
    modifiers: Transpose, Uplo, Diag, Side
    exceptions: Exception hierarchy
    validation: Argument and buffer validators
    capabilities: Which operations each domain supports
    protocols: KernelBackend protocol
"""

from pyblas.core.protocols import KernelBackend
from pyblas.core.domains import (
    NumericDomain,
    REAL32,
    REAL64,
    COMPLEX64,
    COMPLEX128,
    ALL_DOMAINS,
    get_domain,
)
from pyblas.core.modifiers import Transpose, Uplo, Diag, Side
from pyblas.core.exceptions import (
    BlasError,
    ValidationError,
    DimensionError,
    IncrementError,
    ModifierError,
    AliasingError,
    StorageError,
    UnsupportedOperationError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Protocols
    "KernelBackend",
    # Domains
    "NumericDomain",
    "REAL32",
    "REAL64",
    "COMPLEX64",
    "COMPLEX128",
    "ALL_DOMAINS",
    "get_domain",
    # Modifiers
    "Transpose",
    "Uplo",
    "Diag",
    "Side",
    # Exceptions
    "BlasError",
    "ValidationError",
    "DimensionError",
    "IncrementError",
    "ModifierError",
    "AliasingError",
    "StorageError",
    "UnsupportedOperationError",
    "NumericalError",
    "SingularMatrixError",
]
