"""
PyBLAS: the Basic Linear Algebra Subprograms for Python.

Column-major BLAS operations over strided buffers in four numeric
domains (real32, real64, complex64, complex128), with optional GPU
kernels for the dense Level 2 and Level 3 paths.

Submodules:
    level1: Vector-vector operations
    level2: Matrix-vector operations
    level3: Matrix-matrix operations
    storage: Strided, dense, banded and packed storage views
    catalog: Classic one-letter-prefix names (sgemm, zherk, icamax, ...)

Every catalog name is also available directly on the package:

    import pyblas
    pyblas.daxpy(n, 2.0, x, 1, y, 1)
"""

__version__ = "0.1.0"

from pyblas import level1
from pyblas import level2
from pyblas import level3
from pyblas.blas import Blas
from pyblas.core.domains import (
    COMPLEX64,
    COMPLEX128,
    REAL32,
    REAL64,
    NumericDomain,
    get_domain,
)
from pyblas.core.modifiers import Diag, Side, Transpose, Uplo
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
from pyblas.catalog import lookup

__all__ = [
    "__version__",
    "level1",
    "level2",
    "level3",
    "Blas",
    "lookup",
    # Domains
    "NumericDomain",
    "REAL32",
    "REAL64",
    "COMPLEX64",
    "COMPLEX128",
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


def __getattr__(name):
    from pyblas.catalog import build_catalog

    catalog = build_catalog()
    if name in catalog:
        return catalog[name]
    raise AttributeError(f"module 'pyblas' has no attribute {name!r}")


def __dir__():
    from pyblas.catalog import build_catalog

    return sorted(set(globals()) | set(build_catalog()))
