"""
CPU reference kernels.

NumPy for products, SciPy (LAPACK trtrs under the hood) for triangular
solves. This is the backend every other backend is validated against.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import LinAlgError, solve_triangular

from pyblas.core.exceptions import SingularMatrixError


class CPUKernelBackend:
    """CPU reference backend."""

    @property
    def name(self) -> str:
        return 'cpu_numpy'

    def matmul(self, a: NDArray[Any], b: NDArray[Any]) -> NDArray[Any]:
        return np.matmul(a, b)

    def solve_triangular(
        self,
        t: NDArray[Any],
        b: NDArray[Any],
        *,
        lower: bool,
    ) -> NDArray[Any]:
        """
        Solve t @ x = b by forward or back substitution.

        Exact zero pivots are reported up front; LAPACK would otherwise
        fail after partial work.
        """
        diagonal = np.diagonal(t)
        zero = np.flatnonzero(diagonal == 0)
        if zero.size > 0:
            raise SingularMatrixError(
                f"Triangular matrix has a zero pivot at diagonal index {int(zero[0])}",
                matrix_name='A',
                pivot=int(zero[0]),
            )
        try:
            x = solve_triangular(t, b, lower=lower, check_finite=False)
        except LinAlgError as e:
            raise SingularMatrixError(str(e), matrix_name='A') from e
        return np.asarray(x, dtype=t.dtype)
