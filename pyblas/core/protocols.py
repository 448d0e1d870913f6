"""
Core protocols for PyBLAS.

These define structural interfaces that kernel implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so any
object with the right methods can be plugged in as a backend.

Design Principles:
    - Minimal contracts: the operation layer does all storage, modifier
      and conjugation handling; a backend only does arithmetic on
      logical dense operands
    - Stateless: all configuration happens at construction time
    - Interchangeable: any two backends must agree within the domain's
      tolerance tier
"""

from typing import Any, Protocol, runtime_checkable

from numpy.typing import NDArray


@runtime_checkable
class KernelBackend(Protocol):
    """
    Protocol for arithmetic kernels behind Level 2 and Level 3 operations.

    Operands are logical dense numpy arrays (already transposed,
    conjugated and mirrored as the operation requires). Results are numpy
    arrays of the operand dtype.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{library}'
        Examples: 'cpu_numpy', 'gpu_torch'
        """
        ...

    def matmul(self, a: NDArray[Any], b: NDArray[Any]) -> NDArray[Any]:
        """
        Matrix product a @ b.

        b may be 1D (matrix-vector product) or 2D.
        """
        ...

    def solve_triangular(
        self,
        t: NDArray[Any],
        b: NDArray[Any],
        *,
        lower: bool,
    ) -> NDArray[Any]:
        """
        Solve t @ x = b for a triangular t.

        Args:
            t: Square triangular matrix with explicit diagonal
            b: Right-hand side, 1D or 2D
            lower: Whether t is lower triangular

        Raises:
            SingularMatrixError: If t has an exactly zero diagonal entry
        """
        ...
