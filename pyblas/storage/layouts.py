"""
Matrix storage layouts.

Every matrix in the contract is column-major. A view maps logical
element (i, j) to a buffer offset:

    DenseMatrix    i + j*ld
    BandedMatrix   (ku + i - j) + j*ld         for j-ku <= i <= j+kl
    PackedMatrix   upper (i <= j): i + j*(j+1)/2
                   lower (i >= j): i + j*(2n-j-1)/2

Elements outside the stored region (outside the band, or in the
unreferenced triangle of a packed matrix) are never read or written;
gather() reports them as zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyblas.core.modifiers import Uplo
from pyblas.core.validation import check_extent, check_packed_length


def triangle_mask(n: int, uplo: Uplo, *, include_diagonal: bool = True) -> NDArray[np.bool_]:
    """Boolean (n, n) mask of the upper or lower triangle."""
    k = 0 if include_diagonal else 1
    ones = np.ones((n, n), dtype=bool)
    if uplo is Uplo.UPPER:
        return np.triu(ones, k)
    return np.tril(ones, -k)


class _MatrixView:
    """
    Shared gather/scatter over a stored-element mask.

    Subclasses provide shape, stored_mask() and offsets(); offsets()
    may hold any value outside the stored mask.
    """

    buffer: NDArray[Any]

    @property
    def shape(self) -> tuple[int, int]:
        raise NotImplementedError

    def stored_mask(self) -> NDArray[np.bool_]:
        raise NotImplementedError

    def offsets(self) -> NDArray[np.intp]:
        raise NotImplementedError

    @property
    def extent(self) -> int:
        """Highest buffer index touched plus one."""
        mask = self.stored_mask()
        if not mask.any():
            return 0
        return int(self.offsets()[mask].max()) + 1

    def check_bounds(self, name: str) -> None:
        check_extent(self.buffer, self.extent, name)

    def gather(self, mask: NDArray[np.bool_] | None = None) -> NDArray[Any]:
        """
        Logical dense copy of the matrix.

        Args:
            mask: Optional further restriction of the elements read;
                everything else is zero

        Returns:
            (rows, cols) array of the buffer dtype
        """
        read = self.stored_mask()
        if mask is not None:
            read = read & mask
        out = np.zeros(self.shape, dtype=self.buffer.dtype)
        out[read] = self.buffer[self.offsets()[read]]
        return out

    def scatter(self, values: NDArray[Any], mask: NDArray[np.bool_] | None = None) -> None:
        """
        Write logical elements back into the buffer.

        Only stored elements selected by mask (all stored elements when
        mask is None) are written.
        """
        write = self.stored_mask()
        if mask is not None:
            write = write & mask
        self.buffer[self.offsets()[write]] = np.asarray(values)[write]


@dataclass(frozen=True)
class DenseMatrix(_MatrixView):
    """Column-major rows x cols matrix with leading dimension ld."""
    buffer: NDArray[Any]
    rows: int
    cols: int
    ld: int

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    def stored_mask(self) -> NDArray[np.bool_]:
        return np.ones(self.shape, dtype=bool)

    def offsets(self) -> NDArray[np.intp]:
        return np.add.outer(
            np.arange(self.rows, dtype=np.intp),
            np.arange(self.cols, dtype=np.intp) * self.ld,
        )

    @property
    def extent(self) -> int:
        if self.rows == 0 or self.cols == 0:
            return 0
        return (self.cols - 1) * self.ld + self.rows


@dataclass(frozen=True)
class BandedMatrix(_MatrixView):
    """
    Column-major band storage with kl sub- and ku super-diagonals.

    Column j of the matrix occupies column j of a (kl+ku+1) x cols
    array with leading dimension ld; the diagonal sits in row ku.
    """
    buffer: NDArray[Any]
    rows: int
    cols: int
    kl: int
    ku: int
    ld: int

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    def stored_mask(self) -> NDArray[np.bool_]:
        i = np.arange(self.rows)[:, None]
        j = np.arange(self.cols)[None, :]
        return (i >= j - self.ku) & (i <= j + self.kl)

    def offsets(self) -> NDArray[np.intp]:
        i = np.arange(self.rows, dtype=np.intp)[:, None]
        j = np.arange(self.cols, dtype=np.intp)[None, :]
        return (self.ku + i - j) + j * self.ld


@dataclass(frozen=True)
class PackedMatrix(_MatrixView):
    """
    Upper or lower triangle of an n x n matrix packed column by column.
    """
    buffer: NDArray[Any]
    n: int
    uplo: Uplo

    @property
    def shape(self) -> tuple[int, int]:
        return (self.n, self.n)

    def stored_mask(self) -> NDArray[np.bool_]:
        return triangle_mask(self.n, self.uplo)

    def offsets(self) -> NDArray[np.intp]:
        i = np.arange(self.n, dtype=np.intp)[:, None]
        j = np.arange(self.n, dtype=np.intp)[None, :]
        if self.uplo is Uplo.UPPER:
            return i + j * (j + 1) // 2
        return i + j * (2 * self.n - j - 1) // 2

    @property
    def extent(self) -> int:
        return self.n * (self.n + 1) // 2

    def check_bounds(self, name: str) -> None:
        check_packed_length(self.buffer, self.n, name)


# ═══════════════════════════════════════════════════════════════════════
# Conversions between logical matrices and flat buffers
# ═══════════════════════════════════════════════════════════════════════


def dense_to_buffer(matrix, ld: int | None = None, dtype=None) -> NDArray[Any]:
    """
    Lay out a 2D array column-major with leading dimension ld.

    Padding rows (ld > rows) are zero.
    """
    matrix = np.asarray(matrix, dtype=dtype)
    rows, cols = matrix.shape
    ld = max(1, rows) if ld is None else ld
    buffer = np.zeros(ld * cols, dtype=matrix.dtype)
    DenseMatrix(buffer, rows, cols, ld).scatter(matrix)
    return buffer


def buffer_to_dense(buffer, rows: int, cols: int, ld: int | None = None) -> NDArray[Any]:
    """Read a column-major buffer back into a (rows, cols) array."""
    buffer = np.asarray(buffer)
    ld = max(1, rows) if ld is None else ld
    return DenseMatrix(buffer, rows, cols, ld).gather()


def pack(matrix, uplo, dtype=None) -> NDArray[Any]:
    """Pack the uplo triangle of a square 2D array."""
    matrix = np.asarray(matrix, dtype=dtype)
    n = matrix.shape[0]
    uplo = Uplo.parse(uplo, 'uplo')
    buffer = np.zeros(n * (n + 1) // 2, dtype=matrix.dtype)
    PackedMatrix(buffer, n, uplo).scatter(matrix)
    return buffer


def unpack(buffer, n: int, uplo) -> NDArray[Any]:
    """Expand a packed triangle; the other triangle is zero."""
    buffer = np.asarray(buffer)
    return PackedMatrix(buffer, n, Uplo.parse(uplo, 'uplo')).gather()


def to_band(matrix, kl: int, ku: int, ld: int | None = None, dtype=None) -> NDArray[Any]:
    """Store the kl/ku band of a 2D array in band layout."""
    matrix = np.asarray(matrix, dtype=dtype)
    rows, cols = matrix.shape
    ld = kl + ku + 1 if ld is None else ld
    buffer = np.zeros(ld * cols, dtype=matrix.dtype)
    BandedMatrix(buffer, rows, cols, kl, ku, ld).scatter(matrix)
    return buffer


def from_band(buffer, rows: int, cols: int, kl: int, ku: int, ld: int | None = None) -> NDArray[Any]:
    """Expand band storage; elements outside the band are zero."""
    buffer = np.asarray(buffer)
    ld = kl + ku + 1 if ld is None else ld
    return BandedMatrix(buffer, rows, cols, kl, ku, ld).gather()
