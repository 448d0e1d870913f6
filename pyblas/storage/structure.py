"""
Structured-matrix helpers shared by Level 2 and Level 3.

These turn a gathered triangle into the logical matrix an operation
acts on: the mirrored symmetric/hermitian matrix, the triangular matrix
with an implicit unit diagonal, and op(A) for a transpose modifier.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyblas.core.domains import NumericDomain
from pyblas.core.modifiers import Diag, Transpose, Uplo
from pyblas.storage.layouts import triangle_mask


def apply_transpose(a: NDArray[Any], trans: Transpose, domain: NumericDomain) -> NDArray[Any]:
    """op(A): A, A^T or A^H (A^H is A^T in real domains)."""
    if trans is Transpose.NO_TRANS:
        return a
    if trans is Transpose.TRANS:
        return a.T
    return domain.conj(a).T


def read_mask(n: int, uplo: Uplo, diag: Diag = Diag.NON_UNIT) -> NDArray[np.bool_]:
    """Elements a triangular operation may read: the triangle, minus the diagonal when unit."""
    return triangle_mask(n, uplo, include_diagonal=not diag.is_unit)


def mirror_triangle(
    tri: NDArray[Any],
    uplo: Uplo,
    domain: NumericDomain,
    *,
    hermitian: bool,
) -> NDArray[Any]:
    """
    Full symmetric or hermitian matrix from its referenced triangle.

    Entries outside the triangle of tri are ignored. For hermitian
    matrices the mirror is conjugated and only the real part of the
    diagonal is used.
    """
    n = tri.shape[0]
    mask = triangle_mask(n, uplo)
    mirror = domain.conj(tri).T if hermitian else tri.T
    full = np.where(mask, tri, mirror)
    if hermitian and domain.is_complex:
        idx = np.arange(n)
        full[idx, idx] = full[idx, idx].real
    return full


def triangular(tri: NDArray[Any], uplo: Uplo, diag: Diag) -> NDArray[Any]:
    """
    Triangular matrix from a gathered triangle.

    With a unit diagonal the stored diagonal is replaced by ones.
    """
    n = tri.shape[0]
    out = np.where(triangle_mask(n, uplo), tri, 0).astype(tri.dtype)
    if diag.is_unit:
        np.fill_diagonal(out, 1)
    return out


def zero_diagonal_imag(a: NDArray[Any], domain: NumericDomain) -> NDArray[Any]:
    """Drop the imaginary part of the diagonal (hermitian rank updates)."""
    if domain.is_complex:
        n = min(a.shape)
        idx = np.arange(n)
        a[idx, idx] = a[idx, idx].real
    return a
