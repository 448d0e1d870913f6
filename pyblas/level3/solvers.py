"""
Level 3 operations: matrix-matrix.

    gemm          C := alpha*op(A)*op(B) + beta*C
    symm / hemm   C := alpha*A*B + beta*C  (side=L)   or  alpha*B*A + beta*C  (side=R)
    syrk / herk   C := alpha*op(A)*op(A)' + beta*C    uplo triangle of C only
    syr2k/her2k   C := alpha*op(A)*op(B)' + alpha'*op(B)*op(A)' + beta*C
    trmm          B := alpha*op(A)*B        or  alpha*B*op(A)
    trsm          op(A)*X = alpha*B         or  X*op(A) = alpha*B   (X overwrites B)

Shapes implied by the transpose and side modifiers are validated against
every leading dimension and buffer length before any access. Quick
returns (nothing read or written): m == 0 or n == 0, and for the
multiply/rank-k families (alpha == 0 or k == 0) and beta == 1.
beta == 0 never reads C; alpha == 0 never reads A or B.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyblas.backends import BackendChoice, get_backend
from pyblas.core.domains import NumericDomain
from pyblas.core.exceptions import ModifierError
from pyblas.core.modifiers import Diag, Side, Transpose, Uplo
from pyblas.core.protocols import KernelBackend
from pyblas.core.validation import (
    check_buffer,
    check_dimension,
    check_leading_dimension,
    check_no_alias,
)
from pyblas.storage.layouts import DenseMatrix, triangle_mask
from pyblas.storage.structure import (
    apply_transpose,
    mirror_triangle,
    read_mask,
    triangular,
    zero_diagonal_imag,
)


def _dense(domain, buffer, rows, cols, ld, name, *, writable=False) -> DenseMatrix:
    ld = check_leading_dimension(ld, rows, f"ld{name}")
    view = DenseMatrix(check_buffer(buffer, domain, name, writable=writable), rows, cols, ld)
    view.check_bounds(name)
    return view


def _scaled(domain: NumericDomain, beta, cv: DenseMatrix, mask: NDArray[np.bool_] | None = None):
    """beta*C, without reading C when beta == 0."""
    if beta == 0:
        return domain.zeros(cv.shape)
    if beta == 1:
        return cv.gather(mask)
    return beta * cv.gather(mask)


# ═══════════════════════════════════════════════════════════════════════
# General and symmetric/hermitian multiply
# ═══════════════════════════════════════════════════════════════════════


def gemm(
    domain: NumericDomain,
    transa, transb, m: int, n: int, k: int,
    alpha, a, lda: int,
    b, ldb: int,
    beta, c, ldc: int,
    *,
    backend: BackendChoice | KernelBackend = 'cpu',
) -> None:
    """C := alpha*op(A)*op(B) + beta*C with op(A) m x k and op(B) k x n."""
    transa = Transpose.parse(transa, 'transa')
    transb = Transpose.parse(transb, 'transb')
    m = check_dimension(m, 'm')
    n = check_dimension(n, 'n')
    k = check_dimension(k, 'k')
    alpha = domain.scalar(alpha, 'alpha')
    beta = domain.scalar(beta, 'beta')

    rows_a, cols_a = (m, k) if transa is Transpose.NO_TRANS else (k, m)
    rows_b, cols_b = (k, n) if transb is Transpose.NO_TRANS else (n, k)
    av = _dense(domain, a, rows_a, cols_a, lda, 'a')
    bv = _dense(domain, b, rows_b, cols_b, ldb, 'b')
    cv = _dense(domain, c, m, n, ldc, 'c', writable=True)
    check_no_alias(cv.buffer, 'c', a, 'a')
    check_no_alias(cv.buffer, 'c', b, 'b')

    if m == 0 or n == 0 or ((alpha == 0 or k == 0) and beta == 1):
        return
    result = _scaled(domain, beta, cv)
    if alpha != 0 and k > 0:
        product = get_backend(backend).matmul(
            apply_transpose(av.gather(), transa, domain),
            apply_transpose(bv.gather(), transb, domain),
        )
        result = result + alpha * product
    cv.scatter(result)


def _structured_mm(domain, side, uplo, m, n, alpha, a, lda, b, ldb, beta, c, ldc, backend, *, hermitian):
    side = Side.parse(side, 'side')
    uplo = Uplo.parse(uplo, 'uplo')
    m = check_dimension(m, 'm')
    n = check_dimension(n, 'n')
    alpha = domain.scalar(alpha, 'alpha')
    beta = domain.scalar(beta, 'beta')

    ka = m if side.is_left else n
    av = _dense(domain, a, ka, ka, lda, 'a')
    bv = _dense(domain, b, m, n, ldb, 'b')
    cv = _dense(domain, c, m, n, ldc, 'c', writable=True)
    check_no_alias(cv.buffer, 'c', a, 'a')
    check_no_alias(cv.buffer, 'c', b, 'b')

    if m == 0 or n == 0 or (alpha == 0 and beta == 1):
        return
    result = _scaled(domain, beta, cv)
    if alpha != 0:
        kernel = get_backend(backend)
        full = mirror_triangle(av.gather(triangle_mask(ka, uplo)), uplo, domain, hermitian=hermitian)
        if side.is_left:
            product = kernel.matmul(full, bv.gather())
        else:
            product = kernel.matmul(bv.gather(), full)
        result = result + alpha * product
    cv.scatter(result)


def symm(domain, side, uplo, m, n, alpha, a, lda, b, ldb, beta, c, ldc, *, backend='cpu') -> None:
    """C := alpha*A*B + beta*C (side L) or alpha*B*A + beta*C (side R), A symmetric."""
    _structured_mm(domain, side, uplo, m, n, alpha, a, lda, b, ldb, beta, c, ldc, backend, hermitian=False)


def hemm(domain, side, uplo, m, n, alpha, a, lda, b, ldb, beta, c, ldc, *, backend='cpu') -> None:
    """C := alpha*A*B + beta*C (side L) or alpha*B*A + beta*C (side R), A hermitian."""
    _structured_mm(domain, side, uplo, m, n, alpha, a, lda, b, ldb, beta, c, ldc, backend, hermitian=True)


# ═══════════════════════════════════════════════════════════════════════
# Rank-k and rank-2k updates
# ═══════════════════════════════════════════════════════════════════════


def _rank_k_trans(domain: NumericDomain, trans, operation: str, *, hermitian: bool) -> Transpose:
    """
    Parse trans for syrk/syr2k/herk/her2k.

    Complex symmetric updates take N or T; hermitian updates take N or C.
    Real domains accept all three, C meaning T.
    """
    trans = Transpose.parse(trans, 'trans')
    if domain.is_complex:
        rejected = Transpose.TRANS if hermitian else Transpose.CONJ_TRANS
        if trans is rejected:
            allowed = "'N' or 'C'" if hermitian else "'N' or 'T'"
            raise ModifierError(
                f"trans: {operation} in domain {domain.name} accepts {allowed}, got {trans.code!r}",
                name='trans',
                actual=trans.code,
                expected=allowed,
            )
    return trans


def _rank_k(domain, uplo, trans, n, k, alpha, a, lda, b, ldb, beta, c, ldc, backend, *, hermitian, operation):
    """Shared body of syrk/herk (b is None) and syr2k/her2k."""
    uplo = Uplo.parse(uplo, 'uplo')
    trans = _rank_k_trans(domain, trans, operation, hermitian=hermitian)
    n = check_dimension(n, 'n')
    k = check_dimension(k, 'k')
    rank2 = b is not None
    if hermitian and not rank2:
        alpha = domain.real_scalar(alpha, 'alpha')
    else:
        alpha = domain.scalar(alpha, 'alpha')
    beta = domain.real_scalar(beta, 'beta') if hermitian else domain.scalar(beta, 'beta')

    rows, cols = (n, k) if trans is Transpose.NO_TRANS else (k, n)
    av = _dense(domain, a, rows, cols, lda, 'a')
    bv = _dense(domain, b, rows, cols, ldb, 'b') if rank2 else None
    cv = _dense(domain, c, n, n, ldc, 'c', writable=True)
    check_no_alias(cv.buffer, 'c', a, 'a')
    if rank2:
        check_no_alias(cv.buffer, 'c', b, 'b')

    if n == 0 or ((alpha == 0 or k == 0) and beta == 1):
        return

    mask = triangle_mask(n, uplo)
    result = _scaled(domain, beta, cv, mask)
    if alpha != 0 and k > 0:
        kernel = get_backend(backend)
        # Work in the N orientation: P is n x k
        pa = av.gather()
        pb = bv.gather() if rank2 else pa
        if trans is not Transpose.NO_TRANS:
            pa = apply_transpose(pa, trans, domain)
            pb = apply_transpose(pb, trans, domain)
        if hermitian:
            adj_a, adj_b = domain.conj(pa).T, domain.conj(pb).T
        else:
            adj_a, adj_b = pa.T, pb.T
        if rank2:
            other = domain.conj(alpha) if hermitian else alpha
            update = alpha * kernel.matmul(pa, adj_b) + other * kernel.matmul(pb, adj_a)
        else:
            update = alpha * kernel.matmul(pa, adj_a)
        result = result + update
    if hermitian:
        zero_diagonal_imag(result, domain)
    cv.scatter(result, mask)


def syrk(domain, uplo, trans, n, k, alpha, a, lda, beta, c, ldc, *, backend='cpu') -> None:
    """C := alpha*A*A^T + beta*C (trans N) or alpha*A^T*A + beta*C (trans T)."""
    _rank_k(domain, uplo, trans, n, k, alpha, a, lda, None, None, beta, c, ldc, backend,
            hermitian=False, operation='syrk')


def herk(domain, uplo, trans, n, k, alpha, a, lda, beta, c, ldc, *, backend='cpu') -> None:
    """C := alpha*A*A^H + beta*C (trans N) or alpha*A^H*A + beta*C (trans C); real alpha, beta."""
    _rank_k(domain, uplo, trans, n, k, alpha, a, lda, None, None, beta, c, ldc, backend,
            hermitian=True, operation='herk')


def syr2k(domain, uplo, trans, n, k, alpha, a, lda, b, ldb, beta, c, ldc, *, backend='cpu') -> None:
    """C := alpha*A*B^T + alpha*B*A^T + beta*C (trans N), or the A^T*B form (trans T)."""
    _rank_k(domain, uplo, trans, n, k, alpha, a, lda, b, ldb, beta, c, ldc, backend,
            hermitian=False, operation='syr2k')


def her2k(domain, uplo, trans, n, k, alpha, a, lda, b, ldb, beta, c, ldc, *, backend='cpu') -> None:
    """C := alpha*A*B^H + conj(alpha)*B*A^H + beta*C (trans N), or the A^H*B form (trans C); real beta."""
    _rank_k(domain, uplo, trans, n, k, alpha, a, lda, b, ldb, beta, c, ldc, backend,
            hermitian=True, operation='her2k')


# ═══════════════════════════════════════════════════════════════════════
# Triangular multiply and solve
# ═══════════════════════════════════════════════════════════════════════


def _triangular_mm(domain, side, uplo, transa, diag, m, n, alpha, a, lda, b, ldb, backend, *, solve):
    side = Side.parse(side, 'side')
    uplo = Uplo.parse(uplo, 'uplo')
    transa = Transpose.parse(transa, 'transa')
    diag = Diag.parse(diag, 'diag')
    m = check_dimension(m, 'm')
    n = check_dimension(n, 'n')
    alpha = domain.scalar(alpha, 'alpha')

    ka = m if side.is_left else n
    av = _dense(domain, a, ka, ka, lda, 'a')
    bv = _dense(domain, b, m, n, ldb, 'b', writable=True)
    check_no_alias(bv.buffer, 'b', a, 'a')

    if m == 0 or n == 0:
        return
    if alpha == 0:
        bv.scatter(domain.zeros(bv.shape))
        return

    kernel = get_backend(backend)
    op_t = apply_transpose(triangular(av.gather(read_mask(ka, uplo, diag)), uplo, diag), transa, domain)
    rhs = alpha * bv.gather()
    if not solve:
        result = kernel.matmul(op_t, rhs) if side.is_left else kernel.matmul(rhs, op_t)
    else:
        lower = uplo.is_lower != transa.is_transposed
        if side.is_left:
            result = kernel.solve_triangular(op_t, rhs, lower=lower)
        else:
            # X*M = R  <=>  M^T * X^T = R^T
            result = kernel.solve_triangular(op_t.T, rhs.T, lower=not lower).T
    bv.scatter(result)


def trmm(domain, side, uplo, transa, diag, m, n, alpha, a, lda, b, ldb, *, backend='cpu') -> None:
    """B := alpha*op(A)*B (side L) or alpha*B*op(A) (side R), A triangular."""
    _triangular_mm(domain, side, uplo, transa, diag, m, n, alpha, a, lda, b, ldb, backend, solve=False)


def trsm(domain, side, uplo, transa, diag, m, n, alpha, a, lda, b, ldb, *, backend='cpu') -> None:
    """Solve op(A)*X = alpha*B (side L) or X*op(A) = alpha*B (side R); X overwrites B."""
    _triangular_mm(domain, side, uplo, transa, diag, m, n, alpha, a, lda, b, ldb, backend, solve=True)
