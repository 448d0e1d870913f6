"""
Level 2 operations: matrix-vector.

Multiply family      y := alpha*op(A)*x + beta*y     gemv gbmv symv sbmv spmv hemv hbmv hpmv
Triangular family    x := op(T)*x  /  op(T)*x = b    trmv tbmv tpmv trsv tbsv tpsv
Rank updates         A := alpha*x*y^T + A (+ mirror) ger geru gerc syr spr syr2 spr2 her hpr her2 hpr2

Every argument is validated before the first buffer access: modifiers
are parsed, dimensions and leading dimensions checked, increments must be
non-zero, buffers must cover their declared extent and the output must
not overlap an input. Only then do the quick returns apply:

    - any zero dimension
    - alpha == 0 and beta == 1 (multiply family)
    - alpha == 0 (rank updates)

beta == 0 never reads y and alpha == 0 never reads A or x.
Symmetric/hermitian operations read only the uplo triangle; rank
updates write only the uplo triangle.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyblas.backends import BackendChoice, get_backend
from pyblas.core.domains import NumericDomain
from pyblas.core.modifiers import Diag, Transpose, Uplo
from pyblas.core.protocols import KernelBackend
from pyblas.core.validation import (
    check_buffer,
    check_dimension,
    check_increment,
    check_leading_dimension,
    check_no_alias,
)
from pyblas.storage.layouts import BandedMatrix, DenseMatrix, PackedMatrix, triangle_mask
from pyblas.storage.strided import StridedVector
from pyblas.storage.structure import (
    apply_transpose,
    mirror_triangle,
    read_mask,
    triangular,
    zero_diagonal_imag,
)


def _vector(
    domain: NumericDomain,
    n: int,
    buffer: ArrayLike,
    inc: int,
    name: str,
    *,
    writable: bool = False,
) -> StridedVector:
    array = check_buffer(buffer, domain, name, writable=writable)
    inc = check_increment(inc, f"inc{name}", allow_zero=False)
    view = StridedVector(array, n, inc)
    view.check_bounds(name)
    return view


def _dense(domain, buffer, rows, cols, ld, name, *, writable=False) -> DenseMatrix:
    ld = check_leading_dimension(ld, rows, f"ld{name}")
    view = DenseMatrix(check_buffer(buffer, domain, name, writable=writable), rows, cols, ld)
    view.check_bounds(name)
    return view


def _banded(domain, buffer, rows, cols, kl, ku, ld, name) -> BandedMatrix:
    ld = check_leading_dimension(ld, kl + ku + 1, f"ld{name}")
    view = BandedMatrix(check_buffer(buffer, domain, name), rows, cols, kl, ku, ld)
    view.check_bounds(name)
    return view


def _symmetric_band(domain, buffer, uplo: Uplo, n, k, ld, name) -> BandedMatrix:
    """k super-diagonals (upper) or k sub-diagonals (lower) of an n x n matrix."""
    if uplo is Uplo.UPPER:
        return _banded(domain, buffer, n, n, 0, k, ld, name)
    return _banded(domain, buffer, n, n, k, 0, ld, name)


def _packed(domain, buffer, n, uplo: Uplo, name, *, writable=False) -> PackedMatrix:
    view = PackedMatrix(check_buffer(buffer, domain, name, writable=writable), n, uplo)
    view.check_bounds(name)
    return view


def _accumulate(
    domain: NumericDomain,
    kernel: KernelBackend,
    alpha,
    op_matrix: Callable[[], NDArray[Any]],
    xv: StridedVector,
    beta,
    yv: StridedVector,
) -> None:
    """y := alpha*M*x + beta*y, with M built only when alpha != 0."""
    if beta == 0:
        result = domain.zeros(yv.n)
    elif beta == 1:
        result = yv.gather()
    else:
        result = beta * yv.gather()
    if alpha != 0:
        result = result + alpha * kernel.matmul(op_matrix(), xv.gather())
    yv.scatter(result)


# ═══════════════════════════════════════════════════════════════════════
# General and banded multiply
# ═══════════════════════════════════════════════════════════════════════


def gemv(
    domain: NumericDomain,
    trans, m: int, n: int,
    alpha, a, lda: int,
    x, incx: int,
    beta, y, incy: int,
    *,
    backend: BackendChoice | KernelBackend = 'cpu',
) -> None:
    """y := alpha*op(A)*x + beta*y for an m x n dense A."""
    trans = Transpose.parse(trans, 'trans')
    m = check_dimension(m, 'm')
    n = check_dimension(n, 'n')
    alpha = domain.scalar(alpha, 'alpha')
    beta = domain.scalar(beta, 'beta')
    lenx, leny = (n, m) if trans is Transpose.NO_TRANS else (m, n)

    av = _dense(domain, a, m, n, lda, 'a')
    xv = _vector(domain, lenx, x, incx, 'x')
    yv = _vector(domain, leny, y, incy, 'y', writable=True)
    check_no_alias(yv.buffer, 'y', a, 'a')
    check_no_alias(yv.buffer, 'y', x, 'x')

    if m == 0 or n == 0 or (alpha == 0 and beta == 1):
        return
    _accumulate(
        domain, get_backend(backend), alpha,
        lambda: apply_transpose(av.gather(), trans, domain),
        xv, beta, yv,
    )


def gbmv(
    domain: NumericDomain,
    trans, m: int, n: int, kl: int, ku: int,
    alpha, a, lda: int,
    x, incx: int,
    beta, y, incy: int,
    *,
    backend: BackendChoice | KernelBackend = 'cpu',
) -> None:
    """y := alpha*op(A)*x + beta*y for an m x n band A with kl/ku diagonals."""
    trans = Transpose.parse(trans, 'trans')
    m = check_dimension(m, 'm')
    n = check_dimension(n, 'n')
    kl = check_dimension(kl, 'kl')
    ku = check_dimension(ku, 'ku')
    alpha = domain.scalar(alpha, 'alpha')
    beta = domain.scalar(beta, 'beta')
    lenx, leny = (n, m) if trans is Transpose.NO_TRANS else (m, n)

    av = _banded(domain, a, m, n, kl, ku, lda, 'a')
    xv = _vector(domain, lenx, x, incx, 'x')
    yv = _vector(domain, leny, y, incy, 'y', writable=True)
    check_no_alias(yv.buffer, 'y', a, 'a')
    check_no_alias(yv.buffer, 'y', x, 'x')

    if m == 0 or n == 0 or (alpha == 0 and beta == 1):
        return
    _accumulate(
        domain, get_backend(backend), alpha,
        lambda: apply_transpose(av.gather(), trans, domain),
        xv, beta, yv,
    )


# ═══════════════════════════════════════════════════════════════════════
# Symmetric / hermitian multiply
# ═══════════════════════════════════════════════════════════════════════


def _structured_mv(domain, view, uplo, n, alpha, x, incx, beta, y, incy, name, backend, hermitian):
    """Shared tail of symv/sbmv/spmv and their hermitian forms."""
    alpha = domain.scalar(alpha, 'alpha')
    beta = domain.scalar(beta, 'beta')
    xv = _vector(domain, n, x, incx, 'x')
    yv = _vector(domain, n, y, incy, 'y', writable=True)
    check_no_alias(yv.buffer, 'y', view.buffer, name)
    check_no_alias(yv.buffer, 'y', x, 'x')

    if n == 0 or (alpha == 0 and beta == 1):
        return
    # Band views only hold one triangle already; dense views need the mask
    _accumulate(
        domain, get_backend(backend), alpha,
        lambda: mirror_triangle(view.gather(triangle_mask(n, uplo)), uplo, domain, hermitian=hermitian),
        xv, beta, yv,
    )


def symv(domain, uplo, n, alpha, a, lda, x, incx, beta, y, incy, *, backend='cpu') -> None:
    """y := alpha*A*x + beta*y, A symmetric, uplo triangle of a dense buffer."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    av = _dense(domain, a, n, n, lda, 'a')
    _structured_mv(domain, av, uplo, n, alpha, x, incx, beta, y, incy, 'a', backend, hermitian=False)


def hemv(domain, uplo, n, alpha, a, lda, x, incx, beta, y, incy, *, backend='cpu') -> None:
    """y := alpha*A*x + beta*y, A hermitian, uplo triangle of a dense buffer."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    av = _dense(domain, a, n, n, lda, 'a')
    _structured_mv(domain, av, uplo, n, alpha, x, incx, beta, y, incy, 'a', backend, hermitian=True)


def sbmv(domain, uplo, n, k, alpha, a, lda, x, incx, beta, y, incy, *, backend='cpu') -> None:
    """y := alpha*A*x + beta*y, A symmetric band with k off-diagonals."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    k = check_dimension(k, 'k')
    av = _symmetric_band(domain, a, uplo, n, k, lda, 'a')
    _structured_mv(domain, av, uplo, n, alpha, x, incx, beta, y, incy, 'a', backend, hermitian=False)


def hbmv(domain, uplo, n, k, alpha, a, lda, x, incx, beta, y, incy, *, backend='cpu') -> None:
    """y := alpha*A*x + beta*y, A hermitian band with k off-diagonals."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    k = check_dimension(k, 'k')
    av = _symmetric_band(domain, a, uplo, n, k, lda, 'a')
    _structured_mv(domain, av, uplo, n, alpha, x, incx, beta, y, incy, 'a', backend, hermitian=True)


def spmv(domain, uplo, n, alpha, ap, x, incx, beta, y, incy, *, backend='cpu') -> None:
    """y := alpha*A*x + beta*y, A symmetric in packed storage."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    av = _packed(domain, ap, n, uplo, 'ap')
    _structured_mv(domain, av, uplo, n, alpha, x, incx, beta, y, incy, 'ap', backend, hermitian=False)


def hpmv(domain, uplo, n, alpha, ap, x, incx, beta, y, incy, *, backend='cpu') -> None:
    """y := alpha*A*x + beta*y, A hermitian in packed storage."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    av = _packed(domain, ap, n, uplo, 'ap')
    _structured_mv(domain, av, uplo, n, alpha, x, incx, beta, y, incy, 'ap', backend, hermitian=True)


# ═══════════════════════════════════════════════════════════════════════
# Triangular multiply and solve
# ═══════════════════════════════════════════════════════════════════════


def _triangular_op(domain, view, uplo, trans, diag, n, x, incx, name, backend, *, solve):
    xv = _vector(domain, n, x, incx, 'x', writable=True)
    check_no_alias(xv.buffer, 'x', view.buffer, name)
    if n == 0:
        return

    t = triangular(view.gather(read_mask(n, uplo, diag)), uplo, diag)
    op_t = apply_transpose(t, trans, domain)
    kernel = get_backend(backend)
    if solve:
        lower = uplo.is_lower != trans.is_transposed
        result = kernel.solve_triangular(op_t, xv.gather(), lower=lower)
    else:
        result = kernel.matmul(op_t, xv.gather())
    xv.scatter(result)


def _parse_triangular(uplo, trans, diag):
    return (
        Uplo.parse(uplo, 'uplo'),
        Transpose.parse(trans, 'trans'),
        Diag.parse(diag, 'diag'),
    )


def trmv(domain, uplo, trans, diag, n, a, lda, x, incx, *, backend='cpu') -> None:
    """x := op(A)*x, A triangular in a dense buffer."""
    uplo, trans, diag = _parse_triangular(uplo, trans, diag)
    n = check_dimension(n, 'n')
    av = _dense(domain, a, n, n, lda, 'a')
    _triangular_op(domain, av, uplo, trans, diag, n, x, incx, 'a', backend, solve=False)


def tbmv(domain, uplo, trans, diag, n, k, a, lda, x, incx, *, backend='cpu') -> None:
    """x := op(A)*x, A triangular band with k off-diagonals."""
    uplo, trans, diag = _parse_triangular(uplo, trans, diag)
    n = check_dimension(n, 'n')
    k = check_dimension(k, 'k')
    av = _symmetric_band(domain, a, uplo, n, k, lda, 'a')
    _triangular_op(domain, av, uplo, trans, diag, n, x, incx, 'a', backend, solve=False)


def tpmv(domain, uplo, trans, diag, n, ap, x, incx, *, backend='cpu') -> None:
    """x := op(A)*x, A triangular in packed storage."""
    uplo, trans, diag = _parse_triangular(uplo, trans, diag)
    n = check_dimension(n, 'n')
    av = _packed(domain, ap, n, uplo, 'ap')
    _triangular_op(domain, av, uplo, trans, diag, n, x, incx, 'ap', backend, solve=False)


def trsv(domain, uplo, trans, diag, n, a, lda, x, incx, *, backend='cpu') -> None:
    """Solve op(A)*x = b in place (x holds b on entry), A triangular."""
    uplo, trans, diag = _parse_triangular(uplo, trans, diag)
    n = check_dimension(n, 'n')
    av = _dense(domain, a, n, n, lda, 'a')
    _triangular_op(domain, av, uplo, trans, diag, n, x, incx, 'a', backend, solve=True)


def tbsv(domain, uplo, trans, diag, n, k, a, lda, x, incx, *, backend='cpu') -> None:
    """Solve op(A)*x = b in place, A triangular band with k off-diagonals."""
    uplo, trans, diag = _parse_triangular(uplo, trans, diag)
    n = check_dimension(n, 'n')
    k = check_dimension(k, 'k')
    av = _symmetric_band(domain, a, uplo, n, k, lda, 'a')
    _triangular_op(domain, av, uplo, trans, diag, n, x, incx, 'a', backend, solve=True)


def tpsv(domain, uplo, trans, diag, n, ap, x, incx, *, backend='cpu') -> None:
    """Solve op(A)*x = b in place, A triangular in packed storage."""
    uplo, trans, diag = _parse_triangular(uplo, trans, diag)
    n = check_dimension(n, 'n')
    av = _packed(domain, ap, n, uplo, 'ap')
    _triangular_op(domain, av, uplo, trans, diag, n, x, incx, 'ap', backend, solve=True)


# ═══════════════════════════════════════════════════════════════════════
# Rank-1 and rank-2 updates
# ═══════════════════════════════════════════════════════════════════════


def _outer(kernel: KernelBackend, u: NDArray[Any], v: NDArray[Any]) -> NDArray[Any]:
    return kernel.matmul(u[:, None], v[None, :])


def _general_rank1(domain, m, n, alpha, x, incx, y, incy, a, lda, backend, *, conjugate):
    m = check_dimension(m, 'm')
    n = check_dimension(n, 'n')
    alpha = domain.scalar(alpha, 'alpha')
    xv = _vector(domain, m, x, incx, 'x')
    yv = _vector(domain, n, y, incy, 'y')
    av = _dense(domain, a, m, n, lda, 'a', writable=True)
    check_no_alias(av.buffer, 'a', x, 'x')
    check_no_alias(av.buffer, 'a', y, 'y')

    if m == 0 or n == 0 or alpha == 0:
        return
    yg = yv.gather()
    if conjugate:
        yg = domain.conj(yg)
    av.scatter(av.gather() + alpha * _outer(get_backend(backend), xv.gather(), yg))


def ger(domain, m, n, alpha, x, incx, y, incy, a, lda, *, backend='cpu') -> None:
    """A := alpha*x*y^T + A (real domains; geru for complex)."""
    _general_rank1(domain, m, n, alpha, x, incx, y, incy, a, lda, backend, conjugate=False)


def geru(domain, m, n, alpha, x, incx, y, incy, a, lda, *, backend='cpu') -> None:
    """A := alpha*x*y^T + A, unconjugated."""
    _general_rank1(domain, m, n, alpha, x, incx, y, incy, a, lda, backend, conjugate=False)


def gerc(domain, m, n, alpha, x, incx, y, incy, a, lda, *, backend='cpu') -> None:
    """A := alpha*x*y^H + A; y is conjugated."""
    _general_rank1(domain, m, n, alpha, x, incx, y, incy, a, lda, backend, conjugate=True)


def _triangle_update(domain, view, uplo: Uplo, n: int, update: NDArray[Any], *, hermitian: bool) -> None:
    """Add update to the uplo triangle only."""
    mask = triangle_mask(n, uplo)
    result = view.gather(mask) + update
    if hermitian:
        zero_diagonal_imag(result, domain)
    view.scatter(result, mask)


def _symmetric_rank1(domain, view, uplo, n, alpha, x, incx, name, backend, *, hermitian):
    xv = _vector(domain, n, x, incx, 'x')
    check_no_alias(view.buffer, name, x, 'x')
    if n == 0 or alpha == 0:
        return
    xg = xv.gather()
    update = alpha * _outer(get_backend(backend), xg, domain.conj(xg) if hermitian else xg)
    _triangle_update(domain, view, uplo, n, update, hermitian=hermitian)


def syr(domain, uplo, n, alpha, x, incx, a, lda, *, backend='cpu') -> None:
    """A := alpha*x*x^T + A, uplo triangle of a dense symmetric A."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    alpha = domain.scalar(alpha, 'alpha')
    av = _dense(domain, a, n, n, lda, 'a', writable=True)
    _symmetric_rank1(domain, av, uplo, n, alpha, x, incx, 'a', backend, hermitian=False)


def her(domain, uplo, n, alpha, x, incx, a, lda, *, backend='cpu') -> None:
    """A := alpha*x*x^H + A with real alpha, uplo triangle of a dense hermitian A."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    alpha = domain.real_scalar(alpha, 'alpha')
    av = _dense(domain, a, n, n, lda, 'a', writable=True)
    _symmetric_rank1(domain, av, uplo, n, alpha, x, incx, 'a', backend, hermitian=True)


def spr(domain, uplo, n, alpha, x, incx, ap, *, backend='cpu') -> None:
    """A := alpha*x*x^T + A, A symmetric in packed storage."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    alpha = domain.scalar(alpha, 'alpha')
    av = _packed(domain, ap, n, uplo, 'ap', writable=True)
    _symmetric_rank1(domain, av, uplo, n, alpha, x, incx, 'ap', backend, hermitian=False)


def hpr(domain, uplo, n, alpha, x, incx, ap, *, backend='cpu') -> None:
    """A := alpha*x*x^H + A with real alpha, A hermitian in packed storage."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    alpha = domain.real_scalar(alpha, 'alpha')
    av = _packed(domain, ap, n, uplo, 'ap', writable=True)
    _symmetric_rank1(domain, av, uplo, n, alpha, x, incx, 'ap', backend, hermitian=True)


def _symmetric_rank2(domain, view, uplo, n, alpha, x, incx, y, incy, name, backend, *, hermitian):
    xv = _vector(domain, n, x, incx, 'x')
    yv = _vector(domain, n, y, incy, 'y')
    check_no_alias(view.buffer, name, x, 'x')
    check_no_alias(view.buffer, name, y, 'y')
    if n == 0 or alpha == 0:
        return
    kernel = get_backend(backend)
    xg, yg = xv.gather(), yv.gather()
    if hermitian:
        update = (alpha * _outer(kernel, xg, domain.conj(yg))
                  + domain.conj(alpha) * _outer(kernel, yg, domain.conj(xg)))
    else:
        update = alpha * (_outer(kernel, xg, yg) + _outer(kernel, yg, xg))
    _triangle_update(domain, view, uplo, n, update, hermitian=hermitian)


def syr2(domain, uplo, n, alpha, x, incx, y, incy, a, lda, *, backend='cpu') -> None:
    """A := alpha*x*y^T + alpha*y*x^T + A, uplo triangle of a dense symmetric A."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    alpha = domain.scalar(alpha, 'alpha')
    av = _dense(domain, a, n, n, lda, 'a', writable=True)
    _symmetric_rank2(domain, av, uplo, n, alpha, x, incx, y, incy, 'a', backend, hermitian=False)


def her2(domain, uplo, n, alpha, x, incx, y, incy, a, lda, *, backend='cpu') -> None:
    """A := alpha*x*y^H + conj(alpha)*y*x^H + A, dense hermitian A."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    alpha = domain.scalar(alpha, 'alpha')
    av = _dense(domain, a, n, n, lda, 'a', writable=True)
    _symmetric_rank2(domain, av, uplo, n, alpha, x, incx, y, incy, 'a', backend, hermitian=True)


def spr2(domain, uplo, n, alpha, x, incx, y, incy, ap, *, backend='cpu') -> None:
    """A := alpha*x*y^T + alpha*y*x^T + A, A symmetric in packed storage."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    alpha = domain.scalar(alpha, 'alpha')
    av = _packed(domain, ap, n, uplo, 'ap', writable=True)
    _symmetric_rank2(domain, av, uplo, n, alpha, x, incx, y, incy, 'ap', backend, hermitian=False)


def hpr2(domain, uplo, n, alpha, x, incx, y, incy, ap, *, backend='cpu') -> None:
    """A := alpha*x*y^H + conj(alpha)*y*x^H + A, A hermitian in packed storage."""
    uplo = Uplo.parse(uplo, 'uplo')
    n = check_dimension(n, 'n')
    alpha = domain.scalar(alpha, 'alpha')
    av = _packed(domain, ap, n, uplo, 'ap', writable=True)
    _symmetric_rank2(domain, av, uplo, n, alpha, x, incx, y, incy, 'ap', backend, hermitian=True)
