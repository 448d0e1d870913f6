"""
Level 1 operations: vector-vector.

Every function takes the numeric domain first, then the classic
argument order (n, scalars, x, incx, y, incy). Mutating operations
write into the caller's buffers and return None; reductions return a
numpy scalar.

Real-only operations (rotm, rotmg, dot) reject complex domains first.
Otherwise n <= 0 is a no-op, checked before any other argument is
looked at. Reductions then return their identity: 0 for
dot/nrm2/asum, sb for sdsdot, and -1 for iamax.

Increments: read-only operands (dot, nrm2, asum, iamax, the source of
copy/axpy) accept inc == 0 and read one slot n times. Written operands
reject inc == 0.

x and y may share a buffer (same increment) in swap, copy and axpy.
rot and rotm reject it with AliasingError.
"""

from __future__ import annotations

from numbers import Integral
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyblas.core.compute.precision import scaled_norm
from pyblas.core.domains import REAL32, REAL64, NumericDomain
from pyblas.core.exceptions import UnsupportedOperationError, ValidationError
from pyblas.core.validation import check_buffer, check_increment, check_no_alias
from pyblas.level1.rotation import (
    GivensRotation,
    ModifiedGivens,
    givens,
    modified_givens,
)
from pyblas.storage.strided import StridedVector


def _is_empty(n: int) -> bool:
    """Validate n as an integer and report whether the call is a no-op."""
    if isinstance(n, bool) or not isinstance(n, Integral):
        raise ValidationError(
            f"n: expected an integer, got {type(n).__name__}",
            name='n',
            actual=n,
            expected='int',
        )
    return n <= 0


def _vector(
    domain: NumericDomain,
    n: int,
    buffer: ArrayLike,
    inc: int,
    name: str,
    *,
    writable: bool,
) -> StridedVector:
    """Validate one strided operand and return its view."""
    array = check_buffer(buffer, domain, name, writable=writable)
    inc = check_increment(inc, f"inc{name}", allow_zero=not writable)
    view = StridedVector(array, n, inc)
    view.check_bounds(name)
    return view


def _require_real(domain: NumericDomain, operation: str) -> None:
    if domain.is_complex:
        raise UnsupportedOperationError(
            f"{operation} is only defined for real domains, got {domain.name}",
            operation=operation,
            domain=domain.name,
        )


def _pair(domain, n, x, incx, y, incy, *, x_writable: bool, self_alias: bool = True):
    """
    Validate an (x, y) pair where y is always written.

    With self_alias, x and y may be the same buffer with the same
    increment. Rotations pass self_alias=False: both outputs are computed
    from both inputs, so one buffer cannot hold them.
    """
    xv = _vector(domain, n, x, incx, 'x', writable=x_writable)
    yv = _vector(domain, n, y, incy, 'y', writable=True)
    check_no_alias(
        yv.buffer, 'y', x, 'x',
        allow_identical=self_alias and xv.inc == yv.inc,
    )
    return xv, yv


# ═══════════════════════════════════════════════════════════════════════
# Rotations
# ═══════════════════════════════════════════════════════════════════════


def rotg(domain: NumericDomain, a, b) -> GivensRotation:
    """
    Set up a Givens rotation.

    Returns:
        GivensRotation(c, s, r, z); applying it to (a, b) gives (r, 0).
        For real domains c >= 0 whenever |a| > |b|.
    """
    return givens(domain, a, b)


def rotmg(domain: NumericDomain, d1, d2, x1, y1) -> tuple[Any, Any, Any, ModifiedGivens]:
    """
    Set up a modified Givens rotation (real domains only).

    Returns:
        (d1', d2', x1', ModifiedGivens)
    """
    _require_real(domain, 'rotmg')
    return modified_givens(domain, d1, d2, x1, y1)


def rot(domain: NumericDomain, n: int, x, incx: int, y, incy: int, c, s) -> None:
    """
    Apply a plane rotation in place.

        x := c*x + s*y
        y := c*y - conj(s)*x

    c is real; s is a domain scalar (real for the csrot/zdrot forms).
    """
    if _is_empty(n):
        return
    c = domain.real_scalar(c, 'c')
    s = domain.scalar(s, 's')
    xv, yv = _pair(domain, n, x, incx, y, incy, x_writable=True, self_alias=False)

    xg, yg = xv.gather(), yv.gather()
    xv.scatter(c * xg + s * yg)
    yv.scatter(c * yg - domain.conj(s) * xg)


def rotm(domain: NumericDomain, n: int, x, incx: int, y, incy: int, param) -> None:
    """
    Apply a modified Givens transform in place (real domains only).

    Args:
        param: ModifiedGivens, or the classic 5-element parameter array
    """
    _require_real(domain, 'rotm')
    if _is_empty(n):
        return
    if not isinstance(param, ModifiedGivens):
        param = ModifiedGivens.from_array(np.asarray(param, dtype=domain.dtype))
    xv, yv = _pair(domain, n, x, incx, y, incy, x_writable=True, self_alias=False)

    if param.flag == -2:
        return

    t = domain.dtype.type
    xg, yg = xv.gather(), yv.gather()
    if param.flag == 0:
        xv.scatter(xg + t(param.h12) * yg)
        yv.scatter(t(param.h21) * xg + yg)
    elif param.flag == 1:
        xv.scatter(t(param.h11) * xg + yg)
        yv.scatter(-xg + t(param.h22) * yg)
    else:
        xv.scatter(t(param.h11) * xg + t(param.h12) * yg)
        yv.scatter(t(param.h21) * xg + t(param.h22) * yg)


# ═══════════════════════════════════════════════════════════════════════
# Elementwise updates
# ═══════════════════════════════════════════════════════════════════════


def swap(domain: NumericDomain, n: int, x, incx: int, y, incy: int) -> None:
    """Exchange x and y. Swapping a vector with itself is a no-op."""
    if _is_empty(n):
        return
    xv, yv = _pair(domain, n, x, incx, y, incy, x_writable=True)
    xg, yg = xv.gather(), yv.gather()
    xv.scatter(yg)
    yv.scatter(xg)


def scal(domain: NumericDomain, n: int, alpha, x, incx: int) -> None:
    """
    x := alpha*x

    alpha == 0 stores zeros without reading x.
    """
    if _is_empty(n):
        return
    alpha = domain.scalar(alpha, 'alpha')
    xv = _vector(domain, n, x, incx, 'x', writable=True)
    _scale(domain, xv, alpha)


def rscal(domain: NumericDomain, n: int, alpha, x, incx: int) -> None:
    """x := alpha*x with a real alpha (csscal/zdscal)."""
    if _is_empty(n):
        return
    alpha = domain.real_scalar(alpha, 'alpha')
    xv = _vector(domain, n, x, incx, 'x', writable=True)
    _scale(domain, xv, alpha)


def _scale(domain: NumericDomain, xv: StridedVector, alpha) -> None:
    if alpha == 0:
        xv.scatter(domain.zeros(xv.n))
    elif alpha != 1:
        xv.scatter(alpha * xv.gather())


def copy(domain: NumericDomain, n: int, x, incx: int, y, incy: int) -> None:
    """y := x. Copying a vector onto itself is a no-op."""
    if _is_empty(n):
        return
    xv, yv = _pair(domain, n, x, incx, y, incy, x_writable=False)
    yv.scatter(xv.gather())


def axpy(domain: NumericDomain, n: int, alpha, x, incx: int, y, incy: int) -> None:
    """
    y := alpha*x + y

    alpha == 0 returns without reading x or y.
    """
    if _is_empty(n):
        return
    alpha = domain.scalar(alpha, 'alpha')
    xv, yv = _pair(domain, n, x, incx, y, incy, x_writable=False)
    if alpha == 0:
        return
    yv.scatter(alpha * xv.gather() + yv.gather())


# ═══════════════════════════════════════════════════════════════════════
# Reductions
# ═══════════════════════════════════════════════════════════════════════


def _read_pair(domain, n, x, incx, y, incy) -> tuple[NDArray[Any], NDArray[Any]]:
    xv = _vector(domain, n, x, incx, 'x', writable=False)
    yv = _vector(domain, n, y, incy, 'y', writable=False)
    return xv.gather(), yv.gather()


def dot(domain: NumericDomain, n: int, x, incx: int, y, incy: int):
    """x^T y (real domains; complex domains use dotu/dotc)."""
    _require_real(domain, 'dot')
    if _is_empty(n):
        return domain.dtype.type(0)
    xg, yg = _read_pair(domain, n, x, incx, y, incy)
    return domain.dtype.type(np.dot(xg, yg))


def dotu(domain: NumericDomain, n: int, x, incx: int, y, incy: int):
    """Unconjugated x^T y."""
    if _is_empty(n):
        return domain.dtype.type(0)
    xg, yg = _read_pair(domain, n, x, incx, y, incy)
    return domain.dtype.type(np.dot(xg, yg))


def dotc(domain: NumericDomain, n: int, x, incx: int, y, incy: int):
    """Conjugated x^H y; only the first vector is conjugated."""
    if _is_empty(n):
        return domain.dtype.type(0)
    xg, yg = _read_pair(domain, n, x, incx, y, incy)
    return domain.dtype.type(np.vdot(xg, yg))


def sdsdot(n: int, sb, x, incx: int, y, incy: int) -> np.float32:
    """
    sb + x^T y for float32 vectors, accumulated in float64.

    The sum is rounded to float32 once. n <= 0 returns sb.
    """
    sb = REAL32.scalar(sb, 'sb')
    if _is_empty(n):
        return sb
    xg, yg = _read_pair(REAL32, n, x, incx, y, incy)
    total = np.float64(sb) + np.dot(xg.astype(np.float64), yg.astype(np.float64))
    return np.float32(total)


def dsdot(n: int, x, incx: int, y, incy: int) -> np.float64:
    """x^T y for float32 vectors, accumulated and returned in float64."""
    if _is_empty(n):
        return np.float64(0)
    xg, yg = _read_pair(REAL32, n, x, incx, y, incy)
    return REAL64.dtype.type(np.dot(xg.astype(np.float64), yg.astype(np.float64)))


def nrm2(domain: NumericDomain, n: int, x, incx: int):
    """
    Euclidean norm, computed with scaling so that it neither overflows
    nor underflows when the plain sum of squares would.

    Returns a scalar of the domain's real dtype (scnrm2/dznrm2 for
    complex domains).
    """
    if _is_empty(n):
        return domain.real_dtype.type(0)
    xv = _vector(domain, n, x, incx, 'x', writable=False)
    return scaled_norm(xv.gather(), domain.real_dtype)


def asum(domain: NumericDomain, n: int, x, incx: int):
    """
    Sum of magnitudes, using |re| + |im| for complex elements.

    Returns a scalar of the domain's real dtype.
    """
    if _is_empty(n):
        return domain.real_dtype.type(0)
    xv = _vector(domain, n, x, incx, 'x', writable=False)
    return domain.real_dtype.type(np.sum(domain.abs1(xv.gather()), dtype=domain.real_dtype))


def iamax(domain: NumericDomain, n: int, x, incx: int) -> int:
    """
    0-based logical index of the first element of largest magnitude.

    Magnitude is |re| + |im| for complex elements. NaN elements never
    win. n <= 0 returns -1.
    """
    if _is_empty(n):
        return -1
    xv = _vector(domain, n, x, incx, 'x', writable=False)
    magnitudes = domain.abs1(xv.gather())
    magnitudes = np.where(np.isnan(magnitudes), -np.inf, magnitudes)
    return int(np.argmax(magnitudes))
