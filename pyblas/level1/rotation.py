"""
Givens and modified Givens rotation setup.

rotg(a, b) finds (c, s) such that

    [  c        s ] [a]   [r]
    [ -conj(s)  c ] [b] = [0]

with c real. rotmg(d1, d2, x1, y1) finds the modified-Givens matrix H
that zeros the second component of H @ (x1, y1) while keeping the
scaled rotation in the factored form (d1, d2). The classic flag encodes
which entries of H are implied:

    flag = -2   H = [[1, 0], [0, 1]]
    flag = -1   H = [[h11, h12], [h21, h22]]
    flag =  0   H = [[1, h12], [h21, 1]]
    flag =  1   H = [[h11, 1], [-1, h22]]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyblas.core.compute.precision import ROTMG_GAM, ROTMG_GAMSQ, ROTMG_RGAMSQ
from pyblas.core.domains import NumericDomain
from pyblas.core.exceptions import ValidationError

VALID_FLAGS = (-2.0, -1.0, 0.0, 1.0)


@dataclass(frozen=True)
class GivensRotation:
    """
    Result of rotg.

    Attributes:
        c: Cosine (always real)
        s: Sine (domain scalar)
        r: Value left in the first component
        z: Reconstruction value of the classic real drotg; None for
            complex domains
    """
    c: Any
    s: Any
    r: Any
    z: Any = None

    def apply_to(self, x, y) -> tuple[Any, Any]:
        """Rotate a single pair (x, y)."""
        return (
            self.c * x + self.s * y,
            self.c * y - np.conj(self.s) * x,
        )


@dataclass(frozen=True)
class ModifiedGivens:
    """
    Modified Givens parameters.

    The record always holds the complete matrix (implied entries filled
    in), so the flag and the four entries fully determine the transform.
    as_array()/from_array() round-trip the classic 5-element parameter
    array [flag, h11, h21, h12, h22] exactly.
    """
    flag: Any
    h11: Any
    h21: Any
    h12: Any
    h22: Any

    @property
    def matrix(self) -> NDArray[Any]:
        """H as a 2x2 array."""
        return np.array([[self.h11, self.h12], [self.h21, self.h22]])

    def as_array(self, dtype=None) -> NDArray[Any]:
        """Classic parameter array [flag, h11, h21, h12, h22]."""
        return np.array([self.flag, self.h11, self.h21, self.h12, self.h22], dtype=dtype)

    @classmethod
    def from_array(cls, param) -> ModifiedGivens:
        """
        Build from a classic parameter array.

        Entries implied by the flag are taken from the flag, not the
        array, exactly as rotm reads them.

        Raises:
            ValidationError: If the array is not 5 long or the flag is
                not one of -2, -1, 0, 1
        """
        param = np.asarray(param)
        if param.shape != (5,):
            raise ValidationError(
                f"param: expected 5 elements, got shape {param.shape}",
                name='param',
                actual=param.shape,
                expected='(5,)',
            )
        flag = param[0]
        one, zero = param.dtype.type(1), param.dtype.type(0)
        if flag == -2:
            return cls(flag, one, zero, zero, one)
        if flag == -1:
            return cls(flag, param[1], param[2], param[3], param[4])
        if flag == 0:
            return cls(flag, one, param[2], param[3], one)
        if flag == 1:
            return cls(flag, param[1], -one, one, param[4])
        raise ValidationError(
            f"param: invalid flag {flag!r}, expected one of {VALID_FLAGS}",
            name='param',
            actual=flag,
            expected=str(VALID_FLAGS),
        )


def givens(domain: NumericDomain, a, b) -> GivensRotation:
    """Construct the Givens rotation zeroing b against a."""
    a = domain.scalar(a, 'a')
    b = domain.scalar(b, 'b')
    if domain.is_complex:
        return _complex_givens(domain, a, b)
    return _real_givens(domain, a, b)


def _real_givens(domain: NumericDomain, a, b) -> GivensRotation:
    t = domain.dtype.type
    abs_a, abs_b = abs(a), abs(b)
    roe = a if abs_a > abs_b else b
    scale = abs_a + abs_b
    if scale == 0:
        return GivensRotation(c=t(1), s=t(0), r=t(0), z=t(0))

    r = scale * np.sqrt((a / scale) ** 2 + (b / scale) ** 2)
    if roe < 0:
        r = -r
    c = a / r
    s = b / r
    z = t(1)
    if abs_a > abs_b:
        z = s
    if abs_b >= abs_a and c != 0:
        z = t(1) / c
    return GivensRotation(c=t(c), s=t(s), r=t(r), z=t(z))


def _complex_givens(domain: NumericDomain, a, b) -> GivensRotation:
    t = domain.dtype.type
    rt = domain.real_dtype.type
    abs_a = rt(abs(a))
    if abs_a == 0:
        return GivensRotation(c=rt(0), s=t(1), r=t(b))

    scale = abs_a + rt(abs(b))
    norm = scale * np.sqrt(abs(a / scale) ** 2 + abs(b / scale) ** 2)
    phase = a / abs_a
    c = abs_a / norm
    s = phase * np.conj(b) / norm
    return GivensRotation(c=rt(c), s=t(s), r=t(phase * norm))


def modified_givens(domain: NumericDomain, d1, d2, x1, y1):
    """
    Construct the modified Givens transform.

    Args:
        domain: Real numeric domain
        d1, d2: Scaling factors of the rotation's factored form
        x1, y1: Components of the vector to rotate

    Returns:
        (d1', d2', x1', ModifiedGivens); H @ (x1, y1) = (x1', 0)
    """
    t = domain.dtype.type
    one, zero = t(1), t(0)
    gam, gamsq, rgamsq = t(ROTMG_GAM), t(ROTMG_GAMSQ), t(ROTMG_RGAMSQ)

    d1 = domain.scalar(d1, 'd1')
    d2 = domain.scalar(d2, 'd2')
    x1 = domain.scalar(x1, 'x1')
    y1 = domain.scalar(y1, 'y1')

    h11 = h12 = h21 = h22 = zero

    if d1 < 0:
        return zero, zero, zero, ModifiedGivens(t(-1), zero, zero, zero, zero)

    p2 = d2 * y1
    if p2 == 0:
        return d1, d2, x1, ModifiedGivens(t(-2), one, zero, zero, one)

    p1 = d1 * x1
    q2 = p2 * y1
    q1 = p1 * x1

    if abs(q1) > abs(q2):
        h21 = -y1 / x1
        h12 = p2 / p1
        u = one - h12 * h21
        if u <= 0:
            return zero, zero, zero, ModifiedGivens(t(-1), zero, zero, zero, zero)
        flag = t(0)
        h11 = h22 = one
        d1 = d1 / u
        d2 = d2 / u
        x1 = x1 * u
    else:
        if q2 < 0:
            return zero, zero, zero, ModifiedGivens(t(-1), zero, zero, zero, zero)
        flag = t(1)
        h11 = p1 / p2
        h22 = x1 / y1
        h12, h21 = one, -one
        u = one + h11 * h22
        d1, d2 = d2 / u, d1 / u
        x1 = y1 * u

    # Keep d1 and d2 inside [1/gam**2, gam**2]; any rescale makes H full
    if d1 != 0:
        while d1 <= rgamsq or d1 >= gamsq:
            flag = t(-1)
            if d1 <= rgamsq:
                d1 = d1 * gam ** 2
                x1 = x1 / gam
                h11 = h11 / gam
                h12 = h12 / gam
            else:
                d1 = d1 / gam ** 2
                x1 = x1 * gam
                h11 = h11 * gam
                h12 = h12 * gam

    if d2 != 0:
        while abs(d2) <= rgamsq or abs(d2) >= gamsq:
            flag = t(-1)
            if abs(d2) <= rgamsq:
                d2 = d2 * gam ** 2
                h21 = h21 / gam
                h22 = h22 / gam
            else:
                d2 = d2 / gam ** 2
                h21 = h21 * gam
                h22 = h22 * gam

    return t(d1), t(d2), t(x1), ModifiedGivens(flag, t(h11), t(h21), t(h12), t(h22))
