"""
Numeric domains.

A NumericDomain describes the scalar arithmetic one instantiation of the
operation family works in: dtype, conjugation, the |re|+|im| magnitude
used by asum/iamax, and scalar coercion. Every operation is written once
against this record and instantiated for the four classic domains:

    REAL32      's'  float32
    REAL64      'd'  float64
    COMPLEX64   'c'  complex64
    COMPLEX128  'z'  complex128
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyblas.core.exceptions import ValidationError


@dataclass(frozen=True)
class NumericDomain:
    """
    Scalar type capability record.

    Attributes:
        name: Human-readable identifier ('real32', 'complex128', ...)
        prefix: One-letter catalog prefix ('s', 'd', 'c', 'z')
        dtype: Element dtype of every buffer in this domain
        real_dtype: Dtype of norms, sums of magnitudes and hermitian scalars
    """
    name: str
    prefix: str
    dtype: np.dtype
    real_dtype: np.dtype

    @property
    def is_complex(self) -> bool:
        return self.dtype.kind == 'c'

    @property
    def real(self) -> NumericDomain:
        """The real domain of the same precision."""
        return get_domain(self.real_dtype)

    @property
    def eps(self) -> float:
        """Machine epsilon of the underlying real type."""
        return float(np.finfo(self.real_dtype).eps)

    def conj(self, a):
        """Complex conjugate; identity for real domains."""
        if self.is_complex:
            return np.conj(a)
        return a

    def abs1(self, a) -> NDArray[np.floating[Any]]:
        """|re| + |im| for complex values, |a| for real values."""
        if self.is_complex:
            return (np.abs(np.real(a)) + np.abs(np.imag(a))).astype(self.real_dtype)
        return np.abs(a).astype(self.real_dtype)

    def scalar(self, value, name: str):
        """
        Coerce a scalar argument to this domain's dtype.

        Raises:
            ValidationError: If value is not a number, or carries a
                non-zero imaginary part in a real domain
        """
        if not isinstance(value, (Number, np.number)):
            raise ValidationError(
                f"{name}: expected a scalar, got {type(value).__name__}",
                name=name,
                actual=value,
                expected='scalar',
            )
        if not self.is_complex and np.iscomplexobj(value):
            if np.imag(value) != 0:
                raise ValidationError(
                    f"{name}: complex value {value!r} in real domain {self.name}",
                    name=name,
                    actual=value,
                    expected='real scalar',
                )
            value = np.real(value)
        return self.dtype.type(value)

    def real_scalar(self, value, name: str):
        """
        Coerce a scalar argument to this domain's real dtype.

        Used for the real alpha/beta of hermitian updates and the real
        scale of csscal/zdscal.
        """
        return self.real.scalar(value, name)

    def zeros(self, shape) -> NDArray:
        return np.zeros(shape, dtype=self.dtype)

    def __repr__(self) -> str:
        return f"NumericDomain({self.name!r}, prefix={self.prefix!r})"


REAL32 = NumericDomain('real32', 's', np.dtype(np.float32), np.dtype(np.float32))
REAL64 = NumericDomain('real64', 'd', np.dtype(np.float64), np.dtype(np.float64))
COMPLEX64 = NumericDomain('complex64', 'c', np.dtype(np.complex64), np.dtype(np.float32))
COMPLEX128 = NumericDomain('complex128', 'z', np.dtype(np.complex128), np.dtype(np.float64))

ALL_DOMAINS = (REAL32, REAL64, COMPLEX64, COMPLEX128)
REAL_DOMAINS = (REAL32, REAL64)
COMPLEX_DOMAINS = (COMPLEX64, COMPLEX128)


def get_domain(key) -> NumericDomain:
    """
    Resolve a domain from a domain, prefix, name or dtype.

    Args:
        key: NumericDomain, 's'/'d'/'c'/'z', 'real32'/..., or a dtype-like

    Returns:
        The matching NumericDomain

    Raises:
        ValidationError: If no domain matches
    """
    if isinstance(key, NumericDomain):
        return key
    if isinstance(key, str):
        lowered = key.lower()
        for domain in ALL_DOMAINS:
            if lowered in (domain.prefix, domain.name):
                return domain
    try:
        dtype = np.dtype(key) if key is not None else None
    except TypeError:
        dtype = None
    if dtype is not None:
        for domain in ALL_DOMAINS:
            if domain.dtype == dtype:
                return domain
    raise ValidationError(
        f"domain: unknown numeric domain {key!r}, expected one of "
        f"{[d.name for d in ALL_DOMAINS]}",
        name='domain',
        actual=key,
    )


__all__ = [
    'NumericDomain',
    'REAL32',
    'REAL64',
    'COMPLEX64',
    'COMPLEX128',
    'ALL_DOMAINS',
    'REAL_DOMAINS',
    'COMPLEX_DOMAINS',
    'get_domain',
]
