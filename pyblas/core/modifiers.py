"""
Enumerated modifiers for Level 2 and Level 3 operations.

Each modifier is a closed set of codes. Raw one-letter codes ('N', 'T',
'C', 'U', 'L', 'R') are accepted at the operation boundary and parsed
once into enum members; kernels only ever see members.

Usage:
    from pyblas.core.modifiers import Transpose, Uplo

    trans = Transpose.parse('t')   # Transpose.TRANS
    uplo = Uplo.parse(Uplo.LOWER)  # passthrough
"""

from __future__ import annotations

from enum import Enum

from pyblas.core.exceptions import ModifierError


class _Modifier(Enum):
    """Shared parsing for one-letter modifier codes."""

    @classmethod
    def parse(cls, value, name: str | None = None):
        """
        Resolve a member or a one-letter code (case-insensitive).

        Args:
            value: Enum member or code string
            name: Parameter name for error messages

        Returns:
            Enum member

        Raises:
            ModifierError: If value is not a member or a recognized code
        """
        label = name or cls.__name__.lower()
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and len(value) == 1:
            code = value.upper()
            for member in cls:
                if member.value == code:
                    return member
        codes = ", ".join(repr(m.value) for m in cls)
        raise ModifierError(
            f"{label}: invalid code {value!r}, expected one of {codes}",
            name=label,
            actual=value,
            expected=codes,
        )

    @property
    def code(self) -> str:
        """One-letter code."""
        return self.value


class Transpose(_Modifier):
    """op(A) selector: A, A^T or A^H."""
    NO_TRANS = 'N'
    TRANS = 'T'
    CONJ_TRANS = 'C'

    @property
    def is_transposed(self) -> bool:
        return self is not Transpose.NO_TRANS


class Uplo(_Modifier):
    """Which triangle of a symmetric/hermitian/triangular matrix is referenced."""
    UPPER = 'U'
    LOWER = 'L'

    @property
    def is_lower(self) -> bool:
        return self is Uplo.LOWER


class Diag(_Modifier):
    """Whether a triangular matrix has an implicit unit diagonal."""
    NON_UNIT = 'N'
    UNIT = 'U'

    @property
    def is_unit(self) -> bool:
        return self is Diag.UNIT


class Side(_Modifier):
    """Operand side of the special matrix in Level 3 operations."""
    LEFT = 'L'
    RIGHT = 'R'

    @property
    def is_left(self) -> bool:
        return self is Side.LEFT


__all__ = [
    'Transpose',
    'Uplo',
    'Diag',
    'Side',
]
