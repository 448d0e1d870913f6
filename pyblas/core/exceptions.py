"""
Exception hierarchy for PyBLAS.

All exceptions inherit from BlasError to allow catching any
library-specific error. Operation-specific failures should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Every check runs before a buffer is read or written
"""


class BlasError(Exception):
    """Base exception for all PyBLAS errors."""
    pass


class ValidationError(BlasError):
    """
    Input validation failed.

    Raised when caller-provided arguments fail a pre-access check.

    Attributes:
        name: Parameter name the check was applied to
        actual: Offending value, if meaningful
        expected: Description of what was required, if meaningful
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        actual: object = None,
        expected: str | None = None,
    ):
        super().__init__(message)
        self.name = name
        self.actual = actual
        self.expected = expected


class DimensionError(ValidationError):
    """
    Dimensions are negative, inconsistent or exceed the buffer.

    Raised for negative m/n/k, a leading dimension smaller than the
    logical row count, or a buffer too short for the declared extent.
    """
    pass


class IncrementError(DimensionError):
    """
    A vector increment is not allowed for this operand.

    Zero increments are rejected on written Level 1 operands and on
    every Level 2 operand.
    """
    pass


class ModifierError(ValidationError):
    """
    An enumerated modifier is outside its closed domain.

    Raised for unrecognized transpose/uplo/diag/side codes and for
    codes that the operation does not accept (e.g. 'T' for herk).
    """
    pass


class AliasingError(ValidationError):
    """
    An output buffer overlaps another operand.

    Only the documented self-aliasing (same buffer, same offset, same
    increment) is permitted.
    """
    pass


class StorageError(ValidationError):
    """
    A buffer has the wrong dtype, rank or is not writeable.
    """
    pass


class UnsupportedOperationError(BlasError):
    """
    Operation is not defined for the requested numeric domain,
    or the catalog name is unknown.

    Attributes:
        operation: Operation mnemonic or catalog name
        domain: Domain name, if applicable
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        domain: str | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.domain = domain


class NumericalError(BlasError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Triangular matrix has an exactly zero pivot.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot: Index of the first zero diagonal entry, if known
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot = pivot
