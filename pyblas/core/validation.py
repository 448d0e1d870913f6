"""
Input validation utilities for PyBLAS.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about caller intent. Every operation runs all of
its checks before the first buffer read or write.

Design principles:
    - No silent type coercion of caller-owned output buffers
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from __future__ import annotations

from numbers import Integral
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyblas.core.domains import NumericDomain
from pyblas.core.exceptions import (
    AliasingError,
    DimensionError,
    IncrementError,
    StorageError,
    ValidationError,
)


def check_buffer(
    buffer: ArrayLike,
    domain: NumericDomain,
    name: str,
    *,
    writable: bool = False,
) -> NDArray[Any]:
    """
    Validate a flat element buffer.

    Output buffers are mutated in place, so they must already be a
    writeable 1D ndarray of exactly the domain dtype. Read-only buffers
    may also be ndarrays of the domain dtype, or plain array-likes that
    convert without crossing kinds (no complex into a real domain).

    Args:
        buffer: Buffer to validate
        domain: Numeric domain of the operation
        name: Parameter name for error messages
        writable: Whether the operation writes into this buffer

    Returns:
        1D numpy array of domain dtype (the same object for ndarrays)

    Raises:
        StorageError: If the buffer has the wrong type, dtype, rank or
            is read-only
    """
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != domain.dtype:
            raise StorageError(
                f"{name}: dtype {buffer.dtype} does not match domain "
                f"{domain.name} ({domain.dtype})",
                name=name,
                actual=buffer.dtype,
                expected=str(domain.dtype),
            )
        result = buffer
    elif writable:
        raise StorageError(
            f"{name}: output buffer must be a numpy.ndarray, "
            f"got {type(buffer).__name__}",
            name=name,
            actual=type(buffer).__name__,
            expected='numpy.ndarray',
        )
    else:
        try:
            raw = np.asarray(buffer)
        except (ValueError, TypeError) as e:
            raise StorageError(f"{name}: cannot convert to array: {e}", name=name) from e
        if not np.issubdtype(raw.dtype, np.number):
            raise StorageError(
                f"{name}: non-numeric dtype {raw.dtype}, expected numeric data",
                name=name,
                actual=raw.dtype,
            )
        if not np.can_cast(raw.dtype, domain.dtype, casting='same_kind'):
            raise StorageError(
                f"{name}: cannot convert {raw.dtype} data into domain {domain.name}",
                name=name,
                actual=raw.dtype,
                expected=str(domain.dtype),
            )
        result = raw.astype(domain.dtype)

    if result.ndim != 1:
        raise StorageError(
            f"{name}: expected a flat 1D buffer, got {result.ndim}D with shape {result.shape}",
            name=name,
            actual=result.shape,
            expected='1D',
        )
    if writable and not result.flags.writeable:
        raise StorageError(f"{name}: output buffer is read-only", name=name)
    return result


def check_dimension(value: int, name: str) -> int:
    """
    Verify a dimension (m, n, k, kl, ku) is a non-negative integer.

    Raises:
        ValidationError: If value is not an integer
        DimensionError: If value is negative
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValidationError(
            f"{name}: expected an integer, got {type(value).__name__}",
            name=name,
            actual=value,
            expected='int',
        )
    if value < 0:
        raise DimensionError(
            f"{name}: must be non-negative, got {value}",
            name=name,
            actual=value,
            expected='>= 0',
        )
    return int(value)


def check_increment(inc: int, name: str, *, allow_zero: bool) -> int:
    """
    Verify a vector increment.

    Args:
        inc: Increment to check
        name: Parameter name for error messages
        allow_zero: Whether the operand is only ever read, so a zero
            increment is well defined (every element is one slot)

    Raises:
        ValidationError: If inc is not an integer
        IncrementError: If inc is zero and allow_zero is False
    """
    if isinstance(inc, bool) or not isinstance(inc, Integral):
        raise ValidationError(
            f"{name}: expected an integer, got {type(inc).__name__}",
            name=name,
            actual=inc,
            expected='int',
        )
    if inc == 0 and not allow_zero:
        raise IncrementError(
            f"{name}: must be non-zero for this operand",
            name=name,
            actual=inc,
            expected='!= 0',
        )
    return int(inc)


def check_leading_dimension(ld: int, required: int, name: str) -> int:
    """
    Verify a leading dimension is at least max(1, required).

    Raises:
        DimensionError: If ld is too small
    """
    if isinstance(ld, bool) or not isinstance(ld, Integral):
        raise ValidationError(
            f"{name}: expected an integer, got {type(ld).__name__}",
            name=name,
            actual=ld,
            expected='int',
        )
    minimum = max(1, required)
    if ld < minimum:
        raise DimensionError(
            f"{name}: must be >= {minimum}, got {ld}",
            name=name,
            actual=ld,
            expected=f'>= {minimum}',
        )
    return int(ld)


def check_extent(buffer: NDArray[Any], extent: int, name: str) -> None:
    """
    Verify a buffer holds every slot an operation will touch.

    Args:
        buffer: Buffer to check
        extent: Highest buffer index touched plus one
        name: Parameter name for error messages

    Raises:
        DimensionError: If the buffer is too short
    """
    if buffer.shape[0] < extent:
        raise DimensionError(
            f"{name}: buffer of length {buffer.shape[0]} is too short, "
            f"operation touches {extent} elements",
            name=name,
            actual=buffer.shape[0],
            expected=f'>= {extent}',
        )


def check_packed_length(buffer: NDArray[Any], n: int, name: str) -> None:
    """
    Verify a packed triangle buffer holds exactly n*(n+1)/2 elements.

    Raises:
        DimensionError: If the buffer length differs
    """
    expected = n * (n + 1) // 2
    if buffer.shape[0] != expected:
        raise DimensionError(
            f"{name}: packed buffer for n={n} must hold {expected} elements, "
            f"got {buffer.shape[0]}",
            name=name,
            actual=buffer.shape[0],
            expected=f'== {expected}',
        )


def same_slots(a: NDArray[Any], b: NDArray[Any]) -> bool:
    """Whether two arrays view exactly the same memory with the same layout."""
    return (
        a.__array_interface__['data'][0] == b.__array_interface__['data'][0]
        and a.strides == b.strides
        and a.shape == b.shape
    )


def check_no_alias(
    output: NDArray[Any],
    output_name: str,
    other: object,
    other_name: str,
    *,
    allow_identical: bool = False,
) -> None:
    """
    Verify an output buffer does not overlap another operand.

    Args:
        output: Buffer the operation writes
        output_name: Its parameter name
        other: Another operand; non-ndarrays are converted copies and
            can never alias
        other_name: Its parameter name
        allow_identical: Whether the operation documents self-aliasing;
            the caller has already verified matching increments

    Raises:
        AliasingError: If the buffers overlap
    """
    if not isinstance(other, np.ndarray):
        return
    if not np.shares_memory(output, other):
        return
    if allow_identical and same_slots(output, other):
        return
    raise AliasingError(
        f"{output_name}: output buffer overlaps {other_name}",
        name=output_name,
        actual=other_name,
    )
