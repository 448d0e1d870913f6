"""
Numerical precision constants and utilities.

Provides the rotmg rescaling constants and the overflow-avoiding
scaled sum of squares used by nrm2.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# Modified Givens rescaling: d1/d2 are kept inside [1/GAM**2, GAM**2]
ROTMG_GAM: float = 4096.0
ROTMG_GAMSQ: float = ROTMG_GAM * ROTMG_GAM
ROTMG_RGAMSQ: float = 1.0 / ROTMG_GAMSQ


def scaled_norm(
    values: NDArray[Any],
    real_dtype: np.dtype,
) -> np.floating:
    """
    Euclidean norm without intermediate overflow or underflow.

    Computes scale * sqrt(sum((|v| / scale)^2)) where scale is the
    largest component magnitude. Real and imaginary parts of complex
    values are treated as separate components, as in the classic
    scnrm2/dznrm2.

    Args:
        values: Gathered logical vector (1D)
        real_dtype: Dtype of the returned norm

    Returns:
        Norm as a scalar of real_dtype
    """
    if np.iscomplexobj(values):
        components = np.concatenate([np.abs(values.real), np.abs(values.imag)])
    else:
        components = np.abs(values)

    if components.size == 0:
        return real_dtype.type(0)

    # Accumulate in float64; the result is rounded once to real_dtype
    components = components.astype(np.float64)
    if np.any(np.isnan(components)):
        return real_dtype.type(np.nan)
    scale = components.max()
    if scale == 0 or not np.isfinite(scale):
        return real_dtype.type(scale)

    ssq = np.sum((components / scale) ** 2)
    return real_dtype.type(scale * np.sqrt(ssq))
