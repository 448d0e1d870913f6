"""
Storage views over flat column-major buffers.

    StridedVector  - n logical elements at a non-zero (or read-only zero) increment
    DenseMatrix    - element (i, j) at i + j*ld
    BandedMatrix   - element (i, j) at (ku + i - j) + j*ld
    PackedMatrix   - one triangle, column by column, no padding
"""

from pyblas.storage.strided import StridedVector
from pyblas.storage.layouts import (
    DenseMatrix,
    BandedMatrix,
    PackedMatrix,
    triangle_mask,
    dense_to_buffer,
    buffer_to_dense,
    pack,
    unpack,
    to_band,
    from_band,
)

__all__ = [
    "StridedVector",
    "DenseMatrix",
    "BandedMatrix",
    "PackedMatrix",
    "triangle_mask",
    "dense_to_buffer",
    "buffer_to_dense",
    "pack",
    "unpack",
    "to_band",
    "from_band",
]
