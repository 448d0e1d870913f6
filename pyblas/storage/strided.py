"""
Strided vector view.

A logical vector of n elements over a flat buffer, addressed by a base
offset and an increment:

    inc > 0   element i at offset + i*inc
    inc < 0   element i at offset + (n-1-i)*|inc|   (storage walked backward)
    inc == 0  every element at offset

Negative increments traverse the same slots as |inc| in reverse order,
so a vector stored reversed and read with a negative increment has the
same logical elements as the original read forward.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyblas.core.validation import check_extent


@dataclass(frozen=True)
class StridedVector:
    """
    (buffer, n, inc, offset) view of a logical vector.

    Attributes:
        buffer: Flat 1D buffer owned by the caller
        n: Logical length (n <= 0 views nothing)
        inc: Increment between consecutive logical elements
        offset: Buffer index of the first slot the view touches
    """
    buffer: NDArray[Any]
    n: int
    inc: int
    offset: int = 0

    @property
    def extent(self) -> int:
        """Highest buffer index touched plus one (offset when empty)."""
        if self.n <= 0:
            return self.offset
        return self.offset + (self.n - 1) * abs(self.inc) + 1

    def indices(self) -> NDArray[np.intp]:
        """Buffer index of each logical element, in logical order."""
        if self.n <= 0:
            return np.empty(0, dtype=np.intp)
        steps = np.arange(self.n, dtype=np.intp)
        if self.inc < 0:
            steps = steps[::-1]
        return self.offset + steps * abs(self.inc)

    def check_bounds(self, name: str) -> None:
        """Raise DimensionError if the view runs past the buffer."""
        check_extent(self.buffer, self.extent, name)

    def gather(self) -> NDArray[Any]:
        """Copy the logical elements into a contiguous array."""
        return self.buffer[self.indices()]

    def scatter(self, values) -> None:
        """Write logical elements back into their buffer slots."""
        self.buffer[self.indices()] = values
