"""
GPU kernels using PyTorch.

Performance path for large operands, validated against the CPU
reference backend. Supports CUDA (Linux/Windows) and MPS (macOS Apple
Silicon). Operands are transferred per call and results come back as
numpy arrays of the operand dtype.

MPS has no double precision: float64/complex128 operands fall back to
the CPU reference kernels with a warning.
"""

from __future__ import annotations

from typing import Any
import warnings

import numpy as np
from numpy.typing import NDArray

from pyblas.core.compute.device import DeviceInfo
from pyblas.core.exceptions import SingularMatrixError
from pyblas.backends.cpu import CPUKernelBackend


class GPUKernelBackend:
    """
    GPU backend using PyTorch.

    Dtypes are preserved: float32 stays float32, complex128 stays
    complex128 (on devices that support it).
    """

    def __init__(self, device: DeviceInfo | None = None):
        """
        Initialize GPU backend.

        Parameters
        ----------
        device : DeviceInfo, optional
            Device info from select_device(). If None, auto-selects.
        """
        import torch

        if device is not None:
            if device.device_type == 'cuda':
                self.device = torch.device(f'cuda:{device.device_index or 0}')
            elif device.device_type == 'mps':
                self.device = torch.device('mps')
            else:
                raise ValueError(f"GPUKernelBackend requires GPU device, got {device.device_type}")
            self.device_info = device
        else:
            if torch.cuda.is_available():
                self.device = torch.device('cuda')
                self.device_info = DeviceInfo('cuda', 0, torch.cuda.get_device_properties(0).name, None)
            elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                self.device = torch.device('mps')
                self.device_info = DeviceInfo('mps', 0, 'Apple Silicon GPU', None)
            else:
                raise RuntimeError(
                    "No GPU available. Use backend='cpu' instead."
                )
        self._fallback = CPUKernelBackend()

    @property
    def name(self) -> str:
        return 'gpu_torch'

    def _on_device(self, *arrays: NDArray[Any]) -> bool:
        dtype = arrays[0].dtype
        if self.device_info.supports_dtype(dtype):
            return True
        warnings.warn(
            f"{self.device_info.device_type.upper()} does not support {dtype}, "
            f"using CPU kernels"
        )
        return False

    def _to_device(self, array: NDArray[Any]):
        import torch
        return torch.from_numpy(np.ascontiguousarray(array)).to(self.device)

    def matmul(self, a: NDArray[Any], b: NDArray[Any]) -> NDArray[Any]:
        if not self._on_device(a, b):
            return self._fallback.matmul(a, b)

        import torch

        result = torch.matmul(self._to_device(a), self._to_device(b))
        return result.cpu().numpy().astype(a.dtype, copy=False)

    def solve_triangular(
        self,
        t: NDArray[Any],
        b: NDArray[Any],
        *,
        lower: bool,
    ) -> NDArray[Any]:
        if not self._on_device(t, b):
            return self._fallback.solve_triangular(t, b, lower=lower)

        import torch

        zero = np.flatnonzero(np.diagonal(t) == 0)
        if zero.size > 0:
            raise SingularMatrixError(
                f"Triangular matrix has a zero pivot at diagonal index {int(zero[0])}",
                matrix_name='A',
                pivot=int(zero[0]),
            )

        vector = b.ndim == 1
        rhs = self._to_device(b[:, None] if vector else b)
        x = torch.linalg.solve_triangular(self._to_device(t), rhs, upper=not lower)
        x = x.cpu().numpy().astype(t.dtype, copy=False)
        return x[:, 0] if vector else x
