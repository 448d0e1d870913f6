"""
Kernel backends.

    cpu: NumPy/SciPy reference kernels (default)
    gpu: PyTorch kernels on CUDA or MPS (optional dependency)

get_backend() resolves a backend choice the same way for every
operation level.
"""

from __future__ import annotations

from typing import Literal

from pyblas.core.compute.device import select_device
from pyblas.core.exceptions import ValidationError
from pyblas.core.protocols import KernelBackend
from pyblas.backends.cpu import CPUKernelBackend

BackendChoice = Literal['auto', 'cpu', 'gpu']

_CPU = CPUKernelBackend()


def get_backend(backend: BackendChoice | KernelBackend = 'cpu') -> KernelBackend:
    """
    Select a kernel backend.

    Args:
        backend: 'cpu', 'gpu', 'auto', or an object already satisfying
            the KernelBackend protocol

    Returns:
        A KernelBackend

    Raises:
        RuntimeError: If 'gpu' requested but no GPU available
        ValidationError: If the choice is unknown
    """
    if isinstance(backend, str):
        if backend == 'cpu':
            return _CPU

        if backend == 'auto':
            device = select_device('auto')
            if device.is_gpu:
                try:
                    from pyblas.backends.gpu import GPUKernelBackend
                    return GPUKernelBackend(device=device)
                except ImportError:
                    return _CPU
            return _CPU

        if backend == 'gpu':
            device = select_device('gpu')
            from pyblas.backends.gpu import GPUKernelBackend
            return GPUKernelBackend(device=device)

    elif isinstance(backend, KernelBackend):
        return backend

    raise ValidationError(f"Unknown backend: {backend!r}", name='backend', actual=backend)


__all__ = [
    'BackendChoice',
    'CPUKernelBackend',
    'get_backend',
]
