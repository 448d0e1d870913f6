"""
Shared compute infrastructure for PyBLAS.

This module provides hardware detection, precision constants and the
tolerance tiers shared by all operation levels and kernel backends.

IMPORTANT: This is NOT where kernel backends live. Those go in
pyblas/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    device: Hardware detection and device selection
    precision: rotmg constants, scaled norm
    tolerances: Per-domain tolerance tiers
"""

from pyblas.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pyblas.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
