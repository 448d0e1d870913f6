"""
Classic operation catalog.

Maps the one-letter-prefix names ('sscal', 'dgemv', 'zherk', 'icamax',
'scnrm2', ...) onto the Blas family. Each name is bound to the CPU
reference backend.

Usage:
    from pyblas.catalog import lookup

    dgemv = lookup('dgemv')
    dgemv('N', 2, 2, 1.0, a, 2, x, 1, 0.0, y, 1)

The catalog names are also attributes of the package (pyblas.dgemv).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable

from pyblas.blas import Blas
from pyblas.core.capabilities import MIXED_PRECISION, operations_for
from pyblas.core.domains import ALL_DOMAINS, NumericDomain
from pyblas.core.exceptions import UnsupportedOperationError
from pyblas.level1 import solvers as level1_solvers

# Names that do not follow '{prefix}{mnemonic}'
_SPECIAL_NAMES = {
    ('c', 'nrm2'): 'scnrm2',
    ('z', 'nrm2'): 'dznrm2',
    ('c', 'asum'): 'scasum',
    ('z', 'asum'): 'dzasum',
    ('c', 'rscal'): 'csscal',
    ('z', 'rscal'): 'zdscal',
    ('c', 'rrot'): 'csrot',
    ('z', 'rrot'): 'zdrot',
}


def catalog_name(domain: NumericDomain, operation: str) -> str:
    """Classic name of an operation in a domain."""
    special = _SPECIAL_NAMES.get((domain.prefix, operation))
    if special is not None:
        return special
    if operation == 'iamax':
        return f"i{domain.prefix}amax"
    return f"{domain.prefix}{operation}"


@lru_cache(maxsize=1)
def build_catalog() -> dict[str, Callable]:
    """Every classic name mapped to its bound operation."""
    catalog: dict[str, Callable] = {}
    for domain in ALL_DOMAINS:
        family = Blas(domain)
        for operation in sorted(operations_for(domain)):
            catalog[catalog_name(domain, operation)] = getattr(family, operation)
    for name in sorted(MIXED_PRECISION):
        catalog[name] = getattr(level1_solvers, name)
    return catalog


def names() -> list[str]:
    """Sorted list of every catalog name."""
    return sorted(build_catalog())


def lookup(name: str) -> Callable:
    """
    Resolve a classic name (case-insensitive).

    Raises:
        UnsupportedOperationError: If the name is not in the catalog
    """
    catalog = build_catalog()
    key = name.lower() if isinstance(name, str) else name
    try:
        return catalog[key]
    except (KeyError, TypeError):
        raise UnsupportedOperationError(
            f"Unknown operation name: {name!r}",
            operation=str(name),
        ) from None
