"""
The operation family, parameterized by numeric domain.

    from pyblas import Blas, REAL64

    d = Blas(REAL64)
    d.gemv('N', m, n, 1.0, a, lda, x, 1, 0.0, y, 1)

A Blas instance binds one NumericDomain and one kernel backend; every
method forwards to the level modules with the same argument order as the
classic catalog, minus the domain. Mutating methods return None.
"""

from __future__ import annotations

from pyblas.backends import BackendChoice, get_backend
from pyblas.core.domains import NumericDomain, get_domain
from pyblas.core.protocols import KernelBackend
from pyblas.level1 import solvers as l1
from pyblas.level2 import solvers as l2
from pyblas.level3 import solvers as l3


class Blas:
    """
    One instantiation of the operation family.

    Parameters
    ----------
    domain : NumericDomain or str
        Domain, prefix ('s', 'd', 'c', 'z'), name or dtype.
    backend : str or KernelBackend
        'cpu' (default), 'gpu', 'auto', or a KernelBackend instance.
        Used by Level 2 and Level 3 operations.
    """

    def __init__(
        self,
        domain: NumericDomain | str,
        backend: BackendChoice | KernelBackend = 'cpu',
    ):
        self.domain = get_domain(domain)
        self.backend = get_backend(backend)

    def __repr__(self) -> str:
        return f"Blas({self.domain.name!r}, backend={self.backend.name!r})"

    # ── Level 1 ──────────────────────────────────────────────────────

    def rotg(self, a, b):
        return l1.rotg(self.domain, a, b)

    def rotmg(self, d1, d2, x1, y1):
        return l1.rotmg(self.domain, d1, d2, x1, y1)

    def rot(self, n, x, incx, y, incy, c, s):
        l1.rot(self.domain, n, x, incx, y, incy, c, s)

    def rrot(self, n, x, incx, y, incy, c, s):
        """rot with a real sine (csrot/zdrot)."""
        s = self.domain.real_scalar(s, 's')
        l1.rot(self.domain, n, x, incx, y, incy, c, s)

    def rotm(self, n, x, incx, y, incy, param):
        l1.rotm(self.domain, n, x, incx, y, incy, param)

    def swap(self, n, x, incx, y, incy):
        l1.swap(self.domain, n, x, incx, y, incy)

    def scal(self, n, alpha, x, incx):
        l1.scal(self.domain, n, alpha, x, incx)

    def rscal(self, n, alpha, x, incx):
        """scal with a real alpha (csscal/zdscal)."""
        l1.rscal(self.domain, n, alpha, x, incx)

    def copy(self, n, x, incx, y, incy):
        l1.copy(self.domain, n, x, incx, y, incy)

    def axpy(self, n, alpha, x, incx, y, incy):
        l1.axpy(self.domain, n, alpha, x, incx, y, incy)

    def dot(self, n, x, incx, y, incy):
        return l1.dot(self.domain, n, x, incx, y, incy)

    def dotu(self, n, x, incx, y, incy):
        return l1.dotu(self.domain, n, x, incx, y, incy)

    def dotc(self, n, x, incx, y, incy):
        return l1.dotc(self.domain, n, x, incx, y, incy)

    def nrm2(self, n, x, incx):
        return l1.nrm2(self.domain, n, x, incx)

    def asum(self, n, x, incx):
        return l1.asum(self.domain, n, x, incx)

    def iamax(self, n, x, incx) -> int:
        return l1.iamax(self.domain, n, x, incx)

    # ── Level 2 ──────────────────────────────────────────────────────

    def gemv(self, trans, m, n, alpha, a, lda, x, incx, beta, y, incy):
        l2.gemv(self.domain, trans, m, n, alpha, a, lda, x, incx, beta, y, incy,
                backend=self.backend)

    def gbmv(self, trans, m, n, kl, ku, alpha, a, lda, x, incx, beta, y, incy):
        l2.gbmv(self.domain, trans, m, n, kl, ku, alpha, a, lda, x, incx, beta, y, incy,
                backend=self.backend)

    def symv(self, uplo, n, alpha, a, lda, x, incx, beta, y, incy):
        l2.symv(self.domain, uplo, n, alpha, a, lda, x, incx, beta, y, incy, backend=self.backend)

    def hemv(self, uplo, n, alpha, a, lda, x, incx, beta, y, incy):
        l2.hemv(self.domain, uplo, n, alpha, a, lda, x, incx, beta, y, incy, backend=self.backend)

    def sbmv(self, uplo, n, k, alpha, a, lda, x, incx, beta, y, incy):
        l2.sbmv(self.domain, uplo, n, k, alpha, a, lda, x, incx, beta, y, incy, backend=self.backend)

    def hbmv(self, uplo, n, k, alpha, a, lda, x, incx, beta, y, incy):
        l2.hbmv(self.domain, uplo, n, k, alpha, a, lda, x, incx, beta, y, incy, backend=self.backend)

    def spmv(self, uplo, n, alpha, ap, x, incx, beta, y, incy):
        l2.spmv(self.domain, uplo, n, alpha, ap, x, incx, beta, y, incy, backend=self.backend)

    def hpmv(self, uplo, n, alpha, ap, x, incx, beta, y, incy):
        l2.hpmv(self.domain, uplo, n, alpha, ap, x, incx, beta, y, incy, backend=self.backend)

    def trmv(self, uplo, trans, diag, n, a, lda, x, incx):
        l2.trmv(self.domain, uplo, trans, diag, n, a, lda, x, incx, backend=self.backend)

    def tbmv(self, uplo, trans, diag, n, k, a, lda, x, incx):
        l2.tbmv(self.domain, uplo, trans, diag, n, k, a, lda, x, incx, backend=self.backend)

    def tpmv(self, uplo, trans, diag, n, ap, x, incx):
        l2.tpmv(self.domain, uplo, trans, diag, n, ap, x, incx, backend=self.backend)

    def trsv(self, uplo, trans, diag, n, a, lda, x, incx):
        l2.trsv(self.domain, uplo, trans, diag, n, a, lda, x, incx, backend=self.backend)

    def tbsv(self, uplo, trans, diag, n, k, a, lda, x, incx):
        l2.tbsv(self.domain, uplo, trans, diag, n, k, a, lda, x, incx, backend=self.backend)

    def tpsv(self, uplo, trans, diag, n, ap, x, incx):
        l2.tpsv(self.domain, uplo, trans, diag, n, ap, x, incx, backend=self.backend)

    def ger(self, m, n, alpha, x, incx, y, incy, a, lda):
        l2.ger(self.domain, m, n, alpha, x, incx, y, incy, a, lda, backend=self.backend)

    def geru(self, m, n, alpha, x, incx, y, incy, a, lda):
        l2.geru(self.domain, m, n, alpha, x, incx, y, incy, a, lda, backend=self.backend)

    def gerc(self, m, n, alpha, x, incx, y, incy, a, lda):
        l2.gerc(self.domain, m, n, alpha, x, incx, y, incy, a, lda, backend=self.backend)

    def syr(self, uplo, n, alpha, x, incx, a, lda):
        l2.syr(self.domain, uplo, n, alpha, x, incx, a, lda, backend=self.backend)

    def her(self, uplo, n, alpha, x, incx, a, lda):
        l2.her(self.domain, uplo, n, alpha, x, incx, a, lda, backend=self.backend)

    def spr(self, uplo, n, alpha, x, incx, ap):
        l2.spr(self.domain, uplo, n, alpha, x, incx, ap, backend=self.backend)

    def hpr(self, uplo, n, alpha, x, incx, ap):
        l2.hpr(self.domain, uplo, n, alpha, x, incx, ap, backend=self.backend)

    def syr2(self, uplo, n, alpha, x, incx, y, incy, a, lda):
        l2.syr2(self.domain, uplo, n, alpha, x, incx, y, incy, a, lda, backend=self.backend)

    def her2(self, uplo, n, alpha, x, incx, y, incy, a, lda):
        l2.her2(self.domain, uplo, n, alpha, x, incx, y, incy, a, lda, backend=self.backend)

    def spr2(self, uplo, n, alpha, x, incx, y, incy, ap):
        l2.spr2(self.domain, uplo, n, alpha, x, incx, y, incy, ap, backend=self.backend)

    def hpr2(self, uplo, n, alpha, x, incx, y, incy, ap):
        l2.hpr2(self.domain, uplo, n, alpha, x, incx, y, incy, ap, backend=self.backend)

    # ── Level 3 ──────────────────────────────────────────────────────

    def gemm(self, transa, transb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc):
        l3.gemm(self.domain, transa, transb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc,
                backend=self.backend)

    def symm(self, side, uplo, m, n, alpha, a, lda, b, ldb, beta, c, ldc):
        l3.symm(self.domain, side, uplo, m, n, alpha, a, lda, b, ldb, beta, c, ldc,
                backend=self.backend)

    def hemm(self, side, uplo, m, n, alpha, a, lda, b, ldb, beta, c, ldc):
        l3.hemm(self.domain, side, uplo, m, n, alpha, a, lda, b, ldb, beta, c, ldc,
                backend=self.backend)

    def syrk(self, uplo, trans, n, k, alpha, a, lda, beta, c, ldc):
        l3.syrk(self.domain, uplo, trans, n, k, alpha, a, lda, beta, c, ldc, backend=self.backend)

    def herk(self, uplo, trans, n, k, alpha, a, lda, beta, c, ldc):
        l3.herk(self.domain, uplo, trans, n, k, alpha, a, lda, beta, c, ldc, backend=self.backend)

    def syr2k(self, uplo, trans, n, k, alpha, a, lda, b, ldb, beta, c, ldc):
        l3.syr2k(self.domain, uplo, trans, n, k, alpha, a, lda, b, ldb, beta, c, ldc,
                 backend=self.backend)

    def her2k(self, uplo, trans, n, k, alpha, a, lda, b, ldb, beta, c, ldc):
        l3.her2k(self.domain, uplo, trans, n, k, alpha, a, lda, b, ldb, beta, c, ldc,
                 backend=self.backend)

    def trmm(self, side, uplo, transa, diag, m, n, alpha, a, lda, b, ldb):
        l3.trmm(self.domain, side, uplo, transa, diag, m, n, alpha, a, lda, b, ldb,
                backend=self.backend)

    def trsm(self, side, uplo, transa, diag, m, n, alpha, a, lda, b, ldb):
        l3.trsm(self.domain, side, uplo, transa, diag, m, n, alpha, a, lda, b, ldb,
                backend=self.backend)
