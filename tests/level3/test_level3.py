"""
Conformance tests for Level 3 operations.

Compared against dense numpy math on the logical matrices, with NaN
sentinels for the beta == 0 / alpha == 0 contracts and for the triangle
of C that rank-k updates must leave alone.
"""

import numpy as np
import pytest

from pyblas.core.exceptions import (
    AliasingError,
    DimensionError,
    ModifierError,
    SingularMatrixError,
    ValidationError,
)
from pyblas.core.modifiers import Uplo
from pyblas.level3 import gemm, hemm, her2k, herk, symm, syr2k, syrk, trmm, trsm
from pyblas.storage.layouts import buffer_to_dense, dense_to_buffer, triangle_mask


def _op(a, trans):
    if trans == 'N':
        return a
    if trans == 'T':
        return a.T
    return a.conj().T


def _wide(a):
    return a.astype(np.complex128)


# ═══════════════════════════════════════════════════════════════════════
# gemm
# ═══════════════════════════════════════════════════════════════════════


class TestGemm:

    @pytest.mark.parametrize("transa", ['N', 'T', 'C'])
    @pytest.mark.parametrize("transb", ['N', 'T', 'C'])
    def test_matches_numpy(self, domain, random_array, assert_close, transa, transb):
        m, n, k = 3, 4, 2
        a = random_array(domain, (m, k) if transa == 'N' else (k, m))
        b = random_array(domain, (k, n) if transb == 'N' else (n, k))
        c = random_array(domain, (m, n))
        alpha, beta = (0.5 + 1j, -1 + 0.5j) if domain.is_complex else (0.5, -1.0)
        expected = alpha * _op(_wide(a), transa) @ _op(_wide(b), transb) + beta * _wide(c)

        lda, ldb, ldc = a.shape[0] + 1, b.shape[0] + 2, m + 1
        cbuf = dense_to_buffer(c, ld=ldc)
        gemm(domain, transa, transb, m, n, k, alpha,
             dense_to_buffer(a, ld=lda), lda, dense_to_buffer(b, ld=ldb), ldb, beta, cbuf, ldc)
        assert_close(buffer_to_dense(cbuf, m, n, ld=ldc), expected, domain)

    def test_padding_rows_untouched(self, domain):
        cbuf = np.full(6, np.nan, dtype=domain.dtype)
        gemm(domain, 'N', 'N', 2, 2, 1, 1, np.ones(2, dtype=domain.dtype), 2,
             np.ones(2, dtype=domain.dtype), 1, 0, cbuf, 3)
        np.testing.assert_array_equal(cbuf[[0, 1, 3, 4]], [1, 1, 1, 1])
        assert np.isnan(cbuf[2])

    def test_beta_zero_overwrites_nan(self, domain, random_array):
        c = np.full(4, np.nan, dtype=domain.dtype)
        a = dense_to_buffer(random_array(domain, (2, 2)))
        gemm(domain, 'N', 'N', 2, 2, 2, 1, a, 2, a.copy(), 2, 0, c, 2)
        assert not np.isnan(c).any()

    def test_alpha_zero_does_not_read_a_or_b(self, domain):
        nan = np.full(4, np.nan, dtype=domain.dtype)
        c = np.array([1, 2, 3, 4], dtype=domain.dtype)
        gemm(domain, 'N', 'N', 2, 2, 2, 0, nan, 2, nan.copy(), 2, 2, c, 2)
        np.testing.assert_array_equal(c, [2, 4, 6, 8])

    def test_k_zero_scales_c(self, domain):
        c = np.array([1, 2], dtype=domain.dtype)
        gemm(domain, 'N', 'N', 1, 2, 0, 1, np.zeros(1, dtype=domain.dtype), 1,
             np.zeros(2, dtype=domain.dtype), 1, 3, c, 1)
        np.testing.assert_array_equal(c, [3, 6])

    def test_shapes_follow_transpose(self, domain):
        # transa='T' makes A k x m, so lda must cover k, not m
        with pytest.raises(DimensionError, match="lda"):
            gemm(domain, 'T', 'N', 3, 1, 2, 1, np.zeros(6, dtype=domain.dtype), 1,
                 np.zeros(2, dtype=domain.dtype), 2, 0, np.zeros(3, dtype=domain.dtype), 3)

    def test_c_too_short(self, domain):
        with pytest.raises(DimensionError):
            gemm(domain, 'N', 'N', 2, 2, 1, 1, np.ones(2, dtype=domain.dtype), 2,
                 np.ones(2, dtype=domain.dtype), 1, 0, np.zeros(3, dtype=domain.dtype), 2)

    def test_c_aliasing_a(self, domain):
        buf = np.ones(8, dtype=domain.dtype)
        with pytest.raises(AliasingError):
            gemm(domain, 'N', 'N', 2, 2, 2, 1, buf[:4], 2, np.ones(4, dtype=domain.dtype), 2,
                 0, buf[2:6], 2)

    def test_invalid_transb(self, domain):
        with pytest.raises(ModifierError, match="transb"):
            gemm(domain, 'N', 'Q', 1, 1, 1, 1, np.ones(1, dtype=domain.dtype), 1,
                 np.ones(1, dtype=domain.dtype), 1, 0, np.zeros(1, dtype=domain.dtype), 1)


# ═══════════════════════════════════════════════════════════════════════
# symm / hemm
# ═══════════════════════════════════════════════════════════════════════


class TestSymmHemm:

    @pytest.mark.parametrize("side", ['L', 'R'])
    @pytest.mark.parametrize("uplo", ['U', 'L'])
    def test_symm(self, domain, random_array, assert_close, side, uplo):
        m, n = 3, 2
        ka = m if side == 'L' else n
        a = random_array(domain, (ka, ka))
        a = ((a + a.T) / 2).astype(domain.dtype)
        stored = np.where(triangle_mask(ka, Uplo.parse(uplo)), a, np.nan).astype(domain.dtype)
        b = random_array(domain, (m, n))
        c = random_array(domain, (m, n))
        product = _wide(a) @ b if side == 'L' else _wide(b) @ a
        expected = 2 * product + 0.5 * _wide(c)
        cbuf = dense_to_buffer(c)
        symm(domain, side, uplo, m, n, 2, dense_to_buffer(stored), ka, dense_to_buffer(b), m, 0.5, cbuf, m)
        assert_close(buffer_to_dense(cbuf, m, n), expected, domain)

    @pytest.mark.parametrize("side", ['L', 'R'])
    @pytest.mark.parametrize("uplo", ['U', 'L'])
    def test_hemm(self, complex_domain, random_array, assert_close, side, uplo):
        domain = complex_domain
        m, n = 2, 3
        ka = m if side == 'L' else n
        a = random_array(domain, (ka, ka))
        a = ((a + a.conj().T) / 2).astype(domain.dtype)
        stored = np.where(triangle_mask(ka, Uplo.parse(uplo)), a + 7j * np.eye(ka), np.nan)
        b = random_array(domain, (m, n))
        c = np.full((m, n), np.nan, dtype=domain.dtype)
        product = _wide(a) @ b if side == 'L' else _wide(b) @ a
        cbuf = dense_to_buffer(c)
        hemm(domain, side, uplo, m, n, 1j, dense_to_buffer(stored, dtype=domain.dtype), ka,
             dense_to_buffer(b), m, 0, cbuf, m)
        assert_close(buffer_to_dense(cbuf, m, n), 1j * product, domain)

    @pytest.mark.parametrize("side", ['L', 'R'])
    def test_symm_beta_zero_does_not_read_c(self, domain, side):
        c = np.full(6, np.nan, dtype=domain.dtype)
        ka = 2 if side == 'L' else 3
        symm(domain, side, 'U', 2, 3, 1, np.ones(ka * ka, dtype=domain.dtype), ka,
             np.ones(6, dtype=domain.dtype), 2, 0, c, 2)
        assert not np.isnan(c).any()

    @pytest.mark.parametrize("side", ['L', 'R'])
    def test_symm_alpha_zero_does_not_read_a_or_b(self, domain, side):
        ka = 2 if side == 'L' else 3
        c = np.arange(6, dtype=domain.dtype)
        symm(domain, side, 'L', 2, 3, 0, np.full(ka * ka, np.nan, dtype=domain.dtype), ka,
             np.full(6, np.nan, dtype=domain.dtype), 2, 3, c, 2)
        np.testing.assert_array_equal(c, 3 * np.arange(6))

    @pytest.mark.parametrize("side", ['L', 'R'])
    def test_hemm_beta_zero_does_not_read_c(self, complex_domain, side):
        c = np.full(6, np.nan, dtype=complex_domain.dtype)
        ka = 2 if side == 'L' else 3
        hemm(complex_domain, side, 'L', 2, 3, 1j, np.ones(ka * ka, dtype=complex_domain.dtype), ka,
             np.ones(6, dtype=complex_domain.dtype), 2, 0, c, 2)
        assert not np.isnan(c).any()

    @pytest.mark.parametrize("side", ['L', 'R'])
    def test_hemm_alpha_zero_does_not_read_a_or_b(self, complex_domain, side):
        ka = 2 if side == 'L' else 3
        c = np.array([1, 1j, 2, 2j, 3, 3j], dtype=complex_domain.dtype)
        hemm(complex_domain, side, 'U', 2, 3, 0, np.full(ka * ka, np.nan, dtype=complex_domain.dtype), ka,
             np.full(6, np.nan, dtype=complex_domain.dtype), 2, 1j, c, 2)
        np.testing.assert_array_equal(c, [1j, -1, 2j, -2, 3j, -3])


# ═══════════════════════════════════════════════════════════════════════
# syrk / herk / syr2k / her2k
# ═══════════════════════════════════════════════════════════════════════


class TestRankK:

    @pytest.mark.parametrize("uplo", ['U', 'L'])
    def test_syrk_beta_zero_overwrites_sentinel(self, domain, random_array, assert_close, uplo):
        n, k = 4, 3
        mask = triangle_mask(n, Uplo.parse(uplo))
        a = random_array(domain, (n, k))
        c = np.full(n * n, np.nan, dtype=domain.dtype)
        syrk(domain, uplo, 'N', n, k, 1, dense_to_buffer(a), n, 0, c, n)
        result = buffer_to_dense(c, n, n)
        assert not np.isnan(result[mask]).any()
        assert np.isnan(result[~mask]).all()
        assert_close(result[mask], (_wide(a) @ a.T)[mask], domain)

    @pytest.mark.parametrize("trans", ['N', 'T'])
    def test_syrk_matches_numpy(self, domain, random_array, assert_close, trans):
        n, k = 3, 5
        a = random_array(domain, (n, k) if trans == 'N' else (k, n))
        c = random_array(domain, (n, n))
        p = _op(_wide(a), trans)
        expected = -1.5 * p @ p.T + 2 * _wide(c)
        cbuf = dense_to_buffer(c)
        syrk(domain, 'U', trans, n, k, -1.5, dense_to_buffer(a), a.shape[0], 2, cbuf, n)
        mask = triangle_mask(n, Uplo.UPPER)
        assert_close(buffer_to_dense(cbuf, n, n)[mask], expected[mask], domain)

    def test_real_syrk_accepts_conj_trans(self, real_domain, random_array, assert_close):
        a = random_array(real_domain, (2, 3))
        c_t = np.zeros(9, dtype=real_domain.dtype)
        c_c = np.zeros(9, dtype=real_domain.dtype)
        syrk(real_domain, 'L', 'T', 3, 2, 1, dense_to_buffer(a), 2, 0, c_t, 3)
        syrk(real_domain, 'L', 'C', 3, 2, 1, dense_to_buffer(a), 2, 0, c_c, 3)
        np.testing.assert_array_equal(c_t, c_c)

    def test_complex_syrk_rejects_conj_trans(self, complex_domain):
        with pytest.raises(ModifierError, match="syrk"):
            syrk(complex_domain, 'U', 'C', 1, 1, 1, np.ones(1, dtype=complex_domain.dtype), 1,
                 0, np.zeros(1, dtype=complex_domain.dtype), 1)

    def test_herk_rejects_trans(self, complex_domain):
        with pytest.raises(ModifierError, match="herk"):
            herk(complex_domain, 'U', 'T', 1, 1, 1, np.ones(1, dtype=complex_domain.dtype), 1,
                 0, np.zeros(1, dtype=complex_domain.dtype), 1)

    @pytest.mark.parametrize("trans", ['N', 'C'])
    @pytest.mark.parametrize("uplo", ['U', 'L'])
    def test_herk(self, complex_domain, random_array, assert_close, trans, uplo):
        domain = complex_domain
        n, k = 3, 2
        mask = triangle_mask(n, Uplo.parse(uplo))
        a = random_array(domain, (n, k) if trans == 'N' else (k, n))
        c = random_array(domain, (n, n))
        c = ((c + c.conj().T) / 2 + 4j * np.eye(n)).astype(domain.dtype)
        p = _op(_wide(a), trans)
        c_hermitian = _wide(c) - 4j * np.eye(n)
        expected = 0.5 * p @ p.conj().T + 2 * c_hermitian
        cbuf = dense_to_buffer(c)
        herk(domain, uplo, trans, n, k, 0.5, dense_to_buffer(a), a.shape[0], 2, cbuf, n)
        result = buffer_to_dense(cbuf, n, n)
        assert_close(result[mask], expected[mask], domain)
        assert np.all(result.diagonal().imag == 0)

    def test_herk_rejects_complex_alpha(self, complex_domain):
        with pytest.raises(ValidationError):
            herk(complex_domain, 'U', 'N', 1, 1, 1j, np.ones(1, dtype=complex_domain.dtype), 1,
                 0, np.zeros(1, dtype=complex_domain.dtype), 1)

    @pytest.mark.parametrize("trans", ['N', 'T'])
    def test_syr2k(self, domain, random_array, assert_close, trans):
        n, k = 3, 2
        shape = (n, k) if trans == 'N' else (k, n)
        a = random_array(domain, shape)
        b = random_array(domain, shape)
        c = random_array(domain, (n, n))
        alpha = 1 + 1j if domain.is_complex else 1.25
        pa, pb = _op(_wide(a), trans), _op(_wide(b), trans)
        expected = alpha * pa @ pb.T + alpha * pb @ pa.T - _wide(c)
        cbuf = dense_to_buffer(c)
        syr2k(domain, 'L', trans, n, k, alpha, dense_to_buffer(a), shape[0],
              dense_to_buffer(b), shape[0], -1, cbuf, n)
        mask = triangle_mask(n, Uplo.LOWER)
        assert_close(buffer_to_dense(cbuf, n, n)[mask], expected[mask], domain)

    @pytest.mark.parametrize("trans", ['N', 'C'])
    def test_her2k(self, complex_domain, random_array, assert_close, trans):
        domain = complex_domain
        n, k = 3, 4
        shape = (n, k) if trans == 'N' else (k, n)
        a = random_array(domain, shape)
        b = random_array(domain, shape)
        alpha = 0.5 - 2j
        pa, pb = _op(_wide(a), trans), _op(_wide(b), trans)
        expected = alpha * pa @ pb.conj().T + np.conj(alpha) * pb @ pa.conj().T
        cbuf = np.full(n * n, np.nan, dtype=domain.dtype)
        her2k(domain, 'U', trans, n, k, alpha, dense_to_buffer(a), shape[0],
              dense_to_buffer(b), shape[0], 0, cbuf, n)
        mask = triangle_mask(n, Uplo.UPPER)
        result = buffer_to_dense(cbuf, n, n)
        assert_close(result[mask], expected[mask], domain)
        assert np.isnan(result[~mask]).all()

    def test_alpha_zero_beta_one_is_noop(self, domain):
        c = np.full(4, np.nan, dtype=domain.dtype)
        syrk(domain, 'U', 'N', 2, 2, 0, np.full(4, np.nan, dtype=domain.dtype), 2, 1, c, 2)
        assert np.isnan(c).all()


# ═══════════════════════════════════════════════════════════════════════
# trmm / trsm
# ═══════════════════════════════════════════════════════════════════════


def _triangle(random_array, domain, n, uplo):
    t = random_array(domain, (n, n)) + n * np.eye(n)
    t = np.triu(t) if uplo == 'U' else np.tril(t)
    return t.astype(domain.dtype)


class TestTriangularMM:

    @pytest.mark.parametrize("side", ['L', 'R'])
    @pytest.mark.parametrize("uplo", ['U', 'L'])
    @pytest.mark.parametrize("transa", ['N', 'T', 'C'])
    @pytest.mark.parametrize("diag", ['N', 'U'])
    def test_trmm_and_trsm(self, domain, random_array, assert_close, side, uplo, transa, diag):
        m, n = 3, 2
        ka = m if side == 'L' else n
        t = _triangle(random_array, domain, ka, uplo)
        logical = _op(_wide(t), transa)
        if diag == 'U':
            logical = _wide(t)
            np.fill_diagonal(logical, 1)
            logical = _op(logical, transa)
        b = random_array(domain, (m, n))
        alpha = 2 - 1j if domain.is_complex else 2.0
        abuf = dense_to_buffer(t)

        bm = dense_to_buffer(b)
        trmm(domain, side, uplo, transa, diag, m, n, alpha, abuf, ka, bm, m)
        expected = alpha * (logical @ b if side == 'L' else _wide(b) @ logical)
        assert_close(buffer_to_dense(bm, m, n), expected, domain)

        bs = dense_to_buffer(b)
        trsm(domain, side, uplo, transa, diag, m, n, alpha, abuf, ka, bs, m)
        if side == 'L':
            expected = np.linalg.solve(logical, alpha * _wide(b))
        else:
            expected = np.linalg.solve(logical.T, (alpha * _wide(b)).T).T
        assert_close(buffer_to_dense(bs, m, n), expected, domain, solve=True)

    def test_trsm_undoes_trmm(self, domain, random_array, assert_close):
        t = _triangle(random_array, domain, 3, 'L')
        b = random_array(domain, (3, 2))
        buf = dense_to_buffer(b)
        trmm(domain, 'L', 'L', 'N', 'N', 3, 2, 1, dense_to_buffer(t), 3, buf, 3)
        trsm(domain, 'L', 'L', 'N', 'N', 3, 2, 1, dense_to_buffer(t), 3, buf, 3)
        assert_close(buffer_to_dense(buf, 3, 2), b, domain, solve=True)

    def test_alpha_zero_zeroes_b_without_reading(self, domain):
        a = np.full(4, np.nan, dtype=domain.dtype)
        b = np.full(4, np.nan, dtype=domain.dtype)
        trsm(domain, 'L', 'U', 'N', 'N', 2, 2, 0, a, 2, b, 2)
        np.testing.assert_array_equal(b, [0, 0, 0, 0])

    def test_zero_pivot(self, domain):
        a = dense_to_buffer(np.array([[0.0, 1.0], [0.0, 1.0]]), dtype=domain.dtype)
        b = np.ones(4, dtype=domain.dtype)
        with pytest.raises(SingularMatrixError):
            trsm(domain, 'R', 'U', 'N', 'N', 2, 2, 1, a, 2, b, 2)
        np.testing.assert_array_equal(b, [1, 1, 1, 1])

    def test_side_sets_a_shape(self, domain):
        # side='R' makes A n x n; lda=2 cannot hold a 3 x 3 matrix
        with pytest.raises(DimensionError, match="lda"):
            trmm(domain, 'R', 'U', 'N', 'N', 2, 3, 1, np.ones(9, dtype=domain.dtype), 2,
                 np.ones(6, dtype=domain.dtype), 2)

    def test_invalid_side(self, domain):
        with pytest.raises(ModifierError):
            trmm(domain, 'X', 'U', 'N', 'N', 1, 1, 1, np.ones(1, dtype=domain.dtype), 1,
                 np.ones(1, dtype=domain.dtype), 1)

    def test_b_aliasing_a(self, domain):
        buf = np.ones(6, dtype=domain.dtype)
        with pytest.raises(AliasingError):
            trmm(domain, 'L', 'U', 'N', 'N', 2, 1, 1, buf[:4], 2, buf[3:5], 2)
