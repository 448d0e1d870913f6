"""
Tests for Givens and modified Givens rotation setup.

References: classic drotg/zrotg/drotmg conventions.
"""

import numpy as np
import pytest

from pyblas.core.exceptions import AliasingError, UnsupportedOperationError, ValidationError
from pyblas.level1 import dot, rot, rotg, rotm, rotmg
from pyblas.level1.rotation import ModifiedGivens


# ═══════════════════════════════════════════════════════════════════════
# rotg
# ═══════════════════════════════════════════════════════════════════════


class TestRotg:

    def test_three_four(self, domain):
        g = rotg(domain, 3, 4)
        np.testing.assert_allclose(abs(g.r), 5.0, rtol=1e-6)
        r, zero = g.apply_to(domain.dtype.type(3), domain.dtype.type(4))
        np.testing.assert_allclose(r, g.r, rtol=1e-6)
        assert abs(zero) < 1e-6

    def test_real_sign_convention(self, real_domain):
        g = rotg(real_domain, 3, 4)
        np.testing.assert_allclose([g.c, g.s, g.r], [0.6, 0.8, 5.0], rtol=1e-6)

    def test_real_cosine_nonnegative_when_a_dominates(self, real_domain):
        g = rotg(real_domain, -4, 3)
        assert g.c >= 0
        assert g.r < 0

    def test_real_reconstruction_value(self, real_domain):
        assert rotg(real_domain, 4, 3).z == pytest.approx(0.6, rel=1e-6)
        assert rotg(real_domain, 3, 4).z == pytest.approx(1 / 0.6, rel=1e-6)

    def test_real_zero_inputs(self, real_domain):
        g = rotg(real_domain, 0, 0)
        assert (g.c, g.s, g.r, g.z) == (1, 0, 0, 0)

    def test_complex_zeroes_second_component(self, complex_domain):
        a, b = 1 + 2j, -3 + 0.5j
        g = rotg(complex_domain, a, b)
        assert np.isrealobj(g.c)
        assert g.z is None
        r, zero = g.apply_to(complex_domain.dtype.type(a), complex_domain.dtype.type(b))
        np.testing.assert_allclose(r, g.r, rtol=1e-5)
        assert abs(zero) < 1e-5
        np.testing.assert_allclose(abs(g.r), np.hypot(abs(a), abs(b)), rtol=1e-5)

    def test_complex_zero_a(self, complex_domain):
        g = rotg(complex_domain, 0, 2 + 1j)
        assert g.c == 0
        assert g.s == 1
        assert g.r == 2 + 1j

    def test_rot_applies_setup(self, domain):
        g = rotg(domain, 3, 4)
        x = np.array([3], dtype=domain.dtype)
        y = np.array([4], dtype=domain.dtype)
        rot(domain, 1, x, 1, y, 1, g.c, g.s)
        np.testing.assert_allclose(x, [g.r], rtol=1e-6)
        assert abs(y[0]) < 1e-6


# ═══════════════════════════════════════════════════════════════════════
# rotmg / rotm
# ═══════════════════════════════════════════════════════════════════════


class TestRotmg:

    def test_zeroes_second_component(self, real_domain):
        d1, d2, x1, param = rotmg(real_domain, 1.0, 1.0, 3.0, 4.0)
        assert param.flag == 1
        rotated = param.matrix @ np.array([3.0, 4.0])
        np.testing.assert_allclose(rotated, [x1, 0.0], atol=1e-6)

    def test_scaled_result_is_norm(self, real_domain):
        d1, d2, x1, _ = rotmg(real_domain, 1.0, 1.0, 3.0, 4.0)
        np.testing.assert_allclose(np.sqrt(d1) * x1, 5.0, rtol=1e-6)

    def test_flag_zero_branch(self, real_domain):
        d1, d2, x1, param = rotmg(real_domain, 1.0, 1.0, 4.0, 3.0)
        assert param.flag == 0
        assert param.h11 == 1 and param.h22 == 1
        rotated = param.matrix @ np.array([4.0, 3.0])
        np.testing.assert_allclose(rotated[1], 0.0, atol=1e-6)

    def test_zero_y_gives_identity(self, real_domain):
        _, _, x1, param = rotmg(real_domain, 2.0, 3.0, 5.0, 0.0)
        assert param.flag == -2
        assert x1 == 5

    def test_negative_d1_zeroes_everything(self, real_domain):
        d1, d2, x1, param = rotmg(real_domain, -1.0, 1.0, 3.0, 4.0)
        assert param.flag == -1
        assert (d1, d2, x1) == (0, 0, 0)

    def test_rescaling_makes_full_matrix(self, real_domain):
        d1, d2, x1, param = rotmg(real_domain, 1e-9, 1.0, 1.0, 1.0)
        assert param.flag == -1
        assert 1 / 4096.0 ** 2 < d1 < 4096.0 ** 2

    def test_complex_rejected(self, complex_domain):
        with pytest.raises(UnsupportedOperationError):
            rotmg(complex_domain, 1.0, 1.0, 3.0, 4.0)


class TestModifiedGivens:

    def test_from_array_fills_implied_entries(self):
        param = ModifiedGivens.from_array(np.array([0.0, 9.0, 0.5, 0.25, 9.0]))
        np.testing.assert_array_equal(param.as_array(), [0.0, 1.0, 0.5, 0.25, 1.0])

    def test_flag_one_entries(self):
        param = ModifiedGivens.from_array(np.array([1.0, 0.5, 9.0, 9.0, 0.75]))
        np.testing.assert_array_equal(param.matrix, [[0.5, 1.0], [-1.0, 0.75]])

    def test_roundtrip_is_exact(self, real_domain):
        _, _, _, param = rotmg(real_domain, 1.0, 1.0, 3.0, 4.0)
        again = ModifiedGivens.from_array(param.as_array(real_domain.dtype))
        np.testing.assert_array_equal(again.as_array(), param.as_array())

    @pytest.mark.parametrize("bad", [[2.0, 1, 1, 1, 1], [0.0, 1, 1, 1]])
    def test_invalid_param(self, bad):
        with pytest.raises(ValidationError):
            ModifiedGivens.from_array(np.array(bad))

    def test_rotm_matches_matrix(self, real_domain, random_array, assert_close):
        x = random_array(real_domain, 4)
        y = random_array(real_domain, 4)
        param = np.array([-1.0, 0.5, -0.25, 2.0, 1.5], dtype=real_domain.dtype)
        h = ModifiedGivens.from_array(param).matrix.astype(np.float64)
        expected = h @ np.vstack([x, y]).astype(np.float64)
        rotm(real_domain, 4, x, 1, y, 1, param)
        assert_close(x, expected[0], real_domain)
        assert_close(y, expected[1], real_domain)

    def test_rotm_identity_flag_is_noop(self, real_domain):
        x = np.array([1.0, 2.0], dtype=real_domain.dtype)
        y = np.array([3.0, 4.0], dtype=real_domain.dtype)
        rotm(real_domain, 2, x, 1, y, 1, [-2.0, 7.0, 7.0, 7.0, 7.0])
        np.testing.assert_array_equal(x, [1.0, 2.0])
        np.testing.assert_array_equal(y, [3.0, 4.0])

    def test_rotm_applies_rotmg_result(self, real_domain):
        _, _, x1, param = rotmg(real_domain, 1.0, 1.0, 3.0, 4.0)
        x = np.array([3.0], dtype=real_domain.dtype)
        y = np.array([4.0], dtype=real_domain.dtype)
        rotm(real_domain, 1, x, 1, y, 1, param)
        np.testing.assert_allclose(x, [x1], rtol=1e-6)
        assert abs(y[0]) < 1e-6

    def test_rotm_same_buffer_rejected(self, real_domain):
        x = np.array([1.0, 2.0], dtype=real_domain.dtype)
        with pytest.raises(AliasingError):
            rotm(real_domain, 2, x, 1, x, 1, [-1.0, 0.5, -0.25, 2.0, 1.5])
        np.testing.assert_array_equal(x, [1.0, 2.0])

    @pytest.mark.parametrize("n", [0, -1])
    def test_rotm_complex_rejected_even_when_empty(self, complex_domain, n):
        x = np.ones(1, dtype=complex_domain.dtype)
        with pytest.raises(UnsupportedOperationError):
            rotm(complex_domain, n, x, 1, x.copy(), 1, [-2.0, 1, 0, 0, 1])

    @pytest.mark.parametrize("n", [0, -1])
    def test_dot_complex_rejected_even_when_empty(self, complex_domain, n):
        x = np.ones(1, dtype=complex_domain.dtype)
        with pytest.raises(UnsupportedOperationError):
            dot(complex_domain, n, x, 1, x, 1)
