import numpy as np
import pytest

from radfem.grid import affine_map, gauss_chebyshev, gauss_legendre, gauss_lobatto


@pytest.mark.grid
@pytest.mark.quick
def test_affine_map_endpoints_and_jacobian():
    r, rlen = affine_map(1.0, 3.0, np.array([-1.0, 0.0, 1.0]))
    assert np.allclose(r, [1.0, 2.0, 3.0])
    assert rlen == 1.0


@pytest.mark.grid
def test_affine_map_requires_rmax_gt_rmin():
    with pytest.raises(ValueError, match="rmax > rmin"):
        affine_map(2.0, 2.0, np.zeros(3))


@pytest.mark.grid
@pytest.mark.quick
def test_gauss_legendre_integral_of_one():
    x, wx = gauss_legendre(7)
    # ∫_{-1}^{1} 1 dx = 2
    assert np.isclose(np.sum(wx), 2.0, rtol=0, atol=1e-14)
    assert np.all(np.diff(x) > 0)


@pytest.mark.grid
def test_gauss_legendre_polynomial_exactness():
    n = 5
    x, wx = gauss_legendre(n)
    # 2n-1 = 9 次多项式精确
    for p in range(2 * n):
        exact = (1.0 - (-1.0) ** (p + 1)) / (p + 1)
        assert np.isclose(np.sum(wx * x**p), exact, atol=1e-13), f"p={p}"


@pytest.mark.grid
def test_gauss_lobatto_includes_endpoints():
    x, wx = gauss_lobatto(6)
    assert x[0] == pytest.approx(-1.0, abs=1e-14)
    assert x[-1] == pytest.approx(1.0, abs=1e-14)
    assert np.all(np.diff(x) > 0)
    assert np.all(wx > 0)
    assert np.isclose(np.sum(wx), 2.0, atol=1e-13)


@pytest.mark.grid
def test_gauss_lobatto_polynomial_exactness():
    n = 6
    x, wx = gauss_lobatto(n)
    # 2n-3 = 9 次多项式精确
    for p in range(2 * n - 2):
        exact = (1.0 - (-1.0) ** (p + 1)) / (p + 1)
        assert np.isclose(np.sum(wx * x**p), exact, atol=1e-13), f"p={p}"


@pytest.mark.grid
def test_gauss_lobatto_two_points_is_trapezoid():
    x, wx = gauss_lobatto(2)
    assert np.allclose(x, [-1.0, 1.0])
    assert np.allclose(wx, [1.0, 1.0])


@pytest.mark.grid
def test_quadrature_sizes_must_be_positive():
    with pytest.raises(ValueError, match="n 必须 >= 1"):
        gauss_legendre(0)
    with pytest.raises(ValueError, match="n >= 2"):
        gauss_lobatto(1)


@pytest.mark.grid
def test_gauss_lobatto_warns_when_newton_not_converged():
    with pytest.warns(RuntimeWarning, match="未收敛"):
        x, wx = gauss_lobatto(8, maxiter=1)
    assert x.shape == wx.shape == (8,)


@pytest.mark.grid
def test_gauss_chebyshev_weights_and_order():
    x, wx = gauss_chebyshev(20)
    assert np.all(np.diff(x) > 0)
    assert np.all((x > -1.0) & (x < 1.0))
    assert np.all(wx > 0)
    # Σ sin⁴(iπ/(n+1)) = 3(n+1)/8
    assert np.isclose(np.sum(wx), 2.0, atol=1e-13)


@pytest.mark.grid
def test_gauss_chebyshev_smooth_integrals():
    x, wx = gauss_chebyshev(99)
    assert np.isclose(np.sum(wx * x**2), 2.0 / 3.0, atol=1e-6)
    assert np.isclose(np.sum(wx * np.cos(x)), 2.0 * np.sin(1.0), atol=1e-6)
    with pytest.raises(ValueError, match="n 必须 >= 1"):
        gauss_chebyshev(0)
