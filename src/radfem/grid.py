from __future__ import annotations

import warnings

import numpy as np
from scipy.special import roots_legendre

__all__ = [
    "affine_map",
    "gauss_legendre",
    "gauss_lobatto",
    "gauss_chebyshev",
]


def affine_map(rmin: float, rmax: float, x: np.ndarray) -> tuple[np.ndarray, float]:
    r"""将参考区间 :math:`[-1,1]` 上的节点映射到物理单元 :math:`[r_\min, r_\max]`。

    .. math::
        r = r_\mathrm{mid} + r_\mathrm{len}\,x,\quad
        r_\mathrm{mid} = \tfrac{1}{2}(r_\max + r_\min),\quad
        r_\mathrm{len} = \tfrac{1}{2}(r_\max - r_\min).

    Parameters
    ----------
    rmin, rmax : float
        单元端点，要求 :math:`r_\max > r_\min`。
    x : numpy.ndarray
        参考节点。

    Returns
    -------
    r : numpy.ndarray
        物理节点。
    rlen : float
        半区间长度（Jacobian :math:`dr/dx`）。
    """
    if rmax <= rmin:
        raise ValueError(f"要求 rmax > rmin: rmin={rmin}, rmax={rmax}")
    rmid = 0.5 * (rmax + rmin)
    rlen = 0.5 * (rmax - rmin)
    return rmid + rlen * x, rlen


def gauss_legendre(n: int) -> tuple[np.ndarray, np.ndarray]:
    r"""返回 :math:`[-1,1]` 上 n 点 Gauss-Legendre 求积的节点与权重。

    对次数不超过 :math:`2n-1` 的多项式精确；不含端点。
    """
    if n < 1:
        raise ValueError("n 必须 >= 1")
    x, wx = roots_legendre(n)
    return np.asarray(x, dtype=float), np.asarray(wx, dtype=float)


def gauss_lobatto(n: int, tol: float = 1e-14, maxiter: int = 100) -> tuple[np.ndarray, np.ndarray]:
    r"""返回 :math:`[-1,1]` 上 n 点 Gauss-Lobatto 求积的节点与权重（含端点）。

    以 Chebyshev-Lobatto 点为初值，对 :math:`(1-x^2)P'_{N}(x)` 的根做 Newton 迭代，
    其中 :math:`N=n-1`。权重

    .. math::
        w_i = \frac{2}{N(N+1)\,P_N(x_i)^2}.

    对次数不超过 :math:`2n-3` 的多项式精确。节点按升序返回。
    """
    if n < 2:
        raise ValueError("Gauss-Lobatto 规则要求 n >= 2")
    N = n - 1
    x = np.cos(np.pi * np.arange(n) / N)
    P = np.zeros((n, n))
    for _ in range(maxiter):
        x_old = x
        P[0] = 1.0
        P[1] = x
        for k in range(2, n):
            P[k] = ((2 * k - 1) * x * P[k - 1] - (k - 1) * P[k - 2]) / k
        x = x_old - (x * P[N] - P[N - 1]) / (n * P[N])
        if np.max(np.abs(x - x_old)) <= tol:
            break
    else:
        warnings.warn(f"gauss_lobatto: Newton 迭代 {maxiter} 次未收敛 (n={n})", RuntimeWarning)

    # 用收敛后的节点重算 P_N
    P[0] = 1.0
    P[1] = x
    for k in range(2, n):
        P[k] = ((2 * k - 1) * x * P[k - 1] - (k - 1) * P[k - 2]) / k
    wx = 2.0 / (N * n * P[N] ** 2)
    return x[::-1].copy(), wx[::-1].copy()


def gauss_chebyshev(n: int) -> tuple[np.ndarray, np.ndarray]:
    r"""返回 :math:`[-1,1]` 上 n 点变换 Gauss-Chebyshev（第二类）求积的节点与权重。

    Pérez-Jordá, San-Fabián & Moscardó (1992) 的变换使规则直接作用于
    :math:`\int_{-1}^{1} f(x)\,dx`（无需权函数）。记 :math:`t_i = i\pi/(n+1)`，

    .. math::
        x_i &= 1 + \frac{2}{\pi}\left(1 + \tfrac{2}{3}\sin^2 t_i\right)\cos t_i \sin t_i
               - \frac{2i}{n+1}, \\
        w_i &= \frac{16}{3(n+1)} \sin^4 t_i,\qquad i = 1,\dots,n.

    权重在端点附近按 :math:`\sin^4` 衰减，适合端点处被积函数变化剧烈的径向单元。
    节点按升序返回。
    """
    if n < 1:
        raise ValueError("n 必须 >= 1")
    i = np.arange(1, n + 1)
    t = i * np.pi / (n + 1)
    s = np.sin(t)
    c = np.cos(t)
    x = 1.0 + 2.0 / np.pi * (1.0 + 2.0 / 3.0 * s**2) * c * s - 2.0 * i / (n + 1)
    wx = 16.0 / (3.0 * (n + 1)) * s**4
    return x[::-1].copy(), wx[::-1].copy()
