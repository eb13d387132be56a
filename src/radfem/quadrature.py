r"""单元内径向积分模块

本模块在单个径向有限元 :math:`[r_\min, r_\max]` 上，以调用方提供的求积规则
:math:`(x_k, w_k)` 与基函数数值矩阵 ``bf`` 计算矩阵元。

单电子积分
==========

.. math::

    S^{(n)}_{ij} &= \int_{r_\min}^{r_\max} r^n\, B_i(r) B_j(r)\, dr
                 \approx \sum_k w_k\, r_\mathrm{len}\, r_k^n\, B_i(x_k) B_j(x_k) \\
    T_{ij} &= \int B'_i(r) B'_j(r)\, dr
            \approx \sum_k \frac{w_k}{r_\mathrm{len}}\, \frac{dB_i}{dx}(x_k) \frac{dB_j}{dx}(x_k)

后者的 Jacobian 贡献 :math:`+1` 次 :math:`r_\mathrm{len}`，两次求导各贡献 :math:`-1` 次。

双电子积分：累积求和（O(N)）
============================

库仑核的 Legendre 展开

.. math::

    \frac{1}{|\mathbf r_1 - \mathbf r_2|}
    = \sum_L \frac{r_<^L}{r_>^{L+1}} P_L(\cos\gamma)

把径向二重积分拆成“内层”与“外层”。内层积分

.. math::

    I_{ij}(r) = \int_{r_\min}^{r} \left(\frac{r'}{r_\max}\right)^L B_i(r') B_j(r')\, dr'

对求积节点按半径递增做前缀和即可一次得到全部 :math:`I_{ij}(r_k)`，
再与外层 :math:`1/r` 加权的乘积函数做一次矩阵乘法：

.. math::

    (ij|kl)_L = \frac{4\pi}{2L+1} \sum_p \frac{w_p r_\mathrm{len}}{r_p} B_i B_j(r_p)\, I_{kl}(r_p)
    \;+\; (ij \leftrightarrow kl).

第二项（:math:`r_> / r_<` 角色互换）由转置对称化给出，无需第二次求积。
总代价为 :math:`O(N M^4)` 而非朴素二重求积的 :math:`O(N^2 M^4)`。

数值稳定性
==========

- **r→0**: 外层权重 :math:`1/r` 在 :math:`r=0` 处发散；产生的 NaN/Inf 一律置零，
  对应基函数在原点处可忽略的振幅，而非计算失败。
- 所有运算为 float64，不暴露任何容差参数；精度完全由求积规则决定。
"""

from __future__ import annotations

import numpy as np

from .grid import affine_map
from .utils import check_multipole, check_quadrature, flatten_pairs

__all__ = [
    "radial_integral",
    "derivative_integral",
    "pair_products",
    "twoe_inner_integral",
    "regularize",
    "twoe_integral",
]


def radial_integral(
    rmin: float,
    rmax: float,
    n: int,
    x: np.ndarray,
    wx: np.ndarray,
    bf: np.ndarray,
) -> np.ndarray:
    r"""计算加权 Gram 矩阵 :math:`\int r^n B_i B_j\, dr`。

    Parameters
    ----------
    rmin, rmax : float
        单元端点。
    n : int
        径向幂次（n=0 为重叠矩阵）。
    x, wx : numpy.ndarray
        参考区间求积节点与权重 (shape: [N])。
    bf : numpy.ndarray
        基函数数值 (shape: [N, M])。

    Returns
    -------
    numpy.ndarray
        对称矩阵 (shape: [M, M])。

    Raises
    ------
    DimensionMismatch
        节点、权重与 ``bf`` 行数不一致。
    """
    x, wx, bf = check_quadrature(x, wx, bf)
    r, rlen = affine_map(rmin, rmax, x)

    wp = wx * rlen
    if n != 0:
        wp = wp * r**n

    wbf = bf * wp[:, None]
    return wbf.T @ bf


def derivative_integral(
    rmin: float,
    rmax: float,
    x: np.ndarray,
    wx: np.ndarray,
    dbf: np.ndarray,
) -> np.ndarray:
    r"""计算导数 Gram 矩阵 :math:`\int B'_i B'_j\, dr`（动能型算子）。

    ``dbf`` 为对参考坐标 x 的导数；节点权重为 :math:`w_k / r_\mathrm{len}`。
    """
    x, wx, dbf = check_quadrature(x, wx, dbf, name="dbf")
    _, rlen = affine_map(rmin, rmax, x)

    wdbf = dbf * (wx / rlen)[:, None]
    return wdbf.T @ dbf


def pair_products(bf: np.ndarray) -> np.ndarray:
    """逐节点的基函数乘积 ``bf_i * bf_j``，按指标对展平为 (N, M*M)。"""
    return flatten_pairs(bf[:, :, None] * bf[:, None, :])


def twoe_inner_integral(
    rmin: float,
    rmax: float,
    x: np.ndarray,
    wx: np.ndarray,
    bf: np.ndarray,
    L: int,
) -> np.ndarray:
    r"""计算双电子积分的内层累积积分。

    .. math::

        I_{ij}(r_k) = \sum_{p \le k} w_p\, r_\mathrm{len}
        \left(\frac{r_p}{r_\max}\right)^L B_i(r_p) B_j(r_p)

    Parameters
    ----------
    rmin, rmax : float
        单元端点。
    x, wx : numpy.ndarray
        求积节点与权重 (shape: [N])，节点需按升序排列。
    bf : numpy.ndarray
        基函数数值 (shape: [N, M])。
    L : int
        多极指标 (L >= 0)。

    Returns
    -------
    numpy.ndarray
        前缀和矩阵 (shape: [N, M*M])；第 k 行为积分到第 k 个节点（含）为止的值。

    Notes
    -----
    **算法复杂度**: :math:`O(N M^2)`。前缀和对每个外层点复用，
    这正是整个双电子积分避免 :math:`O(N^2)` 二重求积的关键。
    """
    x, wx, bf = check_quadrature(x, wx, bf)
    check_multipole(L)

    r, rlen = affine_map(rmin, rmax, x)
    return _running_inner(pair_products(bf), r, rlen, rmax, wx, L)


def _running_inner(
    bfprod: np.ndarray, r: np.ndarray, rlen: float, rmax: float, wx: np.ndarray, L: int
) -> np.ndarray:
    # 输入已校验；供 twoe_integral 复用乘积与映射
    fracr = r / rmax

    wp = wx * rlen
    if L == 1:
        wp = wp * fracr
    elif L == 2:
        wp = wp * np.square(fracr)
    elif L > 2:
        wp = wp * fracr**L

    inner = bfprod * wp[:, None]
    return np.cumsum(inner, axis=0)


def regularize(a: np.ndarray) -> np.ndarray:
    """将非有限值（NaN、±Inf）置为 0.0，原地修改并返回。"""
    a[~np.isfinite(a)] = 0.0
    return a


def twoe_integral(
    rmin: float,
    rmax: float,
    x: np.ndarray,
    wx: np.ndarray,
    bf: np.ndarray,
    L: int,
) -> np.ndarray:
    r"""计算单元内多极阶 L 的双电子积分矩阵 :math:`(ij|kl)_L`。

    Parameters
    ----------
    rmin, rmax : float
        单元端点。
    x, wx : numpy.ndarray
        求积节点与权重 (shape: [N])。
    bf : numpy.ndarray
        基函数数值 (shape: [N, M])。
    L : int
        多极指标 (L >= 0)。

    Returns
    -------
    numpy.ndarray
        对称矩阵 (shape: [M*M, M*M])，行列均按 :func:`radfem.utils.pair_index` 展平。

    Raises
    ------
    DimensionMismatch
        维度不一致。
    InvalidMultipoleOrder
        L < 0。

    Examples
    --------
    >>> x, wx = gauss_legendre(40)
    >>> bf, _ = lagrange_basis(gauss_lobatto(4)[0], x)
    >>> tei = twoe_integral(0.0, 5.0, x, wx, bf, L=0)
    >>> tei.shape
    (16, 16)
    """
    x, wx, bf = check_quadrature(x, wx, bf)
    check_multipole(L)

    bfprod = pair_products(bf)
    r, rlen = affine_map(rmin, rmax, x)

    inner = _running_inner(bfprod, r, rlen, rmax, wx, L)

    # 外层积分：1/r 权重
    with np.errstate(divide="ignore", invalid="ignore"):
        wp = wx * rlen / r
        outer = bfprod * wp[:, None]
    regularize(outer)

    ints = 4.0 * np.pi / (2 * L + 1) * (outer.T @ inner)
    # r_> 与 r_< 互换的另一半
    return ints + ints.T
