r"""Lagrange 插值多项式（LIP）基函数

在参考区间 :math:`[-1,1]` 上，以节点 :math:`\{x_k\}` 构造 Lagrange 基：

.. math::
    \ell_k(x) = \prod_{t\neq k} \frac{x - x_t}{x_k - x_t}.

采用重心（barycentric）形式求值：

.. math::
    \ell_k(x) = \frac{\omega_k/(x-x_k)}{\sum_t \omega_t/(x-x_t)},\qquad
    \omega_k = \frac{1}{\prod_{t\neq k}(x_k - x_t)},

导数为 :math:`\ell'_k(x) = \ell_k(x)\left(\sum_t \frac{1}{x-x_t} - \frac{1}{x-x_k}\right)`。
若求值点与某节点重合，则该行取精确的单位向量，导数取节点微分矩阵

.. math::
    D_{ab} = \frac{c_a/c_b}{x_a - x_b}\ (a\neq b),\qquad D_{aa} = -\sum_{b\neq a} D_{ab},

其中 :math:`c_k = 1/\omega_k`。

返回的数值矩阵即积分核心所需的 ``bf``/``dbf`` 输入（导数对参考坐标 x）。
"""

from __future__ import annotations

import numpy as np

__all__ = ["lagrange_basis"]


def lagrange_basis(nodes: np.ndarray, x: np.ndarray, atol: float = 1e-12) -> tuple[np.ndarray, np.ndarray]:
    r"""计算 LIP 基函数及其一阶导数在求值点上的数值。

    Parameters
    ----------
    nodes : numpy.ndarray
        插值节点 :math:`x_k` (shape: [M])，M >= 2，互不相同。
    x : numpy.ndarray
        求值点 (shape: [N])。
    atol : float, optional
        判断求值点与节点重合的绝对容差。

    Returns
    -------
    bf : numpy.ndarray
        ``bf[n, k] = ℓ_k(x_n)`` (shape: [N, M])。
    dbf : numpy.ndarray
        ``dbf[n, k] = ℓ'_k(x_n)`` (shape: [N, M])。
    """
    nodes = np.asarray(nodes, dtype=float)
    x = np.asarray(x, dtype=float)
    if nodes.ndim != 1 or x.ndim != 1:
        raise ValueError("nodes 与 x 必须是一维数组")
    if nodes.size < 2:
        raise ValueError(f"至少需要 2 个插值节点，当前: {nodes.size}")
    m = nodes.size

    diffs = nodes[:, None] - nodes[None, :]
    offdiag = ~np.eye(m, dtype=bool)
    if np.any(np.abs(diffs[offdiag]) <= atol):
        raise ValueError("插值节点必须互不相同")
    c = np.where(offdiag, diffs, 1.0).prod(axis=1)
    omega = 1.0 / c

    dx = x[:, None] - nodes[None, :]
    is_nodal = np.isclose(x[:, None], nodes[None, :], rtol=0.0, atol=atol)
    nodal_row = is_nodal.any(axis=1)

    with np.errstate(divide="ignore", invalid="ignore"):
        inv_dx = 1.0 / dx
        numer = omega[None, :] * inv_dx
        bf = numer / numer.sum(axis=1, keepdims=True)
        dbf = bf * (inv_dx.sum(axis=1, keepdims=True) - inv_dx)

    # 节点处：插值性质给出单位行
    bf = np.where(nodal_row[:, None], 0.0, bf)
    bf = np.where(is_nodal, 1.0, bf)

    with np.errstate(divide="ignore", invalid="ignore"):
        D = (c[:, None] / c[None, :]) / diffs
    D = np.where(offdiag, D, 0.0)
    D[np.arange(m), np.arange(m)] = -D.sum(axis=1)

    if nodal_row.any():
        rows = np.nonzero(nodal_row)[0]
        dbf[rows] = D[np.argmax(is_nodal[rows], axis=1)]

    return bf, dbf
