from __future__ import annotations

import numpy as np

__all__ = [
    "DimensionMismatch",
    "InvalidMultipoleOrder",
    "check_quadrature",
    "check_multipole",
    "pair_index",
    "flatten_pairs",
    "unflatten_tei",
    "flatten_tei",
]


class DimensionMismatch(ValueError):
    """求积节点、权重、基函数矩阵或四指标张量的维度不一致。"""


class InvalidMultipoleOrder(DimensionMismatch):
    """多极指标 L 为负。"""


def check_quadrature(
    x: np.ndarray, wx: np.ndarray, bf: np.ndarray, name: str = "bf"
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    r"""检查求积规则与基函数数值矩阵的维度约定。

    要求 ``len(x) == len(wx) == bf.shape[0]``；违反时在任何计算之前抛出
    :class:`DimensionMismatch`。

    Parameters
    ----------
    x : numpy.ndarray
        参考区间 :math:`[-1,1]` 上的求积节点 (shape: [N])。
    wx : numpy.ndarray
        求积权重 (shape: [N])。
    bf : numpy.ndarray
        节点处的基函数（或导数）数值 (shape: [N, M])。
    name : str, optional
        报错信息中使用的矩阵名称。

    Returns
    -------
    x, wx, bf : numpy.ndarray
        转换为 float64 数组后的输入（列表等序列亦可传入）。
    """
    x = np.asarray(x, dtype=float)
    wx = np.asarray(wx, dtype=float)
    bf = np.asarray(bf, dtype=float)
    if x.ndim != 1 or wx.ndim != 1:
        raise DimensionMismatch(f"x 与 wx 必须是一维数组: x.ndim={x.ndim}, wx.ndim={wx.ndim}")
    if x.size != wx.size:
        raise DimensionMismatch(f"x 与 wx 长度不一致: {x.size} vs {wx.size}")
    if bf.ndim != 2:
        raise DimensionMismatch(f"{name} 必须是二维矩阵，当前维度: {bf.ndim}")
    if x.size != bf.shape[0]:
        raise DimensionMismatch(f"x 与 {name} 行数不一致: {x.size} vs {bf.shape[0]}")
    return x, wx, bf


def check_multipole(L: int) -> None:
    """多极指标必须非负。"""
    if L < 0:
        raise InvalidMultipoleOrder(f"多极指标 L 必须非负，当前值: {L}")


def pair_index(i: int, j: int, n_first: int) -> int:
    r"""指标对 :math:`(i, j)` 的展平位置（列优先）：``j * n_first + i``。"""
    return j * n_first + i


def flatten_pairs(a: np.ndarray) -> np.ndarray:
    r"""将最后两个轴 :math:`(i, j)` 按列优先约定展平为一个指标对轴。

    形状 ``(..., Ni, Nj)`` 变为 ``(..., Ni*Nj)``，其中位置 ``j*Ni + i`` 存放
    ``a[..., i, j]``，与 :func:`pair_index` 一致。
    """
    ni, nj = a.shape[-2:]
    return np.swapaxes(a, -1, -2).reshape(a.shape[:-2] + (ni * nj,))


def unflatten_tei(tei: np.ndarray, ni: int, nj: int, nk: int, nl: int) -> np.ndarray:
    r"""将 :math:`(ij|kl)` 二维存储还原为四指标数组 ``T[i, j, k, l]``。

    Raises
    ------
    DimensionMismatch
        ``tei`` 的形状不等于 ``(ni*nj, nk*nl)``。
    """
    if tei.ndim != 2:
        raise DimensionMismatch(f"tei 必须是二维矩阵，当前维度: {tei.ndim}")
    if tei.shape[0] != ni * nj:
        raise DimensionMismatch(f"tei 行数应为 {ni * nj}，实际为 {tei.shape[0]}")
    if tei.shape[1] != nk * nl:
        raise DimensionMismatch(f"tei 列数应为 {nk * nl}，实际为 {tei.shape[1]}")
    return tei.reshape((ni, nj, nk, nl), order="F")


def flatten_tei(t: np.ndarray) -> np.ndarray:
    """:func:`unflatten_tei` 的逆：四指标数组 → ``(Ni*Nj, Nk*Nl)`` 矩阵。"""
    ni, nj, nk, nl = t.shape
    return t.reshape((ni * nj, nk * nl), order="F")
