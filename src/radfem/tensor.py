r"""四指标双电子积分张量的重排

四指标积分以二维矩阵存储：行为指标对 :math:`(i,j)`，列为指标对 :math:`(k,l)`，
展平约定见 :func:`radfem.utils.pair_index`（列优先，``j*Ni + i``）。

- :func:`product_tei`：两个二指标积分的张量积块 :math:`(ij|kl) = A_{ij} B_{kl}`，
  用于跨单元、可分离的双电子积分块。
- :func:`exchange_tei`：由库仑型存储 :math:`(ij|kl)` 得到交换能收缩所需的重排张量。
"""

from __future__ import annotations

import numpy as np

from .utils import DimensionMismatch, flatten_pairs, flatten_tei, unflatten_tei

__all__ = ["product_tei", "exchange_tei"]


def product_tei(ijint: np.ndarray, klint: np.ndarray) -> np.ndarray:
    r"""由两个二指标矩阵构造 :math:`(N_iN_j)\times(N_kN_l)` 的张量积块。

    .. math::
        \mathrm{out}[(i,j),(k,l)] = \mathrm{ijint}_{ij}\,\mathrm{klint}_{kl}

    Parameters
    ----------
    ijint : numpy.ndarray
        形状 (Ni, Nj)。
    klint : numpy.ndarray
        形状 (Nk, Nl)。

    Returns
    -------
    numpy.ndarray
        形状 (Ni*Nj, Nk*Nl)。

    Raises
    ------
    DimensionMismatch
        ijint 或 klint 不是二维矩阵。
    """
    if ijint.ndim != 2 or klint.ndim != 2:
        raise DimensionMismatch(f"ijint 与 klint 必须是二维矩阵: {ijint.ndim}, {klint.ndim}")
    return np.outer(flatten_pairs(ijint), flatten_pairs(klint))


def exchange_tei(tei: np.ndarray, Ni: int, Nj: int, Nk: int, Nl: int) -> np.ndarray:
    r"""将 :math:`(ij|kl)` 存储的张量重排为交换型排列。

    输出形状为 (Nj*Nk, Ni*Nl)，满足

    .. math::
        \mathrm{out}[k N_j + j,\ l N_i + i] = \mathrm{tei}[j N_i + i,\ l N_k + k].

    以四指标数组表示即 ``U[j, k, i, l] = T[i, j, k, l]``：前三个指标循环轮换，
    第四个指标不动。该置换的阶为 3，依次以 ``(Ni, Nj, Nk, Nl)``、
    ``(Nj, Nk, Ni, Nl)``、``(Nk, Ni, Nj, Nl)`` 调用三次即回到原张量。

    Raises
    ------
    DimensionMismatch
        ``tei`` 形状不等于 (Ni*Nj, Nk*Nl)。
    """
    t = unflatten_tei(tei, Ni, Nj, Nk, Nl)
    return flatten_tei(t.transpose(1, 2, 0, 3))
