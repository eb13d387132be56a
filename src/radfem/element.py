from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .basis import lagrange_basis
from .grid import affine_map, gauss_legendre, gauss_lobatto
from .quadrature import derivative_integral, radial_integral, twoe_inner_integral, twoe_integral
from .utils import check_quadrature

__all__ = ["RadialElement"]


@dataclass(frozen=True, eq=False)
class RadialElement:
    r"""单个径向有限元的求积输入。

    Attributes
    ----------
    rmin, rmax : float
        单元端点，:math:`r_\max > r_\min`。
    x, wx : numpy.ndarray
        参考区间 :math:`[-1,1]` 上的求积节点与权重 (shape: [N])。
    bf : numpy.ndarray
        基函数在节点处的数值 (shape: [N, M])。
    dbf : numpy.ndarray | None
        基函数对参考坐标 x 的导数 (shape: [N, M])；不需要动能矩阵时可省略。
    """

    rmin: float
    rmax: float
    x: np.ndarray
    wx: np.ndarray
    bf: np.ndarray
    dbf: np.ndarray | None = None

    def __post_init__(self):
        if self.rmax <= self.rmin:
            raise ValueError(f"要求 rmax > rmin: rmin={self.rmin}, rmax={self.rmax}")
        x, wx, bf = check_quadrature(self.x, self.wx, self.bf)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "wx", wx)
        object.__setattr__(self, "bf", bf)
        if self.dbf is not None:
            _, _, dbf = check_quadrature(self.x, self.wx, self.dbf, name="dbf")
            object.__setattr__(self, "dbf", dbf)
            if self.dbf.shape != self.bf.shape:
                raise ValueError(f"dbf 形状 {self.dbf.shape} 与 bf 形状 {self.bf.shape} 不一致")

    @classmethod
    def lip(cls, rmin: float, rmax: float, nnodes: int, nquad: int) -> "RadialElement":
        """以 Gauss-Lobatto 节点上的 LIP 基与 Gauss-Legendre 求积构造单元。"""
        nodes, _ = gauss_lobatto(nnodes)
        x, wx = gauss_legendre(nquad)
        bf, dbf = lagrange_basis(nodes, x)
        return cls(rmin=rmin, rmax=rmax, x=x, wx=wx, bf=bf, dbf=dbf)

    @property
    def nbf(self) -> int:
        return self.bf.shape[1]

    @property
    def r(self) -> np.ndarray:
        """物理求积节点。"""
        return affine_map(self.rmin, self.rmax, self.x)[0]

    def overlap(self) -> np.ndarray:
        return radial_integral(self.rmin, self.rmax, 0, self.x, self.wx, self.bf)

    def radial_moment(self, n: int) -> np.ndarray:
        r""":math:`\int r^n B_i B_j\, dr`，如 n=-1 核吸引、n=-2 离心项。"""
        return radial_integral(self.rmin, self.rmax, n, self.x, self.wx, self.bf)

    def kinetic(self) -> np.ndarray:
        r"""径向动能矩阵 :math:`\tfrac{1}{2}\int B'_i B'_j\, dr`。"""
        if self.dbf is None:
            raise ValueError("动能矩阵需要基函数导数 dbf")
        return 0.5 * derivative_integral(self.rmin, self.rmax, self.x, self.wx, self.dbf)

    def twoe_inner(self, L: int) -> np.ndarray:
        return twoe_inner_integral(self.rmin, self.rmax, self.x, self.wx, self.bf, L)

    def twoe(self, L: int) -> np.ndarray:
        return twoe_integral(self.rmin, self.rmax, self.x, self.wx, self.bf, L)

    def twoe_multipoles(self, lmax: int, verbose: bool = False) -> list[np.ndarray]:
        """返回 L = 0..lmax 各阶单元内双电子积分矩阵。"""
        if lmax < 0:
            raise ValueError(f"lmax 必须非负，当前值: {lmax}")
        out = []
        for L in range(lmax + 1):
            tei = self.twoe(L)
            if verbose:
                print(
                    f"[radfem twoe] L={L} [{self.rmin:.3e}, {self.rmax:.3e}] "
                    f"shape={tei.shape} max|tei|={np.max(np.abs(tei)):.3e}"
                )
            out.append(tei)
        return out
