"""radfem 包
=================

径向有限元基组的单元积分核心：给定单元内求积节点上的基函数数值，计算

- 加权重叠/径向矩矩阵 :math:`\\int r^n B_i B_j dr`
- 导数（动能型）矩阵
- 基于 Legendre 多极展开的单元内双电子积分（O(N) 累积求和）
- 四指标积分张量的库仑/交换型重排

求积规则生成与 LIP 基函数求值作为辅助工具一并提供。

注：本项目所有文档与注释均使用中文，Docstring 采用 Sphinx + NumPy 风格，公式使用 ``:math:`` 标记。
"""

from radfem.utils import DimensionMismatch, InvalidMultipoleOrder
from radfem.grid import affine_map, gauss_legendre, gauss_lobatto, gauss_chebyshev
from radfem.basis import lagrange_basis
from radfem.quadrature import (
    radial_integral,
    derivative_integral,
    twoe_inner_integral,
    twoe_integral,
)
from radfem.tensor import product_tei, exchange_tei
from radfem.element import RadialElement

__all__ = [
    "DimensionMismatch",
    "InvalidMultipoleOrder",
    "affine_map",
    "gauss_legendre",
    "gauss_lobatto",
    "gauss_chebyshev",
    "lagrange_basis",
    "radial_integral",
    "derivative_integral",
    "twoe_inner_integral",
    "twoe_integral",
    "product_tei",
    "exchange_tei",
    "RadialElement",
]

__version__ = "0.1.0"
