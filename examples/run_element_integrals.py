"""单个径向有限元上的单/双电子积分

运行示例：

    python -m examples.run_element_integrals

构造 [0, 2] 上 5 节点 LIP 单元，打印重叠/动能矩阵，并检验双电子积分的对称性与交换重排。
"""
from __future__ import annotations

import numpy as np

from radfem import RadialElement, exchange_tei


def main() -> None:
    el = RadialElement.lip(0.0, 2.0, nnodes=5, nquad=20)
    M = el.nbf

    np.set_printoptions(precision=5, suppress=True)
    print("重叠矩阵 S:\n", el.overlap())
    print("动能矩阵 T:\n", el.kinetic())

    teis = el.twoe_multipoles(lmax=2, verbose=True)
    for L, tei in enumerate(teis):
        print(f"L={L}: |tei - teiᵀ|_max = {np.max(np.abs(tei - tei.T)):.3e}")

    ktei = exchange_tei(teis[0], M, M, M, M)
    print("交换型张量形状:", ktei.shape)


if __name__ == "__main__":
    main()
