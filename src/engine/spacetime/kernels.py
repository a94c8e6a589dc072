"""
どこで: `engine.spacetime` の数値カーネル。
何を: 1 つのロータを (N, 2) 点列へサンドイッチ適用する Numba カーネル。
なぜ: 静的点/ダストなど多数の点を毎フレーム変換するため、Python ループを JIT で置き換える。

注意:
- 幾何積の係数式は `multivector.geometric_product` と同一の項順。
- `fastmath` は使わない（スカラー経路と結果を一致させるため）。
"""

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[attr-defined]


@njit(cache=True)
def _geometric_product(a: np.ndarray, b: np.ndarray, out: np.ndarray) -> None:
    """幾何積 `a * b` を `out` へ書き込む。"""
    out[0] = b[0] * a[0] + b[1] * a[1] - b[2] * a[2] - b[3] * a[3] + b[4] * a[4] + b[5] * a[5] - b[6] * a[6] - b[7] * a[7]
    out[1] = b[1] * a[0] + b[0] * a[1] + b[4] * a[2] + b[5] * a[3] - b[2] * a[4] - b[3] * a[5] - b[7] * a[6] - b[6] * a[7]
    out[2] = b[2] * a[0] + b[4] * a[1] + b[0] * a[2] + b[6] * a[3] - b[1] * a[4] - b[7] * a[5] - b[3] * a[6] - b[5] * a[7]
    out[3] = b[3] * a[0] + b[5] * a[1] - b[6] * a[2] + b[0] * a[3] + b[7] * a[4] - b[1] * a[5] + b[2] * a[6] + b[4] * a[7]
    out[4] = b[4] * a[0] + b[2] * a[1] - b[1] * a[2] - b[7] * a[3] + b[0] * a[4] + b[6] * a[5] - b[5] * a[6] - b[3] * a[7]
    out[5] = b[5] * a[0] + b[3] * a[1] + b[7] * a[2] - b[1] * a[3] - b[6] * a[4] + b[0] * a[5] + b[4] * a[6] + b[2] * a[7]
    out[6] = b[6] * a[0] + b[7] * a[1] + b[3] * a[2] - b[2] * a[3] - b[5] * a[4] + b[4] * a[5] + b[0] * a[6] + b[1] * a[7]
    out[7] = b[7] * a[0] + b[6] * a[1] - b[5] * a[2] + b[4] * a[3] + b[3] * a[4] - b[2] * a[5] + b[1] * a[6] + b[0] * a[7]


@njit(cache=True)
def sandwich_points(rotor: np.ndarray, points: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """各点 `w·e1 + x·e2 + y·e3` に `R * (p * ~R)` を適用し、(e2, e3) を返す。

    Parameters
    ----------
    rotor : np.ndarray
        ロータ係数 (8,) float64。
    points : np.ndarray
        観測者相対の点列 (N, 2) float64。
    weights : np.ndarray
        各点の e1 埋め込み重み (N,) float64。
    """
    n = points.shape[0]
    out = np.empty((n, 2), dtype=np.float64)

    rev = rotor.copy()
    for k in range(4, 8):
        rev[k] = -rotor[k]

    p = np.zeros(8, dtype=np.float64)
    tmp = np.empty(8, dtype=np.float64)
    res = np.empty(8, dtype=np.float64)
    for i in range(n):
        p[1] = weights[i]
        p[2] = points[i, 0]
        p[3] = points[i, 1]
        _geometric_product(p, rev, tmp)
        _geometric_product(rotor, tmp, res)
        out[i, 0] = res[2]
        out[i, 1] = res[3]
    return out


__all__ = ["sandwich_points"]
