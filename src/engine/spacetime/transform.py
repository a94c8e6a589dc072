"""
どこで: `engine.spacetime` の空間変換適用層。
何を: ロータを観測者相対の 2D 点へサンドイッチ（共役）適用し、ブースト後の見かけ位置を返す。
なぜ: 静的点・角度マーカー・世界線の解点を、同一ロータで一貫して再投影するため。

要点:
- 点は `w·e1 + x·e2 + y·e3` に埋め込み、`R * (p * ~R)` の e2/e3 成分を読み戻す。
- 既定の埋め込み重みは 1。光円錐上の事象として埋め込む場合は `w = |p|`（`light_weights`）。
- ブーストは一般に非可換（v1→v2 の順次適用と合成ロータの適用は一致しない）。
"""

from __future__ import annotations

import math

import numpy as np

from common import settings as _settings
from common.types import Vec2

from . import multivector as mv
from .kernels import sandwich_points


def embed_point(point: Vec2, weight: float = 1.0) -> mv.Multivector:
    """2D 点をグレード 1 マルチベクトルへ埋め込む。"""
    return mv.vector(weight, float(point[0]), float(point[1]))


def sandwich(rotor: mv.Multivector, x: mv.Multivector) -> mv.Multivector:
    """`R * (x * ~R)`。"""
    return mv.geometric_product(rotor, mv.geometric_product(x, mv.reverse(rotor)))


def apply_rotor(rotor: mv.Multivector, point: Vec2, weight: float = 1.0) -> Vec2:
    """観測者相対の点 `point` にロータを適用し、見かけの 2D 座標を返す。

    Parameters
    ----------
    rotor : Multivector
        `velocity_to_rotor` が返すロータ。
    point : tuple[float, float]
        観測者位置を原点とする座標。
    weight : float, default 1.0
        e1 への埋め込み重み。
    """
    out = sandwich(rotor, embed_point(point, weight))
    return (out[2], out[3])


def light_weights(points: np.ndarray) -> np.ndarray:
    """各点の観測者からの距離（光円錐埋め込み用の e1 重み）。"""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return np.hypot(pts[:, 0], pts[:, 1])


def apply_rotor_batch(
    rotor: mv.Multivector,
    points: np.ndarray,
    weights: np.ndarray | float | None = None,
) -> np.ndarray:
    """(N, 2) 点列へ一括適用する（Numba カーネル）。

    - `weights=None` は全点重み 1。スカラーなら全点同じ重み。
    - `LC_USE_NUMBA=0`（settings.USE_NUMBA=False）のときは JIT を経由せず同じ関数を実行。
    """
    pts = np.ascontiguousarray(np.asarray(points, dtype=np.float64).reshape(-1, 2))
    n = pts.shape[0]
    if weights is None:
        w = np.ones(n, dtype=np.float64)
    elif np.isscalar(weights):
        w = np.full(n, float(weights), dtype=np.float64)  # type: ignore[arg-type]
    else:
        w = np.ascontiguousarray(np.asarray(weights, dtype=np.float64).reshape(n))
    if n == 0:
        return np.empty((0, 2), dtype=np.float64)
    r = np.asarray(rotor.coeffs, dtype=np.float64)
    if _settings.get().USE_NUMBA:
        return sandwich_points(r, pts, w)
    return sandwich_points.py_func(r, pts, w)


def reorient_marker(rotor: mv.Multivector, direction: Vec2, radius: float) -> Vec2:
    """単位方向 `direction` をブーストし、円周上へ戻して半径 `radius` に配置する。

    - ブースト後に e1 成分を 0 にし、残りのベクトルを正規化する（円へ再射影）。
    - 視線方向の光行差（aberration）を観測者周りのリングとして可視化する。
    """
    boosted = sandwich(rotor, embed_point(direction, 1.0))
    flat = mv.normalize(boosted.with_coeff(1, 0.0))
    return (radius * flat[2], radius * flat[3])


def marker_directions(count: int) -> list[Vec2]:
    """円周を `count` 等分した単位方向列。"""
    if count <= 0:
        return []
    step = 2.0 * math.pi / count
    return [(math.cos(i * step), math.sin(i * step)) for i in range(count)]


__all__ = [
    "apply_rotor",
    "apply_rotor_batch",
    "embed_point",
    "light_weights",
    "marker_directions",
    "reorient_marker",
    "sandwich",
]
