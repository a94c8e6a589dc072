"""
どこで: `engine.spacetime` の世界線/光円錐ソルバ。
何を: 区分線形・周期的な世界線（`Path`）から、観測者の後方光円錐上にある点を求める。
なぜ: 動く物体を「今この瞬間に光が届いている位置」（遅延時刻）で描画する唯一の経路だから。

データモデル（不変条件）:
- `Path` は 1 個以上の (2D 通過点, 時刻) の組。時刻は単調非減少で、最後の時刻（周期）は正。
- 最後の時刻を過ぎると、周期 = 最後の時刻で繰り返す。
- 周期の境目では「前周期の最終点（周期開始時刻）→ 先頭点（その時刻）」の区間が世界線を閉じる。
- 区間内は時空で直線補間する。

アルゴリズム（`locate_segment` → `solve_segment`）:
1) 光距離単位へ変換: `L = t·c`, `τ_i = t_i·c`, 周期 `T = τ_last`。
2) 周期オフセット: `offset = floor((L - d_last) / T) · T`（d_last は最終点と観測者の距離）。
   最終点の光が届いている最後の周期の開始位置。
3) `d_i + τ_i + offset <= L`（光が既に届いた事象）の間 index を進め、最初に満たさない index と
   その直前（index 0 のときは前周期の最終点）で光円錐をまたぐ区間を得る。
4) 区間を p∈[0,1] で線形補間し、`a·p² + b·p + c = 0`（ミンコフスキー間隔 0）を解く。
   `-b - √D` 側の根が [0,1] 外、または前方光円錐側なら他方の根を使う。
5) `p0 + p·(p1 - p0)` が観測者相対の可視点。

例外方針:
- `a == 0`（光速で動く/潰れた区間）と判別式 < 0（因果的交点なし）は `LightConeError`。
- 空の Path などの構築時不正は `PathError`（起動時に致命）。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from common.types import Vec2


class PathError(ValueError):
    """世界線の定義が不正（空、時刻の逆行、周期が正でない等）。"""


class LightConeError(ArithmeticError):
    """光円錐方程式が解けない（退化区間 `a == 0`、または判別式が負）。"""


class Path:
    """周期的な区分線形世界線。

    フィールド:
    - `waypoints (N, 2) float64`: 通過点（ワールド座標）。
    - `timestamps (N,) float64`: 各通過点の座標時刻 [sec]。単調非減少。
    """

    __slots__ = ("waypoints", "timestamps")

    waypoints: np.ndarray
    timestamps: np.ndarray

    def __init__(self, waypoints: Sequence[Vec2] | np.ndarray, timestamps: Sequence[float] | np.ndarray):
        pts = np.asarray(waypoints, dtype=np.float64)
        ts = np.asarray(timestamps, dtype=np.float64)
        if pts.size == 0 or ts.size == 0:
            raise PathError("path must contain at least one waypoint")
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise PathError(f"waypoints must have shape (N, 2), got {pts.shape}")
        if ts.ndim != 1 or ts.shape[0] != pts.shape[0]:
            raise PathError(
                f"timestamps must have shape ({pts.shape[0]},), got {ts.shape}"
            )
        if not (np.all(np.isfinite(pts)) and np.all(np.isfinite(ts))):
            raise PathError("waypoints and timestamps must be finite")
        if np.any(np.diff(ts) < 0):
            raise PathError("timestamps must be non-decreasing")
        if ts[0] < 0:
            raise PathError(f"timestamps must start at or after 0, got {ts[0]}")
        if ts[-1] <= 0:
            raise PathError(f"last timestamp (the repeat period) must be > 0, got {ts[-1]}")
        pts.setflags(write=False)
        ts.setflags(write=False)
        object.__setattr__(self, "waypoints", pts)
        object.__setattr__(self, "timestamps", ts)

    def __setattr__(self, name: str, value: object) -> None:  # pragma: no cover - 不変性の保証
        raise AttributeError("Path is immutable")

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Vec2, float]]) -> "Path":
        """`[((x, y), t), ...]` 形式から構築する。"""
        items = list(pairs)
        if not items:
            raise PathError("path must contain at least one waypoint")
        return cls([p for p, _ in items], [t for _, t in items])

    @property
    def period(self) -> float:
        return float(self.timestamps[-1])

    def __len__(self) -> int:
        return int(self.waypoints.shape[0])

    def __repr__(self) -> str:
        return f"Path(n={len(self)}, period={self.period:g})"


@dataclass(frozen=True)
class Segment:
    """光円錐をまたぐ区間（観測者相対座標・光距離単位の時刻）。"""

    start: Vec2
    start_time: float
    end: Vec2
    end_time: float


def light_offset(last_distance: float, light_distance: float, period: float) -> float:
    """最終点の光が届いた周期数 × 周期（引数・戻り値とも光距離単位）。"""
    return math.floor((light_distance - last_distance) / period) * period


def _first_unreached(dists: np.ndarray, taus: np.ndarray, offset: float, light_distance: float) -> int:
    """光がまだ届いていない最初の通過点 index（全点到達済みなら N）。"""
    i = 0
    n = len(taus)
    while i < n and dists[i] + taus[i] + offset <= light_distance:
        i += 1
    return i


def locate_segment(
    path: Path, observer: Vec2, global_time: float, speed_of_light: float
) -> Segment:
    """観測者の後方光円錐をまたぐ区間を返す（端点は観測者相対）。

    Parameters
    ----------
    path : Path
        周期的世界線。
    observer : tuple[float, float]
        観測者のワールド座標。
    global_time : float
        現在の座標時刻 [sec]。
    speed_of_light : float
        光速 c。
    """
    ox, oy = float(observer[0]), float(observer[1])
    L = global_time * speed_of_light
    period = path.period * speed_of_light
    rel = path.waypoints - np.array([ox, oy])
    dists = np.hypot(rel[:, 0], rel[:, 1])
    offset = light_offset(float(dists[-1]), L, period)
    taus = path.timestamps * speed_of_light
    n = len(path)

    i = _first_unreached(dists, taus, offset, L)
    if i == n:
        # 丸めで最終点まで到達済みと判定された場合は次周期から探し直す
        offset += period
        i = _first_unreached(dists, taus, offset, L)
    if i == n:
        prev_idx, prev_time = n - 1, float(taus[-1] + offset)
        next_idx, next_time = 0, float(taus[0] + offset + period)
    elif i == 0:
        prev_idx, prev_time = n - 1, float(offset - (period - taus[-1]))
        next_idx, next_time = 0, float(taus[0] + offset)
    else:
        prev_idx, prev_time = i - 1, float(taus[i - 1] + offset)
        next_idx, next_time = i, float(taus[i] + offset)

    return Segment(
        start=(float(rel[prev_idx, 0]), float(rel[prev_idx, 1])),
        start_time=prev_time,
        end=(float(rel[next_idx, 0]), float(rel[next_idx, 1])),
        end_time=next_time,
    )


def solve_segment(segment: Segment, light_distance: float) -> float:
    """区間上で後方光円錐と交わるパラメータ p を返す。

    `|p0 + pΔp|² = (L - τ0 - pΔτ)²` を展開した二次方程式を解く:
    `a = |Δp|² - Δτ²`, `b = 2(p0·Δp + (L - τ0)Δτ)`, `c = |p0|² - (L - τ0)²`。
    両辺の符号を落とすため前方光円錐の解も含む。`-b - √D` 側の根から試し、[0,1] 外か
    前方側なら他方の根を返す。

    例外:
        LightConeError: `a == 0` または判別式が負のとき。
    """
    x0, y0 = segment.start
    dx = segment.end[0] - x0
    dy = segment.end[1] - y0
    dt = segment.end_time - segment.start_time
    lag = light_distance - segment.start_time

    a = dx**2 + dy**2 - dt**2
    b = 2.0 * (x0 * dx + y0 * dy + lag * dt)
    c = x0**2 + y0**2 - lag**2
    if a == 0.0:
        raise LightConeError(f"degenerate segment (a == 0): {segment}")
    disc = b**2 - 4.0 * a * c
    if disc < 0.0:
        raise LightConeError(f"no causal intersection (discriminant {disc:g} < 0): {segment}")

    root = math.sqrt(disc)
    p = (-b - root) / (2.0 * a)
    # 前方光円錐側（放射時刻が現在より後）の根は捨てる
    if p < 0.0 or p > 1.0 or lag - p * dt < 0.0:
        p = (-b + root) / (2.0 * a)
    return p


def visible_point(path: Path, observer: Vec2, global_time: float, speed_of_light: float) -> Vec2:
    """今この瞬間に光が届いている世界線上の点（観測者相対、ブースト前）。"""
    segment = locate_segment(path, observer, global_time, speed_of_light)
    p = solve_segment(segment, global_time * speed_of_light)
    x0, y0 = segment.start
    return (x0 + p * (segment.end[0] - x0), y0 + p * (segment.end[1] - y0))


__all__ = [
    "LightConeError",
    "Path",
    "PathError",
    "Segment",
    "light_offset",
    "locate_segment",
    "solve_segment",
    "visible_point",
]
