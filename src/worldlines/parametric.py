"""
どこで: `worldlines.parametric`。
何を: 2D パラメトリック関数を時間区間 [t0, t1] で固定数サンプリングして `Path` を生成する。
なぜ: 円軌道・リサージュ・往復など、周期的に動く物体の世界線を設定ファイルから簡潔に定義するため。

注意:
- 周期は最後のサンプル時刻（= t1）。t0 > 0 の場合、[0, t0) は最終点→先頭点の区間になる。
- 先頭と最終のサンプルが同じ位置なら、周期の境目で見かけ位置は連続になる。
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from engine.spacetime.worldline import Path, PathError

from .registry import worldline

ParametricFn = Callable[[np.ndarray], tuple[np.ndarray, np.ndarray]]


def sample_parametric(fn: ParametricFn, t0: float, t1: float, samples: int) -> Path:
    """`fn(t) -> (x, y)` を `samples` 点でサンプリングする。

    Parameters
    ----------
    fn : Callable[[np.ndarray], tuple[np.ndarray, np.ndarray]]
        時刻配列を受け取り x/y 配列を返すベクトル化関数。
    t0, t1 : float
        サンプリング区間 [sec]（0 <= t0 <= t1, t1 > 0）。
    samples : int
        サンプル数（2 以上）。
    """
    if samples < 2:
        raise PathError(f"samples must be >= 2, got {samples}")
    if not 0.0 <= t0 <= t1:
        raise PathError(f"sampling interval must satisfy 0 <= t0 <= t1, got [{t0}, {t1}]")
    t = np.linspace(float(t0), float(t1), int(samples))
    x, y = fn(t)
    pts = np.stack([np.broadcast_to(x, t.shape), np.broadcast_to(y, t.shape)], axis=1)
    return Path(pts, t)


@worldline
def circle(
    *,
    center: Sequence[float] = (0.0, 0.0),
    radius: float = 200.0,
    period: float = 4.0,
    samples: int = 64,
    phase: float = 0.0,
    clockwise: bool = False,
) -> Path:
    """円軌道。

    Parameters
    ----------
    center : tuple[float, float], default (0, 0)
        中心座標。
    radius : float, default 200.0
        半径。
    period : float, default 4.0
        1 周の時間 [sec]。
    samples : int, default 64
        サンプル数（先頭と最終は同じ位置）。
    phase : float, default 0.0
        初期位相 [deg]。
    clockwise : bool, default False
        True で時計回り。
    """
    cx, cy = float(center[0]), float(center[1])
    sign = -1.0 if clockwise else 1.0
    omega = sign * 2.0 * np.pi / float(period)
    ph = np.deg2rad(phase)
    return sample_parametric(
        lambda t: (cx + radius * np.cos(omega * t + ph), cy + radius * np.sin(omega * t + ph)),
        0.0,
        float(period),
        samples,
    )


@worldline
def lissajous(
    *,
    center: Sequence[float] = (0.0, 0.0),
    amplitude: Sequence[float] = (300.0, 200.0),
    freq: Sequence[int] = (3, 2),
    period: float = 8.0,
    samples: int = 256,
    phase: float = 90.0,
) -> Path:
    """リサージュ軌道（整数周波数で閉曲線）。

    Parameters
    ----------
    amplitude : tuple[float, float]
        X/Y 振幅。
    freq : tuple[int, int]
        X/Y 周波数（周期あたりの回数）。
    phase : float
        X 軸の初期位相 [deg]。
    """
    cx, cy = float(center[0]), float(center[1])
    ax, ay = float(amplitude[0]), float(amplitude[1])
    fx, fy = int(freq[0]), int(freq[1])
    w = 2.0 * np.pi / float(period)
    ph = np.deg2rad(phase)
    return sample_parametric(
        lambda t: (cx + ax * np.sin(fx * w * t + ph), cy + ay * np.sin(fy * w * t)),
        0.0,
        float(period),
        samples,
    )


@worldline
def shuttle(
    *,
    start: Sequence[float] = (-300.0, 0.0),
    end: Sequence[float] = (300.0, 0.0),
    period: float = 4.0,
    samples: int = 32,
) -> Path:
    """`start` と `end` を等速で往復する（三角波）。"""
    sx, sy = float(start[0]), float(start[1])
    ex, ey = float(end[0]), float(end[1])
    T = float(period)

    def _fn(t: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        s = 1.0 - np.abs(2.0 * t / T - 1.0)
        return sx + s * (ex - sx), sy + s * (ey - sy)

    return sample_parametric(_fn, 0.0, T, samples)
