"""
どこで: `engine.spacetime` のブースト構築。
何を: 観測者速度（2D, |v| < c）を、対応するローレンツ変換を表すロータへ変換する。
なぜ: 静的点・マーカー・世界線の解をすべて同じロータのサンドイッチで変換するため。

手順（`velocity_to_rotor`）:
1) `v/c` を e1 重み 1 のグレード 1 に埋め込み正規化（静止系から見た単位方向）。
2) 静止方向 `e1` との幾何積を取る。スカラー部は γ = cosh(φ)（φ はラピディティ）。
3) φ = acosh(スカラー部)。浮動小数誤差で 1 を下回る値は 1 にクランプしてから acosh。
4) スカラー部を除いた二重ベクトルを正規化し、`R = cosh(φ/2) + sinh(φ/2)·B̂`。
"""

from __future__ import annotations

import math

from common.types import Vec2

from . import multivector as mv


def velocity_multivector(velocity: Vec2, speed_of_light: float) -> mv.Multivector:
    """速度を `e1 + (vx/c)·e2 + (vy/c)·e3` として埋め込み、正規化して返す。

    `|v| == c` のときノルム 0 となり、規約により零マルチベクトルを返す。
    """
    vx, vy = float(velocity[0]), float(velocity[1])
    return mv.normalize(mv.vector(1.0, vx / speed_of_light, vy / speed_of_light))


def _check_subluminal(velocity: Vec2, speed_of_light: float) -> None:
    speed = math.hypot(float(velocity[0]), float(velocity[1]))
    if speed >= speed_of_light:
        raise ValueError(f"|v| must be < c (|v|={speed}, c={speed_of_light})")


def rapidity(velocity: Vec2, speed_of_light: float, *, strict: bool = False) -> float:
    """ラピディティ φ（`tanh φ = |v|/c`）。

    Parameters
    ----------
    velocity : tuple[float, float]
        観測者速度。
    speed_of_light : float
        光速 c（正）。
    strict : bool, default False
        True のとき `|v| >= c` を `ValueError` とする。
    """
    if strict:
        _check_subluminal(velocity, speed_of_light)
    product = mv.geometric_product(mv.E1, velocity_multivector(velocity, speed_of_light))
    # acosh の定義域 [1, ∞) へクランプ
    return math.acosh(max(product[0], 1.0))


def velocity_to_rotor(
    velocity: Vec2, speed_of_light: float, *, strict: bool = False
) -> mv.Multivector:
    """観測者速度から双曲回転ロータを構築する。

    - 速度 0 のとき恒等ロータ（スカラー 1）をそのまま返す。
    - 戻り値は代数ノルムで単位（`norm(R) == 1`）。

    Parameters
    ----------
    velocity : tuple[float, float]
        観測者速度（ワールド座標/秒）。
    speed_of_light : float
        光速 c。
    strict : bool, default False
        True のとき `|v| >= c` を `ValueError` とする。
    """
    if strict:
        _check_subluminal(velocity, speed_of_light)
    product = mv.geometric_product(mv.E1, velocity_multivector(velocity, speed_of_light))
    angle = math.acosh(max(product[0], 1.0)) / 2.0
    bivector = mv.normalize(product.with_coeff(0, 0.0))
    return mv.add_scalar(mv.scale(bivector, math.sinh(angle)), math.cosh(angle))


__all__ = ["rapidity", "velocity_multivector", "velocity_to_rotor"]
