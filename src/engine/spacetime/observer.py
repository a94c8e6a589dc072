"""
どこで: `engine.spacetime` の観測者状態積分器。
何を: 入力加速度/ブレーキ/ソフト境界から速度と位置を進め、座標時刻と固有時を積分する。
なぜ: 1 ティックの先頭で観測者状態を確定させ、以降の変換が同じスナップショットを読むため。

1 ティックの手順（`ObserverIntegrator.step`）:
1) 方向入力 × 加速度 × dt を速度変化とする。
2) ブレーキ時は速度の `friction` 割合を差し引く。
3) 境界外なら超過量に比例して速度を境界側へ引き戻す。
4) 速度上限でクランプ。ブレーキ中に上限の 1% 未満なら速度を 0 に固定。
5) 位置 += v·dt、座標時刻 += dt/sqrt(1 - |v|²/c²)、固有時 += dt。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from common.types import Vec2

from .config import SimulationConfig

# 速度上限に対するスナップ閾値（残留ドリフト防止）
SNAP_FRACTION = 0.01


@dataclass
class InputSignals:
    """1 ティック分の入力（真偽値または 0..1 のアナログ値）。"""

    right: float = 0.0
    left: float = 0.0
    up: float = 0.0
    down: float = 0.0
    brake: bool = False

    @property
    def idle(self) -> bool:
        return not (self.right or self.left or self.up or self.down)


@dataclass
class ObserverState:
    """観測者の運動状態と 2 つの時計（1 セッション分の寿命）。"""

    velocity: Vec2 = (0.0, 0.0)
    position: Vec2 = (0.0, 0.0)
    global_time: float = 0.0
    local_time: float = 0.0

    @property
    def speed(self) -> float:
        return math.hypot(self.velocity[0], self.velocity[1])

    def snapshot(self) -> "ObserverState":
        """ティック内で読み取り専用に使うコピー。"""
        return ObserverState(self.velocity, self.position, self.global_time, self.local_time)


def dilation_factor(velocity: Vec2, speed_of_light: float) -> float:
    """γ = 1/sqrt(1 - |v|²/c²)。"""
    beta2 = (velocity[0] ** 2 + velocity[1] ** 2) / speed_of_light**2
    return 1.0 / math.sqrt(1.0 - beta2)


class ObserverIntegrator:
    """観測者状態を 1 ティックずつ進める（状態は引数で受け取り、その場で更新）。"""

    def __init__(self, config: SimulationConfig):
        self.config = config

    def _boundary_pull(self, position: Vec2) -> Vec2:
        b = self.config.bounds
        k = self.config.boundary_pull
        x, y = position
        dx = dy = 0.0
        if x < b.left:
            dx += (b.left - x) * k
        if x > b.right:
            dx += (b.right - x) * k
        if y < b.lower:
            dy += (b.lower - y) * k
        if y > b.upper:
            dy += (b.upper - y) * k
        return dx, dy

    def step(self, state: ObserverState, signals: InputSignals, dt: float) -> ObserverState:
        """`state` を `dt` 秒進めて返す（同一インスタンス）。"""
        cfg = self.config
        vx, vy = state.velocity
        ax, ay = cfg.acceleration

        dvx = (float(signals.right) - float(signals.left)) * ax * dt
        dvy = (float(signals.up) - float(signals.down)) * ay * dt

        braking = bool(signals.brake) or (cfg.brake_when_idle and signals.idle)
        if braking:
            dvx -= cfg.friction * vx
            dvy -= cfg.friction * vy

        px, py = self._boundary_pull(state.position)
        vx += dvx + px
        vy += dvy + py

        # 速度上限
        speed = math.hypot(vx, vy)
        if speed > cfg.max_speed:
            vx, vy = cfg.max_speed * vx / speed, cfg.max_speed * vy / speed
            speed = math.hypot(vx, vy)
            while speed > cfg.max_speed:
                # 丸めで上限を超えた分を 1ulp 単位で詰める
                vx, vy = math.nextafter(vx, 0.0), math.nextafter(vy, 0.0)
                speed = math.hypot(vx, vy)
        if braking and math.hypot(vx, vy) < SNAP_FRACTION * cfg.max_speed:
            vx = vy = 0.0

        state.velocity = (vx, vy)
        state.position = (state.position[0] + vx * dt, state.position[1] + vy * dt)
        state.global_time += dt * dilation_factor(state.velocity, cfg.speed_of_light)
        state.local_time += dt
        return state


__all__ = [
    "InputSignals",
    "ObserverIntegrator",
    "ObserverState",
    "SNAP_FRACTION",
    "dilation_factor",
]
