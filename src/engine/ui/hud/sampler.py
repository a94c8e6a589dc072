"""
どこで: `engine.ui.hud` の計測サブモジュール。
何を: 直近ティックの `FrameResult` から座標時刻/固有時/速度/γ/実効FPS を読み、HUD 用の文字列辞書として保持。
なぜ: 時間の遅れ（座標時刻と固有時の乖離）を実行中に観測できるようにするため。
"""

from __future__ import annotations

import time
from typing import Callable

from engine.core.tickable import Tickable
from engine.spacetime.observer import dilation_factor
from engine.spacetime.pipeline import FrameResult

from .config import HUDConfig
from .fields import FPS, GAMMA, GLOBAL_TIME, LOCAL_TIME, SPEED


class ClockSampler(Tickable):
    """観測者の 2 つの時計と速度をティックごとに整形する。

    - `data`: HUD のテキスト表示用にフォーマット済みの文字列を保持。
    - `values`: 生値（GLOBAL/LOCAL[sec], SPEED[c 比], GAMMA, FPS[Hz]）。
    """

    def __init__(
        self,
        result_source: Callable[[], FrameResult | None],
        speed_of_light: float,
        config: HUDConfig | None = None,
        *,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._source = result_source
        self._c = float(speed_of_light)
        self._config = config or HUDConfig()
        self._clock = clock
        self._last: float | None = None
        self.data: dict[str, str] = {}
        self.values: dict[str, float] = {}

    def tick(self, dt: float) -> None:  # noqa: ARG002
        now = self._clock()
        if self._config.show_fps and self._last is not None and now > self._last:
            fps = 1.0 / (now - self._last)
            self.data[FPS] = f"{fps:4.1f}"
            self.values[FPS] = fps
        self._last = now

        result = self._source()
        if result is None:
            return
        obs = result.observer
        self.data[GLOBAL_TIME] = f"{obs.global_time:8.2f} s"
        self.data[LOCAL_TIME] = f"{obs.local_time:8.2f} s"
        self.values[GLOBAL_TIME] = obs.global_time
        self.values[LOCAL_TIME] = obs.local_time
        if self._config.show_speed:
            beta = obs.speed / self._c
            gamma = dilation_factor(obs.velocity, self._c)
            self.data[SPEED] = f"{beta:5.3f} c"
            self.data[GAMMA] = f"{gamma:6.4f}"
            self.values[SPEED] = beta
            self.values[GAMMA] = gamma

    def lines(self) -> list[str]:
        """表示順に `KEY: value` を並べた行列（未計測の項目は省く）。"""
        return [f"{k:<6} {self.data[k]}" for k in self._config.resolved_order() if k in self.data]


__all__ = ["ClockSampler"]
