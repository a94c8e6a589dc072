"""
どこで: `engine.ui.hud.clock`。
何を: ClockSampler の行を pyglet の Label でウィンドウ左上へオーバーレイ描画する。
なぜ: 座標時刻と固有時の進み方の差を、操作しながら確認できるようにするため。
"""

from __future__ import annotations

import pyglet
from pyglet.window import Window

from engine.core.tickable import Tickable

from .config import HUDConfig
from .sampler import ClockSampler

_MARGIN_PX = 10


class ClockHUD(Tickable):
    """ClockSampler が整形した文字列を 1 行 1 Label で描画する。"""

    def __init__(self, window: Window, sampler: ClockSampler, *, config: HUDConfig | None = None):
        self.window = window
        self.sampler = sampler
        self._config = config or HUDConfig()
        self.batch = pyglet.graphics.Batch()
        self._labels: list[pyglet.text.Label] = []

    def _label(self, index: int) -> pyglet.text.Label:
        while len(self._labels) <= index:
            self._labels.append(
                pyglet.text.Label(
                    "",
                    font_name=self._config.font_name,
                    font_size=self._config.font_size,
                    color=self._config.color,
                    anchor_x="left",
                    anchor_y="top",
                    batch=self.batch,
                )
            )
        return self._labels[index]

    def tick(self, dt: float) -> None:  # noqa: ARG002
        if not self._config.enabled:
            return
        line_h = int(self._config.font_size * 1.8)
        lines = self.sampler.lines()
        for i, text in enumerate(lines):
            label = self._label(i)
            label.text = text
            label.x = _MARGIN_PX
            label.y = self.window.height - _MARGIN_PX - i * line_h
        for label in self._labels[len(lines) :]:
            label.text = ""

    def draw(self) -> None:
        if self._config.enabled:
            self.batch.draw()


__all__ = ["ClockHUD"]
