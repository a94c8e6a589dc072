"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（MSAA/背景クリア）と描画コールバック登録、画面中心の取得を提供。
なぜ: スプライト/HUD 層から GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(1280, 720, bg_color=(20, 20, 40))
    win.add_draw_callback(sprites.draw)
    pyglet.app.run()
"""

from __future__ import annotations

from typing import Callable

import pyglet
from pyglet.gl import glClearColor

from common.types import RGB


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        bg_color: RGB = (20, 20, 40),
        caption: str = "lightcone",
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            bg_color: 背景色 RGB（0〜255）。
        """
        config = pyglet.gl.Config(double_buffer=True, sample_buffers=1, samples=4, vsync=True)
        try:
            super().__init__(width=width, height=height, caption=caption, config=config)
        except pyglet.window.NoSuchConfigException:
            # MSAA 非対応環境は既定 Config で再試行
            super().__init__(width=width, height=height, caption=caption)
        self._bg_color = tuple(c / 255.0 for c in bg_color)
        self._draw_callbacks: list[Callable[[], None]] = []

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """`on_draw` 中に呼び出す描画関数を登録する（登録順に呼ぶ）。"""
        self._draw_callbacks.append(func)

    def on_draw(self):  # Pyglet 既定のイベント名
        r, g, b = self._bg_color
        glClearColor(r, g, b, 1.0)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    @property
    def center(self) -> tuple[float, float]:
        """観測者を置く画面中心（ピクセル）。"""
        return self.width / 2.0, self.height / 2.0
