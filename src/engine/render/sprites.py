"""
どこで: `engine.render.sprites`。
何を: `FrameResult` の各座標列を pyglet の円スプライト（`pyglet.shapes.Circle`）へ同期し、1 バッチで描画する。
なぜ: 位置計算（spacetime 層）と描画を分離し、毎ティックの更新を「位置の書き換え」だけに抑えるため。

描画順（下から）: ダスト → 静的点 → 世界線 → マーカー → 観測者。
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

import numpy as np
import pyglet
from pyglet import shapes

from engine.core.tickable import Tickable
from engine.spacetime.pipeline import FrameResult

from .types import DEFAULT_STYLES, SpriteStyle, to_screen

logger = logging.getLogger(__name__)

_LAYERS = ("dust", "point", "worldline", "marker", "observer")


class SpriteLayer(Tickable):
    """観測者中心の座標列をウィンドウ上の円として描く。

    Parameters
    ----------
    result_source : Callable[[], FrameResult | None]
        直近ティックの結果を返す関数（通常は `lambda: pipeline.last_result`）。
    counts : Mapping[str, int]
        各レイヤのスプライト数（`dust`/`point`/`worldline`/`marker`）。
    center : Callable[[], tuple[float, float]]
        観測者を置くウィンドウ座標（リサイズ追従のため関数で受ける）。
    styles : Mapping[str, SpriteStyle] | None
        見た目。None で既定。
    """

    def __init__(
        self,
        result_source: Callable[[], FrameResult | None],
        counts: Mapping[str, int],
        center: Callable[[], tuple[float, float]],
        *,
        styles: Mapping[str, SpriteStyle] | None = None,
        rng: np.random.Generator | None = None,
    ):
        self._source = result_source
        self._center = center
        self._styles = dict(DEFAULT_STYLES)
        if styles:
            self._styles.update(styles)
        self.batch = pyglet.graphics.Batch()
        self._groups = {name: pyglet.graphics.Group(order=i) for i, name in enumerate(_LAYERS)}
        self._sprites: dict[str, list[shapes.Circle]] = {}
        for name in _LAYERS:
            n = 1 if name == "observer" else int(counts.get(name, 0))
            self._sprites[name] = self._make(name, n, rng)
        cx, cy = center()
        self._sprites["observer"][0].position = (cx, cy)
        # 世界線は初回の解が出るまで非表示
        for s in self._sprites["worldline"]:
            s.visible = False

    def _make(self, name: str, count: int, rng: np.random.Generator | None) -> list[shapes.Circle]:
        style = self._styles[name]
        sizes = style.sizes(count, rng)
        return [
            shapes.Circle(
                0.0,
                0.0,
                float(d) / 2.0,
                color=style.color,
                batch=self.batch,
                group=self._groups[name],
            )
            for d in sizes
        ]

    @staticmethod
    def _place(sprites: list[shapes.Circle], xy: np.ndarray) -> None:
        for s, (x, y) in zip(sprites, xy):
            s.position = (float(x), float(y))

    def tick(self, dt: float) -> None:  # noqa: ARG002
        result = self._source()
        if result is None:
            return
        center = self._center()
        self._sprites["observer"][0].position = center
        self._place(self._sprites["dust"], to_screen(result.dust, center))
        self._place(self._sprites["point"], to_screen(result.points, center))
        self._place(self._sprites["marker"], to_screen(result.markers, center))
        self._place(self._sprites["worldline"], to_screen(result.paths, center))
        for s, ok in zip(self._sprites["worldline"], result.path_valid):
            s.visible = bool(ok)

    def draw(self) -> None:
        self.batch.draw()


__all__ = ["SpriteLayer"]
