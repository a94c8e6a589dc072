"""
どこで: `engine.render` 型定義。
何を: スプライト描画用の軽量データクラス `SpriteStyle` と、設定 `sprites` セクションの解釈。
なぜ: 観測者/マーカー/静的点/ダスト/世界線の見た目（大きさ・色）を設定から差し替え可能にするため。

スプライトの大きさはブーストの影響を受けない（位置のみ変換する）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from common.types import RGB
from engine.spacetime.config import ConfigError


@dataclass(frozen=True)
class SpriteStyle:
    """1 種類のスプライトの見た目。

    `size_range` があるときは各スプライトの直径を範囲内の一様乱数で決める（ダスト用）。
    """

    size: float
    color: RGB
    size_range: tuple[float, float] | None = None

    def sizes(self, count: int, rng: np.random.Generator | None = None) -> np.ndarray:
        """`count` 個分の直径。"""
        if self.size_range is None:
            return np.full(count, float(self.size), dtype=np.float64)
        lo, hi = self.size_range
        rng = rng if rng is not None else np.random.default_rng()
        return rng.uniform(lo, hi, size=count)


DEFAULT_STYLES: dict[str, SpriteStyle] = {
    "observer": SpriteStyle(30.0, (255, 195, 0)),
    "marker": SpriteStyle(10.0, (255, 87, 51)),
    "point": SpriteStyle(5.0, (255, 255, 255)),
    "dust": SpriteStyle(2.75, (80, 80, 100), size_range=(1.0, 4.5)),
    "worldline": SpriteStyle(12.0, (90, 200, 255)),
}


def _parse_style(name: str, raw: Mapping[str, Any], base: SpriteStyle) -> SpriteStyle:
    try:
        color = tuple(int(c) for c in raw.get("color", base.color))
        if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
            raise ConfigError(f"sprites.{name}.color must be 3 ints in 0..255, got {color}")
        size_range = raw.get("size_range", base.size_range)
        if size_range is not None:
            lo, hi = (float(v) for v in size_range)
            if not 0 < lo <= hi:
                raise ConfigError(f"sprites.{name}.size_range must satisfy 0 < lo <= hi")
            size_range = (lo, hi)
            size = float(raw.get("size", (lo + hi) / 2.0))
        else:
            size = float(raw.get("size", base.size))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid sprites.{name}: {e}") from e
    if size <= 0:
        raise ConfigError(f"sprites.{name}.size must be > 0, got {size}")
    return SpriteStyle(size, color, size_range)  # type: ignore[arg-type]


def styles_from_config(cfg: Mapping[str, Any] | None) -> dict[str, SpriteStyle]:
    """`sprites` セクションを既定値へ重ねて返す（未知の種類は `ConfigError`）。"""
    styles = dict(DEFAULT_STYLES)
    if not cfg:
        return styles
    unknown = sorted(set(cfg) - set(styles))
    if unknown:
        raise ConfigError(f"unknown sprite kinds: {unknown}")
    for name, raw in cfg.items():
        if not isinstance(raw, Mapping):
            raise ConfigError(f"sprites.{name} must be a mapping")
        styles[name] = _parse_style(name, raw, styles[name])
    return styles


def to_screen(points: np.ndarray, center: tuple[float, float]) -> np.ndarray:
    """観測者中心の座標を、観測者が `center` に来るウィンドウ座標へ平行移動する。"""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return pts + np.asarray(center, dtype=np.float64)


__all__ = ["DEFAULT_STYLES", "SpriteStyle", "styles_from_config", "to_screen"]
