from __future__ import annotations

import numpy as np

from api import run, worldline
from worldlines import sample_parametric


@worldline
def figure_eight(*, center=(0.0, -900.0), scale: float = 300.0, period: float = 5.0):
    """デモ用の 8 の字軌道（設定の `worldlines` に `{kind: figure_eight}` で追加可能）。"""
    cx, cy = center
    w = 2.0 * np.pi / period
    return sample_parametric(
        lambda t: (cx + scale * np.sin(w * t), cy + 0.5 * scale * np.sin(2.0 * w * t)),
        0.0,
        period,
        128,
    )


if __name__ == "__main__":
    run()
