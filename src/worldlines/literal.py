from __future__ import annotations

from typing import Sequence

from engine.spacetime.worldline import Path, PathError

from .registry import worldline


@worldline
def literal(*, waypoints: Sequence[Sequence[float]]) -> Path:
    """`[[x, y, t], ...]` の通過点リストから世界線を生成します。

    Parameters
    ----------
    waypoints : Sequence[Sequence[float]]
        各要素が (x, y, t)。t は単調非減少、最後の t が周期。
    """
    rows = [tuple(float(v) for v in row) for row in waypoints]
    for i, row in enumerate(rows):
        if len(row) != 3:
            raise PathError(f"waypoints[{i}] must be [x, y, t], got {list(row)}")
    return Path([(x, y) for x, y, _ in rows], [t for _, _, t in rows])


@worldline
def stationary(*, position: Sequence[float] = (0.0, 0.0), period: float = 1.0) -> Path:
    """静止物体（1 点・周期 `period`）。遅延のみを受ける比較用。"""
    return Path([(float(position[0]), float(position[1]))], [float(period)])
