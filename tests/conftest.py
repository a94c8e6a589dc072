"""共通フィクスチャ。

- 乱数シード固定
- 小さなシミュレーション設定と世界線の試料
"""

from __future__ import annotations

import numpy as np
import pytest

from engine.spacetime.config import Bounds, SimulationConfig
from engine.spacetime.worldline import Path


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def sim_config() -> SimulationConfig:
    """光速 2000・速度上限 1000 の小さな構成（シーン生成なし）。"""
    return SimulationConfig(
        speed_of_light=2000.0,
        timestep=1.0 / 60.0,
        acceleration=(1000.0, 1000.0),
        friction=0.05,
        max_speed=1000.0,
        bounds=Bounds(-2000.0, 2000.0, -2000.0, 2000.0),
        num_markers=8,
        orbit_radius=100.0,
        num_points=0,
        num_dust=0,
        seed=7,
    )


@pytest.fixture()
def two_point_path() -> Path:
    """`(0,0)@1.0 → (10,0)@2.0` の 2 点世界線（c=1 で使う）。"""
    return Path.from_pairs([((0.0, 0.0), 1.0), ((10.0, 0.0), 2.0)])


@pytest.fixture()
def closed_square_path() -> Path:
    """先頭と最終が同じ位置の閉じた世界線（速度は光速 1 の半分以下）。"""
    return Path(
        [(5.0, 5.0), (7.0, 5.0), (7.0, 7.0), (5.0, 7.0), (5.0, 5.0)],
        [0.0, 5.0, 10.0, 15.0, 20.0],
    )
