"""
どこで: `engine.spacetime` のティックパイプライン。
何を: 観測者積分 → ロータ導出 → 全エンティティ変換、を 1 ティックで厳密な順序で実行する。
なぜ: 変換が「積分後の速度」を必ず参照し、途中状態が外部へ見えないことを保証するため。

構成:
- `SimulationState`: 観測者状態と設定の束（モジュール大域状態を使わない）。
- エンティティ集合（ホスト側が所有し、本モジュールは読み取り＋結果生成のみ）:
  `StaticPoints` / `MarkerRing` / `DustField` / `PathEntities`。
- `SimulationPipeline.tick(signals, dt)` が `FrameResult` を返す。

例外方針:
- 世界線 1 本の `LightConeError` はそのエンティティ/ティックに局所化し、直前の有効位置を保持する。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from . import multivector as mv
from .boost import velocity_to_rotor
from .config import SimulationConfig
from .observer import InputSignals, ObserverIntegrator, ObserverState
from .transform import apply_rotor, apply_rotor_batch, light_weights, marker_directions, reorient_marker
from .worldline import LightConeError, Path, visible_point

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """1 セッション分のシミュレーション状態。"""

    config: SimulationConfig
    observer: ObserverState = field(default_factory=ObserverState)


class StaticPoints:
    """ワールド座標に固定された点群（光円錐埋め込みでブースト）。"""

    def __init__(self, positions: np.ndarray | Sequence[Sequence[float]]):
        pts = np.asarray(positions, dtype=np.float64).reshape(-1, 2)
        self.positions = pts

    @classmethod
    def random(cls, count: int, config: SimulationConfig, rng: np.random.Generator) -> "StaticPoints":
        """境界矩形内に一様ランダム配置。"""
        b = config.bounds
        xs = rng.uniform(b.left, b.right, size=count)
        ys = rng.uniform(b.lower, b.upper, size=count)
        return cls(np.stack([xs, ys], axis=1))

    def __len__(self) -> int:
        return int(self.positions.shape[0])

    def transform(self, rotor: mv.Multivector, observer: ObserverState) -> np.ndarray:
        rel = self.positions - np.asarray(observer.position, dtype=np.float64)
        return apply_rotor_batch(rotor, rel, light_weights(rel))


class MarkerRing:
    """観測者の周りに並ぶ角度マーカー（光行差の可視化）。"""

    def __init__(self, count: int, radius: float):
        self.radius = float(radius)
        self.directions = marker_directions(count)

    def __len__(self) -> int:
        return len(self.directions)

    def transform(self, rotor: mv.Multivector) -> np.ndarray:
        out = np.empty((len(self.directions), 2), dtype=np.float64)
        for i, d in enumerate(self.directions):
            out[i] = reorient_marker(rotor, d, self.radius)
        return out


class DustField:
    """画面サイズの箱で折り返す背景ダスト（速度感の視差レイヤ、ブーストしない）。"""

    def __init__(self, positions: np.ndarray, box: tuple[float, float]):
        self.positions = np.asarray(positions, dtype=np.float64).reshape(-1, 2).copy()
        self.box = (float(box[0]), float(box[1]))

    @classmethod
    def random(cls, count: int, box: tuple[float, float], rng: np.random.Generator) -> "DustField":
        w, h = box
        xs = w / 2.0 * rng.uniform(-1.0, 1.0, size=count)
        ys = h / 2.0 * rng.uniform(-1.0, 1.0, size=count)
        return cls(np.stack([xs, ys], axis=1), box)

    def __len__(self) -> int:
        return int(self.positions.shape[0])

    def advance(self, velocity: tuple[float, float], dt: float) -> np.ndarray:
        """観測者速度と逆向きに流し、箱の外へ出た点を反対側へ折り返す。"""
        w, h = self.box
        self.positions -= np.asarray(velocity, dtype=np.float64) * dt
        self.positions[:, 0] = (self.positions[:, 0] + w / 2.0) % w - w / 2.0
        self.positions[:, 1] = (self.positions[:, 1] + h / 2.0) % h - h / 2.0
        return self.positions.copy()


class PathEntities:
    """世界線を持つ物体群。解けなかったティックは直前の有効位置を保持する。"""

    def __init__(self, paths: Sequence[Path]):
        self.paths = list(paths)
        self.last_valid = np.zeros((len(self.paths), 2), dtype=np.float64)
        self.valid = np.zeros(len(self.paths), dtype=bool)
        self.failures = 0

    def __len__(self) -> int:
        return len(self.paths)

    def transform(
        self, rotor: mv.Multivector, observer: ObserverState, speed_of_light: float
    ) -> np.ndarray:
        for i, path in enumerate(self.paths):
            try:
                point = visible_point(path, observer.position, observer.global_time, speed_of_light)
            except LightConeError as e:
                self.failures += 1
                logger.debug("worldline %d skipped this tick: %s", i, e)
                continue
            weight = float(np.hypot(point[0], point[1]))
            self.last_valid[i] = apply_rotor(rotor, point, weight)
            self.valid[i] = True
        return self.last_valid.copy()


@dataclass
class FrameResult:
    """1 ティックの出力（観測者中心の画面座標）。

    `paths` は解けなかった世界線について直前の有効位置を保持し、`path_valid` は
    各世界線が一度でも解けたかを示す。
    """

    rotor: mv.Multivector
    observer: ObserverState
    points: np.ndarray
    markers: np.ndarray
    dust: np.ndarray
    paths: np.ndarray
    path_valid: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=bool))


class SimulationPipeline:
    """観測者積分 → ロータ → 変換、の順で 1 ティックを実行する。

    Parameters
    ----------
    state : SimulationState
        観測者状態と設定。`tick` がその場で更新する。
    points, markers, dust, paths :
        変換対象のエンティティ集合（省略時は空）。
    """

    def __init__(
        self,
        state: SimulationState,
        *,
        points: StaticPoints | None = None,
        markers: MarkerRing | None = None,
        dust: DustField | None = None,
        paths: PathEntities | None = None,
    ):
        self.state = state
        self.integrator = ObserverIntegrator(state.config)
        self.points = points if points is not None else StaticPoints(np.empty((0, 2)))
        self.markers = markers if markers is not None else MarkerRing(0, 0.0)
        self.dust = dust if dust is not None else DustField(np.empty((0, 2)), state.config.dust_box)
        self.paths = paths if paths is not None else PathEntities([])
        self.last_result: FrameResult | None = None

    @classmethod
    def from_config(
        cls, config: SimulationConfig, paths: Sequence[Path] = ()
    ) -> "SimulationPipeline":
        """設定のシーン規模からエンティティ集合を生成して構築する。"""
        rng = np.random.default_rng(config.seed)
        return cls(
            SimulationState(config),
            points=StaticPoints.random(config.num_points, config, rng),
            markers=MarkerRing(config.num_markers, config.orbit_radius),
            dust=DustField.random(config.num_dust, config.dust_box, rng),
            paths=PathEntities(paths),
        )

    def tick(self, signals: InputSignals, dt: float | None = None) -> FrameResult:
        """1 ティック進めて変換結果を返す。`dt=None` は設定の固定タイムステップ。"""
        cfg = self.state.config
        step = cfg.timestep if dt is None else float(dt)

        # ① 観測者状態の積分
        self.integrator.step(self.state.observer, signals, step)
        snapshot = self.state.observer.snapshot()

        # ② 積分後の速度からロータ
        rotor = velocity_to_rotor(snapshot.velocity, cfg.speed_of_light)

        # ③ 全エンティティへ適用
        result = FrameResult(
            rotor=rotor,
            observer=snapshot,
            points=self.points.transform(rotor, snapshot),
            markers=self.markers.transform(rotor),
            dust=self.dust.advance(snapshot.velocity, step),
            paths=self.paths.transform(rotor, snapshot, cfg.speed_of_light),
            path_valid=self.paths.valid.copy(),
        )
        self.last_result = result
        return result


__all__ = [
    "DustField",
    "FrameResult",
    "MarkerRing",
    "PathEntities",
    "SimulationPipeline",
    "SimulationState",
    "StaticPoints",
]
