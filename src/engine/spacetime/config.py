"""
どこで: `engine.spacetime.config`。
何を: シミュレーション定数（光速/加速度/摩擦/速度上限/境界/シーン規模/世界線定義）の型付き設定。
なぜ: 起動時に 1 度だけ検証し、不正値を致命的エラー（`ConfigError`）として早期に表面化するため。

入力は `util.utils.load_config()` が返す辞書の `simulation` セクション。例:

    simulation:
      speed_of_light: 2000.0
      timestep: 0.016666
      acceleration: [1000.0, 1000.0]
      friction: 0.05
      max_speed: 1000.0
      bounds: {left: -2000, right: 2000, lower: -2000, upper: 2000}
      worldlines:
        - {kind: literal, waypoints: [[0, 0, 1.0], [300, 0, 2.0]]}
        - {kind: circle, center: [0, 400], radius: 200, period: 4.0, samples: 64}
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from common.env import parse_bool


class ConfigError(ValueError):
    """設定値が不正（起動時に致命）。"""


@dataclass(frozen=True)
class Bounds:
    """観測者位置のソフト境界（ワールド座標の矩形）。"""

    left: float = -2000.0
    right: float = 2000.0
    lower: float = -2000.0
    upper: float = 2000.0


@dataclass(frozen=True)
class SimulationConfig:
    """シミュレーション設定。

    Parameters
    ----------
    speed_of_light : float
        光速 c（ワールド座標/秒）。
    timestep : float
        固定タイムステップ [sec]。
    acceleration : tuple[float, float]
        入力 1 単位あたりの加速度 (ax, ay)。
    friction : float
        ブレーキ時に 1 ティックで速度から差し引く割合（0..1）。
    max_speed : float
        速度上限（`0 < max_speed < speed_of_light`）。
    bounds : Bounds
        観測者位置のソフト境界。
    boundary_pull : float
        境界超過量 1 あたり 1 ティックで速度へ加える引き戻し量。
    brake_when_idle : bool
        方向入力がないティックをブレーキ扱いにする。
    num_markers, orbit_radius : int, float
        光行差リングのマーカー数と半径。
    num_points : int
        境界内にランダム配置する静的点の数。
    num_dust, dust_box : int, tuple[float, float]
        視差用ダスト数と、その折り返し領域（幅, 高さ）。
    seed : int | None
        シーン生成の乱数シード。
    worldlines : tuple[Mapping[str, Any], ...]
        世界線定義（`worldlines.build_path` が解釈）。
    """

    speed_of_light: float = 2000.0
    timestep: float = 1.0 / 60.0
    acceleration: tuple[float, float] = (1000.0, 1000.0)
    friction: float = 0.05
    max_speed: float = 1000.0
    bounds: Bounds = field(default_factory=Bounds)
    boundary_pull: float = 1.0
    brake_when_idle: bool = False
    num_markers: int = 23
    orbit_radius: float = 100.0
    num_points: int = 200
    num_dust: int = 200
    dust_box: tuple[float, float] = (1280.0, 720.0)
    seed: int | None = None
    worldlines: tuple[Mapping[str, Any], ...] = ()

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """値域を検証する。違反は `ConfigError`。"""
        if not self.speed_of_light > 0:
            raise ConfigError(f"speed_of_light must be > 0, got {self.speed_of_light}")
        if not self.timestep > 0:
            raise ConfigError(f"timestep must be > 0, got {self.timestep}")
        if not 0 < self.max_speed < self.speed_of_light:
            raise ConfigError(
                f"max_speed must satisfy 0 < max_speed < speed_of_light "
                f"(max_speed={self.max_speed}, c={self.speed_of_light})"
            )
        if not 0.0 <= self.friction <= 1.0:
            raise ConfigError(f"friction must be within [0, 1], got {self.friction}")
        if self.boundary_pull < 0:
            raise ConfigError(f"boundary_pull must be >= 0, got {self.boundary_pull}")
        b = self.bounds
        if not (b.left < b.right and b.lower < b.upper):
            raise ConfigError(f"bounds must satisfy left < right and lower < upper, got {b}")
        for name in ("num_markers", "num_points", "num_dust"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.dust_box[0] <= 0 or self.dust_box[1] <= 0:
            raise ConfigError(f"dust_box must be positive, got {self.dust_box}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SimulationConfig":
        """辞書（YAML の `simulation` セクション）から構築する。

        - 未知キーは `ConfigError`（綴り間違いを早期検出）。
        - 欠けたキーは既定値。
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"simulation config must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown simulation config keys: {unknown}")

        kwargs: dict[str, Any] = {}
        try:
            for key, raw in data.items():
                if key == "bounds":
                    kwargs[key] = _parse_bounds(raw)
                elif key in ("acceleration", "dust_box"):
                    x, y = raw
                    kwargs[key] = (float(x), float(y))
                elif key in ("num_markers", "num_points", "num_dust"):
                    kwargs[key] = int(raw)
                elif key == "seed":
                    kwargs[key] = None if raw is None else int(raw)
                elif key == "brake_when_idle":
                    flag = parse_bool(raw)
                    if flag is None:
                        raise ConfigError(f"brake_when_idle must be a boolean, got {raw!r}")
                    kwargs[key] = flag
                elif key == "worldlines":
                    kwargs[key] = _parse_worldlines(raw)
                else:
                    kwargs[key] = float(raw)
        except ConfigError:
            raise
        except (TypeError, ValueError) as e:
            raise ConfigError(f"invalid simulation config value: {e}") from e
        return cls(**kwargs)


def _parse_bounds(raw: Any) -> Bounds:
    if isinstance(raw, Mapping):
        unknown = sorted(set(raw) - {"left", "right", "lower", "upper"})
        if unknown:
            raise ConfigError(f"unknown bounds keys: {unknown}")
        return Bounds(**{k: float(v) for k, v in raw.items()})
    left, right, lower, upper = raw
    return Bounds(float(left), float(right), float(lower), float(upper))


def _parse_worldlines(raw: Any) -> tuple[Mapping[str, Any], ...]:
    if raw is None:
        return ()
    out = []
    for i, item in enumerate(raw):
        if not isinstance(item, Mapping) or "kind" not in item:
            raise ConfigError(f"worldlines[{i}] must be a mapping with a 'kind' key")
        out.append(dict(item))
    return tuple(out)


__all__ = ["Bounds", "ConfigError", "SimulationConfig"]
