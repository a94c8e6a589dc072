"""
どこで: `engine.spacetime` サブパッケージ。
何を: マルチベクトル代数・ブースト・空間変換・光円錐ソルバ・観測者積分・ティックパイプラインを提供。
なぜ: 相対論的な見え方の計算を描画/入力/ウィンドウから切り離し、純粋に検証可能な層とするため。
"""

from .boost import rapidity, velocity_to_rotor
from .config import Bounds, ConfigError, SimulationConfig
from .multivector import Multivector
from .observer import InputSignals, ObserverIntegrator, ObserverState
from .pipeline import FrameResult, SimulationPipeline, SimulationState
from .transform import apply_rotor, apply_rotor_batch
from .worldline import LightConeError, Path, PathError, visible_point

__all__ = [
    "Bounds",
    "ConfigError",
    "FrameResult",
    "InputSignals",
    "LightConeError",
    "Multivector",
    "ObserverIntegrator",
    "ObserverState",
    "Path",
    "PathError",
    "SimulationConfig",
    "SimulationPipeline",
    "SimulationState",
    "apply_rotor",
    "apply_rotor_batch",
    "rapidity",
    "velocity_to_rotor",
    "visible_point",
]
