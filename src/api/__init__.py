"""
どこで: `api` 入口（高レベル公開 API）。
何を: シミュレーション実行 `run_simulation`・構築 `build_simulation`・世界線デコレータ `worldline` を再輸出。
なぜ: 利用者が単一名前空間から世界線定義 → 実行まで完結できるようにするため。

Usage:
    from api import run, worldline

    @worldline
    def figure_eight(*, scale: float = 300.0, period: float = 4.0):
        ...

    run()
"""

from worldlines import worldline as worldline  # 公開唯一経路（api.worldline）

from .simulation import SimulationSetup, build_simulation
from .simulation import run_simulation as run
from .simulation import run_simulation as run_simulation

__all__ = [
    "run_simulation",  # 実行（詳細指定）
    "run",  # 実行（エイリアス、簡易）
    "build_simulation",
    "SimulationSetup",
    "worldline",  # ユーザー拡張用デコレータ
]

# バージョン情報
__version__ = "2026.10"
