"""
どこで: `engine.ui.hud` パッケージ。
何を: HUD 表示の設定と項目定義（フィールド名）を提供する。
なぜ: HUD の有効/無効や表示項目の選択を宣言的に制御するため。
"""

from __future__ import annotations

from .config import HUDConfig
from .fields import FPS, GAMMA, GLOBAL_TIME, LOCAL_TIME, SPEED

__all__ = [
    "HUDConfig",
    "GLOBAL_TIME",
    "LOCAL_TIME",
    "SPEED",
    "GAMMA",
    "FPS",
]
