"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # Logging
    LOG_LEVEL: str = "INFO"

    # HUD
    HUD_ENABLED: bool = True

    # Kernels
    USE_NUMBA: bool = True

    # Window
    WINDOW_WIDTH: int = 1280
    WINDOW_HEIGHT: int = 720


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int`、文字列は `env_str` を使用。
    - ウィンドウ寸法は 1px 以上に丸める。
    """
    _settings.LOG_LEVEL = env_str("LC_LOG_LEVEL", "INFO").upper()
    _settings.HUD_ENABLED = env_bool("LC_HUD", True)
    _settings.USE_NUMBA = env_bool("LC_USE_NUMBA", True)
    _settings.WINDOW_WIDTH = env_int("LC_WINDOW_WIDTH", 1280, min_value=1) or 1280
    _settings.WINDOW_HEIGHT = env_int("LC_WINDOW_HEIGHT", 720, min_value=1) or 720


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
