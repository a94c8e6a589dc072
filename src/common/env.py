"""
どこで: `common.env`
何を: 環境変数（`LC_*`）の軽量パースヘルパを提供。
なぜ: `common.settings` 以外に `os.getenv` + 例外/境界ガードが散在しないようにするため。
"""

from __future__ import annotations

import os
from typing import Optional


def env_int(
    name: str, default: Optional[int] = None, *, min_value: Optional[int] = None
) -> Optional[int]:
    """整数環境変数を取得（存在しない/不正値は既定値）。

    Parameters
    ----------
    name : str
        環境変数名。
    default : Optional[int]
        既定値。
    min_value : Optional[int]
        下限（指定時、結果が下回れば下限に丸める）。
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    if min_value is not None and val < min_value:
        val = min_value
    return val


def parse_bool(raw: object) -> Optional[bool]:
    """真偽値として解釈する（bool、整数、0/1・true/false・on/off 等の文字列）。

    解釈できない値は None。環境変数と設定ファイルで同じ規則を使う。
    """
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int):
        return raw != 0
    if not isinstance(raw, str):
        return None
    s = raw.strip().lower()
    if s.lstrip("-").isdigit():
        return int(s) != 0
    if s in {"true", "t", "yes", "y", "on"}:
        return True
    if s in {"false", "f", "no", "n", "off"}:
        return False
    return None


def env_bool(name: str, default: bool = False) -> bool:
    """真偽環境変数を取得（解釈は `parse_bool`、不正値は既定値）。"""
    raw = os.getenv(name)
    if raw is None:
        return bool(default)
    val = parse_bool(raw)
    return bool(default) if val is None else val


def env_str(name: str, default: str = "") -> str:
    """文字列環境変数を取得（前後空白を除去、空文字は既定値）。"""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()
