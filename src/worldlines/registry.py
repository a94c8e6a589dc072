"""
どこで: `worldlines` のレジストリ層（関数専用）。
何を: `@worldline` デコレータで世界線ジェネレータを登録し、取得/一覧を提供。
なぜ: 設定ファイルの `kind` 文字列から `Path` 生成関数を安全に解決するため。

概要:
- 登録対象は「`Path` を返す関数」のみ。
- デコレータは名前省略可（`@worldline` / `@worldline()`）と明示名指定をサポート。
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

from common.base_registry import BaseRegistry
from engine.spacetime.worldline import Path

WorldlineFn = Callable[..., Path]

_worldline_registry = BaseRegistry("worldline")


def worldline(arg: Any | None = None, /, name: str | None = None):
    """世界線ジェネレータを登録するデコレータ。

    使用例:
    - `@worldline` / `@worldline()`                      → 関数名から自動推論。
    - `@worldline("orbit")` / `@worldline(name="orbit")` → 明示名で登録。

    例外:
    - TypeError: 関数以外を登録しようとした場合。
    """

    def _register_checked(obj: Any, resolved_name: str | None = None):
        if not inspect.isfunction(obj):
            raise TypeError(f"@worldline は関数のみ登録可能です: got {obj!r}")
        return _worldline_registry.register(resolved_name)(obj)

    if inspect.isfunction(arg) and name is None:
        return _register_checked(arg, None)

    if isinstance(arg, str) and name is None:
        return lambda obj: _register_checked(obj, arg)

    if arg is not None:
        return _register_checked(arg, name)

    return lambda obj: _register_checked(obj, name)


def get_worldline(name: str) -> WorldlineFn:
    """登録済みジェネレータを取得（未登録は `KeyError`）。"""
    return _worldline_registry.get(name)


def list_worldlines() -> list[str]:
    return _worldline_registry.names()


def is_worldline_registered(name: str) -> bool:
    return name in _worldline_registry


__all__ = ["get_worldline", "is_worldline_registered", "list_worldlines", "worldline"]
