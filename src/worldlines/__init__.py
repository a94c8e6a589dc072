"""
どこで: `worldlines` パッケージ。
何を: 世界線ジェネレータ（literal/stationary/circle/lissajous/shuttle）と、設定辞書からの生成。
なぜ: 起動時設定の `worldlines` 項目を `Path` 列へ変換する入口を一箇所に集約するため。
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from engine.spacetime.config import ConfigError
from engine.spacetime.worldline import Path

# 登録のための import（副作用）
from . import literal as _literal  # noqa: F401
from . import parametric as _parametric  # noqa: F401
from .parametric import sample_parametric
from .registry import get_worldline, is_worldline_registered, list_worldlines, worldline


def build_path(spec: Mapping[str, Any]) -> Path:
    """`{kind: <name>, ...params}` から `Path` を生成する。

    例外:
    - ConfigError: 未登録の kind、または不正なパラメータ。
    - PathError: 生成された通過点列が不正。
    """
    params = dict(spec)
    kind = params.pop("kind", None)
    if not isinstance(kind, str) or not is_worldline_registered(kind):
        raise ConfigError(f"unknown worldline kind: {kind!r} (known: {list_worldlines()})")
    fn = get_worldline(kind)
    try:
        return fn(**params)
    except TypeError as e:
        raise ConfigError(f"invalid parameters for worldline '{kind}': {e}") from e


def build_paths(specs: Iterable[Mapping[str, Any]]) -> list[Path]:
    return [build_path(s) for s in specs]


__all__ = [
    "build_path",
    "build_paths",
    "get_worldline",
    "list_worldlines",
    "sample_parametric",
    "worldline",
]
