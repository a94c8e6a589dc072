"""
どこで: `common` パッケージ。
何を: 環境変数設定・ロギング・レジストリ・型エイリアスなどの共通基盤。
なぜ: engine/worldlines/api から再利用する基盤を分離し、依存の向きを単純化するため。
"""

from .base_registry import BaseRegistry

__all__ = [
    "BaseRegistry",
]
