"""
どこで: `common.base_registry`。
何を: 名前 → 関数/クラスの登録表（キー正規化付き）。
なぜ: 世界線ジェネレータなど、設定ファイルの文字列から実装を解決する箇所を同一ポリシーで扱うため。
"""

import re
from typing import Any, Callable


class BaseRegistry:
    """レジストリの基底クラス。

    - 文字列キーは正規化されます（大文字小文字・キャメル→スネーク・ハイフン→アンダースコア）。
    - デコレータは名前省略可。省略時は関数/クラス名から自動推論します。
    """

    def __init__(self, kind: str = "entry"):
        self._kind = kind
        self._registry: dict[str, Any] = {}

    @staticmethod
    def _camel_to_snake(name: str) -> str:
        s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
        s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
        return s2.lower()

    @classmethod
    def normalize_key(cls, name: str) -> str:
        """レジストリキーの正規化（例: "MyPath" -> "my_path", "figure-eight" -> "figure_eight"）。"""
        if not isinstance(name, str):
            raise TypeError("レジストリキーは str である必要があります")
        if not name:
            raise ValueError("レジストリキーは空であってはなりません")
        name = name.replace("-", "_")
        return cls._camel_to_snake(name) if any(c.isupper() for c in name) else name.lower()

    def register(self, name: str | None = None) -> Callable[[Any], Any]:
        """登録デコレータ。同名の別オブジェクトは `ValueError`。"""

        def decorator(obj: Any) -> Any:
            key = self.normalize_key(name or obj.__name__)
            if key in self._registry and self._registry[key] is not obj:
                raise ValueError(f"{self._kind} '{key}' は既に登録されています")
            self._registry[key] = obj
            return obj

        return decorator

    def get(self, name: str) -> Any:
        key = self.normalize_key(name)
        if key not in self._registry:
            known = ", ".join(sorted(self._registry)) or "-"
            raise KeyError(f"{self._kind} '{name}' は登録されていません（登録済み: {known}）")
        return self._registry[key]

    def names(self) -> list[str]:
        """登録名の一覧（ソート済み）。"""
        return sorted(self._registry)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and bool(name) and self.normalize_key(name) in self._registry

    def unregister(self, name: str) -> None:
        """削除（存在しない名前は無視）。"""
        self._registry.pop(self.normalize_key(name), None)
