"""
どこで: `engine.io.keyboard`。
何を: キー押下状態（pyglet `KeyStateHandler` 互換の写像）から 1 ティック分の `InputSignals` を作る。
なぜ: 入力のサンプリングをティック先頭の 1 回に固定し、シミュレーション層を GUI から切り離すため。

使用例:
    from pyglet.window import key
    keys = key.KeyStateHandler()
    window.push_handlers(keys)
    kb = KeyboardInput(keys)
    kb.tick(dt)  # kb.signals を更新

既定の割り当て:
- 右: D / →、左: A / ←、上: W / ↑、下: S / ↓
- ブレーキ: Space
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from engine.core.tickable import Tickable
from engine.spacetime.observer import InputSignals


@dataclass(frozen=True)
class KeyBindings:
    """入力信号ごとのキーシンボル列（いずれかが押されていれば ON）。"""

    right: Sequence[int]
    left: Sequence[int]
    up: Sequence[int]
    down: Sequence[int]
    brake: Sequence[int]


def default_bindings() -> KeyBindings:
    """WASD/矢印キー + Space。"""
    # 遅延インポート（ヘッドレス環境で pyglet.window を読み込まない）
    from pyglet.window import key

    return KeyBindings(
        right=(key.D, key.RIGHT),
        left=(key.A, key.LEFT),
        up=(key.W, key.UP),
        down=(key.S, key.DOWN),
        brake=(key.SPACE,),
    )


class KeyboardInput(Tickable):
    """押下状態をティックごとにサンプリングし `signals` に保持する。

    Parameters
    ----------
    keys : Mapping[int, bool]
        キーシンボル → 押下中か。`KeyStateHandler` は未押下キーに False を返す。
    bindings : KeyBindings | None
        割り当て。None で `default_bindings()`。
    """

    def __init__(self, keys: Mapping[int, bool], bindings: KeyBindings | None = None):
        self._keys = keys
        self.bindings = bindings or default_bindings()
        self.signals = InputSignals()

    def _pressed(self, symbols: Sequence[int]) -> bool:
        return any(self._keys.get(s, False) for s in symbols)

    def sample(self) -> InputSignals:
        b = self.bindings
        return InputSignals(
            right=1.0 if self._pressed(b.right) else 0.0,
            left=1.0 if self._pressed(b.left) else 0.0,
            up=1.0 if self._pressed(b.up) else 0.0,
            down=1.0 if self._pressed(b.down) else 0.0,
            brake=self._pressed(b.brake),
        )

    def tick(self, dt: float) -> None:  # noqa: ARG002
        self.signals = self.sample()


__all__ = ["KeyBindings", "KeyboardInput", "default_bindings"]
