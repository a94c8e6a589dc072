"""
どこで: `engine.ui.hud.config`。
何を: HUD 表示の設定（有効/無効、表示項目と順序、フォント、色）を定義する。
なぜ: HUD の表示を宣言的に制御し、設定ファイル `hud` セクションから差し替え可能にするため。
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Sequence

from engine.spacetime.config import ConfigError

from .fields import ALL_FIELDS, FPS, GAMMA, GLOBAL_TIME, LOCAL_TIME, SPEED


@dataclass(frozen=True)
class HUDConfig:
    """HUD の表示設定。

    Parameters
    ----------
    enabled : bool
        HUD 全体の有効/無効。
    show_speed : bool
        速度（c 比）と γ の表示有無。
    show_fps : bool
        FPS 表示の有無。
    order : list[str] | None
        表示順（None なら既定順）。
    font_name : str | None
        フォント名（None で pyglet 既定）。
    font_size : int
        フォントサイズ（pt）。
    color : tuple[int, int, int, int]
        文字色 RGBA（0..255）。
    """

    enabled: bool = True
    show_speed: bool = True
    show_fps: bool = True
    order: Sequence[str] | None = None
    font_name: str | None = None
    font_size: int = 10
    color: tuple[int, int, int, int] = (230, 230, 230, 200)

    def resolved_order(self) -> list[str]:
        """有効フラグに基づく既定順を返す（`order` 指定時はそれを優先）。"""
        if self.order is not None:
            return list(self.order)
        keys = [GLOBAL_TIME, LOCAL_TIME]
        if self.show_speed:
            keys.extend([SPEED, GAMMA])
        if self.show_fps:
            keys.append(FPS)
        return keys

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, **overrides: Any) -> "HUDConfig":
        """設定ファイルの `hud` セクションから構築する（`overrides` が最優先）。"""
        cfg = cls()
        if data:
            try:
                kwargs: dict[str, Any] = {}
                for k, v in data.items():
                    if k in ("enabled", "show_speed", "show_fps"):
                        kwargs[k] = bool(v)
                    elif k == "font_size":
                        kwargs[k] = int(v)
                    elif k == "font_name":
                        kwargs[k] = None if v is None else str(v)
                    elif k == "color":
                        rgba = tuple(int(c) for c in v)
                        kwargs[k] = rgba if len(rgba) == 4 else rgba + (255,)
                    elif k == "order":
                        kwargs[k] = None if v is None else [str(x) for x in v]
                    else:
                        raise ConfigError(f"unknown hud config key: {k!r}")
            except (TypeError, ValueError) as e:
                raise ConfigError(f"invalid hud config value: {e}") from e
            cfg = replace(cfg, **kwargs)
        cfg = replace(cfg, **{k: v for k, v in overrides.items() if v is not None})
        unknown = [k for k in cfg.resolved_order() if k not in ALL_FIELDS]
        if unknown:
            raise ConfigError(f"unknown hud fields: {unknown}")
        return cfg


__all__ = ["HUDConfig"]
