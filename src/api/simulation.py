"""
どこで: `api.simulation`（実行ランナー）。
何を: 設定読込 → 世界線生成 → ティックパイプライン構築 → pyglet ウィンドウ/入力/スプライト/HUD の結線と実行。
なぜ: 少ない記述で相対論的な見え方のシミュレーションを起動できるようにするため。

実行フロー（概要）:
1) 設定解決: `config is None` の場合は `util.utils.load_config()`（`configs/default.yaml` + ルート `config.yaml`）。
2) シミュレーション設定: `simulation` セクションを `SimulationConfig.from_mapping` で検証（不正値は `ConfigError`）。
3) 世界線: `simulation.worldlines` を `worldlines.build_paths` で `Path` 列へ（不正な通過点列は `PathError`）。
4) パイプライン: `SimulationPipeline.from_config` で静的点/マーカー/ダスト/世界線のエンティティを生成。
5) ウィンドウ: `RenderWindow` を生成し、`KeyStateHandler` を登録。
6) フレーム駆動: `FrameClock` で 入力 → シミュレーション → スプライト → HUD の順に `tick(dt)` を呼ぶ。
   `pyglet.clock.schedule_interval` の周期は固定タイムステップ。シミュレーションは実測 dt ではなく
   固定タイムステップで進む。`ESC` でウィンドウを閉じる。

引数の意味（要点）:
- `config`: 設定辞書（トップレベルに `simulation`/`window`/`sprites`/`hud`）。None でファイルから読む。
- `init_only`: True でウィンドウを作らず、構築済みの `SimulationSetup` を返して終了（設定検証用）。
- `show_hud`: HUD の有効/無効。None で `LC_HUD`（settings.HUD_ENABLED）と設定ファイルに従う。

例:
    from api import run_simulation
    run_simulation()

ロギング:
- 起動時に `common.logging.setup_default_logging()` を 1 度だけ適用する。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from common import settings as _settings
from common.logging import setup_default_logging
from common.types import RGB
from engine.core.tickable import Tickable
from engine.render.types import SpriteStyle, styles_from_config
from engine.spacetime.config import ConfigError, SimulationConfig
from engine.spacetime.observer import InputSignals
from engine.spacetime.pipeline import SimulationPipeline
from engine.ui.hud.config import HUDConfig
from util.utils import load_config
from worldlines import build_paths

logger = logging.getLogger(__name__)


@dataclass
class SimulationSetup:
    """ウィンドウ生成前に確定する構成一式。"""

    config: SimulationConfig
    pipeline: SimulationPipeline
    styles: dict[str, SpriteStyle]
    hud: HUDConfig
    background: RGB


class SimulationTicker(Tickable):
    """入力源の `signals` を読み、パイプラインを固定タイムステップで 1 ティック進める。"""

    def __init__(self, pipeline: SimulationPipeline, input_source: Any):
        self.pipeline = pipeline
        self._input = input_source

    def tick(self, dt: float) -> None:  # noqa: ARG002
        signals = getattr(self._input, "signals", None)
        self.pipeline.tick(signals if signals is not None else InputSignals())


def _resolve_background(window_cfg: Any) -> RGB:
    raw: Any = (20, 20, 40)
    if isinstance(window_cfg, Mapping):
        raw = window_cfg.get("background", raw)
    try:
        r, g, b = (int(c) for c in raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"window.background must be 3 ints, got {raw!r}") from e
    return (r, g, b)


def build_simulation(
    config: Mapping[str, Any] | None = None, *, show_hud: bool | None = None
) -> SimulationSetup:
    """設定辞書から `SimulationSetup` を構築する（ウィンドウ不要）。

    例外:
    - ConfigError: 設定値/世界線定義が不正。
    - PathError: 世界線の通過点列が不正。
    """
    cfg = dict(load_config() if config is None else config)
    sim_cfg = SimulationConfig.from_mapping(cfg.get("simulation"))
    paths = build_paths(sim_cfg.worldlines)
    pipeline = SimulationPipeline.from_config(sim_cfg, paths)
    if show_hud is None and not _settings.get().HUD_ENABLED:
        show_hud = False
    hud = HUDConfig.from_mapping(cfg.get("hud"), enabled=show_hud)
    logger.info(
        "simulation ready: c=%.1f, max_speed=%.1f, points=%d, markers=%d, worldlines=%d",
        sim_cfg.speed_of_light,
        sim_cfg.max_speed,
        len(pipeline.points),
        len(pipeline.markers),
        len(paths),
    )
    return SimulationSetup(
        config=sim_cfg,
        pipeline=pipeline,
        styles=styles_from_config(cfg.get("sprites")),
        hud=hud,
        background=_resolve_background(cfg.get("window")),
    )


def run_simulation(
    config: Mapping[str, Any] | None = None,
    *,
    init_only: bool = False,
    show_hud: bool | None = None,
) -> SimulationSetup | None:
    """シミュレーションを構築し、ウィンドウを開いて実行する。

    Parameters
    ----------
    config : Mapping[str, Any] | None
        設定辞書。None で設定ファイルから読む。
    init_only : bool, default False
        True でウィンドウを作らずに `SimulationSetup` を返す。
    show_hud : bool | None, default None
        HUD の有効/無効。None で環境変数/設定ファイルに従う。
    """
    setup_default_logging()
    setup = build_simulation(config, show_hud=show_hud)
    if init_only:
        return setup

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import numpy as np
    import pyglet
    from pyglet.window import key

    from engine.core.frame_clock import FrameClock
    from engine.core.render_window import RenderWindow
    from engine.io.keyboard import KeyboardInput
    from engine.render.sprites import SpriteLayer
    from engine.ui.hud.clock import ClockHUD
    from engine.ui.hud.sampler import ClockSampler

    s = _settings.get()
    window = RenderWindow(s.WINDOW_WIDTH, s.WINDOW_HEIGHT, bg_color=setup.background)
    keys = key.KeyStateHandler()
    window.push_handlers(keys)

    pipeline = setup.pipeline
    keyboard = KeyboardInput(keys)
    ticker = SimulationTicker(pipeline, keyboard)
    sprites = SpriteLayer(
        lambda: pipeline.last_result,
        {
            "dust": len(pipeline.dust),
            "point": len(pipeline.points),
            "worldline": len(pipeline.paths),
            "marker": len(pipeline.markers),
        },
        lambda: window.center,
        styles=setup.styles,
        rng=np.random.default_rng(setup.config.seed),
    )
    window.add_draw_callback(sprites.draw)

    tickables: list[Tickable] = [keyboard, ticker, sprites]
    if setup.hud.enabled:
        sampler = ClockSampler(lambda: pipeline.last_result, setup.config.speed_of_light, setup.hud)
        hud = ClockHUD(window, sampler, config=setup.hud)
        tickables.extend([sampler, hud])
        window.add_draw_callback(hud.draw)

    frame_clock = FrameClock(tickables)
    pyglet.clock.schedule_interval(frame_clock.tick, setup.config.timestep)

    @window.event
    def on_key_press(sym, mods):  # noqa: ANN001, ARG001
        if sym == key.ESCAPE:
            window.close()

    @window.event
    def on_close():  # noqa: ANN001
        pyglet.clock.unschedule(frame_clock.tick)
        logger.info(
            "closed after %d frames (worldline solve failures: %d)",
            frame_clock.frames,
            pipeline.paths.failures,
        )
        pyglet.app.exit()

    pyglet.app.run()
    return None


def main() -> None:
    """コンソールスクリプト `lightcone` の入口。"""
    run_simulation()


__all__ = ["SimulationSetup", "SimulationTicker", "build_simulation", "main", "run_simulation"]
