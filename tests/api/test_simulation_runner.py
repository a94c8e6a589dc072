from __future__ import annotations

import numpy as np
import pytest

from api import SimulationSetup, build_simulation, run
from api.simulation import SimulationTicker
from common import settings
from engine.spacetime.config import ConfigError
from engine.spacetime.observer import InputSignals, dilation_factor
from engine.spacetime.worldline import PathError

SMALL = {
    "simulation": {"num_points": 3, "num_dust": 2, "num_markers": 4, "seed": 1, "worldlines": []},
    "hud": {"enabled": False},
}


@pytest.mark.integration
def test_run_init_only_with_repository_config() -> None:
    """`init_only=True` ならウィンドウを作らず構成を返す。"""
    setup = run(init_only=True)
    assert isinstance(setup, SimulationSetup)
    assert len(setup.pipeline.paths) == len(setup.config.worldlines) > 0
    assert setup.config.speed_of_light > setup.config.max_speed


@pytest.mark.integration
def test_repository_worldlines_resolve_every_tick() -> None:
    setup = build_simulation()
    for _ in range(30):
        result = setup.pipeline.tick(InputSignals(right=1.0))
    assert result.path_valid.all()
    assert setup.pipeline.paths.failures == 0


def test_build_from_mapping() -> None:
    setup = build_simulation(SMALL)
    assert len(setup.pipeline.points) == 3
    assert len(setup.pipeline.dust) == 2
    assert len(setup.pipeline.markers) == 4
    assert setup.hud.enabled is False
    assert setup.background == (20, 20, 40)


def test_show_hud_argument_overrides_file() -> None:
    assert build_simulation(SMALL, show_hud=True).hud.enabled is True


def test_hud_env_switch(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings.get(), "HUD_ENABLED", False)
    cfg = {"simulation": SMALL["simulation"]}
    assert build_simulation(cfg).hud.enabled is False
    assert build_simulation(cfg, show_hud=True).hud.enabled is True


@pytest.mark.parametrize(
    "cfg, exc",
    [
        ({"simulation": {"speed_of_light": 100.0, "max_speed": 200.0}}, ConfigError),
        ({"simulation": {"worldlines": [{"kind": "spiral"}]}}, ConfigError),
        ({"simulation": {"worldlines": [{"kind": "literal", "waypoints": [[0, 0, 2], [1, 0, 1]]}]}}, PathError),
        ({"window": {"background": "navy"}}, ConfigError),
        ({"sprites": {"comet": {}}}, ConfigError),
    ],
)
def test_invalid_configs_fail_at_startup(cfg, exc) -> None:
    with pytest.raises(exc):
        build_simulation(cfg)


def test_ticker_reads_input_signals() -> None:
    setup = build_simulation(SMALL)

    class _Input:
        signals = InputSignals(right=1.0)

    SimulationTicker(setup.pipeline, _Input()).tick(0.0)
    obs = setup.pipeline.last_result.observer
    assert obs.velocity[0] > 0.0
    assert obs.local_time == pytest.approx(setup.config.timestep)
    # 座標時刻は γ 倍だけ速く進む
    gamma = dilation_factor(obs.velocity, setup.config.speed_of_light)
    assert obs.global_time == pytest.approx(setup.config.timestep * gamma)
    assert obs.global_time > obs.local_time


def test_ticker_without_signals_is_idle() -> None:
    setup = build_simulation(SMALL)
    SimulationTicker(setup.pipeline, object()).tick(0.0)
    result = setup.pipeline.last_result
    assert result.observer.velocity == (0.0, 0.0)
    np.testing.assert_allclose(result.markers[0], [100.0, 0.0], atol=1e-9)
