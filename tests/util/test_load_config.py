from __future__ import annotations

import logging
from pathlib import Path

import pytest

from util.utils import _find_project_root, load_config


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_root_config_overrides_top_level_keys(tmp_path: Path) -> None:
    _write(tmp_path / "configs" / "default.yaml", "simulation: {num_points: 3}\nhud: {font_size: 9}\n")
    _write(tmp_path / "config.yaml", "simulation: {num_dust: 4}\n")
    cfg = load_config(tmp_path)
    # トップレベル単位の上書き（ネストはマージしない）
    assert cfg["simulation"] == {"num_dust": 4}
    assert cfg["hud"] == {"font_size": 9}


def test_missing_files_give_empty(tmp_path: Path) -> None:
    assert load_config(tmp_path) == {}


def test_invalid_yaml_is_skipped_with_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    _write(tmp_path / "configs" / "default.yaml", "hud: {font_size: 9}\n")
    _write(tmp_path / "config.yaml", "simulation: [unclosed\n")
    with caplog.at_level(logging.WARNING, logger="util.utils"):
        cfg = load_config(tmp_path)
    assert cfg == {"hud": {"font_size": 9}}
    assert any("failed to read config" in r.getMessage() for r in caplog.records)


def test_non_mapping_yaml_is_ignored(tmp_path: Path) -> None:
    _write(tmp_path / "configs" / "default.yaml", "- 1\n- 2\n")
    assert load_config(tmp_path) == {}


@pytest.mark.integration
def test_repository_default_config() -> None:
    cfg = load_config()
    assert cfg["simulation"]["speed_of_light"] > cfg["simulation"]["max_speed"]
    assert {w["kind"] for w in cfg["simulation"]["worldlines"]} <= {
        "literal",
        "stationary",
        "circle",
        "lissajous",
        "shuttle",
    }


def test_find_project_root_fallback(tmp_path: Path) -> None:
    start = tmp_path / "a" / "b"
    start.mkdir(parents=True)
    assert _find_project_root(start) == start.parent.parent


def test_find_project_root_by_configs_dir(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    start = tmp_path / "src" / "util"
    start.mkdir(parents=True)
    assert _find_project_root(start) == tmp_path
