from __future__ import annotations

import pytest

from engine.spacetime.worldline import Path
from worldlines import build_path, get_worldline, list_worldlines, worldline
from worldlines.registry import _worldline_registry, is_worldline_registered


def test_builtin_generators_registered() -> None:
    names = list_worldlines()
    for n in ("literal", "stationary", "circle", "lissajous", "shuttle"):
        assert n in names


def test_lookup_is_normalized() -> None:
    assert get_worldline("Circle") is get_worldline("circle")
    assert is_worldline_registered("LISSAJOUS")
    assert not is_worldline_registered("")


def test_unknown_lookup_lists_known_names() -> None:
    with pytest.raises(KeyError) as ei:
        get_worldline("nope")
    assert "circle" in str(ei.value)


def test_user_generator_roundtrip() -> None:
    @worldline("figure-eight")
    def _eight(*, period: float = 2.0) -> Path:
        return Path([(0.0, 0.0), (1.0, 0.0), (0.0, 0.0)], [0.0, period / 2.0, period])

    try:
        assert is_worldline_registered("figure_eight")
        p = build_path({"kind": "figure-eight", "period": 4.0})
        assert p.period == 4.0
    finally:
        _worldline_registry.unregister("figure_eight")
    assert not is_worldline_registered("figure_eight")


def test_name_keyword_and_bare_forms() -> None:
    @worldline(name="KeywordNamed")
    def _a() -> Path:
        return Path([(0.0, 0.0)], [1.0])

    @worldline
    def bare_named() -> Path:
        return Path([(0.0, 0.0)], [1.0])

    try:
        assert is_worldline_registered("keyword_named")
        assert is_worldline_registered("bare_named")
    finally:
        _worldline_registry.unregister("keyword_named")
        _worldline_registry.unregister("bare_named")


def test_duplicate_name_rejected() -> None:
    with pytest.raises(ValueError):

        @worldline("circle")
        def _other() -> Path:  # pragma: no cover - 登録で失敗する
            return Path([(0.0, 0.0)], [1.0])


def test_only_functions() -> None:
    with pytest.raises(TypeError):

        @worldline
        class NotAFunction:  # noqa: D401
            pass
