from __future__ import annotations

import math

import numpy as np
import pytest

from common import settings
from engine.spacetime import multivector as mv
from engine.spacetime.boost import rapidity, velocity_to_rotor
from engine.spacetime.transform import (
    apply_rotor,
    apply_rotor_batch,
    embed_point,
    light_weights,
    marker_directions,
    reorient_marker,
    sandwich,
)

C = 2000.0


@pytest.mark.parametrize("point", [(0.0, 0.0), (1.0, 2.0), (-350.5, 12.25)])
def test_identity_rotor_leaves_points(point) -> None:
    assert apply_rotor(mv.IDENTITY, point) == pytest.approx(point)
    assert apply_rotor(mv.IDENTITY, point, 7.0) == pytest.approx(point)


def test_embed_point_is_grade_one() -> None:
    p = embed_point((3.0, -4.0), 5.0)
    assert p == mv.vector(5.0, 3.0, -4.0)
    assert sandwich(mv.IDENTITY, p) == p


def test_light_cone_point_ahead_is_doppler_scaled() -> None:
    v = (1000.0, 0.0)
    r = velocity_to_rotor(v, C)
    phi = rapidity(v, C)
    d = 300.0
    ahead = apply_rotor(r, (d, 0.0), d)
    behind = apply_rotor(r, (-d, 0.0), d)
    assert ahead[0] == pytest.approx(d * math.exp(-phi))
    assert behind[0] == pytest.approx(-d * math.exp(phi))
    assert ahead[1] == pytest.approx(0.0, abs=1e-9)


def test_perpendicular_component_unchanged_by_boost() -> None:
    r = velocity_to_rotor((1200.0, 0.0), C)
    _, y = apply_rotor(r, (40.0, 75.0), 1.0)
    assert y == pytest.approx(75.0)


def test_light_weights() -> None:
    w = light_weights(np.array([[3.0, 4.0], [0.0, 0.0], [-5.0, 12.0]]))
    np.testing.assert_allclose(w, [5.0, 0.0, 13.0])


@pytest.mark.parametrize("use_numba", [True, False])
def test_batch_matches_scalar_path(monkeypatch, use_numba: bool) -> None:
    monkeypatch.setattr(settings.get(), "USE_NUMBA", use_numba)
    rng = np.random.default_rng(3)
    pts = rng.uniform(-500.0, 500.0, size=(16, 2))
    weights = light_weights(pts)
    r = velocity_to_rotor((-700.0, 450.0), C)
    out = apply_rotor_batch(r, pts, weights)
    expected = np.array([apply_rotor(r, (x, y), w) for (x, y), w in zip(pts, weights)])
    np.testing.assert_allclose(out, expected, rtol=1e-12, atol=1e-9)


def test_batch_weight_forms() -> None:
    r = velocity_to_rotor((300.0, 0.0), C)
    pts = np.array([[10.0, 0.0], [0.0, 10.0]])
    np.testing.assert_allclose(apply_rotor_batch(r, pts), apply_rotor_batch(r, pts, 1.0))
    np.testing.assert_allclose(
        apply_rotor_batch(r, pts, 2.0), apply_rotor_batch(r, pts, np.array([2.0, 2.0]))
    )
    assert apply_rotor_batch(r, np.empty((0, 2))).shape == (0, 2)


@pytest.mark.parametrize("v", [(0.0, 0.0), (1500.0, 0.0), (-800.0, 900.0)])
def test_markers_stay_on_circle(v) -> None:
    r = velocity_to_rotor(v, C)
    for d in marker_directions(23):
        x, y = reorient_marker(r, d, 100.0)
        assert math.hypot(x, y) == pytest.approx(100.0)


def test_markers_unchanged_at_rest() -> None:
    for d in marker_directions(4):
        assert reorient_marker(mv.IDENTITY, d, 50.0) == pytest.approx((50.0 * d[0], 50.0 * d[1]))


def test_marker_directions() -> None:
    assert marker_directions(0) == []
    dirs = marker_directions(4)
    assert dirs[1] == pytest.approx((0.0, 1.0), abs=1e-12)
