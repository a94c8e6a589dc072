from __future__ import annotations

import math

import pytest

from engine.spacetime import multivector as mv
from engine.spacetime.boost import rapidity, velocity_multivector, velocity_to_rotor
from engine.spacetime.transform import apply_rotor

C = 2000.0


def test_zero_velocity_is_identity_rotor() -> None:
    assert velocity_to_rotor((0.0, 0.0), C) == mv.IDENTITY
    assert rapidity((0.0, 0.0), C) == 0.0


def test_rapidity_half_light_speed() -> None:
    phi = rapidity((1000.0, 0.0), C)
    assert math.tanh(phi) == pytest.approx(0.5, rel=1e-12)


def test_rotor_scalar_part_is_cosh_of_half_rapidity() -> None:
    v = (0.0, -1500.0)
    r = velocity_to_rotor(v, C)
    assert r[0] == pytest.approx(math.cosh(rapidity(v, C) / 2.0))
    # 二重ベクトル以外の成分は 0
    assert r[1] == r[2] == r[3] == r[7] == 0.0


def test_velocity_multivector_is_unit() -> None:
    u = velocity_multivector((300.0, 400.0), C)
    assert mv.norm(u) == pytest.approx(1.0)
    assert u[1] > 0.0


def test_strict_rejects_light_speed() -> None:
    with pytest.raises(ValueError):
        velocity_to_rotor((C, 0.0), C, strict=True)
    with pytest.raises(ValueError):
        rapidity((0.0, 3000.0), C, strict=True)


def test_light_speed_without_strict_does_not_fail() -> None:
    # |v| == c は正規化でノルム 0 → 恒等ロータ扱い（NaN にならない）
    r = velocity_to_rotor((C, 0.0), C)
    assert all(math.isfinite(c) for c in r)


def test_rest_direction_recovers_velocity_direction() -> None:
    v = (600.0, 800.0)
    r = velocity_to_rotor(v, C)
    gamma = 1.0 / math.sqrt(1.0 - (1000.0 / C) ** 2)
    x, y = apply_rotor(mv.reverse(r), (0.0, 0.0), 1.0)
    assert x == pytest.approx(gamma * v[0] / C, rel=1e-9)
    assert y == pytest.approx(gamma * v[1] / C, rel=1e-9)
    # 順方向のロータでは逆向き（符号違い）
    x2, y2 = apply_rotor(r, (0.0, 0.0), 1.0)
    assert (x2, y2) == pytest.approx((-x, -y), rel=1e-9)

