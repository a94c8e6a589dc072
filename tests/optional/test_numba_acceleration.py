import numpy as np
import pytest

pytest.importorskip("numba")

from engine.spacetime import multivector as mv
from engine.spacetime.boost import velocity_to_rotor
from engine.spacetime.kernels import sandwich_points
from engine.spacetime.transform import apply_rotor

# JIT 版カーネルが Python 版（py_func）およびスカラー経路と一致すること


@pytest.mark.optional
def test_jit_kernel_matches_python_and_scalar_paths():
    rng = np.random.default_rng(3)
    pts = rng.uniform(-500.0, 500.0, size=(64, 2))
    w = np.hypot(pts[:, 0], pts[:, 1])
    rotor = velocity_to_rotor((700.0, -300.0), 2000.0)
    r = np.asarray(rotor.coeffs, dtype=np.float64)

    jit = sandwich_points(r, pts, w)
    py = sandwich_points.py_func(r, pts, w)
    np.testing.assert_allclose(jit, py, rtol=0, atol=1e-9)
    for i in (0, 17, 63):
        np.testing.assert_allclose(jit[i], apply_rotor(rotor, tuple(pts[i]), float(w[i])), atol=1e-9)


@pytest.mark.optional
def test_identity_rotor_is_noop_under_jit():
    pts = np.array([[1.0, 2.0], [-3.0, 0.5]])
    out = sandwich_points(np.asarray(mv.IDENTITY.coeffs, dtype=np.float64), pts, np.ones(2))
    np.testing.assert_allclose(out, pts)
