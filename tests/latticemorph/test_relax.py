import numpy as np
import pytest

from src.latticemorph.relax import relax_points, relax
from src.latticemorph.voronoi import build_subdivision


def _solid(w, h, value):
    buf = np.full((h, w, 4), value, dtype=np.uint8)
    buf[:, :, 3] = 255
    return buf


def test_relax_fixed_point_stays():
    # black canvas: weight 1 everywhere; pixel column x=5 goes to site 0 on the tie
    seeds = np.array([[2.5, 4.5], [7.5, 4.5]])
    d = build_subdivision(seeds, 10, 10)

    out = relax_points(d, _solid(10, 10, 0), 10, 10)

    assert np.allclose(out, seeds)


def test_relax_white_field_is_identity():
    seeds = np.random.default_rng(1).random((15, 2)) * [30.0, 20.0]
    d = build_subdivision(seeds, 30, 20)

    out = relax_points(d, _solid(30, 20, 255), 30, 20)

    assert np.array_equal(out, seeds)


def test_relax_moves_toward_dark_pixels():
    buf = _solid(10, 10, 255)
    buf[:, :5, :3] = 0  # left half black
    d = build_subdivision(np.array([[5.0, 5.0]]), 10, 10)

    out = relax_points(d, buf, 10, 10)

    assert np.allclose(out, [[2.0, 4.5]])


def test_relax_does_not_mutate_input():
    seeds = np.array([[1.0, 1.0], [8.0, 3.0], [4.0, 9.0]])
    before = seeds.copy()
    d = build_subdivision(seeds, 10, 10)

    out = relax_points(d, _solid(10, 10, 0), 10, 10)

    assert out is not seeds
    assert np.array_equal(seeds, before)


def test_relax_duplicate_site_keeps_position():
    seeds = np.array([[3.0, 5.0], [3.0, 5.0], [7.0, 5.0]])
    d = build_subdivision(seeds, 10, 10)

    out = relax_points(d, _solid(10, 10, 0), 10, 10)

    assert np.array_equal(out[1], seeds[1])


def test_relax_zero_iterations_returns_input():
    seeds = np.array([[1.0, 2.0], [3.0, 4.0]])
    out = relax(seeds, _solid(10, 10, 0), 10, 10, 0)
    assert np.array_equal(out, seeds)


def test_relax_iterations_keep_points_in_bounds():
    rng = np.random.default_rng(11)
    seeds = rng.random((40, 2)) * [40.0, 30.0]
    buf = _solid(40, 30, 255)
    buf[10:20, 10:30, :3] = 0

    out = relax(seeds, buf, 40, 30, 3)

    assert out.shape == seeds.shape
    assert np.all(np.isfinite(out))
    assert np.all(out >= 0.0)
    assert np.all(out[:, 0] <= 40.0) and np.all(out[:, 1] <= 30.0)


def test_relax_should_stop_before_first_iteration():
    seeds = np.array([[1.0, 2.0], [6.0, 7.0]])
    out = relax(seeds, _solid(10, 10, 0), 10, 10, 5, should_stop=lambda: True)
    assert np.array_equal(out, seeds)


def test_relax_negative_iterations_rejected():
    with pytest.raises(ValueError):
        relax(np.zeros((1, 2)), _solid(4, 4, 0), 4, 4, -1)
