import numpy as np
import pytest

from elasticbending import config
from elasticbending.analysis.formulas import angle_from_m, height_from_length, m_from_angle, width_from_length
from elasticbending.analysis.sampler import mirror_half_curve, sample_curve, sample_half_curve
from elasticbending.model.geometry_primitives import Plane, Point, Vector

LENGTH = 10.0
ANGLE = 1.0
M = m_from_angle(ANGLE)
WIDTH = width_from_length(LENGTH, M)
HEIGHT = height_from_length(LENGTH, M)


def test_straight_rod_gives_two_end_points():
    points = sample_curve(LENGTH, LENGTH, 0.0, 0.0, Plane.world_xy())
    np.testing.assert_array_equal(points, [[-5.0, 0.0, 0.0], [5.0, 0.0, 0.0]])


def test_half_curve_runs_from_end_to_apex():
    half = sample_half_curve(LENGTH, WIDTH, M, ANGLE)
    assert half.shape == (config.CURVE_DIVS + 1, 3)
    np.testing.assert_array_equal(half[0], [WIDTH / 2, 0.0, 0.0])
    assert half[-1, 0] == 0.0
    assert half[-1, 1] == pytest.approx(HEIGHT, rel=1e-9)
    # x shrinks and y grows toward the apex
    assert np.all(np.diff(half[1:, 0]) < 0.0)
    assert np.all(np.diff(half[:, 1]) > 0.0)
    np.testing.assert_array_equal(half[:, 2], 0.0)


def test_half_curve_rejects_straight_rod():
    with pytest.raises(ValueError):
        sample_half_curve(LENGTH, LENGTH, 0.0, 0.0)


def test_full_curve_is_symmetric():
    points = sample_curve(LENGTH, WIDTH, M, ANGLE, Plane.world_xy())
    n = 2 * config.CURVE_DIVS + 1
    assert points.shape == (n, 3)
    np.testing.assert_allclose(points[0], [-WIDTH / 2, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(points[-1], [WIDTH / 2, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(points[:, 0], -points[::-1, 0], atol=1e-12)
    np.testing.assert_allclose(points[:, 1], points[::-1, 1], atol=1e-12)
    apex = points[config.CURVE_DIVS]
    assert apex[0] == pytest.approx(0.0, abs=1e-12)
    assert apex[1] == pytest.approx(HEIGHT, rel=1e-9)


def test_polyline_length_close_to_rod_length():
    points = sample_curve(LENGTH, WIDTH, M, ANGLE, Plane.world_xy())
    polyline = np.linalg.norm(np.diff(points, axis=0), axis=1).sum()
    assert polyline == pytest.approx(LENGTH, rel=2e-2)


def test_zero_width_closes_the_loop():
    m = config.M_ZERO_W
    points = sample_curve(LENGTH, 0.0, m, angle_from_m(m), Plane.world_xy())
    np.testing.assert_array_equal(points[0], [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(points[-1], [0.0, 0.0, 0.0])
    assert len(points) == 2 * config.CURVE_DIVS + 1


def test_mirror_skips_points_on_axis():
    half = np.array([[2.0, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, 2.0, 0.0]])
    full = mirror_half_curve(half)
    np.testing.assert_array_equal(full, [
        [-2.0, 0.0, 0.0],
        [-1.0, 1.0, 0.0],
        [0.0, 2.0, 0.0],
        [1.0, 1.0, 0.0],
        [2.0, 0.0, 0.0],
    ])


def test_points_follow_the_plane():
    plane = Plane(origin=Point(1.0, 2.0, 3.0), x_axis=Vector(0.0, 1.0, 0.0), y_axis=Vector(0.0, 0.0, 1.0))
    local = sample_curve(LENGTH, WIDTH, M, ANGLE, Plane.world_xy())
    world = sample_curve(LENGTH, WIDTH, M, ANGLE, plane)
    np.testing.assert_allclose(world[:, 0], 1.0)
    np.testing.assert_allclose(world[:, 1], 2.0 + local[:, 0])
    np.testing.assert_allclose(world[:, 2], 3.0 + local[:, 1])


def test_coarser_sampling_setting():
    points = sample_curve(LENGTH, WIDTH, M, ANGLE, Plane.world_xy(), curve_divisions=10)
    assert len(points) == 21
