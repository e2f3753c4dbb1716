import math

import numpy as np
import pytest

from elasticbending.analysis.fitting import chord_length_parameters, end_tangents, fit_curve
from elasticbending.analysis.formulas import height_from_length, m_from_angle, width_from_length
from elasticbending.analysis.sampler import sample_curve
from elasticbending.model.geometry_primitives import Plane


def test_chord_length_parameters():
    pts = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 3.0, 0.0]])
    np.testing.assert_allclose(chord_length_parameters(pts), [0.0, 0.25, 1.0])


def test_chord_length_parameters_need_distinct_points():
    with pytest.raises(ValueError):
        chord_length_parameters(np.zeros((3, 3)))


def test_two_points_give_straight_segment():
    pts = np.array([[-5.0, 0.0, 0.0], [5.0, 0.0, 0.0]])
    curve = fit_curve(pts, 0.0, Plane.world_xy())
    assert curve.degree == 1
    assert curve.start_tangent is None
    np.testing.assert_allclose(curve.evaluate(0.5), [0.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(curve.evaluate(0.25), [-2.5, 0.0, 0.0], atol=1e-12)
    assert curve.length() == pytest.approx(10.0)


def test_end_tangents_rotate_about_normal():
    start, end = end_tangents(math.pi / 4, Plane.world_xy())
    s = math.sqrt(0.5)
    np.testing.assert_allclose(start.to_array(), [s, s, 0.0], atol=1e-12)
    np.testing.assert_allclose(end.to_array(), [s, -s, 0.0], atol=1e-12)


def test_mirrored_plane_turns_tangents_down():
    start, _ = end_tangents(0.5, Plane.world_xy().mirrored())
    assert start.y < 0.0


def test_bent_curve_interpolates_with_tangents():
    angle = 1.2
    m = m_from_angle(angle)
    length = 10.0
    width = width_from_length(length, m)
    plane = Plane.world_xy()
    points = sample_curve(length, width, m, angle, plane)

    curve = fit_curve(points, angle, plane)
    assert curve.degree == 3
    params = chord_length_parameters(points)
    np.testing.assert_allclose(curve.evaluate(params), points, atol=1e-9)

    np.testing.assert_allclose(curve.tangent_at(0.0).to_array(), [math.cos(angle), math.sin(angle), 0.0], atol=1e-9)
    np.testing.assert_allclose(curve.tangent_at(1.0).to_array(), [math.cos(angle), -math.sin(angle), 0.0], atol=1e-9)
    np.testing.assert_allclose(curve.start, points[0], atol=1e-9)
    np.testing.assert_allclose(curve.end, points[-1], atol=1e-9)

    assert curve.length() == pytest.approx(length, rel=1e-2)
    assert curve.sample(101)[:, 1].max() == pytest.approx(height_from_length(length, m), rel=1e-6)
