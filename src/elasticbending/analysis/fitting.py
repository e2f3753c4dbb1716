"""
Curve Fitter
============
Interpolates sampled elastica points with a smooth parametric spline.

The interpolation uses chord-length parameters normalised to [0, 1]. For a bent
rod the exact end tangents are known from the end angle and are imposed as
first-derivative boundary conditions, which keeps the fitted curve accurate near
the ends where the samples are sparse.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, TYPE_CHECKING

import numpy as np
from scipy.interpolate import BSpline, make_interp_spline

from elasticbending.model.geometry_primitives import Plane, Vector

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

DEGREE = 3


def chord_length_parameters(points: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Cumulative chord lengths of a polyline, normalised to [0, 1].

    Raises:
        ValueError: If fewer than two points are given or all points coincide.
    """
    if len(points) < 2:
        raise ValueError("At least two points are needed to parametrise a curve.")
    chords = np.linalg.norm(np.diff(points, axis=0), axis=1)
    total = chords.sum()
    if total == 0.0:
        raise ValueError("Cannot parametrise a curve whose points all coincide.")
    return np.concatenate(([0.0], np.cumsum(chords))) / total


def end_tangents(angle: float, plane: Plane) -> tuple[Vector, Vector]:
    """Unit start and end tangents: the plane x-axis rotated by +angle and -angle about the normal."""
    start = plane.x_axis.rotate(angle, plane.z_axis)
    end = plane.x_axis.rotate(-angle, plane.z_axis)
    return start, end


@dataclass
class FittedCurve:
    """
    An interpolating B-spline through the sampled elastica points.

    Attributes:
        spline: The underlying scipy B-spline, vector valued, parameter in [0, 1].
        points: The interpolated points.
        start_tangent: Imposed unit tangent at the start, if any.
        end_tangent: Imposed unit tangent at the end, if any.
    """
    spline: BSpline
    points: npt.NDArray[np.float64]
    start_tangent: Optional[Vector] = None
    end_tangent: Optional[Vector] = None

    @property
    def degree(self) -> int:
        return int(self.spline.k)

    @property
    def knots(self) -> npt.NDArray[np.float64]:
        return self.spline.t

    @property
    def control_points(self) -> npt.NDArray[np.float64]:
        return self.spline.c

    @property
    def start(self) -> npt.NDArray[np.float64]:
        return self.evaluate(0.0)

    @property
    def end(self) -> npt.NDArray[np.float64]:
        return self.evaluate(1.0)

    def evaluate(self, t: float | npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """Point(s) on the curve at normalised parameter(s) t."""
        return self.spline(t)

    def derivative_at(self, t: float | npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        return self.spline(t, nu=1)

    def tangent_at(self, t: float) -> Vector:
        """Unit tangent at parameter t."""
        return Vector.from_array(self.derivative_at(t)).normalize()

    def sample(self, n_points: int = 200) -> npt.NDArray[np.float64]:
        return self.evaluate(np.linspace(0.0, 1.0, n_points))

    def length(self, n_points: int = 2000) -> float:
        """Arc length approximated by a dense polyline."""
        pts = self.sample(n_points)
        return float(np.linalg.norm(np.diff(pts, axis=0), axis=1).sum())


def _drop_consecutive_duplicates(points: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    keep = np.ones(len(points), dtype=bool)
    keep[1:] = np.linalg.norm(np.diff(points, axis=0), axis=1) > 0.0
    return points[keep]


def fit_curve(
    points: npt.NDArray[np.float64],
    angle: float,
    plane: Plane,
) -> FittedCurve:
    """
    Interpolate the sampled points of one elastica.

    Args:
        points: (N, 3) world points ordered from start to end.
        angle: End tangent angle in radians (already sign-normalised, i.e. in
            the frame the points were sampled in).
        plane: The frame the points were sampled in.

    Returns:
        A degree-3 curve honouring the end tangents when angle != 0, otherwise a
        plain interpolation (a straight segment for two points).
    """
    pts = _drop_consecutive_duplicates(np.asarray(points, dtype=np.float64))
    params = chord_length_parameters(pts)
    degree = min(DEGREE, len(pts) - 1)

    if angle != 0.0 and degree == DEGREE:
        start, end = end_tangents(angle, plane)
        # d/dt of a chord-length parametrisation has roughly the magnitude of the total chord
        scale = float(np.linalg.norm(np.diff(pts, axis=0), axis=1).sum())
        bc_type = (
            [(1, start.to_array() * scale)],
            [(1, end.to_array() * scale)],
        )
        spline = make_interp_spline(params, pts, k=DEGREE, bc_type=bc_type)
        logger.debug(f"Fitted degree-{DEGREE} curve through {len(pts)} points with end tangents")
        return FittedCurve(spline=spline, points=pts, start_tangent=start, end_tangent=end)

    spline = make_interp_spline(params, pts, k=degree)
    logger.debug(f"Fitted degree-{degree} curve through {len(pts)} points")
    return FittedCurve(spline=spline, points=pts)
