"""
Curve Sampler
=============
Samples points on the elastica once the shape parameter is known.

Only half of the curve is integrated; the other half is its mirror image about
the local y-axis. Points are parametrised by the tangent angle along the rod,
following equations (12a)/(12b) of A. Valiente, "An experiment in nonlinear
beam theory", with x and y swapped because the curve here is rotated by 90
degrees relative to the paper.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from elasticbending.config import CURVE_DIVS, ROUND_TO, SIMPSON_INTERVALS
from elasticbending.analysis.elliptic import elliptic_e, elliptic_k
from elasticbending.analysis.integration import simpson
from elasticbending.model.geometry_primitives import Plane
from elasticbending.utils import is_zero, snap_to_zero

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def sample_half_curve(
    length: float,
    width: float,
    m: float,
    angle: float,
    curve_divisions: int = CURVE_DIVS,
    simpson_intervals: int = SIMPSON_INTERVALS,
    round_to: int = ROUND_TO,
) -> npt.NDArray[np.float64]:
    """
    Local coordinates of the half-curve from the end (w/2, 0) to the apex (0, h).

    Args:
        length: Arc length of the whole rod.
        width: Chord width of the whole rod.
        m: Shape parameter.
        angle: End tangent angle (radians, > 0).
        curve_divisions: Number of tangent-angle steps.
        simpson_intervals: Subintervals of the Simpson quadrature.
        round_to: Decimal places for snapping x to zero.

    Raises:
        ValueError: If `angle` is zero (the straight rod has no half-curve to integrate).

    Returns:
        Array of shape (curve_divisions + 1, 3).
    """
    if angle == 0.0:
        raise ValueError("A straight rod (angle = 0) has no half-curve to integrate.")

    half_length = length / 2
    half_width = width / 2
    k_m = elliptic_k(m)
    e_m = elliptic_e(m)

    # The derivation measures the tangent angle from the y-axis
    ang = angle - math.pi / 2
    sin_ang = math.sin(ang)
    step = (-math.pi / 2 - ang) / curve_divisions

    def integrand(theta: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        return np.sin(theta) / np.sqrt(sin_ang - np.sin(theta))

    points = np.zeros((curve_divisions + 1, 3), dtype=np.float64)
    # The integrand is singular at theta = ang, so the end point is seeded directly
    points[0] = (half_width, 0.0, 0.0)

    x_scale = half_length / (math.sqrt(2) * k_m)
    y_scale = (half_width + half_length) / (2 * e_m)
    for k in range(1, curve_divisions + 1):
        ang_b = -math.pi / 2 if k == curve_divisions else ang + k * step
        y = math.sqrt(2) * math.sqrt(max(sin_ang - math.sin(ang_b), 0.0)) * y_scale
        x = x_scale * simpson(integrand, ang_b, -math.pi / 2, simpson_intervals)
        # Avoids tiny negative widths at the apex
        points[k] = (snap_to_zero(x, round_to), y, 0.0)

    return points


def mirror_half_curve(
    half: npt.NDArray[np.float64],
    round_to: int = ROUND_TO,
) -> npt.NDArray[np.float64]:
    """
    Full curve in local coordinates, ordered from (-w/2, 0) over the apex to (w/2, 0).

    Points on the y-axis are not duplicated, except the origin itself (which
    occurs when the width is zero and both ends coincide).
    """
    mirrored = []
    for x, y, z in half:
        if is_zero(x, round_to):
            if is_zero(y, round_to):
                mirrored.append((0.0, 0.0, 0.0))
        else:
            mirrored.append((-x, y, z))
    return np.vstack([np.array(mirrored, dtype=np.float64).reshape(-1, 3), half[::-1]])


def sample_curve(
    length: float,
    width: float,
    m: float,
    angle: float,
    plane: Plane,
    curve_divisions: int = CURVE_DIVS,
    simpson_intervals: int = SIMPSON_INTERVALS,
    round_to: int = ROUND_TO,
) -> npt.NDArray[np.float64]:
    """
    World coordinates of the whole elastica.

    `plane` must be centered on the curve: its origin is the chord midpoint and
    the rod bends toward its +y axis.

    Returns:
        Array of shape (N, 3) ordered from the start end to the far end. N is
        2 for a straight rod and 2 * curve_divisions + 1 otherwise.
    """
    if angle == 0.0:
        local = np.array([[-width / 2, 0.0, 0.0], [width / 2, 0.0, 0.0]], dtype=np.float64)
    else:
        half = sample_half_curve(length, width, m, angle, curve_divisions, simpson_intervals, round_to)
        local = mirror_half_curve(half, round_to)

    logger.debug(f"Sampled {len(local)} points (L={length:.6g}, w={width:.6g}, m={m:.6g})")
    return plane.points_at(local)
