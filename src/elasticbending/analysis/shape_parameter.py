"""
Shape Parameter Solver
======================
Finds the shape parameter m of the elastica from a pair of boundary quantities.

Every pair except those involving the angle is solved by bisection on a ratio
of complete elliptic integrals. The searches use a fixed tolerance (MAXERR) on
the interval width and a fixed iteration cap (MAXIT); the empirical constants in
`elasticbending.config` were tuned against exactly this scheme.

Functions:
    bisect: Bounded bisection for a monotone ratio function.
    solve_m_from_length_width: One root.
    solve_m_from_length_height: One or two roots.
    solve_m_from_width_height: One root.
    solve_m_from_angle: Closed form.
"""
from __future__ import annotations

import logging
from typing import Callable, List

from elasticbending.config import (
    DOUBLE_W_HL_RATIO,
    M_DOUBLE_W,
    M_MAX,
    M_MAXHEIGHT,
    M_ZERO_W,
    MAX_HL_RATIO,
    MAXERR,
    MAXIT,
)
from elasticbending.analysis.formulas import (
    height_length_ratio,
    m_from_angle,
    width_height_ratio,
    width_length_ratio,
)

logger = logging.getLogger(__name__)


def bisect(
    ratio: Callable[[float], float],
    target: float,
    lower: float,
    upper: float,
    *,
    increasing: bool,
    tolerance: float = MAXERR,
    max_iterations: int = MAXIT,
) -> float:
    """
    Bisect [lower, upper] for the m where `ratio(m)` equals `target`.

    The search stops when the interval is narrower than `tolerance` or after
    `max_iterations` (counted from 1), and returns the last midpoint. It never
    evaluates `ratio` at the interval ends.

    Args:
        ratio: Ratio function of m, monotone on [lower, upper].
        target: Wanted value of the ratio.
        lower: Lower end of the search interval.
        upper: Upper end of the search interval.
        increasing: Whether `ratio` increases with m on the interval.
        tolerance: Stop when upper - lower falls below this.
        max_iterations: Iteration cap.

    Raises:
        ValueError: If the interval is already narrower than `tolerance`.

    Returns:
        The estimate of m.
    """
    if upper - lower <= tolerance:
        raise ValueError(f"Search interval [{lower}, {upper}] is narrower than the tolerance {tolerance}.")

    n = 1
    m = lower
    while (upper - lower) > tolerance and n < max_iterations:
        m = (upper + lower) / 2
        value = ratio(m)
        overshoot = value > target if increasing else value < target
        if overshoot:
            upper = m
        else:
            lower = m
        n += 1

    logger.debug(f"Bisection for target {target:.12g} finished after {n - 1} iterations at m={m:.12g}")
    return m


def solve_m_from_length_width(length: float, width: float) -> float:
    """
    Shape parameter from length and chord width, solving 2E(m)/K(m) - 1 = w/L.

    Args:
        length: Arc length, > 0.
        width: Chord width, <= length. Negative widths give self-intersecting shapes.

    Raises:
        ValueError: If length is not positive or width exceeds length.

    Returns:
        m in [0, 1).
    """
    if length <= 0.0:
        raise ValueError("Length cannot be negative or zero.")
    if width > length:
        raise ValueError("Width is greater than length.")
    if width == length:
        return 0.0
    if width == 0.0:
        # Known intercept of the width ratio
        return M_ZERO_W
    return bisect(width_length_ratio, width / length, 0.0, 1.0, increasing=False)


def solve_m_from_length_height(length: float, height: float) -> List[float]:
    """
    Shape parameter(s) from length and a non-negative height, solving sqrt(m)/K(m) = h/L.

    The height ratio rises up to its maximum at M_MAXHEIGHT and falls again, so a
    ratio between DOUBLE_W_HL_RATIO and MAX_HL_RATIO has two roots (two widths
    for the same length and height). The root above M_MAXHEIGHT is dropped when
    it exceeds M_MAX.

    Args:
        length: Arc length, > 0.
        height: Bow height magnitude, >= 0.

    Raises:
        ValueError: If the inputs are invalid or h/L exceeds MAX_HL_RATIO.

    Returns:
        One or two values of m, in increasing order.
    """
    if length <= 0.0:
        raise ValueError("Length cannot be negative or zero.")
    if height < 0.0:
        raise ValueError("Height must be given as a magnitude (>= 0).")

    target = height / length
    if target > MAX_HL_RATIO:
        raise ValueError("Height not possible with given length.")
    if target == 0.0:
        return [0.0]
    if target == MAX_HL_RATIO:
        # Both branches meet at the apex of the ratio curve
        return [M_MAXHEIGHT]

    if DOUBLE_W_HL_RATIO <= target < MAX_HL_RATIO:
        roots = [bisect(height_length_ratio, target, M_DOUBLE_W, M_MAXHEIGHT, increasing=True)]
        second = bisect(height_length_ratio, target, M_MAXHEIGHT, 1.0, increasing=False)
        if second <= M_MAX:
            roots.append(second)
        else:
            logger.debug(f"Discarding second root m={second:.12g} above M_MAX")
        return roots

    return [bisect(height_length_ratio, target, 0.0, M_DOUBLE_W, increasing=True)]


def solve_m_from_width_height(width: float, height: float) -> float:
    """Shape parameter from chord width and a positive height, solving (2E(m) - K(m))/sqrt(m) = w/h."""
    if height <= 0.0:
        raise ValueError("Height must be positive to solve from width and height.")
    return bisect(width_height_ratio, width / height, 0.0, 1.0, increasing=False)


def solve_m_from_angle(angle: float) -> float:
    """Shape parameter from the end tangent angle magnitude (radians)."""
    return m_from_angle(abs(angle))
