"""
Closed-form relations between the shape parameter m and the boundary quantities.

References:
    {1} M.E. Pacheco Q. & E. Pina, "The elastic rod", eqs. (33) and (34).
    {4} S. Timoshenko, "Theory of Elastic Stability", p. 78.
"""
from __future__ import annotations

import math

from elasticbending.analysis.elliptic import elliptic_e, elliptic_k


def height_from_length(length: float, m: float) -> float:
    """Bow height, L * sqrt(m) / K(m)."""
    return length * math.sqrt(m) / elliptic_k(m)


def width_from_length(length: float, m: float) -> float:
    """Chord width, L * (2 E(m) / K(m) - 1)."""
    return length * width_length_ratio(m)


def length_from_height(height: float, m: float) -> float:
    """Arc length, h * K(m) / sqrt(m). Undefined at m = 0."""
    if m <= 0.0:
        raise ValueError("Length cannot be derived from height when m = 0.")
    return height * elliptic_k(m) / math.sqrt(m)


def length_from_width(width: float, m: float) -> float:
    """Arc length, w / (2 E(m) / K(m) - 1). Negative when the ratio and width disagree in sign."""
    ratio = width_length_ratio(m)
    if ratio == 0.0:
        raise ValueError("Length cannot be derived from width at the zero-width shape.")
    return width / ratio


def angle_from_m(m: float) -> float:
    """End tangent angle, acos(1 - 2m)."""
    return math.acos(1.0 - 2.0 * m)


def m_from_angle(angle: float) -> float:
    """Shape parameter from the end tangent angle, (1 - cos(a)) / 2 = sin(a/2)**2."""
    return (1.0 - math.cos(angle)) / 2.0


# Target ratios used by the bisection searches

def width_length_ratio(m: float) -> float:
    return 2.0 * elliptic_e(m) / elliptic_k(m) - 1.0


def height_length_ratio(m: float) -> float:
    return math.sqrt(m) / elliptic_k(m)


def width_height_ratio(m: float) -> float:
    return (2.0 * elliptic_e(m) - elliptic_k(m)) / math.sqrt(m)
