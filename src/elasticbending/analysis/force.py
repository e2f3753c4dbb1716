from __future__ import annotations

from typing import Optional

from elasticbending.config import GPA_TO_PA
from elasticbending.analysis.elliptic import elliptic_k


def bending_force(
    m: float,
    length: float,
    modulus: Optional[float],
    inertia: Optional[float],
) -> float:
    """
    Horizontal end force holding the rod in the shape with parameter m.

    F = K(m)^2 * E * I / L^2 (Timoshenko, "Theory of Elastic Stability", p. 79).
    The shape itself does not depend on E or I; a missing value yields 0.

    Args:
        m: Shape parameter.
        length: Arc length, > 0.
        modulus: Young's modulus in GPa.
        inertia: Second moment of area. Units must match the length units.

    Raises:
        ValueError: If `length` is not positive.

    Returns:
        The force in N (for lengths in m and inertia in m^4).
    """
    if length <= 0.0:
        raise ValueError("Length must be positive to compute the bending force.")
    if modulus is None or inertia is None:
        return 0.0
    return elliptic_k(m) ** 2 * (modulus * GPA_TO_PA) * inertia / length**2


def critical_buckling_force(length: float, modulus: Optional[float], inertia: Optional[float]) -> float:
    """Euler buckling load of the pinned rod, the force at height = 0 (m = 0)."""
    return bending_force(0.0, length, modulus, inertia)
