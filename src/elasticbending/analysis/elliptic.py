"""
Complete elliptic integrals K(m) and E(m).

The parameter convention is m = k**2 throughout the package. Both integrals are
evaluated by a fixed number of terms of the power series in Abramowitz & Stegun
17.3.11 / 17.3.12, without adaptive stopping, so every call costs the same and
results are reproducible bit for bit. Accuracy degrades as m approaches 1.
"""
from __future__ import annotations

import math

from elasticbending.config import SERIES_TERMS


def _check_parameter(m: float) -> None:
    if not 0.0 <= m < 1.0:
        raise ValueError(f"Elliptic parameter 'm' must be in [0, 1), got {m}.")


def elliptic_k(m: float, n_terms: int = SERIES_TERMS) -> float:
    """
    Complete elliptic integral of the first kind.

    Args:
        m: Parameter in [0, 1).
        n_terms: Number of series terms.

    Raises:
        ValueError: If `m` is outside [0, 1).

    Returns:
        K(m).
    """
    _check_parameter(m)
    total = 1.0
    term = 1.0
    above = 1.0
    below = 2.0
    for i in range(1, n_terms + 1):
        term *= above / below
        total += m**i * term**2
        above += 2.0
        below += 2.0
    return total * 0.5 * math.pi


def elliptic_e(m: float, n_terms: int = SERIES_TERMS) -> float:
    """
    Complete elliptic integral of the second kind.

    Args:
        m: Parameter in [0, 1).
        n_terms: Number of series terms.

    Raises:
        ValueError: If `m` is outside [0, 1).

    Returns:
        E(m).
    """
    _check_parameter(m)
    total = 1.0
    term = 1.0
    above = 1.0
    below = 2.0
    for i in range(1, n_terms + 1):
        term *= above / below
        total -= m**i * term**2 / above
        above += 2.0
        below += 2.0
    return total * 0.5 * math.pi
