from __future__ import annotations

from typing import Callable

import numpy as np


def simpson_weights(n_intervals: int) -> np.ndarray:
    """
    Composite Simpson weights 1, 4, 2, 4, ..., 2, 4, 1 (without the h/3 factor).

    Args:
        n_intervals: Number of subintervals, must be even.

    Raises:
        ValueError: If `n_intervals` is odd or smaller than 2.

    Returns:
        Array of `n_intervals + 1` weights.
    """
    if n_intervals < 2 or n_intervals % 2:
        raise ValueError(f"Simpson's rule needs an even number of subintervals >= 2, got {n_intervals}.")
    weights = np.ones(n_intervals + 1, dtype=np.float64)
    weights[1:-1:2] = 4.0
    weights[2:-1:2] = 2.0
    return weights


def simpson(
    f: Callable[[np.ndarray], np.ndarray],
    a: float,
    b: float,
    n_intervals: int,
) -> float:
    """
    Integrate `f` over [a, b] with the composite Simpson rule on a fixed grid.

    `f` is called once with the array of all sample abscissae. Either bound
    may be the larger one; the sign follows the orientation of [a, b].
    """
    weights = simpson_weights(n_intervals)
    h = (b - a) / n_intervals
    xs = a + h * np.arange(n_intervals + 1, dtype=np.float64)
    xs[-1] = b
    return float(h / 3.0 * np.dot(weights, f(xs)))
