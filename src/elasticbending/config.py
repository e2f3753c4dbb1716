"""
Configuration & Solver Constants
================================
This module serves as the central registry for the numeric constants of the
elastica solver and for the user-tunable solver settings.

Why is this file needed?
------------------------
1. Reproducibility: The shape-parameter limits below were found empirically
   (intercepts and extrema of the K/E ratio functions) against the exact
   bisection tolerance and iteration count. They must not drift.
2. Tuning: Sampling resolution, rounding precision and the self-intersection
   policy can be loaded from a JSON file instead of being hardcoded.

Exports:
    M_SKETCHY, M_MAX, M_ZERO_W, M_MAXHEIGHT, M_DOUBLE_W (float): Shape parameter limits.
    DOUBLE_W_HL_RATIO, MAX_HL_RATIO (float): Height/length ratio limits.
    MAXERR (float), MAXIT (int): Bisection tolerance and iteration cap.
    ROUND_TO, CURVE_DIVS, SIMPSON_INTERVALS (int): Sampling and rounding settings.
    SolverSettings: Dataclass bundling the tunable settings.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields
import json
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Shape parameter limits
M_SKETCHY: float = 0.95  # curvature near the ends is no longer reliable above this
M_MAX: float = 0.993  # sampling breaks down above this
M_ZERO_W: float = 0.826114765984970336  # m when width = 0
M_MAXHEIGHT: float = 0.701327460663101223  # m at the maximum height for a given length
M_DOUBLE_W: float = 0.180254422335013983  # smallest m of the two-width region

# Height/length ratio limits
DOUBLE_W_HL_RATIO: float = 0.257342117984635757  # two widths exist at or above this ratio
MAX_HL_RATIO: float = 0.403140189705650243  # maximum possible height/length

# Bisection
MAXERR: float = 1e-10
MAXIT: int = 100

# Sampling
ROUND_TO: int = 10  # decimal places
CURVE_DIVS: int = 50  # divisions per half-curve
SIMPSON_INTERVALS: int = 500

# Elliptic integral series
SERIES_TERMS: int = 100

# Young's modulus input is in GPa
GPA_TO_PA: float = 1e9


@dataclass(frozen=True)
class SolverSettings:
    """
    Tunable settings of one solver run.

    Attributes:
        ignore_self_intersecting: Suppress solutions with a negative chord width.
        curve_divisions: Number of tangent-angle steps per half-curve.
        simpson_intervals: Number of Simpson subintervals (must be even).
        round_to: Decimal places used for on-plane tests and zero snapping.
    """
    ignore_self_intersecting: bool = False
    curve_divisions: int = CURVE_DIVS
    simpson_intervals: int = SIMPSON_INTERVALS
    round_to: int = ROUND_TO

    def __post_init__(self) -> None:
        if self.curve_divisions < 1:
            raise ValueError(f"'curve_divisions' must be positive, got {self.curve_divisions}.")
        if self.simpson_intervals < 2 or self.simpson_intervals % 2:
            raise ValueError(f"'simpson_intervals' must be an even number >= 2, got {self.simpson_intervals}.")
        if self.round_to < 0:
            raise ValueError(f"'round_to' cannot be negative, got {self.round_to}.")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SolverSettings:
        known = {f.name for f in fields(SolverSettings)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown solver settings: {', '.join(sorted(unknown))}")
        return SolverSettings(**data)

    @classmethod
    def from_json(cls, filepath: str) -> SolverSettings:
        """Load settings from a JSON object file."""
        logger.debug(f"Loading solver settings from: {filepath}")
        with open(filepath, mode='r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Settings file '{filepath}' must contain a JSON object.")
        return cls.from_dict(data)
