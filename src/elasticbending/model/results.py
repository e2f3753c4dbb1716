"""
Solve Results
=============
Data structures returned by the elastica solver.

Classes:
    ResolverState: Where a solve ended up.
    ShapeSolution: One root m with its completed boundary quantities.
    SolverResult: The roots of one solve plus the frame they were solved in.
    ElasticaBranch: Geometry and force of one root.
    ElasticaOutput: Everything handed back to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import logging
from typing import List, Optional, Tuple, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from elasticbending.analysis.fitting import FittedCurve
from elasticbending.model.boundary import QuantityPair
from elasticbending.model.diagnostics import DiagnosticLog
from elasticbending.model.geometry_primitives import Plane, Point

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class ResolverState(StrEnum):
    COLLECTING_INPUTS = "collecting_inputs"
    VALIDATING = "validating"
    SINGLE_SOLVE = "single_solve"
    MULTI_SOLVE = "multi_solve"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ShapeSolution:
    """
    One shape parameter and the boundary quantities it implies.

    `height` and `angle` are the magnitudes used while solving; the flags
    record whether the caller asked for the mirrored (negative) shape.
    """
    m: float
    length: float
    width: float
    height: float
    angle: float
    height_flipped: bool = False
    angle_flipped: bool = False

    @property
    def signed_height(self) -> float:
        return -self.height if self.height_flipped else self.height

    @property
    def signed_angle(self) -> float:
        return -self.angle if self.angle_flipped else self.angle

    @property
    def is_straight(self) -> bool:
        return self.angle == 0.0


@dataclass(frozen=True)
class SolverResult:
    """
    Roots of one solve.

    Attributes:
        solutions: One or two shape solutions, in increasing m.
        pair: The two boundary quantities that were used.
        plane: Solving frame, mirrored about its x-z plane when the shape was flipped.
    """
    solutions: Tuple[ShapeSolution, ...]
    pair: QuantityPair
    plane: Plane

    @property
    def is_multi(self) -> bool:
        return len(self.solutions) > 1

    @property
    def m_values(self) -> List[float]:
        return [s.m for s in self.solutions]


@dataclass
class ElasticaBranch:
    """Geometry of one solution branch."""
    solution: ShapeSolution
    plane: Plane
    points: npt.NDArray[np.float64]
    curve: FittedCurve
    force: float

    @property
    def width(self) -> float:
        return self.solution.width

    @property
    def height(self) -> float:
        return self.solution.signed_height

    @property
    def angle(self) -> float:
        return self.solution.signed_angle

    @property
    def caller_plane(self) -> Plane:
        """The centered frame with the caller's orientation (solving mirror undone)."""
        return self.plane.mirrored() if self.solution.height_flipped else self.plane

    def to_local(self, points: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """(x, y) of world points in `caller_plane`."""
        plane = self.caller_plane
        return np.array([
            [p.x, p.y] for p in (plane.remap_to_plane_space(Point.from_array(row)) for row in points)
        ]).reshape(-1, 2)

    def local_points(self) -> npt.NDArray[np.float64]:
        return self.to_local(self.points)


@dataclass
class ElasticaOutput:
    """
    The result of one solve as seen by the caller.

    When `state` is FAILED there are no branches and at least one Error in
    `diagnostics`.
    """
    state: ResolverState
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    result: Optional[SolverResult] = None
    length: Optional[float] = None
    height: Optional[float] = None
    branches: List[ElasticaBranch] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state == ResolverState.DONE

    @property
    def points(self) -> List[npt.NDArray[np.float64]]:
        return [b.points for b in self.branches]

    @property
    def curves(self) -> List[FittedCurve]:
        return [b.curve for b in self.branches]

    @property
    def widths(self) -> List[float]:
        return [b.width for b in self.branches]

    @property
    def angles(self) -> List[float]:
        return [b.angle for b in self.branches]

    @property
    def forces(self) -> List[float]:
        return [b.force for b in self.branches]

    @property
    def m_values(self) -> List[float]:
        return [b.solution.m for b in self.branches]

    def plot(self, show: bool = True) -> plt.Figure:
        """
        Plot every branch in its local plane coordinates (samples and fitted curve).
        """
        logger.debug(f"Plotting {len(self.branches)} branch(es)")
        plt.rcParams["figure.constrained_layout.use"] = True
        fig, ax = plt.subplots(figsize=(7, 5))

        for i, branch in enumerate(self.branches):
            local = branch.local_points()
            curve_local = branch.to_local(branch.curve.sample(300))
            ax.plot(curve_local[:, 0], curve_local[:, 1], lw=2,
                    label=f"w = {branch.width:.4g}, m = {branch.solution.m:.6f}")
            ax.plot(local[:, 0], local[:, 1], '.', color='gray', ms=3)

        ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        ax.minorticks_on()
        ax.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)
        ax.set_aspect('equal', adjustable='datalim')
        ax.set_title(f"Elastica (L = {self.length:.4g})" if self.length is not None else "Elastica")
        ax.set_xlabel("x (along chord)")
        ax.set_ylabel("y (bending direction)")
        if self.branches:
            ax.legend()

        if show:
            plt.show()
        return fig
