"""
Elastica Solver Engine
======================
Orchestrates one elastica computation from boundary inputs to geometry.

Why is this file needed?
------------------------
1. Input resolution: It decides which two of length, width, height and angle
   are authoritative (the chord between two anchor points counts as a width).
2. Validation: It checks the geometric preconditions and turns every violation
   into an Error diagnostic instead of an exception escaping to the caller.
3. Orientation: Negative heights and angles are solved as magnitudes in a
   mirrored frame; the flags on the result restore the signs on output.
4. Dispatch: It sends the selected pair to the matching shape-parameter solve
   and builds one geometry branch per root (two for some length/height pairs).

Note: This module is pure Python/NumPy and keeps no state between solves.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from elasticbending.config import M_MAX, M_SKETCHY, MAX_HL_RATIO, SolverSettings
from elasticbending.analysis.force import bending_force
from elasticbending.analysis.fitting import fit_curve
from elasticbending.analysis.formulas import (
    angle_from_m,
    height_from_length,
    length_from_height,
    length_from_width,
    width_from_length,
)
from elasticbending.analysis.sampler import sample_curve
from elasticbending.analysis.shape_parameter import (
    solve_m_from_angle,
    solve_m_from_length_height,
    solve_m_from_length_width,
    solve_m_from_width_height,
)
from elasticbending.model.boundary import (
    BoundaryConfiguration,
    BoundaryQuantity,
    ElasticaInput,
    QuantityPair,
)
from elasticbending.model.diagnostics import DiagnosticLog
from elasticbending.model.geometry_primitives import Plane, Point
from elasticbending.model.results import (
    ElasticaBranch,
    ElasticaOutput,
    ResolverState,
    ShapeSolution,
    SolverResult,
)
from elasticbending.utils import is_zero

logger = logging.getLogger(__name__)

L = BoundaryQuantity.LENGTH
W = BoundaryQuantity.WIDTH
H = BoundaryQuantity.HEIGHT
A = BoundaryQuantity.ANGLE


class ElasticaInputError(ValueError):
    """A precondition of the solve is violated; reported as an Error diagnostic."""


_UNSOLVABLE = "Form of curve not solvable with current algorithm and given inputs"


# ==========================================
# SHAPE RESOLUTION (pure)
# ==========================================

class _Orientation:
    """Tracks mirroring of the frame while signs are normalised."""

    def __init__(self) -> None:
        self.flipped = False

    def flip(self) -> None:
        self.flipped = True

    def toggle(self) -> None:
        # A second mirror of the same frame undoes the first
        self.flipped = not self.flipped


def _solution(m: float, length: float, width: float, height: float, angle: float,
              orientation: _Orientation) -> ShapeSolution:
    return ShapeSolution(
        m=m, length=length, width=width, height=height, angle=angle,
        height_flipped=orientation.flipped, angle_flipped=orientation.flipped,
    )


def _check_length(length: float) -> None:
    if length <= 0.0:
        raise ElasticaInputError("Length cannot be negative or zero")


def _check_angle(angle: float) -> None:
    if abs(angle) >= math.pi:
        raise ElasticaInputError("Angle must be smaller than pi in magnitude")


def _check_solvable(m: float) -> None:
    # Angles within ~1e-8 of pi round to m = 1, where K and E diverge
    if m > M_MAX:
        raise ElasticaInputError(_UNSOLVABLE)


def _from_length_width(length: float, width: float, o: _Orientation) -> List[ShapeSolution]:
    _check_length(length)
    if width > length:
        raise ElasticaInputError("Width is greater than length")
    if width == length:
        return [_solution(0.0, length, width, 0.0, 0.0, o)]
    m = solve_m_from_length_width(length, width)
    return [_solution(m, length, width, height_from_length(length, m), angle_from_m(m), o)]


def _from_length_height(length: float, height: float, o: _Orientation) -> List[ShapeSolution]:
    _check_length(length)
    if abs(height / length) > MAX_HL_RATIO:
        raise ElasticaInputError("Height not possible with given length")
    if height < 0.0:
        height = -height
        o.flip()
    if height == 0.0:
        return [_solution(0.0, length, length, 0.0, 0.0, o)]
    return [
        _solution(m, length, width_from_length(length, m), height, angle_from_m(m), o)
        for m in solve_m_from_length_height(length, height)
    ]


def _from_length_angle(length: float, angle: float, o: _Orientation) -> List[ShapeSolution]:
    _check_length(length)
    _check_angle(angle)
    if angle < 0.0:
        angle = -angle
        o.flip()
    m = solve_m_from_angle(angle)
    _check_solvable(m)
    if angle == 0.0:
        return [_solution(m, length, length, 0.0, 0.0, o)]
    return [_solution(m, length, width_from_length(length, m), height_from_length(length, m), angle, o)]


def _from_width_height(width: float, height: float, o: _Orientation) -> List[ShapeSolution]:
    if height < 0.0:
        height = -height
        o.flip()
    if height == 0.0:
        _check_length(width)
        return [_solution(0.0, width, width, 0.0, 0.0, o)]
    m = solve_m_from_width_height(width, height)
    return [_solution(m, length_from_height(height, m), width, height, angle_from_m(m), o)]


def _from_width_angle(width: float, angle: float, o: _Orientation) -> List[ShapeSolution]:
    if width == 0.0:
        raise ElasticaInputError("Curve not possible with width = 0 and an angle as inputs")
    _check_angle(angle)
    if angle < 0.0:
        angle = -angle
        o.flip()
    m = solve_m_from_angle(angle)
    _check_solvable(m)
    if angle == 0.0:
        _check_length(width)
        return [_solution(m, width, width, 0.0, 0.0, o)]
    length = length_from_width(width, m)
    if length < 0.0:
        raise ElasticaInputError("Curve not possible at specified width and angle (calculated length is negative)")
    return [_solution(m, length, width, height_from_length(length, m), angle, o)]


def _from_height_angle(height: float, angle: float, o: _Orientation) -> List[ShapeSolution]:
    _check_angle(angle)
    if height < 0.0:
        height = -height
        o.flip()
    if height == 0.0:
        raise ElasticaInputError("Height can't = 0 if only height and angle are specified")
    if angle < 0.0:
        angle = -angle
        o.toggle()
    if angle == 0.0:
        raise ElasticaInputError("Angle can't = 0 if only height and angle are specified")
    m = solve_m_from_angle(angle)
    _check_solvable(m)
    length = length_from_height(height, m)
    return [_solution(m, length, width_from_length(length, m), height, angle, o)]


_PAIR_SOLVERS: Dict[QuantityPair, Callable[[float, float, _Orientation], List[ShapeSolution]]] = {
    (L, W): _from_length_width,
    (L, H): _from_length_height,
    (L, A): _from_length_angle,
    (W, H): _from_width_height,
    (W, A): _from_width_angle,
    (H, A): _from_height_angle,
}


def _missing_message(supplied: Sequence[BoundaryQuantity], width_from_points: bool) -> str:
    if not supplied:
        return "Need to specify two of the four parameters: length, width (or point B), height, and angle"
    only = supplied[0]
    if only == W and width_from_points:
        return "Need to specify one more parameter in addition to point A and point B"
    return f"Need to specify one more parameter in addition to {only.value}"


def resolve_shape(
    boundary: BoundaryConfiguration,
    plane: Plane,
    diagnostics: Optional[DiagnosticLog] = None,
    width_from_points: bool = False,
) -> SolverResult:
    """
    Find the shape parameter(s) and complete the boundary quantities.

    Args:
        boundary: The boundary quantities (an implied chord width already merged in).
        plane: The working frame; it is returned mirrored when the shape is flipped.
        diagnostics: Receives the Warning about redundant inputs.
        width_from_points: Whether the width comes from two anchor points (for messages).

    Raises:
        ElasticaInputError: If the inputs cannot describe an elastica.

    Returns:
        The solver result with one or two solutions.
    """
    supplied = boundary.supplied()
    if len(supplied) > 2 and diagnostics is not None:
        diagnostics.warning(
            "More parameters set than are required (out of length, width, height, angle). "
            "Only using the first two valid ones."
        )
    pair = boundary.select_pair()
    if pair is None:
        raise ElasticaInputError(_missing_message(supplied, width_from_points))

    first, second = (boundary.value_of(q) for q in pair)
    logger.debug(f"Solving from {pair[0].value}={first} and {pair[1].value}={second}")

    orientation = _Orientation()
    solutions = _PAIR_SOLVERS[pair](first, second, orientation)

    for solution in solutions:
        _check_solvable(solution.m)

    solving_plane = plane.mirrored() if orientation.flipped else plane
    logger.debug(f"Found m = {[s.m for s in solutions]} (flipped={orientation.flipped})")
    return SolverResult(solutions=tuple(solutions), pair=pair, plane=solving_plane)


# ==========================================
# ORCHESTRATION
# ==========================================

class ElasticaSolver:
    """
    Boundary resolver: turns an `ElasticaInput` into an `ElasticaOutput`.
    """

    def __init__(self, settings: Optional[SolverSettings] = None) -> None:
        """
        Initialize the solver.

        Args:
            settings: Sampling and policy settings; defaults to `SolverSettings()`.
        """
        self.settings = settings or SolverSettings()

    def solve(self, request: ElasticaInput) -> ElasticaOutput:
        """
        Run one solve. Never raises for invalid inputs; check `output.succeeded`
        and `output.diagnostics` instead.
        """
        diagnostics = DiagnosticLog()
        output = ElasticaOutput(state=ResolverState.COLLECTING_INPUTS, diagnostics=diagnostics)
        try:
            plane, boundary, width_from_points = self._collect_inputs(request, diagnostics)

            output.state = ResolverState.VALIDATING
            result = resolve_shape(boundary, plane, diagnostics, width_from_points)
            output.result = result

            output.state = ResolverState.MULTI_SOLVE if result.is_multi else ResolverState.SINGLE_SOLVE
            output.branches = self._build_branches(request, result, diagnostics)
            output.length = result.solutions[0].length
            output.height = result.solutions[0].signed_height
        except ElasticaInputError as e:
            diagnostics.error(str(e))
            output.state = ResolverState.FAILED
            output.branches = []
            output.length = None
            output.height = None
            return output

        output.state = ResolverState.DONE
        logger.info(f"Elastica solved: {len(output.branches)} branch(es), m = {output.m_values}")
        return output

    def _collect_inputs(
        self,
        request: ElasticaInput,
        diagnostics: DiagnosticLog,
    ) -> Tuple[Plane, BoundaryConfiguration, bool]:
        """Validate anchors and merge the chord width implied by point B."""
        digits = self.settings.round_to
        if request.point_a is None:
            raise ElasticaInputError("Point A is required")

        plane = request.working_plane()
        if not is_zero(plane.distance_to(request.point_a), digits):
            raise ElasticaInputError("Point A is not on the base plane")

        boundary = request.boundary
        if request.point_b is None:
            return plane, boundary, False

        if not is_zero(plane.distance_to(request.point_b), digits):
            raise ElasticaInputError("Point B is not on the base plane")

        chord = request.point_b - request.point_a
        if chord.magnitude != 0.0 and not chord.is_perpendicular_to(plane.y_axis):
            raise ElasticaInputError(
                "The line between point A and point B is not perpendicular to the Y-axis of the specified plane"
            )

        chord_width = chord.magnitude
        # Point B to the left of point A gives a negative (self-intersecting) width
        if chord.dot(plane.x_axis) < 0.0:
            chord_width = -chord_width

        if boundary.width is not None:
            diagnostics.warning(
                "Width will override the distance between point A and point B. "
                "If you do not want this to happen, leave out point B or the width."
            )
            return plane, boundary, False
        return plane, boundary.with_width(chord_width), True

    def _build_branches(
        self,
        request: ElasticaInput,
        result: SolverResult,
        diagnostics: DiagnosticLog,
    ) -> List[ElasticaBranch]:
        branches: List[ElasticaBranch] = []
        for solution in result.solutions:
            if solution.width < 0.0 and self.settings.ignore_self_intersecting:
                if result.is_multi:
                    diagnostics.warning(
                        "One curve is self-intersecting. To enable these, turn off ignore_self_intersecting"
                    )
                    continue
                raise ElasticaInputError(
                    "Curve is self-intersecting. To enable these, turn off ignore_self_intersecting"
                )

            if solution.m >= M_SKETCHY:
                if result.is_multi:
                    diagnostics.remark(
                        f"Accuracy of the curve whose width = {round(solution.width, 4)} is not guaranteed"
                    )
                else:
                    diagnostics.remark("Accuracy of the curve at these parameters is not guaranteed")

            branches.append(self._build_branch(request, result.plane, solution))
        return branches

    def _build_branch(self, request: ElasticaInput, plane: Plane, solution: ShapeSolution) -> ElasticaBranch:
        # Center the frame on the chord so the curve is symmetric about its y-axis
        anchored = plane.with_origin(request.point_a)
        centered = plane.with_origin(anchored.point_at(solution.width / 2, 0.0, 0.0))

        points = sample_curve(
            solution.length,
            solution.width,
            solution.m,
            solution.angle,
            centered,
            curve_divisions=self.settings.curve_divisions,
            simpson_intervals=self.settings.simpson_intervals,
            round_to=self.settings.round_to,
        )
        curve = fit_curve(points, solution.angle, centered)
        force = bending_force(solution.m, solution.length, request.modulus, request.inertia)
        return ElasticaBranch(solution=solution, plane=centered, points=points, curve=curve, force=force)


def _as_point(value: Point | Sequence[float] | None) -> Optional[Point]:
    if value is None or isinstance(value, Point):
        return value
    return Point.from_array(value)


def solve_elastica(
    point_a: Point | Sequence[float] = (0.0, 0.0, 0.0),
    point_b: Point | Sequence[float] | None = None,
    plane: Optional[Plane] = None,
    length: Optional[float] = None,
    width: Optional[float] = None,
    height: Optional[float] = None,
    angle: Optional[float] = None,
    modulus: Optional[float] = None,
    inertia: Optional[float] = None,
    settings: Optional[SolverSettings] = None,
) -> ElasticaOutput:
    """
    Convenience wrapper around `ElasticaSolver.solve`.

    Example:
        >>> out = solve_elastica(length=10.0, height=3.0)
        >>> out.widths
    """
    request = ElasticaInput(
        point_a=_as_point(point_a),
        point_b=_as_point(point_b),
        plane=plane,
        boundary=BoundaryConfiguration(length=length, width=width, height=height, angle=angle),
        modulus=modulus,
        inertia=inertia,
    )
    return ElasticaSolver(settings).solve(request)
