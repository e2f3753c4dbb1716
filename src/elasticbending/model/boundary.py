"""
Boundary Configuration
======================
Input data for one elastica solve.

Classes:
    BoundaryQuantity: The four shape-defining quantities, in priority order.
    BoundaryConfiguration: Optional values of those quantities.
    ElasticaInput: Everything the solver consumes (anchors, plane, material).
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Dict, List, Optional, Tuple

from elasticbending.model.geometry_primitives import Plane, Point


class BoundaryQuantity(StrEnum):
    LENGTH = "length"
    WIDTH = "width"
    HEIGHT = "height"
    ANGLE = "angle"


# When more than two quantities are given, the first two in this order win
PRIORITY: Tuple[BoundaryQuantity, ...] = (
    BoundaryQuantity.LENGTH,
    BoundaryQuantity.WIDTH,
    BoundaryQuantity.HEIGHT,
    BoundaryQuantity.ANGLE,
)

QuantityPair = Tuple[BoundaryQuantity, BoundaryQuantity]


@dataclass(frozen=True)
class BoundaryConfiguration:
    """
    Optional boundary quantities of the bent rod.

    Attributes:
        length: Arc length of the rod, must be > 0 when given.
        width: Chord width between the ends. Negative means self-intersecting.
        height: Bow height. Negative bends toward the local -y direction.
        angle: End tangent angle in radians. Negative bends toward -y.
    """
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    angle: Optional[float] = None

    def value_of(self, quantity: BoundaryQuantity) -> Optional[float]:
        return getattr(self, quantity.value)

    def supplied(self) -> List[BoundaryQuantity]:
        """Quantities that carry a value, in priority order."""
        return [q for q in PRIORITY if self.value_of(q) is not None]

    def select_pair(self) -> Optional[QuantityPair]:
        """The first two supplied quantities, or None if fewer than two are supplied."""
        supplied = self.supplied()
        if len(supplied) < 2:
            return None
        return supplied[0], supplied[1]

    def with_width(self, width: float) -> BoundaryConfiguration:
        return replace(self, width=width)

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {q.value: self.value_of(q) for q in PRIORITY}


@dataclass(frozen=True)
class ElasticaInput:
    """
    One solve request.

    Attributes:
        point_a: First anchor point (required). Start of the curve.
        point_b: Optional second anchor point. Implies the chord width.
        plane: Working plane; defaults to world XY centered at `point_a`.
        boundary: The boundary quantities.
        modulus: Young's modulus in GPa (only needed for the force).
        inertia: Second moment of area, in units consistent with the lengths.
    """
    point_a: Point
    point_b: Optional[Point] = None
    plane: Optional[Plane] = None
    boundary: BoundaryConfiguration = field(default_factory=BoundaryConfiguration)
    modulus: Optional[float] = None
    inertia: Optional[float] = None

    def working_plane(self) -> Plane:
        if self.plane is not None:
            return self.plane
        return Plane.world_xy(origin=self.point_a)
