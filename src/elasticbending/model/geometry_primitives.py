"""
Geometric Primitives for the elastica solver.
Points, vectors and the oriented reference plane the rod bends in.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Union, TYPE_CHECKING
import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt

# Angle tolerance used by perpendicularity checks (1 degree)
DEFAULT_ANGLE_TOLERANCE = math.pi / 180


@dataclass(frozen=True)
class Vector:
    """
    A vector in 3D space representing direction and magnitude.
    """
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> Vector:
        if scalar == 0.0: raise ZeroDivisionError
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalize(self) -> Vector:
        mag = self.magnitude
        if mag == 0.0: return Vector(0.0, 0.0, 0.0)
        return self / mag

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def rotate(self, angle_rad: float, axis: Vector) -> Vector:
        """Rotate vector around an arbitrary axis (right-hand rule, Rodrigues' formula)."""
        k = axis.normalize()
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return self * cos_a + k.cross(self) * sin_a + k * (k.dot(self) * (1.0 - cos_a))

    def is_perpendicular_to(self, other: Vector, angle_tolerance: float = DEFAULT_ANGLE_TOLERANCE) -> bool:
        """True if the angle between the vectors is within `angle_tolerance` of 90 degrees."""
        ll = self.magnitude * other.magnitude
        if ll <= 0.0:
            return False
        return abs(self.dot(other) / ll) <= math.sin(angle_tolerance)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])

    @staticmethod
    def from_array(values: Sequence[float]) -> Vector:
        return Vector(float(values[0]), float(values[1]), float(values[2]) if len(values) > 2 else 0.0)


@dataclass(frozen=True)
class Point:
    """A simple geometric point in 3D space."""
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        raise TypeError("Can only subtract a Vector or Point to a Point.")

    def distance_to(self, other: Point) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])

    @staticmethod
    def from_array(values: Sequence[float]) -> Point:
        return Point(float(values[0]), float(values[1]), float(values[2]) if len(values) > 2 else 0.0)


@dataclass(frozen=True)
class Plane:
    """
    An oriented reference frame: origin plus orthonormal local axes.

    The rod bends toward the local +y direction. The z-axis is always
    x_axis x y_axis, so the frame stays right-handed after mirroring.
    Planes are values: every operation returns a new plane.
    """
    origin: Point
    x_axis: Vector
    y_axis: Vector

    def __post_init__(self) -> None:
        x = self.x_axis.normalize()
        # Gram-Schmidt so a slightly skewed y input still yields an orthonormal frame
        y = (self.y_axis - x * x.dot(self.y_axis)).normalize()
        if x.magnitude == 0.0 or y.magnitude == 0.0:
            raise ValueError("Plane axes must be non-zero and not parallel.")
        object.__setattr__(self, "x_axis", x)
        object.__setattr__(self, "y_axis", y)

    @property
    def z_axis(self) -> Vector:
        return self.x_axis.cross(self.y_axis)

    @staticmethod
    def world_xy(origin: Point | None = None) -> Plane:
        return Plane(
            origin=origin if origin is not None else Point(0.0, 0.0, 0.0),
            x_axis=Vector(1.0, 0.0, 0.0),
            y_axis=Vector(0.0, 1.0, 0.0),
        )

    def point_at(self, u: float, v: float, w: float = 0.0) -> Point:
        """Map local coordinates (u, v, w) to a world point."""
        return self.origin + self.x_axis * u + self.y_axis * v + self.z_axis * w

    def points_at(self, local: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """Vectorised `point_at` for an (N, 3) array of local coordinates."""
        basis = np.vstack([self.x_axis.to_array(), self.y_axis.to_array(), self.z_axis.to_array()])
        return self.origin.to_array() + np.asarray(local, dtype=np.float64) @ basis

    def remap_to_plane_space(self, point: Point) -> Point:
        """Express a world point in local coordinates of this plane."""
        d = point - self.origin
        return Point(d.dot(self.x_axis), d.dot(self.y_axis), d.dot(self.z_axis))

    def distance_to(self, point: Point) -> float:
        """Signed distance from the plane, positive on the +z side."""
        return (point - self.origin).dot(self.z_axis)

    def with_origin(self, origin: Point) -> Plane:
        return Plane(origin=origin, x_axis=self.x_axis, y_axis=self.y_axis)

    def mirrored(self) -> Plane:
        """Mirror about the plane spanned by the local x and z axes (flips the bending direction)."""
        return Plane(origin=self.origin, x_axis=self.x_axis, y_axis=-self.y_axis)
