"""Geometry primitives for 3D routing.

Points and vectors share one value type, ``Vector3``. All numeric comparisons
go through the named tolerance helpers in this module so that every solver
rounds to the same digit counts:

* ``round_value`` / ``round_vector`` round to N decimal digits;
* ``compound`` turns a digit count into an absolute tolerance (``0.1 ** N``);
* ``angle_between`` / ``angle_degrees`` / ``is_parallel_to`` compare
  directions with an angular tolerance.
"""
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

# Lengths below this are treated as zero when normalizing.
EPSILON = 1e-12


@dataclass(frozen=True)
class Vector3:
    """Immutable 3D vector, also used for points."""
    x: float
    y: float
    z: float

    def __add__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> 'Vector3':
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> 'Vector3':
        return self * scalar

    def __truediv__(self, scalar: float) -> 'Vector3':
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> 'Vector3':
        return Vector3(-self.x, -self.y, -self.z)

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def dot(self, other: 'Vector3') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vector3') -> 'Vector3':
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    @property
    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def unit(self) -> 'Vector3':
        """Unit tangent. The zero vector stays zero."""
        length = self.length
        if length < EPSILON:
            return ZERO
        return self / length

    def round(self, digits: int) -> 'Vector3':
        return round_vector(self, digits)

    def distance_to(self, other: 'Vector3') -> float:
        return (self - other).length

    def is_zero(self, tolerance: float = EPSILON) -> bool:
        return self.length <= tolerance

    @property
    def is_nan(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y) or math.isnan(self.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @staticmethod
    def from_array(values) -> 'Vector3':
        return Vector3(float(values[0]), float(values[1]), float(values[2]))

    def __repr__(self) -> str:
        return f"Vector3({self.x:g}, {self.y:g}, {self.z:g})"


# Points are plain vectors.
Point3 = Vector3

ZERO = Vector3(0.0, 0.0, 0.0)
X_AXIS = Vector3(1.0, 0.0, 0.0)
Y_AXIS = Vector3(0.0, 1.0, 0.0)
Z_AXIS = Vector3(0.0, 0.0, 1.0)
AXES = (X_AXIS, Y_AXIS, Z_AXIS)
NAN_POINT = Vector3(math.nan, math.nan, math.nan)


# --- Tolerance helpers -------------------------------------------------------

def round_value(value: float, digits: int) -> float:
    """Round to ``digits`` decimal digits, folding -0.0 into 0.0."""
    return round(value, digits) + 0.0


def round_vector(vector: Vector3, digits: int) -> Vector3:
    """Round every component to ``digits`` decimal digits."""
    return Vector3(
        round_value(vector.x, digits),
        round_value(vector.y, digits),
        round_value(vector.z, digits)
    )


def compound(digits: int) -> float:
    """Absolute tolerance for a digit count: ``0.1 ** digits``."""
    return math.pow(0.1, digits)


def points_equal(a: Vector3, b: Vector3, tolerance: float) -> bool:
    return a.distance_to(b) <= tolerance


def angle_between(v1: Vector3, v2: Vector3) -> float:
    """Angle between two vectors in radians; 0 when either is zero."""
    if v1.is_zero() or v2.is_zero():
        return 0.0
    a, b = v1.to_array(), v2.to_array()
    return float(math.atan2(np.linalg.norm(np.cross(a, b)), np.dot(a, b)))


def angle_degrees(v1: Vector3, v2: Vector3) -> int:
    """Angle between two vectors, rounded to whole degrees."""
    return int(round(math.degrees(angle_between(v1, v2))))


def is_parallel_to(v1: Vector3, v2: Vector3, angle_tolerance: float) -> int:
    """Parallelism test.

    Returns:
        1 if parallel, -1 if antiparallel, 0 otherwise (or if either is zero)
    """
    if v1.is_zero() or v2.is_zero():
        return 0
    angle = angle_between(v1, v2)
    if angle <= angle_tolerance:
        return 1
    if angle >= math.pi - angle_tolerance:
        return -1
    return 0


@dataclass(frozen=True)
class Tolerance:
    """Digit counts and angular tolerance used by one component."""
    linear_digits: int = 5
    compound_digits: int = 3
    angle_degrees: float = 3.0

    @property
    def compound(self) -> float:
        return compound(self.compound_digits)

    @property
    def linear(self) -> float:
        return compound(self.linear_digits)

    @property
    def angle_radians(self) -> float:
        return math.radians(self.angle_degrees)


# --- Lines and planes ---------------------------------------------------------

@dataclass(frozen=True)
class Line:
    """Segment from ``origin`` along a unit ``direction`` for ``length`` units."""
    origin: Vector3
    direction: Vector3
    length: float

    def __post_init__(self):
        object.__setattr__(self, 'direction', self.direction.unit())

    @staticmethod
    def from_points(start: Vector3, end: Vector3) -> 'Line':
        return Line(start, end - start, start.distance_to(end))

    @property
    def unit_tangent(self) -> Vector3:
        return self.direction

    @property
    def end(self) -> Vector3:
        return self.point_at(self.length)

    def point_at(self, t: float) -> Vector3:
        """Point at distance ``t`` from the origin."""
        return self.origin + self.direction * t

    def closest_parameter(self, point: Vector3) -> float:
        return (point - self.origin).dot(self.direction)


def line_line_intersection(line1: Line, line2: Line, tolerance: float,
                           finite: bool = True) -> Optional[Tuple[float, float]]:
    """Intersect two lines.

    Returns the parameters ``(t1, t2)`` of the intersection on each line, or
    None when the lines miss each other by more than ``tolerance``. Collinear
    lines meet at ``line2.origin`` when it lies on ``line1``, otherwise at
    ``line1.origin`` when it lies on ``line2``.
    """
    d1, d2 = line1.direction, line2.direction
    if d1.is_zero() or d2.is_zero():
        return None

    r = line1.origin - line2.origin
    b = d1.dot(d2)
    c = d1.dot(r)
    f = d2.dot(r)
    denom = 1.0 - b * b

    def within(t: float, line: Line) -> bool:
        return not finite or -tolerance <= t <= line.length + tolerance

    if abs(denom) < EPSILON:
        if (line2.origin - line1.origin).cross(d1).length > tolerance:
            return None
        t1 = line1.closest_parameter(line2.origin)
        if within(t1, line1):
            return t1, 0.0
        t2 = line2.closest_parameter(line1.origin)
        if within(t2, line2):
            return 0.0, t2
        return None

    t1 = (b * f - c) / denom
    t2 = f + b * t1
    if not (within(t1, line1) and within(t2, line2)):
        return None
    if line1.point_at(t1).distance_to(line2.point_at(t2)) > tolerance:
        return None
    return t1, t2


@dataclass(frozen=True)
class Plane:
    """Plane through ``origin`` with unit ``normal`` and in-plane ``x_axis``."""
    origin: Vector3
    normal: Vector3
    x_axis: Vector3

    @staticmethod
    def from_directions(origin: Vector3, d1: Vector3, d2: Vector3) -> Optional['Plane']:
        """Plane spanned by two directions; None when they are parallel."""
        normal = d1.cross(d2).unit()
        if normal.is_zero(1e-9):
            return None
        return Plane(origin, normal, d1.unit())

    @staticmethod
    def from_normal(origin: Vector3, normal: Vector3) -> Optional['Plane']:
        """Plane with a deterministic x axis: the global axis least aligned with the normal."""
        n = normal.unit()
        if n.is_zero():
            return None
        axis = min(AXES, key=lambda a: abs(a.dot(n)))
        x_axis = (axis - n * axis.dot(n)).unit()
        return Plane(origin, n, x_axis)

    @property
    def is_valid(self) -> bool:
        return not self.normal.is_zero() and not self.x_axis.is_zero()

    @property
    def y_axis(self) -> Vector3:
        return self.normal.cross(self.x_axis)

    def contains(self, direction: Vector3, angle_tolerance: float = 1e-9) -> bool:
        """True if ``direction`` lies in the plane within the angular tolerance."""
        if direction.is_zero():
            return False
        return abs(direction.unit().dot(self.normal)) <= math.sin(angle_tolerance)

    def project(self, direction: Vector3) -> Vector3:
        return direction - self.normal * direction.dot(self.normal)

    def rotate(self, direction: Vector3, degrees: float) -> Vector3:
        """Rotate an in-plane direction about the normal."""
        return rotate_vector(direction, self.normal, math.radians(degrees))


def line_plane_intersection(line: Line, plane: Plane) -> Optional[float]:
    """Parameter where the infinite line crosses the plane, None if parallel."""
    denom = plane.normal.dot(line.direction)
    if abs(denom) < EPSILON:
        return None
    return plane.normal.dot(plane.origin - line.origin) / denom


def rotate_vector(vector: Vector3, axis: Vector3, radians: float) -> Vector3:
    """Rodrigues rotation of ``vector`` about a unit ``axis``."""
    k = axis.unit().to_array()
    v = vector.to_array()
    cos_a, sin_a = math.cos(radians), math.sin(radians)
    rotated = v * cos_a + np.cross(k, v) * sin_a + k * np.dot(k, v) * (1.0 - cos_a)
    return Vector3.from_array(rotated)


# --- Local basis ----------------------------------------------------------------

@dataclass(frozen=True)
class Basis3d:
    """Orthonormal local frame. ``x`` is the forward direction."""
    x: Vector3
    y: Vector3
    z: Vector3
    origin: Vector3 = field(default=ZERO)

    @staticmethod
    def default(origin: Vector3 = ZERO) -> 'Basis3d':
        return Basis3d(X_AXIS, Y_AXIS, Z_AXIS, origin)

    @staticmethod
    def empty() -> 'Basis3d':
        return Basis3d(ZERO, ZERO, ZERO)

    @property
    def is_empty(self) -> bool:
        return self.x.is_zero() and self.y.is_zero() and self.z.is_zero()

    def with_origin(self, origin: Vector3) -> 'Basis3d':
        return Basis3d(self.x, self.y, self.z, origin)

    def get_basis(self, direction: Vector3) -> 'Basis3d':
        """Rotate the basis so that ``x`` points along ``direction``.

        The minimal rotation taking ``x`` onto the direction is applied to all
        three axes, so the roll is fully determined by the current frame. An
        antiparallel direction is a half turn about ``z``.
        """
        d = direction.unit()
        if d.is_zero() or self.is_empty:
            return self

        axis = self.x.cross(d)
        if axis.is_zero(1e-9):
            if self.x.dot(d) > 0:
                return self
            return Basis3d(-self.x, -self.y, self.z, self.origin)

        angle = angle_between(self.x, d)
        y = rotate_vector(self.y, axis, angle)
        # Re-orthogonalize against the exact forward direction.
        y = (y - d * y.dot(d)).unit()
        z = d.cross(y)
        return Basis3d(d, y, z, self.origin)

    def planes(self) -> List[Plane]:
        """The two planes containing the forward axis: XY then XZ."""
        return [
            Plane(self.origin, self.z, self.x),
            Plane(self.origin, -self.y, self.x),
        ]

    def orths(self) -> List[Vector3]:
        return [self.x, self.y, self.z]
