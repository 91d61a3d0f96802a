"""Single-bend connector between two directed endpoints."""
import logging
import math
from typing import List, Optional, Sequence, Tuple

from ...domain.models.geometry import (
    Vector3, Line, Plane, Basis3d, Tolerance, NAN_POINT,
    line_line_intersection, is_parallel_to, angle_degrees, round_value
)
from ...domain.services.capabilities import CollisionDetector
from .direction_iterator import DirectionIteratorBuilder

logger = logging.getLogger(__name__)

DirectedPoint = Tuple[Vector3, Vector3]


class LineIntersectionSolver:
    """Finds the shortest collision-free elbow between two directed endpoints.

    Candidate directions are enumerated around the first endpoint's direction
    and around the negated direction of the second endpoint. Each pair of rays
    is intersected; a pair is valid when the rays are parallel (within the
    angular tolerance) or meet at one of the allowed angles, when both legs are
    long enough, and when a detector (if attached) reports both legs clear.
    The valid point with the smallest total leg length wins, first found on
    ties.
    """

    def __init__(self, angles: Sequence[int],
                 iterator_builder: Optional[DirectionIteratorBuilder] = None,
                 tolerance: Tolerance = Tolerance(),
                 ray_length: float = 10000.0,
                 min_link_length: float = 0.0,
                 allow_touch: bool = True):
        """Initialize solver.

        Args:
            angles: Allowed bend angles in whole degrees
            iterator_builder: Builder for candidate direction iterators
            tolerance: Rounding digits and angular tolerance
            ray_length: Length of the probing rays
            min_link_length: Minimum length of each leg
            allow_touch: Accept zero-length legs (intersection at an endpoint)
        """
        self.angles = list(angles)
        self.tolerance = tolerance
        self.iterator_builder = iterator_builder or DirectionIteratorBuilder(tolerance.compound_digits)
        self.ray_length = ray_length
        self.min_link_length = min_link_length
        self.allow_touch = allow_touch
        self.first_node_planes: Optional[List[Plane]] = None
        self.last_node_planes: Optional[List[Plane]] = None
        self.intersection_point: Vector3 = NAN_POINT

        self._collision_detector: Optional[CollisionDetector] = None
        self._basis: Basis3d = Basis3d.default()
        self._first_node: Optional[Vector3] = None
        self._last_node: Optional[Vector3] = None

    def with_detector(self, collision_detector: Optional[CollisionDetector], basis: Basis3d,
                      first_node: Vector3, last_node: Vector3) -> 'LineIntersectionSolver':
        """Attach a collision detector evaluated in ``basis`` rotated to each leg."""
        self._collision_detector = collision_detector
        self._basis = basis if not basis.is_empty else Basis3d.default()
        self._first_node = first_node
        self._last_node = last_node
        return self

    def get_intersection(self, node1: DirectedPoint, node2: DirectedPoint) -> Vector3:
        """Best bend point between ``node1`` and ``node2``.

        Returns:
            The intersection point, or ``NAN_POINT`` if no candidate is valid
        """
        point1, direction1 = node1
        point2, direction2 = node2
        digits = self.tolerance.compound_digits
        angle_tolerance = self.tolerance.angle_radians

        best = NAN_POINT
        best_sum = math.inf

        first_iterator = self.iterator_builder.build(self.first_node_planes, self.angles, direction1)
        last_iterator = self.iterator_builder.build(self.last_node_planes, self.angles, -direction2)

        while first_iterator.move_next():
            line1 = Line(point1, first_iterator.current.round(digits), self.ray_length)
            last_iterator.reset()
            while last_iterator.move_next():
                line2 = Line(point2, last_iterator.current.round(digits), self.ray_length)

                if not self.is_valid_angle(line1.unit_tangent, line2.unit_tangent, angle_tolerance):
                    continue

                params = line_line_intersection(line1, line2, self.tolerance.compound)
                if params is None:
                    continue

                p = line1.point_at(params[0])
                d1 = round_value(point1.distance_to(p), digits)
                d2 = round_value(point2.distance_to(p), digits)
                total = d1 + d2
                if total >= best_sum or not (self._is_valid_length(d1) and self._is_valid_length(d2)):
                    continue

                if self._is_clear(point1, point2, p, line1, line2, d1, d2):
                    best, best_sum = p, total

        self.intersection_point = best
        return best

    def is_valid_angle(self, tangent1: Vector3, tangent2: Vector3, angle_tolerance: float) -> bool:
        """Rays are parallel or bend at one of the allowed angles."""
        if is_parallel_to(tangent1, tangent2, angle_tolerance) != 0:
            return True
        return angle_degrees(tangent1, -tangent2) in self.angles

    def _is_valid_length(self, distance: float) -> bool:
        if distance == 0:
            return self.allow_touch
        if self.allow_touch:
            return distance >= self.min_link_length
        return distance > self.min_link_length

    def _is_clear(self, point1: Vector3, point2: Vector3, p: Vector3,
                  line1: Line, line2: Line, d1: float, d2: float) -> bool:
        if self._collision_detector is None:
            return True

        digits = self.tolerance.compound_digits
        if d1 > 0:
            basis1 = self._basis.get_basis(line1.unit_tangent)
            if self._collision_detector.get_collisions(
                    point1, p, basis1, self._first_node, self._last_node, digits):
                return False
        if d2 > 0:
            basis2 = self._basis.get_basis(line2.unit_tangent)
            if self._collision_detector.get_collisions(
                    point2, p, basis2, self._first_node, self._last_node, digits):
                return False
        return True
