"""Per-step path node construction and costing."""
import logging
import math
from dataclasses import replace
from typing import List, Optional, Protocol

from ...domain.models.geometry import (
    Vector3, Line, Plane, ZERO, angle_between, compound,
    line_plane_intersection, round_value
)
from ...domain.models.path import PathNode, HeuristicFormula
from ...domain.services.capabilities import PointVisualizer, NullPointVisualizer
from ...domain.services.heuristics import calculate_heuristic
from ...shared.utils.validation_utils import validate_positive_number

logger = logging.getLogger(__name__)


class BendFinder(Protocol):
    """Finds a single-bend path between two directed points."""

    def find_path(self, start: Vector3, end: Vector3,
                  start_direction: Optional[Vector3] = None,
                  end_direction: Optional[Vector3] = None) -> Optional[List[Vector3]]: ...


class NodeBuilder:
    """Builds the next ``PathNode`` from a parent and a direction.

    ``build`` advances the parent one adaptive step (geometry phase) and
    ``build_with_parameters`` scores the result (costing phase). Steps are
    sized so a run along one direction lands exactly on the limiting goal
    plane: the travel distance is split into ``ceil(distance / step)`` equal
    sub-steps.
    """

    def __init__(self, formula: HeuristicFormula, start_point: Vector3, end_point: Vector3,
                 step: float, orths: List[Vector3], trace_angle: int = 90,
                 bend_finder: Optional[BendFinder] = None,
                 punish_change_direction: bool = False,
                 step_cost: float = 0.01, change_direction_cost: float = 200.0,
                 plane_tolerance: float = 0.03):
        """Initialize node builder.

        Args:
            formula: Heuristic formula for H
            start_point: Global start of the search
            end_point: Goal point
            step: Maximum step length
            orths: Goal frame axes; one goal plane is built per axis
            trace_angle: Required bend angle; anything but 90 asks ``bend_finder``
            bend_finder: Single-bend path finder used for non-90 bends
            punish_change_direction: Multiply the step cost on direction changes
            step_cost: Scalar applied to step and heuristic costs
            change_direction_cost: Penalty factor, scaled by ``step_cost``
            plane_tolerance: Goal-plane hits closer than this are ignored
        """
        validate_positive_number(step, "step")
        self.formula = formula
        self.start_point = start_point
        self.end_point = end_point
        self.step = step
        self.trace_angle = trace_angle
        self.bend_finder = bend_finder
        self.punish_change_direction = punish_change_direction
        self.step_cost = step_cost
        self.plane_tolerance = plane_tolerance
        self.heuristic = 100
        self.end_direction: Vector3 = ZERO
        self.point_visualizer: PointVisualizer = NullPointVisualizer()

        self._gcost = change_direction_cost * step_cost
        self._tolerance = 5
        self._c_tolerance = 2
        self._ct = compound(self._c_tolerance)
        self._node: Optional[PathNode] = None

        self._end_point_planes = [
            Plane.from_normal(end_point, orths[2]),
            Plane.from_normal(end_point, orths[1]),
            Plane.from_normal(end_point, orths[0]),
        ]

    @property
    def tolerance(self) -> int:
        """Digits that node coordinates are rounded to."""
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value: int):
        self._tolerance = value

    @property
    def c_tolerance(self) -> int:
        """Digits for compound comparisons (step lengths, start proximity)."""
        return self._c_tolerance

    @c_tolerance.setter
    def c_tolerance(self, value: int):
        self._c_tolerance = value
        self._ct = compound(value)

    @property
    def node(self) -> Optional[PathNode]:
        return self._node

    def with_step(self, step: float) -> 'NodeBuilder':
        self.step = step
        return self

    def build(self, parent: PathNode, direction: Vector3) -> Optional[PathNode]:
        """Geometry phase: position a new node one step from ``parent``.

        Returns:
            The new node, or None if no valid step exists in this direction
        """
        node = replace(parent, dir=direction, previous=parent)

        step_vector = parent.step_vector
        if (round_value(step_vector.length, self._c_tolerance) == 0
                or round(math.degrees(angle_between(parent.dir, direction))) != 0):
            step_vector = self._get_step(parent, direction)

        if round_value(step_vector.length, self._c_tolerance) == 0:
            logger.debug("Step vector length is less than tolerance")
            return None

        step_vector = step_vector.round(self._tolerance)
        if step_vector.is_zero():
            return None

        node.step_vector = step_vector
        node.point = (parent.point + step_vector).round(self._tolerance)
        self._node = node
        return node

    def build_with_parameters(self, node: Optional[PathNode] = None) -> PathNode:
        """Costing phase: parent link, ANP, G, H, F and local basis."""
        node = node or self._node
        parent = node.previous
        node.parent = parent.point

        g_value = node.step_vector.length
        same_direction = parent.dir.round(self._tolerance) == node.dir.round(self._tolerance)
        if same_direction and parent.point.distance_to(self.start_point) > self._ct:
            node.anp = parent.anp
        else:
            node.anp = parent.point
            if self.punish_change_direction:
                g_value *= self._gcost

        node.g = parent.g + g_value
        node.h = calculate_heuristic(self.formula, node.point, self.end_point,
                                     self.heuristic * self.step_cost)
        node.f = node.g + node.h
        node.basis = parent.basis.get_basis(node.dir).with_origin(node.point)
        return node

    def _get_step(self, parent: PathNode, direction: Vector3) -> Vector3:
        target = None

        if self.trace_angle != 90 and self.bend_finder is not None:
            path = self.bend_finder.find_path(parent.point, self.end_point,
                                              parent.dir, self.end_direction)
            if path is not None and len(path) > 2:
                target = path[1]

        if target is None:
            target = self._get_plane_target(parent.point, direction)

        if target is None or target == parent.point:
            calc_step = self.step
        else:
            self.point_visualizer.show(target)
            distance = (target - parent.point).length
            steps_count = math.ceil(distance / self.step)
            calc_step = distance / steps_count

        return direction.unit() * calc_step

    def _get_plane_target(self, point: Vector3, direction: Vector3) -> Optional[Vector3]:
        """Hit of the forward ray on the goal planes.

        A single hit is returned as is; of several hits, the last one of a
        distance-descending ordering is returned.
        """
        line = Line(point, direction, 1.0)
        found = []
        for plane in self._end_point_planes:
            if plane is None:
                continue
            t = line_plane_intersection(line, plane)
            if t is None or t <= 0:
                continue
            hit = line.point_at(t).round(self._tolerance)
            if hit.distance_to(point) < self.plane_tolerance:
                continue
            found.append(hit)

        if len(found) == 1:
            return found[0]
        if len(found) > 1:
            return sorted(found, key=lambda p: point.distance_to(p), reverse=True)[-1]
        return None
