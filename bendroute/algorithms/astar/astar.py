"""A* search over angle-constrained 3D steps."""
import heapq
import itertools
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ...domain.models.geometry import (
    Vector3, Basis3d, Tolerance, ZERO, X_AXIS, Y_AXIS, Z_AXIS,
    angle_degrees, is_parallel_to
)
from ...domain.models.path import PathNode, HeuristicFormula, SearchParameters
from ...domain.services.capabilities import CollisionDetector, PointVisualizer
from ...shared.configuration.settings import RoutingSettings, ToleranceSettings
from ..base.direction_iterator import DirectionIterator
from ..base.line_intersection import LineIntersectionSolver
from ..postprocess.path_refiner import PathRefiner
from .interline import InterLinePathFinder
from .node_builder import NodeBuilder

logger = logging.getLogger(__name__)

NodeKey = Tuple[Vector3, Vector3]


class AStarPathFinder:
    """A* search where every expansion is one ``NodeBuilder`` step.

    Neighbour directions come from the node's local basis: the two planes
    containing its forward axis, at the allowed angles from the current
    direction. Reversing is never a neighbour unless 180 is allowed.
    """

    def __init__(self, node_builder: NodeBuilder, angles: Sequence[int],
                 collision_detector: Optional[CollisionDetector] = None,
                 max_iterations: int = 20000, tolerance: Tolerance = Tolerance(),
                 direction_digits: int = 3):
        self.node_builder = node_builder
        self.angles = list(angles)
        self.collision_detector = collision_detector
        self.max_iterations = max_iterations
        self.tolerance = tolerance
        self.direction_digits = direction_digits
        self.iterations = 0

    def find_path(self, start: Vector3, end: Vector3, start_direction: Vector3,
                  end_direction: Optional[Vector3] = None,
                  start_basis: Optional[Basis3d] = None) -> List[PathNode]:
        """Search from ``start`` heading ``start_direction`` to ``end``.

        Returns:
            Nodes from start to goal, or an empty list if none was found
        """
        self.node_builder.end_direction = end_direction if end_direction is not None else ZERO
        start_node = PathNode.start(start, start_direction, start_basis)

        counter = itertools.count()
        open_set = [(start_node.f, next(counter), start_node)]
        closed_set = set()
        g_score: Dict[NodeKey, float] = {self._key(start_node): 0.0}
        self.iterations = 0

        while open_set and self.iterations < self.max_iterations:
            self.iterations += 1
            _, _, current = heapq.heappop(open_set)

            current_key = self._key(current)
            if current_key in closed_set:
                continue
            closed_set.add(current_key)

            if self._is_goal(current, end, end_direction):
                path = self._reconstruct_path(current)
                logger.debug(f"A* found path with {len(path)} nodes in {self.iterations} iterations")
                return path

            directions = DirectionIterator(current.basis.planes(), self.angles, current.dir,
                                           digits=self.direction_digits,
                                           exclude_reverse=180 not in self.angles)
            for direction in directions:
                node = self.node_builder.build(current, direction)
                if node is None:
                    continue

                key = self._key(node)
                if key in closed_set:
                    continue

                if self._collides(current, node, start, end):
                    continue

                node = self.node_builder.build_with_parameters(node)
                if key in g_score and g_score[key] <= node.g:
                    continue

                g_score[key] = node.g
                heapq.heappush(open_set, (node.f, next(counter), node))

        if self.iterations >= self.max_iterations:
            logger.warning(f"A* stopped after {self.iterations} iterations without reaching {end}")
        return []

    def _key(self, node: PathNode) -> NodeKey:
        return (node.point.round(self.node_builder.tolerance),
                node.dir.round(self.direction_digits))

    def _is_goal(self, node: PathNode, end: Vector3, end_direction: Optional[Vector3]) -> bool:
        if node.point.distance_to(end) > self.tolerance.compound:
            return False
        if end_direction is None or end_direction.is_zero() or node.dir.is_zero():
            return True
        if is_parallel_to(node.dir, end_direction, self.tolerance.angle_radians) == 1:
            return True
        return angle_degrees(node.dir, end_direction) in self.angles

    def _collides(self, parent: PathNode, node: PathNode, start: Vector3, end: Vector3) -> bool:
        if self.collision_detector is None:
            return False
        basis = parent.basis.get_basis(node.dir).with_origin(parent.point)
        collisions = self.collision_detector.get_collisions(
            parent.point, node.point, basis, start, end, self.tolerance.compound_digits)
        return len(collisions) > 0

    @staticmethod
    def _reconstruct_path(node: PathNode) -> List[PathNode]:
        path = []
        while node is not None:
            path.append(node)
            node = node.previous
        return list(reversed(path))


class AStarAlgorithm:
    """Runs one A* search per (step, tolerance, heuristic) combination.

    This is the path search the parameter sweep drives. Each call builds a
    fresh ``NodeBuilder`` so that no state leaks between attempts, and
    returns the refined point list of the found path.
    """

    def __init__(self, start: Vector3, end: Vector3, start_direction: Vector3,
                 end_direction: Optional[Vector3] = None,
                 routing: Optional[RoutingSettings] = None,
                 tolerance: Optional[ToleranceSettings] = None,
                 collision_detector: Optional[CollisionDetector] = None,
                 point_visualizer: Optional[PointVisualizer] = None,
                 end_orths: Optional[List[Vector3]] = None,
                 start_basis: Optional[Basis3d] = None):
        self.start = start
        self.end = end
        self.start_direction = start_direction
        self.end_direction = end_direction
        self.routing = routing or RoutingSettings()
        self.tolerance_settings = tolerance or ToleranceSettings()
        self.collision_detector = collision_detector
        self.point_visualizer = point_visualizer
        self.end_orths = end_orths or [X_AXIS, Y_AXIS, Z_AXIS]
        self.start_basis = start_basis
        self.refiner = PathRefiner(self.tolerance_settings.linear_digits)
        self.last_nodes: List[PathNode] = []

    def _tolerance(self) -> Tolerance:
        return Tolerance(self.tolerance_settings.linear_digits,
                         self.tolerance_settings.compound_digits,
                         self.tolerance_settings.angle_degrees)

    def _bend_finder(self) -> Optional[InterLinePathFinder]:
        if self.routing.trace_angle == 90:
            return None
        tolerance = self._tolerance()
        solver = LineIntersectionSolver([self.routing.trace_angle], tolerance=tolerance,
                                        ray_length=self.tolerance_settings.ray_length)
        if self.collision_detector is not None:
            solver.with_detector(self.collision_detector, self.start_basis or Basis3d.default(),
                                 self.start, self.end)
        return InterLinePathFinder(solver, self.routing.min_link_length,
                                   self.start_direction,
                                   self.end_direction if self.end_direction is not None else ZERO,
                                   tolerance)

    def build_node_builder(self, parameters: SearchParameters) -> NodeBuilder:
        builder = NodeBuilder(
            HeuristicFormula(self.routing.heuristic_formula),
            self.start, self.end, parameters.step, self.end_orths,
            trace_angle=self.routing.trace_angle,
            bend_finder=self._bend_finder(),
            punish_change_direction=self.routing.punish_change_direction,
            step_cost=self.routing.step_cost,
            change_direction_cost=self.routing.change_direction_cost,
            plane_tolerance=self.tolerance_settings.plane_tolerance
        )
        builder.tolerance = parameters.tolerance
        builder.c_tolerance = self.tolerance_settings.node_compound_digits
        builder.heuristic = parameters.heuristic
        if self.point_visualizer is not None:
            builder.point_visualizer = self.point_visualizer
        return builder

    def find_path(self, parameters: SearchParameters) -> List[Vector3]:
        builder = self.build_node_builder(parameters)
        tolerance = Tolerance(parameters.tolerance,
                              self.tolerance_settings.node_compound_digits,
                              self.tolerance_settings.angle_degrees)
        finder = AStarPathFinder(builder, self.routing.angles, self.collision_detector,
                                 self.routing.max_iterations, tolerance,
                                 direction_digits=self.tolerance_settings.compound_digits)
        self.last_nodes = finder.find_path(self.start, self.end, self.start_direction,
                                           self.end_direction, self.start_basis)
        points = self.refiner.refine(self.last_nodes)
        if len(points) > 1:
            # The goal is reached within the compound tolerance; end exactly on it.
            points[-1] = self.end
        return points
