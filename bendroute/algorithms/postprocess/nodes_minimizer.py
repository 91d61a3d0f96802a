"""Bend reduction over finished paths."""
import logging
from typing import List, Optional, Sequence

from ...domain.models.geometry import Vector3, Basis3d, Tolerance, Line, Plane, ZERO
from ...domain.models.path import SimpleGraph
from ...domain.services.capabilities import CollisionDetector
from ..base.line_intersection import LineIntersectionSolver

logger = logging.getLogger(__name__)

WINDOW_SIZE = 4


class NodesMinimizer:
    """Collapses redundant bends of a path with a sliding 4-node window.

    A window is reduced when its nodes lie in a single plane and a single
    elbow between the window's first and last node exists at the allowed
    angles. The elbow directions continue the segments just outside the
    window, so the reduced path stays continuous with its neighbours.
    Passes repeat until no window can be reduced any further.
    """

    def __init__(self, angles: Sequence[int],
                 collision_detector: Optional[CollisionDetector] = None,
                 max_link_length: float = 0.0,
                 min_link_length: float = 0.0,
                 initial_basis: Optional[Basis3d] = None,
                 tolerance: Tolerance = Tolerance(),
                 ray_length: float = 10000.0):
        """Initialize minimizer.

        Args:
            angles: Allowed bend angles in whole degrees
            collision_detector: Optional detector checked for each new leg
            max_link_length: Windows with a link at least this long are skipped; 0 disables
            min_link_length: Minimum length of each new leg
            initial_basis: Local basis at the first path node; default basis if None
            tolerance: Rounding digits and angular tolerance
            ray_length: Length of the probing rays
        """
        self.angles = list(angles)
        self.collision_detector = collision_detector
        self.max_link_length = max_link_length
        self.min_link_length = min_link_length
        self.initial_basis = initial_basis
        self.tolerance = tolerance
        self.ray_length = ray_length

    def reduce_nodes(self, graph: SimpleGraph,
                     start_direction: Optional[Vector3] = None,
                     end_direction: Optional[Vector3] = None) -> SimpleGraph:
        """Reduce the nodes of ``graph``.

        Args:
            graph: Path to reduce; it is not modified
            start_direction: Heading out of the first node, kept by the first window
            end_direction: Heading into the last node, kept by the last window

        Returns:
            New graph with the same first and last node
        """
        nodes = list(graph.nodes)
        if len(nodes) < WINDOW_SIZE:
            return SimpleGraph(nodes)

        while True:
            count = len(nodes)
            nodes = self._reduce_pass(nodes, start_direction, end_direction)
            if len(nodes) >= count:
                break

        if len(graph) > len(nodes):
            logger.debug(f"Path nodes minimized from {len(graph)} to {len(nodes)}")
        return SimpleGraph(nodes)

    def _reduce_pass(self, nodes: List[Vector3], start_direction: Optional[Vector3],
                     end_direction: Optional[Vector3]) -> List[Vector3]:
        first_node, last_node = nodes[0], nodes[-1]
        basis = self._start_basis(nodes)

        i = 0
        while i <= len(nodes) - WINDOW_SIZE:
            window = SimpleGraph(nodes[i:i + WINDOW_SIZE])
            basis = basis.get_basis(Line.from_points(window.nodes[0], window.nodes[1]).unit_tangent)

            is_plane, plane = window.is_plane(self.tolerance.angle_radians)
            if not is_plane or plane is None or not self._has_valid_links(window):
                i += 1
                continue

            first_parent = self._first_parent_direction(nodes, i, start_direction)
            last_parent = self._last_parent_direction(nodes, i, end_direction)
            reduced = self._reduce_window(window, plane, first_parent, last_parent,
                                          basis, first_node, last_node)
            if reduced is None:
                i += 1
                continue

            nodes[i:i + WINDOW_SIZE] = reduced

        return nodes

    def _start_basis(self, nodes: List[Vector3]) -> Basis3d:
        if self.initial_basis is not None and not self.initial_basis.is_empty:
            return self.initial_basis
        return Basis3d.default().get_basis(Line.from_points(nodes[0], nodes[1]).unit_tangent)

    @staticmethod
    def _first_parent_direction(nodes: List[Vector3], i: int,
                                start_direction: Optional[Vector3]) -> Vector3:
        if i > 0:
            return Line.from_points(nodes[i - 1], nodes[i]).unit_tangent
        return start_direction if start_direction is not None else ZERO

    @staticmethod
    def _last_parent_direction(nodes: List[Vector3], i: int,
                               end_direction: Optional[Vector3]) -> Vector3:
        if i + WINDOW_SIZE < len(nodes):
            return Line.from_points(nodes[i + 3], nodes[i + 4]).unit_tangent
        return end_direction if end_direction is not None else ZERO

    def _has_valid_links(self, window: SimpleGraph) -> bool:
        if self.max_link_length == 0:
            return True
        return all(link.length < self.max_link_length for link in window.links)

    def _reduce_window(self, window: SimpleGraph, plane: Plane,
                       first_parent: Vector3, last_parent: Vector3, basis: Basis3d,
                       first_node: Vector3, last_node: Vector3) -> Optional[List[Vector3]]:
        """Replacement nodes for the window, or None when it cannot be reduced."""
        node1 = window.nodes[0]
        node2 = window.nodes[-1]

        solver = LineIntersectionSolver(self.angles, tolerance=self.tolerance,
                                        ray_length=self.ray_length,
                                        min_link_length=self.min_link_length,
                                        allow_touch=False)
        solver.first_node_planes = [plane]
        solver.last_node_planes = [plane]
        if self.collision_detector is not None:
            solver.with_detector(self.collision_detector, basis, first_node, last_node)

        # The solver reverses the second direction itself.
        point = solver.get_intersection((node1, first_parent), (node2, last_parent))
        if point.is_nan:
            return None

        point = point.round(self.tolerance.linear_digits)
        reduced = [node1]
        if (point.distance_to(node1) > self.tolerance.compound
                and point.distance_to(node2) > self.tolerance.compound):
            reduced.append(point)
        reduced.append(node2)
        return reduced
