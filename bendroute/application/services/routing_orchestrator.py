"""Application service that runs a complete routing request."""
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from ...algorithms.astar.astar import AStarAlgorithm
from ...algorithms.enumerators import PathFindEnumerator, SearchStatus, ValueEnumerator
from ...algorithms.postprocess.nodes_minimizer import NodesMinimizer
from ...algorithms.postprocess.path_refiner import PathRefiner
from ...domain.models.geometry import Vector3, Basis3d, Tolerance
from ...domain.models.path import SearchParameters, SimpleGraph
from ...domain.services.capabilities import CollisionDetector, PointVisualizer
from ...shared.configuration.settings import ApplicationSettings
from ...shared.exceptions import (
    ConfigurationError, GeometryError, SearchExhaustedError, SearchTimeoutError
)
from ...shared.utils.logging_utils import get_context_logger
from ...shared.utils.validation_utils import (
    validate_angles, validate_coordinates, validate_direction
)

logger = logging.getLogger(__name__)

PointLike = Union[Vector3, Sequence[float]]


@dataclass
class RoutingResult:
    """Outcome of one routing request."""
    points: List[Vector3] = field(default_factory=list)
    status: SearchStatus = SearchStatus.EXHAUSTED
    parameters: Optional[SearchParameters] = None
    iterations: int = 0
    elapsed_s: float = 0.0

    @property
    def success(self) -> bool:
        return self.status == SearchStatus.FOUND and len(self.points) > 0

    @property
    def length(self) -> float:
        return SimpleGraph(self.points).length

    def raise_for_status(self) -> 'RoutingResult':
        """Raise if no path was found, otherwise return the result.

        Raises:
            SearchTimeoutError: If the deadline passed or the search was cancelled
            SearchExhaustedError: If every parameter combination failed
        """
        if self.success:
            return self
        if self.status in (SearchStatus.TIMEOUT, SearchStatus.CANCELLED):
            raise SearchTimeoutError(
                f"Path search stopped after {self.iterations} iterations ({self.status.value})",
                cancelled=self.status == SearchStatus.CANCELLED,
                parameters=self.parameters, error_code="SEARCH_TIMEOUT"
            )
        raise SearchExhaustedError(
            f"No path found in {self.iterations} iterations",
            iterations=self.iterations, parameters=self.parameters,
            error_code="SEARCH_EXHAUSTED"
        )


class RoutingOrchestrator:
    """Routes a single run from a directed start point to an end point.

    The pipeline is: parameter sweep of A* searches, bend reduction with
    ``NodesMinimizer``, straight-run compaction with ``PathRefiner``.
    """

    def __init__(self, settings: Optional[ApplicationSettings] = None,
                 collision_detector: Optional[CollisionDetector] = None,
                 point_visualizer: Optional[PointVisualizer] = None):
        """Initialize routing orchestrator.

        Raises:
            ConfigurationError: If the routing or tolerance settings are invalid
        """
        self.settings = settings or ApplicationSettings()
        self.collision_detector = collision_detector
        self.point_visualizer = point_visualizer
        self.requests = 0

        errors = self.settings.routing.validate() + self.settings.tolerance.validate()
        if errors:
            raise ConfigurationError(
                f"Invalid routing settings: {'; '.join(errors)}",
                error_code="INVALID_SETTINGS", details={"errors": errors}
            )
        validate_angles(self.settings.routing.angles)

    @property
    def tolerance(self) -> Tolerance:
        tolerance = self.settings.tolerance
        return Tolerance(tolerance.linear_digits, tolerance.compound_digits, tolerance.angle_degrees)

    def create_enumerator(self, algorithm: AStarAlgorithm,
                          cancel_event: Optional[threading.Event] = None) -> PathFindEnumerator:
        routing = self.settings.routing
        return PathFindEnumerator(
            ValueEnumerator(routing.steps),
            ValueEnumerator(routing.heuristics),
            ValueEnumerator(routing.tolerances),
            algorithm,
            deadline_ms=routing.deadline_ms,
            cancel_event=cancel_event
        )

    def route(self, start: PointLike, end: PointLike, start_direction: PointLike,
              end_direction: Optional[PointLike] = None,
              cancel_event: Optional[threading.Event] = None,
              start_basis: Optional[Basis3d] = None) -> RoutingResult:
        """Find a path from ``start`` heading ``start_direction`` to ``end``.

        Args:
            start: Start point
            end: End point
            start_direction: Heading out of the start point
            end_direction: Heading into the end point, unconstrained if None
            cancel_event: Set it from another thread to stop the sweep
            start_basis: Local frame at the start point; default frame if None

        Returns:
            RoutingResult; ``points`` is empty unless a path was found

        Raises:
            ValidationError: If a point or direction is malformed
            GeometryError: If ``start_basis`` is not orthonormal
        """
        start = self._to_point(start, "start")
        end = self._to_point(end, "end")
        start_direction = self._to_direction(start_direction, "start_direction")
        if end_direction is not None:
            end_direction = self._to_direction(end_direction, "end_direction")
        if start_basis is not None:
            self._check_basis(start_basis)

        self.requests += 1
        log = get_context_logger(__name__, request=str(self.requests))
        log.info(f"Routing from {start} to {end}")
        began = time.perf_counter()

        algorithm = AStarAlgorithm(
            start, end, start_direction, end_direction,
            routing=self.settings.routing,
            tolerance=self.settings.tolerance,
            collision_detector=self.collision_detector,
            point_visualizer=self.point_visualizer,
            start_basis=start_basis
        )

        with self.create_enumerator(algorithm, cancel_event) as enumerator:
            while enumerator.move_next():
                pass
            status = enumerator.status
            parameters = enumerator.parameters
            iterations = enumerator.iterations
            points = list(enumerator.current)

        if status == SearchStatus.FOUND:
            points = self.simplify(points, start_direction, end_direction, start_basis)
        else:
            points = []

        elapsed = time.perf_counter() - began
        result = RoutingResult(points, status, parameters, iterations, elapsed)
        if result.success:
            log.info(f"Route found: {len(points)} points, length {result.length:.3f}, "
                     f"{elapsed:.2f}s")
        else:
            log.warning(f"Route not found ({status.value}) after {iterations} iterations")
        return result

    def simplify(self, points: List[Vector3], start_direction: Optional[Vector3] = None,
                 end_direction: Optional[Vector3] = None,
                 start_basis: Optional[Basis3d] = None) -> List[Vector3]:
        """Reduce bends of a found path and drop collinear vertices."""
        routing = self.settings.routing
        minimizer = NodesMinimizer(
            routing.angles,
            collision_detector=self.collision_detector,
            max_link_length=routing.max_link_length,
            min_link_length=routing.min_link_length,
            initial_basis=start_basis,
            tolerance=self.tolerance,
            ray_length=self.settings.tolerance.ray_length
        )
        graph = minimizer.reduce_nodes(SimpleGraph(points), start_direction, end_direction)
        refiner = PathRefiner(self.settings.tolerance.linear_digits)
        return refiner.refine_points(graph.nodes)

    @staticmethod
    def _to_point(value: PointLike, field_name: str) -> Vector3:
        components = tuple(value)
        validate_coordinates(components, field_name)
        return Vector3(*(float(c) for c in components))

    @staticmethod
    def _to_direction(value: PointLike, field_name: str) -> Vector3:
        components = tuple(value)
        validate_direction(components, field_name)
        return Vector3(*(float(c) for c in components)).unit()

    @staticmethod
    def _check_basis(basis: Basis3d):
        if basis.is_empty:
            return
        axes = (basis.x, basis.y, basis.z)
        for axis in axes:
            if abs(axis.length - 1.0) > 1e-6:
                raise GeometryError(f"Basis axis {axis} is not a unit vector", entity="basis")
        if (abs(basis.x.dot(basis.y)) > 1e-6 or abs(basis.x.dot(basis.z)) > 1e-6
                or abs(basis.y.dot(basis.z)) > 1e-6):
            raise GeometryError("Basis axes are not orthogonal", entity="basis")
