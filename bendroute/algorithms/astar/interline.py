"""Single-bend path finder built on the line intersection solver."""
import logging
from typing import List, Optional

from ...domain.models.geometry import Vector3, ZERO, Tolerance
from ..base.line_intersection import LineIntersectionSolver

logger = logging.getLogger(__name__)


class InterLinePathFinder:
    """Connects two directed points with at most one bend."""

    def __init__(self, solver: LineIntersectionSolver, min_link_length: float = 0.0,
                 start_direction: Vector3 = ZERO, end_direction: Vector3 = ZERO,
                 tolerance: Tolerance = Tolerance()):
        self.solver = solver
        self.min_link_length = min_link_length
        self.start_direction = start_direction
        self.end_direction = end_direction
        self.tolerance = tolerance

    def find_path(self, start: Vector3, end: Vector3,
                  start_direction: Optional[Vector3] = None,
                  end_direction: Optional[Vector3] = None) -> Optional[List[Vector3]]:
        """Path ``[start, bend, end]``, ``[start, end]`` if no bend is needed, or None."""
        start_direction = start_direction if start_direction is not None else self.start_direction
        end_direction = end_direction if end_direction is not None else self.end_direction

        self.solver.min_link_length = self.min_link_length
        bend = self.solver.get_intersection((start, start_direction), (end, end_direction))
        if bend.is_nan:
            logger.debug(f"No single-bend connection from {start} to {end}")
            return None

        bend = bend.round(self.tolerance.linear_digits)
        ct = self.tolerance.compound
        if bend.distance_to(start) <= ct or bend.distance_to(end) <= ct:
            return [start, end]
        return [start, bend, end]
