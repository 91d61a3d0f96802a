"""Axis-aligned box obstacles and a segment collision detector."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ...domain.models.geometry import Vector3, Basis3d, compound
from ...shared.utils.validation_utils import validate_non_negative_number

logger = logging.getLogger(__name__)


class ObstacleType(Enum):
    """Types of obstacles in routing."""
    STRUCTURE = "structure"
    EQUIPMENT = "equipment"
    ROUTE = "route"
    KEEPOUT = "keepout"


@dataclass(frozen=True)
class BoxObstacle:
    """Axis-aligned box between ``min_corner`` and ``max_corner``."""
    min_corner: Vector3
    max_corner: Vector3
    name: str = ""
    obstacle_type: ObstacleType = ObstacleType.STRUCTURE

    def inflated(self, margin: float) -> Tuple[Vector3, Vector3]:
        offset = Vector3(margin, margin, margin)
        return self.min_corner - offset, self.max_corner + offset

    def contains(self, point: Vector3, margin: float = 0.0) -> bool:
        lo, hi = self.inflated(margin)
        return all(l <= c <= h for l, c, h in zip(lo, point, hi))

    def intersects_segment(self, a: Vector3, b: Vector3, margin: float = 0.0) -> bool:
        """Slab test of segment ``a``-``b`` against the box grown by ``margin``."""
        lo, hi = self.inflated(margin)
        t_min, t_max = 0.0, 1.0
        for start, end, low, high in zip(a, b, lo, hi):
            delta = end - start
            if abs(delta) < 1e-12:
                if start < low or start > high:
                    return False
                continue
            t1 = (low - start) / delta
            t2 = (high - start) / delta
            if t1 > t2:
                t1, t2 = t2, t1
            t_min = max(t_min, t1)
            t_max = min(t_max, t2)
            if t_min > t_max:
                return False
        return True


class BoxCollisionDetector:
    """Collision detector over a set of box obstacles.

    ``clearance`` grows every box (duct half-width plus insulation, say).
    Boxes that contain the global start or end point are ignored: they hold
    the equipment the run connects to.
    """

    def __init__(self, obstacles: Optional[List[BoxObstacle]] = None, clearance: float = 0.0):
        validate_non_negative_number(clearance, "clearance")
        self.obstacles: List[BoxObstacle] = list(obstacles or [])
        self.clearance = clearance
        self.checks = 0

    def add_obstacle(self, obstacle: BoxObstacle):
        self.obstacles.append(obstacle)

    def clear_obstacles(self):
        self.obstacles.clear()

    def get_obstacle_count(self) -> Dict[ObstacleType, int]:
        counts = {obstacle_type: 0 for obstacle_type in ObstacleType}
        for obstacle in self.obstacles:
            counts[obstacle.obstacle_type] += 1
        return counts

    def get_collisions(self, point_a: Vector3, point_b: Vector3, basis: Basis3d,
                       global_start: Optional[Vector3], global_end: Optional[Vector3],
                       tolerance: int) -> List[Tuple[BoxObstacle, Tuple[Vector3, Vector3]]]:
        """Obstacles hit by the segment ``point_a``-``point_b``.

        Touching a box face within ``0.1 ** tolerance`` does not count.
        """
        self.checks += 1
        margin = self.clearance - compound(tolerance)
        collisions = []
        for obstacle in self.obstacles:
            if global_start is not None and obstacle.contains(global_start, margin):
                continue
            if global_end is not None and obstacle.contains(global_end, margin):
                continue
            if obstacle.intersects_segment(point_a, point_b, margin):
                collisions.append((obstacle, (point_a, point_b)))

        if collisions:
            logger.debug(f"Segment {point_a} -> {point_b} along {basis.x} "
                         f"collides with {[c[0].name for c in collisions]}")
        return collisions
