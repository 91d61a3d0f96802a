"""Straight-run compaction of routed paths."""
import logging
from typing import List, Optional, Sequence

from ...domain.models.geometry import Vector3, ZERO
from ...domain.models.path import PathNode

logger = logging.getLogger(__name__)


class PathRefiner:
    """Drops vertices whose incoming direction repeats the tracked direction."""

    def __init__(self, digits: int = 5):
        self.digits = digits

    def refine(self, path: Optional[Sequence[PathNode]]) -> List[Vector3]:
        """Minimal vertex list of a node path, using each node's arrival direction."""
        if not path:
            return []
        return self._refine([node.point for node in path], [node.dir for node in path])

    def refine_points(self, points: Optional[Sequence[Vector3]]) -> List[Vector3]:
        """Minimal vertex list of a polyline; directions come from segment tangents."""
        if not points:
            return []
        distinct = [points[0]]
        for point in points[1:]:
            if not (point - distinct[-1]).round(self.digits).is_zero():
                distinct.append(point)
        if len(distinct) > 1:
            distinct[-1] = points[-1]
        directions = [ZERO] + [(b - a).unit() for a, b in zip(distinct, distinct[1:])]
        return self._refine(distinct, directions)

    def _refine(self, points: List[Vector3], directions: List[Vector3]) -> List[Vector3]:
        if len(points) == 1:
            return [points[0]]

        refined = [points[0]]
        base_point = points[0]
        base_dir = directions[0]

        for i in range(1, len(points)):
            current_dir = directions[i]
            if base_dir.is_zero() or current_dir.round(self.digits) != base_dir.round(self.digits):
                if i != 1:
                    refined.append(base_point)
                base_dir = current_dir
            base_point = points[i]

        refined.append(base_point)

        if len(points) > len(refined):
            logger.debug(f"Path refined from {len(points)} to {len(refined)} points")
        return refined
