"""Capabilities the routing core consumes.

Light runtime-checked interfaces, so callers can plug in any object with
the right methods (a CAD host adapter, a test double, ...).
"""
import logging
from typing import Any, List, Protocol, runtime_checkable

from ..models.geometry import Vector3, Basis3d

logger = logging.getLogger(__name__)


@runtime_checkable
class CollisionDetector(Protocol):
    """Reports what a straight run between two points collides with.

    An empty list means the segment is clear.
    """

    def get_collisions(self, point_a: Vector3, point_b: Vector3, basis: Basis3d,
                       global_start: Vector3, global_end: Vector3,
                       tolerance: int) -> List[Any]: ...


@runtime_checkable
class PointVisualizer(Protocol):
    """Debug display of a point. Must never influence control flow."""

    def show(self, point: Vector3) -> None: ...


@runtime_checkable
class PathSearchAlgorithm(Protocol):
    """One path search for a fixed (step, tolerance, heuristic) combination."""

    def find_path(self, parameters: Any) -> List[Vector3]: ...


class NullPointVisualizer:
    """Visualizer that shows nothing."""

    def show(self, point: Vector3) -> None:
        pass


class LoggingPointVisualizer:
    """Visualizer that writes points to the debug log."""

    def __init__(self, prefix: str = "[POINT]"):
        self.prefix = prefix

    def show(self, point: Vector3) -> None:
        logger.debug(f"{self.prefix} {point}")
