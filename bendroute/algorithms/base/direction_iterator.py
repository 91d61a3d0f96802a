"""Candidate direction enumeration within planes."""
import logging
from typing import Iterable, Iterator, List, Optional

from ...domain.models.geometry import (
    Vector3, Plane, ZERO, AXES, is_parallel_to, round_vector
)

logger = logging.getLogger(__name__)

_PLANE_ANGLE_TOLERANCE = 1e-6


def default_planes(direction: Optional[Vector3], origin: Vector3 = ZERO) -> List[Plane]:
    """Planes spanned by ``direction`` and each global axis not parallel to it.

    A missing or zero direction gives the three global coordinate planes.
    """
    planes: List[Plane] = []
    if direction is None or direction.is_zero():
        candidates = [
            Plane.from_directions(origin, AXES[0], AXES[1]),
            Plane.from_directions(origin, AXES[0], AXES[2]),
            Plane.from_directions(origin, AXES[1], AXES[2]),
        ]
    else:
        candidates = [Plane.from_directions(origin, direction, axis) for axis in AXES]

    for plane in candidates:
        if plane is None:
            continue
        if all(is_parallel_to(p.normal, plane.normal, _PLANE_ANGLE_TOLERANCE) == 0 for p in planes):
            planes.append(plane)
    return planes


class DirectionIterator:
    """Finite, restartable sequence of candidate directions.

    Directions are ordered by plane, then by angle. With a parent direction,
    the parent itself (projected into the plane) comes first, followed by its
    rotations by +a and -a for each allowed angle a. Without a parent, the
    plane's x axis is the reference and both a and 180 - a are used.
    """

    def __init__(self, planes: Iterable[Optional[Plane]], angles: Iterable[int],
                 parent_dir: Optional[Vector3] = None, digits: int = 3,
                 exclude_reverse: bool = False):
        self.planes = [p for p in planes if p is not None and p.is_valid]
        self.angles = sorted(set(angles))
        self.parent_dir = parent_dir if parent_dir is not None and not parent_dir.is_zero() else None
        self.digits = digits
        self.exclude_reverse = exclude_reverse
        self._directions = self._build_directions()
        self._index = -1

    def _build_directions(self) -> List[Vector3]:
        directions: List[Vector3] = []
        seen = set()

        def add(direction: Vector3):
            rounded = round_vector(direction.unit(), self.digits)
            if rounded.is_zero() or rounded in seen:
                return
            if (self.exclude_reverse and self.parent_dir is not None
                    and is_parallel_to(rounded, self.parent_dir, _PLANE_ANGLE_TOLERANCE) == -1):
                return
            seen.add(rounded)
            directions.append(rounded)

        for plane in self.planes:
            if self.parent_dir is not None:
                reference = plane.project(self.parent_dir)
                if reference.is_zero(1e-9):
                    reference = plane.x_axis
                reference = reference.unit()
                add(reference)
                for angle in self.angles:
                    add(plane.rotate(reference, angle))
                    add(plane.rotate(reference, -angle))
            else:
                reference = plane.x_axis
                for angle in self.angles:
                    for base in (angle, 180 - angle):
                        add(plane.rotate(reference, base))
                        add(plane.rotate(reference, -base))

        return directions

    def move_next(self) -> bool:
        if self._index < len(self._directions):
            self._index += 1
        return self._index < len(self._directions)

    @property
    def current(self) -> Optional[Vector3]:
        if 0 <= self._index < len(self._directions):
            return self._directions[self._index]
        return None

    def reset(self) -> None:
        self._index = -1

    def __len__(self) -> int:
        return len(self._directions)

    def __iter__(self) -> Iterator[Vector3]:
        self.reset()
        while self.move_next():
            yield self.current


class DirectionIteratorBuilder:
    """Builds direction iterators with a fixed rounding precision."""

    def __init__(self, digits: int = 3):
        self.digits = digits

    def build(self, planes: Optional[Iterable[Plane]], angles: Iterable[int],
              parent_dir: Optional[Vector3] = None) -> DirectionIterator:
        if planes is None:
            planes = default_planes(parent_dir)
        return DirectionIterator(planes, angles, parent_dir, self.digits)
