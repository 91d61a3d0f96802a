"""Path model: search nodes, simple point graphs and heuristic formulas."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .geometry import (
    Vector3, Line, Plane, Basis3d, ZERO, is_parallel_to
)


class HeuristicFormula(Enum):
    """Distance-to-goal estimators."""
    MANHATTAN = "manhattan"
    MAX_DXDY = "max_dxdy"
    EUCLIDEAN = "euclidean"
    EUCLIDEAN_NO_SQR = "euclidean_no_sqr"
    DIAGONAL_SHORT_CUT = "diagonal_short_cut"


@dataclass(frozen=True)
class SearchParameters:
    """One point of the (step, tolerance, heuristic) search lattice."""
    step: float
    tolerance: int
    heuristic: int

    def __str__(self) -> str:
        return f"step={self.step} tolerance={self.tolerance} heuristic={self.heuristic}%"


@dataclass
class PathNode:
    """Node for the constrained A* search.

    ``anp`` (angle node parent) is the last point at which the direction
    changed. A node is filled in two phases by ``NodeBuilder``: geometry
    (point, dir, step_vector) and costs (g, h, f, basis, parent, anp).
    """
    point: Vector3
    dir: Vector3 = ZERO
    step_vector: Vector3 = ZERO
    parent: Optional[Vector3] = None
    anp: Optional[Vector3] = None
    g: float = 0.0
    h: float = 0.0
    f: float = 0.0
    basis: Basis3d = field(default_factory=Basis3d.default)
    previous: Optional['PathNode'] = field(default=None, repr=False, compare=False)

    def __lt__(self, other: 'PathNode') -> bool:
        return self.f < other.f

    @staticmethod
    def start(point: Vector3, direction: Vector3, basis: Optional[Basis3d] = None) -> 'PathNode':
        """Search root at ``point`` heading along ``direction``."""
        base = basis if basis is not None and not basis.is_empty else Basis3d.default()
        return PathNode(
            point=point,
            dir=direction.unit(),
            anp=point,
            basis=base.get_basis(direction).with_origin(point)
        )


class SimpleGraph:
    """Ordered sequence of points. Links are derived from consecutive pairs."""

    def __init__(self, nodes=None):
        self.nodes: List[Vector3] = list(nodes or [])

    @property
    def links(self) -> List[Line]:
        return [Line.from_points(a, b) for a, b in zip(self.nodes, self.nodes[1:])]

    @property
    def length(self) -> float:
        return sum(link.length for link in self.links)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def __repr__(self) -> str:
        return f"SimpleGraph({self.nodes!r})"

    def get_planes(self, angle_tolerance: float) -> List[Plane]:
        """Distinct planes through the first node spanned by the graph's nodes.

        The primary axis runs from node 0 to node 1. Every later node whose
        direction from the origin is not parallel to that axis spans a plane;
        a plane is recorded only when its normal is not parallel to one
        already recorded. Fewer than 3 nodes give no plane.
        """
        planes: List[Plane] = []
        if len(self.nodes) < 3:
            return planes

        origin = self.nodes[0]
        x_direction = self.nodes[1] - origin

        for node in self.nodes[1:]:
            y_direction = node - origin
            if is_parallel_to(x_direction, y_direction, angle_tolerance) != 0:
                continue
            plane = Plane.from_directions(origin, x_direction, y_direction)
            if plane is None:
                continue
            if all(is_parallel_to(p.normal, plane.normal, angle_tolerance) == 0 for p in planes):
                planes.append(plane)

        return planes

    def is_plane(self, angle_tolerance: float) -> Tuple[bool, Optional[Plane]]:
        """True if all nodes lie in one plane (or no plane can be built).

        Returns:
            ``(is_plane, plane)``; ``plane`` is None when no plane was recorded
        """
        planes = self.get_planes(angle_tolerance)
        return len(planes) <= 1, planes[0] if planes else None
