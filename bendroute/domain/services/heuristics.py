"""Distance-to-goal heuristics for the path search."""
from abc import ABC, abstractmethod
from typing import Dict

from ..models.geometry import Vector3
from ..models.path import HeuristicFormula


class HeuristicFunction(ABC):
    """Abstract base class for heuristic functions.

    Subclasses with ``truncate`` set drop the fractional part of the weighted
    estimate.
    """

    truncate = False

    @abstractmethod
    def calculate(self, point: Vector3, goal: Vector3) -> float:
        """Calculate the raw heuristic distance between two points."""
        pass


class ManhattanHeuristic(HeuristicFunction):
    """Sum of absolute coordinate differences."""

    def calculate(self, point: Vector3, goal: Vector3) -> float:
        return abs(point.x - goal.x) + abs(point.y - goal.y) + abs(point.z - goal.z)


class MaxDXDYHeuristic(HeuristicFunction):
    """Larger of the X and Y differences; Z is ignored."""

    def calculate(self, point: Vector3, goal: Vector3) -> float:
        return max(abs(point.x - goal.x), abs(point.y - goal.y))


class EuclideanHeuristic(HeuristicFunction):
    """Straight-line distance."""

    truncate = True

    def calculate(self, point: Vector3, goal: Vector3) -> float:
        return point.distance_to(goal)


class EuclideanNoSqrHeuristic(HeuristicFunction):
    """Squared distance in the XY plane."""

    truncate = True

    def calculate(self, point: Vector3, goal: Vector3) -> float:
        dx = point.x - goal.x
        dy = point.y - goal.y
        return dx * dx + dy * dy


class DiagonalShortCutHeuristic(HeuristicFunction):
    """Untruncated straight-line distance."""

    def calculate(self, point: Vector3, goal: Vector3) -> float:
        return point.distance_to(goal)


HEURISTICS: Dict[HeuristicFormula, HeuristicFunction] = {
    HeuristicFormula.MANHATTAN: ManhattanHeuristic(),
    HeuristicFormula.MAX_DXDY: MaxDXDYHeuristic(),
    HeuristicFormula.EUCLIDEAN: EuclideanHeuristic(),
    HeuristicFormula.EUCLIDEAN_NO_SQR: EuclideanNoSqrHeuristic(),
    HeuristicFormula.DIAGONAL_SHORT_CUT: DiagonalShortCutHeuristic(),
}


def calculate_heuristic(formula: HeuristicFormula, point: Vector3, goal: Vector3,
                        weight: float) -> float:
    """Weighted heuristic estimate from ``point`` to ``goal``."""
    heuristic = HEURISTICS[formula]
    value = weight * heuristic.calculate(point, goal)
    return float(int(value)) if heuristic.truncate else value
