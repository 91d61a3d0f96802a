"""Domain services and consumed capabilities."""
from .heuristics import (
    HeuristicFunction, ManhattanHeuristic, MaxDXDYHeuristic, EuclideanHeuristic,
    EuclideanNoSqrHeuristic, DiagonalShortCutHeuristic, calculate_heuristic
)
from .capabilities import (
    CollisionDetector, PointVisualizer, PathSearchAlgorithm,
    NullPointVisualizer, LoggingPointVisualizer
)

__all__ = [
    'HeuristicFunction', 'ManhattanHeuristic', 'MaxDXDYHeuristic', 'EuclideanHeuristic',
    'EuclideanNoSqrHeuristic', 'DiagonalShortCutHeuristic', 'calculate_heuristic',
    'CollisionDetector', 'PointVisualizer', 'PathSearchAlgorithm',
    'NullPointVisualizer', 'LoggingPointVisualizer'
]
