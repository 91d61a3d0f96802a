"""Routing algorithms: geometric solvers, A* search, parameter sweep and post-processing."""
from .base import (
    DirectionIterator, DirectionIteratorBuilder, LineIntersectionSolver,
    BoxObstacle, BoxCollisionDetector, ObstacleType
)
from .astar import NodeBuilder, InterLinePathFinder, AStarPathFinder, AStarAlgorithm
from .enumerators import ValueEnumerator, PathFindEnumerator, SearchStatus
from .postprocess import NodesMinimizer, PathRefiner

__all__ = [
    'DirectionIterator', 'DirectionIteratorBuilder', 'LineIntersectionSolver',
    'BoxObstacle', 'BoxCollisionDetector', 'ObstacleType',
    'NodeBuilder', 'InterLinePathFinder', 'AStarPathFinder', 'AStarAlgorithm',
    'ValueEnumerator', 'PathFindEnumerator', 'SearchStatus',
    'NodesMinimizer', 'PathRefiner'
]
