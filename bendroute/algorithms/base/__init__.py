"""Base geometric solvers shared by the search and post-processing passes."""
from .direction_iterator import DirectionIterator, DirectionIteratorBuilder, default_planes
from .line_intersection import LineIntersectionSolver
from .obstacles import BoxObstacle, BoxCollisionDetector, ObstacleType

__all__ = [
    'DirectionIterator', 'DirectionIteratorBuilder', 'default_planes',
    'LineIntersectionSolver',
    'BoxObstacle', 'BoxCollisionDetector', 'ObstacleType'
]
