"""Domain models."""
from .geometry import (
    Vector3, Point3, Line, Plane, Basis3d, Tolerance,
    ZERO, X_AXIS, Y_AXIS, Z_AXIS, NAN_POINT,
    round_value, round_vector, compound, points_equal,
    angle_between, angle_degrees, is_parallel_to,
    line_line_intersection, line_plane_intersection, rotate_vector
)
from .path import PathNode, SimpleGraph, HeuristicFormula, SearchParameters

__all__ = [
    'Vector3', 'Point3', 'Line', 'Plane', 'Basis3d', 'Tolerance',
    'ZERO', 'X_AXIS', 'Y_AXIS', 'Z_AXIS', 'NAN_POINT',
    'round_value', 'round_vector', 'compound', 'points_equal',
    'angle_between', 'angle_degrees', 'is_parallel_to',
    'line_line_intersection', 'line_plane_intersection', 'rotate_vector',
    'PathNode', 'SimpleGraph', 'HeuristicFormula', 'SearchParameters'
]
