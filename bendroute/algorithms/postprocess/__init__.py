"""Post-processing passes applied to found paths."""
from .nodes_minimizer import NodesMinimizer
from .path_refiner import PathRefiner

__all__ = ['NodesMinimizer', 'PathRefiner']
