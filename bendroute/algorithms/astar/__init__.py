"""Constrained A* search and its step builder."""
from .node_builder import NodeBuilder
from .interline import InterLinePathFinder
from .astar import AStarPathFinder, AStarAlgorithm

__all__ = ['NodeBuilder', 'InterLinePathFinder', 'AStarPathFinder', 'AStarAlgorithm']
