"""
bendroute - angle-constrained 3D path routing
"""
import platform
import sys

import numpy as np
import psutil

# Version information
__version__ = "0.1.0"
__license__ = "MIT"
__description__ = "Obstacle-aware routing of duct and pipe runs with a fixed set of bend angles"

from .domain.models import Vector3, Basis3d, Plane, Line, Tolerance, SimpleGraph, SearchParameters
from .algorithms import (
    LineIntersectionSolver, NodeBuilder, AStarPathFinder, AStarAlgorithm,
    PathFindEnumerator, ValueEnumerator, SearchStatus,
    NodesMinimizer, PathRefiner, BoxObstacle, BoxCollisionDetector
)
from .application.services import RoutingOrchestrator, RoutingResult
from .shared.configuration import (
    ApplicationSettings, RoutingSettings, ToleranceSettings, LoggingSettings,
    ConfigManager, get_config, initialize_config
)
from .shared.exceptions import (
    BendRouteException, ConfigurationError, ValidationError, RoutingError,
    GeometryError, SearchExhaustedError, SearchTimeoutError
)


def get_system_info() -> dict:
    """
    Collect interpreter and host details for bug reports.

    Returns:
        dict: Versions, CPU count and memory figures
    """
    memory = psutil.virtual_memory()
    return {
        'bendroute_version': __version__,
        'python_version': sys.version.split()[0],
        'platform': platform.platform(),
        'numpy_version': np.__version__,
        'psutil_version': psutil.__version__,
        'cpu_count': psutil.cpu_count(logical=True),
        'memory_total': memory.total,
        'memory_available': memory.available,
    }


def print_system_info():
    """Print system information for debugging."""
    info = get_system_info()
    print("BendRoute System Information")
    print("=" * 40)
    print(f"Version: {info['bendroute_version']}")
    print(f"Python: {info['python_version']} on {info['platform']}")
    print(f"NumPy: {info['numpy_version']}, psutil: {info['psutil_version']}")
    print(f"CPUs: {info['cpu_count']}")
    print(f"Memory: {info['memory_total'] / (1024**3):.1f} GB total, "
          f"{info['memory_available'] / (1024**3):.1f} GB available")
    print("=" * 40)


__all__ = [
    # Version info
    '__version__',
    '__license__',

    # Geometry and path model
    'Vector3', 'Basis3d', 'Plane', 'Line', 'Tolerance', 'SimpleGraph', 'SearchParameters',

    # Algorithms
    'LineIntersectionSolver', 'NodeBuilder', 'AStarPathFinder', 'AStarAlgorithm',
    'PathFindEnumerator', 'ValueEnumerator', 'SearchStatus',
    'NodesMinimizer', 'PathRefiner', 'BoxObstacle', 'BoxCollisionDetector',

    # Application
    'RoutingOrchestrator', 'RoutingResult',

    # Configuration
    'ApplicationSettings', 'RoutingSettings', 'ToleranceSettings', 'LoggingSettings',
    'ConfigManager', 'get_config', 'initialize_config',

    # Errors
    'BendRouteException', 'ConfigurationError', 'ValidationError', 'RoutingError',
    'GeometryError', 'SearchExhaustedError', 'SearchTimeoutError',

    # Utility functions
    'get_system_info',
    'print_system_info',
]
