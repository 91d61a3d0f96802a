"""Test configuration and fixtures for BendRoute."""
import pytest
from unittest.mock import Mock

from bendroute.domain.models.geometry import Vector3, Tolerance, ZERO, X_AXIS, Y_AXIS, Z_AXIS
from bendroute.domain.models.path import HeuristicFormula
from bendroute.algorithms.astar.node_builder import NodeBuilder
from bendroute.algorithms.base.obstacles import BoxObstacle, BoxCollisionDetector
from bendroute.shared.configuration.settings import (
    ApplicationSettings, RoutingSettings, ToleranceSettings
)


class FakeClock:
    """Manually advanced monotonic clock, in seconds."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def advance(self, seconds: float):
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def tolerance():
    return Tolerance()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def routing_settings():
    """Single-combination sweep with right-angle bends."""
    return RoutingSettings(steps=[0.5], tolerances=[3], heuristics=[100], angles=[90])


@pytest.fixture
def app_settings(routing_settings):
    return ApplicationSettings(routing=routing_settings, tolerance=ToleranceSettings())


@pytest.fixture
def node_builder():
    """Builder heading for (2, 0, 0) with half-unit steps."""
    return NodeBuilder(HeuristicFormula.MANHATTAN, ZERO, Vector3(2, 0, 0), 0.5,
                       [X_AXIS, Y_AXIS, Z_AXIS], punish_change_direction=True)


@pytest.fixture
def wall_detector():
    """Thin wall across the X axis between x=4 and x=6."""
    wall = BoxObstacle(Vector3(4, -1, -1), Vector3(6, 1, 1), name="wall")
    return BoxCollisionDetector([wall])


@pytest.fixture
def blocking_detector():
    """Detector that reports a collision for every segment."""
    detector = Mock()
    detector.get_collisions.return_value = [("obstacle", None)]
    return detector


@pytest.fixture
def clear_detector():
    """Detector that never reports a collision."""
    detector = Mock()
    detector.get_collisions.return_value = []
    return detector
