"""Tests for candidate direction enumeration."""
import pytest

from bendroute.algorithms.base.direction_iterator import (
    DirectionIterator, DirectionIteratorBuilder, default_planes
)
from bendroute.domain.models.geometry import Vector3, Plane, ZERO, X_AXIS, Y_AXIS, Z_AXIS


@pytest.fixture
def xy_plane():
    return Plane(ZERO, Z_AXIS, X_AXIS)


class TestDefaultPlanes:
    """Planes built around a direction."""

    def test_planes_around_axis(self):
        planes = default_planes(X_AXIS)
        assert len(planes) == 2
        assert all(plane.contains(X_AXIS) for plane in planes)

    def test_planes_without_direction(self):
        assert len(default_planes(None)) == 3
        assert len(default_planes(ZERO)) == 3


class TestDirectionIterator:
    """Ordering, deduplication and restart of candidate directions."""

    def test_parent_direction_comes_first(self):
        iterator = DirectionIterator(default_planes(X_AXIS), [90], X_AXIS)
        directions = list(iterator)
        assert directions[0] == X_AXIS
        assert len(directions) == 5
        assert set(directions) == {X_AXIS, Y_AXIS, -Y_AXIS, Z_AXIS, -Z_AXIS}

    def test_without_parent_uses_plane_axis(self, xy_plane):
        directions = list(DirectionIterator([xy_plane], [90]))
        assert directions == [Y_AXIS, -Y_AXIS]

    def test_without_parent_includes_supplementary_angle(self, xy_plane):
        directions = list(DirectionIterator([xy_plane], [45]))
        assert len(directions) == 4
        assert Vector3(0.707, 0.707, 0) in directions
        assert Vector3(-0.707, -0.707, 0) in directions

    def test_exclude_reverse(self, xy_plane):
        with_reverse = list(DirectionIterator([xy_plane], [90, 180], X_AXIS))
        without_reverse = list(DirectionIterator([xy_plane], [90, 180], X_AXIS, exclude_reverse=True))
        assert -X_AXIS in with_reverse
        assert -X_AXIS not in without_reverse

    def test_move_next_and_reset(self, xy_plane):
        iterator = DirectionIterator([xy_plane], [90], X_AXIS)
        assert iterator.current is None
        assert iterator.move_next()
        first = iterator.current
        while iterator.move_next():
            pass
        assert iterator.current is None
        assert not iterator.move_next()

        iterator.reset()
        assert iterator.move_next()
        assert iterator.current == first

    def test_parent_outside_plane_is_projected(self, xy_plane):
        iterator = DirectionIterator([xy_plane], [90], Vector3(1, 0, 1))
        assert iterator.move_next()
        assert iterator.current == X_AXIS

    def test_invalid_planes_are_skipped(self):
        assert len(DirectionIterator([None], [90], X_AXIS)) == 0


class TestDirectionIteratorBuilder:
    """Builder defaults."""

    def test_builds_default_planes(self):
        builder = DirectionIteratorBuilder(digits=3)
        iterator = builder.build(None, [90], Y_AXIS)
        assert len(iterator) == 5
        assert iterator.digits == 3
