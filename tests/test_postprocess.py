"""Tests for bend reduction and straight-run compaction."""
import pytest

from bendroute.algorithms.postprocess.nodes_minimizer import NodesMinimizer
from bendroute.algorithms.postprocess.path_refiner import PathRefiner
from bendroute.domain.models.geometry import Vector3, ZERO, X_AXIS, Y_AXIS
from bendroute.domain.models.path import PathNode, SimpleGraph

STAIRCASE = [
    Vector3(0, 0, 0), Vector3(5, 0, 0), Vector3(5, 5, 0), Vector3(10, 5, 0), Vector3(10, 10, 0)
]
TWISTED = [Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(1, 1, 0), Vector3(1, 1, 1)]


class TestSimpleGraph:
    """Planarity of point groups."""

    def test_coplanar(self):
        is_plane, plane = SimpleGraph(STAIRCASE[:4]).is_plane(0.05)
        assert is_plane
        assert plane.normal == Vector3(0, 0, 1)

    def test_not_coplanar(self):
        is_plane, _ = SimpleGraph(TWISTED).is_plane(0.05)
        assert not is_plane
        assert len(SimpleGraph(TWISTED).get_planes(0.05)) == 2

    def test_collinear_has_no_plane(self):
        graph = SimpleGraph([ZERO, Vector3(1, 0, 0), Vector3(2, 0, 0), Vector3(3, 0, 0)])
        assert graph.is_plane(0.05) == (True, None)

    def test_three_points_span_one_plane(self):
        nodes = [ZERO, Vector3(2, 0, 0), Vector3(1, 3, 1)]
        is_plane, plane = SimpleGraph(nodes).is_plane(0.05)
        assert is_plane
        for direction in (nodes[1] - nodes[0], nodes[2] - nodes[0]):
            assert plane.normal.dot(direction) == pytest.approx(0, abs=1e-9)

    @pytest.mark.parametrize("nodes", [[], [ZERO], [ZERO, Vector3(1, 1, 0)]])
    def test_short_graph_has_no_plane(self, nodes):
        assert SimpleGraph(nodes).is_plane(0.05) == (True, None)

    def test_links_and_length(self):
        graph = SimpleGraph(STAIRCASE)
        assert len(graph.links) == 4
        assert graph.length == pytest.approx(20)
        assert list(graph) == STAIRCASE


class TestNodesMinimizer:
    """Sliding 4-node window reduction."""

    def test_staircase_reduces_to_one_bend(self):
        minimizer = NodesMinimizer([90])
        reduced = minimizer.reduce_nodes(SimpleGraph(STAIRCASE), X_AXIS, Y_AXIS)
        assert reduced.nodes == [ZERO, Vector3(10, 0, 0), Vector3(10, 10, 0)]

    def test_endpoints_never_change(self):
        reduced = NodesMinimizer([90]).reduce_nodes(SimpleGraph(STAIRCASE))
        assert reduced.nodes[0] == STAIRCASE[0]
        assert reduced.nodes[-1] == STAIRCASE[-1]
        assert len(reduced) < len(STAIRCASE)

    def test_idempotent(self):
        minimizer = NodesMinimizer([90])
        once = minimizer.reduce_nodes(SimpleGraph(STAIRCASE), X_AXIS, Y_AXIS)
        twice = minimizer.reduce_nodes(once, X_AXIS, Y_AXIS)
        assert twice.nodes == once.nodes

    def test_input_graph_is_untouched(self):
        graph = SimpleGraph(STAIRCASE)
        NodesMinimizer([90]).reduce_nodes(graph, X_AXIS, Y_AXIS)
        assert graph.nodes == STAIRCASE

    def test_non_coplanar_window_is_kept(self):
        reduced = NodesMinimizer([90]).reduce_nodes(SimpleGraph(TWISTED))
        assert reduced.nodes == TWISTED

    def test_short_graph_is_kept(self):
        nodes = [ZERO, Vector3(1, 0, 0), Vector3(1, 1, 0)]
        assert NodesMinimizer([90]).reduce_nodes(SimpleGraph(nodes)).nodes == nodes

    def test_max_link_length(self):
        minimizer = NodesMinimizer([90], max_link_length=5)
        reduced = minimizer.reduce_nodes(SimpleGraph(STAIRCASE), X_AXIS, Y_AXIS)
        assert reduced.nodes == STAIRCASE

    def test_min_link_length(self):
        minimizer = NodesMinimizer([90], min_link_length=10)
        reduced = minimizer.reduce_nodes(SimpleGraph(STAIRCASE), X_AXIS, Y_AXIS)
        assert reduced.nodes == STAIRCASE

    def test_collisions_prevent_reduction(self, blocking_detector):
        minimizer = NodesMinimizer([90], collision_detector=blocking_detector)
        reduced = minimizer.reduce_nodes(SimpleGraph(STAIRCASE), X_AXIS, Y_AXIS)
        assert reduced.nodes == STAIRCASE
        assert blocking_detector.get_collisions.called


class TestPathRefiner:
    """Collinear vertex removal."""

    def test_collinear_run(self):
        points = [ZERO, Vector3(1, 0, 0), Vector3(2, 0, 0), Vector3(3, 0, 0)]
        assert PathRefiner().refine_points(points) == [ZERO, Vector3(3, 0, 0)]

    def test_keeps_bends(self):
        points = [ZERO, Vector3(1, 0, 0), Vector3(2, 0, 0), Vector3(2, 1, 0), Vector3(2, 2, 0)]
        assert PathRefiner().refine_points(points) == [ZERO, Vector3(2, 0, 0), Vector3(2, 2, 0)]

    def test_idempotent(self):
        points = [ZERO, Vector3(1, 0, 0), Vector3(2, 0, 0), Vector3(2, 1, 0)]
        refiner = PathRefiner()
        once = refiner.refine_points(points)
        assert refiner.refine_points(once) == once

    def test_refine_nodes(self):
        nodes = [
            PathNode(ZERO, X_AXIS),
            PathNode(Vector3(1, 0, 0), X_AXIS),
            PathNode(Vector3(2, 0, 0), X_AXIS),
            PathNode(Vector3(2, 1, 0), Y_AXIS),
        ]
        assert PathRefiner().refine(nodes) == [ZERO, Vector3(2, 0, 0), Vector3(2, 1, 0)]

    def test_repeated_points_are_dropped(self):
        points = [ZERO, ZERO, Vector3(1, 0, 0), Vector3(2, 0, 0), Vector3(2, 0, 0)]
        assert PathRefiner().refine_points(points) == [ZERO, Vector3(2, 0, 0)]

    def test_repeated_corner_is_kept_once(self):
        points = [ZERO, Vector3(1, 0, 0), Vector3(1, 0, 0), Vector3(1, 1, 0)]
        assert PathRefiner().refine_points(points) == [ZERO, Vector3(1, 0, 0), Vector3(1, 1, 0)]

    def test_degenerate_inputs(self):
        refiner = PathRefiner()
        assert refiner.refine([]) == []
        assert refiner.refine_points(None) == []
        assert refiner.refine_points([ZERO]) == [ZERO]
