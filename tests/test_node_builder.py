"""Tests for step construction and node costing."""
import pytest

from bendroute.algorithms.astar.node_builder import NodeBuilder
from bendroute.domain.models.geometry import Vector3, ZERO, X_AXIS, Y_AXIS, Z_AXIS
from bendroute.domain.models.path import PathNode, HeuristicFormula
from bendroute.domain.services.heuristics import calculate_heuristic
from bendroute.shared.exceptions import ValidationError


class TestHeuristics:
    """Distance estimators."""

    @pytest.mark.parametrize("formula,expected", [
        (HeuristicFormula.MANHATTAN, 7.0),
        (HeuristicFormula.MAX_DXDY, 4.0),
        (HeuristicFormula.EUCLIDEAN, 5.0),
        (HeuristicFormula.EUCLIDEAN_NO_SQR, 25.0),
    ])
    def test_formulas(self, formula, expected):
        assert calculate_heuristic(formula, ZERO, Vector3(3, 4, 0), 1.0) == pytest.approx(expected)

    def test_diagonal_short_cut_is_straight_distance(self):
        value = calculate_heuristic(HeuristicFormula.DIAGONAL_SHORT_CUT, ZERO, Vector3(3, 4, 0), 1.0)
        assert value == pytest.approx(5.0)
        value = calculate_heuristic(HeuristicFormula.DIAGONAL_SHORT_CUT, ZERO, Vector3(1, 1, 1), 1.0)
        assert value == pytest.approx(3 ** 0.5)

    @pytest.mark.parametrize("formula", [HeuristicFormula.MAX_DXDY, HeuristicFormula.EUCLIDEAN_NO_SQR])
    def test_planar_formulas_ignore_z(self, formula):
        flat = calculate_heuristic(formula, ZERO, Vector3(3, 4, 0), 1.0)
        assert calculate_heuristic(formula, ZERO, Vector3(3, 4, 10), 1.0) == flat

    @pytest.mark.parametrize("formula,expected", [
        (HeuristicFormula.EUCLIDEAN, 1.0),
        (HeuristicFormula.EUCLIDEAN_NO_SQR, 1.0),
        (HeuristicFormula.DIAGONAL_SHORT_CUT, 1.25 ** 0.5),
    ])
    def test_truncation(self, formula, expected):
        assert calculate_heuristic(formula, ZERO, Vector3(1, 0.5, 0), 1.0) == pytest.approx(expected)

    def test_weight(self):
        assert calculate_heuristic(HeuristicFormula.MANHATTAN, ZERO, Vector3(1, 1, 0), 0.5) == 1.0


class TestNodeBuilderGeometry:
    """Geometry phase."""

    def test_step_lands_on_goal_plane(self, node_builder):
        node = node_builder.build(PathNode.start(ZERO, X_AXIS), X_AXIS)
        assert node.point == Vector3(0.5, 0, 0)
        assert node.step_vector == Vector3(0.5, 0, 0)
        assert node_builder.node is node

    def test_step_is_shrunk_to_divide_distance(self, node_builder):
        node_builder.with_step(0.3)
        node = node_builder.build(PathNode.start(ZERO, X_AXIS), X_AXIS)
        # 2 / ceil(2 / 0.3) = 2 / 7
        assert node.step_vector.x == pytest.approx(0.28571)

    def test_step_without_goal_plane_hit(self, node_builder):
        node = node_builder.build(PathNode.start(ZERO, X_AXIS), Y_AXIS)
        assert node.point == Vector3(0, 0.5, 0)

    def test_nearest_goal_plane_hit(self):
        builder = NodeBuilder(HeuristicFormula.MANHATTAN, ZERO, Vector3(2, 2, 0), 0.5,
                              [X_AXIS, Y_AXIS, Z_AXIS])
        node = builder.build(PathNode.start(ZERO, X_AXIS), Vector3(1, 2, 0).unit())
        # The y=2 plane is hit at (1, 2, 0), closer than the x=2 plane.
        assert node.point == Vector3(0.2, 0.4, 0)

    def test_coordinates_keep_five_digits(self, node_builder):
        node_builder.with_step(0.123456)
        node = node_builder.build(PathNode.start(ZERO, X_AXIS), Vector3(1, 1, 0).unit())
        # 2 / 23 along both axes after 23 equal sub-steps to the x=2 plane
        assert node.point == Vector3(0.08696, 0.08696, 0)

    def test_non_positive_step_is_rejected(self):
        with pytest.raises(ValidationError):
            NodeBuilder(HeuristicFormula.MANHATTAN, ZERO, Vector3(2, 0, 0), 0,
                        [X_AXIS, Y_AXIS, Z_AXIS])

    def test_step_vector_reused_along_same_direction(self, node_builder):
        first = node_builder.build(PathNode.start(ZERO, X_AXIS), X_AXIS)
        node_builder.build_with_parameters(first)
        node_builder.with_step(1.0)
        second = node_builder.build(first, X_AXIS)
        assert second.step_vector == first.step_vector
        assert second.point == Vector3(1.0, 0, 0)

    def test_too_short_step_is_rejected(self, node_builder):
        node_builder.with_step(0.001)
        assert node_builder.build(PathNode.start(ZERO, X_AXIS), Y_AXIS) is None

    def test_parent_is_not_modified(self, node_builder):
        parent = PathNode.start(ZERO, X_AXIS)
        node_builder.build(parent, Y_AXIS)
        assert parent.point == ZERO
        assert parent.dir == X_AXIS


class TestNodeBuilderCosts:
    """Costing phase."""

    def test_first_step_costs(self, node_builder):
        start = PathNode.start(ZERO, X_AXIS)
        node = node_builder.build_with_parameters(node_builder.build(start, X_AXIS))
        assert node.parent == ZERO
        assert node.anp == ZERO
        # Leaving the start point counts as a direction change: 0.5 * 200 * 0.01.
        assert node.g == pytest.approx(1.0)
        assert node.h == pytest.approx(1.5)
        assert node.f == pytest.approx(2.5)
        assert node.basis.origin == node.point

    def test_straight_run_keeps_anp(self, node_builder):
        start = PathNode.start(ZERO, X_AXIS)
        first = node_builder.build_with_parameters(node_builder.build(start, X_AXIS))
        second = node_builder.build_with_parameters(node_builder.build(first, X_AXIS))
        assert second.anp == ZERO
        assert second.g == pytest.approx(1.5)

    def test_direction_change_is_punished(self, node_builder):
        start = PathNode.start(ZERO, X_AXIS)
        first = node_builder.build_with_parameters(node_builder.build(start, X_AXIS))
        turned = node_builder.build_with_parameters(node_builder.build(first, Y_AXIS))
        assert turned.point == Vector3(0.5, 0.5, 0)
        assert turned.anp == Vector3(0.5, 0, 0)
        assert turned.g == pytest.approx(2.0)
        assert turned.basis.x == Y_AXIS

    def test_no_punishment(self):
        builder = NodeBuilder(HeuristicFormula.MANHATTAN, ZERO, Vector3(2, 0, 0), 0.5,
                              [X_AXIS, Y_AXIS, Z_AXIS], punish_change_direction=False)
        node = builder.build_with_parameters(builder.build(PathNode.start(ZERO, X_AXIS), X_AXIS))
        assert node.g == pytest.approx(0.5)

    def test_heuristic_weight(self, node_builder):
        node_builder.heuristic = 50
        node = node_builder.build_with_parameters(
            node_builder.build(PathNode.start(ZERO, X_AXIS), X_AXIS))
        assert node.h == pytest.approx(0.75)

    def test_tolerance_properties(self, node_builder):
        assert node_builder.tolerance == 5
        assert node_builder.c_tolerance == 2
        node_builder.tolerance = 4
        node_builder.c_tolerance = 3
        assert node_builder.tolerance == 4
        assert node_builder.c_tolerance == 3


class TestPointVisualizer:
    """Step targets are shown without affecting the result."""

    def test_targets_are_shown(self, node_builder):
        shown = []

        class Recorder:
            def show(self, point):
                shown.append(point)

        node_builder.point_visualizer = Recorder()
        node = node_builder.build(PathNode.start(ZERO, X_AXIS), X_AXIS)
        assert shown == [Vector3(2, 0, 0)]
        assert node.point == Vector3(0.5, 0, 0)
