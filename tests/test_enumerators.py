"""Tests for the parameter sweep."""
import threading
from unittest.mock import Mock

import pytest

from bendroute.algorithms.enumerators import PathFindEnumerator, SearchStatus, ValueEnumerator
from bendroute.domain.models.geometry import Vector3, ZERO
from bendroute.domain.models.path import SearchParameters

PATH = [ZERO, Vector3(1, 0, 0)]


def make_enumerator(algorithm, steps=(5, 1), tolerances=(3, 5), heuristics=(50, 100), **kwargs):
    return PathFindEnumerator(ValueEnumerator(steps), ValueEnumerator(heuristics),
                              ValueEnumerator(tolerances), algorithm, **kwargs)


def failing_algorithm():
    algorithm = Mock()
    algorithm.find_path.return_value = []
    return algorithm


class TestValueEnumerator:
    """Restartable cursor."""

    def test_iteration(self):
        enumerator = ValueEnumerator([1, 2])
        assert enumerator.current is None
        assert enumerator.move_next() and enumerator.current == 1
        assert enumerator.move_next() and enumerator.current == 2
        assert not enumerator.move_next()
        assert enumerator.current is None
        assert not enumerator.move_next()

    def test_reset(self):
        enumerator = ValueEnumerator([1, 2])
        enumerator.move_next()
        enumerator.move_next()
        enumerator.reset()
        assert enumerator.move_next() and enumerator.current == 1

    def test_empty(self):
        enumerator = ValueEnumerator([])
        assert not enumerator.move_next()
        assert len(enumerator) == 0


class TestPathFindEnumerator:
    """Lattice order and terminal states."""

    def test_lattice_order(self):
        algorithm = failing_algorithm()
        enumerator = make_enumerator(algorithm)
        while enumerator.move_next():
            pass

        tried = [call.args[0] for call in algorithm.find_path.call_args_list]
        assert tried == [
            SearchParameters(5, 3, 50), SearchParameters(5, 3, 100),
            SearchParameters(5, 5, 50), SearchParameters(5, 5, 100),
            SearchParameters(1, 3, 50), SearchParameters(1, 3, 100),
            SearchParameters(1, 5, 50), SearchParameters(1, 5, 100),
        ]
        assert enumerator.status == SearchStatus.EXHAUSTED
        assert enumerator.iterations == 8
        assert enumerator.current == []

    def test_switches_step_after_inner_exhaustion(self):
        def find_path(parameters):
            return PATH if parameters.step == 1 else []

        algorithm = Mock()
        algorithm.find_path.side_effect = find_path
        enumerator = make_enumerator(algorithm, tolerances=(3,), heuristics=(50, 100))

        results = []
        while enumerator.move_next():
            results.append(enumerator.parameters)

        assert results[-1] == SearchParameters(1, 3, 50)
        assert enumerator.status == SearchStatus.FOUND
        assert enumerator.current == PATH
        assert enumerator.parameters == SearchParameters(1, 3, 50)

    def test_found_stops_immediately(self):
        algorithm = Mock()
        algorithm.find_path.return_value = PATH
        enumerator = make_enumerator(algorithm)

        assert enumerator.move_next()
        assert not enumerator.move_next()
        assert enumerator.status == SearchStatus.FOUND
        assert algorithm.find_path.call_count == 1

    def test_empty_result_keeps_previous_path(self):
        algorithm = Mock()
        algorithm.find_path.side_effect = [[], PATH]
        enumerator = make_enumerator(algorithm)
        enumerator.move_next()
        assert enumerator.current == []
        enumerator.move_next()
        assert enumerator.current == PATH

    def test_deadline(self, fake_clock):
        algorithm = failing_algorithm()
        enumerator = make_enumerator(algorithm, deadline_ms=1000, clock=fake_clock)

        assert enumerator.move_next()
        fake_clock.advance(2.0)
        assert not enumerator.move_next()
        assert enumerator.status == SearchStatus.TIMEOUT
        assert algorithm.find_path.call_count == 1

    def test_deadline_starts_at_first_use(self, fake_clock):
        enumerator = make_enumerator(failing_algorithm(), deadline_ms=1000, clock=fake_clock)
        fake_clock.advance(10.0)
        assert enumerator.move_next()
        assert enumerator.elapsed_ms == 0.0

    def test_cancellation(self):
        cancel = threading.Event()
        algorithm = failing_algorithm()
        enumerator = make_enumerator(algorithm, cancel_event=cancel)

        assert enumerator.move_next()
        cancel.set()
        assert not enumerator.move_next()
        assert enumerator.status == SearchStatus.CANCELLED
        assert enumerator.status.is_terminal

    def test_single_combination_exhausts(self):
        enumerator = make_enumerator(failing_algorithm(), steps=(1,), tolerances=(3,),
                                     heuristics=(100,))
        assert enumerator.move_next()
        assert not enumerator.move_next()
        assert enumerator.status == SearchStatus.EXHAUSTED
        assert enumerator.iterations == 1

    def test_reset(self):
        algorithm = Mock()
        algorithm.find_path.return_value = PATH
        enumerator = make_enumerator(algorithm)
        enumerator.move_next()
        enumerator.move_next()

        enumerator.reset()
        assert enumerator.status == SearchStatus.RUNNING
        assert enumerator.current == []
        assert enumerator.iterations == 0
        assert enumerator.parameters is None
        assert enumerator.move_next()
        assert enumerator.parameters == SearchParameters(5, 3, 50)

    def test_context_manager_closes(self):
        algorithm = failing_algorithm()
        with make_enumerator(algorithm) as enumerator:
            assert enumerator.move_next()
        assert not enumerator.move_next()
        assert algorithm.find_path.call_count == 1

    @pytest.mark.parametrize("status,terminal", [
        (SearchStatus.RUNNING, False),
        (SearchStatus.FOUND, True),
        (SearchStatus.EXHAUSTED, True),
    ])
    def test_terminal_states(self, status, terminal):
        assert status.is_terminal == terminal
