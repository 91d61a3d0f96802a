"""Parameter sweep over (step, tolerance, heuristic) search configurations."""
import logging
import threading
import time
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from ..domain.models.geometry import Vector3
from ..domain.models.path import SearchParameters
from ..domain.services.capabilities import PathSearchAlgorithm
from ..shared.utils.performance_utils import timing_context

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ValueEnumerator(Generic[T]):
    """Restartable cursor over a fixed list of values."""

    def __init__(self, values: Sequence[T]):
        self.values: List[T] = list(values)
        self._index = -1

    def move_next(self) -> bool:
        if self._index < len(self.values):
            self._index += 1
        return self._index < len(self.values)

    @property
    def current(self) -> Optional[T]:
        if 0 <= self._index < len(self.values):
            return self.values[self._index]
        return None

    def reset(self) -> None:
        self._index = -1

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"ValueEnumerator({self.values!r}, current={self.current!r})"


class SearchStatus(Enum):
    """State of a parameter sweep."""
    RUNNING = "running"
    FOUND = "found"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self is not SearchStatus.RUNNING


class PathFindEnumerator:
    """Retries a path search over a lattice of search parameters.

    Heuristic weight is the innermost dimension, tolerance the middle one and
    step size the outermost. Each ``move_next()`` runs the search once for the
    next combination and returns True; it returns False once a path has been
    found, the deadline passed, the cancel event was set, or every
    combination was tried. ``status`` tells which.

    Example:
        >>> with PathFindEnumerator(steps, heuristics, tolerances, algorithm) as sweep:
        ...     while sweep.move_next():
        ...         pass
        ...     path = sweep.current
    """

    def __init__(self, step_enumerator: ValueEnumerator,
                 heuristic_enumerator: ValueEnumerator,
                 tolerance_enumerator: ValueEnumerator,
                 algorithm: PathSearchAlgorithm,
                 deadline_ms: float = 200000,
                 cancel_event: Optional[threading.Event] = None,
                 clock: Callable[[], float] = time.monotonic):
        """Initialize enumerator.

        Args:
            step_enumerator: Step sizes, outermost
            heuristic_enumerator: Heuristic weights in percent, innermost
            tolerance_enumerator: Point rounding digits, middle
            algorithm: Search run once per combination
            deadline_ms: Wall-clock budget measured from the first ``move_next()``
            cancel_event: External cancellation signal
            clock: Monotonic clock in seconds
        """
        self.step_enumerator = step_enumerator
        self.heuristic_enumerator = heuristic_enumerator
        self.tolerance_enumerator = tolerance_enumerator
        self.algorithm = algorithm
        self.deadline_ms = deadline_ms
        self.cancel_event = cancel_event
        self.clock = clock

        self._path: List[Vector3] = []
        self._status = SearchStatus.RUNNING
        self._iterations = 0
        self._started_at: Optional[float] = None
        self._closed = False
        self.reset()

    @property
    def current(self) -> List[Vector3]:
        """Path found so far; empty until a search succeeds."""
        return self._path

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def iterations(self) -> int:
        """Number of searches run."""
        return self._iterations

    @property
    def parameters(self) -> Optional[SearchParameters]:
        """Current (step, tolerance, heuristic) combination, None before the first search."""
        step = self.step_enumerator.current
        tolerance = self.tolerance_enumerator.current
        heuristic = self.heuristic_enumerator.current
        if step is None or tolerance is None or heuristic is None:
            return None
        return SearchParameters(step, tolerance, heuristic)

    @property
    def elapsed_ms(self) -> float:
        if self._started_at is None:
            return 0.0
        return (self.clock() - self._started_at) * 1000.0

    def move_next(self) -> bool:
        if self._closed:
            return False
        if self._started_at is None:
            self._started_at = self.clock()

        if self._path:
            self._status = SearchStatus.FOUND
            logger.info(f"Path was found, {len(self._path)} points")
            logger.info(f"Found with {self.parameters}")
            self._log_totals()
            return False

        if self.elapsed_ms >= self.deadline_ms:
            self._status = SearchStatus.TIMEOUT
            logger.info("Path search time is up")
            self._log_totals()
            return False

        if self.cancel_event is not None and self.cancel_event.is_set():
            self._status = SearchStatus.CANCELLED
            logger.info("Path search was cancelled")
            self._log_totals()
            return False

        if not self._advance():
            self._status = SearchStatus.EXHAUSTED
            logger.error("No available path exists")
            self._log_totals()
            return False

        self._iterations += 1
        parameters = self.parameters
        with timing_context(f"Iteration {self._iterations} ({parameters}) search time", logger,
                            logging.INFO):
            path = self.algorithm.find_path(parameters)
        if path:
            self._path = list(path)
        return True

    def _advance(self) -> bool:
        if self.step_enumerator.current is None or self.tolerance_enumerator.current is None:
            return False
        if self.heuristic_enumerator.move_next():
            return True

        if self.tolerance_enumerator.move_next():
            self.heuristic_enumerator.reset()
            return self.heuristic_enumerator.move_next()

        if self.step_enumerator.move_next():
            self.tolerance_enumerator.reset()
            self.heuristic_enumerator.reset()
            return self.tolerance_enumerator.move_next() and self.heuristic_enumerator.move_next()

        return False

    def reset(self) -> None:
        """Restart the sweep from its first combination and clear the deadline."""
        self.step_enumerator.reset()
        self.tolerance_enumerator.reset()
        self.heuristic_enumerator.reset()
        self.step_enumerator.move_next()
        self.tolerance_enumerator.move_next()

        self._path = []
        self._status = SearchStatus.RUNNING
        self._iterations = 0
        self._started_at = None
        self._closed = False

    def close(self) -> None:
        """Stop the sweep; further ``move_next()`` calls return False."""
        self._closed = True

    def _log_totals(self):
        logger.info(f"Total search time is {int(self.elapsed_ms)} ms")
        logger.info(f"Iterations count is {self._iterations}")

    def __enter__(self) -> 'PathFindEnumerator':
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
