"""Domain-specific exceptions."""
from .base_exceptions import RoutingError


class SearchExhaustedError(RoutingError):
    """Raised when no (step, tolerance, heuristic) combination produced a path."""

    def __init__(self, message: str, iterations: int = 0, **kwargs):
        """Initialize search exhausted error.

        Args:
            message: Error message
            iterations: Number of search attempts made
        """
        super().__init__(message, **kwargs)
        self.iterations = iterations


class SearchTimeoutError(RoutingError):
    """Raised when the sweep was stopped by its deadline or by cancellation."""

    def __init__(self, message: str, cancelled: bool = False, **kwargs):
        """Initialize search timeout error.

        Args:
            message: Error message
            cancelled: True if an external cancellation stopped the search
        """
        super().__init__(message, **kwargs)
        self.cancelled = cancelled
