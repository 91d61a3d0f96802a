"""Base exceptions for BendRoute."""


class BendRouteException(Exception):
    """Base exception class for BendRoute."""

    def __init__(self, message: str, error_code: str = None, details: dict = None):
        """Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            details: Optional additional error details
        """
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of exception."""
        base_msg = super().__str__()
        if self.error_code:
            return f"[{self.error_code}] {base_msg}"
        return base_msg


class ConfigurationError(BendRouteException):
    """Exception raised for configuration-related errors."""
    pass


class ValidationError(BendRouteException):
    """Exception raised for validation errors."""

    def __init__(self, message: str, field: str = None, value=None, **kwargs):
        """Initialize validation error.

        Args:
            message: Error message
            field: Field that failed validation
            value: Invalid value
        """
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class RoutingError(BendRouteException):
    """Exception raised for routing-related errors."""

    def __init__(self, message: str, parameters: tuple = None, **kwargs):
        """Initialize routing error.

        Args:
            message: Error message
            parameters: Last (step, tolerance, heuristic) combination tried
        """
        super().__init__(message, **kwargs)
        self.parameters = parameters


class GeometryError(BendRouteException):
    """Exception raised for degenerate geometry passed where it is not allowed."""

    def __init__(self, message: str, entity: str = None, **kwargs):
        """Initialize geometry error.

        Args:
            message: Error message
            entity: Name of the geometric entity (vector, plane, basis)
        """
        super().__init__(message, **kwargs)
        self.entity = entity
