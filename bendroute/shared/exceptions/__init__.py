"""Shared exceptions for BendRoute."""
from .base_exceptions import (
    BendRouteException, ConfigurationError, ValidationError,
    RoutingError, GeometryError
)
from .domain_exceptions import (
    SearchExhaustedError, SearchTimeoutError
)

__all__ = [
    'BendRouteException', 'ConfigurationError', 'ValidationError',
    'RoutingError', 'GeometryError',
    'SearchExhaustedError', 'SearchTimeoutError'
]
