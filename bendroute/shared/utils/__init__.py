"""Shared utilities."""
from .logging_utils import setup_logging, get_context_logger, ContextLogger
from .validation_utils import (
    validate_coordinates, validate_direction, validate_angles,
    validate_positive_number, validate_non_negative_number
)
from .performance_utils import timing_context, TimingResult

__all__ = [
    'setup_logging', 'get_context_logger', 'ContextLogger',
    'validate_coordinates', 'validate_direction', 'validate_angles',
    'validate_positive_number', 'validate_non_negative_number',
    'timing_context', 'TimingResult'
]
