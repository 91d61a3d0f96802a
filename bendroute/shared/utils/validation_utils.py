"""Validation utilities for BendRoute."""
import math
from typing import Any, Iterable, Sequence

from ..exceptions import ValidationError


def validate_coordinates(values: Sequence[float], field_name: str = "point") -> None:
    """Validate a 3D coordinate triple.

    Args:
        values: Three numeric components
        field_name: Name of field for error reporting

    Raises:
        ValidationError: If the triple is malformed or not finite
    """
    if len(values) != 3:
        raise ValidationError(
            f"{field_name} must have 3 components, got {len(values)}",
            field=field_name, value=values
        )

    for component in values:
        if not isinstance(component, (int, float)):
            raise ValidationError(
                f"{field_name} components must be numeric, got {type(component)}",
                field=field_name, value=values
            )
        if not math.isfinite(component):
            raise ValidationError(
                f"{field_name} components must be finite, got {values}",
                field=field_name, value=values
            )


def validate_direction(values: Sequence[float], field_name: str = "direction") -> None:
    """Validate a direction triple: finite and non-zero.

    Raises:
        ValidationError: If the direction has zero length
    """
    validate_coordinates(values, field_name)
    if all(component == 0 for component in values):
        raise ValidationError(f"{field_name} must be non-zero", field=field_name, value=values)


def validate_angles(angles: Iterable[int], field_name: str = "angles") -> None:
    """Validate an allowed-angle set (integer degrees in [0, 180]).

    Raises:
        ValidationError: If the set is empty or holds invalid values
    """
    angles = list(angles)
    if not angles:
        raise ValidationError(f"{field_name} cannot be empty", field=field_name, value=angles)

    for angle in angles:
        if not isinstance(angle, int) or isinstance(angle, bool):
            raise ValidationError(
                f"{field_name} must hold integer degrees, got {angle!r}",
                field=field_name, value=angles
            )
        if angle < 0 or angle > 180:
            raise ValidationError(
                f"{field_name} must be within [0, 180], got {angle}",
                field=field_name, value=angles
            )


def validate_positive_number(value: Any, field_name: str) -> None:
    """Validate that a value is a positive number.

    Raises:
        ValidationError: If value is not a positive number
    """
    if not isinstance(value, (int, float)):
        raise ValidationError(
            f"{field_name} must be numeric, got {type(value)}",
            field=field_name, value=value
        )

    if value <= 0:
        raise ValidationError(
            f"{field_name} must be positive, got {value}",
            field=field_name, value=value
        )


def validate_non_negative_number(value: Any, field_name: str) -> None:
    """Validate that a value is a non-negative number.

    Raises:
        ValidationError: If value is not non-negative
    """
    if not isinstance(value, (int, float)):
        raise ValidationError(
            f"{field_name} must be numeric, got {type(value)}",
            field=field_name, value=value
        )

    if value < 0:
        raise ValidationError(
            f"{field_name} must be non-negative, got {value}",
            field=field_name, value=value
        )
