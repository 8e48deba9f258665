"""Argument checks shared by states, flows and process strategies."""

import math
from typing import Any

from hvac_engine.core.exceptions import MissingArgumentError, InvalidArgumentError


def require_not_none(value: Any, name: str) -> Any:
    if value is None:
        raise MissingArgumentError(f"{name} must be provided")
    return value


def require_finite(value: float, name: str) -> float:
    require_not_none(value, name)
    if not math.isfinite(value):
        raise InvalidArgumentError(f"{name} must be a finite number, got {value}")
    return value


def require_between(value: float, lower: float, upper: float, name: str,
                    units: str = "") -> float:
    """Check ``lower <= value <= upper`` and return the value."""
    require_finite(value, name)
    if not lower <= value <= upper:
        suffix = f" {units}" if units else ""
        raise InvalidArgumentError(
            f"{name} = {value}{suffix} is outside the allowed range "
            f"[{lower}, {upper}]{suffix}"
        )
    return value


def require_non_negative(value: float, name: str) -> float:
    require_finite(value, name)
    if value < 0.0:
        raise InvalidArgumentError(f"{name} cannot be negative, got {value}")
    return value
