"""Parameter specifications for interactive transform controls.

This module defines the ParameterSpec dataclass that specifies the range,
default, and neutral value of a transform parameter. The engine accepts any
finite value; ranges are conventions for callers that drive it from controls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ParameterSpec:
    """Specification for a transform control parameter.

    Attributes:
        name: Parameter name (e.g., "angle", "translation")
        min_value: Minimum conventional value
        max_value: Maximum conventional value
        default: Default value when not specified
        neutral: Value that causes no change (identity)
        unit: Unit of the value
        description: Human-readable description
    """

    name: str
    min_value: float
    max_value: float
    default: float
    neutral: float
    unit: Literal["degrees", "units", "factor", "count"] = "units"
    description: str = ""

    def clamp(self, value: float) -> float:
        """Validate and clamp value to the conventional range.

        :param value: Value to clamp
        :returns: Clamped value within [min_value, max_value]
        :raises ValueError: If value is not a number
        """
        if not isinstance(value, int | float):
            raise ValueError(f"{self.name}: expected number, got {type(value).__name__}")

        return max(self.min_value, min(self.max_value, float(value)))

    def contains(self, value: float) -> bool:
        """Check if value lies within the conventional range."""
        return self.min_value <= value <= self.max_value

    def is_neutral(self, value: float, tolerance: float = 1e-6) -> bool:
        """Check if value is effectively neutral (no change).

        :param value: Value to check
        :param tolerance: Tolerance for floating point comparison
        :returns: True if value is within tolerance of neutral
        """
        return abs(value - self.neutral) < tolerance

    def __repr__(self) -> str:
        return (
            f"ParameterSpec({self.name}, "
            f"range=[{self.min_value}, {self.max_value}], "
            f"default={self.default}, neutral={self.neutral}, {self.unit})"
        )
