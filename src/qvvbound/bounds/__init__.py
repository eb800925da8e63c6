"""Analytic and conservative error bounds between QVV transforms."""

from qvvbound.bounds.analytic import (
    analytic_bound,
    rotation_translation_bound,
    witness_direction,
)
from qvvbound.bounds.circle import scaled_circle_max, scaled_circle_max_closed_form
from qvvbound.bounds.conservative import conservative_bound
from qvvbound.bounds.solver import (
    BoundMode,
    BoundResult,
    displacement_bound,
    select_bound_mode,
    solve_bound,
)

__all__ = [
    "analytic_bound",
    "rotation_translation_bound",
    "witness_direction",
    "scaled_circle_max",
    "scaled_circle_max_closed_form",
    "conservative_bound",
    "BoundMode",
    "BoundResult",
    "select_bound_mode",
    "solve_bound",
    "displacement_bound",
]
