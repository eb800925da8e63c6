"""Empirical error sampling on Fibonacci lattices."""

from qvvbound.sampling.apply import (
    evaluate_sample_set,
    evaluate_sample_set_delta,
    sample_errors,
    sample_points,
)
from qvvbound.sampling.lattice import fibonacci_circle, fibonacci_sphere
from qvvbound.sampling.result import SampleErrors

__all__ = [
    "fibonacci_sphere",
    "fibonacci_circle",
    "evaluate_sample_set",
    "evaluate_sample_set_delta",
    "sample_points",
    "sample_errors",
    "SampleErrors",
]
