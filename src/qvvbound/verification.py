"""Bound verification utilities for analytic-vs-sampled cross-checks.

This module provides utilities for verifying that an analytic bound is
sound against sampled errors and that its witness point attains it.

Example:
    >>> from qvvbound.verification import BoundVerifier
    >>>
    >>> result = solve_bound(raw, lossy)
    >>> samples = sample_errors(raw, lossy, num_points=100_000)
    >>> BoundVerifier.assert_sound(result, samples)
    >>> BoundVerifier.assert_witness(result, raw, lossy)
"""

from __future__ import annotations

import logging

from qvvbound.bounds.solver import BoundResult
from qvvbound.config.values import Transform
from qvvbound.sampling.result import SampleErrors
from qvvbound.transform.api import point_error

logger = logging.getLogger(__name__)


class BoundVerifier:
    """Utilities for checking bounds against sampled errors."""

    @staticmethod
    def max_sampled_error(samples: SampleErrors) -> float:
        """Largest sampled error (0 for an empty sample set)."""
        return samples.max_error

    @staticmethod
    def tightness(result: BoundResult, samples: SampleErrors) -> float:
        """Ratio of the largest sampled error to the bound.

        1.0 means the lattice found the bound; smaller values mean the bound
        is loose or the lattice is coarse. A zero bound gives 1.0.

        :param result: Bound to check
        :param samples: Sampled errors for the same transforms
        :return: max_sampled / bound
        """
        if result.bound == 0.0:
            return 1.0
        return samples.max_error / result.bound

    @staticmethod
    def is_sound(result: BoundResult, samples: SampleErrors, atol: float = 1e-9) -> bool:
        """Check that no sampled error exceeds the bound by more than atol."""
        return samples.max_error <= result.bound + atol

    @staticmethod
    def assert_sound(result: BoundResult, samples: SampleErrors, atol: float = 1e-9) -> None:
        """Assert the bound is at least every sampled error.

        :param result: Bound to check
        :param samples: Sampled errors for the same transforms
        :param atol: Absolute tolerance
        :raises AssertionError: If a sampled error exceeds the bound

        Example:
            >>> BoundVerifier.assert_sound(result, samples, atol=1e-6)
        """
        if not BoundVerifier.is_sound(result, samples, atol):
            worst = samples.worst_point
            raise AssertionError(
                f"Bound {result.bound:.9g} ({result.mode.value}) is below sampled error "
                f"{samples.max_error:.9g} at point {worst.tolist()}"
            )
        logger.debug(
            "[BoundVerifier] Sound: bound=%.6g sampled_max=%.6g",
            result.bound,
            samples.max_error,
        )

    @staticmethod
    def assert_witness(
        result: BoundResult, raw: Transform, lossy: Transform, atol: float = 1e-4
    ) -> None:
        """Assert the error at the witness point equals the bound.

        Only meaningful for exact modes; conservative results are skipped.

        :param result: Bound to check
        :param raw: Reference transform
        :param lossy: Approximated transform
        :param atol: Absolute tolerance
        :raises AssertionError: If the witness error differs from the bound
        """
        if not result.exact:
            logger.debug("[BoundVerifier] Skipping witness check for %s", result.mode.value)
            return

        witness_error = point_error(result.error_point, lossy, raw)
        if abs(witness_error - result.bound) > atol:
            raise AssertionError(
                f"Witness error {witness_error:.9g} differs from bound {result.bound:.9g} "
                f"({result.mode.value}) at point {result.error_point.tolist()}"
            )
