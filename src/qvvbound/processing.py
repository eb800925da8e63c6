"""
Unified error bound interface.

Combines the analytic bound, empirical sampling, and verification behind one
object. Every call recomputes from its inputs; nothing is cached between
calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from qvvbound.bounds.solver import BoundResult, displacement_bound, solve_bound
from qvvbound.config.presets import ComparisonPreset
from qvvbound.config.values import Transform, TransformParameters
from qvvbound.constants import DEFAULT_NUM_POINTS
from qvvbound.sampling.apply import sample_errors
from qvvbound.sampling.result import SampleErrors
from qvvbound.types import Domain
from qvvbound.verification import BoundVerifier

logger = logging.getLogger(__name__)


@dataclass
class EvaluationReport:
    """Analytic bound together with the sampled errors it is checked against.

    Attributes:
        result: Bound evaluation
        samples: Lattice samples of the same transforms
        tightness: max sampled error / bound (1.0 for a zero bound)
        sound: True when no sampled error exceeds the bound
    """

    result: BoundResult
    samples: SampleErrors
    tightness: float
    sound: bool

    @property
    def bound(self) -> float:
        return self.result.bound

    @property
    def max_sampled_error(self) -> float:
        return self.samples.max_error


class ErrorBoundEngine:
    """Stateless facade over bound computation and sampling.

    Example:
        >>> from qvvbound import ErrorBoundEngine, make_transform
        >>>
        >>> engine = ErrorBoundEngine()
        >>> raw = make_transform(angle_deg=20)
        >>> lossy = make_transform(61.4, 0, 128.6, translation=[2, 5, 0])
        >>>
        >>> result = engine.bound(raw, lossy)
        >>> report = engine.evaluate(raw, lossy, num_points=4000)
        >>> print(report.bound, report.max_sampled_error, report.sound)
    """

    def __init__(self, num_points: int = DEFAULT_NUM_POINTS, atol: float = 1e-9):
        """Initialize the engine.

        :param num_points: Default lattice size for sampling
        :param atol: Tolerance for the soundness flag
        """
        if num_points < 0:
            raise ValueError(f"num_points must be non-negative, got {num_points}")
        self.num_points = num_points
        self.atol = atol

    # ========================================================================
    # Bounds
    # ========================================================================

    def bound(
        self, raw: Transform, lossy: Transform, domain: Domain | str = Domain.SPHERE
    ) -> BoundResult:
        """Maximum error between raw and lossy over the domain.

        :param raw: Reference transform
        :param lossy: Approximated transform
        :param domain: SPHERE or CIRCLE
        :return: BoundResult
        """
        return solve_bound(raw, lossy, domain)

    def displacement(
        self, transform: Transform, domain: Domain | str = Domain.SPHERE
    ) -> BoundResult:
        """Maximum displacement of a transform against the identity."""
        return displacement_bound(transform, domain)

    # ========================================================================
    # Sampling
    # ========================================================================

    def samples(
        self,
        raw: Transform,
        lossy: Transform,
        domain: Domain | str = Domain.SPHERE,
        num_points: int | None = None,
    ) -> SampleErrors:
        """Per-point errors on a Fibonacci lattice.

        :param num_points: Lattice size (defaults to the engine's)
        """
        return sample_errors(raw, lossy, domain, self._resolve_points(num_points))

    def evaluate(
        self,
        raw: Transform,
        lossy: Transform,
        domain: Domain | str = Domain.SPHERE,
        num_points: int | None = None,
    ) -> EvaluationReport:
        """Bound plus lattice samples and their agreement.

        :param raw: Reference transform
        :param lossy: Approximated transform
        :param domain: SPHERE or CIRCLE
        :param num_points: Lattice size (defaults to the engine's)
        :return: EvaluationReport
        """
        domain = Domain.coerce(domain)
        result = solve_bound(raw, lossy, domain)
        samples = sample_errors(raw, lossy, domain, self._resolve_points(num_points))

        report = EvaluationReport(
            result=result,
            samples=samples,
            tightness=BoundVerifier.tightness(result, samples),
            sound=BoundVerifier.is_sound(result, samples, self.atol),
        )
        logger.info(
            "[ErrorBoundEngine] %s bound=%.6g (%s) sampled_max=%.6g tightness=%.4f",
            domain.value,
            result.bound,
            "exact" if result.exact else "conservative",
            samples.max_error,
            report.tightness,
        )
        if not report.sound:
            logger.warning(
                "[ErrorBoundEngine] Sampled error %.9g exceeds bound %.9g (%s)",
                samples.max_error,
                result.bound,
                result.mode.value,
            )
        return report

    # ========================================================================
    # Parameter Helpers
    # ========================================================================

    def evaluate_parameters(
        self,
        raw: TransformParameters,
        lossy: TransformParameters,
        domain: Domain | str = Domain.SPHERE,
        num_points: int | None = None,
    ) -> EvaluationReport:
        """Evaluate transforms given as interactive parameters."""
        return self.evaluate(raw.to_transform(), lossy.to_transform(), domain, num_points)

    def evaluate_preset(
        self, preset: ComparisonPreset, num_points: int | None = None
    ) -> EvaluationReport:
        """Evaluate a named comparison preset on its domain."""
        return self.evaluate_parameters(preset.raw, preset.lossy, preset.domain, num_points)

    def _resolve_points(self, num_points: int | None) -> int:
        return self.num_points if num_points is None else num_points
