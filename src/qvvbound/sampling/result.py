"""Sampled error result dataclass with analysis methods."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from qvvbound.constants import (
    DEFAULT_HISTOGRAM_BINS,
    FLAT_RANGE_EPS,
    FLAT_RANGE_MAX,
    FLAT_RANGE_MIN,
    HEAT_HUE_MAX,
)
from qvvbound.types import Domain


@dataclass
class SampleErrors:
    """Per-point errors over a sampled domain.

    Attributes:
        points: Sample points [N, 3]
        errors: Error at each point [N], index-aligned with points
        domain: Domain the points were drawn from

    Example:
        >>> samples = sample_errors(raw, lossy, Domain.SPHERE, 4000)
        >>> print(f"Worst sampled error {samples.max_error:.4f} at {samples.worst_point}")
        >>> hues = samples.heat_hues()
    """

    points: np.ndarray
    errors: np.ndarray
    domain: Domain = Domain.SPHERE

    def __post_init__(self):
        if self.points.ndim != 2 or self.points.shape[1] != 3:
            raise ValueError(f"points: expected shape [N, 3], got {self.points.shape}")
        if self.errors.shape != (self.points.shape[0],):
            raise ValueError(
                f"errors: expected shape ({self.points.shape[0]},), got {self.errors.shape}"
            )

    @property
    def n_samples(self) -> int:
        return int(self.errors.shape[0])

    @property
    def min_error(self) -> float:
        return float(self.errors.min()) if self.n_samples else 0.0

    @property
    def max_error(self) -> float:
        return float(self.errors.max()) if self.n_samples else 0.0

    @property
    def mean_error(self) -> float:
        return float(self.errors.mean()) if self.n_samples else 0.0

    @property
    def worst_index(self) -> int:
        """Index of the largest sampled error (first on ties).

        :raises ValueError: If there are no samples
        """
        if self.n_samples == 0:
            raise ValueError("No samples")
        return int(np.argmax(self.errors))

    @property
    def worst_point(self) -> np.ndarray:
        return self.points[self.worst_index]

    def stats(self) -> tuple[float, float, float, float]:
        """Compute (mean, std, min, max) of the errors.

        :return: Tuple of (mean, std, min, max)
        """
        from qvvbound.sampling.kernels import compute_stats_numba

        mean, std, min_val, max_val = compute_stats_numba(np.ascontiguousarray(self.errors))
        return float(mean), float(std), float(min_val), float(max_val)

    def normalization_range(self) -> tuple[float, float]:
        """Range mapped to [0, 1] for display.

        A nearly flat distribution (max - min below 1e-6) uses [0, 2] so that
        constant errors do not saturate.

        :return: Tuple of (low, high)
        """
        low, high = self.min_error, self.max_error
        if high - low < FLAT_RANGE_EPS:
            return FLAT_RANGE_MIN, FLAT_RANGE_MAX
        return low, high

    def normalized(self) -> np.ndarray:
        """Errors mapped to [0, 1] against normalization_range(), clamped.

        :return: Normalized errors [N]
        """
        from qvvbound.sampling.kernels import normalize_errors_numba

        low, high = self.normalization_range()
        out = np.empty(self.n_samples, dtype=np.float64)
        normalize_errors_numba(np.ascontiguousarray(self.errors, dtype=np.float64), low, high, out)
        return out

    def heat_hues(self) -> np.ndarray:
        """Heat-map hue in degrees per point: 240 (blue) for low, 0 (red) for high.

        :return: Hues [N]
        """
        return (1.0 - self.normalized()) * HEAT_HUE_MAX

    def sorted_curve(self) -> np.ndarray:
        """Errors sorted descending, padded with a 0 at both ends.

        :return: Curve values [N + 2]
        """
        return np.concatenate([[0.0], np.sort(self.errors)[::-1], [0.0]])

    def curve_y_max(self) -> float:
        """Upper y-limit for the sorted curve: max(largest error, 2)."""
        return max(self.max_error, FLAT_RANGE_MAX)

    def histogram(
        self, n_bins: int = DEFAULT_HISTOGRAM_BINS
    ) -> tuple[np.ndarray, np.ndarray]:
        """Bin the errors over [min, max].

        :param n_bins: Number of bins
        :return: Tuple of (counts [n_bins], bin_edges [n_bins + 1])
        """
        from qvvbound.sampling.kernels import histogram_1d_numba

        if n_bins < 1:
            raise ValueError(f"n_bins must be >= 1, got {n_bins}")

        low, high = self.min_error, self.max_error
        counts = np.zeros(n_bins, dtype=np.int64)
        values = np.ascontiguousarray(self.errors, dtype=np.float64)
        histogram_1d_numba(values, n_bins, low, high, counts)
        edges = np.linspace(low, high if high > low else low + 1.0, n_bins + 1)
        return counts, edges
