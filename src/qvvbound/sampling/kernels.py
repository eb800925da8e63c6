"""Numba-optimized kernels for sampled error statistics."""

from __future__ import annotations

import logging

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


# Note: Not using parallel=True because histogram accumulation has race conditions
@njit(fastmath=True, cache=True, nogil=True)
def histogram_1d_numba(
    values: NDArray[np.float64],
    n_bins: int,
    min_val: float,
    max_val: float,
    out: NDArray[np.int64],
) -> None:
    """Compute 1D histogram of errors.

    :param values: Input values [N]
    :param n_bins: Number of bins
    :param min_val: Minimum value for binning
    :param max_val: Maximum value for binning
    :param out: Output histogram [n_bins]
    """
    N = values.shape[0]
    if N == 0:
        return

    scale = n_bins / (max_val - min_val) if max_val > min_val else 1.0

    for i in range(N):
        bin_idx = int((values[i] - min_val) * scale)
        bin_idx = max(0, min(n_bins - 1, bin_idx))
        out[bin_idx] += 1


# Note: Sequential Welford's algorithm - not parallelizable
@njit(fastmath=True, cache=True, nogil=True)
def compute_stats_numba(
    data: NDArray[np.float64],
) -> tuple[float, float, float, float]:
    """Compute mean, std, min, max with Numba.

    Uses Welford's online algorithm for numerical stability.

    :param data: Input data [N]
    :returns: Tuple of (mean, std, min_val, max_val)
    """
    N = data.shape[0]
    if N == 0:
        return 0.0, 0.0, 0.0, 0.0

    mean = 0.0
    M2 = 0.0
    min_val = data[0]
    max_val = data[0]

    for i in range(N):
        x = data[i]
        delta = x - mean
        mean += delta / (i + 1)
        delta2 = x - mean
        M2 += delta * delta2

        if x < min_val:
            min_val = x
        if x > max_val:
            max_val = x

    variance = M2 / N
    return mean, np.sqrt(variance), min_val, max_val


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def normalize_errors_numba(
    errors: NDArray[np.float64],
    min_val: float,
    max_val: float,
    out: NDArray[np.float64],
) -> None:
    """Map errors to [0, 1] against (min_val, max_val), clamped.

    :param errors: Input errors [N]
    :param min_val: Value mapped to 0
    :param max_val: Value mapped to 1 (must exceed min_val)
    :param out: Output [N] (modified in-place)
    """
    n = errors.shape[0]
    inv_range = 1.0 / (max_val - min_val)

    for i in prange(n):
        v = (errors[i] - min_val) * inv_range
        out[i] = min(1.0, max(0.0, v))
