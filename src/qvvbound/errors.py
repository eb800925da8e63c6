"""Exceptions raised by qvvbound."""

from __future__ import annotations

import numpy as np


class UnsupportedScaleError(ValueError):
    """Raised when a delta transform cannot represent the scale difference.

    The delta transform only exists when raw and lossy share a single uniform
    scale. Use :func:`qvvbound.point_error` for direct evaluation or
    :func:`qvvbound.conservative_bound` for a bound in that case.

    :param raw_scale: Scale vector of the raw transform
    :param lossy_scale: Scale vector of the lossy transform
    """

    def __init__(self, raw_scale, lossy_scale, message: str | None = None):
        self.raw_scale = np.asarray(raw_scale, dtype=np.float64)
        self.lossy_scale = np.asarray(lossy_scale, dtype=np.float64)
        if message is None:
            message = (
                f"Delta transform requires a shared uniform scale, got "
                f"raw={self.raw_scale.tolist()} lossy={self.lossy_scale.tolist()}. "
                f"Use point_error() or conservative_bound() instead."
            )
        super().__init__(message)
