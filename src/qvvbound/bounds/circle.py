"""Exact maximum error on the unit circle for rotation plus non-uniform 2D scale.

Maximizes ``f(x, y) = |R(theta) diag(sx, sy) (x, y) - (x, y)|^2`` over the
unit circle. Setting the derivative of f along the circle to zero and
removing the radical gives a quadratic in ``x^2`` with roots

    x^2 = (1 +- k / sqrt(U)) / 2,   k = sx + sy - 2 cos(theta),
                                    U = k^2 + 4 sin(theta)^2

Each root yields two x candidates; x = +-1 covers the boundary. Every
candidate is evaluated with both signs of ``y = sqrt(1 - x^2)``.
"""

from __future__ import annotations

import logging

import numpy as np

from qvvbound.constants import SINGULARITY_EPS

logger = logging.getLogger(__name__)


def _circle_objective(theta: float, sx: float, sy: float, x: float, y: float) -> float:
    """Squared displacement f(x, y)."""
    c = np.cos(theta)
    s = np.sin(theta)
    qx = c * sx * x - s * sy * y - x
    qy = s * sx * x + c * sy * y - y
    return float(qx * qx + qy * qy)


def circle_candidates(theta: float, sx: float, sy: float) -> list[float]:
    """Candidate x coordinates of the maximizer, in evaluation order.

    Interior roots come first, then the boundary points -1 and 1. When the
    discriminant U is below the singularity threshold only the boundary
    points are returned.

    :param theta: Rotation angle in radians
    :param sx: Scale along x
    :param sy: Scale along y
    :returns: List of x candidates in [-1, 1]
    """
    k = sx + sy - 2.0 * np.cos(theta)
    u = k * k + 4.0 * np.sin(theta) ** 2

    candidates: list[float] = []
    if u < SINGULARITY_EPS:
        logger.debug(
            "[ScaledCircle] Singular quartic (U=%.3g) for theta=%.6g sx=%.6g sy=%.6g, "
            "evaluating boundary points only",
            u,
            theta,
            sx,
            sy,
        )
    else:
        ratio = k / np.sqrt(u)
        for x_sq in ((1.0 + ratio) / 2.0, (1.0 - ratio) / 2.0):
            root = float(np.sqrt(np.clip(x_sq, 0.0, 1.0)))
            candidates.extend([root, -root])

    candidates.extend([-1.0, 1.0])
    return candidates


def scaled_circle_max(theta: float, sx: float, sy: float) -> tuple[float, np.ndarray]:
    """Maximum displacement on the unit circle and the point attaining it.

    :param theta: Rotation angle in radians
    :param sx: Scale along x (may be negative or zero)
    :param sy: Scale along y (may be negative or zero)
    :returns: Tuple of (sqrt(f_max), point [2]); ties keep the first candidate

    Example:
        >>> bound, (x, y) = scaled_circle_max(-np.pi / 2, 3.0, 1.0)
        >>> # bound == 1 + sqrt(5), |x| == sqrt(0.5 + 1 / sqrt(5))
    """
    best_f = -1.0
    best_point = np.array([1.0, 0.0], dtype=np.float64)

    for x in circle_candidates(theta, sx, sy):
        y_abs = float(np.sqrt(max(0.0, 1.0 - x * x)))
        for y in (y_abs, -y_abs):
            f = _circle_objective(theta, sx, sy, x, y)
            if f > best_f:
                best_f = f
                best_point = np.array([x, y], dtype=np.float64)

    return float(np.sqrt(max(best_f, 0.0))), best_point


def scaled_circle_max_closed_form(theta: float, sx: float, sy: float) -> float:
    """Closed-form maximum (largest singular value of R S - I).

    ``f_max = (sx^2 + sy^2) / 2 - (sx + sy) cos(theta) + 1 + |sx - sy| sqrt(U) / 2``

    :returns: sqrt(f_max)
    """
    c = np.cos(theta)
    k = sx + sy - 2.0 * c
    u = k * k + 4.0 * np.sin(theta) ** 2
    f_max = (sx * sx + sy * sy) / 2.0 - (sx + sy) * c + 1.0 + abs(sx - sy) * np.sqrt(u) / 2.0
    return float(np.sqrt(max(f_max, 0.0)))
