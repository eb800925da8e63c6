"""
Numba-optimized kernels for point error evaluation.

Provides JIT-compiled kernels that evaluate the displacement between two
QVV transforms over a batch of domain points.
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


@njit(fastmath=True, cache=True, nogil=True)
def _rotate_numba(
    qw: float, qx: float, qy: float, qz: float, vx: float, vy: float, vz: float
) -> tuple[float, float, float]:
    """Rotate a vector by a unit quaternion (w, x, y, z).

    Uses v' = v + 2w(u x v) + 2u x (u x v).
    """
    # u x v
    cx = qy * vz - qz * vy
    cy = qz * vx - qx * vz
    cz = qx * vy - qy * vx
    # u x (u x v)
    ccx = qy * cz - qz * cy
    ccy = qz * cx - qx * cz
    ccz = qx * cy - qy * cx

    return (
        vx + 2.0 * (qw * cx + ccx),
        vy + 2.0 * (qw * cy + ccy),
        vz + 2.0 * (qw * cz + ccz),
    )


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def point_error_direct_numba(
    points: NDArray[np.float64],
    quat_a: NDArray[np.float64],
    trans_a: NDArray[np.float64],
    scale_a: NDArray[np.float64],
    quat_b: NDArray[np.float64],
    trans_b: NDArray[np.float64],
    scale_b: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """
    Evaluate |T_a(p) - T_b(p)| for every point.

    Args:
        points: Domain points [N, 3]
        quat_a: Rotation of transform A [4] (w, x, y, z)
        trans_a: Translation of transform A [3]
        scale_a: Scale of transform A [3]
        quat_b: Rotation of transform B [4] (w, x, y, z)
        trans_b: Translation of transform B [3]
        scale_b: Scale of transform B [3]
        out: Output errors [N] (modified in-place)
    """
    n = points.shape[0]

    for i in prange(n):
        px = points[i, 0]
        py = points[i, 1]
        pz = points[i, 2]

        ax, ay, az = _rotate_numba(
            quat_a[0], quat_a[1], quat_a[2], quat_a[3],
            px * scale_a[0], py * scale_a[1], pz * scale_a[2],
        )
        bx, by, bz = _rotate_numba(
            quat_b[0], quat_b[1], quat_b[2], quat_b[3],
            px * scale_b[0], py * scale_b[1], pz * scale_b[2],
        )

        dx = ax + trans_a[0] - bx - trans_b[0]
        dy = ay + trans_a[1] - by - trans_b[1]
        dz = az + trans_a[2] - bz - trans_b[2]

        out[i] = np.sqrt(dx * dx + dy * dy + dz * dz)


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def point_error_delta_numba(
    points: NDArray[np.float64],
    delta_quat: NDArray[np.float64],
    delta_trans: NDArray[np.float64],
    scale: float,
    out: NDArray[np.float64],
) -> None:
    """
    Evaluate |rotate(s * p, dq) + dt - s * p| for every point.

    Args:
        points: Domain points [N, 3]
        delta_quat: Delta rotation [4] (w, x, y, z)
        delta_trans: Delta translation [3]
        scale: Shared uniform scale
        out: Output errors [N] (modified in-place)
    """
    n = points.shape[0]

    for i in prange(n):
        sx = points[i, 0] * scale
        sy = points[i, 1] * scale
        sz = points[i, 2] * scale

        rx, ry, rz = _rotate_numba(
            delta_quat[0], delta_quat[1], delta_quat[2], delta_quat[3], sx, sy, sz
        )

        dx = rx + delta_trans[0] - sx
        dy = ry + delta_trans[1] - sy
        dz = rz + delta_trans[2] - sz

        out[i] = np.sqrt(dx * dx + dy * dy + dz * dz)


def warmup_error_kernels() -> None:
    """Warm up Numba JIT compilation for the error kernels."""
    points = np.random.rand(16, 3)
    quat = np.array([1.0, 0.0, 0.0, 0.0])
    vec = np.zeros(3)
    ones = np.ones(3)
    out = np.zeros(16)

    point_error_direct_numba(points, quat, vec, ones, quat, vec, ones, out)
    point_error_delta_numba(points, quat, vec, 1.0, out)

    logger.debug("Point error Numba kernels warmed up")
