"""Fibonacci lattice sample points on the unit sphere and unit circle."""

from __future__ import annotations

import numpy as np


def _fibonacci_rows(num_points: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Shared lattice terms: (y, ring radius, phi) per point."""
    if num_points < 0:
        raise ValueError(f"num_points must be non-negative, got {num_points}")

    offset = 2.0 / num_points if num_points > 0 else 0.0
    increment = np.pi * (3.0 - np.sqrt(5.0))

    index = np.arange(num_points, dtype=np.float64)
    y = (index * offset - 1.0) + offset / 2.0
    r = np.sqrt(np.maximum(1.0 - y * y, 0.0))
    phi = index * increment
    return y, r, phi


def fibonacci_sphere(num_points: int) -> np.ndarray:
    """Quasi-uniform points on the unit sphere.

    :param num_points: Number of points (0 gives an empty [0, 3] array)
    :returns: Points [N, 3]
    """
    y, r, phi = _fibonacci_rows(num_points)
    return np.stack([np.cos(phi) * r, y, np.sin(phi) * r], axis=1)


def fibonacci_circle(num_points: int) -> np.ndarray:
    """Points on the unit circle (z = 0) from the flattened sphere lattice.

    The sphere lattice with its z component dropped, renormalized.

    :param num_points: Number of points (0 gives an empty [0, 3] array)
    :returns: Points [N, 3] with z = 0
    """
    y, r, phi = _fibonacci_rows(num_points)
    points = np.stack([np.cos(phi) * r, y, np.zeros_like(y)], axis=1)
    norms = np.linalg.norm(points, axis=1, keepdims=True)
    return points / np.where(norms > 0.0, norms, 1.0)
