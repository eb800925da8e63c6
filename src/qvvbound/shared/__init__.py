"""Shared utilities for qvvbound.

This module contains quaternion utilities shared between the NumPy/Numba
and PyTorch code paths to avoid code duplication.
"""

from qvvbound.shared.rotation import (
    axis_angle_to_quaternion,
    normalize_quaternion,
    quaternion_angle,
    quaternion_conjugate,
    quaternion_identity,
    quaternion_multiply,
    quaternion_rotate,
    quaternion_to_rotation_matrix,
)

__all__ = [
    "quaternion_multiply",
    "quaternion_conjugate",
    "quaternion_rotate",
    "quaternion_to_rotation_matrix",
    "axis_angle_to_quaternion",
    "quaternion_angle",
    "normalize_quaternion",
    "quaternion_identity",
]
