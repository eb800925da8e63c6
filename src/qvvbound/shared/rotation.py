"""Unified quaternion utilities for NumPy and PyTorch inputs.

This module provides rotation utilities that work with both NumPy arrays
and PyTorch tensors. All public functions auto-detect the input type and use
the appropriate backend.

Quaternion Convention: (w, x, y, z) - scalar first
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from qvvbound.constants import IDENTITY_ANGLE_EPS
from qvvbound.types import Quaternion, Vector3

if TYPE_CHECKING:
    import torch

# Type aliases
ArrayLike = np.ndarray | list | tuple


# ============================================================================
# NumPy/CPU Implementation
# ============================================================================


def _quaternion_multiply_numpy(
    q1: np.ndarray, q2: np.ndarray, out: np.ndarray | None = None
) -> np.ndarray:
    """NumPy Hamilton product.

    :param q1: First quaternion [4] or [N, 4] (w, x, y, z)
    :param q2: Second quaternion [4] or [N, 4] (w, x, y, z)
    :param out: Optional pre-allocated output buffer
    :returns: Product quaternion q1 * q2
    """
    # Handle 1D inputs
    squeeze_output = q1.ndim == 1 and q2.ndim == 1
    if q1.ndim == 1:
        q1 = q1[np.newaxis, :]
    if q2.ndim == 1:
        q2 = q2[np.newaxis, :]

    w1, x1, y1, z1 = q1[:, 0], q1[:, 1], q1[:, 2], q1[:, 3]
    w2, x2, y2, z2 = q2[:, 0], q2[:, 1], q2[:, 2], q2[:, 3]

    w = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
    x = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    y = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    z = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2

    result = np.stack([w, x, y, z], axis=1)

    if out is not None:
        out[:] = result.reshape(out.shape)
        return out
    return result[0] if squeeze_output else result


def _quaternion_conjugate_numpy(q: np.ndarray) -> np.ndarray:
    """NumPy quaternion conjugate (inverse for unit quaternions)."""
    result = np.array(q, copy=True)
    result[..., 1:] = -result[..., 1:]
    return result


def _quaternion_rotate_numpy(q: np.ndarray, v: np.ndarray) -> np.ndarray:
    """NumPy rotation of vectors by a unit quaternion.

    Uses v' = v + 2w(u x v) + 2u x (u x v) with u the vector part.

    :param q: Unit quaternion [4] (w, x, y, z)
    :param v: Vectors [3] or [N, 3]
    :returns: Rotated vectors, same shape as v
    """
    w = q[0]
    u = q[1:4]
    uv = np.cross(u, v)
    uuv = np.cross(u, uv)
    return v + 2.0 * (w * uv + uuv)


def _quaternion_to_rotation_matrix_numpy(q: np.ndarray) -> np.ndarray:
    """NumPy quaternion to 3x3 rotation matrix.

    :param q: Quaternion [4] (w, x, y, z)
    :returns: 3x3 rotation matrix
    """
    q = q / np.linalg.norm(q)
    w, x, y, z = q[0], q[1], q[2], q[3]

    R = np.zeros((3, 3), dtype=q.dtype)

    R[0, 0] = 1 - 2 * (y * y + z * z)
    R[0, 1] = 2 * (x * y - w * z)
    R[0, 2] = 2 * (x * z + w * y)

    R[1, 0] = 2 * (x * y + w * z)
    R[1, 1] = 1 - 2 * (x * x + z * z)
    R[1, 2] = 2 * (y * z - w * x)

    R[2, 0] = 2 * (x * z - w * y)
    R[2, 1] = 2 * (y * z + w * x)
    R[2, 2] = 1 - 2 * (x * x + y * y)

    return R


def _axis_angle_to_quaternion_numpy(axis: np.ndarray, angle: float) -> np.ndarray:
    """NumPy axis and angle to quaternion.

    :param axis: Rotation axis [3] (normalized internally)
    :param angle: Rotation angle in radians
    :returns: Quaternion [4] (w, x, y, z)
    """
    norm = np.linalg.norm(axis)
    if abs(angle) < IDENTITY_ANGLE_EPS or norm < IDENTITY_ANGLE_EPS:
        return np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)

    axis = axis / norm
    half_angle = angle / 2
    sin_half = np.sin(half_angle)

    w = np.cos(half_angle)
    x = axis[0] * sin_half
    y = axis[1] * sin_half
    z = axis[2] * sin_half

    return np.array([w, x, y, z], dtype=np.float64)


# ============================================================================
# PyTorch/GPU Implementation
# ============================================================================


def _quaternion_multiply_torch(q1: torch.Tensor, q2: torch.Tensor) -> torch.Tensor:
    """PyTorch Hamilton product.

    :param q1: First quaternion [4] or [N, 4] (w, x, y, z)
    :param q2: Second quaternion [4] or [N, 4] (w, x, y, z)
    :returns: Product quaternion q1 * q2
    """
    import torch

    # Handle 1D inputs
    squeeze_output = q1.dim() == 1 and q2.dim() == 1
    if q1.dim() == 1:
        q1 = q1.unsqueeze(0)
    if q2.dim() == 1:
        q2 = q2.unsqueeze(0)

    w1, x1, y1, z1 = q1[:, 0], q1[:, 1], q1[:, 2], q1[:, 3]
    w2, x2, y2, z2 = q2[:, 0], q2[:, 1], q2[:, 2], q2[:, 3]

    w = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
    x = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    y = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    z = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2

    result = torch.stack([w, x, y, z], dim=1)
    return result.squeeze(0) if squeeze_output else result


def _quaternion_conjugate_torch(q: torch.Tensor) -> torch.Tensor:
    """PyTorch quaternion conjugate."""
    result = q.clone()
    result[..., 1:] = -result[..., 1:]
    return result


def _quaternion_rotate_torch(q: torch.Tensor, v: torch.Tensor) -> torch.Tensor:
    """PyTorch rotation of vectors by a unit quaternion.

    :param q: Unit quaternion [4] (w, x, y, z)
    :param v: Vectors [3] or [N, 3]
    :returns: Rotated vectors, same shape as v
    """
    import torch

    w = q[0]
    u = q[1:4].expand_as(v)
    uv = torch.linalg.cross(u, v, dim=-1)
    uuv = torch.linalg.cross(u, uv, dim=-1)
    return v + 2.0 * (w * uv + uuv)


def _quaternion_to_rotation_matrix_torch(q: torch.Tensor) -> torch.Tensor:
    """PyTorch quaternion to 3x3 rotation matrix.

    :param q: Quaternion [4] (w, x, y, z)
    :returns: 3x3 rotation matrix
    """
    import torch

    q = q / torch.norm(q)
    w, x, y, z = q[0], q[1], q[2], q[3]

    R = torch.zeros((3, 3), dtype=q.dtype, device=q.device)

    R[0, 0] = 1 - 2 * (y * y + z * z)
    R[0, 1] = 2 * (x * y - w * z)
    R[0, 2] = 2 * (x * z + w * y)

    R[1, 0] = 2 * (x * y + w * z)
    R[1, 1] = 1 - 2 * (x * x + z * z)
    R[1, 2] = 2 * (y * z - w * x)

    R[2, 0] = 2 * (x * z - w * y)
    R[2, 1] = 2 * (y * z + w * x)
    R[2, 2] = 1 - 2 * (x * x + y * y)

    return R


# ============================================================================
# Public API - Auto-dispatching functions
# ============================================================================


def _is_torch_tensor(x) -> bool:
    """Check if input is a PyTorch tensor without importing torch."""
    return type(x).__module__.startswith("torch")


def quaternion_multiply(q1, q2, out=None):
    """Multiply quaternions (Hamilton product).

    Auto-dispatches to NumPy or PyTorch based on input type.

    :param q1: First quaternion [4] or [N, 4] (w, x, y, z)
    :param q2: Second quaternion [4] or [N, 4] (w, x, y, z)
    :param out: Optional output buffer (NumPy only)
    :returns: Product quaternion

    Example:
        >>> import numpy as np
        >>> q1 = np.array([1, 0, 0, 0])  # Identity
        >>> q2 = np.array([0.707, 0, 0.707, 0])  # 90 deg Y rotation
        >>> result = quaternion_multiply(q1, q2)
    """
    if _is_torch_tensor(q1):
        return _quaternion_multiply_torch(q1, q2)
    return _quaternion_multiply_numpy(
        np.asarray(q1, dtype=np.float64), np.asarray(q2, dtype=np.float64), out
    )


def quaternion_conjugate(q):
    """Conjugate a quaternion (negate the vector part).

    :param q: Quaternion [4] or [N, 4] (w, x, y, z)
    :returns: Conjugate quaternion
    """
    if _is_torch_tensor(q):
        return _quaternion_conjugate_torch(q)
    return _quaternion_conjugate_numpy(np.asarray(q, dtype=np.float64))


def quaternion_rotate(q, v):
    """Rotate vector(s) by a unit quaternion.

    Auto-dispatches to NumPy or PyTorch based on the vector type.

    :param q: Unit quaternion [4] (w, x, y, z)
    :param v: Vector [3] or vectors [N, 3]
    :returns: Rotated vector(s)

    Example:
        >>> import numpy as np
        >>> q = axis_angle_to_quaternion([0, 0, 1], np.pi / 2)
        >>> quaternion_rotate(q, np.array([1.0, 0.0, 0.0]))  # ~[0, 1, 0]
    """
    if _is_torch_tensor(v):
        import torch

        if not _is_torch_tensor(q):
            q = torch.as_tensor(np.asarray(q), dtype=v.dtype, device=v.device)
        return _quaternion_rotate_torch(q, v)
    return _quaternion_rotate_numpy(
        np.asarray(q, dtype=np.float64), np.asarray(v, dtype=np.float64)
    )


def quaternion_to_rotation_matrix(q):
    """Convert quaternion to 3x3 rotation matrix.

    Auto-dispatches to NumPy or PyTorch based on input type.

    :param q: Quaternion [4] (w, x, y, z)
    :returns: 3x3 rotation matrix

    Example:
        >>> import numpy as np
        >>> q = np.array([0.707, 0, 0.707, 0])  # 90 deg Y rotation
        >>> R = quaternion_to_rotation_matrix(q)
    """
    if _is_torch_tensor(q):
        return _quaternion_to_rotation_matrix_torch(q)
    return _quaternion_to_rotation_matrix_numpy(np.asarray(q, dtype=np.float64))


def axis_angle_to_quaternion(axis: Vector3, angle: float) -> np.ndarray:
    """Convert a rotation axis and angle to a quaternion.

    A near-zero angle or axis yields the identity quaternion.

    :param axis: Rotation axis [3]; need not be normalized
    :param angle: Rotation angle in radians
    :returns: Quaternion [4] (w, x, y, z)

    Example:
        >>> q = axis_angle_to_quaternion([0, 1, 0], np.pi / 2)  # 90 deg Y rotation
    """
    return _axis_angle_to_quaternion_numpy(np.asarray(axis, dtype=np.float64), float(angle))


# ============================================================================
# Convenience Functions
# ============================================================================


def quaternion_angle(q: Quaternion) -> float:
    """Rotation angle of a unit quaternion in radians, in [0, 2*pi].

    :param q: Unit quaternion [4] (w, x, y, z)
    :returns: 2 * acos(w), with w clamped to [-1, 1]
    """
    w = float(np.clip(np.asarray(q, dtype=np.float64)[0], -1.0, 1.0))
    return 2.0 * float(np.arccos(w))


def normalize_quaternion(q):
    """Normalize quaternion to unit length.

    :param q: Quaternion [4] (w, x, y, z)
    :returns: Normalized quaternion
    :raises ValueError: If the quaternion has zero length (NumPy only)
    """
    if _is_torch_tensor(q):
        import torch

        return q / torch.norm(q)
    q = np.asarray(q, dtype=np.float64)
    norm = np.linalg.norm(q)
    if norm == 0.0:
        raise ValueError("Cannot normalize a zero quaternion")
    return q / norm


def quaternion_identity(dtype=np.float64, device=None):
    """Return identity quaternion.

    :param dtype: Data type (numpy dtype or torch dtype)
    :param device: Device (for PyTorch tensors)
    :returns: Identity quaternion [1, 0, 0, 0]
    """
    if device is not None:
        import torch

        return torch.tensor([1.0, 0.0, 0.0, 0.0], dtype=dtype, device=device)
    return np.array([1.0, 0.0, 0.0, 0.0], dtype=dtype)
