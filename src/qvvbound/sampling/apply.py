"""Batch error evaluation over sample points.

Auto-dispatches between NumPy/Numba and PyTorch based on the input type:
NumPy arrays go through the parallel Numba kernels, torch tensors stay on
their device and dtype.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from qvvbound.config.values import DeltaTransform, Transform
from qvvbound.constants import DEFAULT_NUM_POINTS
from qvvbound.sampling.lattice import fibonacci_circle, fibonacci_sphere
from qvvbound.sampling.result import SampleErrors
from qvvbound.shared.rotation import _is_torch_tensor
from qvvbound.transform.kernels import point_error_delta_numba, point_error_direct_numba
from qvvbound.types import Domain

if TYPE_CHECKING:
    import torch

logger = logging.getLogger(__name__)


def _prepare_points(points: np.ndarray) -> np.ndarray:
    """Validate [N, 3] points and make them float64 contiguous."""
    points = np.asarray(points)
    if points.ndim != 2 or points.shape[1] != 3:
        raise ValueError(f"points: expected shape [N, 3], got {points.shape}")
    if points.dtype != np.float64:
        points = points.astype(np.float64)
    if not points.flags["C_CONTIGUOUS"]:
        points = np.ascontiguousarray(points)
    return points


# ============================================================================
# PyTorch Implementation
# ============================================================================


def _apply_transform_torch(points: torch.Tensor, transform: Transform) -> torch.Tensor:
    import torch

    from qvvbound.shared.rotation import quaternion_rotate

    scale = torch.tensor(transform.scale, dtype=points.dtype, device=points.device)
    trans = torch.tensor(transform.translation, dtype=points.dtype, device=points.device)
    return quaternion_rotate(transform.rotation_array, points * scale) + trans


def _evaluate_direct_torch(
    points: torch.Tensor, transform_a: Transform, transform_b: Transform
) -> torch.Tensor:
    """PyTorch |T_a(p) - T_b(p)| per point."""
    import torch

    transformed_a = _apply_transform_torch(points, transform_a)
    transformed_b = _apply_transform_torch(points, transform_b)
    return torch.linalg.norm(transformed_a - transformed_b, dim=1)


def _evaluate_delta_torch(points: torch.Tensor, delta: DeltaTransform) -> torch.Tensor:
    """PyTorch |rotate(s * p, dq) + dt - s * p| per point."""
    import torch

    from qvvbound.shared.rotation import quaternion_rotate

    scaled = points * delta.scale
    trans = torch.tensor(delta.translation, dtype=points.dtype, device=points.device)
    diff = quaternion_rotate(delta.rotation_array, scaled) + trans - scaled
    return torch.linalg.norm(diff, dim=1)


# ============================================================================
# Public API
# ============================================================================


def evaluate_sample_set(points, transform_a: Transform, transform_b: Transform):
    """Error ``|T_a(p) - T_b(p)|`` for every sample point.

    :param points: Points [N, 3] (NumPy array or torch tensor)
    :param transform_a: First transform
    :param transform_b: Second transform
    :return: Errors [N], index-aligned with points, same array type as input
    """
    if _is_torch_tensor(points):
        return _evaluate_direct_torch(points, transform_a, transform_b)

    points = _prepare_points(points)
    out = np.empty(points.shape[0], dtype=np.float64)
    point_error_direct_numba(
        points,
        transform_a.rotation_array,
        transform_a.translation_array,
        transform_a.scale_array,
        transform_b.rotation_array,
        transform_b.translation_array,
        transform_b.scale_array,
        out,
    )
    return out


def evaluate_sample_set_delta(points, delta: DeltaTransform):
    """Error ``|rotate(s * p, dq) + dt - s * p|`` for every sample point.

    :param points: Points [N, 3] (NumPy array or torch tensor)
    :param delta: Delta transform
    :return: Errors [N], index-aligned with points, same array type as input
    """
    if _is_torch_tensor(points):
        return _evaluate_delta_torch(points, delta)

    points = _prepare_points(points)
    out = np.empty(points.shape[0], dtype=np.float64)
    point_error_delta_numba(
        points, delta.rotation_array, delta.translation_array, delta.scale, out
    )
    return out


def sample_points(domain: Domain | str, num_points: int = DEFAULT_NUM_POINTS) -> np.ndarray:
    """Fibonacci lattice for the domain.

    :param domain: SPHERE or CIRCLE
    :param num_points: Number of points
    :return: Points [N, 3]
    """
    if Domain.coerce(domain) is Domain.CIRCLE:
        return fibonacci_circle(num_points)
    return fibonacci_sphere(num_points)


def sample_errors(
    raw: Transform,
    lossy: Transform,
    domain: Domain | str = Domain.SPHERE,
    num_points: int = DEFAULT_NUM_POINTS,
) -> SampleErrors:
    """Sample the error between two transforms on a Fibonacci lattice.

    :param raw: Reference transform
    :param lossy: Approximated transform
    :param domain: SPHERE or CIRCLE
    :param num_points: Number of lattice points
    :return: SampleErrors with points and per-point errors
    """
    domain = Domain.coerce(domain)
    points = sample_points(domain, num_points)
    errors = evaluate_sample_set(points, lossy, raw)
    logger.debug(
        "[Sampler] %d %s points, max error %.6g",
        num_points,
        domain.value,
        float(errors.max()) if num_points else 0.0,
    )
    return SampleErrors(points=points, errors=errors, domain=domain)
