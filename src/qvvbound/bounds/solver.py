"""Bound mode selection and routing.

One mode is chosen per evaluation:

- ROTATION_TRANSLATION_UNIFORM_SCALE: raw and lossy share a uniform scale;
  closed-form bound, exact.
- NON_UNIFORM_SCALE_2D: circle domain, rotation about z, no in-plane
  translation difference, and one side with a uniform non-zero scale;
  scaled-circle maximizer, exact.
- NON_UNIFORM_SCALE_3D_CONSERVATIVE: everything else; upper bound, not exact.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from qvvbound.bounds.analytic import analytic_bound, is_planar_rotation
from qvvbound.bounds.circle import scaled_circle_max
from qvvbound.bounds.conservative import conservative_bound
from qvvbound.config.values import Transform
from qvvbound.constants import PLANAR_ATOL, UNIFORM_SCALE_ATOL
from qvvbound.shared.rotation import quaternion_conjugate, quaternion_multiply, quaternion_rotate
from qvvbound.transform.api import compose_delta, error_plane_normal, shared_uniform_scale
from qvvbound.types import Domain

logger = logging.getLogger(__name__)


class BoundMode(Enum):
    """Which solver produced a bound."""

    ROTATION_TRANSLATION_UNIFORM_SCALE = "rotation_translation_uniform_scale"
    NON_UNIFORM_SCALE_2D = "non_uniform_scale_2d"
    NON_UNIFORM_SCALE_3D_CONSERVATIVE = "non_uniform_scale_3d_conservative"

    @property
    def is_exact(self) -> bool:
        return self is not BoundMode.NON_UNIFORM_SCALE_3D_CONSERVATIVE


@dataclass
class BoundResult:
    """Result of a bound evaluation.

    Attributes:
        bound: Maximum error (exact modes) or an upper bound on it
        error_point: Unit domain point [3] attaining (or approximating) the bound
        mode: Solver that produced the bound
        exact: False for conservative bounds, which must not be shown as exact
        plane_normal: Delta rotation axis [3], zero when degenerate
        domain: Domain the bound applies to
    """

    bound: float
    error_point: np.ndarray
    mode: BoundMode
    exact: bool
    plane_normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    domain: Domain = Domain.SPHERE

    def to_dict(self) -> dict:
        """Plain dictionary view for display layers."""
        return {
            "bound": self.bound,
            "error_point": self.error_point.tolist(),
            "mode": self.mode.value,
            "exact": self.exact,
            "plane_normal": self.plane_normal.tolist(),
            "domain": self.domain.value,
        }


def _planar_reference(raw: Transform, lossy: Transform) -> tuple[Transform, Transform] | None:
    """Return (reference, other) for the exact 2D non-uniform case, or None.

    The reference side has a uniform non-zero planar scale. The error is
    symmetric, so raw and lossy may be swapped.
    """
    for ref, other in ((raw, lossy), (lossy, raw)):
        if not ref.is_uniform_scale(planar=True) or abs(ref.uniform_scale) <= UNIFORM_SCALE_ATOL:
            continue
        ref_inv = quaternion_conjugate(ref.rotation_array)
        delta_quat = quaternion_multiply(ref_inv, other.rotation_array)
        delta_trans = quaternion_rotate(ref_inv, other.translation_array - ref.translation_array)
        if not is_planar_rotation(delta_quat):
            return None
        if np.hypot(delta_trans[0], delta_trans[1]) > PLANAR_ATOL:
            return None
        return ref, other
    return None


def select_bound_mode(
    raw: Transform, lossy: Transform, domain: Domain | str = Domain.SPHERE
) -> BoundMode:
    """Choose the solver for a raw/lossy pair.

    :param raw: Reference transform
    :param lossy: Approximated transform
    :param domain: SPHERE or CIRCLE
    :returns: BoundMode
    """
    domain = Domain.coerce(domain)

    if shared_uniform_scale(raw, lossy, domain) is not None:
        if domain is Domain.SPHERE:
            return BoundMode.ROTATION_TRANSLATION_UNIFORM_SCALE
        delta_quat = quaternion_multiply(
            quaternion_conjugate(raw.rotation_array), lossy.rotation_array
        )
        if is_planar_rotation(delta_quat):
            return BoundMode.ROTATION_TRANSLATION_UNIFORM_SCALE

    if domain is Domain.CIRCLE and _planar_reference(raw, lossy) is not None:
        return BoundMode.NON_UNIFORM_SCALE_2D

    return BoundMode.NON_UNIFORM_SCALE_3D_CONSERVATIVE


def _solve_planar(raw: Transform, lossy: Transform) -> tuple[float, np.ndarray]:
    """Exact 2D bound via the scaled-circle maximizer."""
    ref, other = _planar_reference(raw, lossy)
    s = ref.uniform_scale

    ref_inv = quaternion_conjugate(ref.rotation_array)
    delta_quat = quaternion_multiply(ref_inv, other.rotation_array)
    delta_trans = quaternion_rotate(ref_inv, other.translation_array - ref.translation_array)
    theta = 2.0 * np.arctan2(delta_quat[3], delta_quat[0])

    circle_bound, (x, y) = scaled_circle_max(theta, other.scale[0] / s, other.scale[1] / s)
    bound = float(np.hypot(abs(s) * circle_bound, delta_trans[2]))
    return bound, np.array([x, y, 0.0], dtype=np.float64)


def solve_bound(
    raw: Transform, lossy: Transform, domain: Domain | str = Domain.SPHERE
) -> BoundResult:
    """Compute the maximum error between two transforms over a domain.

    :param raw: Reference transform
    :param lossy: Approximated transform
    :param domain: SPHERE (unit sphere) or CIRCLE (unit circle, z = 0)
    :returns: BoundResult with the bound, witness point and mode

    Example:
        >>> raw = make_transform(angle_deg=20)
        >>> lossy = make_transform(61.4, 0, 128.6, translation=[2, 5, 0])
        >>> result = solve_bound(raw, lossy)
        >>> result.bound, result.error_point, result.exact
    """
    domain = Domain.coerce(domain)
    mode = select_bound_mode(raw, lossy, domain)
    logger.debug("[BoundSolver] domain=%s mode=%s", domain.value, mode.value)

    if mode is BoundMode.ROTATION_TRANSLATION_UNIFORM_SCALE:
        bound, point = analytic_bound(compose_delta(raw, lossy, domain), domain)
    elif mode is BoundMode.NON_UNIFORM_SCALE_2D:
        bound, point = _solve_planar(raw, lossy)
    else:
        bound, point = conservative_bound(raw, lossy, domain)

    return BoundResult(
        bound=bound,
        error_point=point,
        mode=mode,
        exact=mode.is_exact,
        plane_normal=error_plane_normal(raw, lossy),
        domain=domain,
    )


def displacement_bound(transform: Transform, domain: Domain | str = Domain.SPHERE) -> BoundResult:
    """Maximum displacement of a single transform against the identity.

    :param transform: Transform to measure
    :param domain: SPHERE or CIRCLE
    :returns: BoundResult
    """
    return solve_bound(Transform.identity(), transform, domain)
