"""Closed-form maximum error for rotation + translation under uniform scale.

For a delta transform (dq, dt, s) the error at a unit domain point p is
``|rotate(s * p, dq) + dt - s * p|``. Splitting dt into its components along
and across the rotation axis n, the maximum over the unit sphere is

    bound = sqrt(along^2 + (in_plane + 2 * sqrt(r^2 - (w * r)^2))^2)

with r = |s| and w the scalar part of dq. It is attained on the great circle
orthogonal to n, at the point whose chord is parallel to the in-plane
translation.
"""

from __future__ import annotations

import logging

import numpy as np

from qvvbound.config.values import DeltaTransform
from qvvbound.constants import (
    CIRCLE_FALLBACK_POINT,
    DEGENERATE_AXIS_EPS,
    DEGENERATE_CROSS_EPS,
    PLANAR_ATOL,
    SPHERE_FALLBACK_PARALLEL_DOT,
    SPHERE_FALLBACK_POINT,
    SPHERE_FALLBACK_POINT_ALT,
)
from qvvbound.shared.rotation import axis_angle_to_quaternion, quaternion_rotate
from qvvbound.types import Domain

logger = logging.getLogger(__name__)


def rotation_translation_bound(
    w: float, translation: np.ndarray, normal: np.ndarray, radius: float
) -> float:
    """Maximum of ``|rotate(q, dq) + dt - q|`` over ``|q| = radius``.

    :param w: Scalar part of the delta rotation quaternion
    :param translation: Delta translation [3]
    :param normal: Unit rotation axis [3], or zero when degenerate
    :param radius: Radius of the evaluated sphere (|scale|)
    :returns: Bound value
    """
    r = abs(radius)
    max_rot_err = 2.0 * np.sqrt(max(r * r - (w * r) ** 2, 0.0))

    t = np.asarray(translation, dtype=np.float64)
    along = float(np.dot(t, normal))
    in_plane = np.sqrt(max(float(np.dot(t, t)) - along * along, 0.0))

    return float(np.sqrt(along * along + (in_plane + max_rot_err) ** 2))


def is_planar_rotation(rotation) -> bool:
    """True when the quaternion rotates about +-z (or is the identity)."""
    q = np.asarray(rotation, dtype=np.float64)
    return bool(abs(q[1]) <= PLANAR_ATOL and abs(q[2]) <= PLANAR_ATOL)


def domain_normal(delta: DeltaTransform, domain: Domain) -> np.ndarray:
    """Rotation axis used for the error plane on the given domain.

    On the circle domain the axis is +-z.

    :raises ValueError: If the domain is CIRCLE and the rotation is not about z
    """
    if domain is Domain.CIRCLE:
        if not is_planar_rotation(delta.rotation):
            raise ValueError(
                "Circle domain requires a delta rotation about z, got "
                f"quaternion {list(delta.rotation)}"
            )
        z = delta.rotation[3]
        if abs(z) < DEGENERATE_AXIS_EPS:
            return np.zeros(3, dtype=np.float64)
        return np.array([0.0, 0.0, np.sign(z)], dtype=np.float64)
    return delta.plane_normal


def _fallback_direction(normal: np.ndarray, domain: Domain) -> np.ndarray:
    """Deterministic unit point on the error plane."""
    if domain is Domain.CIRCLE:
        p = np.array(CIRCLE_FALLBACK_POINT, dtype=np.float64)
    else:
        p = np.array(SPHERE_FALLBACK_POINT, dtype=np.float64)
        p /= np.linalg.norm(p)
        if abs(float(np.dot(p, normal))) > SPHERE_FALLBACK_PARALLEL_DOT:
            p = np.array(SPHERE_FALLBACK_POINT_ALT, dtype=np.float64)

    p = p - np.dot(p, normal) * normal
    return p / np.linalg.norm(p)


def witness_direction(
    w: float, translation: np.ndarray, normal: np.ndarray, domain: Domain = Domain.SPHERE
) -> np.ndarray:
    """Unit direction on the error plane that attains the rotation/translation bound.

    Starts from ``normalize(cross(dt, n))`` and turns it by ``-theta / 2``
    about n, so that its chord under the rotation is parallel to the in-plane
    translation. Falls back to a fixed plane point when the cross product
    vanishes.

    :param w: Scalar part of the delta rotation quaternion
    :param translation: Delta translation [3]
    :param normal: Unit rotation axis [3], or zero when degenerate
    :param domain: Domain the point must lie on
    :returns: Unit direction [3]
    """
    t = np.asarray(translation, dtype=np.float64)
    u = np.cross(t, normal)
    norm = np.linalg.norm(u)

    if norm < DEGENERATE_CROSS_EPS:
        logger.debug(
            "[AnalyticBound] Witness direction undefined (|t x n|=%.3g), using fallback point",
            norm,
        )
        u = _fallback_direction(normal, domain)
    else:
        u = u / norm

    if np.linalg.norm(normal) < DEGENERATE_AXIS_EPS:
        return u

    theta = 2.0 * np.arccos(np.clip(w, -1.0, 1.0))
    half_turn = axis_angle_to_quaternion(normal, -theta / 2.0)
    return quaternion_rotate(half_turn, u)


def analytic_bound(
    delta: DeltaTransform, domain: Domain | str = Domain.SPHERE
) -> tuple[float, np.ndarray]:
    """Exact maximum error and a witness point for a delta transform.

    Reduces to ``|dt|`` when the rotation is near identity and to
    ``2 * |s| * sin(theta / 2)`` when the translation is zero.

    :param delta: Delta transform (shared uniform scale)
    :param domain: SPHERE, or CIRCLE for rotations about z
    :returns: Tuple of (bound, point [3]) with
        ``point_error_delta(point, delta) == bound``
    :raises ValueError: If the domain is CIRCLE and the rotation is not about z

    Example:
        >>> delta = compose_delta(raw, lossy)
        >>> bound, point = analytic_bound(delta)
    """
    domain = Domain.coerce(domain)
    w = delta.rotation[0]
    normal = domain_normal(delta, domain)
    translation = delta.translation_array

    bound = rotation_translation_bound(w, translation, normal, delta.scale)
    direction = witness_direction(w, translation, normal, domain)

    # s * p must equal |s| * direction
    sign = -1.0 if delta.scale < 0.0 else 1.0
    return bound, sign * direction
