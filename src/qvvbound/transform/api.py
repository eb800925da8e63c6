"""
QVV transform construction and point error evaluation.

Functions:

- ``make_transform()`` / ``make_transform_2d()``: build transforms from
  axis yaw/pitch, angle, translation and scale (degrees in, radians inside).
- ``compose_delta()``: net transform from raw to lossy under a shared uniform scale.
- ``error_plane_normal()``: axis of the delta rotation.
- ``point_error()`` / ``point_error_delta()``: displacement at domain point(s).
"""

from __future__ import annotations

import logging

import numpy as np

from qvvbound.config.values import DeltaTransform, Transform
from qvvbound.constants import DEGENERATE_AXIS_EPS, UNIFORM_SCALE_ATOL
from qvvbound.errors import UnsupportedScaleError
from qvvbound.shared.rotation import (
    axis_angle_to_quaternion,
    quaternion_conjugate,
    quaternion_multiply,
    quaternion_rotate,
)
from qvvbound.types import Domain

logger = logging.getLogger(__name__)

# Type aliases for better readability (Python 3.12+ syntax)
ArrayLike = np.ndarray | tuple | list

# ============================================================================
# Construction
# ============================================================================


def axis_from_yaw_pitch(axis_yaw_deg: float, axis_pitch_deg: float) -> np.ndarray:
    """Unit rotation axis: +Z turned by pitch about X, then yaw about Y (XYZ order).

    :param axis_yaw_deg: Yaw in degrees
    :param axis_pitch_deg: Pitch in degrees
    :returns: Unit axis [3]
    """
    yaw = np.radians(axis_yaw_deg)
    pitch = np.radians(axis_pitch_deg)
    return np.array(
        [np.sin(yaw), -np.sin(pitch) * np.cos(yaw), np.cos(pitch) * np.cos(yaw)],
        dtype=np.float64,
    )


def make_transform(
    axis_yaw_deg: float = 0.0,
    axis_pitch_deg: float = 0.0,
    angle_deg: float = 0.0,
    translation: ArrayLike | None = None,
    scale: float | ArrayLike | None = None,
) -> Transform:
    """
    Build a Transform from interactive parameters.

    :param axis_yaw_deg: Yaw of the rotation axis in degrees
    :param axis_pitch_deg: Pitch of the rotation axis in degrees
    :param angle_deg: Rotation angle about the axis in degrees
    :param translation: Translation [3] (default zero)
    :param scale: Uniform factor or per-axis [3] (default ones)
    :return: Transform

    Example:
        >>> t = make_transform(0, 0, 90, translation=[1, 0, 0])
        >>> t.apply([1.0, 0.0, 0.0])  # ~[1, 1, 0]
    """
    axis = axis_from_yaw_pitch(axis_yaw_deg, axis_pitch_deg)
    quat = axis_angle_to_quaternion(axis, np.radians(angle_deg))
    return Transform(
        rotation=tuple(quat.tolist()),
        translation=(0.0, 0.0, 0.0) if translation is None else translation,
        scale=1.0 if scale is None else scale,
    )


def make_transform_2d(
    angle_deg: float = 0.0,
    translation: ArrayLike | None = None,
    scale: float | ArrayLike | None = None,
) -> Transform:
    """
    Build a planar Transform: rotation about +Z, z translation 0, z scale 1.

    :param angle_deg: Rotation angle in degrees
    :param translation: Translation [2]
    :param scale: Uniform factor or per-axis [2]
    :return: Transform
    """
    t = np.zeros(2) if translation is None else np.asarray(translation, dtype=np.float64)
    s = np.ones(2) if scale is None else np.broadcast_to(np.asarray(scale, dtype=np.float64), (2,))
    if t.shape != (2,):
        raise ValueError(f"translation: expected 2 values, got shape {t.shape}")
    return make_transform(
        0.0, 0.0, angle_deg, translation=(t[0], t[1], 0.0), scale=(s[0], s[1], 1.0)
    )


# ============================================================================
# Delta Composition
# ============================================================================


def shared_uniform_scale(
    raw: Transform, lossy: Transform, domain: Domain = Domain.SPHERE
) -> float | None:
    """Return the uniform scale both transforms share, or None.

    On the circle domain only the x and y components are compared.
    """
    planar = Domain.coerce(domain) is Domain.CIRCLE
    if not (raw.is_uniform_scale(planar) and lossy.is_uniform_scale(planar)):
        return None
    if abs(raw.uniform_scale - lossy.uniform_scale) > UNIFORM_SCALE_ATOL:
        return None
    return raw.uniform_scale


def compose_delta(
    raw: Transform, lossy: Transform, domain: Domain | str = Domain.SPHERE
) -> DeltaTransform:
    """
    Compose the net transform from raw to lossy.

    ``rotation = conj(raw.rotation) * lossy.rotation`` and
    ``translation = rotate(lossy.translation - raw.translation, conj(raw.rotation))``.

    :param raw: Reference transform
    :param lossy: Approximated transform
    :param domain: SPHERE or CIRCLE (CIRCLE ignores the z scale component)
    :return: DeltaTransform carrying the shared uniform scale
    :raises UnsupportedScaleError: If raw and lossy do not share one uniform scale
    """
    scale = shared_uniform_scale(raw, lossy, Domain.coerce(domain))
    if scale is None:
        raise UnsupportedScaleError(raw.scale, lossy.scale)

    raw_inv = quaternion_conjugate(raw.rotation_array)
    delta_quat = quaternion_multiply(raw_inv, lossy.rotation_array)
    delta_trans = quaternion_rotate(raw_inv, lossy.translation_array - raw.translation_array)

    return DeltaTransform(
        rotation=tuple(delta_quat.tolist()),
        translation=tuple(delta_trans.tolist()),
        scale=scale,
    )


def error_plane_normal(raw: Transform, lossy: Transform) -> np.ndarray:
    """
    Normal of the plane of maximal rotational error.

    Depends on the rotations only. Swapping raw and lossy flips the sign.

    :param raw: Reference transform
    :param lossy: Approximated transform
    :return: Unit normal [3], or the zero vector when the rotations coincide
    """
    delta_quat = quaternion_multiply(
        quaternion_conjugate(raw.rotation_array), lossy.rotation_array
    )
    v = delta_quat[1:]
    norm = np.linalg.norm(v)
    if norm < DEGENERATE_AXIS_EPS:
        logger.debug("[ErrorPlane] Delta rotation is near identity, normal undefined")
        return np.zeros(3, dtype=np.float64)
    return v / norm


# ============================================================================
# Point Error
# ============================================================================


def _as_points(point) -> tuple[np.ndarray, bool]:
    """Coerce [2], [3], [N, 2] or [N, 3] input to [N, 3]; report whether it was single."""
    p = np.asarray(point, dtype=np.float64)
    single = p.ndim == 1
    if single:
        p = p[np.newaxis, :]
    if p.ndim != 2 or p.shape[1] not in (2, 3):
        raise ValueError(
            f"Expected point [2]/[3] or points [N, 2]/[N, 3], got shape {np.shape(point)}"
        )
    if p.shape[1] == 2:
        p = np.concatenate([p, np.zeros((p.shape[0], 1))], axis=1)
    return p, single


def point_error(point, transform_a: Transform, transform_b: Transform):
    """
    Displacement ``|T_a(p) - T_b(p)|`` at domain point(s).

    Handles any scale, including non-uniform. NaN inputs propagate.

    :param point: Point [3] (or [2], z = 0) or points [N, 3]
    :param transform_a: First transform
    :param transform_b: Second transform
    :return: float for a single point, array [N] for a batch
    """
    p, single = _as_points(point)
    diff = transform_a.apply(p) - transform_b.apply(p)
    errors = np.linalg.norm(diff, axis=1)
    return float(errors[0]) if single else errors


def point_error_delta(point, delta: DeltaTransform):
    """
    Displacement ``|rotate(s * p, dq) + dt - s * p|`` at domain point(s).

    Equals ``point_error(p, raw, lossy)`` for the raw/lossy pair the delta
    was composed from.

    :param point: Point [3] (or [2], z = 0) or points [N, 3]
    :param delta: Delta transform
    :return: float for a single point, array [N] for a batch
    """
    p, single = _as_points(point)
    sp = p * delta.scale
    diff = quaternion_rotate(delta.rotation_array, sp) + delta.translation_array - sp
    errors = np.linalg.norm(diff, axis=1)
    return float(errors[0]) if single else errors
