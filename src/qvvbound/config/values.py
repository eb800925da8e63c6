"""Transform value dataclasses.

This module provides the immutable value types the bound engine operates on:

- Transform: a QVV transform (scale, then rotate, then translate)
- DeltaTransform: the net transform taking raw to lossy under a shared uniform scale
- TransformParameters: UI-style parameters (axis yaw/pitch, angle in degrees)
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from qvvbound.constants import DEGENERATE_AXIS_EPS, UNIFORM_SCALE_ATOL
from qvvbound.types import ArrayLike


def _as_vector3(
    value: float | ArrayLike, name: str, fill: float | None = None
) -> tuple[float, float, float]:
    """Coerce a scalar or [3] sequence to a float triple.

    :param value: Scalar (broadcast), [2] sequence (z filled) or [3] sequence
    :param name: Field name for error messages
    :param fill: Value used for z when a [2] sequence is given
    """
    arr = np.asarray(value, dtype=np.float64).reshape(-1)
    if arr.size == 1:
        arr = np.repeat(arr, 3)
    elif arr.size == 2 and fill is not None:
        arr = np.array([arr[0], arr[1], fill], dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"{name}: expected scalar or 3 values, got shape {np.shape(value)}")
    return (float(arr[0]), float(arr[1]), float(arr[2]))


@dataclass(frozen=True)
class Transform:
    """QVV transform: per-axis scale, unit quaternion rotation, translation.

    Applied as ``T(p) = rotate(p * scale, rotation) + translation``.

    The rotation is renormalized on construction. Scale components may be
    negative (reflection) or zero.

    Example:
        >>> t = Transform(rotation=(0.7071, 0.0, 0.0, 0.7071), translation=(1, 0, 0))
        >>> t.apply([1.0, 0.0, 0.0])  # ~[1, 1, 0]
    """

    rotation: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)  # wxyz
    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)

    def __post_init__(self):
        rot = np.asarray(self.rotation, dtype=np.float64).reshape(-1)
        if rot.shape != (4,):
            raise ValueError(f"rotation: expected 4 values (w, x, y, z), got shape {rot.shape}")
        norm = np.linalg.norm(rot)
        if norm == 0.0:
            raise ValueError("rotation: zero quaternion is not a rotation")
        rot = rot / norm

        object.__setattr__(self, "rotation", tuple(float(v) for v in rot))
        object.__setattr__(self, "translation", _as_vector3(self.translation, "translation", 0.0))
        object.__setattr__(self, "scale", _as_vector3(self.scale, "scale", 1.0))

    # Array views
    @property
    def rotation_array(self) -> np.ndarray:
        return np.array(self.rotation, dtype=np.float64)

    @property
    def translation_array(self) -> np.ndarray:
        return np.array(self.translation, dtype=np.float64)

    @property
    def scale_array(self) -> np.ndarray:
        return np.array(self.scale, dtype=np.float64)

    def is_uniform_scale(self, planar: bool = False, atol: float = UNIFORM_SCALE_ATOL) -> bool:
        """Check if all scale components are equal.

        :param planar: Only compare x and y (2D domain)
        :param atol: Absolute tolerance
        :returns: True if the scale is uniform
        """
        s = self.scale_array[:2] if planar else self.scale_array
        return bool(np.all(np.abs(s - s[0]) <= atol))

    @property
    def uniform_scale(self) -> float:
        """Scalar scale (the x component); meaningful when is_uniform_scale()."""
        return self.scale[0]

    @property
    def max_abs_scale(self) -> float:
        return float(np.max(np.abs(self.scale_array)))

    def rotation_matrix(self) -> np.ndarray:
        """3x3 rotation matrix (without scale)."""
        from qvvbound.shared.rotation import quaternion_to_rotation_matrix

        return quaternion_to_rotation_matrix(self.rotation_array)

    def to_matrix(self) -> np.ndarray:
        """Convert to 4x4 homogeneous transformation matrix.

        :returns: 4x4 numpy array R @ diag(scale) with translation column
        """
        M = np.eye(4, dtype=np.float64)
        M[:3, :3] = self.rotation_matrix() * self.scale_array[np.newaxis, :]
        M[:3, 3] = self.translation
        return M

    def apply(self, points) -> np.ndarray:
        """Transform point(s).

        :param points: Point [3] or points [N, 3]
        :returns: Transformed point(s), same shape
        """
        from qvvbound.shared.rotation import quaternion_rotate

        p = np.asarray(points, dtype=np.float64)
        return quaternion_rotate(self.rotation_array, p * self.scale_array) + self.translation_array

    def is_neutral(self) -> bool:
        """Check if identity transform.

        :returns: True if this is the identity transform
        """
        return (
            np.allclose(self.scale_array, 1.0)
            and np.allclose(np.abs(self.rotation[0]), 1.0)
            and np.allclose(self.translation_array, 0.0)
        )

    # Factory methods
    @classmethod
    def identity(cls) -> Transform:
        return cls()

    @classmethod
    def from_translation(cls, x: float, y: float, z: float = 0.0) -> Transform:
        """Create translation-only transform.

        :param x: X translation
        :param y: Y translation
        :param z: Z translation
        :returns: Transform with only translation set
        """
        return cls(translation=(x, y, z))

    @classmethod
    def from_scale(cls, scale) -> Transform:
        """Create scale-only transform.

        :param scale: Uniform factor or per-axis [3]
        :returns: Transform with only scale set
        """
        return cls(scale=scale)

    @classmethod
    def from_axis_angle(
        cls, axis, angle_deg: float, translation=(0.0, 0.0, 0.0), scale=1.0
    ) -> Transform:
        """Create transform from rotation axis and angle in degrees.

        :param axis: Rotation axis [3]
        :param angle_deg: Rotation angle in degrees
        :param translation: Translation [3]
        :param scale: Uniform factor or per-axis [3]
        :returns: Transform
        """
        from qvvbound.shared.rotation import axis_angle_to_quaternion

        quat = axis_angle_to_quaternion(axis, np.radians(angle_deg))
        return cls(rotation=tuple(quat.tolist()), translation=translation, scale=scale)


@dataclass(frozen=True)
class DeltaTransform:
    """Net transform from raw to lossy under a shared uniform scale.

    With raw = (s, qr, tr) and lossy = (s, ql, tl):

    - ``rotation = conj(qr) * ql``
    - ``translation = rotate(tl - tr, conj(qr))``
    - ``scale = s``

    The error at a domain point p is then
    ``|rotate(s * p, rotation) + translation - s * p|``.
    """

    rotation: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)  # wxyz
    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    scale: float = 1.0

    def __post_init__(self):
        rot = np.asarray(self.rotation, dtype=np.float64).reshape(-1)
        if rot.shape != (4,):
            raise ValueError(f"rotation: expected 4 values (w, x, y, z), got shape {rot.shape}")
        object.__setattr__(self, "rotation", tuple(float(v) for v in rot))
        object.__setattr__(self, "translation", _as_vector3(self.translation, "translation", 0.0))
        object.__setattr__(self, "scale", float(self.scale))

    @property
    def rotation_array(self) -> np.ndarray:
        return np.array(self.rotation, dtype=np.float64)

    @property
    def translation_array(self) -> np.ndarray:
        return np.array(self.translation, dtype=np.float64)

    @property
    def angle(self) -> float:
        """Rotation angle in radians, 2 * acos(w), in [0, 2*pi]."""
        from qvvbound.shared.rotation import quaternion_angle

        return quaternion_angle(self.rotation)

    @property
    def is_rotation_degenerate(self) -> bool:
        """True when the rotation axis is undefined (rotation ~ identity)."""
        return bool(np.linalg.norm(self.rotation_array[1:]) < DEGENERATE_AXIS_EPS)

    @property
    def plane_normal(self) -> np.ndarray:
        """Unit rotation axis, or the zero vector when degenerate."""
        v = self.rotation_array[1:]
        norm = np.linalg.norm(v)
        if norm < DEGENERATE_AXIS_EPS:
            return np.zeros(3, dtype=np.float64)
        return v / norm


@dataclass
class TransformParameters:
    """Interactive transform parameters.

    The rotation axis is +Z turned by ``axis_pitch`` about X, then by
    ``axis_yaw`` about Y. All angles are in degrees.

    Example:
        >>> params = TransformParameters(angle=20.0, translation=(2.0, 5.0, 0.0))
        >>> transform = params.to_transform()
    """

    axis_yaw: float = 0.0
    axis_pitch: float = 0.0
    angle: float = 0.0
    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)

    def to_transform(self) -> Transform:
        """Build the Transform these parameters describe."""
        from qvvbound.transform.api import make_transform

        return make_transform(
            self.axis_yaw, self.axis_pitch, self.angle, self.translation, self.scale
        )

    def is_neutral(self) -> bool:
        """Check if these parameters produce the identity transform."""
        return self.to_transform().is_neutral()
