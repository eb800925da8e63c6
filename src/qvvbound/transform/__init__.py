"""QVV transform construction, delta composition and point error evaluation."""

from qvvbound.transform.api import (
    axis_from_yaw_pitch,
    compose_delta,
    error_plane_normal,
    make_transform,
    make_transform_2d,
    point_error,
    point_error_delta,
    shared_uniform_scale,
)

__all__ = [
    "axis_from_yaw_pitch",
    "make_transform",
    "make_transform_2d",
    "shared_uniform_scale",
    "compose_delta",
    "error_plane_normal",
    "point_error",
    "point_error_delta",
]
