"""Transform parameter configuration.

This module defines the conventional ranges for every interactive transform
parameter, shared by the 2D and 3D comparison setups.
"""

from __future__ import annotations

from dataclasses import dataclass

from qvvbound.config.operations import ParameterSpec
from qvvbound.constants import DEFAULT_NUM_POINTS, MAX_NUM_POINTS, MIN_NUM_POINTS


@dataclass(frozen=True)
class TransformParameterConfig:
    """Conventional ranges for transform parameters.

    Vector parameters (translation, scale) share one spec per component.
    """

    angle: ParameterSpec = ParameterSpec(
        name="angle",
        min_value=-180.0,
        max_value=180.0,
        default=0.0,
        neutral=0.0,
        unit="degrees",
        description="Rotation angle about the axis: 0=no rotation",
    )

    displacement_angle_2d: ParameterSpec = ParameterSpec(
        name="displacement_angle_2d",
        min_value=-360.0,
        max_value=360.0,
        default=0.0,
        neutral=0.0,
        unit="degrees",
        description="Rotation angle for 2D displacement against identity",
    )

    axis_yaw: ParameterSpec = ParameterSpec(
        name="axis_yaw",
        min_value=-180.0,
        max_value=180.0,
        default=0.0,
        neutral=0.0,
        unit="degrees",
        description="Yaw of the rotation axis, turning +Z about Y",
    )

    axis_pitch: ParameterSpec = ParameterSpec(
        name="axis_pitch",
        min_value=-180.0,
        max_value=180.0,
        default=0.0,
        neutral=0.0,
        unit="degrees",
        description="Pitch of the rotation axis, turning +Z about X",
    )

    translation: ParameterSpec = ParameterSpec(
        name="translation",
        min_value=-20.0,
        max_value=20.0,
        default=0.0,
        neutral=0.0,
        unit="units",
        description="Translation component",
    )

    scale: ParameterSpec = ParameterSpec(
        name="scale",
        min_value=-5.0,
        max_value=5.0,
        default=1.0,
        neutral=1.0,
        unit="factor",
        description="Scale component: negative values reflect",
    )

    num_points: ParameterSpec = ParameterSpec(
        name="num_points",
        min_value=float(MIN_NUM_POINTS),
        max_value=float(MAX_NUM_POINTS),
        default=float(DEFAULT_NUM_POINTS),
        neutral=float(DEFAULT_NUM_POINTS),
        unit="count",
        description="Number of lattice sample points",
    )

    def get_spec(self, name: str) -> ParameterSpec:
        """Get parameter spec by name.

        :param name: Parameter name
        :return: ParameterSpec for the parameter
        :raises AttributeError: If parameter not found
        """
        spec = getattr(self, name)
        if not isinstance(spec, ParameterSpec):
            raise AttributeError(f"{name!r} is not a transform parameter")
        return spec

    def get_all_specs(self) -> dict[str, ParameterSpec]:
        """Get all parameter specs as a dictionary.

        :return: Dictionary mapping parameter names to specs
        """
        return {
            "angle": self.angle,
            "displacement_angle_2d": self.displacement_angle_2d,
            "axis_yaw": self.axis_yaw,
            "axis_pitch": self.axis_pitch,
            "translation": self.translation,
            "scale": self.scale,
            "num_points": self.num_points,
        }


# Singleton instance for use throughout the codebase
TRANSFORM_PARAMETER_CONFIG = TransformParameterConfig()
