"""Configuration module for qvvbound.

This module provides value types, conventional parameter ranges, and
comparison presets.

Usage:
    from qvvbound.config import TRANSFORM_PARAMETER_CONFIG
    TRANSFORM_PARAMETER_CONFIG.angle.max_value  # 180.0

    from qvvbound.config import get_preset
    raw, lossy = get_preset("metric_3d").transforms()
"""

from qvvbound.config.operations import ParameterSpec
from qvvbound.config.presets import (
    COMPARISON_PRESETS,
    DISPLACEMENT_2D,
    DISPLACEMENT_3D,
    METRIC_2D,
    METRIC_3D,
    ComparisonPreset,
    get_preset,
    parameters_from_dict,
    parameters_to_dict,
    preset_to_dict,
)
from qvvbound.config.transform import TRANSFORM_PARAMETER_CONFIG, TransformParameterConfig
from qvvbound.config.values import DeltaTransform, Transform, TransformParameters

__all__ = [
    # Values
    "Transform",
    "DeltaTransform",
    "TransformParameters",
    # Parameter specs
    "ParameterSpec",
    "TransformParameterConfig",
    "TRANSFORM_PARAMETER_CONFIG",
    # Presets
    "ComparisonPreset",
    "COMPARISON_PRESETS",
    "DISPLACEMENT_2D",
    "METRIC_2D",
    "DISPLACEMENT_3D",
    "METRIC_3D",
    "get_preset",
    "parameters_to_dict",
    "parameters_from_dict",
    "preset_to_dict",
]
