"""Preset library of transform comparisons.

Provides the standard raw/lossy comparison setups for the 2D and 3D domains,
with support for converting parameters to and from plain dicts.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from qvvbound.config.values import Transform, TransformParameters
from qvvbound.types import Domain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonPreset:
    """A named raw/lossy transform pair on a domain.

    Displacement presets compare a transform against the identity; their
    ``raw`` is the neutral TransformParameters.
    """

    name: str
    domain: Domain
    raw: TransformParameters
    lossy: TransformParameters
    description: str = ""

    @property
    def is_displacement(self) -> bool:
        return self.raw.is_neutral()

    def transforms(self) -> tuple[Transform, Transform]:
        """Build (raw, lossy) transforms.

        :returns: Tuple of (raw, lossy)
        """
        return self.raw.to_transform(), self.lossy.to_transform()


# ============================================================================
# 2D Presets (unit circle)
# ============================================================================

DISPLACEMENT_2D = ComparisonPreset(
    name="displacement_2d",
    domain=Domain.CIRCLE,
    raw=TransformParameters(),
    lossy=TransformParameters(scale=(3.0, 0.75, 1.0)),
    description="Non-uniform 2D scale against identity",
)

METRIC_2D = ComparisonPreset(
    name="metric_2d",
    domain=Domain.CIRCLE,
    raw=TransformParameters(angle=20.0),
    lossy=TransformParameters(angle=128.6, translation=(2.0, 5.0, 0.0)),
    description="2D rotation and translation error",
)

# ============================================================================
# 3D Presets (unit sphere)
# ============================================================================

DISPLACEMENT_3D = ComparisonPreset(
    name="displacement_3d",
    domain=Domain.SPHERE,
    raw=TransformParameters(),
    lossy=TransformParameters(angle=20.0),
    description="3D rotation about +Z against identity",
)

METRIC_3D = ComparisonPreset(
    name="metric_3d",
    domain=Domain.SPHERE,
    raw=TransformParameters(angle=20.0),
    lossy=TransformParameters(axis_yaw=61.4, angle=128.6, translation=(2.0, 5.0, 0.0)),
    description="3D rotation about a tilted axis plus translation",
)

# ============================================================================
# Preset Registry
# ============================================================================

COMPARISON_PRESETS: dict[str, ComparisonPreset] = {
    "displacement_2d": DISPLACEMENT_2D,
    "metric_2d": METRIC_2D,
    "displacement_3d": DISPLACEMENT_3D,
    "metric_3d": METRIC_3D,
}


def get_preset(name: str) -> ComparisonPreset:
    """Get comparison preset by name.

    :param name: Preset name (case-insensitive)
    :returns: ComparisonPreset
    :raises KeyError: If preset not found
    """
    name_lower = name.lower()
    if name_lower not in COMPARISON_PRESETS:
        available = ", ".join(COMPARISON_PRESETS.keys())
        raise KeyError(f"Unknown comparison preset '{name}'. Available: {available}")
    return COMPARISON_PRESETS[name_lower]


# ============================================================================
# Dict Conversion
# ============================================================================


def parameters_to_dict(params: TransformParameters) -> dict:
    """Convert TransformParameters to a plain dictionary.

    :param params: Parameters to convert
    :returns: Dictionary with list-valued vectors
    """
    d = asdict(params)
    d["translation"] = list(d["translation"])
    d["scale"] = list(d["scale"])
    return d


def parameters_from_dict(d: dict) -> TransformParameters:
    """Create TransformParameters from dictionary.

    Unknown keys are ignored. A scalar ``scale`` means uniform scale.

    :param d: Dictionary with parameter values
    :returns: TransformParameters instance

    Example:
        >>> params = parameters_from_dict({"angle": 45.0, "translation": [1, 0, 0]})
    """
    valid_fields = {"axis_yaw", "axis_pitch", "angle", "translation", "scale"}
    ignored = set(d) - valid_fields
    if ignored:
        logger.debug("[Presets] Ignoring unknown parameter keys: %s", sorted(ignored))

    kwargs = {}
    for k, v in d.items():
        if k not in valid_fields:
            continue
        if k == "scale" and isinstance(v, int | float):
            kwargs[k] = (float(v), float(v), float(v))
        elif k in ("translation", "scale"):
            kwargs[k] = tuple(float(x) for x in v)
        else:
            kwargs[k] = float(v)
    return TransformParameters(**kwargs)


def preset_to_dict(preset: ComparisonPreset) -> dict:
    """Convert a ComparisonPreset to a plain dictionary.

    :param preset: Preset to convert
    :returns: Dictionary with name, domain, raw and lossy parameters
    """
    return {
        "name": preset.name,
        "domain": preset.domain.value,
        "raw": parameters_to_dict(preset.raw),
        "lossy": parameters_to_dict(preset.lossy),
        "description": preset.description,
    }
