"""Type aliases and enums for qvvbound.

Provides unified type hints for array-like parameters across all modules.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

import numpy as np

# 3D vector type (translation, scale, point, etc.)
Vector3 = tuple[float, float, float] | Sequence[float] | np.ndarray

# Quaternion type (w, x, y, z)
Quaternion = tuple[float, float, float, float] | Sequence[float] | np.ndarray

# General array-like type
ArrayLike = Sequence[float] | np.ndarray


class Domain(Enum):
    """Set of points the transforms are compared on.

    SPHERE is the unit sphere in 3D. CIRCLE is the unit circle in the z = 0
    plane, used for 2D transforms.
    """

    SPHERE = "sphere"
    CIRCLE = "circle"

    @classmethod
    def coerce(cls, value: Domain | str) -> Domain:
        """Accept a Domain or its string value ("sphere", "circle", "2d", "3d").

        :param value: Domain or name
        :returns: Domain member
        :raises ValueError: If the name is not recognized
        """
        if isinstance(value, cls):
            return value
        key = str(value).lower()
        aliases = {"3d": cls.SPHERE, "2d": cls.CIRCLE}
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(
                f"Unknown domain {value!r}, expected one of: sphere, circle, 2d, 3d"
            ) from None
