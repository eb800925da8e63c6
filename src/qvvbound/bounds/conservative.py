"""Upper bound for arbitrary (non-uniform) scale differences.

In the raw frame the error is

    (Rd - I) Sr p + Rd (Sl - Sr) p + td

The first and last terms are bounded by the rotation/translation formula
evaluated at radius ``max |scale|``; the middle term by the largest
per-axis scale gap. The result is never below the true maximum but is not
attained in general.
"""

from __future__ import annotations

import logging

import numpy as np

from qvvbound.bounds.analytic import rotation_translation_bound, witness_direction
from qvvbound.config.values import Transform
from qvvbound.constants import CIRCLE_FALLBACK_POINT, DEGENERATE_AXIS_EPS
from qvvbound.shared.rotation import quaternion_conjugate, quaternion_multiply, quaternion_rotate
from qvvbound.types import Domain

logger = logging.getLogger(__name__)


def conservative_bound(
    raw: Transform, lossy: Transform, domain: Domain | str = Domain.SPHERE
) -> tuple[float, np.ndarray]:
    """Sound, non-exact bound for any pair of transforms.

    :param raw: Reference transform
    :param lossy: Approximated transform
    :param domain: SPHERE or CIRCLE
    :returns: Tuple of (bound, approximate witness point [3])
    """
    domain = Domain.coerce(domain)
    raw_inv = quaternion_conjugate(raw.rotation_array)
    delta_quat = quaternion_multiply(raw_inv, lossy.rotation_array)
    delta_trans = quaternion_rotate(raw_inv, lossy.translation_array - raw.translation_array)

    raw_scale = raw.scale_array
    lossy_scale = lossy.scale_array
    if domain is Domain.CIRCLE:
        raw_scale = raw_scale[:2]
        lossy_scale = lossy_scale[:2]

    radius = max(float(np.max(np.abs(raw_scale))), float(np.max(np.abs(lossy_scale))))
    scale_gap = float(np.max(np.abs(lossy_scale - raw_scale)))

    v = delta_quat[1:]
    norm = np.linalg.norm(v)
    normal = v / norm if norm >= DEGENERATE_AXIS_EPS else np.zeros(3, dtype=np.float64)

    w = float(delta_quat[0])
    bound = rotation_translation_bound(w, delta_trans, normal, radius) + scale_gap

    point = witness_direction(w, delta_trans, normal, Domain.SPHERE)
    if domain is Domain.CIRCLE:
        point = np.array([point[0], point[1], 0.0])
        planar_norm = np.linalg.norm(point)
        if planar_norm < DEGENERATE_AXIS_EPS:
            point = np.array(CIRCLE_FALLBACK_POINT, dtype=np.float64)
            planar_norm = np.linalg.norm(point)
        point = point / planar_norm

    logger.debug(
        "[ConservativeBound] radius=%.6g scale_gap=%.6g bound=%.6g", radius, scale_gap, bound
    )
    return bound, point
