"""
Constants and default values for qvvbound.

Centralizes tolerances, fallback vectors, and sampling defaults.
"""

from __future__ import annotations

# =============================================================================
# Tolerances
# =============================================================================

# Scale components closer than this are treated as one uniform scale
UNIFORM_SCALE_ATOL = 1e-6

# Rotation axis (quaternion vector part) shorter than this is degenerate
DEGENERATE_AXIS_EPS = 1e-8

# cross(translation, axis) shorter than this falls back to a fixed point
DEGENERATE_CROSS_EPS = 1e-8

# Discriminant of the scaled-circle quartic below this is singular
SINGULARITY_EPS = 1e-12

# Planar (circle domain) components below this count as zero
PLANAR_ATOL = 1e-9

# Rotation angle below this (radians) yields the identity quaternion
IDENTITY_ANGLE_EPS = 1e-8

# =============================================================================
# Witness Fallback Points
# =============================================================================

# Used when the witness direction is undefined; projected onto the error plane
SPHERE_FALLBACK_POINT = (0.2, 0.0, 0.7)
SPHERE_FALLBACK_POINT_ALT = (0.0, 0.7, 0.3)  # When primary is near-parallel to the axis
SPHERE_FALLBACK_PARALLEL_DOT = 0.9
CIRCLE_FALLBACK_POINT = (0.2, 0.7, 0.0)

# =============================================================================
# Sampling Defaults
# =============================================================================

DEFAULT_NUM_POINTS = 4000
MIN_NUM_POINTS = 10
MAX_NUM_POINTS = 10000

# Normalization range used when all sampled errors are (nearly) equal
FLAT_RANGE_EPS = 1e-6
FLAT_RANGE_MIN = 0.0
FLAT_RANGE_MAX = 2.0

# Heat-map hue: error 0 -> blue (240), error 1 -> red (0)
HEAT_HUE_MAX = 240.0

DEFAULT_HISTOGRAM_BINS = 64
