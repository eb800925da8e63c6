"""
qvvbound - Error bounds for lossy QVV transforms

Analytic maximum displacement between a "raw" QVV transform (rotation
quaternion, translation vector, per-axis scale vector) and a "lossy"
approximation of it, over the unit sphere (3D) or unit circle (2D).

Features:
- Closed-form exact bound and witness point for rotation + translation under uniform scale
- Exact 2D bound for non-uniform scale via the scaled-circle maximizer
- Conservative (sound, non-exact) bound for arbitrary 3D scale differences
- Fibonacci-lattice sampling with parallel Numba kernels (PyTorch tensors supported)
- Heat-map normalization, sorted error curve and histogram for display layers

Quaternion Convention: (w, x, y, z) - scalar first

Example:
    >>> from qvvbound import Domain, make_transform, solve_bound
    >>>
    >>> raw = make_transform(angle_deg=20)
    >>> lossy = make_transform(61.4, 0, 128.6, translation=[2, 5, 0])
    >>> result = solve_bound(raw, lossy, Domain.SPHERE)
    >>> result.bound, result.error_point, result.exact

Example - Engine:
    >>> from qvvbound import ErrorBoundEngine, get_preset
    >>>
    >>> report = ErrorBoundEngine().evaluate_preset(get_preset("metric_3d"))
    >>> report.bound, report.max_sampled_error, report.sound
"""

__version__ = "0.1.0"

from qvvbound.bounds import (
    BoundMode,
    BoundResult,
    analytic_bound,
    conservative_bound,
    displacement_bound,
    scaled_circle_max,
    select_bound_mode,
    solve_bound,
)
from qvvbound.config import (
    TRANSFORM_PARAMETER_CONFIG,
    ComparisonPreset,
    DeltaTransform,
    ParameterSpec,
    Transform,
    TransformParameters,
    get_preset,
)
from qvvbound.errors import UnsupportedScaleError
from qvvbound.processing import ErrorBoundEngine, EvaluationReport
from qvvbound.sampling import (
    SampleErrors,
    evaluate_sample_set,
    evaluate_sample_set_delta,
    fibonacci_circle,
    fibonacci_sphere,
    sample_errors,
)
from qvvbound.transform import (
    compose_delta,
    error_plane_normal,
    make_transform,
    make_transform_2d,
    point_error,
    point_error_delta,
)
from qvvbound.types import Domain
from qvvbound.verification import BoundVerifier

__all__ = [
    # Values
    "Transform",
    "DeltaTransform",
    "TransformParameters",
    "Domain",
    # Construction
    "make_transform",
    "make_transform_2d",
    "compose_delta",
    "error_plane_normal",
    # Point error
    "point_error",
    "point_error_delta",
    # Bounds
    "analytic_bound",
    "scaled_circle_max",
    "conservative_bound",
    "select_bound_mode",
    "solve_bound",
    "displacement_bound",
    "BoundMode",
    "BoundResult",
    # Sampling
    "fibonacci_sphere",
    "fibonacci_circle",
    "evaluate_sample_set",
    "evaluate_sample_set_delta",
    "sample_errors",
    "SampleErrors",
    # Engine
    "ErrorBoundEngine",
    "EvaluationReport",
    "BoundVerifier",
    # Config
    "ParameterSpec",
    "TRANSFORM_PARAMETER_CONFIG",
    "ComparisonPreset",
    "get_preset",
    # Errors
    "UnsupportedScaleError",
]
