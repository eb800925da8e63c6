"""
Example: Transform error bound usage.

Demonstrates how to use qvvbound for:
- Exact bounds for rotation + translation under uniform scale
- Exact 2D bounds for non-uniform scale
- Conservative bounds for arbitrary 3D scale differences
- Sampling, heat-map hues and the sorted error curve
- Evaluating the shipped comparison presets
"""

import logging

import numpy as np

from qvvbound import (
    BoundVerifier,
    Domain,
    ErrorBoundEngine,
    Transform,
    compose_delta,
    get_preset,
    make_transform,
    make_transform_2d,
    point_error,
    solve_bound,
)
from qvvbound.config import COMPARISON_PRESETS

# Configure logging to see engine summaries
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def example_1_uniform_scale():
    """Example 1: Exact bound and witness point in 3D."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Rotation + Translation (Uniform Scale)")
    print("=" * 70)

    raw = make_transform(angle_deg=20.0)
    lossy = make_transform(61.4, 0.0, 128.6, translation=[2.0, 5.0, 0.0])

    result = solve_bound(raw, lossy)
    delta = compose_delta(raw, lossy)

    print(f"Delta angle: {np.degrees(delta.angle):.2f} deg")
    print(f"Error plane normal: {np.round(result.plane_normal, 4)}")
    print(f"Bound: {result.bound:.6f} ({result.mode.value})")
    print(f"Witness point: {np.round(result.error_point, 4)}")
    print(f"Error at witness: {point_error(result.error_point, lossy, raw):.6f}")


def example_2_planar_scale():
    """Example 2: Exact 2D bound for non-uniform scale."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Non-Uniform Scale on the Unit Circle")
    print("=" * 70)

    raw = Transform.identity()
    lossy = make_transform_2d(-90.0, scale=(3.0, 1.0))

    result = solve_bound(raw, lossy, Domain.CIRCLE)

    print(f"Bound: {result.bound:.6f} (1 + sqrt(5) = {1.0 + np.sqrt(5.0):.6f})")
    print(f"Witness point: {np.round(result.error_point, 4)}")
    print(f"Exact: {result.exact}")


def example_3_conservative():
    """Example 3: Conservative bound for 3D non-uniform scale."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Conservative Bound (3D Non-Uniform Scale)")
    print("=" * 70)

    raw = Transform(scale=(1.0, 2.0, 0.5))
    lossy = make_transform(30.0, 10.0, 15.0, translation=[0.1, 0.0, 0.0], scale=(1.1, 1.8, 0.5))

    engine = ErrorBoundEngine(num_points=10_000)
    report = engine.evaluate(raw, lossy)

    print(f"Bound: {report.bound:.6f} ({report.result.mode.value})")
    print(f"Sampled max: {report.max_sampled_error:.6f}")
    print(f"Tightness: {report.tightness:.3f}")
    print(f"Sound: {report.sound}")


def example_4_sampling():
    """Example 4: Sampled errors for display layers."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Sampling, Heat Map and Error Curve")
    print("=" * 70)

    raw, lossy = get_preset("metric_3d").transforms()
    samples = ErrorBoundEngine().samples(raw, lossy, Domain.SPHERE)

    mean, std, lo, hi = samples.stats()
    print(f"Samples: {samples.n_samples}")
    print(f"Error mean={mean:.4f} std={std:.4f} min={lo:.4f} max={hi:.4f}")
    print(f"Worst sampled point: {np.round(samples.worst_point, 4)}")

    hues = samples.heat_hues()
    print(f"Hue range: [{hues.min():.1f}, {hues.max():.1f}] deg")

    curve = samples.sorted_curve()
    print(f"Curve: {len(curve)} values, y-limit {samples.curve_y_max():.3f}")

    counts, edges = samples.histogram(8)
    for count, left, right in zip(counts, edges[:-1], edges[1:], strict=True):
        print(f"  [{left:.3f}, {right:.3f}): {count}")


def example_5_presets():
    """Example 5: Evaluate every comparison preset."""
    print("\n" + "=" * 70)
    print("EXAMPLE 5: Comparison Presets")
    print("=" * 70)

    engine = ErrorBoundEngine()
    for name in COMPARISON_PRESETS:
        preset = get_preset(name)
        raw, lossy = preset.transforms()
        report = engine.evaluate_preset(preset)
        BoundVerifier.assert_sound(report.result, report.samples)
        BoundVerifier.assert_witness(report.result, raw, lossy)
        print(
            f"{name:16s} {preset.domain.value:7s} bound={report.bound:.6f} "
            f"sampled={report.max_sampled_error:.6f}"
        )


def main():
    """Run all examples."""
    print("\n" + "=" * 70)
    print("QVVBOUND ERROR BOUND EXAMPLES")
    print("=" * 70)

    example_1_uniform_scale()
    example_2_planar_scale()
    example_3_conservative()
    example_4_sampling()
    example_5_presets()

    print("\n" + "=" * 70)
    print("ALL EXAMPLES COMPLETED")
    print("=" * 70)


if __name__ == "__main__":
    main()
