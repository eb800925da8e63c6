"""Benchmark lattice sampling: Numba kernels vs the NumPy reference path."""

import logging
import time

import numpy as np

from qvvbound import (
    compose_delta,
    evaluate_sample_set,
    evaluate_sample_set_delta,
    fibonacci_sphere,
    make_transform,
    point_error,
    solve_bound,
)
from qvvbound.transform.kernels import warmup_error_kernels

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def benchmark(func, warmup=5, iterations=50):
    """Average wall time of func in milliseconds."""
    for _ in range(warmup):
        func()

    start = time.perf_counter()
    for _ in range(iterations):
        func()
    elapsed = time.perf_counter() - start

    return (elapsed / iterations) * 1000


def run_benchmarks():
    """Run sampling benchmarks."""
    logger.info("=" * 70)
    logger.info("ERROR SAMPLING BENCHMARKS")
    logger.info("=" * 70)

    start = time.perf_counter()
    warmup_error_kernels()
    logger.info(f"Kernel warmup: {(time.perf_counter() - start) * 1000:.1f} ms")

    raw = make_transform(angle_deg=20.0, scale=1.5)
    lossy = make_transform(61.4, 0.0, 128.6, translation=[2.0, 5.0, 0.0], scale=1.5)
    delta = compose_delta(raw, lossy)

    for n in [4_000, 100_000, 1_000_000]:
        points = fibonacci_sphere(n)
        logger.info(f"\nN = {n:,}")

        numpy_ms = benchmark(lambda: point_error(points, lossy, raw))
        direct_ms = benchmark(lambda: evaluate_sample_set(points, lossy, raw))
        delta_ms = benchmark(lambda: evaluate_sample_set_delta(points, delta))

        logger.info(f"  NumPy point_error:   {numpy_ms:8.3f} ms")
        logger.info(f"  Numba direct:        {direct_ms:8.3f} ms ({numpy_ms / direct_ms:.1f}x)")
        logger.info(f"  Numba delta:         {delta_ms:8.3f} ms ({numpy_ms / delta_ms:.1f}x)")

        errors = evaluate_sample_set(points, lossy, raw)
        assert np.allclose(errors, point_error(points, lossy, raw), atol=1e-9)

    bound_ms = benchmark(lambda: solve_bound(raw, lossy), iterations=1000)
    logger.info(f"\nAnalytic bound: {bound_ms * 1000:.1f} us per call")

    logger.info("\n" + "=" * 70)


if __name__ == "__main__":
    run_benchmarks()
