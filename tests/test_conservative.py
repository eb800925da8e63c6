"""Tests for the conservative non-uniform scale bound."""

import numpy as np
import pytest

from qvvbound import Domain, Transform, compose_delta
from qvvbound.bounds.analytic import analytic_bound
from qvvbound.bounds.conservative import conservative_bound
from qvvbound.sampling import evaluate_sample_set, fibonacci_circle, fibonacci_sphere


def _random_transform(rng, scale=None) -> Transform:
    return Transform(
        rotation=tuple(rng.normal(size=4)),
        translation=tuple(rng.uniform(-3, 3, size=3)),
        scale=tuple(rng.uniform(-3, 3, size=3)) if scale is None else scale,
    )


@pytest.fixture(scope="module")
def dense_sphere():
    """100k-point sphere lattice shared by soundness tests."""
    return fibonacci_sphere(100_000)


class TestSoundness:
    """The conservative bound never falls below the true maximum."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_non_uniform(self, seed, dense_sphere):
        """Random non-uniform pairs are dominated on a dense lattice."""
        rng = np.random.default_rng(seed)
        raw = _random_transform(rng)
        lossy = _random_transform(rng)

        bound, _ = conservative_bound(raw, lossy)
        sampled = evaluate_sample_set(dense_sphere, lossy, raw).max()

        assert sampled <= bound + 1e-9

    def test_scale_only_difference(self, dense_sphere):
        """Same rotation and translation, different scales: bound stays positive."""
        rotation = (0.9, 0.1, -0.3, 0.2)
        raw = Transform(rotation=rotation, translation=(1, 2, 3), scale=(1.0, 2.0, 0.5))
        lossy = Transform(rotation=rotation, translation=(1, 2, 3), scale=(1.2, 1.9, 0.5))

        bound, _ = conservative_bound(raw, lossy)
        sampled = evaluate_sample_set(dense_sphere, lossy, raw).max()

        assert bound == pytest.approx(0.2)
        assert sampled <= bound + 1e-9
        assert sampled > 0.0

    @pytest.mark.parametrize("seed", range(5))
    def test_circle_domain(self, seed):
        """Circle bounds use only planar scales and stay sound."""
        rng = np.random.default_rng(50 + seed)
        raw = _random_transform(rng)
        lossy = _random_transform(rng)

        bound, point = conservative_bound(raw, lossy, Domain.CIRCLE)
        sampled = evaluate_sample_set(fibonacci_circle(10_000), lossy, raw).max()

        assert sampled <= bound + 1e-9
        assert point[2] == 0.0
        assert np.linalg.norm(point) == pytest.approx(1.0)


class TestReduction:
    """With a shared uniform scale the bound equals the exact one."""

    @pytest.mark.parametrize("scale", [1.0, 2.0, -1.5])
    def test_matches_analytic(self, scale):
        """Scale gap is zero and the radius is |s|."""
        rng = np.random.default_rng(7)
        raw = _random_transform(rng, scale=scale)
        lossy = _random_transform(rng, scale=scale)

        conservative, _ = conservative_bound(raw, lossy)
        exact, _ = analytic_bound(compose_delta(raw, lossy))

        assert conservative == pytest.approx(exact, rel=1e-12)

    def test_equal_non_uniform_scales(self):
        """Matching non-uniform scales add no scale gap."""
        raw = Transform(scale=(1.0, 3.0, 2.0))
        lossy = Transform(translation=(0.0, 0.0, 4.0), scale=(1.0, 3.0, 2.0))

        bound, _ = conservative_bound(raw, lossy)
        assert bound == pytest.approx(4.0)
