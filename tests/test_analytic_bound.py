"""Tests for the closed-form rotation/translation bound."""

import numpy as np
import pytest

from qvvbound import DeltaTransform, Domain, Transform, compose_delta
from qvvbound.bounds.analytic import analytic_bound, rotation_translation_bound
from qvvbound.sampling import evaluate_sample_set_delta, fibonacci_sphere
from qvvbound.shared.rotation import axis_angle_to_quaternion
from qvvbound.transform.api import point_error_delta


def _delta(axis=(0.0, 0.0, 1.0), angle=0.0, translation=(0.0, 0.0, 0.0), scale=1.0):
    q = axis_angle_to_quaternion(axis, angle)
    return DeltaTransform(rotation=tuple(q), translation=translation, scale=scale)


class TestReductions:
    """Test degenerate reductions of the formula."""

    def test_rotation_only_quarter_turn(self):
        """r = 1, theta = 90 degrees gives sqrt(2)."""
        bound, _ = analytic_bound(_delta(angle=np.pi / 2))
        assert bound == pytest.approx(1.41421356, abs=1e-8)

    def test_rotation_only_scaled(self):
        """Rotation-only bound is 2 |s| sin(theta / 2)."""
        bound, _ = analytic_bound(_delta(axis=(1, 1, 0), angle=1.0, scale=-2.5))
        assert bound == pytest.approx(2 * 2.5 * np.sin(0.5), rel=1e-12)

    def test_translation_only(self):
        """Identity rotation gives |t|."""
        bound, point = analytic_bound(_delta(translation=(3.0, 4.0, 0.0)))

        assert bound == pytest.approx(5.0)
        assert point_error_delta(point, _delta(translation=(3.0, 4.0, 0.0))) == pytest.approx(5.0)

    def test_near_identity_rotation(self):
        """Tiny rotations fall back to |t|."""
        delta = DeltaTransform(rotation=(1.0, 1e-12, 0.0, 0.0), translation=(0.0, 2.0, 0.0))
        bound, _ = analytic_bound(delta)
        assert bound == pytest.approx(2.0, abs=1e-9)

    def test_zero_scale(self):
        """Zero scale collapses the domain to a point: bound is |t|."""
        bound, _ = analytic_bound(_delta(angle=1.0, translation=(0, 0, 1.5), scale=0.0))
        assert bound == pytest.approx(1.5)

    def test_helper_matches_solver(self):
        """rotation_translation_bound is the solver's formula."""
        delta = _delta(axis=(0, 1, 0), angle=0.8, translation=(1, 2, 3), scale=1.3)
        expected, _ = analytic_bound(delta)

        value = rotation_translation_bound(
            delta.rotation[0], delta.translation_array, delta.plane_normal, delta.scale
        )
        assert value == pytest.approx(expected)


class TestWitness:
    """Test the bound witness point."""

    def test_quarter_turn_with_perpendicular_translation(self):
        """Known configuration: bound 1 + sqrt(2) at (-1, -1, 0) / sqrt(2)."""
        delta = _delta(angle=np.pi / 2, translation=(1.0, 0.0, 0.0))
        bound, point = analytic_bound(delta)

        assert bound == pytest.approx(1.0 + np.sqrt(2.0))
        np.testing.assert_allclose(point, [-np.sqrt(0.5), -np.sqrt(0.5), 0.0], atol=1e-12)
        assert point_error_delta(point, delta) == pytest.approx(bound, abs=1e-12)

    def test_translation_along_axis(self):
        """Colinear translation: sqrt(along^2 + chord^2)."""
        delta = _delta(angle=np.pi / 2, translation=(0.0, 0.0, 2.0))
        bound, point = analytic_bound(delta)

        assert bound == pytest.approx(np.sqrt(6.0))
        assert point_error_delta(point, delta) == pytest.approx(bound, abs=1e-9)

    @pytest.mark.parametrize("seed", range(20))
    def test_witness_attains_bound(self, seed):
        """point_error_delta(witness) == bound within 1e-4 for random deltas."""
        rng = np.random.default_rng(seed)
        delta = _delta(
            axis=rng.normal(size=3),
            angle=rng.uniform(-np.pi, np.pi),
            translation=rng.uniform(-5, 5, size=3),
            scale=rng.uniform(-3, 3),
        )
        bound, point = analytic_bound(delta)

        assert np.linalg.norm(point) == pytest.approx(1.0, abs=1e-12)
        assert point_error_delta(point, delta) == pytest.approx(bound, abs=1e-4)

    @pytest.mark.parametrize("seed", range(5))
    def test_bound_dominates_dense_lattice(self, seed):
        """No lattice point exceeds the bound, and the lattice gets close to it."""
        rng = np.random.default_rng(100 + seed)
        delta = _delta(
            axis=rng.normal(size=3),
            angle=rng.uniform(-np.pi, np.pi),
            translation=rng.uniform(-2, 2, size=3),
            scale=rng.uniform(0.5, 2.0),
        )
        bound, _ = analytic_bound(delta)
        errors = evaluate_sample_set_delta(fibonacci_sphere(100_000), delta)

        assert errors.max() <= bound + 1e-9
        assert errors.max() >= bound * (1.0 - 1e-2)


class TestDegenerateFallback:
    """Test deterministic fallback witness selection."""

    def test_degenerate_rotation_uses_fixed_point(self):
        """Identity rotation picks the normalized fallback point."""
        delta = _delta(translation=(1.0, 2.0, 3.0))
        _, point = analytic_bound(delta)

        expected = np.array([0.2, 0.0, 0.7]) / np.linalg.norm([0.2, 0.0, 0.7])
        np.testing.assert_allclose(point, expected, atol=1e-12)

    def test_parallel_fallback_uses_alternate(self):
        """Fallback nearly parallel to the axis switches to the alternate point."""
        delta = _delta(angle=np.pi / 2)
        bound, point = analytic_bound(delta)

        np.testing.assert_allclose(point, [np.sqrt(0.5), np.sqrt(0.5), 0.0], atol=1e-12)
        assert point_error_delta(point, delta) == pytest.approx(bound, abs=1e-12)

    def test_deterministic(self):
        """Repeated calls return identical outputs."""
        delta = _delta(axis=(0.3, -0.2, 0.9), angle=2.0, translation=(0.0, 0.0, 0.0))
        b1, p1 = analytic_bound(delta)
        b2, p2 = analytic_bound(delta)

        assert b1 == b2
        np.testing.assert_array_equal(p1, p2)


class TestCircleDomain:
    """Test the analytic bound restricted to the unit circle."""

    def test_witness_in_plane(self):
        """Circle witnesses have z = 0."""
        raw = Transform.from_axis_angle([0, 0, 1], 20.0)
        lossy = Transform.from_axis_angle([0, 0, 1], 128.6, translation=(2.0, 5.0, 0.0))
        delta = compose_delta(raw, lossy, Domain.CIRCLE)

        bound, point = analytic_bound(delta, Domain.CIRCLE)

        assert point[2] == 0.0
        assert np.linalg.norm(point) == pytest.approx(1.0)
        assert point_error_delta(point, delta) == pytest.approx(bound, abs=1e-9)

    def test_degenerate_circle_fallback(self):
        """Identity rotation on the circle uses the planar fallback point."""
        _, point = analytic_bound(_delta(translation=(0, 0, 1)), "circle")

        expected = np.array([0.2, 0.7, 0.0]) / np.linalg.norm([0.2, 0.7])
        np.testing.assert_allclose(point, expected, atol=1e-12)

    def test_tilted_axis_rejected(self):
        """The circle solver only accepts rotations about z."""
        with pytest.raises(ValueError, match="rotation about z"):
            analytic_bound(_delta(axis=(1, 0, 0), angle=0.5), Domain.CIRCLE)
