"""Tests for the scaled-circle maximizer (2D rotation + non-uniform scale)."""

import numpy as np
import pytest

from qvvbound.bounds.circle import (
    circle_candidates,
    scaled_circle_max,
    scaled_circle_max_closed_form,
)


def _dense_max(theta: float, sx: float, sy: float, n: int = 200_000) -> float:
    phi = np.linspace(0.0, 2.0 * np.pi, n, endpoint=False)
    x, y = np.cos(phi), np.sin(phi)
    c, s = np.cos(theta), np.sin(theta)
    qx = c * sx * x - s * sy * y - x
    qy = s * sx * x + c * sy * y - y
    return float(np.sqrt(qx * qx + qy * qy).max())


class TestWorkedExample:
    """theta = -90 degrees, sx = 3, sy = 1."""

    def test_maximizer_coordinate(self):
        """|x| of the maximizer is sqrt(0.5 + 1 / sqrt(5))."""
        _, point = scaled_circle_max(-np.pi / 2, 3.0, 1.0)
        assert abs(point[0]) == pytest.approx(np.sqrt(0.5 + 1.0 / np.sqrt(5.0)), abs=1e-6)

    def test_bound_value(self):
        """Maximum displacement is 1 + sqrt(5) = sqrt(6 + 2 sqrt(5))."""
        bound, _ = scaled_circle_max(-np.pi / 2, 3.0, 1.0)

        assert bound == pytest.approx(1.0 + np.sqrt(5.0), abs=1e-6)
        assert bound == pytest.approx(np.sqrt(6.0 + 2.0 * np.sqrt(5.0)), abs=1e-6)

    def test_point_on_circle(self):
        """Returned point has unit length."""
        _, point = scaled_circle_max(-np.pi / 2, 3.0, 1.0)
        assert np.hypot(point[0], point[1]) == pytest.approx(1.0, abs=1e-12)


class TestAgainstReferences:
    """Cross-check with the closed form and dense sampling."""

    @pytest.mark.parametrize("seed", range(25))
    def test_matches_closed_form(self, seed):
        """Candidate enumeration finds the largest singular value of R S - I."""
        rng = np.random.default_rng(seed)
        theta = rng.uniform(-np.pi, np.pi)
        sx, sy = rng.uniform(-5, 5, size=2)

        bound, _ = scaled_circle_max(theta, sx, sy)
        assert bound == pytest.approx(scaled_circle_max_closed_form(theta, sx, sy), rel=1e-7)

    @pytest.mark.parametrize(
        "theta, sx, sy",
        [(0.3, 2.0, 0.5), (-2.0, -1.0, 3.0), (np.pi, 0.0, 1.0), (1.0, 4.0, 4.0)],
    )
    def test_dominates_dense_sampling(self, theta, sx, sy):
        """Bound is at least, and close to, the densely sampled maximum."""
        bound, _ = scaled_circle_max(theta, sx, sy)
        sampled = _dense_max(theta, sx, sy)

        assert sampled <= bound + 1e-9
        assert sampled >= bound - 1e-6

    def test_uniform_scale_is_rotation_chord(self):
        """sx = sy = 1 reduces to 2 sin(theta / 2)."""
        bound, _ = scaled_circle_max(np.pi / 2, 1.0, 1.0)
        assert bound == pytest.approx(np.sqrt(2.0))


class TestSingularity:
    """Test the numeric singularity guard."""

    def test_boundary_only_when_singular(self):
        """U = 0 leaves only the boundary candidates."""
        assert circle_candidates(0.0, 3.0, -1.0) == [-1.0, 1.0]

    def test_regular_case_has_six_candidates(self):
        """Four interior roots plus two boundary points."""
        assert len(circle_candidates(-np.pi / 2, 3.0, 1.0)) == 6

    def test_singular_constant_objective(self):
        """theta = 0, sx + sy = 2: the error is constant and exact."""
        bound, point = scaled_circle_max(0.0, 3.0, -1.0)

        assert bound == pytest.approx(2.0)
        np.testing.assert_array_equal(point, [-1.0, 0.0])

    def test_identity_is_zero(self):
        """No rotation and unit scale gives zero, never NaN."""
        bound, point = scaled_circle_max(0.0, 1.0, 1.0)

        assert bound == 0.0
        assert np.all(np.isfinite(point))

    def test_deterministic(self):
        """Repeated calls give identical results."""
        first = scaled_circle_max(0.7, 2.0, -0.3)
        second = scaled_circle_max(0.7, 2.0, -0.3)

        assert first[0] == second[0]
        np.testing.assert_array_equal(first[1], second[1])
