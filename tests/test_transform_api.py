"""Tests for transform construction, delta composition and point error."""

import numpy as np
import pytest

from qvvbound import Domain, Transform, UnsupportedScaleError
from qvvbound.transform.api import (
    axis_from_yaw_pitch,
    compose_delta,
    error_plane_normal,
    make_transform,
    make_transform_2d,
    point_error,
    point_error_delta,
)


def _random_transform(rng, scale) -> Transform:
    return Transform(
        rotation=tuple(rng.normal(size=4)),
        translation=tuple(rng.uniform(-5, 5, size=3)),
        scale=scale,
    )


def _random_unit_points(rng, n: int) -> np.ndarray:
    p = rng.normal(size=(n, 3))
    return p / np.linalg.norm(p, axis=1, keepdims=True)


class TestMakeTransform:
    """Test parameter-based construction."""

    @pytest.mark.parametrize(
        "yaw, pitch, expected",
        [
            (0.0, 0.0, [0.0, 0.0, 1.0]),
            (90.0, 0.0, [1.0, 0.0, 0.0]),
            (0.0, 90.0, [0.0, -1.0, 0.0]),
        ],
    )
    def test_axis_from_yaw_pitch(self, yaw, pitch, expected):
        """+Z turned by pitch about X then yaw about Y."""
        np.testing.assert_allclose(axis_from_yaw_pitch(yaw, pitch), expected, atol=1e-12)

    def test_defaults(self):
        """No arguments gives the identity."""
        assert make_transform().is_neutral()

    def test_rotation_in_degrees(self):
        """Angle is in degrees about the yaw/pitch axis."""
        t = make_transform(0.0, 0.0, 90.0)
        np.testing.assert_allclose(t.apply([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-12)

    def test_make_transform_2d(self):
        """Planar transforms keep z translation 0 and z scale 1."""
        t = make_transform_2d(30.0, translation=(1.0, 2.0), scale=(3.0, 0.75))

        assert t.translation == (1.0, 2.0, 0.0)
        assert t.scale == (3.0, 0.75, 1.0)
        assert t.rotation[1] == 0.0 and t.rotation[2] == 0.0

    def test_make_transform_2d_uniform_scale(self):
        """A scalar scale applies to x and y."""
        assert make_transform_2d(scale=2.0).scale == (2.0, 2.0, 1.0)


class TestComposeDelta:
    """Test DeltaComposer semantics."""

    @pytest.mark.parametrize("seed", range(5))
    @pytest.mark.parametrize("scale", [1.0, 1.7, -0.5])
    def test_delta_error_equals_direct_error(self, seed, scale):
        """Delta and direct point error agree within 1e-5 relative."""
        rng = np.random.default_rng(seed)
        raw = _random_transform(rng, scale)
        lossy = _random_transform(rng, scale)
        points = _random_unit_points(rng, 200)

        delta = compose_delta(raw, lossy)
        direct = point_error(points, lossy, raw)
        via_delta = point_error_delta(points, delta)

        np.testing.assert_allclose(via_delta, direct, rtol=1e-5, atol=1e-9)

    def test_identical_transforms_give_identity_delta(self):
        """raw == lossy composes to the identity."""
        t = make_transform(20.0, 10.0, 45.0, translation=(1, 2, 3), scale=2.0)
        delta = compose_delta(t, t)

        np.testing.assert_allclose(delta.rotation, [1.0, 0.0, 0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(delta.translation, 0.0, atol=1e-12)
        assert delta.scale == 2.0

    def test_translation_in_raw_frame(self):
        """Translation difference is expressed in the raw rotation frame."""
        raw = make_transform(0.0, 0.0, 90.0)
        lossy = make_transform(0.0, 0.0, 90.0, translation=(0.0, 1.0, 0.0))
        delta = compose_delta(raw, lossy)

        np.testing.assert_allclose(delta.translation, [1.0, 0.0, 0.0], atol=1e-12)

    def test_non_uniform_scale_rejected(self):
        """Non-uniform scales cannot form a delta."""
        raw = Transform(scale=(1.0, 2.0, 1.0))
        lossy = Transform(scale=(1.0, 2.0, 1.0))

        with pytest.raises(UnsupportedScaleError) as exc_info:
            compose_delta(raw, lossy)

        np.testing.assert_array_equal(exc_info.value.raw_scale, [1.0, 2.0, 1.0])
        assert isinstance(exc_info.value, ValueError)

    def test_different_uniform_scales_rejected(self):
        """Two distinct uniform scales do not share a delta scale."""
        with pytest.raises(UnsupportedScaleError):
            compose_delta(Transform(scale=1.0), Transform(scale=2.0))

    def test_circle_domain_ignores_z_scale(self):
        """z scale is irrelevant for points with z = 0."""
        raw = Transform(scale=(2.0, 2.0, 5.0))
        lossy = Transform(scale=(2.0, 2.0, 1.0))

        delta = compose_delta(raw, lossy, Domain.CIRCLE)
        assert delta.scale == 2.0

        with pytest.raises(UnsupportedScaleError):
            compose_delta(raw, lossy, Domain.SPHERE)


class TestErrorPlaneNormal:
    """Test error plane normal."""

    def test_swap_flips_sign(self):
        """Swapping raw and lossy negates the normal."""
        raw = make_transform(10.0, 20.0, 30.0)
        lossy = make_transform(-40.0, 5.0, 100.0)

        n1 = error_plane_normal(raw, lossy)
        n2 = error_plane_normal(lossy, raw)

        np.testing.assert_allclose(n1, -n2, atol=1e-12)
        assert np.linalg.norm(n1) == pytest.approx(1.0)

    def test_independent_of_translation_and_scale(self):
        """Only rotations determine the plane."""
        raw = make_transform(0.0, 0.0, 10.0)
        lossy = make_transform(30.0, 0.0, 80.0)
        lossy_moved = make_transform(30.0, 0.0, 80.0, translation=(5, -2, 1), scale=(1, 3, 2))

        np.testing.assert_allclose(
            error_plane_normal(raw, lossy), error_plane_normal(raw, lossy_moved), atol=1e-12
        )

    def test_same_rotation_is_degenerate(self):
        """Equal rotations give the zero vector."""
        t = make_transform(15.0, 25.0, 35.0)
        moved = make_transform(15.0, 25.0, 35.0, translation=(1, 0, 0))

        np.testing.assert_array_equal(error_plane_normal(t, moved), np.zeros(3))


class TestPointError:
    """Test point error evaluation."""

    def test_single_point_returns_float(self):
        """A single point gives a Python float."""
        result = point_error([1.0, 0.0, 0.0], Transform(), Transform.from_translation(3.0, 4.0))
        assert isinstance(result, float)
        assert result == pytest.approx(5.0)

    def test_planar_point_padded(self):
        """2D points are treated as z = 0."""
        a = Transform(scale=(1.0, 1.0, 10.0))
        assert point_error([0.6, 0.8], a, Transform()) == pytest.approx(0.0)

    def test_nan_propagates(self):
        """NaN inputs are not handled and propagate."""
        result = point_error([np.nan, 0.0, 0.0], Transform(), Transform.from_scale(2.0))
        assert np.isnan(result)

    def test_bad_shape(self):
        """Points must be [3], [2], [N, 3] or [N, 2]."""
        with pytest.raises(ValueError, match="Expected point"):
            point_error(np.zeros((2, 4)), Transform(), Transform())

    def test_symmetric(self):
        """Error does not depend on argument order."""
        a = make_transform(10.0, 0.0, 20.0, translation=(1, 2, 3), scale=(1, 2, 3))
        b = make_transform(0.0, 30.0, -20.0, scale=0.5)
        p = [0.0, 0.6, 0.8]

        assert point_error(p, a, b) == pytest.approx(point_error(p, b, a))
