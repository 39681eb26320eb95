"""
Tests for eye anchor estimation.
"""

import pytest
import numpy as np

from eyes.vision.landmarks import EyeContours, Point2D
from eyes.vision.eye_mapper import (
    NEUTRAL_POINT,
    DetectionQuality,
    EyePositionEstimator,
    centroid,
    compute_anchor,
    midpoint,
)


LEFT_EYE = [(0.40, 0.50), (0.42, 0.52)]
RIGHT_EYE = [(0.60, 0.50), (0.62, 0.52)]


class TestCentroid:
    """Tests for contour centroids."""

    def test_two_points(self):
        """Test centroid of two points is their midpoint."""
        center = centroid(LEFT_EYE)

        assert center.x == pytest.approx(0.41)
        assert center.y == pytest.approx(0.51)

    def test_componentwise_mean(self):
        """Test x and y are averaged independently."""
        points = [(0.1, 0.9), (0.2, 0.8), (0.6, 0.1)]
        center = centroid(points)

        assert center.x == pytest.approx(0.3)
        assert center.y == pytest.approx(0.6)

    def test_single_point(self):
        """Test centroid of one point is that point."""
        assert centroid([(0.25, 0.75)]) == pytest.approx(Point2D(0.25, 0.75))

    def test_empty_sequence(self):
        """Test empty contour has no centroid."""
        assert centroid([]) is None

    def test_accepts_numpy_and_point2d(self):
        """Test arrays and Point2D sequences give the same result."""
        from_array = centroid(np.array(LEFT_EYE))
        from_points = centroid([Point2D(*p) for p in LEFT_EYE])

        assert from_array == pytest.approx(from_points)

    def test_returns_plain_floats(self):
        """Test centroid coordinates are Python floats, not numpy scalars."""
        center = centroid(LEFT_EYE)

        assert type(center.x) is float
        assert type(center.y) is float


class TestComputeAnchor:
    """Tests for the two-eye anchor."""

    def test_average_of_centroids(self):
        """Test anchor is the average of the two eye centroids."""
        anchor = compute_anchor(LEFT_EYE, RIGHT_EYE)

        expected = midpoint(centroid(LEFT_EYE), centroid(RIGHT_EYE))
        assert anchor.point == pytest.approx(expected)
        assert anchor.point == pytest.approx(Point2D(0.51, 0.51))
        assert anchor.quality is DetectionQuality.BOTH_EYES
        assert not anchor.is_degraded

    def test_uneven_contour_lengths(self):
        """Test each eye counts equally regardless of point count."""
        left = [(0.2, 0.2)] * 10
        right = [(0.4, 0.6)]

        anchor = compute_anchor(left, right)

        assert anchor.point == pytest.approx(Point2D(0.3, 0.4))

    def test_missing_left_eye(self):
        """Test missing left eye is replaced by the neutral point."""
        anchor = compute_anchor([], RIGHT_EYE)

        # Right centroid (0.61, 0.51) averaged with (0.5, 0.5)
        assert anchor.point == pytest.approx(Point2D(0.555, 0.505))
        assert anchor.quality is DetectionQuality.ONE_EYE
        assert anchor.is_degraded

    def test_missing_right_eye(self):
        """Test missing right eye is replaced by the neutral point."""
        anchor = compute_anchor(LEFT_EYE, None)

        assert anchor.point == pytest.approx(Point2D(0.455, 0.505))
        assert anchor.quality is DetectionQuality.ONE_EYE

    def test_both_eyes_missing(self):
        """Test no eye landmarks gives the neutral point, not a crash."""
        anchor = compute_anchor(None, [])

        assert anchor.point == NEUTRAL_POINT
        assert anchor.quality is DetectionQuality.NONE


class TestEyePositionEstimator:
    """Tests for the estimator wrapper."""

    def test_estimate_from_contours(self):
        """Test estimator uses both contours."""
        estimator = EyePositionEstimator()
        contours = EyeContours.from_points(LEFT_EYE, RIGHT_EYE)

        anchor = estimator.estimate(contours)

        assert anchor.point == pytest.approx(Point2D(0.51, 0.51))
        assert estimator.last_anchor is anchor

    def test_estimate_with_empty_eye(self):
        """Test default contours (no points) are treated as missing."""
        estimator = EyePositionEstimator()
        contours = EyeContours(right=np.array(RIGHT_EYE))

        anchor = estimator.estimate(contours)

        assert anchor.quality is DetectionQuality.ONE_EYE

    def test_reset(self):
        """Test reset clears the last anchor."""
        estimator = EyePositionEstimator()
        estimator.estimate(EyeContours.from_points(LEFT_EYE, RIGHT_EYE))

        estimator.reset()

        assert estimator.last_anchor is None
