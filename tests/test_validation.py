"""
Tests for the accuracy checks.
"""

import pytest

from validation.accuracy import (
    AccuracyChecker,
    cell_size,
    compute_round_trip_metrics,
    reference_utm,
    round_trip_error,
    utm_epsg,
)


class TestHelpers:
    """Test the accuracy helpers."""

    def test_cell_size(self):
        """Test cell edge lengths."""
        assert cell_size(5) == 1.0
        assert cell_size(0) == 100_000.0

    def test_utm_epsg(self):
        """Test EPSG codes of the WGS84 UTM zones."""
        assert utm_epsg(31, False) == 32631
        assert utm_epsg(55, True) == 32755

    def test_reference_utm(self):
        """Test the PROJ reference for (0, 0)."""
        easting, northing = reference_utm(0.0, 0.0)
        assert easting == pytest.approx(166021.443, abs=1e-3)
        assert northing == pytest.approx(0.0, abs=1e-6)

    def test_round_trip_error(self):
        """Test that coarser precision gives a larger error."""
        fine = round_trip_error(0.0, 0.0, 5)
        coarse = round_trip_error(0.0, 0.0, 0)
        assert fine < 1.0
        assert coarse > 10_000.0

    def test_metrics(self, all_points):
        """Test the round-trip summary."""
        metrics = compute_round_trip_metrics(all_points)
        assert metrics.count == len(all_points)
        assert metrics.max_error_m < 1.0
        assert metrics.mean_error_m <= metrics.p95_error_m <= metrics.max_error_m


class TestAccuracyChecker:
    """Test the AccuracyChecker class."""

    @pytest.fixture
    def checker(self):
        return AccuracyChecker(log_violations=False)

    def test_round_trip_passes(self, checker, all_points):
        """Test the round trip check on valid points."""
        result = checker.check_round_trip(all_points)
        assert result.passed
        assert result.details['failed_points'] == []

    def test_round_trip_zero_tolerance_fails(self, checker):
        """Test that an impossible tolerance is reported."""
        result = checker.check_round_trip([(0.0, 0.0)], tolerance_m=0.0)
        assert not result.passed
        assert result.details['failed_points'] == [(0.0, 0.0)]

    def test_precision_monotonicity(self, checker, sample_points, polar_points):
        """Test that finer precision never increases the error."""
        result = checker.check_precision_monotonicity(sample_points[:4] + polar_points[:2])
        assert result.passed

    def test_against_proj(self, checker, all_points):
        """Test PROJ agreement in both UTM and UPS."""
        result = checker.check_against_proj(all_points)
        assert result.passed
        assert result.details['max_difference_m'] < 0.05

    def test_check_all(self, checker, sample_points):
        """Test running every check."""
        results = checker.check_all(sample_points[:3])
        assert [r.test_name for r in results] == [
            "round_trip", "precision_monotonicity", "proj_agreement"
        ]
        assert all(r.passed for r in results)
