"""
Tests for the AngleValue type.
"""

import numpy as np
import pytest

from common.angles import AngleValue, NEG90, POS90, ZERO
from common.units import Q_


class TestConstruction:
    """Test the AngleValue factories."""

    def test_degrees_and_radians_agree(self):
        """Test that both representations describe the same angle."""
        a = AngleValue.from_degrees(30.0)
        assert a.radians == pytest.approx(np.pi / 6)

        b = AngleValue.from_radians(np.pi / 4)
        assert b.degrees == pytest.approx(45.0)

    def test_latitude_factories_clamp(self):
        """Test that latitude factories clamp to [-90, 90]."""
        assert AngleValue.from_degrees_latitude(95.0).degrees == 90.0
        assert AngleValue.from_degrees_latitude(-95.0).degrees == -90.0
        assert AngleValue.from_radians_latitude(2.0).radians == pytest.approx(np.pi / 2)

    def test_longitude_factories_clamp(self):
        """Test that longitude factories clamp to [-180, 180]."""
        assert AngleValue.from_degrees_longitude(190.0).degrees == 180.0
        assert AngleValue.from_radians_longitude(-4.0).radians == pytest.approx(-np.pi)

    def test_from_dms(self):
        """Test construction from degrees, minutes and seconds."""
        assert AngleValue.from_dms(45, 30, 0).degrees == pytest.approx(45.5)
        assert AngleValue.from_dms(-45, 30, 0).degrees == pytest.approx(-45.5)
        assert AngleValue.from_dms(10, 0, 36).degrees == pytest.approx(10.01)

    def test_from_dms_zero_degrees_keeps_minutes(self):
        """Test that zero degrees does not discard the minutes."""
        assert AngleValue.from_dms(0, 30, 0).degrees == pytest.approx(0.5)
        assert AngleValue.from_dms(-0.0, 30, 0).degrees == pytest.approx(-0.5)

    def test_from_dms_rejects_out_of_range_parts(self):
        """Test that minutes and seconds must be below 60."""
        with pytest.raises(ValueError):
            AngleValue.from_dms(10, 60, 0)
        with pytest.raises(ValueError):
            AngleValue.from_dms(10, 0, -1)

    def test_from_dmds(self):
        """Test construction from degrees and decimal minutes."""
        assert AngleValue.from_dmds(12, 15.0).degrees == pytest.approx(12.25)

    def test_from_quantity(self):
        """Test construction from pint quantities."""
        assert AngleValue.from_quantity(Q_(np.pi, "radian")).degrees == pytest.approx(180.0)
        with pytest.raises(ValueError):
            AngleValue.from_quantity(Q_(1.0, "meter"))

    def test_inverse_trigonometry(self):
        """Test the inverse trigonometric factories."""
        assert AngleValue.asin(1.0).degrees == pytest.approx(90.0)
        assert AngleValue.acos(0.0).degrees == pytest.approx(90.0)
        assert AngleValue.atan(1.0).degrees == pytest.approx(45.0)
        assert AngleValue.from_xy(0.0, 1.0).degrees == pytest.approx(90.0)


class TestArithmetic:
    """Test angle arithmetic and comparison."""

    def test_operators(self):
        """Test +, -, * and unary minus."""
        a = AngleValue.from_degrees(30.0)
        b = AngleValue.from_degrees(15.0)
        assert (a + b).degrees == pytest.approx(45.0)
        assert (a - b).degrees == pytest.approx(15.0)
        assert (a * 2).degrees == pytest.approx(60.0)
        assert (2 * a).degrees == pytest.approx(60.0)
        assert (-a).degrees == pytest.approx(-30.0)

    def test_divide(self):
        """Test division by a number and by an angle."""
        a = AngleValue.from_degrees(30.0)
        assert (a / 2).degrees == pytest.approx(15.0)
        assert a / AngleValue.from_degrees(15.0) == pytest.approx(2.0)

    def test_divide_by_zero_angle_raises(self):
        """Test that dividing by a zero angle is rejected."""
        with pytest.raises(ValueError):
            AngleValue.from_degrees(30.0).divide(ZERO)

    def test_missing_operand_raises(self):
        """Test that None operands are rejected."""
        with pytest.raises(ValueError):
            AngleValue.from_degrees(30.0).add(None)

    def test_comparison(self):
        """Test equality and ordering on degrees."""
        assert AngleValue.from_degrees(10.0) == AngleValue.from_degrees(10.0)
        assert AngleValue.from_degrees(10.0) < AngleValue.from_degrees(11.0)
        assert NEG90 < ZERO < POS90
        assert AngleValue.max(ZERO, POS90) is POS90
        assert AngleValue.min(ZERO, NEG90) is NEG90

    def test_angular_distance_wraps(self):
        """Test that angular distance takes the short way round."""
        a = AngleValue.from_degrees(170.0)
        b = AngleValue.from_degrees(-170.0)
        assert a.angular_distance_to(b).degrees == pytest.approx(20.0)

    def test_mean_angles(self):
        """Test midpoint and average."""
        a = AngleValue.from_degrees(10.0)
        b = AngleValue.from_degrees(20.0)
        assert AngleValue.mid_angle(a, b).degrees == pytest.approx(15.0)
        assert AngleValue.average(a, b, ZERO).degrees == pytest.approx(10.0)
        with pytest.raises(ValueError):
            AngleValue.average()

    def test_half_angle_functions(self):
        """Test the half-angle trigonometry."""
        a = AngleValue.from_degrees(90.0)
        assert a.sin() == pytest.approx(1.0)
        assert a.sin_half_angle() == pytest.approx(np.sqrt(0.5))
        assert a.tan_half_angle() == pytest.approx(1.0)


class TestNormalization:
    """Test normalization into canonical ranges."""

    @pytest.mark.parametrize("degrees,expected", [
        (190.0, -170.0),
        (-190.0, 170.0),
        (540.0, 180.0),
        (45.0, 45.0),
    ])
    def test_normalized_longitude(self, degrees, expected):
        """Test longitude normalization into [-180, 180]."""
        assert AngleValue.normalized_degrees_longitude(degrees) == pytest.approx(expected)

    @pytest.mark.parametrize("degrees,expected", [
        (100.0, 80.0),
        (-100.0, -80.0),
        (45.0, 45.0),
    ])
    def test_normalized_latitude(self, degrees, expected):
        """Test latitude normalization into [-90, 90]."""
        assert AngleValue.normalized_degrees_latitude(degrees) == pytest.approx(expected)

    def test_crosses_longitude_boundary(self):
        """Test antimeridian crossing detection."""
        a = AngleValue.from_degrees(170.0)
        b = AngleValue.from_degrees(-170.0)
        assert AngleValue.crosses_longitude_boundary(a, b)
        assert not AngleValue.crosses_longitude_boundary(a, AngleValue.from_degrees(160.0))


class TestFormatting:
    """Test degree/minute/second formatting."""

    def test_to_dms(self):
        """Test splitting into signed degrees, minutes and seconds."""
        assert AngleValue.from_degrees(-45.5).to_dms() == (-45.0, 30, 0.0)

    def test_to_dms_carries_rounded_seconds(self):
        """Test that 60 rounded seconds carry into minutes and degrees."""
        assert AngleValue.from_degrees(10.999999999).to_dms() == (11.0, 0, 0.0)

    def test_to_dms_keeps_sign_below_one_degree(self):
        """Test that small negative angles keep their sign through DMS."""
        dms = AngleValue.from_degrees(-0.5).to_dms()
        assert dms == (0.0, 30, 0.0)
        assert np.signbit(dms[0])
        assert AngleValue.from_dms(*dms).degrees == pytest.approx(-0.5)

    def test_formatted_dms_string(self):
        """Test the fixed-width DMS string for both signs."""
        assert AngleValue.from_degrees(45.5).to_formatted_dms_string() == "0045° 30’  0.00”"
        assert AngleValue.from_degrees(-45.5).to_formatted_dms_string() == "-0045° 30’  0.00”"
        assert AngleValue.from_degrees(-0.5).to_formatted_dms_string() == "-0000° 30’  0.00”"

    def test_to_dms_string(self):
        """Test the whole-second DMS string."""
        assert AngleValue.from_degrees(-45.5).to_dms_string() == "-45° 30’ 0”"

    def test_decimal_degrees_string(self):
        """Test fixed-decimal formatting and its digit limits."""
        assert AngleValue.from_degrees(45.5).to_decimal_degrees_string(3) == "45.500"
        with pytest.raises(ValueError):
            AngleValue.from_degrees(45.5).to_decimal_degrees_string(16)
