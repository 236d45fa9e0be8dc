"""
Tests for the error taxonomy and the coordinate value types.
"""

import pytest

from common.angles import AngleValue
from common.errors import (
    WARNING_CATEGORIES,
    ConversionError,
    ConversionWarning,
    ErrorKind,
    LatitudeBandWarning,
    WarningKind,
    raise_if,
)
from common.types import (
    GeodeticPoint,
    Hemisphere,
    MGRSComponents,
    UTMCoordinate,
)


class TestConversionError:
    """Test the ConversionError exception."""

    def test_is_value_error(self):
        """Test that conversion errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise ConversionError(ErrorKind.ZONE_OUT_OF_RANGE)

    def test_primary_kind_follows_declaration_order(self):
        """Test that the primary kind is the first declared one."""
        err = ConversionError([ErrorKind.NORTHING_OUT_OF_RANGE, ErrorKind.LATITUDE_OUT_OF_RANGE])
        assert err.kind is ErrorKind.LATITUDE_OUT_OF_RANGE
        assert err.has(ErrorKind.NORTHING_OUT_OF_RANGE)
        assert "latitude out of range" in str(err)

    def test_requires_a_kind(self):
        """Test that an empty kind list is a programming error."""
        with pytest.raises(ValueError):
            ConversionError([])

    def test_raise_if(self):
        """Test that raise_if only raises when faults were collected."""
        raise_if([], "nothing wrong")
        with pytest.raises(ConversionError) as excinfo:
            raise_if([ErrorKind.PRECISION_OUT_OF_RANGE], "bad precision")
        assert excinfo.value.kinds == frozenset({ErrorKind.PRECISION_OUT_OF_RANGE})

    def test_warning_categories(self):
        """Test that every warning kind has a warning class."""
        assert set(WARNING_CATEGORIES) == set(WarningKind)
        assert WARNING_CATEGORIES[WarningKind.LATITUDE_BAND_MISMATCH] is LatitudeBandWarning
        assert issubclass(LatitudeBandWarning, ConversionWarning)
        assert issubclass(ConversionWarning, UserWarning)


class TestHemisphere:
    """Test hemisphere parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("N", Hemisphere.NORTH),
        ("s", Hemisphere.SOUTH),
        ("north", Hemisphere.NORTH),
        (" South ", Hemisphere.SOUTH),
        (Hemisphere.NORTH, Hemisphere.NORTH),
    ])
    def test_parse(self, text, expected):
        """Test accepted spellings."""
        assert Hemisphere.parse(text) is expected

    def test_parse_invalid(self):
        """Test that anything else is rejected."""
        with pytest.raises(ConversionError) as excinfo:
            Hemisphere.parse("E")
        assert excinfo.value.kind is ErrorKind.HEMISPHERE_INVALID

    def test_of_latitude(self):
        """Test that the equator belongs to the north."""
        assert Hemisphere.of_latitude(0.0) is Hemisphere.NORTH
        assert Hemisphere.of_latitude(-0.1) is Hemisphere.SOUTH


class TestGeodeticPoint:
    """Test the GeodeticPoint type."""

    def test_round_trip_degrees(self):
        """Test construction and conversion back to degrees."""
        p = GeodeticPoint.from_degrees(63.554403, 23.716971, 120.0)
        assert p.to_degrees() == (63.554403, 23.716971)
        assert p.elevation == 120.0

    def test_invalid_ranges_reported_together(self):
        """Test that both out-of-range coordinates are reported."""
        with pytest.raises(ConversionError) as excinfo:
            GeodeticPoint.from_degrees(91.0, 181.0)
        assert excinfo.value.kinds == frozenset({
            ErrorKind.LATITUDE_OUT_OF_RANGE,
            ErrorKind.LONGITUDE_OUT_OF_RANGE,
        })

    def test_add_normalizes(self):
        """Test that adding positions wraps the longitude."""
        p = GeodeticPoint.from_degrees(10.0, 170.0)
        q = GeodeticPoint.from_degrees(5.0, 20.0)
        lat, lon = p.add(q).to_degrees()
        assert lat == pytest.approx(15.0)
        assert lon == pytest.approx(-170.0)


class TestMGRSComponents:
    """Test MGRS component formatting."""

    def test_canonical_and_grouped_strings(self):
        """Test both string forms."""
        c = MGRSComponents(31, "N", "A", "A", 66021.0, 0.0, 5)
        assert c.to_string() == "31NAA6602100000"
        assert c.to_grouped_string() == "31N AA 66021 00000"
        assert str(c) == "31NAA6602100000"

    def test_zero_padding_and_low_precision(self):
        """Test zero padding of single-digit zones and coarse precision."""
        c = MGRSComponents(6, "V", "U", "N", 40000.0, 5000.0, 2)
        assert c.to_string() == "06VUN4005"
        assert MGRSComponents(6, "V", "U", "N", 0.0, 0.0, 0).to_grouped_string() == "06V UN"

    def test_polar_has_no_zone(self):
        """Test that polar references omit the zone."""
        c = MGRSComponents(None, "Z", "A", "H", 0.0, 0.0, 5)
        assert c.grid_zone == "Z"
        assert c.to_string() == "ZAH0000000000"

    def test_overlong_digits_rejected(self):
        """Test that an offset needing more digits than the precision fails."""
        c = MGRSComponents(31, "N", "A", "A", 250000.0, 0.0, 5)
        with pytest.raises(ConversionError) as excinfo:
            c.to_string()
        assert excinfo.value.kind is ErrorKind.PRECISION_OUT_OF_RANGE


def test_utm_coordinate_str():
    """Test the UTM coordinate display form."""
    utm = UTMCoordinate(
        zone=31,
        hemisphere=Hemisphere.NORTH,
        easting=166021.0,
        northing=0.0,
        latitude=AngleValue.from_degrees(0.0),
        longitude=AngleValue.from_degrees(0.0),
        central_meridian=AngleValue.from_degrees(3.0),
    )
    assert str(utm) == "31 N 166021.0E 0.0N"
