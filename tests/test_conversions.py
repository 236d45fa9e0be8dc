"""
Tests for the degree-based public conversion functions.
"""

import pytest

from common.errors import (
    ConversionError,
    ErrorKind,
    LatitudeBandWarning,
    LongitudeDistanceWarning,
    WarningKind,
)
from common.types import Hemisphere
from gridref.conversions import (
    decode_mgrs,
    geodetic_to_mgrs,
    geodetic_to_ups,
    geodetic_to_utm,
    mgrs_to_geodetic,
    ups_to_geodetic,
    utm_to_geodetic,
)


class TestMGRSFunctions:
    """Test the MGRS entry points."""

    def test_encode(self):
        """Test encoding with the default precision."""
        assert geodetic_to_mgrs(0.0, 0.0) == "31NAA6602100000"
        assert geodetic_to_mgrs(0.0, 0.0, 1) == "31NAA70"

    def test_encode_quantities(self, quantity):
        """Test that pint angles are accepted in any angle unit."""
        assert geodetic_to_mgrs(quantity(0.0, "degree"), quantity(0.0, "radian")) == "31NAA6602100000"
        assert geodetic_to_mgrs(
            quantity(63.554403, "degree"), quantity(23.716971, "degree")
        ).startswith("34V")

    def test_encode_wrong_units(self, quantity):
        """Test that a length passed as an angle is rejected."""
        with pytest.raises(ValueError):
            geodetic_to_mgrs(quantity(1.0, "meter"), 0.0)

    def test_encode_error(self):
        """Test that conversion errors surface as ConversionError."""
        with pytest.raises(ConversionError) as excinfo:
            geodetic_to_mgrs(0.0, 0.0, 6)
        assert excinfo.value.kind is ErrorKind.PRECISION_OUT_OF_RANGE

    def test_decode(self):
        """Test decoding to degrees."""
        lat, lon = mgrs_to_geodetic("31NAA6602100000")
        assert lat == pytest.approx(0.0, abs=1e-5)
        assert lon == pytest.approx(0.0, abs=1e-5)

    def test_decode_band_mismatch_warns(self):
        """Test that a band mismatch is issued as a LatitudeBandWarning."""
        with pytest.warns(LatitudeBandWarning):
            lat, _ = mgrs_to_geodetic("31PAA6602100000")
        assert lat == pytest.approx(18.07, abs=0.05)

        with pytest.warns(LatitudeBandWarning):
            result = decode_mgrs("31PAA6602100000")
        assert result.warnings == (WarningKind.LATITUDE_BAND_MISMATCH,)

    def test_decode_malformed(self):
        """Test that a malformed string raises."""
        with pytest.raises(ConversionError) as excinfo:
            mgrs_to_geodetic("31NAI6602100000")
        assert excinfo.value.kind is ErrorKind.MALFORMED_MGRS_STRING


class TestUTMFunctions:
    """Test the UTM entry points."""

    def test_forward(self):
        """Test projecting to UTM."""
        c = geodetic_to_utm(0.0, 0.0)
        assert c.zone == 31
        assert c.easting == pytest.approx(166021.443, abs=1e-3)

    def test_forward_nad27(self):
        """Test projecting on NAD27."""
        c = geodetic_to_utm(40.0, -100.0, datum="NAD27")
        assert c.datum == "NAD27"
        assert c.zone == 14

    def test_inverse_with_lengths(self, quantity):
        """Test that pint lengths are accepted for grid coordinates."""
        point = utm_to_geodetic(31, "N", quantity(166.021443, "km"), quantity(0.0, "m"))
        lat, lon = point.to_degrees()
        assert lat == pytest.approx(0.0, abs=1e-6)
        assert lon == pytest.approx(0.0, abs=1e-6)

    def test_inverse_far_from_meridian_warns(self):
        """Test that far-off eastings are issued as a LongitudeDistanceWarning."""
        with pytest.warns(LongitudeDistanceWarning):
            point = utm_to_geodetic(31, "N", 0.0, 8.9e6)
        assert point.longitude.degrees < -6.0


class TestUPSFunctions:
    """Test the UPS entry points."""

    def test_forward(self):
        """Test projecting the north pole."""
        c = geodetic_to_ups(90.0, 0.0)
        assert c.hemisphere is Hemisphere.NORTH
        assert (c.easting, c.northing) == (2.0e6, 2.0e6)

    def test_round_trip(self):
        """Test that the inverse recovers the position."""
        c = geodetic_to_ups(-84.195396, 160.872803)
        lat, lon = ups_to_geodetic("S", c.easting, c.northing).to_degrees()
        assert lat == pytest.approx(-84.195396, abs=1e-8)
        assert lon == pytest.approx(160.872803, abs=1e-8)
