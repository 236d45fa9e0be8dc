"""
Tests for the UPS converter.
"""

import pytest

from common.errors import ConversionError, ErrorKind
from common.types import Hemisphere
from geospatial.distance_calculations import geodesic_distance
from gridref.ups import ups_to_point
from validation.accuracy import reference_ups


class TestUPSProjector:
    """Test the UPS converter."""

    @pytest.mark.parametrize("lat,hemisphere", [
        (90.0, Hemisphere.NORTH),
        (-90.0, Hemisphere.SOUTH),
    ])
    def test_poles(self, ups, lat, hemisphere):
        """Test that the poles map to the false origin."""
        c = ups.forward(lat, 45.0)
        assert c.hemisphere is hemisphere
        assert (c.easting, c.northing) == (2.0e6, 2.0e6)

    def test_agrees_with_proj(self, ups, polar_points):
        """Test agreement with EPSG:32661 and EPSG:32761."""
        # the rounded true-scale latitude 81.114528 stands in for k0 = 0.994
        for lat, lon in polar_points + [(72.0, 0.0), (-72.0, 90.0)]:
            c = ups.forward(lat, lon)
            easting, northing = reference_ups(lat, lon)
            assert c.easting == pytest.approx(easting, abs=0.05)
            assert c.northing == pytest.approx(northing, abs=0.05)

    def test_axis_directions(self, ups):
        """Test the grid orientation in both zones."""
        north = ups.forward(85.0, 90.0)
        assert north.easting > 2.0e6
        assert north.northing == pytest.approx(2.0e6, abs=1e-6)

        south = ups.forward(-85.0, 0.0)
        assert south.northing > 2.0e6
        assert south.easting == pytest.approx(2.0e6, abs=1e-6)

    def test_round_trip(self, ups, polar_points):
        """Test that inverse(forward(p)) returns p."""
        for lat, lon in polar_points:
            c = ups.forward(lat, lon)
            back = ups.inverse(c.hemisphere, c.easting, c.northing)
            assert geodesic_distance(lat, lon, back.latitude.degrees, back.longitude.degrees) < 1e-3

    @pytest.mark.parametrize("lat", [71.9, -71.9, 0.0, 95.0])
    def test_forward_outside_caps(self, ups, lat):
        """Test that positions outside the polar caps are rejected."""
        with pytest.raises(ConversionError) as excinfo:
            ups.forward(lat, 0.0)
        assert excinfo.value.kind is ErrorKind.LATITUDE_OUT_OF_RANGE

    def test_forward_longitude_limit(self, ups):
        """Test the longitude limits."""
        with pytest.raises(ConversionError) as excinfo:
            ups.forward(85.0, -181.0)
        assert excinfo.value.kind is ErrorKind.LONGITUDE_OUT_OF_RANGE

    def test_inverse_validation(self, ups):
        """Test the inverse input checks."""
        with pytest.raises(ConversionError) as excinfo:
            ups.inverse("N", 5.0e6, 2.0e6)
        assert excinfo.value.kind is ErrorKind.EASTING_OUT_OF_RANGE

        with pytest.raises(ConversionError) as excinfo:
            ups.inverse("Q", 2.0e6, -1.0)
        assert excinfo.value.kinds == frozenset({
            ErrorKind.HEMISPHERE_INVALID,
            ErrorKind.NORTHING_OUT_OF_RANGE,
        })

    def test_inverse_outside_cap(self, ups):
        """Test that a grid corner far from the pole is rejected."""
        with pytest.raises(ConversionError) as excinfo:
            ups.inverse("N", 0.0, 0.0)
        assert excinfo.value.kind is ErrorKind.LATITUDE_OUT_OF_RANGE

    def test_ups_to_point(self):
        """Test the GeodeticPoint convenience wrapper."""
        lat, _ = ups_to_point("S", 2.0e6, 2.0e6).to_degrees()
        assert lat == pytest.approx(-90.0)
