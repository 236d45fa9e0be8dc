"""
Tests for UTM zone selection and the UTM converter.
"""

import pytest

from common.errors import ConversionError, ErrorKind, WarningKind
from common.types import Hemisphere
from geospatial.coordinate_models import Clarke1866Ellipsoid
from geospatial.distance_calculations import geodesic_distance
from gridref.utm import (
    UTMProjector,
    central_meridian_deg,
    project_with_datum,
    utm_to_point,
    zone_for,
)
from validation.accuracy import reference_utm


class TestZoneSelection:
    """Test the zone number of a position."""

    @pytest.mark.parametrize("lat,lon,zone", [
        (0.0, 0.0, 31),
        (0.0, -180.0, 1),
        (0.0, 179.9, 60),
        (0.0, 359.9, 30),
        (63.554403, 23.716971, 34),
        (61.188325, -149.862498, 6),
        (-31.399455, -64.175971, 20),
        (-42.869627, 147.359083, 55),
        (75.470308, 112.865295, 49),
    ])
    def test_regular_zones(self, lat, lon, zone):
        """Test zones away from the exception areas."""
        assert zone_for(lat, lon) == zone

    @pytest.mark.parametrize("lat,lon,zone", [
        (60.0, 2.0, 31),
        (60.0, 3.5, 32),
        (60.0, 5.0, 32),
        (56.5, 3.5, 32),
        (64.5, 5.0, 31),
    ])
    def test_norway(self, lat, lon, zone):
        """Test the widened zone 32 over southwest Norway."""
        assert zone_for(lat, lon) == zone

    @pytest.mark.parametrize("lat,lon,zone", [
        (78.0, 5.0, 31),
        (78.0, 8.5, 31),
        (78.0, 10.0, 33),
        (78.0, 25.0, 35),
        (78.0, 40.0, 37),
        (71.5, 10.0, 32),
    ])
    def test_svalbard(self, lat, lon, zone):
        """Test that zones 32, 34 and 36 are skipped over Svalbard."""
        assert zone_for(lat, lon) == zone

    @pytest.mark.parametrize("zone,meridian", [
        (1, -177.0),
        (30, -3.0),
        (31, 3.0),
        (60, 177.0),
    ])
    def test_central_meridian(self, zone, meridian):
        """Test zone central meridians."""
        assert central_meridian_deg(zone) == meridian


class TestUTMProjector:
    """Test the UTM converter."""

    def test_equator_origin(self, utm):
        """Test the UTM coordinate of (0, 0)."""
        c = utm.forward(0.0, 0.0)
        assert c.zone == 31
        assert c.hemisphere is Hemisphere.NORTH
        assert c.easting == pytest.approx(166021.443, abs=1e-3)
        assert c.northing == pytest.approx(0.0, abs=1e-6)
        assert c.central_meridian.degrees == 3.0
        assert c.datum == "WGS84"

    def test_central_meridian_west_of_greenwich(self, utm):
        """Test that western zones report a meridian in [-180, 0)."""
        c = utm.forward(0.0, -178.0)
        assert c.zone == 1
        assert c.central_meridian.degrees == pytest.approx(-177.0)
        back = utm.inverse(c.zone, c.hemisphere, c.easting, c.northing)
        assert back.central_meridian.degrees == pytest.approx(-177.0)

    def test_southern_false_northing(self, utm):
        """Test that southern positions carry the 10,000 km false northing."""
        c = utm.forward(-0.0001, 3.0)
        assert c.hemisphere is Hemisphere.SOUTH
        assert c.northing == pytest.approx(1.0e7 - 11.053, abs=0.01)

    def test_agrees_with_proj(self, utm, sample_points):
        """Test agreement with PROJ on the sample positions."""
        for lat, lon in sample_points:
            c = utm.forward(lat, lon)
            easting, northing = reference_utm(lat, lon, c.zone)
            assert c.easting == pytest.approx(easting, abs=0.01)
            assert c.northing == pytest.approx(northing, abs=0.01)

    def test_round_trip(self, utm, sample_points):
        """Test that inverse(forward(p)) returns p."""
        for lat, lon in sample_points:
            c = utm.forward(lat, lon)
            back = utm.inverse(c.zone, c.hemisphere, c.easting, c.northing)
            assert geodesic_distance(lat, lon, back.latitude.degrees, back.longitude.degrees) < 1e-3

    def test_forward_limits(self, utm):
        """Test the latitude and longitude limits."""
        with pytest.raises(ConversionError) as excinfo:
            utm.forward(87.0, 0.0)
        assert excinfo.value.kind is ErrorKind.LATITUDE_OUT_OF_RANGE

        with pytest.raises(ConversionError) as excinfo:
            utm.forward(87.0, 400.0)
        assert excinfo.value.kinds == frozenset({
            ErrorKind.LATITUDE_OUT_OF_RANGE,
            ErrorKind.LONGITUDE_OUT_OF_RANGE,
        })

        assert utm.forward(-82.0, 0.0).zone == 31
        assert utm.forward(86.0, 0.0).zone == 31

    def test_zone_override(self):
        """Test forcing an adjacent zone."""
        c = UTMProjector(zone_override=30).forward(0.0, 0.0)
        assert c.zone == 30
        assert c.easting > 800000.0

    def test_zone_override_wraps(self):
        """Test that zones 60 and 1 count as adjacent."""
        c = UTMProjector(zone_override=60).forward(60.0, -179.5)
        assert c.zone == 60
        assert 600000.0 < c.easting < 800000.0

    def test_zone_override_rejected(self):
        """Test that non-adjacent or invalid overrides are rejected."""
        with pytest.raises(ConversionError) as excinfo:
            UTMProjector(zone_override=29).forward(0.0, 0.0)
        assert excinfo.value.kind is ErrorKind.ZONE_OVERRIDE_REJECTED

        with pytest.raises(ConversionError) as excinfo:
            UTMProjector(zone_override=61)
        assert excinfo.value.kind is ErrorKind.ZONE_OVERRIDE_REJECTED

    def test_easting_out_of_range(self):
        """Test that an override pushing the easting off the grid fails."""
        with pytest.raises(ConversionError) as excinfo:
            UTMProjector(zone_override=32).forward(0.0, 0.0)
        assert excinfo.value.kind is ErrorKind.EASTING_OUT_OF_RANGE

    def test_inverse_faults_reported_together(self, utm):
        """Test that every invalid inverse argument is reported."""
        with pytest.raises(ConversionError) as excinfo:
            utm.inverse(0, "X", 500000.0, -1.0)
        assert excinfo.value.kinds == frozenset({
            ErrorKind.ZONE_OUT_OF_RANGE,
            ErrorKind.HEMISPHERE_INVALID,
            ErrorKind.NORTHING_OUT_OF_RANGE,
        })

    def test_inverse_beyond_latitude_limit(self, utm):
        """Test that a northing mapping past 86 degrees is rejected."""
        with pytest.raises(ConversionError) as excinfo:
            utm.inverse(31, "N", 500000.0, 9_990_000.0)
        assert excinfo.value.kind is ErrorKind.NORTHING_OUT_OF_RANGE

    def test_inverse_far_from_meridian_warns(self, utm):
        """Test that far-off eastings still invert, with a warning."""
        c = utm.inverse(31, "N", 0.0, 8_900_000.0)
        assert WarningKind.LONGITUDE_DISTANCE in c.warnings
        assert c.longitude.degrees < -6.0

    def test_other_ellipsoid(self):
        """Test that the inverse uses the converter's own ellipsoid."""
        clarke = UTMProjector(Clarke1866Ellipsoid)
        c = clarke.forward(45.0, 9.0)
        back = clarke.inverse(c.zone, c.hemisphere, c.easting, c.northing)
        assert back.latitude.degrees == pytest.approx(45.0, abs=1e-8)
        assert back.longitude.degrees == pytest.approx(9.0, abs=1e-8)

    def test_utm_to_point(self):
        """Test the GeodeticPoint convenience wrapper."""
        point = utm_to_point(31, "N", 166021.443, 0.0)
        lat, lon = point.to_degrees()
        assert lat == pytest.approx(0.0, abs=1e-6)
        assert lon == pytest.approx(0.0, abs=1e-6)


class TestDatumProjection:
    """Test UTM projection on NAD27."""

    def test_nad27_differs_from_wgs84(self):
        """Test that NAD27 coordinates are shifted but close."""
        wgs = project_with_datum(40.0, -100.0)
        nad = project_with_datum(40.0, -100.0, "NAD27")
        assert nad.datum == "NAD27"
        assert nad.zone == wgs.zone == 14
        shift = ((nad.easting - wgs.easting) ** 2 + (nad.northing - wgs.northing) ** 2) ** 0.5
        assert 1.0 < shift < 500.0

    def test_unknown_datum(self):
        """Test that an unknown datum is rejected."""
        with pytest.raises(ConversionError) as excinfo:
            project_with_datum(40.0, -100.0, "OSGB36")
        assert excinfo.value.kind is ErrorKind.PARAMETER_INVALID

    def test_nad27_limits(self):
        """Test that NAD27 input is range checked before the shift."""
        with pytest.raises(ConversionError) as excinfo:
            project_with_datum(90.0, 0.0, "NAD27")
        assert excinfo.value.kind is ErrorKind.LATITUDE_OUT_OF_RANGE
