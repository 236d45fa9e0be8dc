"""
Universal Transverse Mercator Grid.

Selects the UTM zone of a position, including the Norway and Svalbard
exceptions, and delegates the projection to a zone-specific
`TransverseMercatorProjector`.

Scientific Context
------------------
Domain: Military and civil grid systems
Model: 60 Transverse Mercator zones, 6° wide, k0 = 0.9996

Zone Layout
-----------
Zone 1 spans 180°W to 174°W; numbering increases eastward. Two areas
deviate from the regular layout:

- Southwest Norway (56°N to 64°N): zone 32 is widened west to 3°E.
- Svalbard (72°N to 84°N): zones 32, 34 and 36 are unused; zones 31,
  33, 35 and 37 are widened to cover them.

Both exceptions are tested on truncated integer degrees, exactly as the
GeoTrans reference implementation does.

References
----------
- DMA TM 8358.2, The Universal Grids, 1989, Section 2.
- NGA GeoTrans 2.4, utm.c.
"""

from typing import Optional, Union

from common.angles import AngleValue
from common.constants import DEG_TO_RAD, GeodeticConstants, TWO_PI
from common.errors import ConversionError, ErrorKind, WarningKind, raise_if
from common.logging_config import get_logger
from common.types import GeodeticPoint, Hemisphere, UTMCoordinate
from geospatial.coordinate_models import EllipsoidParameters, WGS84Ellipsoid
from geospatial.datum import Datum, wgs84_to_nad27
from geospatial.projections import TransverseMercatorProjector

logger = get_logger(__name__)

MIN_LATITUDE = GeodeticConstants.UTM_MIN_LATITUDE.value
MAX_LATITUDE = GeodeticConstants.UTM_MAX_LATITUDE.value
MIN_EASTING = GeodeticConstants.UTM_MIN_EASTING.value
MAX_EASTING = GeodeticConstants.UTM_MAX_EASTING.value
MIN_NORTHING = 0.0
MAX_NORTHING = GeodeticConstants.UTM_MAX_NORTHING.value


def zone_for(latitude_deg: float, longitude_deg: float) -> int:
    """UTM zone number of a position.

    Parameters
    ----------
    latitude_deg : float
        Latitude in degrees.
    longitude_deg : float
        Longitude in degrees, [-180, 360].

    Returns
    -------
    int
        Zone number 1 to 60, honouring the Norway and Svalbard exceptions.

    Examples
    --------
    >>> zone_for(0.0, 0.0)
    31
    >>> zone_for(60.0, 5.0)
    32
    """
    lon = longitude_deg * DEG_TO_RAD
    if lon < 0:
        lon += TWO_PI + 1.0e-10
    lon_deg = lon / DEG_TO_RAD

    lat_degrees = int(latitude_deg)
    long_degrees = int(lon_deg)

    if lon_deg < 180.0:
        zone = int(31 + lon_deg / 6.0)
    else:
        zone = int(lon_deg / 6.0 - 29)
    if zone > 60:
        zone = 1

    # Norway
    if 55 < lat_degrees < 64 and -1 < long_degrees < 3:
        zone = 31
    if 55 < lat_degrees < 64 and 2 < long_degrees < 12:
        zone = 32
    # Svalbard
    if lat_degrees > 71 and -1 < long_degrees < 9:
        zone = 31
    if lat_degrees > 71 and 8 < long_degrees < 21:
        zone = 33
    if lat_degrees > 71 and 20 < long_degrees < 33:
        zone = 35
    if lat_degrees > 71 and 32 < long_degrees < 42:
        zone = 37

    return zone


def central_meridian_deg(zone: int) -> float:
    """Central meridian of a zone in degrees, in (-180, 180)."""
    return 6.0 * zone - 183.0


def _override_allowed(zone: int, override: int) -> bool:
    if (zone == 1 and override == 60) or (zone == 60 and override == 1):
        return True
    return zone - 1 <= override <= zone + 1


class UTMProjector:
    """Converter between geodetic positions and UTM coordinates.

    Parameters
    ----------
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).
    zone_override : int, optional
        Force this zone when it is adjacent to the computed zone (including
        the 60/1 wraparound). None or 0 disables the override.

    Raises
    ------
    ConversionError
        PARAMETER_INVALID for an unusable ellipsoid, ZONE_OVERRIDE_REJECTED
        for an override outside 1 to 60.
    """

    def __init__(
        self,
        ellipsoid: EllipsoidParameters = WGS84Ellipsoid,
        zone_override: Optional[int] = None
    ):
        faults = list(ellipsoid.validate())
        if zone_override is not None and not 0 <= zone_override <= 60:
            faults.append(ErrorKind.ZONE_OVERRIDE_REJECTED)
        raise_if(faults, f"Invalid UTM parameters: ellipsoid={ellipsoid.name}, override={zone_override}")

        self.ellipsoid = ellipsoid
        self.zone_override = zone_override or None

    def _projector(self, zone: int, hemisphere: Hemisphere) -> TransverseMercatorProjector:
        false_northing = (GeodeticConstants.UTM_FALSE_NORTHING_SOUTH.value
                          if hemisphere is Hemisphere.SOUTH else 0.0)
        return TransverseMercatorProjector(
            ellipsoid=self.ellipsoid,
            origin_latitude_deg=0.0,
            central_meridian_deg=central_meridian_deg(zone),
            false_easting=GeodeticConstants.UTM_FALSE_EASTING.value,
            false_northing=false_northing,
            scale_factor=GeodeticConstants.UTM_SCALE_FACTOR.value,
        )

    def forward(
        self,
        latitude_deg: float,
        longitude_deg: float,
        datum: Union[Datum, str] = Datum.WGS84
    ) -> UTMCoordinate:
        """Convert a geodetic position to UTM.

        Parameters
        ----------
        latitude_deg : float
            Latitude in degrees, [-82, 86].
        longitude_deg : float
            Longitude in degrees, [-180, 360].
        datum : Datum or str
            Datum tag recorded on the result.

        Returns
        -------
        UTMCoordinate

        Raises
        ------
        ConversionError
            LATITUDE_OUT_OF_RANGE, LONGITUDE_OUT_OF_RANGE,
            ZONE_OVERRIDE_REJECTED, EASTING_OUT_OF_RANGE (outside
            [100,000, 900,000] m) and/or NORTHING_OUT_OF_RANGE.
        """
        datum = Datum.parse(datum)
        faults = []
        if not MIN_LATITUDE <= latitude_deg <= MAX_LATITUDE:
            faults.append(ErrorKind.LATITUDE_OUT_OF_RANGE)
        if not -180.0 <= longitude_deg <= 360.0:
            faults.append(ErrorKind.LONGITUDE_OUT_OF_RANGE)
        if faults:
            logger.debug(f"Rejected UTM input lat={latitude_deg}, lon={longitude_deg}")
        raise_if(faults, f"Position ({latitude_deg}, {longitude_deg}) outside UTM limits")

        zone = zone_for(latitude_deg, longitude_deg)
        if self.zone_override is not None:
            if not _override_allowed(zone, self.zone_override):
                raise ConversionError(
                    ErrorKind.ZONE_OVERRIDE_REJECTED,
                    f"Zone override {self.zone_override} is not adjacent to zone {zone}"
                )
            zone = self.zone_override

        hemisphere = Hemisphere.of_latitude(latitude_deg)
        tm = self._projector(zone, hemisphere)
        projected = tm.forward(latitude_deg * DEG_TO_RAD, longitude_deg * DEG_TO_RAD)

        faults = []
        if not MIN_EASTING <= projected.easting <= MAX_EASTING:
            faults.append(ErrorKind.EASTING_OUT_OF_RANGE)
        if not MIN_NORTHING <= projected.northing <= MAX_NORTHING:
            faults.append(ErrorKind.NORTHING_OUT_OF_RANGE)
        if faults:
            logger.debug(f"UTM result E={projected.easting}, N={projected.northing} out of range")
        raise_if(faults, f"UTM zone {zone} coordinate ({projected.easting}, {projected.northing}) out of range")

        if WarningKind.LONGITUDE_DISTANCE in projected.warnings:
            logger.warning(f"({latitude_deg}, {longitude_deg}) is more than 9° from zone {zone} meridian")

        return UTMCoordinate(
            zone=zone,
            hemisphere=hemisphere,
            easting=projected.easting,
            northing=projected.northing,
            latitude=AngleValue.from_degrees(latitude_deg),
            longitude=AngleValue.from_degrees(longitude_deg),
            central_meridian=AngleValue.from_degrees(central_meridian_deg(zone)),
            datum=datum.value,
            warnings=projected.warnings,
        )

    def inverse(
        self,
        zone: int,
        hemisphere: Union[Hemisphere, str],
        easting: float,
        northing: float
    ) -> UTMCoordinate:
        """Convert a UTM coordinate to a geodetic position.

        The easting is not range checked, so coordinates that extend into
        the neighbouring zone can still be inverted.

        Raises
        ------
        ConversionError
            ZONE_OUT_OF_RANGE, HEMISPHERE_INVALID and/or
            NORTHING_OUT_OF_RANGE (input outside [0, 10,000,000] m, or a
            recovered latitude outside [-82, 86] degrees).
        """
        faults = []
        if not 1 <= zone <= 60:
            faults.append(ErrorKind.ZONE_OUT_OF_RANGE)
        try:
            hemisphere = Hemisphere.parse(hemisphere)
        except ConversionError:
            faults.append(ErrorKind.HEMISPHERE_INVALID)
        if not MIN_NORTHING <= northing <= MAX_NORTHING:
            faults.append(ErrorKind.NORTHING_OUT_OF_RANGE)
        if faults:
            logger.debug(f"Rejected UTM coordinate {zone} {hemisphere} {easting} {northing}")
        raise_if(faults, f"Invalid UTM coordinate: zone={zone}, hemisphere={hemisphere!r}, northing={northing}")

        tm = self._projector(zone, hemisphere)
        result = tm.inverse(easting, northing)
        latitude = AngleValue.from_radians_latitude(result.latitude)
        longitude = AngleValue.from_radians_longitude(result.longitude)

        if not MIN_LATITUDE <= latitude.degrees <= MAX_LATITUDE:
            logger.debug(f"UTM northing {northing} maps to latitude {latitude.degrees}")
            raise ConversionError(
                ErrorKind.NORTHING_OUT_OF_RANGE,
                f"Northing {northing} maps to latitude {latitude.degrees} outside UTM limits"
            )

        return UTMCoordinate(
            zone=int(zone),
            hemisphere=hemisphere,
            easting=float(easting),
            northing=float(northing),
            latitude=latitude,
            longitude=longitude,
            central_meridian=AngleValue.from_degrees(central_meridian_deg(zone)),
            datum="WGS84" if self.ellipsoid == WGS84Ellipsoid else self.ellipsoid.name,
            warnings=result.warnings,
        )


def project_with_datum(
    latitude_deg: float,
    longitude_deg: float,
    datum: Union[Datum, str] = Datum.WGS84
) -> UTMCoordinate:
    """Project a WGS84 position to UTM on the requested datum.

    For NAD27 the position is first shifted with the Molodensky
    transformation and then projected on the Clarke 1866 ellipsoid; the
    returned coordinate carries the shifted latitude and longitude.
    """
    datum = Datum.parse(datum)
    if datum is Datum.NAD27:
        faults = []
        if not MIN_LATITUDE <= latitude_deg <= MAX_LATITUDE:
            faults.append(ErrorKind.LATITUDE_OUT_OF_RANGE)
        if not -180.0 <= longitude_deg <= 360.0:
            faults.append(ErrorKind.LONGITUDE_OUT_OF_RANGE)
        raise_if(faults, f"Position ({latitude_deg}, {longitude_deg}) outside UTM limits")

        lat_rad, lon_rad = wgs84_to_nad27(latitude_deg * DEG_TO_RAD, longitude_deg * DEG_TO_RAD)
        latitude_deg = lat_rad / DEG_TO_RAD
        longitude_deg = AngleValue.normalized_degrees_longitude(lon_rad / DEG_TO_RAD)
    return UTMProjector(datum.ellipsoid).forward(latitude_deg, longitude_deg, datum)


def utm_to_point(
    zone: int,
    hemisphere: Union[Hemisphere, str],
    easting: float,
    northing: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> GeodeticPoint:
    """Invert a UTM coordinate to a `GeodeticPoint`."""
    utm = UTMProjector(ellipsoid).inverse(zone, hemisphere, easting, northing)
    return GeodeticPoint(utm.latitude, utm.longitude)
