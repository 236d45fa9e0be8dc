"""
Universal Polar Stereographic Grid.

UPS covers the polar caps poleward of the UTM latitude limits with two
Polar Stereographic projections sharing one set of constants.

Scientific Context
------------------
Domain: Military and civil grid systems
Model: Polar Stereographic, latitude of true scale ±81.114528°
       (scale 0.994 at the pole), false origin (2,000,000, 2,000,000) m

Notes
-----
Both zones use the same sign convention as EPSG:32661 and EPSG:32761:
easting grows toward 90°E, and northing grows toward 0° in the north
zone and toward 180° in the south zone.
"""

from typing import Union

from common.angles import AngleValue
from common.constants import DEG_TO_RAD, GeodeticConstants
from common.errors import ConversionError, ErrorKind, raise_if
from common.logging_config import get_logger
from common.types import GeodeticPoint, Hemisphere, UPSCoordinate
from geospatial.coordinate_models import EllipsoidParameters, WGS84Ellipsoid
from geospatial.polar_stereographic import PolarStereographicProjector

logger = get_logger(__name__)

ORIGIN_LATITUDE = GeodeticConstants.UPS_ORIGIN_LATITUDE.value
MIN_NORTH_LATITUDE = GeodeticConstants.UPS_MIN_NORTH_LATITUDE.value
MAX_SOUTH_LATITUDE = GeodeticConstants.UPS_MAX_SOUTH_LATITUDE.value
MIN_EAST_NORTH = 0.0
MAX_EAST_NORTH = GeodeticConstants.UPS_MAX_COORDINATE.value


def _in_cap(latitude_deg: float) -> bool:
    if latitude_deg < 0:
        return latitude_deg <= MAX_SOUTH_LATITUDE
    return latitude_deg >= MIN_NORTH_LATITUDE


class UPSProjector:
    """Converter between geodetic positions and UPS coordinates.

    Parameters
    ----------
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Examples
    --------
    >>> ups = UPSProjector()
    >>> c = ups.forward(90.0, 0.0)
    >>> c.easting, c.northing
    (2000000.0, 2000000.0)
    """

    def __init__(self, ellipsoid: EllipsoidParameters = WGS84Ellipsoid):
        raise_if(ellipsoid.validate(), f"Invalid UPS ellipsoid {ellipsoid.name}")
        self.ellipsoid = ellipsoid
        self._north = self._build(ORIGIN_LATITUDE)
        self._south = self._build(-ORIGIN_LATITUDE)

    def _build(self, true_scale_latitude: float) -> PolarStereographicProjector:
        return PolarStereographicProjector(
            ellipsoid=self.ellipsoid,
            true_scale_latitude_deg=true_scale_latitude,
            longitude_down_from_pole_deg=0.0,
            false_easting=GeodeticConstants.UPS_FALSE_EASTING.value,
            false_northing=GeodeticConstants.UPS_FALSE_NORTHING.value,
        )

    def projector(self, hemisphere: Hemisphere) -> PolarStereographicProjector:
        return self._south if hemisphere is Hemisphere.SOUTH else self._north

    def forward(self, latitude_deg: float, longitude_deg: float) -> UPSCoordinate:
        """Convert a geodetic position to UPS.

        Parameters
        ----------
        latitude_deg : float
            Latitude in degrees; north cap >= 72, south cap <= -72.
        longitude_deg : float
            Longitude in degrees, [-180, 360].

        Raises
        ------
        ConversionError
            LATITUDE_OUT_OF_RANGE outside ±90 or outside the caps,
            LONGITUDE_OUT_OF_RANGE outside [-180, 360].
        """
        faults = []
        if not -90.0 <= latitude_deg <= 90.0 or not _in_cap(latitude_deg):
            faults.append(ErrorKind.LATITUDE_OUT_OF_RANGE)
        if not -180.0 <= longitude_deg <= 360.0:
            faults.append(ErrorKind.LONGITUDE_OUT_OF_RANGE)
        if faults:
            logger.debug(f"Rejected UPS input lat={latitude_deg}, lon={longitude_deg}")
        raise_if(faults, f"Position ({latitude_deg}, {longitude_deg}) outside UPS caps")

        hemisphere = Hemisphere.of_latitude(latitude_deg)
        projected = self.projector(hemisphere).forward(
            latitude_deg * DEG_TO_RAD, longitude_deg * DEG_TO_RAD
        )
        return UPSCoordinate(
            hemisphere=hemisphere,
            easting=projected.easting,
            northing=projected.northing,
            latitude=AngleValue.from_degrees(latitude_deg),
            longitude=AngleValue.from_degrees(longitude_deg),
        )

    def inverse(
        self,
        hemisphere: Union[Hemisphere, str],
        easting: float,
        northing: float
    ) -> UPSCoordinate:
        """Convert a UPS coordinate to a geodetic position.

        Raises
        ------
        ConversionError
            HEMISPHERE_INVALID, EASTING_OUT_OF_RANGE or NORTHING_OUT_OF_RANGE
            (outside [0, 4,000,000] m), or LATITUDE_OUT_OF_RANGE when the
            recovered latitude lies outside the hemisphere's cap.
        """
        faults = []
        try:
            hemisphere = Hemisphere.parse(hemisphere)
        except ConversionError:
            faults.append(ErrorKind.HEMISPHERE_INVALID)
        if not MIN_EAST_NORTH <= easting <= MAX_EAST_NORTH:
            faults.append(ErrorKind.EASTING_OUT_OF_RANGE)
        if not MIN_EAST_NORTH <= northing <= MAX_EAST_NORTH:
            faults.append(ErrorKind.NORTHING_OUT_OF_RANGE)
        if faults:
            logger.debug(f"Rejected UPS coordinate {hemisphere} {easting} {northing}")
        raise_if(faults, f"Invalid UPS coordinate: hemisphere={hemisphere!r}, E={easting}, N={northing}")

        result = self.projector(hemisphere).inverse(easting, northing)
        latitude = AngleValue.from_radians_latitude(result.latitude)
        longitude = AngleValue.from_radians_longitude(result.longitude)

        if not _in_cap(latitude.degrees) or (latitude.degrees < 0) != (hemisphere is Hemisphere.SOUTH):
            logger.debug(f"UPS coordinate maps to latitude {latitude.degrees} outside the cap")
            raise ConversionError(
                ErrorKind.LATITUDE_OUT_OF_RANGE,
                f"UPS {hemisphere.value} ({easting}, {northing}) maps to latitude "
                f"{latitude.degrees} outside the polar cap"
            )

        return UPSCoordinate(
            hemisphere=hemisphere,
            easting=float(easting),
            northing=float(northing),
            latitude=latitude,
            longitude=longitude,
        )


def ups_to_point(
    hemisphere: Union[Hemisphere, str],
    easting: float,
    northing: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> GeodeticPoint:
    """Invert a UPS coordinate to a `GeodeticPoint`."""
    ups = UPSProjector(ellipsoid).inverse(hemisphere, easting, northing)
    return GeodeticPoint(ups.latitude, ups.longitude)
