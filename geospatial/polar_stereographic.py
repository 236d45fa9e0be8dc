"""
Polar Stereographic Projection Engine.

This module implements the ellipsoidal Polar Stereographic projection, the
basis of the Universal Polar Stereographic (UPS) grid used poleward of the
UTM latitude limits.

Scientific Context
------------------
Domain: Cartography, mathematical geodesy
Model: Conformal azimuthal projection centred on a pole

Method
------
The projection is defined by a latitude of true scale φc and the longitude
pointing "down" from the pole. With the conformal function

    t(φ) = tan(π/4 - φ/2) / ((1 - e sinφ) / (1 + e sinφ))^(e/2)

the radial distance from the pole is

    ρ = a · mc · t / tc                       (secant case, |φc| < 90°)
    ρ = 2a · t / sqrt((1+e)^(1+e) (1-e)^(1-e))    (tangent case, |φc| = 90°)

with mc = cosφc / sqrt(1 - e² sin²φc) and tc = t(φc). The southern aspect
is handled by negating latitude and longitude around the northern formulas.

The inverse recovers latitude by fixed-point iteration on the conformal
latitude, which converges in a handful of steps for all valid input.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. Section 21.
- DMA TM 8358.2, The Universal Grids, 1989, Section 3.
- NGA GeoTrans 2.4, polarst.c.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np
from numpy.typing import NDArray

from common.constants import DEG_TO_RAD, RAD_TO_DEG, PI_OVER_2, TWO_PI
from common.errors import ErrorKind, raise_if
from common.logging_config import get_logger
from common.types import GeodeticResult, ProjectedPoint
from geospatial.coordinate_models import EllipsoidParameters, WGS84Ellipsoid
from geospatial.projections import ProjectionAdapter

logger = get_logger(__name__)

PI_OVER_4 = np.pi / 4.0

# Convergence tolerance (radians) and iteration cap of the inverse
LATITUDE_TOLERANCE = 1.0e-10
MAX_ITERATIONS = 30

# Added to the maximum offset so points exactly on the equator circle pass
RADIUS_EPSILON = 1.0e-2


@dataclass(frozen=True)
class PolarStereographicParameters:
    """Validated parameters of one Polar Stereographic projection.

    Attributes
    ----------
    ellipsoid : EllipsoidParameters
        Reference ellipsoid.
    true_scale_latitude : float
        Latitude of true scale in radians; its sign selects the hemisphere.
    longitude_down_from_pole : float
        Longitude in radians, folded into (-π, π].
    false_easting, false_northing : float
        False offsets in meters.
    """
    ellipsoid: EllipsoidParameters
    true_scale_latitude: float
    longitude_down_from_pole: float
    false_easting: float
    false_northing: float

    @property
    def southern(self) -> bool:
        return self.true_scale_latitude < 0


class PolarStereographicProjector(ProjectionAdapter):
    """Ellipsoidal Polar Stereographic projection.

    Parameters
    ----------
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).
    true_scale_latitude_deg : float
        Latitude of true scale in degrees, [-90, 90]. Negative values select
        the southern aspect.
    longitude_down_from_pole_deg : float
        Longitude pointing toward the bottom of the map, [-180, 360].
    false_easting, false_northing : float
        False offsets in meters.

    Raises
    ------
    ConversionError
        PARAMETER_INVALID, LATITUDE_OUT_OF_RANGE and/or
        LONGITUDE_OUT_OF_RANGE for invalid parameters.
    """

    def __init__(
        self,
        ellipsoid: EllipsoidParameters = WGS84Ellipsoid,
        true_scale_latitude_deg: float = 90.0,
        longitude_down_from_pole_deg: float = 0.0,
        false_easting: float = 0.0,
        false_northing: float = 0.0
    ):
        faults = list(ellipsoid.validate())
        if not -90.0 <= true_scale_latitude_deg <= 90.0:
            faults.append(ErrorKind.LATITUDE_OUT_OF_RANGE)
        if not -180.0 <= longitude_down_from_pole_deg <= 360.0:
            faults.append(ErrorKind.LONGITUDE_OUT_OF_RANGE)
        if faults:
            logger.debug(f"Rejected Polar Stereographic parameters: {faults}")
        raise_if(
            faults,
            f"Invalid Polar Stereographic parameters: a={ellipsoid.a}, "
            f"1/f={ellipsoid.inverse_flattening}, lat_ts={true_scale_latitude_deg}, "
            f"lon0={longitude_down_from_pole_deg}"
        )

        longitude = longitude_down_from_pole_deg * DEG_TO_RAD
        if longitude > np.pi:
            longitude -= TWO_PI

        self._params = PolarStereographicParameters(
            ellipsoid=ellipsoid,
            true_scale_latitude=true_scale_latitude_deg * DEG_TO_RAD,
            longitude_down_from_pole=longitude,
            false_easting=float(false_easting),
            false_northing=float(false_northing),
        )

        # Work in the northern aspect; southern input is mirrored
        if self._params.southern:
            self._origin_lat = -self._params.true_scale_latitude
            self._origin_long = -longitude
        else:
            self._origin_lat = self._params.true_scale_latitude
            self._origin_long = longitude

        self._a = ellipsoid.a
        self._e = ellipsoid.e
        self._tangent = abs(abs(self._origin_lat) - PI_OVER_2) <= 1.0e-10

        if not self._tangent:
            essin = self._e * np.sin(self._origin_lat)
            self._mc = np.cos(self._origin_lat) / np.sqrt(1.0 - essin * essin)
            self._tc = np.tan(PI_OVER_4 - self._origin_lat / 2.0) / self._pow_es(self._origin_lat)
            self._e4 = 1.0
        else:
            one_plus_e = 1.0 + self._e
            one_minus_e = 1.0 - self._e
            self._mc = 1.0
            self._tc = 1.0
            self._e4 = np.sqrt(one_plus_e ** one_plus_e * one_minus_e ** one_minus_e)

        # Largest offset from the pole accepted by the inverse: twice the
        # radius of the equator circle
        self._delta = 2.0 * float(self._rho(0.0)) + RADIUS_EPSILON

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> PolarStereographicParameters:
        return self._params

    @property
    def southern(self) -> bool:
        return self._params.southern

    @property
    def max_offset(self) -> float:
        """Largest |easting - FE| or |northing - FN| accepted by `inverse`."""
        return self._delta

    @property
    def name(self) -> str:
        aspect = "South" if self.southern else "North"
        return f"Polar Stereographic ({aspect}, lat_ts={self._params.true_scale_latitude * RAD_TO_DEG:g}°)"

    @property
    def proj4_string(self) -> str:
        p = self._params
        lat_0 = -90 if self.southern else 90
        return (
            f"+proj=stere +lat_0={lat_0} +lat_ts={p.true_scale_latitude * RAD_TO_DEG!r} "
            f"+lon_0={p.longitude_down_from_pole * RAD_TO_DEG!r} "
            f"+x_0={p.false_easting!r} +y_0={p.false_northing!r} "
            f"+a={p.ellipsoid.a!r} +rf={p.ellipsoid.inverse_flattening!r} "
            "+units=m +no_defs"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _pow_es(self, lat):
        essin = self._e * np.sin(lat)
        return ((1.0 - essin) / (1.0 + essin)) ** (self._e / 2.0)

    def _rho(self, lat):
        """Radial distance from the pole for a northern-aspect latitude."""
        t = np.tan(PI_OVER_4 - lat / 2.0) / self._pow_es(lat)
        if self._tangent:
            return 2.0 * self._a * t / self._e4
        return self._a * self._mc * t / self._tc

    def _grid(self, lat, lon) -> Tuple:
        p = self._params
        if self.southern:
            lat = -lat
            lon = -lon
        dlam = lon - self._origin_long
        dlam = np.where(dlam > np.pi, dlam - TWO_PI, dlam)
        dlam = np.where(dlam < -np.pi, dlam + TWO_PI, dlam)
        rho = self._rho(lat)

        if self.southern:
            easting = -(rho * np.sin(dlam) - p.false_easting)
            northing = rho * np.cos(dlam) + p.false_northing
        else:
            easting = rho * np.sin(dlam) + p.false_easting
            northing = -rho * np.cos(dlam) + p.false_northing
        return easting, northing

    # ------------------------------------------------------------------
    # Public transforms
    # ------------------------------------------------------------------

    def forward(self, lat_rad: float, lon_rad: float) -> ProjectedPoint:
        """Project a geodetic position.

        Parameters
        ----------
        lat_rad : float
            Latitude in radians. Must lie in the projection's hemisphere.
        lon_rad : float
            Longitude in radians, [-π, 2π].

        Returns
        -------
        ProjectedPoint
            Easting and northing in meters. The pole itself maps to the
            false origin.
        """
        faults = []
        if (not -PI_OVER_2 <= lat_rad <= PI_OVER_2
                or (lat_rad < 0 and not self.southern)
                or (lat_rad > 0 and self.southern)):
            faults.append(ErrorKind.LATITUDE_OUT_OF_RANGE)
        if not -np.pi <= lon_rad <= TWO_PI:
            faults.append(ErrorKind.LONGITUDE_OUT_OF_RANGE)
        if faults:
            logger.debug(f"Rejected polar forward input lat={lat_rad}, lon={lon_rad}")
        raise_if(faults, f"Position ({lat_rad}, {lon_rad}) rad outside {self.name}")

        p = self._params
        if abs(abs(lat_rad) - PI_OVER_2) < 1.0e-10:
            return ProjectedPoint(p.false_easting, p.false_northing)

        easting, northing = self._grid(lat_rad, lon_rad)
        return ProjectedPoint(float(easting), float(northing))

    def inverse(self, easting: float, northing: float) -> GeodeticResult:
        """Recover the geodetic position of projected coordinates.

        Raises
        ------
        ConversionError
            EASTING_OUT_OF_RANGE / NORTHING_OUT_OF_RANGE when an offset from
            the false origin exceeds `max_offset`; RADIUS_EXCEEDED when the
            radial distance exceeds √2 · `max_offset`.
        """
        p = self._params
        dx = easting - p.false_easting
        dy = northing - p.false_northing

        faults = []
        if abs(dx) > self._delta:
            faults.append(ErrorKind.EASTING_OUT_OF_RANGE)
        if abs(dy) > self._delta:
            faults.append(ErrorKind.NORTHING_OUT_OF_RANGE)
        if not faults and np.hypot(dx, dy) > np.sqrt(2.0) * self._delta:
            faults.append(ErrorKind.RADIUS_EXCEEDED)
        if faults:
            logger.debug(f"Rejected polar inverse input E={easting}, N={northing}")
        raise_if(faults, f"Grid point ({easting}, {northing}) outside {self.name}")

        if dx == 0.0 and dy == 0.0:
            lat = PI_OVER_2
            lon = self._origin_long
        else:
            if self.southern:
                dx = -dx
                dy = -dy
            rho = float(np.hypot(dx, dy))
            if self._tangent:
                t = rho * self._e4 / (2.0 * self._a)
            else:
                t = rho * self._tc / (self._a * self._mc)

            lat = PI_OVER_2 - 2.0 * np.arctan(t)
            previous = 0.0
            for _ in range(MAX_ITERATIONS):
                if abs(lat - previous) <= LATITUDE_TOLERANCE:
                    break
                previous = lat
                lat = PI_OVER_2 - 2.0 * np.arctan(t * self._pow_es(lat))

            lon = self._origin_long + np.arctan2(dx, -dy)
            if lon > np.pi:
                lon -= TWO_PI
            elif lon < -np.pi:
                lon += TWO_PI

            lat = min(max(lat, -PI_OVER_2), PI_OVER_2)
            lon = min(max(lon, -np.pi), np.pi)

        if self.southern:
            lat = -lat
            lon = -lon
        return GeodeticResult(float(lat), float(lon))

    def forward_array(
        self,
        lats_rad: NDArray[np.float64],
        lons_rad: NDArray[np.float64]
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        lats = np.asarray(lats_rad, dtype=np.float64)
        lons = np.asarray(lons_rad, dtype=np.float64)
        easting, northing = self._grid(lats, lons)
        at_pole = np.abs(np.abs(lats) - PI_OVER_2) < 1.0e-10
        p = self._params
        easting = np.where(at_pole, p.false_easting, easting)
        northing = np.where(at_pole, p.false_northing, northing)
        return np.asarray(easting), np.asarray(northing)
