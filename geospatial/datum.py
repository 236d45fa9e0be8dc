"""
Datum Shift from WGS84 to NAD27.

Positions measured against WGS84 are moved onto the North American Datum
of 1927 with the abridged Molodensky transformation before being
projected on the Clarke 1866 ellipsoid.

Scientific Context
------------------
Domain: Geodetic datums
Model: Abridged Molodensky (three-parameter geocentric translation)

Notes
-----
The abridged formulas shift latitude and longitude directly, without a
round trip through ECEF coordinates:

    Δφ = (-ΔX sinφ cosλ - ΔY sinφ sinλ + ΔZ cosφ
          + Δa · Rn e² sinφ cosφ / a
          + Δf (Rm a/b + Rn b/a) sinφ cosφ) / Rm
    Δλ = (-ΔX sinλ + ΔY cosλ) / (Rn cosφ)

with Rm and Rn the meridian and prime-vertical radii of curvature of the
target (Clarke 1866) ellipsoid. The shifted position is (φ - Δφ, λ - Δλ).
Accuracy is a few meters over the conterminous United States.

References
----------
- DMA TR8350.2-B, Supplement to DoD WGS84 Technical Report, 1987.
- Deakin, R.E. (2004). The standard and abridged Molodensky coordinate
  transformation formulae.
"""

from enum import Enum
from typing import Tuple, Union
import numpy as np

from common.constants import GeodeticConstants
from common.errors import ConversionError, ErrorKind
from geospatial.coordinate_models import (
    Clarke1866Ellipsoid,
    EllipsoidParameters,
    WGS84Ellipsoid,
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
)


class Datum(Enum):
    """Horizontal datums a UTM position can be expressed in."""
    WGS84 = "WGS84"
    NAD27 = "NAD27"

    @classmethod
    def parse(cls, value: Union['Datum', str, None]) -> 'Datum':
        """Parse a datum name; None means WGS84."""
        if value is None:
            return cls.WGS84
        if isinstance(value, Datum):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ConversionError(
                ErrorKind.PARAMETER_INVALID,
                f"Unknown datum {value!r}; expected one of {[d.value for d in cls]}"
            ) from None

    @property
    def ellipsoid(self) -> EllipsoidParameters:
        """Ellipsoid the datum's positions are projected on."""
        return Clarke1866Ellipsoid if self is Datum.NAD27 else WGS84Ellipsoid


def wgs84_to_nad27(lat_rad: float, lon_rad: float) -> Tuple[float, float]:
    """Shift a WGS84 position onto NAD27.

    Parameters
    ----------
    lat_rad, lon_rad : float
        WGS84 geodetic coordinates in radians.

    Returns
    -------
    Tuple[float, float]
        (latitude, longitude) on NAD27 in radians.
    """
    dx = GeodeticConstants.NAD27_SHIFT_DX.value
    dy = GeodeticConstants.NAD27_SHIFT_DY.value
    dz = GeodeticConstants.NAD27_SHIFT_DZ.value

    clarke_a = GeodeticConstants.CLARKE_1866_SEMI_MAJOR_AXIS.value
    clarke_b = GeodeticConstants.CLARKE_1866_SEMI_MINOR_AXIS.value
    delta_a = WGS84Ellipsoid.a - clarke_a
    delta_f = WGS84Ellipsoid.f - Clarke1866Ellipsoid.f

    # Radii use the flattening implied by the published axes
    axes = EllipsoidParameters(a=clarke_a, f=1 - clarke_b / clarke_a, name="Clarke 1866 (axes)")
    e2 = axes.e2
    rn = radius_of_curvature_prime_vertical(lat_rad, axes)
    rm = radius_of_curvature_meridian(lat_rad, axes)

    sin_lat = np.sin(lat_rad)
    cos_lat = np.cos(lat_rad)
    sin_lon = np.sin(lon_rad)
    cos_lon = np.cos(lon_rad)

    err_lon = (-dx * sin_lon + dy * cos_lon) / (rn * cos_lat)
    err_lat = (-dx * sin_lat * cos_lon - dy * sin_lat * sin_lon + dz * cos_lat
               + delta_a * (rn * e2 * sin_lat * cos_lat) / clarke_a
               + delta_f * (rm * clarke_a / clarke_b + rn * clarke_b / clarke_a) * sin_lat * cos_lat) / rm

    return float(lat_rad - err_lat), float(lon_rad - err_lon)
