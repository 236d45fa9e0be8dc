"""
Geodesic Distances on the Reference Ellipsoid.

Round-trip accuracy of grid conversions is measured as the geodesic
(shortest path on the ellipsoid) distance between the original position
and the decoded one. This module wraps `pyproj.Geod` for that purpose.

Implementation
--------------
`pyproj` uses the GeographicLib algorithms by Charles Karney, accurate to
better than 15 nm for any pair of points, so the measured error is
entirely that of the conversion under test.

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1), 43-55.
- GeographicLib: https://geographiclib.sourceforge.io/
"""

from dataclasses import dataclass
from functools import lru_cache
import numpy as np
from numpy.typing import NDArray

from pyproj import Geod

from geospatial.coordinate_models import WGS84Ellipsoid, EllipsoidParameters


# Create the geodesic calculator for WGS84
_wgs84_geod = Geod(ellps='WGS84')


@lru_cache(maxsize=16)
def _geod_for(a: float, f: float) -> Geod:
    return Geod(a=a, f=f)


def _geod(ellipsoid: EllipsoidParameters) -> Geod:
    if ellipsoid == WGS84Ellipsoid:
        return _wgs84_geod
    return _geod_for(ellipsoid.a, ellipsoid.f)


@dataclass
class GeodesicResult:
    """Result of an inverse geodesic calculation.

    Attributes
    ----------
    distance_m : float
        Geodesic distance in meters.
    azimuth_forward_deg : float
        Azimuth at the first point, degrees clockwise from north, [0, 360).
    azimuth_back_deg : float
        Azimuth at the second point back toward the first, [0, 360).
    """
    distance_m: float
    azimuth_forward_deg: float
    azimuth_back_deg: float


def geodesic_inverse(
    lat1_deg: float,
    lon1_deg: float,
    lat2_deg: float,
    lon2_deg: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> GeodesicResult:
    """Solve the inverse geodesic problem.

    Parameters
    ----------
    lat1_deg, lon1_deg : float
        First point in degrees.
    lat2_deg, lon2_deg : float
        Second point in degrees.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    GeodesicResult
        Distance in meters, forward and back azimuths in degrees.

    Examples
    --------
    >>> result = geodesic_inverse(0.0, 0.0, 0.0, 1.0)
    >>> round(result.distance_m, 3)
    111319.491
    """
    az_forward, az_back, distance = _geod(ellipsoid).inv(lon1_deg, lat1_deg, lon2_deg, lat2_deg)
    return GeodesicResult(
        distance_m=float(distance),
        azimuth_forward_deg=float(az_forward) % 360.0,
        azimuth_back_deg=float(az_back) % 360.0
    )


def geodesic_distance(
    lat1_deg: float,
    lon1_deg: float,
    lat2_deg: float,
    lon2_deg: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Geodesic distance in meters between two points given in degrees."""
    _, _, distance = _geod(ellipsoid).inv(lon1_deg, lat1_deg, lon2_deg, lat2_deg)
    return float(distance)


def geodesic_distance_batch(
    lats1_deg: NDArray[np.float64],
    lons1_deg: NDArray[np.float64],
    lats2_deg: NDArray[np.float64],
    lons2_deg: NDArray[np.float64],
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> NDArray[np.float64]:
    """Vectorized geodesic distances.

    Parameters
    ----------
    lats1_deg, lons1_deg : ndarray
        First points in degrees.
    lats2_deg, lons2_deg : ndarray
        Second points in degrees, same shape as the first.

    Returns
    -------
    ndarray
        Distances in meters.
    """
    _, _, distances = _geod(ellipsoid).inv(
        np.asarray(lons1_deg, dtype=np.float64),
        np.asarray(lats1_deg, dtype=np.float64),
        np.asarray(lons2_deg, dtype=np.float64),
        np.asarray(lats2_deg, dtype=np.float64)
    )
    return np.asarray(distances)
