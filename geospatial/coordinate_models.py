"""
Reference Ellipsoid Models.

This module defines the reference ellipsoids the grid projections are
computed on, together with the radii of curvature shared by the datum
shift and the projection engines.

Scientific Context
------------------
Domain: Geodesy, Earth geometry
Model: Oblate ellipsoid of revolution given by (a, f)

Why the Ellipsoid Matters for Grids
-----------------------------------
1. UTM eastings and northings computed on different ellipsoids differ by
   tens to hundreds of meters for the same latitude and longitude.

2. MGRS row lettering depends on the ellipsoid: the classic ellipsoids
   (Clarke 1866, Clarke 1880, Bessel 1841) use the "AL" lettering pattern,
   whose row letters are offset by 1,000,000 m relative to the "AA"
   pattern used with WGS84 and other modern ellipsoids.

References
----------
- NIMA TR8350.2: WGS84 parameters
- DMA TM 8358.1, Datums, Ellipsoids, Grids and Grid Reference Systems
- Torge, W. (2001). Geodesy (3rd ed.). de Gruyter.
"""

from dataclasses import dataclass
from typing import Dict, List
import numpy as np

from common.constants import GeodeticConstants
from common.errors import ErrorKind


@dataclass(frozen=True)
class EllipsoidParameters:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    a : float
        Semi-major axis (equatorial radius) in meters.
    f : float
        Flattening: f = (a - b) / a
    name : str
        Identifier for the ellipsoid.
    code : str
        Two-letter ellipsoid code (e.g. ``'WE'`` for WGS84).
    aa_pattern : bool
        True for the "AA" MGRS row lettering, False for the classic "AL"
        pattern.

    Derived Parameters
    ------------------
    b : float
        Semi-minor axis (polar radius) in meters.
    e2 : float
        First eccentricity squared: e² = (a² - b²) / a²
    ep2 : float
        Second eccentricity squared: e'² = (a² - b²) / b²
    """
    a: float
    f: float
    name: str
    code: str = ""
    aa_pattern: bool = True

    @property
    def b(self) -> float:
        """Semi-minor axis in meters."""
        return self.a * (1 - self.f)

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return self.f * (2 - self.f)

    @property
    def e(self) -> float:
        """First eccentricity."""
        return float(np.sqrt(self.e2))

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return self.e2 / (1 - self.e2)

    @property
    def inverse_flattening(self) -> float:
        return 1 / self.f if self.f != 0 else float("inf")

    def validate(self) -> List[ErrorKind]:
        """Check the parameters accepted by the grid projections.

        Returns
        -------
        List[ErrorKind]
            PARAMETER_INVALID once if a <= 0 or 1/f is outside [250, 350];
            empty when the ellipsoid is usable.
        """
        if self.a <= 0 or not 250 <= self.inverse_flattening <= 350:
            return [ErrorKind.PARAMETER_INVALID]
        return []


# WGS84 ellipsoid - the default reference for this system
WGS84Ellipsoid = EllipsoidParameters(
    a=GeodeticConstants.WGS84_SEMI_MAJOR_AXIS.value,
    f=GeodeticConstants.WGS84_FLATTENING.value,
    name="WGS84",
    code="WE",
)

# Clarke 1866 - the NAD27 ellipsoid
Clarke1866Ellipsoid = EllipsoidParameters(
    a=GeodeticConstants.CLARKE_1866_SEMI_MAJOR_AXIS.value,
    f=1 / GeodeticConstants.CLARKE_1866_INVERSE_FLATTENING.value,
    name="Clarke 1866",
    code="CC",
    aa_pattern=False,
)

ELLIPSOIDS: Dict[str, EllipsoidParameters] = {
    e.code: e for e in (
        WGS84Ellipsoid,
        EllipsoidParameters(6_378_137.0, 1 / 298.257222101, "GRS 1980", "RF"),
        Clarke1866Ellipsoid,
        EllipsoidParameters(6_378_249.145, 1 / 293.465, "Clarke 1880", "CD", aa_pattern=False),
        EllipsoidParameters(6_377_397.155, 1 / 299.1528128, "Bessel 1841", "BR", aa_pattern=False),
        EllipsoidParameters(6_377_483.865, 1 / 299.1528128, "Bessel 1841 (Namibia)", "BN",
                            aa_pattern=False),
        EllipsoidParameters(6_378_388.0, 1 / 297.0, "International 1924", "IN"),
    )
}


def get_ellipsoid(code: str) -> EllipsoidParameters:
    """Look up a catalogued ellipsoid by its two-letter code.

    Parameters
    ----------
    code : str
        E.g. ``'WE'`` (WGS84), ``'CC'`` (Clarke 1866), ``'BR'`` (Bessel 1841).

    Raises
    ------
    KeyError
        If the code is not catalogued.
    """
    try:
        return ELLIPSOIDS[code.upper()]
    except KeyError:
        raise KeyError(
            f"Unknown ellipsoid code {code!r}. Known: {sorted(ELLIPSOIDS)}"
        ) from None


def radius_of_curvature_meridian(
    latitude_rad: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Compute the radius of curvature in the meridian plane.

    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        Radius of curvature M in meters.

    Notes
    -----
    M = a(1 - e²) / (1 - e² sin²φ)^(3/2)

    At the equator (φ=0): M ≈ 6,335,439 m
    At the poles (φ=±90°): M ≈ 6,399,594 m
    """
    sin_lat = np.sin(latitude_rad)
    denominator = (1 - ellipsoid.e2 * sin_lat**2) ** 1.5
    return ellipsoid.a * (1 - ellipsoid.e2) / denominator


def radius_of_curvature_prime_vertical(
    latitude_rad: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Compute the radius of curvature in the prime vertical.

    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        Radius of curvature N in meters.

    Notes
    -----
    N = a / (1 - e² sin²φ)^(1/2)

    At the equator (φ=0): N = a ≈ 6,378,137 m
    At the poles (φ=±90°): N ≈ 6,399,594 m
    """
    sin_lat = np.sin(latitude_rad)
    denominator = np.sqrt(1 - ellipsoid.e2 * sin_lat**2)
    return ellipsoid.a / denominator
