"""
Geodetic Constants for Grid Reference Conversions.

This module provides the defining parameters of the reference ellipsoids,
the fixed constants of the UTM and UPS systems, the MGRS limits and the
datum-shift parameters. Every constant carries its unit and an
authoritative source.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- UTM/UPS definitions: DMA TM 8358.2, The Universal Grids, 1989
- MGRS: NGA.SIG.0012_2.0.0_UTMUPS, 2014
- NAD27 shift: DMA TR8350.2-B, Molodensky parameters for North America
"""

from dataclasses import dataclass
from typing import Final
import numpy as np


@dataclass(frozen=True)
class Constant:
    """A geodetic constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The SI unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of geodetic constants used throughout the system.

    All constants are class attributes with full metadata including
    uncertainty bounds and authoritative sources.

    Reference Ellipsoids
    --------------------
    WGS84 is the default for every conversion. Clarke 1866 is the
    ellipsoid of the North American Datum of 1927.

    Grid Systems
    ------------
    Scale factors, false origins and latitude limits of the UTM and UPS
    grids, and the precision limits of MGRS strings.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    WGS84_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    WGS84_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Inverse flattening 1/f of WGS84 ellipsoid"
    )

    WGS84_FLATTENING: Final[Constant] = Constant(
        value=1 / 298.257223563,
        uncertainty=0.0,
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Flattening f = (a - b) / a of WGS84 ellipsoid"
    )

    # =========================================================================
    # Clarke 1866 Ellipsoid (NAD27)
    # =========================================================================

    CLARKE_1866_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_206.4,
        uncertainty=0.0,
        unit="m",
        source="DMA TR8350.2-B",
        description="Semi-major axis of Clarke 1866 ellipsoid"
    )

    CLARKE_1866_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_583.8,
        uncertainty=0.0,
        unit="m",
        source="DMA TR8350.2-B",
        description="Semi-minor axis of Clarke 1866 ellipsoid"
    )

    CLARKE_1866_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=294.9786982,
        uncertainty=0.0,
        unit="dimensionless",
        source="DMA TR8350.2-B",
        description="Inverse flattening 1/f of Clarke 1866 ellipsoid"
    )

    # =========================================================================
    # WGS84 -> NAD27 (CONUS) Molodensky shift
    # =========================================================================

    NAD27_SHIFT_DX: Final[Constant] = Constant(
        value=-12.0,
        uncertainty=5.0,
        unit="m",
        source="DMA TR8350.2-B",
        description="Geocentric X translation WGS84 -> NAD27"
    )

    NAD27_SHIFT_DY: Final[Constant] = Constant(
        value=130.0,
        uncertainty=5.0,
        unit="m",
        source="DMA TR8350.2-B",
        description="Geocentric Y translation WGS84 -> NAD27"
    )

    NAD27_SHIFT_DZ: Final[Constant] = Constant(
        value=190.0,
        uncertainty=6.0,
        unit="m",
        source="DMA TR8350.2-B",
        description="Geocentric Z translation WGS84 -> NAD27"
    )

    # =========================================================================
    # Universal Transverse Mercator
    # Reference: DMA TM 8358.2
    # =========================================================================

    UTM_SCALE_FACTOR: Final[Constant] = Constant(
        value=0.9996,
        uncertainty=0.0,
        unit="dimensionless",
        source="DMA TM 8358.2",
        description="Scale factor on the UTM central meridian"
    )

    UTM_FALSE_EASTING: Final[Constant] = Constant(
        value=500_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="False easting of every UTM zone"
    )

    UTM_FALSE_NORTHING_SOUTH: Final[Constant] = Constant(
        value=10_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="False northing of UTM zones in the southern hemisphere"
    )

    UTM_MIN_LATITUDE: Final[Constant] = Constant(
        value=-82.0,
        uncertainty=0.0,
        unit="degree",
        source="GeoTrans UTM limits",
        description="Southern latitude limit accepted by the UTM projector"
    )

    UTM_MAX_LATITUDE: Final[Constant] = Constant(
        value=86.0,
        uncertainty=0.0,
        unit="degree",
        source="GeoTrans UTM limits",
        description="Northern latitude limit accepted by the UTM projector"
    )

    UTM_MIN_EASTING: Final[Constant] = Constant(
        value=100_000.0,
        uncertainty=0.0,
        unit="m",
        source="GeoTrans UTM limits",
        description="Smallest easting produced by the UTM projector"
    )

    UTM_MAX_EASTING: Final[Constant] = Constant(
        value=900_000.0,
        uncertainty=0.0,
        unit="m",
        source="GeoTrans UTM limits",
        description="Largest easting produced by the UTM projector"
    )

    UTM_MAX_NORTHING: Final[Constant] = Constant(
        value=10_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="GeoTrans UTM limits",
        description="Largest northing accepted by the UTM projector"
    )

    # =========================================================================
    # Universal Polar Stereographic
    # =========================================================================

    UPS_ORIGIN_LATITUDE: Final[Constant] = Constant(
        value=81.114528,
        uncertainty=0.0,
        unit="degree",
        source="DMA TM 8358.2",
        description="Latitude of true scale giving k0 = 0.994 at the pole"
    )

    UPS_FALSE_EASTING: Final[Constant] = Constant(
        value=2_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="False easting of both UPS zones"
    )

    UPS_FALSE_NORTHING: Final[Constant] = Constant(
        value=2_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="False northing of both UPS zones"
    )

    UPS_MIN_NORTH_LATITUDE: Final[Constant] = Constant(
        value=72.0,
        uncertainty=0.0,
        unit="degree",
        source="GeoTrans UPS limits",
        description="Southern edge of the northern UPS cap"
    )

    UPS_MAX_SOUTH_LATITUDE: Final[Constant] = Constant(
        value=-72.0,
        uncertainty=0.0,
        unit="degree",
        source="GeoTrans UPS limits",
        description="Northern edge of the southern UPS cap"
    )

    UPS_MAX_COORDINATE: Final[Constant] = Constant(
        value=4_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="GeoTrans UPS limits",
        description="Largest easting or northing accepted by UPS"
    )

    # =========================================================================
    # Military Grid Reference System
    # =========================================================================

    MGRS_MAX_PRECISION: Final[Constant] = Constant(
        value=5,
        uncertainty=0.0,
        unit="digits",
        source="NGA.SIG.0012",
        description="Digits per axis at 1 m resolution"
    )

    MGRS_UTM_MIN_LATITUDE: Final[Constant] = Constant(
        value=-80.0,
        uncertainty=0.0,
        unit="degree",
        source="NGA.SIG.0012",
        description="MGRS uses UPS south of this latitude"
    )

    MGRS_UTM_MAX_LATITUDE: Final[Constant] = Constant(
        value=84.0,
        uncertainty=0.0,
        unit="degree",
        source="NGA.SIG.0012",
        description="MGRS uses UPS north of this latitude"
    )

    GRID_SQUARE_SIZE: Final[Constant] = Constant(
        value=100_000.0,
        uncertainty=0.0,
        unit="m",
        source="NGA.SIG.0012",
        description="Side of an MGRS 100 km grid square"
    )

    LETTER_CYCLE: Final[Constant] = Constant(
        value=2_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="NGA.SIG.0012",
        description="Northing span of one cycle of 20 row letters"
    )


# Convenience aliases for commonly used values
DEG_TO_RAD: Final[float] = np.pi / 180.0
RAD_TO_DEG: Final[float] = 180.0 / np.pi
PI_OVER_2: Final[float] = np.pi / 2.0
TWO_PI: Final[float] = 2.0 * np.pi
