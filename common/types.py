"""
Type Definitions for Geodetic and Grid Coordinates.

This module defines the immutable value types exchanged between the
projection engines, the UTM/UPS layers and the MGRS codec. Every type is a
frozen dataclass; conversions always return new instances.

Design Rationale
----------------
Using typed dataclasses instead of raw tuples provides:
1. Self-documenting code - field names describe the data
2. Static checking with mypy
3. Validation of coordinate ranges at construction
4. A single place to carry non-fatal warnings alongside a result
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from common.angles import AngleValue
from common.errors import ConversionError, ErrorKind, WarningKind


class Hemisphere(Enum):
    """Hemisphere selector used by UTM and UPS coordinates."""
    NORTH = "N"
    SOUTH = "S"

    @classmethod
    def parse(cls, value: Union['Hemisphere', str]) -> 'Hemisphere':
        """Parse ``'N'``, ``'S'``, ``'north'`` or ``'south'`` (any case).

        Raises
        ------
        ConversionError
            With kind HEMISPHERE_INVALID for anything else.
        """
        if isinstance(value, Hemisphere):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in ("N", "NORTH"):
                return cls.NORTH
            if key in ("S", "SOUTH"):
                return cls.SOUTH
        raise ConversionError(ErrorKind.HEMISPHERE_INVALID, f"Invalid hemisphere {value!r}")

    @classmethod
    def of_latitude(cls, latitude_deg: float) -> 'Hemisphere':
        return cls.SOUTH if latitude_deg < 0 else cls.NORTH


@dataclass(frozen=True)
class GeodeticPoint:
    """A geodetic position on the reference ellipsoid.

    Attributes
    ----------
    latitude : AngleValue
        Geodetic latitude. Range: [-90, 90] degrees.
    longitude : AngleValue
        Geodetic longitude. Range: [-180, 180] degrees.
    elevation : float, optional
        Height above the ellipsoid in METERS. Carried through unchanged;
        it has no effect on the projections.

    Examples
    --------
    >>> p = GeodeticPoint.from_degrees(63.554403, 23.716971)
    >>> p.to_degrees()
    (63.554403, 23.716971)
    """
    latitude: AngleValue
    longitude: AngleValue
    elevation: float = 0.0

    def __post_init__(self):
        """Validate coordinate ranges."""
        faults = []
        if not AngleValue.is_valid_latitude(self.latitude.degrees):
            faults.append(ErrorKind.LATITUDE_OUT_OF_RANGE)
        if not AngleValue.is_valid_longitude(self.longitude.degrees):
            faults.append(ErrorKind.LONGITUDE_OUT_OF_RANGE)
        if faults:
            raise ConversionError(
                faults,
                f"Position ({self.latitude.degrees}, {self.longitude.degrees}) "
                f"outside [-90, 90] x [-180, 180] degrees"
            )

    @classmethod
    def from_degrees(cls, lat_deg: float, lon_deg: float, elevation: float = 0.0) -> 'GeodeticPoint':
        return cls(AngleValue.from_degrees(lat_deg), AngleValue.from_degrees(lon_deg), elevation)

    @classmethod
    def from_radians(cls, lat_rad: float, lon_rad: float, elevation: float = 0.0) -> 'GeodeticPoint':
        return cls(AngleValue.from_radians(lat_rad), AngleValue.from_radians(lon_rad), elevation)

    def to_degrees(self) -> Tuple[float, float]:
        """Return (latitude_degrees, longitude_degrees)."""
        return self.latitude.degrees, self.longitude.degrees

    def add(self, other: 'GeodeticPoint') -> 'GeodeticPoint':
        """Component-wise sum, normalized back into the valid ranges."""
        return GeodeticPoint(
            self.latitude.add(other.latitude).normalized_latitude(),
            self.longitude.add(other.longitude).normalized_longitude(),
            self.elevation + other.elevation
        )

    def subtract(self, other: 'GeodeticPoint') -> 'GeodeticPoint':
        return GeodeticPoint(
            self.latitude.subtract(other.latitude).normalized_latitude(),
            self.longitude.subtract(other.longitude).normalized_longitude(),
            self.elevation - other.elevation
        )

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude}, {self.elevation})"


@dataclass(frozen=True)
class ProjectedPoint:
    """Output of a projector's forward transform.

    Attributes
    ----------
    easting, northing : float
        Grid coordinates in METERS, including false offsets.
    warnings : tuple of WarningKind
        Non-fatal conditions detected during the transform.
    """
    easting: float
    northing: float
    warnings: Tuple[WarningKind, ...] = ()


@dataclass(frozen=True)
class GeodeticResult:
    """Output of a projector's inverse transform (RADIANS)."""
    latitude: float
    longitude: float
    warnings: Tuple[WarningKind, ...] = ()


@dataclass(frozen=True)
class UTMCoordinate:
    """A position expressed in a UTM zone.

    Attributes
    ----------
    zone : int
        UTM zone number, 1 to 60.
    hemisphere : Hemisphere
        Selects the false northing (0 north, 10,000,000 m south).
    easting, northing : float
        Grid coordinates in METERS.
    latitude, longitude : AngleValue
        The geodetic position this coordinate represents.
    central_meridian : AngleValue
        Central meridian of the zone.
    datum : str
        Datum the geodetic position refers to (``'WGS84'`` or ``'NAD27'``).
    warnings : tuple of WarningKind
        Non-fatal conditions raised by the projection.
    """
    zone: int
    hemisphere: Hemisphere
    easting: float
    northing: float
    latitude: AngleValue
    longitude: AngleValue
    central_meridian: AngleValue
    datum: str = "WGS84"
    warnings: Tuple[WarningKind, ...] = ()

    def __str__(self) -> str:
        return f"{self.zone} {self.hemisphere.value} {self.easting}E {self.northing}N"


@dataclass(frozen=True)
class UPSCoordinate:
    """A position expressed in one of the two UPS zones.

    Easting and northing are in METERS, 0 to 4,000,000, with the pole at
    (2,000,000, 2,000,000).
    """
    hemisphere: Hemisphere
    easting: float
    northing: float
    latitude: AngleValue
    longitude: AngleValue

    def __str__(self) -> str:
        return f"{self.hemisphere.value} {self.easting}E {self.northing}N"


@dataclass(frozen=True)
class MGRSComponents:
    """The parts of an MGRS grid reference.

    Attributes
    ----------
    zone : int or None
        UTM zone (1 to 60); None for the polar (UPS) areas.
    band : str
        Latitude band letter (C-X) or polar letter (A, B, Y, Z).
    column, row : str
        Letters of the 100 km grid square.
    easting, northing : float
        Offsets within the grid square in METERS, at the resolution of
        `precision`.
    precision : int
        Digits per axis, 0 (100 km) to 5 (1 m).
    """
    zone: Optional[int]
    band: str
    column: str
    row: str
    easting: float
    northing: float
    precision: int

    @property
    def divisor(self) -> float:
        return 10.0 ** (5 - self.precision)

    def _digits(self, offset: float) -> str:
        if self.precision == 0:
            return ""
        text = f"{int(offset // self.divisor):0{self.precision}d}"
        if len(text) > self.precision:
            raise ConversionError(
                ErrorKind.PRECISION_OUT_OF_RANGE,
                f"Offset {offset} needs more than {self.precision} digits"
            )
        return text

    @property
    def easting_digits(self) -> str:
        return self._digits(self.easting)

    @property
    def northing_digits(self) -> str:
        return self._digits(self.northing)

    @property
    def grid_zone(self) -> str:
        """Zone number and band letter, e.g. ``'31N'`` or ``'Z'``."""
        zone = "" if self.zone is None else f"{self.zone:02d}"
        return f"{zone}{self.band}"

    def to_string(self) -> str:
        """Canonical form without separators, e.g. ``'31NAA6602100000'``."""
        return (f"{self.grid_zone}{self.column}{self.row}"
                f"{self.easting_digits}{self.northing_digits}")

    def to_grouped_string(self) -> str:
        """Display form with groups separated by spaces, e.g. ``'31N AA 66021 00000'``."""
        parts = [self.grid_zone, self.column + self.row]
        if self.precision > 0:
            parts.extend([self.easting_digits, self.northing_digits])
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class MGRSCoordinate:
    """A decoded (or freshly encoded) MGRS grid reference.

    Attributes
    ----------
    text : str
        Canonical MGRS string.
    latitude, longitude : AngleValue
        Geodetic position of the south-west corner of the referenced cell.
    components : MGRSComponents
        The parsed parts of `text`.
    warnings : tuple of WarningKind
        E.g. LATITUDE_BAND_MISMATCH when the position does not fall inside
        the band letter's latitude range.
    """
    text: str
    latitude: AngleValue
    longitude: AngleValue
    components: MGRSComponents
    warnings: Tuple[WarningKind, ...] = field(default=())

    def to_degrees(self) -> Tuple[float, float]:
        return self.latitude.degrees, self.longitude.degrees

    def __str__(self) -> str:
        return self.text
