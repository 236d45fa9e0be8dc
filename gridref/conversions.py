"""
Public Conversion Functions.

Degrees-in, degrees-out entry points over the UTM, UPS and MGRS layers,
all on the WGS84 ellipsoid. Angles may be given as plain floats (degrees)
or pint quantities with angle units; grid coordinates as floats (meters)
or pint length quantities.

Non-fatal conditions are attached to the structured results and are also
issued through the `warnings` module, so that callers can escalate them
with the standard warning filters:

>>> import warnings
>>> from common.errors import LatitudeBandWarning
>>> warnings.simplefilter("error", LatitudeBandWarning)  # doctest: +SKIP

Example Usage
-------------
>>> from gridref.conversions import geodetic_to_mgrs, mgrs_to_geodetic
>>> geodetic_to_mgrs(0.0, 0.0)
'31NAA6602100000'
>>> lat, lon = mgrs_to_geodetic('31NAA6602100000')
"""

import warnings
from typing import Iterable, Tuple, Union

from common.errors import WARNING_CATEGORIES, WarningKind
from common.types import (
    GeodeticPoint,
    Hemisphere,
    MGRSCoordinate,
    UPSCoordinate,
    UTMCoordinate,
)
from common.units import AngleLike, LengthLike, to_degrees, to_meters
from geospatial.datum import Datum
from gridref.mgrs import MGRSCodec
from gridref.ups import UPSProjector
from gridref.utm import UTMProjector, project_with_datum

_codec = MGRSCodec()
_utm = UTMProjector()
_ups = UPSProjector()


def _emit(kinds: Iterable[WarningKind], detail: str) -> None:
    for kind in kinds:
        warnings.warn(f"{detail}: {kind.value}", WARNING_CATEGORIES[kind], stacklevel=3)


def geodetic_to_mgrs(
    latitude: AngleLike,
    longitude: AngleLike,
    precision: int = 5
) -> str:
    """Encode a WGS84 position as an MGRS string.

    Parameters
    ----------
    latitude : float or pint.Quantity
        Latitude, [-90, 90] degrees.
    longitude : float or pint.Quantity
        Longitude, [-180, 360] degrees.
    precision : int
        Digits per axis, 0 (100 km) to 5 (1 m).

    Returns
    -------
    str
        Canonical MGRS string, e.g. ``'31NAA6602100000'``.

    Raises
    ------
    ConversionError
        For out-of-range latitude, longitude or precision.
    """
    return _codec.encode(
        to_degrees(latitude, "latitude"),
        to_degrees(longitude, "longitude"),
        precision
    )


def decode_mgrs(mgrs: str) -> MGRSCoordinate:
    """Decode an MGRS string into a structured result.

    A LatitudeBandWarning is issued when the decoded position falls outside
    the band letter's latitude range; the result is still returned, with
    the warning recorded in its `warnings` field.
    """
    result = _codec.decode(mgrs)
    _emit(result.warnings, f"MGRS {result.text}")
    return result


def mgrs_to_geodetic(mgrs: str) -> Tuple[float, float]:
    """Decode an MGRS string to (latitude, longitude) in degrees.

    The position is the south-west corner of the referenced cell.

    Raises
    ------
    ConversionError
        MALFORMED_MGRS_STRING, or the UTM/UPS kinds when the reference
        lies off the grid.
    """
    result = _codec.decode(mgrs)
    _emit(result.warnings, f"MGRS {result.text}")
    return result.to_degrees()


def geodetic_to_utm(
    latitude: AngleLike,
    longitude: AngleLike,
    datum: Union[Datum, str] = "WGS84"
) -> UTMCoordinate:
    """Project a WGS84 position to UTM.

    Parameters
    ----------
    latitude, longitude : float or pint.Quantity
        WGS84 position.
    datum : Datum or str
        ``'WGS84'`` (default) or ``'NAD27'``. For NAD27 the position is
        shifted to NAD27 and projected on the Clarke 1866 ellipsoid.

    Returns
    -------
    UTMCoordinate
        Issues a LongitudeDistanceWarning when the position lies more than
        9° from the zone's central meridian.
    """
    result = project_with_datum(
        to_degrees(latitude, "latitude"),
        to_degrees(longitude, "longitude"),
        datum
    )
    _emit(result.warnings, f"UTM {result}")
    return result


def utm_to_geodetic(
    zone: int,
    hemisphere: Union[Hemisphere, str],
    easting: LengthLike,
    northing: LengthLike
) -> GeodeticPoint:
    """Invert a WGS84 UTM coordinate."""
    result = _utm.inverse(
        zone,
        hemisphere,
        to_meters(easting, "easting"),
        to_meters(northing, "northing")
    )
    _emit(result.warnings, f"UTM {result}")
    return GeodeticPoint(result.latitude, result.longitude)


def geodetic_to_ups(latitude: AngleLike, longitude: AngleLike) -> UPSCoordinate:
    """Project a WGS84 position in a polar cap (|latitude| >= 72°) to UPS."""
    return _ups.forward(to_degrees(latitude, "latitude"), to_degrees(longitude, "longitude"))


def ups_to_geodetic(
    hemisphere: Union[Hemisphere, str],
    easting: LengthLike,
    northing: LengthLike
) -> GeodeticPoint:
    """Invert a WGS84 UPS coordinate."""
    result = _ups.inverse(hemisphere, to_meters(easting, "easting"), to_meters(northing, "northing"))
    return GeodeticPoint(result.latitude, result.longitude)
