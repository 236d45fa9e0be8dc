"""
Grid Reference Module.

This module provides:
- UTM zone selection and projection (Norway/Svalbard exceptions, NAD27)
- UPS projection over the polar caps
- The MGRS string codec
- Degrees-in, degrees-out conversion functions
"""

from gridref.utm import (
    UTMProjector,
    central_meridian_deg,
    project_with_datum,
    utm_to_point,
    zone_for,
)

from gridref.ups import UPSProjector, ups_to_point

from gridref.mgrs import (
    BANDS_BY_LETTER,
    LATITUDE_BANDS,
    POLAR_BANDS,
    LatitudeBand,
    MGRSCodec,
    PolarBand,
    band_letter,
    grid_values,
)

from gridref.conversions import (
    decode_mgrs,
    geodetic_to_mgrs,
    geodetic_to_ups,
    geodetic_to_utm,
    mgrs_to_geodetic,
    ups_to_geodetic,
    utm_to_geodetic,
)

__all__ = [
    # UTM
    "UTMProjector",
    "central_meridian_deg",
    "project_with_datum",
    "utm_to_point",
    "zone_for",
    # UPS
    "UPSProjector",
    "ups_to_point",
    # MGRS
    "BANDS_BY_LETTER",
    "LATITUDE_BANDS",
    "POLAR_BANDS",
    "LatitudeBand",
    "MGRSCodec",
    "PolarBand",
    "band_letter",
    "grid_values",
    # Public conversions
    "decode_mgrs",
    "geodetic_to_mgrs",
    "geodetic_to_ups",
    "geodetic_to_utm",
    "mgrs_to_geodetic",
    "ups_to_geodetic",
    "utm_to_geodetic",
]
