"""
Common utilities for the grid reference library.

This package provides foundational components used across all modules:
- Unit handling with dimensional analysis (pint)
- Geodetic constants with uncertainty bounds
- Angle and coordinate value types
- Error taxonomy and logging
"""

from common.units import ureg, Q_, to_degrees, to_meters
from common.constants import GeodeticConstants
from common.angles import AngleValue
from common.errors import (
    ConversionError,
    ConversionWarning,
    ErrorKind,
    LatitudeBandWarning,
    LongitudeDistanceWarning,
    WarningKind,
)
from common.types import (
    GeodeticPoint,
    Hemisphere,
    MGRSComponents,
    MGRSCoordinate,
    UPSCoordinate,
    UTMCoordinate,
)
from common.logging_config import get_logger

__all__ = [
    "ureg",
    "Q_",
    "to_degrees",
    "to_meters",
    "GeodeticConstants",
    "AngleValue",
    "ConversionError",
    "ConversionWarning",
    "ErrorKind",
    "LatitudeBandWarning",
    "LongitudeDistanceWarning",
    "WarningKind",
    "GeodeticPoint",
    "Hemisphere",
    "MGRSComponents",
    "MGRSCoordinate",
    "UPSCoordinate",
    "UTMCoordinate",
    "get_logger",
]
