"""
Error and Warning Taxonomy for Coordinate Conversions.

Conversions fail by raising `ConversionError`, a `ValueError` subclass that
names every fault detected in one call. Recoverable anomalies are not
errors: they are attached to result objects as `WarningKind` values and,
at the public API, also issued through the standard `warnings` module.
"""

from enum import Enum
from typing import Iterable, Optional, Union


class ErrorKind(Enum):
    """Reasons a conversion can be rejected."""
    LATITUDE_OUT_OF_RANGE = "latitude out of range"
    LONGITUDE_OUT_OF_RANGE = "longitude out of range"
    PRECISION_OUT_OF_RANGE = "precision out of range"
    ZONE_OUT_OF_RANGE = "zone out of range"
    ZONE_OVERRIDE_REJECTED = "zone override rejected"
    HEMISPHERE_INVALID = "invalid hemisphere"
    EASTING_OUT_OF_RANGE = "easting out of range"
    NORTHING_OUT_OF_RANGE = "northing out of range"
    RADIUS_EXCEEDED = "point outside projection radius"
    MALFORMED_MGRS_STRING = "malformed MGRS string"
    PARAMETER_INVALID = "invalid projection parameter"


class WarningKind(Enum):
    """Non-fatal conditions attached to a successful conversion."""
    LONGITUDE_DISTANCE = "point more than 9 degrees from central meridian"
    LATITUDE_BAND_MISMATCH = "latitude outside the MGRS band"


class ConversionError(ValueError):
    """A coordinate conversion was rejected.

    Parameters
    ----------
    kinds : ErrorKind or iterable of ErrorKind
        Every fault detected. Co-occurring faults are reported together.
    message : str, optional
        Human-readable detail. Defaults to the joined kind descriptions.

    Attributes
    ----------
    kinds : frozenset of ErrorKind
        All faults detected.
    kind : ErrorKind
        The first fault, in declaration order of `ErrorKind`.

    Examples
    --------
    >>> err = ConversionError(ErrorKind.LATITUDE_OUT_OF_RANGE, "latitude 95.0")
    >>> err.kind is ErrorKind.LATITUDE_OUT_OF_RANGE
    True
    """

    def __init__(
        self,
        kinds: Union[ErrorKind, Iterable[ErrorKind]],
        message: Optional[str] = None
    ):
        if isinstance(kinds, ErrorKind):
            kinds = (kinds,)
        self.kinds = frozenset(kinds)
        if not self.kinds:
            raise ValueError("ConversionError requires at least one ErrorKind")

        if message is None:
            message = ", ".join(k.value for k in self._ordered())
        super().__init__(message)

    def _ordered(self):
        return [k for k in ErrorKind if k in self.kinds]

    @property
    def kind(self) -> ErrorKind:
        return self._ordered()[0]

    def has(self, kind: ErrorKind) -> bool:
        """Whether `kind` is among the reported faults."""
        return kind in self.kinds


class ConversionWarning(UserWarning):
    """Base class for warnings issued by successful conversions."""


class LatitudeBandWarning(ConversionWarning):
    """Decoded latitude lies outside the MGRS band letter's range."""


class LongitudeDistanceWarning(ConversionWarning):
    """Point lies more than 9 degrees from the central meridian."""


WARNING_CATEGORIES = {
    WarningKind.LONGITUDE_DISTANCE: LongitudeDistanceWarning,
    WarningKind.LATITUDE_BAND_MISMATCH: LatitudeBandWarning,
}


def raise_if(faults: Iterable[ErrorKind], message: str) -> None:
    """Raise a `ConversionError` if any fault was collected.

    Parameters
    ----------
    faults : iterable of ErrorKind
        Faults collected while validating one call.
    message : str
        Detail included in the exception.
    """
    faults = list(faults)
    if faults:
        raise ConversionError(faults, message)
