"""
Immutable Angle Type with Latitude/Longitude Semantics.

`AngleValue` stores an angle in both degrees and radians, always mutually
consistent. Factories exist for the latitude and longitude ranges (which
clamp) and for degree-minute-second input. All arithmetic returns new
instances.

Notes
-----
Normalization uses C-style remainders (`np.fmod`), which keep the sign of
the dividend, followed by a fold back into the canonical range:

- latitude:  d % 180, then > 90 -> 180 - d and < -90 -> -180 - d
- longitude: d % 360, then > 180 -> d - 360 and < -180 -> d + 360
"""

from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple
import numpy as np

from common.constants import DEG_TO_RAD, RAD_TO_DEG, PI_OVER_2
from common.units import AngleLike, to_degrees


def _require(angle, what: str = "angle") -> None:
    if angle is None:
        raise ValueError(f"{what} is None")


def _clamp(value: float, low: float, high: float) -> float:
    return low if value < low else high if value > high else value


@total_ordering
@dataclass(frozen=True, eq=False)
class AngleValue:
    """An angle in degrees and radians.

    Attributes
    ----------
    degrees : float
        Size of the angle in degrees.
    radians : float
        Size of the angle in radians.

    Examples
    --------
    >>> a = AngleValue.from_dms(45, 30, 0)
    >>> a.degrees
    45.5
    >>> AngleValue.from_degrees(190).normalized_longitude().degrees
    -170.0
    """
    degrees: float
    radians: float

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_degrees(cls, degrees: float) -> 'AngleValue':
        return cls(float(degrees), DEG_TO_RAD * degrees)

    @classmethod
    def from_radians(cls, radians: float) -> 'AngleValue':
        return cls(RAD_TO_DEG * radians, float(radians))

    @classmethod
    def from_quantity(cls, value: AngleLike) -> 'AngleValue':
        """Create an angle from a float (degrees) or a pint angle quantity."""
        return cls.from_degrees(to_degrees(value))

    @classmethod
    def from_degrees_latitude(cls, degrees: float) -> 'AngleValue':
        """Create a latitude, clamped to [-90, 90] degrees."""
        degrees = _clamp(float(degrees), -90.0, 90.0)
        radians = _clamp(DEG_TO_RAD * degrees, -PI_OVER_2, PI_OVER_2)
        return cls(degrees, radians)

    @classmethod
    def from_radians_latitude(cls, radians: float) -> 'AngleValue':
        radians = _clamp(float(radians), -PI_OVER_2, PI_OVER_2)
        degrees = _clamp(RAD_TO_DEG * radians, -90.0, 90.0)
        return cls(degrees, radians)

    @classmethod
    def from_degrees_longitude(cls, degrees: float) -> 'AngleValue':
        """Create a longitude, clamped to [-180, 180] degrees."""
        degrees = _clamp(float(degrees), -180.0, 180.0)
        radians = _clamp(DEG_TO_RAD * degrees, -np.pi, np.pi)
        return cls(degrees, radians)

    @classmethod
    def from_radians_longitude(cls, radians: float) -> 'AngleValue':
        radians = _clamp(float(radians), -np.pi, np.pi)
        degrees = _clamp(RAD_TO_DEG * radians, -180.0, 180.0)
        return cls(degrees, radians)

    @classmethod
    def from_xy(cls, x: float, y: float) -> 'AngleValue':
        """Angle of the vector (x, y) from the positive x axis."""
        return cls.from_radians(float(np.arctan2(y, x)))

    @classmethod
    def from_dms(cls, degrees: int, minutes: float, seconds: float) -> 'AngleValue':
        """Create an angle from degrees, minutes and seconds.

        The sign is taken from `degrees` (pass -0.0 for negative angles under
        one degree); minutes and seconds are magnitudes.

        Raises
        ------
        ValueError
            If minutes or seconds are outside [0, 60).
        """
        if not 0 <= minutes < 60:
            raise ValueError(f"Minutes {minutes} out of range [0, 60)")
        if not 0 <= seconds < 60:
            raise ValueError(f"Seconds {seconds} out of range [0, 60)")
        sign = float(np.copysign(1.0, degrees))
        return cls.from_degrees(sign * (abs(degrees) + minutes / 60.0 + seconds / 3600.0))

    @classmethod
    def from_dmds(cls, degrees: int, minutes: float) -> 'AngleValue':
        """Create an angle from degrees and decimal minutes."""
        if not 0 <= minutes < 60:
            raise ValueError(f"Minutes {minutes} out of range [0, 60)")
        sign = float(np.copysign(1.0, degrees))
        return cls.from_degrees(sign * (abs(degrees) + minutes / 60.0))

    @classmethod
    def asin(cls, sine: float) -> 'AngleValue':
        return cls.from_radians(float(np.arcsin(sine)))

    @classmethod
    def acos(cls, cosine: float) -> 'AngleValue':
        return cls.from_radians(float(np.arccos(cosine)))

    @classmethod
    def atan(cls, tangent: float) -> 'AngleValue':
        return cls.from_radians(float(np.arctan(tangent)))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: 'AngleValue') -> 'AngleValue':
        _require(other)
        return AngleValue.from_degrees(self.degrees + other.degrees)

    def subtract(self, other: 'AngleValue') -> 'AngleValue':
        _require(other)
        return AngleValue.from_degrees(self.degrees - other.degrees)

    def multiply(self, multiplier: float) -> 'AngleValue':
        return AngleValue.from_degrees(self.degrees * multiplier)

    def divide(self, divisor):
        """Divide by a number (returns an angle) or an angle (returns a ratio).

        Raises
        ------
        ValueError
            If `divisor` is None or a zero angle.
        """
        _require(divisor, "divisor")
        if isinstance(divisor, AngleValue):
            if divisor.degrees == 0.0:
                raise ValueError("Division by a zero angle")
            return self.degrees / divisor.degrees
        return AngleValue.from_degrees(self.degrees / divisor)

    def add_degrees(self, degrees: float) -> 'AngleValue':
        return AngleValue.from_degrees(self.degrees + degrees)

    def subtract_degrees(self, degrees: float) -> 'AngleValue':
        return AngleValue.from_degrees(self.degrees - degrees)

    def add_radians(self, radians: float) -> 'AngleValue':
        return AngleValue.from_radians(self.radians + radians)

    def subtract_radians(self, radians: float) -> 'AngleValue':
        return AngleValue.from_radians(self.radians - radians)

    def __add__(self, other):
        if not isinstance(other, AngleValue):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, AngleValue):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, multiplier):
        if isinstance(multiplier, AngleValue):
            return NotImplemented
        return self.multiply(multiplier)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        return self.divide(divisor)

    def __neg__(self):
        return AngleValue.from_degrees(-self.degrees)

    def __eq__(self, other):
        if not isinstance(other, AngleValue):
            return NotImplemented
        return self.degrees == other.degrees

    def __lt__(self, other):
        if not isinstance(other, AngleValue):
            return NotImplemented
        return self.degrees < other.degrees

    def __hash__(self):
        return hash(self.degrees)

    def angular_distance_to(self, other: 'AngleValue') -> 'AngleValue':
        """Absolute shortest angular distance, wrapped across +/-180 degrees."""
        _require(other)
        difference = other.degrees - self.degrees
        if difference < -180:
            difference += 360
        elif difference > 180:
            difference -= 360
        return AngleValue.from_degrees(abs(difference))

    # ------------------------------------------------------------------
    # Trigonometry
    # ------------------------------------------------------------------

    def sin(self) -> float:
        return float(np.sin(self.radians))

    def cos(self) -> float:
        return float(np.cos(self.radians))

    def sin_half_angle(self) -> float:
        return float(np.sin(0.5 * self.radians))

    def cos_half_angle(self) -> float:
        return float(np.cos(0.5 * self.radians))

    def tan_half_angle(self) -> float:
        return float(np.tan(0.5 * self.radians))

    @staticmethod
    def mid_angle(a: 'AngleValue', b: 'AngleValue') -> 'AngleValue':
        _require(a)
        _require(b)
        return AngleValue.from_degrees(0.5 * (a.degrees + b.degrees))

    @staticmethod
    def average(*angles: 'AngleValue') -> 'AngleValue':
        if not angles:
            raise ValueError("average() requires at least one angle")
        for a in angles:
            _require(a)
        return AngleValue.from_degrees(sum(a.degrees for a in angles) / len(angles))

    @staticmethod
    def max(a: 'AngleValue', b: 'AngleValue') -> 'AngleValue':
        return a if a.degrees >= b.degrees else b

    @staticmethod
    def min(a: 'AngleValue', b: 'AngleValue') -> 'AngleValue':
        return a if a.degrees <= b.degrees else b

    # ------------------------------------------------------------------
    # Normalization and validity
    # ------------------------------------------------------------------

    @staticmethod
    def normalized_degrees_latitude(degrees: float) -> float:
        lat = float(np.fmod(degrees, 180.0))
        if lat > 90:
            return 180 - lat
        if lat < -90:
            return -180 - lat
        return lat

    @staticmethod
    def normalized_degrees_longitude(degrees: float) -> float:
        lon = float(np.fmod(degrees, 360.0))
        if lon > 180:
            return lon - 360
        if lon < -180:
            return lon + 360
        return lon

    def normalized_latitude(self) -> 'AngleValue':
        return AngleValue.from_degrees(self.normalized_degrees_latitude(self.degrees))

    def normalized_longitude(self) -> 'AngleValue':
        return AngleValue.from_degrees(self.normalized_degrees_longitude(self.degrees))

    @staticmethod
    def crosses_longitude_boundary(a: 'AngleValue', b: 'AngleValue') -> bool:
        """Whether the short arc between two longitudes crosses the antimeridian."""
        _require(a)
        _require(b)
        return (np.sign(a.degrees) != np.sign(b.degrees)
                and abs(a.degrees - b.degrees) > 180)

    @staticmethod
    def is_valid_latitude(degrees: float) -> bool:
        return -90 <= degrees <= 90

    @staticmethod
    def is_valid_longitude(degrees: float) -> bool:
        return -180 <= degrees <= 180

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def to_dms(self) -> Tuple[float, int, float]:
        """Split into (signed degrees, minutes, seconds).

        Seconds are rounded half-to-even to two decimals; a rounded value
        of 60 carries into the minutes, and 60 minutes into the degrees.

        Returns
        -------
        Tuple[float, int, float]
            Degrees carry the sign of the angle.
        """
        d, m, s, sign = self._split_dms(seconds_digits=2)
        return float(np.copysign(d, sign)), m, s

    def _split_dms(self, seconds_digits: Optional[int]):
        value = self.degrees
        sign = -1 if value < 0 else 1
        value = abs(value)
        d = int(np.floor(value))
        value = (value - d) * 60.0
        m = int(np.floor(value))
        value = (value - m) * 60.0
        if seconds_digits is None:
            s = int(round(value))
        else:
            scale = 10 ** seconds_digits
            s = round(value * scale) / scale

        if s == 60:
            m += 1
            s = 0 if seconds_digits is None else 0.0
        if m == 60:
            d += 1
            m = 0
        return d, m, s, sign

    def to_dms_string(self) -> str:
        """Format as ``-D° M’ S”`` with whole seconds."""
        d, m, s, sign = self._split_dms(seconds_digits=None)
        return f"{'-' if sign < 0 else ''}{d}° {m}’ {s}”"

    def to_formatted_dms_string(self) -> str:
        """Format as fixed-width degrees, minutes and two-decimal seconds."""
        d, m, s, sign = self._split_dms(seconds_digits=2)
        return f"{'-' if sign < 0 else ''}{d:04d}° {m:02d}’ {s:5.2f}”"

    def to_decimal_degrees_string(self, digits: int) -> str:
        """Format the degrees with `digits` decimals (0 to 15)."""
        if not 0 <= digits <= 15:
            raise ValueError(f"Digits {digits} out of range [0, 15]")
        return f"{self.degrees:.{digits}f}"

    def __str__(self) -> str:
        return f"{self.degrees}°"


ZERO = AngleValue.from_degrees(0.0)
POS90 = AngleValue.from_degrees(90.0)
NEG90 = AngleValue.from_degrees(-90.0)
POS180 = AngleValue.from_degrees(180.0)
NEG180 = AngleValue.from_degrees(-180.0)
