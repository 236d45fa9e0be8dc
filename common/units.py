"""
Unit Registry and Dimensional Checks for Coordinate Inputs.

This module provides a centralized unit system using the `pint` library.
Public conversion functions accept either bare numbers (degrees for angles,
meters for grid coordinates) or `pint` quantities, which are converted here
so that the numerical core always sees plain floats in canonical units.

Example Usage
-------------
>>> from common.units import Q_, to_degrees, to_meters
>>> to_degrees(Q_(0.5, 'radian'))
28.64788975654116
>>> to_meters(Q_(12.5, 'km'))
12500.0
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

AngleLike = Union[float, int, pint.Quantity]
LengthLike = Union[float, int, pint.Quantity]


def _convert(value, unit: str, what: str) -> float:
    if isinstance(value, pint.Quantity):
        try:
            return float(value.to(unit).magnitude)
        except pint.DimensionalityError as e:
            raise ValueError(
                f"{what} has incompatible units. "
                f"Expected {unit}, got {value.units}"
            ) from e
    if value is None:
        raise ValueError(f"{what} is required")
    return float(value)


def to_degrees(value: AngleLike, what: str = "angle") -> float:
    """Return an angle in degrees.

    Parameters
    ----------
    value : float or pint.Quantity
        Bare numbers are taken to be degrees already.
    what : str
        Name of the argument, used in error messages.

    Returns
    -------
    float
        The angle in degrees.

    Raises
    ------
    ValueError
        If `value` is None or a quantity that is not an angle.
    """
    return _convert(value, "degree", what)


def to_meters(value: LengthLike, what: str = "length") -> float:
    """Return a length in meters.

    Parameters
    ----------
    value : float or pint.Quantity
        Bare numbers are taken to be meters already.
    what : str
        Name of the argument, used in error messages.

    Returns
    -------
    float
        The length in meters.
    """
    return _convert(value, "meter", what)

