"""
Test fixtures for the grid reference library.

This module contains shared fixtures: sample positions covering the UTM
area, the polar caps and the zone exceptions, plus ready-made converters.
"""

import pytest

from common.units import Q_
from geospatial.coordinate_models import Clarke1866Ellipsoid
from gridref.mgrs import MGRSCodec
from gridref.ups import UPSProjector
from gridref.utm import UTMProjector


# Positions spread over both hemispheres and all longitudes
SAMPLE_POINTS = [
    (63.554403, 23.716971),
    (61.188325, -149.862498),
    (-31.399455, -64.175971),
    (-42.869627, 147.359083),
    (75.470308, 112.865295),
    (0.0, 0.0),
    (-31.92157, 116.010921),
    (-31.995770, 116.123526),
    (-22.3894, 119.70442),
    (-22.51937, 117.02329),
]

# Positions handled by UPS
POLAR_POINTS = [
    (89.5, 12.3),
    (-84.195396, 160.872803),
    (86.0, -135.0),
    (-88.0, -45.0),
]


@pytest.fixture
def sample_points():
    """Positions inside the UTM area, (lat, lon) in degrees."""
    return list(SAMPLE_POINTS)


@pytest.fixture
def polar_points():
    """Positions over the polar caps, (lat, lon) in degrees."""
    return list(POLAR_POINTS)


@pytest.fixture
def all_points():
    """UTM and polar positions together."""
    return list(SAMPLE_POINTS) + list(POLAR_POINTS)


@pytest.fixture
def codec():
    """MGRS codec on WGS84."""
    return MGRSCodec()


@pytest.fixture
def clarke_codec():
    """MGRS codec on Clarke 1866, which uses the classic row lettering."""
    return MGRSCodec(Clarke1866Ellipsoid)


@pytest.fixture
def utm():
    """UTM converter on WGS84."""
    return UTMProjector()


@pytest.fixture
def ups():
    """UPS converter on WGS84."""
    return UPSProjector()


@pytest.fixture
def quantity():
    """The pint quantity constructor."""
    return Q_
