"""
Geospatial Module for the Grid Reference Library.

All projection mathematics lives in this module; the grid layers in
`gridref` only select zones, origins and letters.

This module provides:
- Reference ellipsoid models and radii of curvature
- Geodesic distance calculations (pyproj)
- WGS84 to NAD27 datum shift
- Transverse Mercator and Polar Stereographic projection engines
"""

from geospatial.coordinate_models import (
    ELLIPSOIDS,
    Clarke1866Ellipsoid,
    EllipsoidParameters,
    WGS84Ellipsoid,
    get_ellipsoid,
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
)

from geospatial.distance_calculations import (
    geodesic_inverse,
    geodesic_distance,
    geodesic_distance_batch,
)

from geospatial.datum import Datum, wgs84_to_nad27

from geospatial.projections import (
    ProjectionAdapter,
    TransverseMercatorProjector,
    batch_project,
)

from geospatial.polar_stereographic import PolarStereographicProjector

__all__ = [
    # Coordinate models
    "ELLIPSOIDS",
    "Clarke1866Ellipsoid",
    "EllipsoidParameters",
    "WGS84Ellipsoid",
    "get_ellipsoid",
    "radius_of_curvature_meridian",
    "radius_of_curvature_prime_vertical",
    # Distance calculations
    "geodesic_inverse",
    "geodesic_distance",
    "geodesic_distance_batch",
    # Datum
    "Datum",
    "wgs84_to_nad27",
    # Projections
    "ProjectionAdapter",
    "TransverseMercatorProjector",
    "PolarStereographicProjector",
    "batch_project",
]
