"""
Accuracy Checks for Grid Conversions.

This module verifies that the conversions behave like a grid reference
system should: decoded positions lie close to the encoded ones, finer
precisions never do worse than coarser ones, and the projections agree
with an independent implementation (PROJ, through pyproj).

Check Categories
----------------
1. Round trip (encode then decode, geodesic distance to the input)
2. Precision monotonicity (error never grows with more digits)
3. Agreement with PROJ (EPSG 326xx/327xx UTM, EPSG 32661/32761 UPS)
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence, Tuple
import numpy as np
from numpy.typing import NDArray

from pyproj import CRS, Transformer

from common.constants import GeodeticConstants
from common.logging_config import get_logger
from geospatial.distance_calculations import geodesic_distance
from gridref.mgrs import MGRSCodec
from gridref.ups import UPSProjector
from gridref.utm import UTMProjector, zone_for

logger = get_logger(__name__)

Point = Tuple[float, float]

_codec = MGRSCodec()
_utm = UTMProjector()
_ups = UPSProjector()


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the check.
    passed : bool
        Whether the check passed.
    message : str
        Description of the result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


@dataclass
class RoundTripMetrics:
    """Summary of round-trip errors over a set of points.

    Attributes
    ----------
    mean_error_m : float
        Mean geodesic error in meters.
    max_error_m : float
        Largest error in meters.
    p95_error_m : float
        95th percentile error in meters.
    count : int
        Number of points.
    """
    mean_error_m: float
    max_error_m: float
    p95_error_m: float
    count: int


def cell_size(precision: int) -> float:
    """Edge length in meters of an MGRS cell at `precision` digits."""
    return 10.0 ** (5 - precision)


def round_trip_error(latitude_deg: float, longitude_deg: float, precision: int = 5) -> float:
    """Geodesic distance in meters between a position and its decoded MGRS string.

    Examples
    --------
    >>> round_trip_error(0.0, 0.0) < 1.0
    True
    """
    text = _codec.encode(latitude_deg, longitude_deg, precision)
    decoded_lat, decoded_lon = _codec.decode(text).to_degrees()
    return geodesic_distance(latitude_deg, longitude_deg, decoded_lat, decoded_lon)


def compute_round_trip_metrics(points: Sequence[Point], precision: int = 5) -> RoundTripMetrics:
    """Round-trip error statistics over `points` given as (lat, lon) degrees."""
    errors = np.array([round_trip_error(lat, lon, precision) for lat, lon in points])
    return RoundTripMetrics(
        mean_error_m=float(np.mean(errors)),
        max_error_m=float(np.max(errors)),
        p95_error_m=float(np.percentile(errors, 95)),
        count=len(errors),
    )


@lru_cache(maxsize=128)
def _transformer(epsg: int) -> Transformer:
    return Transformer.from_crs(CRS.from_epsg(4326), CRS.from_epsg(epsg), always_xy=True)


def utm_epsg(zone: int, south: bool) -> int:
    """EPSG code of a WGS84 UTM zone."""
    return (32700 if south else 32600) + zone


def reference_utm(
    latitude_deg: float,
    longitude_deg: float,
    zone: Optional[int] = None
) -> Tuple[float, float]:
    """UTM (easting, northing) of a WGS84 position computed by PROJ.

    Parameters
    ----------
    latitude_deg, longitude_deg : float
        Position in degrees.
    zone : int, optional
        Zone to project in; defaults to the zone the position belongs to.
    """
    if zone is None:
        zone = zone_for(latitude_deg, longitude_deg)
    transformer = _transformer(utm_epsg(zone, latitude_deg < 0))
    easting, northing = transformer.transform(longitude_deg, latitude_deg)
    return float(easting), float(northing)


def reference_ups(latitude_deg: float, longitude_deg: float) -> Tuple[float, float]:
    """UPS (easting, northing) of a WGS84 position computed by PROJ."""
    transformer = _transformer(32761 if latitude_deg < 0 else 32661)
    easting, northing = transformer.transform(longitude_deg, latitude_deg)
    return float(easting), float(northing)


class AccuracyChecker:
    """Checker for the accuracy of the WGS84 grid conversions.

    Parameters
    ----------
    log_violations : bool
        Whether to log failed checks.
    """

    def __init__(self, log_violations: bool = True):
        self.log_violations = log_violations
        self._logger = get_logger("AccuracyChecker")

    def _report(self, result: ValidationResult) -> ValidationResult:
        if not result.passed and self.log_violations:
            self._logger.warning(f"{result.test_name} failed: {result.message}")
        return result

    def check_all(self, points: Sequence[Point]) -> List[ValidationResult]:
        """Run every check on `points` given as (lat, lon) degrees."""
        return [
            self.check_round_trip(points),
            self.check_precision_monotonicity(points),
            self.check_against_proj(points),
        ]

    def check_round_trip(
        self,
        points: Sequence[Point],
        precision: int = 5,
        tolerance_m: Optional[float] = None
    ) -> ValidationResult:
        """Check that every point survives an MGRS round trip.

        The default tolerance is one cell edge (1 m at precision 5); a
        decoded position lies within half a cell diagonal of the input.
        """
        if tolerance_m is None:
            tolerance_m = max(1.0, cell_size(precision))

        errors = np.array([round_trip_error(lat, lon, precision) for lat, lon in points])
        violations = errors > tolerance_m
        num_violations = int(np.sum(violations))

        return self._report(ValidationResult(
            test_name="round_trip",
            passed=num_violations == 0,
            message=f"Round trip at precision {precision}: {num_violations} violations, "
                    f"max error {np.max(errors):.3f} m",
            details={
                'max_error_m': float(np.max(errors)),
                'mean_error_m': float(np.mean(errors)),
                'tolerance_m': tolerance_m,
                'failed_points': [tuple(p) for p, bad in zip(points, violations) if bad],
            }
        ))

    def check_precision_monotonicity(
        self,
        points: Sequence[Point],
        slack_m: float = 1.0e-3
    ) -> ValidationResult:
        """Check that round-trip error never grows as precision increases."""
        max_precision = int(GeodeticConstants.MGRS_MAX_PRECISION.value)
        precisions = range(max_precision + 1)

        errors: NDArray[np.float64] = np.array([
            [round_trip_error(lat, lon, p) for p in precisions]
            for lat, lon in points
        ])
        increases = np.diff(errors, axis=1) > slack_m
        failing = np.any(increases, axis=1)

        return self._report(ValidationResult(
            test_name="precision_monotonicity",
            passed=not np.any(failing),
            message=f"Precision monotonicity: {int(np.sum(failing))} of {len(points)} points violate",
            details={
                'max_error_by_precision_m': {p: float(np.max(errors[:, p])) for p in precisions},
                'failed_points': [tuple(p) for p, bad in zip(points, failing) if bad],
            }
        ))

    def check_against_proj(
        self,
        points: Sequence[Point],
        tolerance_m: float = 0.05
    ) -> ValidationResult:
        """Compare UTM/UPS forward projections with PROJ.

        Points between 80°S and 84°N are compared in UTM, the rest in UPS.
        """
        differences = []
        for lat, lon in points:
            if lat < GeodeticConstants.MGRS_UTM_MIN_LATITUDE.value or \
                    lat > GeodeticConstants.MGRS_UTM_MAX_LATITUDE.value:
                ours = _ups.forward(lat, lon)
                easting, northing = reference_ups(lat, lon)
            else:
                ours = _utm.forward(lat, lon)
                easting, northing = reference_utm(lat, lon, ours.zone)
            differences.append(np.hypot(ours.easting - easting, ours.northing - northing))

        differences = np.asarray(differences)
        violations = differences > tolerance_m
        num_violations = int(np.sum(violations))

        return self._report(ValidationResult(
            test_name="proj_agreement",
            passed=num_violations == 0,
            message=f"PROJ agreement: {num_violations} violations, "
                    f"max difference {np.max(differences):.4f} m",
            details={
                'max_difference_m': float(np.max(differences)),
                'tolerance_m': tolerance_m,
                'failed_points': [tuple(p) for p, bad in zip(points, violations) if bad],
            }
        ))
