"""
Validation Framework for the Grid Reference Library.

This module provides accuracy checks against geodesic distances and PROJ.
"""

from validation.accuracy import (
    AccuracyChecker,
    RoundTripMetrics,
    ValidationResult,
    cell_size,
    compute_round_trip_metrics,
    reference_ups,
    reference_utm,
    round_trip_error,
    utm_epsg,
)

__all__ = [
    "AccuracyChecker",
    "RoundTripMetrics",
    "ValidationResult",
    "cell_size",
    "compute_round_trip_metrics",
    "reference_ups",
    "reference_utm",
    "round_trip_error",
    "utm_epsg",
]
