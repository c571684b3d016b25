"""Geodesic measurements over lat/lng point sequences. No project imports.

Areas and lengths are computed on the WGS84 ellipsoid (pyproj.Geod) so that
city-scale tracings measured in degrees come out in square meters / meters.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray
from pyproj import Geod
from shapely.geometry import LineString, Polygon

from metre.models.project import GeoPoint, ShapeKind

logger = logging.getLogger(__name__)

_GEOD = Geod(ellps="WGS84")

# 3 distinct vertices + the closing one
MIN_RING_COORDS = 4


def finite_or_zero(value: float, what: str = "measurement") -> float:
    """Clamp NaN/inf (and negative noise) to 0, logging the anomaly."""
    if not math.isfinite(value):
        logger.warning("Non-finite %s (%r) clamped to 0", what, value)
        return 0.0
    return max(float(value), 0.0)


def lnglat_array(points: Sequence[GeoPoint]) -> NDArray[np.float64]:
    """Nx2 array of (lng, lat), the axis order pyproj and shapely expect."""
    if not points:
        return np.empty((0, 2))
    return np.array([[p.lng, p.lat] for p in points], dtype=np.float64)


def close_ring(coords: NDArray[np.float64]) -> NDArray[np.float64]:
    """Append the first coordinate. Never stored, only measured."""
    if len(coords) == 0:
        return coords
    return np.vstack([coords, coords[:1]])


def distinct_count(coords: NDArray[np.float64]) -> int:
    if len(coords) == 0:
        return 0
    return len(np.unique(coords, axis=0))


def polygon_area(points: Sequence[GeoPoint]) -> float:
    """Unsigned geodesic area (m²) of the open ring ``points``.

    Returns 0 with a warning when fewer than 3 distinct vertices remain.
    """
    coords = lnglat_array(points)
    if not np.all(np.isfinite(coords)):
        logger.warning("Polygon with non-finite coordinates, area set to 0")
        return 0.0
    ring = close_ring(coords)
    if len(ring) < MIN_RING_COORDS or distinct_count(ring) < 3:
        logger.warning("Polygon needs 3 distinct vertices, got %d", distinct_count(ring))
        return 0.0

    try:
        area, _perimeter = _GEOD.geometry_area_perimeter(Polygon(ring))
    except (ValueError, RuntimeError) as e:
        logger.warning("Polygon area failed: %s", e)
        return 0.0
    return finite_or_zero(abs(area), "polygon area")


def path_length(points: Sequence[GeoPoint]) -> float:
    """Sum of geodesic segment lengths (m) along the open path."""
    coords = lnglat_array(points)
    if len(coords) < 2:
        return 0.0
    if not np.all(np.isfinite(coords)):
        logger.warning("Path with non-finite coordinates, length set to 0")
        return 0.0

    try:
        length = _GEOD.geometry_length(LineString(coords))
    except (ValueError, RuntimeError) as e:
        logger.warning("Path length failed: %s", e)
        return 0.0
    return finite_or_zero(length, "path length")


def measure(points: Sequence[GeoPoint], kind: ShapeKind) -> float:
    """Measured value for a shape of the given kind: area for polygons, length otherwise."""
    if kind == ShapeKind.POLYGON:
        return polygon_area(points)
    return path_length(points)
