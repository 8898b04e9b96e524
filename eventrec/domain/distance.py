"""
Great-circle distance using the Haversine formula.

Invalid input
-------------
``distance`` never raises.  If any coordinate of either point is not a
finite number it returns ``0.0``.  That value is a sentinel and is
indistinguishable from a true zero distance, so callers must not read it
as "same place".

Complexity: O(1) per call.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from .entities import Point

EARTH_RADIUS_KM = 6_371.0


def is_finite_number(value: Any) -> bool:
    """True for a finite ``int`` / ``float`` (``bool`` is rejected)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_valid_coordinate(value: Any) -> bool:
    return is_finite_number(value)


def haversine_km(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = lat2_r - lat1_r
    dlng = math.radians(lng2) - math.radians(lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    a = min(a, 1.0)  # rounding can push antipodal points just past 1
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def _coordinates(point: Any) -> Optional[tuple[float, float]]:
    point = Point.from_dict(point)
    if point is None:
        return None
    lat, lng = point.latitude, point.longitude
    if not (is_valid_coordinate(lat) and is_valid_coordinate(lng)):
        return None
    return lat, lng


def distance(point1: Any, point2: Any) -> float:
    """Distance in km between two points, or ``0.0`` for invalid input."""
    first = _coordinates(point1)
    second = _coordinates(point2)
    if first is None or second is None:
        return 0.0
    return haversine_km(first[0], first[1], second[0], second[1])
