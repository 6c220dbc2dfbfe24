"""Great-circle distance and coordinate parsing helpers.

Distances are straight-line haversine distances on a sphere of radius
6,371,000 m; no ellipsoidal correction is applied anywhere.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError

from encore.models.place import Coordinates
from encore.utils.errors import InvalidInputError

EARTH_RADIUS_M = 6_371_000


def haversine_distance_m(origin: Coordinates, target: Coordinates) -> float:
    """Return the great-circle distance between two coordinates, in meters."""
    lat1 = float(origin.latitude)
    lat2 = float(target.latitude)
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(float(target.longitude) - float(origin.longitude))

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push a just past 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def parse_coordinates(latitude: Any, longitude: Any) -> Coordinates | None:
    """Leniently build coordinates from provider data.

    Returns ``None`` when either value is missing, unparsable, or out of range.
    """
    lat = _to_decimal(latitude)
    lng = _to_decimal(longitude)
    if lat is None or lng is None:
        return None
    try:
        return Coordinates(latitude=lat, longitude=lng)
    except ValidationError:
        return None


def require_coordinates(latitude: Any, longitude: Any) -> Coordinates:
    """Strictly build coordinates from caller input.

    Raises
    ------
    InvalidInputError
        If either value is missing, unparsable, or out of range.
    """
    coordinates = parse_coordinates(latitude, longitude)
    if coordinates is None:
        raise InvalidInputError(f"Invalid coordinates: {latitude},{longitude}")
    return coordinates
