# storefront/core/geofence.py
import math
from typing import FrozenSet, Iterable, Tuple

# Same units as the stored coordinates, not geographic miles
DEFAULT_NEARBY_RADIUS = 30.0

def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the planar Euclidean distance between two coordinates.

    Latitude and longitude are treated as plain cartesian coordinates,
    not as points on a sphere.

    Args:
        lat1: Latitude of the first point
        lon1: Longitude of the first point
        lat2: Latitude of the second point
        lon2: Longitude of the second point

    Returns:
        Distance in coordinate units
    """
    return math.sqrt((lat1 - lat2) ** 2 + (lon1 - lon2) ** 2)

def is_within_radius(distance: float, radius: float = DEFAULT_NEARBY_RADIUS) -> bool:
    """Strictly-less-than comparison; a store exactly on the radius is out."""
    return distance < radius

def find_nearby_stores(
    origin: Tuple[float, float],
    stores: Iterable[Tuple[int, float, float]],
    radius: float = DEFAULT_NEARBY_RADIUS
) -> FrozenSet[int]:
    """Find the stores within ``radius`` of ``origin``.

    A full scan over every store; there is no spatial index.

    Args:
        origin: (latitude, longitude) of the user
        stores: Iterable of (store_id, latitude, longitude) tuples
        radius: Distance threshold in coordinate units

    Returns:
        Frozen set of nearby store IDs
    """
    lat, lon = origin
    return frozenset(
        store_id
        for store_id, store_lat, store_lon in stores
        if is_within_radius(calculate_distance(lat, lon, store_lat, store_lon), radius)
    )
