from .geofence import (
    DEFAULT_NEARBY_RADIUS, calculate_distance, is_within_radius, find_nearby_stores
)

__all__ = [
    'DEFAULT_NEARBY_RADIUS',
    'calculate_distance',
    'is_within_radius',
    'find_nearby_stores'
]
