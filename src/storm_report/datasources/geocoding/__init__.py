"""Place resolution via seeded localities and the Open-Meteo geocoder.

Public API:
  - places: resolve_place, place_from_coordinates, pick_candidate
  - client: API URL
"""

from storm_report.datasources.geocoding.client import GEOCODING_API
from storm_report.datasources.geocoding.places import (
    pick_candidate,
    place_from_coordinates,
    resolve_place,
)

__all__ = [
    "GEOCODING_API",
    "pick_candidate",
    "place_from_coordinates",
    "resolve_place",
]
