"""Encore domain models: re-exports all public model classes.

The models are organized across three submodules by domain concern:
    - artist.py - catalog artists
    - event.py  - event candidates, enriched events, composite response
    - place.py  - places, coordinates, weather, origins, pagination
"""

from __future__ import annotations

from encore.models.artist import Artist, ArtistImage
from encore.models.event import (
    CompositeResponse,
    EnrichedEvent,
    EventCandidate,
    EventStart,
    PriceRange,
    VenueDescriptor,
    VenueInfo,
)
from encore.models.place import (
    Coordinates,
    NearbyFilters,
    NearbyPage,
    OriginSpec,
    Page,
    Place,
    PlaceCategory,
    StoredVenue,
    Weather,
)

__all__ = [
    "Artist",
    "ArtistImage",
    "CompositeResponse",
    "Coordinates",
    "EnrichedEvent",
    "EventCandidate",
    "EventStart",
    "NearbyFilters",
    "NearbyPage",
    "OriginSpec",
    "Page",
    "Place",
    "PlaceCategory",
    "PriceRange",
    "StoredVenue",
    "VenueDescriptor",
    "VenueInfo",
    "Weather",
]
