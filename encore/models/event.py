"""Event models for the artist enrichment pipeline.

Key relationships:
    - The events provider yields :class:`EventCandidate` objects, each with
      an optional :class:`VenueDescriptor`.
    - The pipeline turns every candidate whose venue has coordinates into an
      :class:`EnrichedEvent` (weather, hotels, transport attached).
    - :class:`CompositeResponse` wraps the artist and the surviving events.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from encore.models.artist import Artist
from encore.models.place import Coordinates, Place, Weather


class EventStart(BaseModel):
    """Local start date/time exactly as the events provider reports them."""

    model_config = ConfigDict(frozen=True)

    local_date: str | None = None       # "2026-11-14"
    local_time: str | None = None       # "20:00:00"


class PriceRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str | None = None
    currency: str | None = None
    min: Decimal | None = None
    max: Decimal | None = None


class VenueDescriptor(BaseModel):
    """Raw venue block embedded in an event."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    address_line: str | None = None
    city: str | None = None
    state: str | None = None
    state_code: str | None = None
    country: str | None = None
    country_code: str | None = None
    coordinates: Coordinates | None = None
    url: str | None = None
    timezone: str | None = None
    parking_detail: str | None = None
    accessibility_detail: str | None = None


class EventCandidate(BaseModel):
    """An upcoming event as returned by the events provider."""

    model_config = ConfigDict(frozen=True)

    name: str
    event_type: str | None = None
    url: str | None = None
    start: EventStart | None = None
    status_code: str | None = None
    price_ranges: list[PriceRange] = Field(default_factory=list)
    venue: VenueDescriptor | None = None


class VenueInfo(BaseModel):
    """Display-ready venue block of an enriched event."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    address: str = ""
    coordinates: Coordinates
    website: str | None = None
    parking_info: str | None = None
    accessibility_info: str | None = None
    timezone: str | None = None


class EnrichedEvent(BaseModel):
    """An event with its venue resolved and location amenities attached.

    ``nearby_hotels`` and ``nearby_transport`` hold at most five places and
    are empty (never null) when their lookup failed.
    """

    model_config = ConfigDict(frozen=True)

    event_name: str
    event_date: str
    event_type: str = "Concert"
    ticket_url: str | None = None
    ticket_price: str
    status: str = "unknown"
    venue: VenueInfo
    weather: Weather | None = None
    nearby_hotels: list[Place] = Field(default_factory=list)
    nearby_transport: list[Place] = Field(default_factory=list)


class CompositeResponse(BaseModel):
    """Artist plus enriched upcoming events."""

    model_config = ConfigDict(frozen=True)

    artist: Artist
    upcoming_events: list[EnrichedEvent] = Field(default_factory=list)
    total_events_found: int = 0
    searched_query: str
    message: str
