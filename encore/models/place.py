"""Place, coordinate, weather, and pagination models.

A :class:`Place` is the provider-agnostic shape of one nearby-search or
text-search result.  Coordinates are kept as :class:`~decimal.Decimal` so
the values a provider returned are never degraded by float round-tripping;
they are only converted to floats inside the haversine computation.

:class:`Page` is the in-memory pagination envelope used by every paged
operation, and :class:`NearbyPage` extends it with the metadata of the
nearby-search that produced it.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

_T = TypeVar("_T")


class PlaceCategory(str, Enum):  # noqa: UP042 (StrEnum needs 3.11)
    """Nearby-search categories understood by the aggregation layer.

    Each member maps to a keyword, a default radius, and an optional result
    cap in ``encore.services.nearby_service.CATEGORY_TABLE``.
    """

    HOTELS = "hotels"
    RESTAURANTS = "restaurants"
    PARKING = "parking"
    FREE_PARKING = "free_parking"
    COVERED_PARKING = "covered_parking"
    TRANSPORT = "transport"
    METRO = "metro"
    BUS = "bus"
    TRAIN = "train"
    VENUES = "venues"


class Coordinates(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: Decimal = Field(ge=-90, le=90)
    longitude: Decimal = Field(ge=-180, le=180)

    def as_query(self) -> str:
        """Render as ``"lat,lng"`` exactly as received."""
        return f"{self.latitude},{self.longitude}"


class Place(BaseModel):
    """A single place returned by the places provider.

    Populated from SerpApi ``local_results``/``place_results`` entries.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    place_id: str | None = None         # Google place id
    data_id: str | None = None          # SerpApi data id (used for place lookups)
    address: str | None = None
    coordinates: Coordinates | None = None
    rating: Decimal | None = None
    reviews: int | None = None
    phone: str | None = None
    website: str | None = None
    types: list[str] = Field(default_factory=list)
    price: str | None = None            # Free-text price indicator ("$$", "MX$500")
    thumbnail: str | None = None


class Weather(BaseModel):
    """Current weather for a location, read from a search answer box."""

    model_config = ConfigDict(frozen=True)

    location: str | None = None
    description: str | None = None
    temperature: str | None = None
    unit: str | None = None
    precipitation: str | None = None
    humidity: str | None = None
    wind: str | None = None
    date: str | None = None


class StoredVenue(BaseModel):
    """A persisted venue record, used only as a coordinate source."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    coordinates: Coordinates | None = None
    city: str | None = None


class OriginSpec(BaseModel):
    """Where a nearby-search is anchored.

    Exactly one of ``venue_id`` (persisted venue), ``query`` (free-text place
    search, first result wins), or ``coordinates`` (already resolved) is set.
    """

    model_config = ConfigDict(frozen=True)

    venue_id: int | None = None
    query: str | None = None
    coordinates: Coordinates | None = None

    @model_validator(mode="after")
    def _exactly_one_source(self) -> OriginSpec:
        sources = [self.venue_id is not None, bool(self.query), self.coordinates is not None]
        if sum(sources) != 1:
            raise ValueError("OriginSpec needs exactly one of venue_id, query, or coordinates")
        return self

    @classmethod
    def from_venue(cls, venue_id: int) -> OriginSpec:
        return cls(venue_id=venue_id)

    @classmethod
    def from_query(cls, query: str) -> OriginSpec:
        return cls(query=query)

    @classmethod
    def from_coordinates(cls, coordinates: Coordinates) -> OriginSpec:
        return cls(coordinates=coordinates)

    def describe(self) -> str:
        if self.venue_id is not None:
            return f"venue:{self.venue_id}"
        if self.query:
            return f"query:{self.query}"
        return f"coordinates:{self.coordinates.as_query()}"  # type: ignore[union-attr]


class NearbyFilters(BaseModel):
    """Optional post-search filters, applied rating first, then distance.

    ``max_price`` is accepted but never applied; it is reported back in
    :attr:`NearbyPage.unsupported_filters`.
    """

    model_config = ConfigDict(frozen=True)

    min_rating: Decimal | None = None
    max_distance_m: float | None = None
    max_price: Decimal | None = None


class Page(BaseModel, Generic[_T]):
    """One page of an in-memory list.

    ``total_elements`` is the length of the list that was paginated, i.e.
    after any rating/distance filters ran.
    """

    model_config = ConfigDict(frozen=True)

    content: list[_T] = Field(default_factory=list)
    page: int = 0
    size: int = 20
    total_elements: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def first(self) -> bool:
        return self.page == 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def last(self) -> bool:
        return self.page + 1 >= self.total_pages


class NearbyPage(Page[Place]):
    """A page of nearby places plus the search that produced it."""

    category: PlaceCategory
    keyword: str
    radius_m: int | None = None         # Advisory only; the provider does not enforce it
    origin: Coordinates
    unsupported_filters: list[str] = Field(default_factory=list)
