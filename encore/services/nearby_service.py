"""Nearby-place aggregation around a venue or any other origin.

One parameterised service covers every "what is near X" lookup: hotels,
restaurants, the parking variants, transport and its subtypes, and venues
themselves.  Each :class:`~encore.models.place.PlaceCategory` maps to a row
of :data:`CATEGORY_TABLE` (search keyword, default radius, result cap), so
adding a category is a table edit rather than a new class.

A lookup runs in four steps:

1. Resolve the :class:`~encore.models.place.OriginSpec` to coordinates
   (stored venue, free-text place search, or coordinates as given).
2. Issue one ``"<keyword> near <lat>,<lng>"`` search through the places
   provider.  The radius is reported back to the caller but the provider
   does not enforce it.
3. Filter in memory: minimum rating first, then maximum distance.
4. Slice one page out of whatever survived.

The service holds no state between calls.
"""

from __future__ import annotations

from decimal import Decimal
from typing import NamedTuple

import structlog

from encore.interfaces.places_provider import IPlacesProvider
from encore.interfaces.venue_store import IVenueStore
from encore.models.place import (
    Coordinates,
    NearbyFilters,
    NearbyPage,
    OriginSpec,
    Page,
    Place,
    PlaceCategory,
)
from encore.utils.errors import (
    InvalidInputError,
    OriginNotFoundError,
    OriginWithoutCoordinatesError,
    VenueNotFoundError,
)
from encore.utils.geo import haversine_distance_m
from encore.utils.logging import get_logger
from encore.utils.pagination import page_bounds, paginate, validate_page_request

_MAX_RATING = Decimal(5)


class CategorySpec(NamedTuple):
    """How one category is searched."""

    keyword: str
    default_radius_m: int | None    # None = provider default, no radius reported
    max_results: int | None = None  # Truncate raw results before any filtering


CATEGORY_TABLE: dict[PlaceCategory, CategorySpec] = {
    PlaceCategory.HOTELS: CategorySpec("hotels", 5000, max_results=20),
    PlaceCategory.RESTAURANTS: CategorySpec("restaurants", 2000),
    PlaceCategory.PARKING: CategorySpec("parking", 2000),
    PlaceCategory.FREE_PARKING: CategorySpec("free parking", 2000),
    PlaceCategory.COVERED_PARKING: CategorySpec("covered parking garage", 2000),
    PlaceCategory.TRANSPORT: CategorySpec("public transport", None),
    PlaceCategory.METRO: CategorySpec("metro station", 1000),
    PlaceCategory.BUS: CategorySpec("bus stop", 800),
    PlaceCategory.TRAIN: CategorySpec("train station", 2000),
    PlaceCategory.VENUES: CategorySpec("concert venue", 10000),
}


def filter_by_min_rating(places: list[Place], min_rating: Decimal) -> list[Place]:
    """Keep places rated at or above *min_rating*; unrated places are dropped."""
    return [p for p in places if p.rating is not None and p.rating >= min_rating]


def filter_by_max_distance(
    places: list[Place],
    origin: Coordinates,
    max_distance_m: float,
) -> list[Place]:
    """Keep places within *max_distance_m* of *origin*; places without coordinates are dropped."""
    return [
        p
        for p in places
        if p.coordinates is not None
        and haversine_distance_m(origin, p.coordinates) <= max_distance_m
    ]


def _validate_filters(filters: NearbyFilters) -> None:
    if filters.min_rating is not None and not (0 <= filters.min_rating <= _MAX_RATING):
        raise InvalidInputError(f"min_rating must be between 0 and 5, got {filters.min_rating}")
    if filters.max_distance_m is not None and not filters.max_distance_m > 0:
        raise InvalidInputError(
            f"max_distance_m must be greater than 0, got {filters.max_distance_m}"
        )


class NearbyService:
    """Category-driven nearby search with in-memory filtering and paging.

    Parameters
    ----------
    places:
        Places provider used for text, nearby, and detail searches.
    venue_store:
        Read-only store of persisted venues, used to resolve venue-id origins.
    """

    def __init__(self, places: IPlacesProvider, venue_store: IVenueStore) -> None:
        self._places = places
        self._venue_store = venue_store
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Origin resolution ----------------------------------------------------

    async def resolve_origin(self, origin: OriginSpec) -> Coordinates:
        """Turn an origin into coordinates.

        Raises
        ------
        VenueNotFoundError
            If the venue id is not in the store.
        OriginNotFoundError
            If a free-text query matches no place.
        OriginWithoutCoordinatesError
            If the venue or the first matching place has no coordinates.
        """
        if origin.coordinates is not None:
            return origin.coordinates

        if origin.venue_id is not None:
            venue = await self._venue_store.get_venue(origin.venue_id)
            if venue is None:
                raise VenueNotFoundError(f"Venue {origin.venue_id} not found")
            if venue.coordinates is None:
                raise OriginWithoutCoordinatesError(
                    f"Venue {origin.venue_id} ({venue.name}) has no GPS coordinates"
                )
            return venue.coordinates

        results = await self._places.search_text(origin.query or "")
        if not results:
            raise OriginNotFoundError(
                f"No place matches '{origin.query}'",
                provider_name=self._places.get_provider_name(),
            )
        first = results[0]
        if first.coordinates is None:
            raise OriginWithoutCoordinatesError(
                f"Place '{first.title}' for query '{origin.query}' has no GPS coordinates",
                provider_name=self._places.get_provider_name(),
            )
        return first.coordinates

    # -- Public API -----------------------------------------------------------

    async def search_category(
        self,
        coordinates: Coordinates,
        category: PlaceCategory,
    ) -> list[Place]:
        """Run the raw category search at *coordinates*, capped per category."""
        row = CATEGORY_TABLE[category]
        places = await self._places.search_near_coordinates(coordinates, row.keyword)
        if row.max_results is not None:
            places = places[: row.max_results]
        return places

    async def find_nearby(
        self,
        origin: OriginSpec,
        category: PlaceCategory,
        radius_m: int | None = None,
        filters: NearbyFilters | None = None,
        page: int = 0,
        size: int = 20,
    ) -> NearbyPage:
        """Search *category* around *origin*, filter, and return one page.

        ``total_elements`` on the returned page counts the places left after
        the rating and distance filters, so a filtered page cannot tell the
        caller how many raw results the provider returned.
        """
        filters = filters or NearbyFilters()
        _validate_filters(filters)
        validate_page_request(page, size)
        if radius_m is not None and radius_m <= 0:
            raise InvalidInputError(f"radius_m must be greater than 0, got {radius_m}")

        row = CATEGORY_TABLE[category]
        coordinates = await self.resolve_origin(origin)
        places = await self.search_category(coordinates, category)
        raw_count = len(places)

        if filters.min_rating is not None:
            places = filter_by_min_rating(places, filters.min_rating)
        if filters.max_distance_m is not None:
            places = filter_by_max_distance(places, coordinates, filters.max_distance_m)

        unsupported: list[str] = []
        if filters.max_price is not None:
            unsupported.append("max_price")

        self._logger.info(
            "nearby_search_complete",
            origin=origin.describe(),
            category=category.value,
            raw_count=raw_count,
            kept_count=len(places),
            unsupported_filters=unsupported or None,
        )

        start, end = page_bounds(len(places), page, size)
        return NearbyPage(
            content=places[start:end],
            page=page,
            size=size,
            total_elements=len(places),
            category=category,
            keyword=row.keyword,
            radius_m=radius_m if radius_m is not None else row.default_radius_m,
            origin=coordinates,
            unsupported_filters=unsupported,
        )

    async def search_venues(self, query: str, page: int = 0, size: int = 20) -> Page[Place]:
        """Free-text venue search, paged in memory."""
        validate_page_request(page, size)
        if not query or not query.strip():
            raise InvalidInputError("Venue search query must not be empty")
        return paginate(await self._places.search_text(query), page, size)

    async def venues_near(
        self,
        coordinates: Coordinates,
        radius_m: int | None = None,
        filters: NearbyFilters | None = None,
        page: int = 0,
        size: int = 20,
    ) -> NearbyPage:
        return await self.find_nearby(
            OriginSpec.from_coordinates(coordinates),
            PlaceCategory.VENUES,
            radius_m=radius_m,
            filters=filters,
            page=page,
            size=size,
        )

    async def get_venue_details(self, query: str) -> Place:
        """Return the best text-search match for a venue name."""
        results = await self._places.search_text(query)
        if not results:
            raise VenueNotFoundError(
                f"No venue matches '{query}'",
                provider_name=self._places.get_provider_name(),
            )
        return results[0]

    async def get_place_details(self, name: str, coordinates: Coordinates) -> Place:
        return await self._places.get_place_details(name, coordinates)
