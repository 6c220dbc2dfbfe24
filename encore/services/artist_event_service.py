"""Artist + upcoming-events enrichment pipeline.

Given a catalog artist id, resolves the artist, finds the artist's upcoming
events, and enriches every event independently with its venue, the local
weather, and nearby hotels and transport.

Failure handling is layered, from the outside in:

- **Artist fetch** -- fatal.  ``ArtistNotFoundError`` and ``UpstreamError``
  propagate unchanged; there is nothing useful to return without an artist.
- **Event search** -- absorbed.  A failing or empty search still returns the
  artist, with an empty event list and an explanatory message.
- **Per event** -- an event without a venue, or whose venue has no
  coordinates, is dropped.  Any other error while enriching it drops it too,
  without touching its siblings.
- **Per branch** -- weather, hotels, and transport are looked up
  concurrently; each branch that fails (or times out) degrades to ``None``
  or an empty list.

Every outbound enrichment call holds a slot of one per-request semaphore
and carries its own timeout.  Events still running when the request
deadline expires are cancelled and left out, and the surviving events keep
the order the event provider returned them in.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal, InvalidOperation

import structlog

from encore.config.settings import Settings
from encore.interfaces.catalog_provider import ICatalogProvider
from encore.interfaces.event_provider import IEventProvider
from encore.interfaces.places_provider import IPlacesProvider
from encore.models.artist import Artist
from encore.models.event import (
    CompositeResponse,
    EnrichedEvent,
    EventCandidate,
    PriceRange,
    VenueDescriptor,
    VenueInfo,
)
from encore.models.place import Page, Place, PlaceCategory, Weather
from encore.services.nearby_service import NearbyService
from encore.utils.concurrency import gather_until_deadline, throttled_gather
from encore.utils.errors import ArtistNotFoundError, MalformedVenueDataError
from encore.utils.logging import get_logger
from encore.utils.pagination import paginate

DATE_PLACEHOLDER = "Date to be confirmed"
PRICE_PLACEHOLDER = "Price to be confirmed"
UNKNOWN_LOCAL_DATE = "TBA"
NO_EVENTS_MESSAGE = "No upcoming events found for this artist"

_MAX_NEARBY_PER_EVENT = 5


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def build_full_address(venue: VenueDescriptor) -> str:
    """``"line1, city, state, country"``, skipping empty parts."""
    parts = [venue.address_line, venue.city, venue.state, venue.country]
    return ", ".join(p for p in parts if p)


def build_location_query(venue: VenueDescriptor) -> str:
    """``"city STATE_CODE COUNTRY_CODE"`` for the weather search, skipping empty parts."""
    parts = [venue.city, venue.state_code, venue.country_code]
    return " ".join(p for p in parts if p)


def build_event_date(event: EventCandidate) -> str:
    if event.start is None:
        return DATE_PLACEHOLDER
    date = event.start.local_date or UNKNOWN_LOCAL_DATE
    if event.start.local_time:
        return f"{date} {event.start.local_time}"
    return date


def _format_amount(amount: Decimal) -> str:
    return f"${amount.quantize(Decimal('0.01'))}"


def build_ticket_price(price_ranges: list[PriceRange]) -> str:
    """Format the first price range as ``"$min - $max CURRENCY"``.

    A range missing either bound, or with an amount too large to print to
    the cent, is treated as no price information.
    """
    if not price_ranges:
        return PRICE_PLACEHOLDER
    first = price_ranges[0]
    if first.min is None or first.max is None:
        return PRICE_PLACEHOLDER
    try:
        text = f"{_format_amount(first.min)} - {_format_amount(first.max)}"
    except InvalidOperation:
        return PRICE_PLACEHOLDER
    return f"{text} {first.currency}" if first.currency else text


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class ArtistEventService:
    """Builds the composite "artist + enriched upcoming events" response.

    Parameters
    ----------
    catalog:
        Music catalog used to resolve artists.
    events:
        Event provider, searched by artist name.
    places:
        Places provider, used here for weather only.
    nearby:
        Nearby aggregation service, used for the hotel and transport searches.
    settings:
        Supplies the concurrency cap, per-call timeout, and request deadline.
    """

    def __init__(
        self,
        catalog: ICatalogProvider,
        events: IEventProvider,
        places: IPlacesProvider,
        nearby: NearbyService,
        settings: Settings,
    ) -> None:
        self._catalog = catalog
        self._events = events
        self._places = places
        self._nearby = nearby
        self._max_concurrent_calls = settings.max_concurrent_calls
        self._call_timeout = settings.provider_call_timeout_seconds
        self._request_deadline = settings.request_deadline_seconds
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Catalog pass-throughs ------------------------------------------------

    async def get_artist(self, artist_id: str) -> Artist:
        artist = await self._catalog.get_artist(artist_id)
        if artist is None:
            raise ArtistNotFoundError(artist_id, provider_name=self._catalog.get_provider_name())
        return artist

    async def get_artists(self, artist_ids: list[str]) -> list[Artist]:
        return await self._catalog.get_artists(artist_ids)

    async def search_artists(self, name: str, page: int = 0, size: int = 20) -> Page[Artist]:
        """Search by name and slice one page out of the provider's capped result list."""
        return paginate(await self._catalog.search_artists(name), page, size)

    # -- Pipeline -------------------------------------------------------------

    async def get_artist_complete_info(self, artist_id: str) -> CompositeResponse:
        """Resolve *artist_id* and return it with its enriched upcoming events.

        Raises
        ------
        ArtistNotFoundError
            If the catalog has no such artist.
        UpstreamError
            If the catalog call itself fails.
        """
        self._logger.info("complete_info_started", artist_id=artist_id)
        try:
            artist = await self.get_artist(artist_id)
        except Exception as exc:
            self._logger.error("artist_fetch_failed", artist_id=artist_id, error=str(exc))
            raise

        searched_query = f"events: {artist.name}"
        candidates = await self._search_events(artist)
        if not candidates:
            return CompositeResponse(
                artist=artist,
                upcoming_events=[],
                total_events_found=0,
                searched_query=searched_query,
                message=NO_EVENTS_MESSAGE,
            )

        # One semaphore per request: concurrent requests do not share slots.
        semaphore = asyncio.Semaphore(self._max_concurrent_calls)
        outcomes = await gather_until_deadline(
            [self._enrich_event(candidate, semaphore) for candidate in candidates],
            deadline=self._request_deadline,
        )

        enriched: list[EnrichedEvent] = []
        for candidate, outcome in zip(candidates, outcomes):
            if isinstance(outcome, BaseException):
                self._logger.warning(
                    "event_dropped",
                    event=candidate.name,
                    reason=type(outcome).__name__,
                    error=str(outcome),
                )
                continue
            enriched.append(outcome)

        self._logger.info(
            "complete_info_finished",
            artist_id=artist_id,
            candidates=len(candidates),
            enriched=len(enriched),
        )
        return CompositeResponse(
            artist=artist,
            upcoming_events=enriched,
            total_events_found=len(enriched),
            searched_query=searched_query,
            message=(
                f"Found {len(enriched)} upcoming events" if enriched else NO_EVENTS_MESSAGE
            ),
        )

    async def _search_events(self, artist: Artist) -> list[EventCandidate]:
        try:
            return await self._events.search_events_by_artist_name(artist.name)
        except Exception as exc:
            self._logger.warning(
                "event_search_failed",
                artist_id=artist.id,
                artist=artist.name,
                provider=self._events.get_provider_name(),
                error=str(exc),
            )
            return []

    async def _enrich_event(
        self,
        event: EventCandidate,
        semaphore: asyncio.Semaphore,
    ) -> EnrichedEvent:
        """Resolve the venue, then look up weather, hotels, and transport concurrently.

        Raises
        ------
        MalformedVenueDataError
            If the event has no venue or the venue has no coordinates.
        """
        venue = event.venue
        if venue is None:
            raise MalformedVenueDataError(f"Event '{event.name}' has no venue")
        if venue.coordinates is None:
            raise MalformedVenueDataError(
                f"Venue '{venue.name}' of event '{event.name}' has no GPS coordinates"
            )
        coordinates = venue.coordinates
        location_query = build_location_query(venue)

        self._logger.debug("event_enrichment_started", event=event.name, location=location_query)

        weather, hotels, transport = await throttled_gather(
            [
                self._lookup_weather(location_query),
                self._nearby.search_category(coordinates, PlaceCategory.HOTELS),
                self._nearby.search_category(coordinates, PlaceCategory.TRANSPORT),
            ],
            semaphore,
            timeout=self._call_timeout,
        )

        return EnrichedEvent(
            event_name=event.name,
            event_date=build_event_date(event),
            event_type=event.event_type or "Concert",
            ticket_url=event.url,
            ticket_price=build_ticket_price(event.price_ranges),
            status=event.status_code or "unknown",
            venue=VenueInfo(
                name=venue.name,
                address=build_full_address(venue),
                coordinates=coordinates,
                website=venue.url,
                parking_info=venue.parking_detail,
                accessibility_info=venue.accessibility_detail,
                timezone=venue.timezone,
            ),
            weather=self._weather_or_none(event, weather),
            nearby_hotels=self._places_or_empty(event, "hotels", hotels),
            nearby_transport=self._places_or_empty(event, "transport", transport),
        )

    async def _lookup_weather(self, location_query: str) -> Weather | None:
        if not location_query.strip():
            self._logger.info("weather_skipped_empty_location")
            return None
        return await self._places.get_weather(location_query)

    # -- Branch result handling -----------------------------------------------

    def _weather_or_none(
        self,
        event: EventCandidate,
        outcome: Weather | None | BaseException,
    ) -> Weather | None:
        if isinstance(outcome, BaseException):
            self._logger.warning(
                "weather_lookup_failed",
                event=event.name,
                reason=type(outcome).__name__,
                error=str(outcome),
            )
            return None
        return outcome

    def _places_or_empty(
        self,
        event: EventCandidate,
        branch: str,
        outcome: list[Place] | BaseException,
    ) -> list[Place]:
        if isinstance(outcome, BaseException):
            self._logger.warning(
                "nearby_lookup_failed",
                event=event.name,
                branch=branch,
                reason=type(outcome).__name__,
                error=str(outcome),
            )
            return []
        return outcome[:_MAX_NEARBY_PER_EVENT]
