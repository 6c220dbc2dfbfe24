"""Unit tests for the artist + upcoming events enrichment pipeline."""

from __future__ import annotations

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from encore.models.artist import Artist
from encore.models.event import EventStart, PriceRange
from encore.models.place import Coordinates, Place, Weather
from encore.services.artist_event_service import (
    DATE_PLACEHOLDER,
    NO_EVENTS_MESSAGE,
    PRICE_PLACEHOLDER,
    ArtistEventService,
    build_event_date,
    build_full_address,
    build_location_query,
    build_ticket_price,
)
from encore.services.nearby_service import NearbyService
from encore.utils.errors import ArtistNotFoundError, UpstreamError
from tests.factories import make_event, make_place, make_settings, make_venue

_WEATHER = Weather(location="Mexico City", description="Sunny", temperature="24", unit="Celsius")


def _build_service(
    catalog: MagicMock,
    events: MagicMock,
    places: MagicMock,
    venue_store: MagicMock,
    **settings_overrides: object,
) -> ArtistEventService:
    nearby = NearbyService(places=places, venue_store=venue_store)
    return ArtistEventService(
        catalog=catalog,
        events=events,
        places=places,
        nearby=nearby,
        settings=make_settings(**settings_overrides),
    )


@pytest.fixture
def service(
    mock_catalog: MagicMock,
    mock_events: MagicMock,
    mock_places: MagicMock,
    mock_venue_store: MagicMock,
    metallica: Artist,
) -> ArtistEventService:
    mock_catalog.get_artist.return_value = metallica
    mock_places.get_weather.return_value = _WEATHER
    return _build_service(mock_catalog, mock_events, mock_places, mock_venue_store)


def _nearby_by_keyword(hotels: list[Place], transport: list[Place]) -> AsyncMock:
    async def _search(coordinates: Coordinates, category_query: str) -> list[Place]:
        return hotels if category_query == "hotels" else transport

    return AsyncMock(side_effect=_search)


# ======================================================================
# Display helpers
# ======================================================================


class TestDisplayHelpers:
    def test_full_address_skips_empty_parts(self) -> None:
        venue = make_venue(address_line=None, state="")
        assert build_full_address(venue) == "Mexico City, Mexico"

    def test_location_query(self) -> None:
        assert build_location_query(make_venue()) == "Mexico City CDMX MX"
        assert build_location_query(make_venue(city=None, state_code=None, country_code=None)) == ""

    def test_event_date_variants(self) -> None:
        assert build_event_date(make_event()) == "2026-09-27 20:00:00"
        assert build_event_date(make_event(start=EventStart(local_date="2026-09-27"))) == "2026-09-27"
        assert build_event_date(make_event(start=EventStart(local_time="20:00:00"))) == "TBA 20:00:00"
        assert build_event_date(make_event(start=EventStart())) == "TBA"
        assert build_event_date(make_event(start=None)) == DATE_PLACEHOLDER

    def test_ticket_price(self) -> None:
        ranges = [PriceRange(currency="USD", min=Decimal("49.5"), max=Decimal("250"))]
        assert build_ticket_price(ranges) == "$49.50 - $250.00 USD"

    def test_ticket_price_placeholders(self) -> None:
        assert build_ticket_price([]) == PRICE_PLACEHOLDER
        assert build_ticket_price([PriceRange(currency="USD", min=Decimal("10"))]) == PRICE_PLACEHOLDER

    @pytest.mark.parametrize("huge", [Decimal("1e30"), Decimal("123456789012345678901234567.5")])
    def test_unprintable_amount_falls_back_to_placeholder(self, huge: Decimal) -> None:
        ranges = [PriceRange(currency="USD", min=Decimal("10"), max=huge)]
        assert build_ticket_price(ranges) == PRICE_PLACEHOLDER


# ======================================================================
# Fatal and absorbed failures
# ======================================================================


class TestFailurePolicy:
    @pytest.mark.asyncio
    async def test_unknown_artist_is_fatal(
        self, service: ArtistEventService, mock_catalog: MagicMock, mock_events: MagicMock
    ) -> None:
        mock_catalog.get_artist.return_value = None

        with pytest.raises(ArtistNotFoundError) as exc_info:
            await service.get_artist_complete_info("missing-id")

        assert exc_info.value.artist_id == "missing-id"
        mock_events.search_events_by_artist_name.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_catalog_outage_is_fatal(self, service: ArtistEventService, mock_catalog: MagicMock) -> None:
        mock_catalog.get_artist.side_effect = UpstreamError("down", provider_name="spotify", status_code=503)
        with pytest.raises(UpstreamError):
            await service.get_artist_complete_info("2ye2Wgw4gimLv2eAKyk1NB")

    @pytest.mark.asyncio
    async def test_event_search_failure_returns_artist_with_message(
        self, service: ArtistEventService, mock_events: MagicMock, metallica: Artist
    ) -> None:
        mock_events.search_events_by_artist_name.side_effect = UpstreamError("down", provider_name="ticketmaster")

        result = await service.get_artist_complete_info(metallica.id)

        assert result.artist == metallica
        assert result.upcoming_events == []
        assert result.total_events_found == 0
        assert result.message == NO_EVENTS_MESSAGE
        assert result.searched_query == "events: Metallica"

    @pytest.mark.asyncio
    async def test_events_searched_by_name(self, service: ArtistEventService, mock_events: MagicMock) -> None:
        await service.get_artist_complete_info("2ye2Wgw4gimLv2eAKyk1NB")
        mock_events.search_events_by_artist_name.assert_awaited_once_with("Metallica")


# ======================================================================
# Enrichment
# ======================================================================


class TestEnrichment:
    @pytest.mark.asyncio
    async def test_metallica_two_events_one_without_coordinates(
        self, service: ArtistEventService, mock_events: MagicMock, mock_places: MagicMock
    ) -> None:
        mock_events.search_events_by_artist_name.return_value = [
            make_event("M72 Mexico City", venue=make_venue()),
            make_event("M72 Secret Show", venue=make_venue("Unknown Hall", lat=None, lng=None)),
        ]
        mock_places.search_near_coordinates = _nearby_by_keyword(
            hotels=[make_place("Hotel Geneve")],
            transport=[make_place("Velodromo")],
        )

        result = await service.get_artist_complete_info("2ye2Wgw4gimLv2eAKyk1NB")

        assert result.total_events_found == 1
        assert result.message == "Found 1 upcoming events"
        event = result.upcoming_events[0]
        assert event.event_name == "M72 Mexico City"
        assert event.event_date == "2026-09-27 20:00:00"
        assert event.ticket_price == "$950.00 - $5400.50 MXN"
        assert event.event_type == "event"
        assert event.status == "onsale"
        assert event.venue.address == "Av. Viaducto Rio de la Piedad, Mexico City, CDMX, Mexico"
        assert event.venue.timezone == "America/Mexico_City"
        assert event.weather == _WEATHER
        assert [p.title for p in event.nearby_hotels] == ["Hotel Geneve"]
        assert [p.title for p in event.nearby_transport] == ["Velodromo"]
        mock_places.get_weather.assert_awaited_once_with("Mexico City CDMX MX")

    @pytest.mark.asyncio
    async def test_event_without_venue_is_dropped(self, service: ArtistEventService, mock_events: MagicMock) -> None:
        mock_events.search_events_by_artist_name.return_value = [make_event("Livestream", venue=None)]

        result = await service.get_artist_complete_info("2ye2Wgw4gimLv2eAKyk1NB")

        assert result.upcoming_events == []
        assert result.message == NO_EVENTS_MESSAGE

    @pytest.mark.asyncio
    async def test_order_is_preserved_when_later_events_finish_first(
        self, service: ArtistEventService, mock_events: MagicMock, mock_places: MagicMock
    ) -> None:
        names = ["First", "Second", "Third", "Fourth"]
        delays = {"City 0": 0.04, "City 1": 0.03, "City 2": 0.0, "City 3": 0.01}
        mock_events.search_events_by_artist_name.return_value = [
            make_event(name, venue=make_venue(f"Venue {i}", city=f"City {i}")) for i, name in enumerate(names)
        ]

        async def _weather(location: str) -> Weather:
            city = location.split(" CDMX")[0]
            await asyncio.sleep(delays[city])
            return Weather(location=city)

        mock_places.get_weather = AsyncMock(side_effect=_weather)

        result = await service.get_artist_complete_info("2ye2Wgw4gimLv2eAKyk1NB")

        assert [e.event_name for e in result.upcoming_events] == names
        assert [e.weather.location for e in result.upcoming_events] == ["City 0", "City 1", "City 2", "City 3"]

    @pytest.mark.asyncio
    async def test_branch_failures_degrade_without_touching_siblings(
        self, service: ArtistEventService, mock_events: MagicMock, mock_places: MagicMock
    ) -> None:
        mock_events.search_events_by_artist_name.return_value = [
            make_event("Broken branches", venue=make_venue("Venue A", city="Monterrey")),
            make_event("Healthy", venue=make_venue("Venue B", city="Guadalajara")),
        ]

        async def _weather(location: str) -> Weather:
            if location.startswith("Monterrey"):
                raise UpstreamError("weather down", provider_name="serpapi")
            return _WEATHER

        async def _nearby(coordinates: Coordinates, category_query: str) -> list[Place]:
            if category_query == "hotels":
                raise UpstreamError("maps down", provider_name="serpapi", status_code=500)
            return [make_place("Bus stop")]

        mock_places.get_weather = AsyncMock(side_effect=_weather)
        mock_places.search_near_coordinates = AsyncMock(side_effect=_nearby)

        result = await service.get_artist_complete_info("2ye2Wgw4gimLv2eAKyk1NB")

        broken, healthy = result.upcoming_events
        assert broken.weather is None
        assert broken.nearby_hotels == []
        assert [p.title for p in broken.nearby_transport] == ["Bus stop"]
        assert healthy.weather == _WEATHER
        assert healthy.nearby_hotels == []

    @pytest.mark.asyncio
    async def test_nearby_lists_are_truncated_to_five(
        self, service: ArtistEventService, mock_events: MagicMock, mock_places: MagicMock
    ) -> None:
        mock_events.search_events_by_artist_name.return_value = [make_event(venue=make_venue())]
        mock_places.search_near_coordinates = _nearby_by_keyword(
            hotels=[make_place(f"Hotel {i}") for i in range(25)],
            transport=[make_place(f"Stop {i}") for i in range(8)],
        )

        result = await service.get_artist_complete_info("2ye2Wgw4gimLv2eAKyk1NB")

        event = result.upcoming_events[0]
        assert [p.title for p in event.nearby_hotels] == [f"Hotel {i}" for i in range(5)]
        assert len(event.nearby_transport) == 5

    @pytest.mark.asyncio
    async def test_empty_location_skips_weather(
        self, service: ArtistEventService, mock_events: MagicMock, mock_places: MagicMock
    ) -> None:
        venue = make_venue(city=None, state_code=None, country_code=None)
        mock_events.search_events_by_artist_name.return_value = [make_event(venue=venue)]

        result = await service.get_artist_complete_info("2ye2Wgw4gimLv2eAKyk1NB")

        assert result.upcoming_events[0].weather is None
        mock_places.get_weather.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_output_never_grows(
        self, service: ArtistEventService, mock_events: MagicMock
    ) -> None:
        candidates = [
            make_event("a", venue=make_venue()),
            make_event("b", venue=None),
            make_event("c", venue=make_venue(lat=None, lng=None)),
            make_event("d", venue=make_venue()),
        ]
        mock_events.search_events_by_artist_name.return_value = candidates

        result = await service.get_artist_complete_info("2ye2Wgw4gimLv2eAKyk1NB")

        assert len(result.upcoming_events) <= len(candidates)
        assert [e.event_name for e in result.upcoming_events] == ["a", "d"]
        assert result.message == "Found 2 upcoming events"


# ======================================================================
# Timeouts, deadline, and fan-out cap
# ======================================================================


class TestConcurrencyPolicy:
    @pytest.mark.asyncio
    async def test_slow_branch_times_out_to_empty(
        self,
        mock_catalog: MagicMock,
        mock_events: MagicMock,
        mock_places: MagicMock,
        mock_venue_store: MagicMock,
        metallica: Artist,
    ) -> None:
        mock_catalog.get_artist.return_value = metallica
        mock_events.search_events_by_artist_name.return_value = [make_event(venue=make_venue())]

        async def _slow_weather(location: str) -> Weather:
            await asyncio.sleep(5)
            return _WEATHER

        mock_places.get_weather = AsyncMock(side_effect=_slow_weather)
        mock_places.search_near_coordinates.return_value = [make_place("Hotel")]
        service = _build_service(
            mock_catalog, mock_events, mock_places, mock_venue_store, provider_call_timeout_seconds=0.05
        )

        result = await service.get_artist_complete_info(metallica.id)

        event = result.upcoming_events[0]
        assert event.weather is None
        assert [p.title for p in event.nearby_hotels] == ["Hotel"]

    @pytest.mark.asyncio
    async def test_request_deadline_drops_unfinished_events(
        self,
        mock_catalog: MagicMock,
        mock_events: MagicMock,
        mock_places: MagicMock,
        mock_venue_store: MagicMock,
        metallica: Artist,
    ) -> None:
        mock_catalog.get_artist.return_value = metallica
        mock_events.search_events_by_artist_name.return_value = [
            make_event("Fast", venue=make_venue(city="Fast City")),
            make_event("Stuck", venue=make_venue(city="Stuck City")),
        ]

        async def _weather(location: str) -> Weather:
            if location.startswith("Stuck"):
                await asyncio.sleep(5)
            return _WEATHER

        mock_places.get_weather = AsyncMock(side_effect=_weather)
        service = _build_service(
            mock_catalog,
            mock_events,
            mock_places,
            mock_venue_store,
            provider_call_timeout_seconds=10.0,
            request_deadline_seconds=0.1,
        )

        result = await service.get_artist_complete_info(metallica.id)

        assert [e.event_name for e in result.upcoming_events] == ["Fast"]
        assert result.total_events_found == 1

    @pytest.mark.asyncio
    async def test_outbound_calls_are_capped_per_request(
        self,
        mock_catalog: MagicMock,
        mock_events: MagicMock,
        mock_places: MagicMock,
        mock_venue_store: MagicMock,
        metallica: Artist,
    ) -> None:
        mock_catalog.get_artist.return_value = metallica
        mock_events.search_events_by_artist_name.return_value = [
            make_event(f"Show {i}", venue=make_venue()) for i in range(12)
        ]
        active = 0
        peak = 0

        async def _tracked() -> None:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1

        async def _weather(location: str) -> Weather | None:
            await _tracked()
            return None

        async def _nearby(coordinates: Coordinates, category_query: str) -> list[Place]:
            await _tracked()
            return []

        mock_places.get_weather = AsyncMock(side_effect=_weather)
        mock_places.search_near_coordinates = AsyncMock(side_effect=_nearby)
        service = _build_service(mock_catalog, mock_events, mock_places, mock_venue_store, max_concurrent_calls=3)

        result = await service.get_artist_complete_info(metallica.id)

        assert result.total_events_found == 12
        assert peak <= 3


# ======================================================================
# Catalog pass-throughs
# ======================================================================


class TestCatalogOperations:
    @pytest.mark.asyncio
    async def test_search_artists_is_paged(
        self, service: ArtistEventService, mock_catalog: MagicMock, metallica: Artist
    ) -> None:
        mock_catalog.search_artists.return_value = [
            metallica.model_copy(update={"id": f"id-{i}"}) for i in range(10)
        ]

        page = await service.search_artists("Metallica", page=1, size=4)

        assert [a.id for a in page.content] == ["id-4", "id-5", "id-6", "id-7"]
        assert page.total_elements == 10
        assert page.total_pages == 3

    @pytest.mark.asyncio
    async def test_get_artists(self, service: ArtistEventService, mock_catalog: MagicMock, metallica: Artist) -> None:
        mock_catalog.get_artists.return_value = [metallica]
        assert await service.get_artists([metallica.id, "unknown"]) == [metallica]
        mock_catalog.get_artists.assert_awaited_once_with([metallica.id, "unknown"])
