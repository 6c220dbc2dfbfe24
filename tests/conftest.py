"""Shared pytest fixtures for the Encore test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from encore.config.settings import Settings
from encore.interfaces.catalog_provider import ICatalogProvider
from encore.interfaces.event_provider import IEventProvider
from encore.interfaces.places_provider import IPlacesProvider
from encore.interfaces.venue_store import IVenueStore
from encore.models.artist import Artist, ArtistImage
from tests.factories import make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def metallica() -> Artist:
    return Artist(
        id="2ye2Wgw4gimLv2eAKyk1NB",
        name="Metallica",
        genres=["hard rock", "metal", "rock", "thrash metal"],
        popularity=83,
        followers=28_000_000,
        images=[ArtistImage(url="https://i.scdn.co/image/metallica.jpg", height=640, width=640)],
        external_url="https://open.spotify.com/artist/2ye2Wgw4gimLv2eAKyk1NB",
    )


@pytest.fixture
def mock_http() -> AsyncMock:
    """An injected ``httpx.AsyncClient`` double; set ``.get.return_value`` per test."""
    return AsyncMock()


# ---------------------------------------------------------------------------
# Provider doubles
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_catalog() -> MagicMock:
    catalog = MagicMock(spec=ICatalogProvider)
    catalog.get_artist = AsyncMock(return_value=None)
    catalog.get_artists = AsyncMock(return_value=[])
    catalog.search_artists = AsyncMock(return_value=[])
    catalog.get_provider_name.return_value = "spotify"
    catalog.is_available.return_value = True
    return catalog


@pytest.fixture
def mock_events() -> MagicMock:
    events = MagicMock(spec=IEventProvider)
    events.search_events_by_artist_name = AsyncMock(return_value=[])
    events.get_provider_name.return_value = "ticketmaster"
    events.is_available.return_value = True
    return events


@pytest.fixture
def mock_places() -> MagicMock:
    places = MagicMock(spec=IPlacesProvider)
    places.search_text = AsyncMock(return_value=[])
    places.search_near_coordinates = AsyncMock(return_value=[])
    places.get_weather = AsyncMock(return_value=None)
    places.get_place_details = AsyncMock()
    places.get_provider_name.return_value = "serpapi"
    places.is_available.return_value = True
    return places


@pytest.fixture
def mock_venue_store() -> MagicMock:
    store = MagicMock(spec=IVenueStore)
    store.get_venue = AsyncMock(return_value=None)
    return store
