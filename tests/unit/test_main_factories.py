"""Unit tests for the factory functions in encore/main.py."""

from __future__ import annotations

from unittest.mock import AsyncMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from encore.config.settings import Settings
from encore.main import build_components, create_app
from encore.providers.venue.sqlite_venue_store import SQLiteVenueStore
from encore.services.artist_event_service import ArtistEventService
from encore.services.nearby_service import NearbyService
from tests.factories import make_settings


class TestBuildComponents:
    def test_wires_services(self) -> None:
        components = build_components(make_settings(), AsyncMock())

        assert isinstance(components["nearby_service"], NearbyService)
        assert isinstance(components["artist_event_service"], ArtistEventService)
        assert isinstance(components["settings"], Settings)

    def test_provider_registry_reflects_credentials(self) -> None:
        components = build_components(make_settings(serpapi_api_key=""), AsyncMock())
        assert components["provider_registry"] == {
            "spotify": True,
            "ticketmaster": True,
            "serpapi": False,
        }

    def test_venue_store_uses_configured_path(self) -> None:
        components = build_components(make_settings(venue_db_path="/tmp/encore-venues.db"), AsyncMock())
        store = components["nearby_service"]._venue_store
        assert isinstance(store, SQLiteVenueStore)
        assert str(store._db_path) == "/tmp/encore-venues.db"


class TestSettings:
    def test_missing_credentials(self) -> None:
        settings = make_settings(spotify_access_token="", serpapi_api_key="")
        assert settings.get_missing_credentials() == ["spotify", "serpapi"]

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.request_deadline_seconds == 45.0
        assert settings.max_concurrent_calls == 6
        assert settings.spotify_base_url == "https://api.spotify.com/v1"


class TestCreateApp:
    def test_returns_fastapi_with_routes(self) -> None:
        app = create_app(make_settings())
        assert isinstance(app, FastAPI)
        paths = {route.path for route in app.routes}
        assert "/api/v1/artists/{artist_id}/complete-info" in paths
        assert "/api/v1/venues/{venue_id}/nearby/{category}" in paths
        assert "/api/v1/health" in paths

    def test_lifespan_populates_state(self) -> None:
        app = create_app(make_settings(ticketmaster_api_key=""))
        with TestClient(app) as client:
            assert isinstance(app.state.artist_event_service, ArtistEventService)
            response = client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        assert body["missing_credentials"] == ["ticketmaster"]
        assert body["providers"]["ticketmaster"] is False
