"""Encore FastAPI application entry point.

Wires providers and services together via constructor injection, stores
them on ``app.state`` for the routes, and owns the lifecycle of the shared
``httpx.AsyncClient``.  Configuration comes from ``.env`` and environment
variables (see :class:`~encore.config.settings.Settings`).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from encore.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from encore.api.routes import router as api_router
from encore.config.settings import Settings
from encore.providers.catalog.spotify_provider import SpotifyCatalogProvider
from encore.providers.event.ticketmaster_provider import TicketmasterEventProvider
from encore.providers.places.serpapi_provider import SerpApiPlacesProvider
from encore.providers.venue.sqlite_venue_store import SQLiteVenueStore
from encore.services.artist_event_service import ArtistEventService
from encore.services.nearby_service import NearbyService
from encore.utils.logging import configure_logging, get_logger

_VERSION = "0.1.0"


def build_components(app_settings: Settings, http_client: httpx.AsyncClient) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    catalog = SpotifyCatalogProvider(http_client=http_client, settings=app_settings)
    events = TicketmasterEventProvider(http_client=http_client, settings=app_settings)
    places = SerpApiPlacesProvider(http_client=http_client, settings=app_settings)
    venue_store = SQLiteVenueStore(db_path=app_settings.venue_db_path)

    nearby_service = NearbyService(places=places, venue_store=venue_store)
    artist_event_service = ArtistEventService(
        catalog=catalog,
        events=events,
        places=places,
        nearby=nearby_service,
        settings=app_settings,
    )

    provider_registry = {
        catalog.get_provider_name(): catalog.is_available(),
        events.get_provider_name(): events.is_available(),
        places.get_provider_name(): places.is_available(),
    }

    return {
        "http_client": http_client,
        "settings": app_settings,
        "nearby_service": nearby_service,
        "artist_event_service": artist_event_service,
        "provider_registry": provider_registry,
    }


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_settings = app_settings or Settings()
    configure_logging(
        log_level=app_settings.log_level,
        app_env=app_settings.app_env,
    )
    logger: structlog.BoundLogger = get_logger(__name__)

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        http_client = httpx.AsyncClient(timeout=app_settings.http_timeout_seconds)
        components = build_components(app_settings, http_client)
        for key, value in components.items():
            setattr(application.state, key, value)

        missing = app_settings.get_missing_credentials()
        if missing:
            logger.warning("missing_provider_credentials", providers=missing)
        logger.info("app_startup", version=_VERSION, environment=app_settings.app_env)

        try:
            yield
        finally:
            await http_client.aclose()
            logger.info("app_shutdown", message="HTTP client closed")

    application = FastAPI(
        title="Encore API",
        version=_VERSION,
        description=(
            "Artist, upcoming-event, and venue-amenity aggregation across a music "
            "catalog, an events API, and a places/weather search API."
        ),
        lifespan=_lifespan,
    )

    # Last added runs first: logging sees the status the error handler produced.
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    application.include_router(api_router)
    return application


def main() -> None:
    app_settings = Settings()
    uvicorn.run(
        "encore.main:create_app",
        factory=True,
        host=app_settings.app_host,
        port=app_settings.app_port,
        reload=(app_settings.app_env == "development"),
    )


if __name__ == "__main__":
    main()
