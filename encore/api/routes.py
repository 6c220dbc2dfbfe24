"""FastAPI route definitions for the Encore API.

Every route is a thin mapping onto one service operation.  Services are
resolved from ``app.state`` via FastAPI's ``Depends`` using the
``Annotated`` pattern, and service errors are left to
``ErrorHandlingMiddleware``.

Endpoint                                      Description
-----------------------------------------------------------------------------
/api/v1/artists/search                        Search artists by name (paged)
/api/v1/artists?ids=a,b                       Several artists by id
/api/v1/artists/{artist_id}                   One artist by id
/api/v1/artists/{artist_id}/complete-info     Artist + enriched upcoming events
/api/v1/venues/search                         Free-text venue search (paged)
/api/v1/venues/near                           Venues near a coordinate pair
/api/v1/venues/details                        Best venue match for a name
/api/v1/venues/{venue_id}/nearby/{category}   Places near a stored venue
/api/v1/places/nearby/{category}?query=       Places near a searched place
/api/v1/places/details                        Place details by name + coordinates
/api/v1/health                                Health check + provider status
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from encore.api.schemas import HealthResponse
from encore.config.settings import Settings
from encore.models.artist import Artist
from encore.models.event import CompositeResponse
from encore.models.place import NearbyFilters, NearbyPage, OriginSpec, Page, Place, PlaceCategory
from encore.services.artist_event_service import ArtistEventService
from encore.services.nearby_service import NearbyService
from encore.utils.geo import require_coordinates

_VERSION = "0.1.0"

router = APIRouter(prefix="/api/v1")


# ---------------------------------------------------------------------------
# Dependency injection helpers
# ---------------------------------------------------------------------------


def _get_artist_service(request: Request) -> ArtistEventService:
    return request.app.state.artist_event_service


def _get_nearby_service(request: Request) -> NearbyService:
    return request.app.state.nearby_service


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


ArtistServiceDep = Annotated[ArtistEventService, Depends(_get_artist_service)]
NearbyServiceDep = Annotated[NearbyService, Depends(_get_nearby_service)]
SettingsDep = Annotated[Settings, Depends(_get_settings)]

PageParam = Annotated[int, Query(description="Zero-based page index")]
SizeParam = Annotated[int, Query(description="Page size")]


def _filters(
    min_rating: Decimal | None = None,
    max_distance_m: float | None = None,
    max_price: Decimal | None = None,
) -> NearbyFilters:
    return NearbyFilters(min_rating=min_rating, max_distance_m=max_distance_m, max_price=max_price)


FiltersDep = Annotated[NearbyFilters, Depends(_filters)]


# ---------------------------------------------------------------------------
# Artists
# ---------------------------------------------------------------------------


@router.get("/artists/search", response_model=Page[Artist], summary="Search artists by name")
async def search_artists(
    service: ArtistServiceDep,
    name: Annotated[str, Query(min_length=1)],
    page: PageParam = 0,
    size: SizeParam = 20,
) -> Page[Artist]:
    return await service.search_artists(name, page=page, size=size)


@router.get("/artists", response_model=list[Artist], summary="Get several artists by id")
async def get_artists(
    service: ArtistServiceDep,
    ids: Annotated[str, Query(description="Comma-separated catalog ids")],
) -> list[Artist]:
    return await service.get_artists([i.strip() for i in ids.split(",") if i.strip()])


@router.get("/artists/{artist_id}", response_model=Artist, summary="Get one artist")
async def get_artist(artist_id: str, service: ArtistServiceDep) -> Artist:
    return await service.get_artist(artist_id)


@router.get(
    "/artists/{artist_id}/complete-info",
    response_model=CompositeResponse,
    summary="Artist with enriched upcoming events",
)
async def get_artist_complete_info(artist_id: str, service: ArtistServiceDep) -> CompositeResponse:
    return await service.get_artist_complete_info(artist_id)


# ---------------------------------------------------------------------------
# Venues
# ---------------------------------------------------------------------------


@router.get("/venues/search", response_model=Page[Place], summary="Search venues by text")
async def search_venues(
    service: NearbyServiceDep,
    query: str,
    page: PageParam = 0,
    size: SizeParam = 20,
) -> Page[Place]:
    return await service.search_venues(query, page=page, size=size)


@router.get("/venues/near", response_model=NearbyPage, summary="Venues near a coordinate")
async def venues_near(
    service: NearbyServiceDep,
    filters: FiltersDep,
    lat: str,
    lng: str,
    radius_m: int | None = None,
    page: PageParam = 0,
    size: SizeParam = 20,
) -> NearbyPage:
    return await service.venues_near(
        require_coordinates(lat, lng),
        radius_m=radius_m,
        filters=filters,
        page=page,
        size=size,
    )


@router.get("/venues/details", response_model=Place, summary="Best venue match for a name")
async def venue_details(service: NearbyServiceDep, query: str) -> Place:
    return await service.get_venue_details(query)


@router.get(
    "/venues/{venue_id}/nearby/{category}",
    response_model=NearbyPage,
    summary="Places of a category near a stored venue",
)
async def nearby_stored_venue(
    venue_id: int,
    category: PlaceCategory,
    service: NearbyServiceDep,
    filters: FiltersDep,
    radius_m: int | None = None,
    page: PageParam = 0,
    size: SizeParam = 20,
) -> NearbyPage:
    return await service.find_nearby(
        OriginSpec.from_venue(venue_id),
        category,
        radius_m=radius_m,
        filters=filters,
        page=page,
        size=size,
    )


# ---------------------------------------------------------------------------
# Places
# ---------------------------------------------------------------------------


@router.get(
    "/places/nearby/{category}",
    response_model=NearbyPage,
    summary="Places of a category near a searched place",
)
async def nearby_searched_place(
    category: PlaceCategory,
    service: NearbyServiceDep,
    filters: FiltersDep,
    query: Annotated[str, Query(min_length=1, description="Free-text origin, e.g. a venue name")],
    radius_m: int | None = None,
    page: PageParam = 0,
    size: SizeParam = 20,
) -> NearbyPage:
    return await service.find_nearby(
        OriginSpec.from_query(query),
        category,
        radius_m=radius_m,
        filters=filters,
        page=page,
        size=size,
    )


@router.get("/places/details", response_model=Place, summary="Place details near a coordinate")
async def place_details(service: NearbyServiceDep, name: str, lat: str, lng: str) -> Place:
    return await service.get_place_details(name, require_coordinates(lat, lng))


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(request: Request, settings: SettingsDep) -> HealthResponse:
    """Report provider availability; ``degraded`` when any credential is missing."""
    providers: dict[str, bool] = {}
    if hasattr(request.app.state, "provider_registry"):
        providers = dict(request.app.state.provider_registry)

    missing = settings.get_missing_credentials()
    return HealthResponse(
        status="healthy" if not missing else "degraded",
        version=_VERSION,
        providers=providers,
        missing_credentials=missing,
    )
