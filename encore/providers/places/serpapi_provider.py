"""SerpApi provider implementing IPlacesProvider.

Google Maps searches (``engine=google_maps``) back text search, nearby
search, and place details; a Google web search (``engine=google``) for
``"weather <location>"`` backs the weather lookup through its answer box.

A Maps search answers either with a ``local_results`` list or, when the
query pins down a single place, a ``place_results`` object; both shapes are
normalised to a list of :class:`Place`.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from encore.config.settings import Settings
from encore.interfaces.places_provider import IPlacesProvider
from encore.models.place import Coordinates, Place, Weather
from encore.utils.errors import PlaceNotFoundError
from encore.utils.geo import parse_coordinates
from encore.utils.http_helpers import get_json
from encore.utils.logging import get_logger

_MAP_ZOOM = "14z"


def _as_str_list(value: Any) -> list[str]:
    """``type``/``types`` come back as either a string or a list of strings."""
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def _as_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def _as_int(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


class SerpApiPlacesProvider(IPlacesProvider):
    """Places/search/weather provider backed by SerpApi.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient``.
    settings:
        Supplies the endpoint URL and API key.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._base_url = settings.serpapi_base_url
        self._api_key = settings.serpapi_api_key
        self._logger = get_logger(__name__)

    # -- Private helpers -------------------------------------------------------

    async def _search(self, params: dict[str, Any]) -> dict[str, Any]:
        data = await get_json(
            self._http,
            self._base_url,
            provider_name=self.get_provider_name(),
            params={**params, "api_key": self._api_key},
        )
        return data if isinstance(data, dict) else {}

    async def _maps_search(self, query: str, **extra: Any) -> list[Place]:
        data = await self._search({"engine": "google_maps", "type": "search", "q": query, **extra})
        return self.extract_places(data)

    @staticmethod
    def _parse_place(raw: dict[str, Any]) -> Place:
        gps = raw.get("gps_coordinates") or {}
        types = _as_str_list(raw.get("types")) or _as_str_list(raw.get("type"))
        return Place(
            title=raw.get("title") or "",
            place_id=raw.get("place_id"),
            data_id=raw.get("data_id"),
            address=raw.get("address"),
            coordinates=parse_coordinates(gps.get("latitude"), gps.get("longitude")),
            rating=_as_decimal(raw.get("rating")),
            reviews=_as_int(raw.get("reviews")),
            phone=raw.get("phone"),
            website=raw.get("website"),
            types=types,
            price=raw.get("price"),
            thumbnail=raw.get("thumbnail"),
        )

    @classmethod
    def extract_places(cls, data: dict[str, Any]) -> list[Place]:
        """Normalise a Maps response into a flat list; empty if neither shape is present."""
        single = data.get("place_results")
        if isinstance(single, dict):
            return [cls._parse_place(single)]
        many = data.get("local_results")
        if isinstance(many, list):
            return [cls._parse_place(item) for item in many if isinstance(item, dict)]
        return []

    # -- IPlacesProvider implementation ----------------------------------------

    async def search_text(self, query: str) -> list[Place]:
        self._logger.debug("serpapi_text_search", query=query)
        return await self._maps_search(query)

    async def search_near_coordinates(
        self,
        coordinates: Coordinates,
        category_query: str,
    ) -> list[Place]:
        query = f"{category_query} near {coordinates.as_query()}"
        places = await self._maps_search(query)
        self._logger.debug("serpapi_nearby_search", query=query, result_count=len(places))
        return places

    async def get_weather(self, location: str) -> Weather | None:
        data = await self._search({"engine": "google", "q": f"weather {location}"})
        box = data.get("answer_box")
        if not isinstance(box, dict):
            self._logger.info("serpapi_weather_empty", location=location)
            return None
        return Weather(
            location=box.get("location"),
            description=box.get("weather"),
            temperature=None if box.get("temperature") is None else str(box.get("temperature")),
            unit=box.get("unit"),
            precipitation=box.get("precipitation"),
            humidity=box.get("humidity"),
            wind=box.get("wind"),
            date=box.get("date"),
        )

    async def get_place_details(self, name: str, coordinates: Coordinates) -> Place:
        places = await self._maps_search(name, ll=f"@{coordinates.as_query()},{_MAP_ZOOM}")
        if not places:
            raise PlaceNotFoundError(
                message=f"No place found for '{name}' near {coordinates.as_query()}",
                provider_name=self.get_provider_name(),
            )
        return places[0]

    def get_provider_name(self) -> str:
        return "serpapi"

    def is_available(self) -> bool:
        return bool(self._api_key)
