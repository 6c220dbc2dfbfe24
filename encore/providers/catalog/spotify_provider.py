"""Spotify Web API provider implementing ICatalogProvider.

Reads artists with a pre-issued bearer token.  Each method issues exactly
one GET through the injected ``httpx.AsyncClient``; unknown artist ids come
back as ``None`` rather than an error so the pipeline can raise its own
``ArtistNotFoundError`` with context.
"""

from __future__ import annotations

from typing import Any

import httpx

from encore.config.settings import Settings
from encore.interfaces.catalog_provider import ICatalogProvider
from encore.models.artist import Artist, ArtistImage
from encore.utils.errors import UpstreamError
from encore.utils.http_helpers import get_json
from encore.utils.logging import get_logger

_MAX_SEARCH_RESULTS = 10
_MAX_IDS_PER_REQUEST = 50  # Spotify's cap for /artists?ids=

# Spotify answers 400 "invalid id" for malformed ids and 404 for unknown ones.
_MISSING_ARTIST_STATUSES = frozenset({400, 404})


class SpotifyCatalogProvider(ICatalogProvider):
    """Music catalog backed by the Spotify Web API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    settings:
        Supplies the base URL and bearer token.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._base_url = settings.spotify_base_url.rstrip("/")
        self._token = settings.spotify_access_token
        self._logger = get_logger(__name__)

    # -- Private helpers -------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}", "Accept": "application/json"}

    @staticmethod
    def _parse_artist(data: dict[str, Any]) -> Artist:
        images = [
            ArtistImage(url=img["url"], height=img.get("height"), width=img.get("width"))
            for img in data.get("images") or []
            if img.get("url")
        ]
        followers = data.get("followers") or {}
        return Artist(
            id=data["id"],
            name=data.get("name", ""),
            genres=list(data.get("genres") or []),
            popularity=data.get("popularity"),
            followers=followers.get("total"),
            images=images,
            external_url=(data.get("external_urls") or {}).get("spotify"),
        )

    # -- ICatalogProvider implementation ---------------------------------------

    async def get_artist(self, artist_id: str) -> Artist | None:
        try:
            data = await get_json(
                self._http,
                f"{self._base_url}/artists/{artist_id}",
                provider_name=self.get_provider_name(),
                headers=self._headers(),
            )
        except UpstreamError as exc:
            if exc.status_code in _MISSING_ARTIST_STATUSES:
                self._logger.info("spotify_artist_missing", artist_id=artist_id, status=exc.status_code)
                return None
            raise

        if not isinstance(data, dict) or "id" not in data:
            return None
        return self._parse_artist(data)

    async def get_artists(self, artist_ids: list[str]) -> list[Artist]:
        ids = [i for i in artist_ids if i][:_MAX_IDS_PER_REQUEST]
        if not ids:
            return []

        data = await get_json(
            self._http,
            f"{self._base_url}/artists",
            provider_name=self.get_provider_name(),
            params={"ids": ",".join(ids)},
            headers=self._headers(),
        )
        # Unknown ids are returned as null entries.
        return [self._parse_artist(item) for item in data.get("artists") or [] if item]

    async def search_artists(self, name: str) -> list[Artist]:
        data = await get_json(
            self._http,
            f"{self._base_url}/search",
            provider_name=self.get_provider_name(),
            params={"q": name, "type": "artist", "limit": _MAX_SEARCH_RESULTS},
            headers=self._headers(),
        )
        items = (data.get("artists") or {}).get("items") or []
        results = [self._parse_artist(item) for item in items if item and item.get("id")]

        self._logger.debug("spotify_artist_search", query=name, result_count=len(results))
        return results

    def get_provider_name(self) -> str:
        return "spotify"

    def is_available(self) -> bool:
        return bool(self._token)
