"""Abstract base class for places/search/weather providers.

One underlying search provider answers text searches, nearby searches,
place-detail lookups, and weather queries.  Nearby searches are keyword
searches anchored on a coordinate; the provider does not enforce a radius.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from encore.models.place import Coordinates, Place, Weather


class IPlacesProvider(ABC):
    """Contract for the places provider.

    All calls are single-attempt and raise
    :class:`~encore.utils.errors.UpstreamError` on transport or parse errors.
    """

    @abstractmethod
    async def search_text(self, query: str) -> list[Place]:
        """Free-text place search; zero or more places in relevance order."""

    @abstractmethod
    async def search_near_coordinates(
        self,
        coordinates: Coordinates,
        category_query: str,
    ) -> list[Place]:
        """Search ``"<category_query> near <lat>,<lng>"``."""

    @abstractmethod
    async def get_weather(self, location: str) -> Weather | None:
        """Return current weather for *location*, or ``None`` if unknown."""

    @abstractmethod
    async def get_place_details(self, name: str, coordinates: Coordinates) -> Place:
        """Look up *name* around *coordinates* and return the best match.

        Raises
        ------
        encore.utils.errors.PlaceNotFoundError
            If the search returns nothing.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"serpapi"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has the credentials it needs."""
