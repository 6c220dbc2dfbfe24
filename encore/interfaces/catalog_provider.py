"""Abstract base class for music-catalog providers.

Defines the contract for resolving artists by id or by name.  The
enrichment pipeline only ever talks to this interface, so the Spotify
adapter can be swapped for any other catalog without touching it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from encore.models.artist import Artist


class ICatalogProvider(ABC):
    """Contract for music-catalog services."""

    @abstractmethod
    async def get_artist(self, artist_id: str) -> Artist | None:
        """Fetch one artist by its catalog id.

        Returns
        -------
        Artist or None
            ``None`` when the catalog has no such artist.

        Raises
        ------
        encore.utils.errors.UpstreamError
            If the call fails for any other reason.
        """

    @abstractmethod
    async def get_artists(self, artist_ids: list[str]) -> list[Artist]:
        """Fetch several artists in one call, skipping unknown ids."""

    @abstractmethod
    async def search_artists(self, name: str) -> list[Artist]:
        """Search artists by name.

        The provider caps results (around ten); callers that page must
        slice client-side.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"spotify"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has the credentials it needs."""
