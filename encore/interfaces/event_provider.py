"""Abstract base class for live-event providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from encore.models.event import EventCandidate


class IEventProvider(ABC):
    """Contract for event-search services.

    Events are indexed by artist *name*, not by catalog id.
    """

    @abstractmethod
    async def search_events_by_artist_name(self, name: str) -> list[EventCandidate]:
        """Return upcoming events for *name*, in provider order.

        Each candidate carries its embedded venue when the provider has one;
        events without a venue are legal and returned as-is.

        Raises
        ------
        encore.utils.errors.UpstreamError
            If the API call fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"ticketmaster"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has the credentials it needs."""
