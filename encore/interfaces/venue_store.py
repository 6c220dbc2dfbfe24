"""Abstract base class for the persisted venue lookup.

The venue store is read-only from Encore's point of view: it maps a venue
id to a name, a city, and a coordinate pair.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from encore.models.place import StoredVenue


class IVenueStore(ABC):
    """Contract for venue persistence lookups."""

    @abstractmethod
    async def get_venue(self, venue_id: int) -> StoredVenue | None:
        """Return the venue stored under *venue_id*, or ``None``."""
