"""Public interface definitions for all external collaborators.

Every provider API and the venue store are accessed exclusively through
the abstract base classes defined in this package.  Concrete adapters live
in ``encore/providers/`` and are injected in ``encore/main.py``.

CONCRETE PROVIDER MAP:
    Interface          →  Concrete implementation
    ─────────────────────────────────────────────────────────
    ICatalogProvider   →  SpotifyCatalogProvider
    IEventProvider     →  TicketmasterEventProvider
    IPlacesProvider    →  SerpApiPlacesProvider
    IVenueStore        →  SQLiteVenueStore
"""

from encore.interfaces.catalog_provider import ICatalogProvider
from encore.interfaces.event_provider import IEventProvider
from encore.interfaces.places_provider import IPlacesProvider
from encore.interfaces.venue_store import IVenueStore

__all__ = [
    "ICatalogProvider",
    "IEventProvider",
    "IPlacesProvider",
    "IVenueStore",
]
