"""Utility modules for Encore.

- **errors** -- Domain exception hierarchy rooted at EncoreError; each class
  carries the HTTP status the API layer renders it with.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **concurrency** -- semaphore-bounded calls, throttled gather, and a
  deadline-bounded task fan-out for the enrichment pipeline.
- **geo** -- haversine distance and coordinate parsing.
- **pagination** -- zero-based in-memory page slicing.
- **http_helpers** (not re-exported here) -- the single-GET JSON helper
  shared by all provider adapters.
"""

from encore.utils.concurrency import bounded_call, gather_until_deadline, throttled_gather
from encore.utils.errors import (
    ArtistNotFoundError,
    ConfigurationError,
    EncoreError,
    InvalidInputError,
    MalformedUpstreamDataError,
    MalformedVenueDataError,
    NotFoundError,
    OriginNotFoundError,
    OriginWithoutCoordinatesError,
    PlaceNotFoundError,
    UpstreamError,
    VenueNotFoundError,
)
from encore.utils.geo import haversine_distance_m, parse_coordinates, require_coordinates
from encore.utils.logging import configure_logging, get_logger
from encore.utils.pagination import paginate

__all__ = [
    "ArtistNotFoundError",
    "ConfigurationError",
    "EncoreError",
    "InvalidInputError",
    "MalformedUpstreamDataError",
    "MalformedVenueDataError",
    "NotFoundError",
    "OriginNotFoundError",
    "OriginWithoutCoordinatesError",
    "PlaceNotFoundError",
    "UpstreamError",
    "VenueNotFoundError",
    "bounded_call",
    "configure_logging",
    "gather_until_deadline",
    "get_logger",
    "haversine_distance_m",
    "paginate",
    "parse_coordinates",
    "require_coordinates",
    "throttled_gather",
]
