"""Custom exception hierarchy for Encore.

All application exceptions inherit from :class:`EncoreError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "spotify", "ticketmaster", "serpapi") caused the
failure, and a class-level ``http_status`` the API middleware uses when
rendering the error.

The hierarchy is organized by how callers are expected to react:

    EncoreError  (base -- catch-all for any Encore error)
    +-- NotFoundError                  (terminal, 404)
    |   +-- ArtistNotFoundError
    |   +-- VenueNotFoundError
    |   +-- OriginNotFoundError
    |   +-- PlaceNotFoundError
    +-- InvalidInputError              (terminal, 400)
    +-- UpstreamError                  (provider call failed, 502)
    +-- MalformedUpstreamDataError     (provider data missing fields, 502)
    |   +-- MalformedVenueDataError          (event is dropped)
    |   +-- OriginWithoutCoordinatesError    (422)
    +-- ConfigurationError             (startup / missing config, 500)

Only the enrichment pipeline absorbs errors: an ``UpstreamError`` raised
inside a weather/hotel/transport branch becomes an empty value, and a
``MalformedVenueDataError`` drops one event.  Everywhere else they bubble.
"""


class EncoreError(Exception):
    """Base exception for all Encore errors.

    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[serpapi] Request failed with status 500``.
    """

    http_status: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Lookup errors
# ---------------------------------------------------------------------------

class NotFoundError(EncoreError):
    """Raised when a requested artist, venue, place, or origin does not exist."""

    http_status = 404

    def __init__(
        self,
        message: str = "Resource not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ArtistNotFoundError(NotFoundError):
    """Raised when the catalog provider has no artist for the given id."""

    def __init__(
        self,
        artist_id: str,
        provider_name: str | None = None,
    ) -> None:
        self.artist_id = artist_id
        super().__init__(message=f"Artist {artist_id} not found", provider_name=provider_name)


class VenueNotFoundError(NotFoundError):
    """Raised when a stored venue id or a venue search query matches nothing."""

    def __init__(
        self,
        message: str = "Venue not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class OriginNotFoundError(NotFoundError):
    """Raised when a nearby-search origin cannot be resolved to any place."""

    def __init__(
        self,
        message: str = "Origin not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PlaceNotFoundError(NotFoundError):
    """Raised when a place-details lookup returns no result."""

    def __init__(
        self,
        message: str = "Place not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Caller errors
# ---------------------------------------------------------------------------

class InvalidInputError(EncoreError):
    """Raised for malformed coordinates, thresholds, or pagination parameters."""

    http_status = 400

    def __init__(
        self,
        message: str = "Invalid input",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class UpstreamError(EncoreError):
    """Raised when a provider call fails: transport error, timeout,
    non-2xx status, or an unparsable body.

    The provider's status code (``None`` for transport failures) and the
    raw response body are preserved for diagnostics.
    """

    http_status = 502

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message=message, provider_name=provider_name)


class MalformedUpstreamDataError(EncoreError):
    """Raised when a provider answered but omitted fields we depend on."""

    http_status = 502

    def __init__(
        self,
        message: str = "Provider returned malformed data",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class MalformedVenueDataError(MalformedUpstreamDataError):
    """Raised when an event has no venue or its venue has no coordinates."""

    def __init__(
        self,
        message: str = "Event venue is missing or has no coordinates",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class OriginWithoutCoordinatesError(MalformedUpstreamDataError):
    """Raised when a resolved origin has no GPS coordinates."""

    http_status = 422

    def __init__(
        self,
        message: str = "Origin has no GPS coordinates",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(EncoreError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
