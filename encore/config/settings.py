"""Application settings loaded from environment variables via pydantic-settings.

Configuration is read from two sources, in priority order:

  1. Environment variables, e.g. ``SERPAPI_API_KEY=abc123`` (always wins)
  2. A ``.env`` file in the working directory (local development)

Field names map to upper-cased environment variables automatically.  An
empty credential string means "not configured"; the provider stays wired
but every call it makes will fail upstream, and the health endpoint lists
it as missing.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Encore application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Music catalog (Spotify Web API) ===
    spotify_base_url: str = "https://api.spotify.com/v1"
    spotify_access_token: str = ""

    # === Events (Ticketmaster Discovery API) ===
    ticketmaster_base_url: str = "https://app.ticketmaster.com/discovery/v2"
    ticketmaster_api_key: str = ""
    event_search_size: int = 20

    # === Places / search / weather (SerpApi) ===
    serpapi_base_url: str = "https://serpapi.com/search.json"
    serpapi_api_key: str = ""

    # === Persisted venues (read-only) ===
    venue_db_path: str = "data/venues.db"

    # === Outbound call policy ===
    # One attempt per call; a timeout is treated like any other failure.
    http_timeout_seconds: float = 10.0
    provider_call_timeout_seconds: float = 10.0
    # Overall budget for one complete-info request; unfinished events are dropped.
    request_deadline_seconds: float = 45.0
    # Cap on concurrent outbound enrichment calls per request.
    max_concurrent_calls: int = 6

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def get_missing_credentials(self) -> list[str]:
        """Return the provider names whose credentials are empty."""
        missing: list[str] = []
        if not self.spotify_access_token:
            missing.append("spotify")
        if not self.ticketmaster_api_key:
            missing.append("ticketmaster")
        if not self.serpapi_api_key:
            missing.append("serpapi")
        return missing
