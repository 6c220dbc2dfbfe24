"""Music-catalog provider adapters.

SpotifyCatalogProvider implements ICatalogProvider against the Spotify Web
API using a pre-issued bearer token (SPOTIFY_ACCESS_TOKEN).
"""

from encore.providers.catalog.spotify_provider import SpotifyCatalogProvider

__all__ = ["SpotifyCatalogProvider"]
