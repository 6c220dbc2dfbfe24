"""Places / search / weather provider adapters.

SerpApiPlacesProvider answers text searches, nearby searches, place-detail
lookups, and weather queries through SerpApi's Google Maps and Google
engines (SERPAPI_API_KEY).
"""
