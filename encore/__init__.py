"""Encore: artist, concert, and venue-amenity aggregation service."""

__version__ = "0.1.0"
