"""Configuration module: exports Settings."""

from encore.config.settings import Settings

__all__ = ["Settings"]
