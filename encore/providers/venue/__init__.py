"""Persisted venue lookups.

SQLiteVenueStore reads venue coordinates from data/venues.db.  The store is
read-only here; venue CRUD belongs to whichever system owns the database.
"""
