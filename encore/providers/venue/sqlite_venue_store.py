"""SQLite-backed venue store.

Reads persisted venues from the ``venues`` table of a local SQLite
database (``data/venues.db`` by default).  Uses ``aiosqlite`` for async
I/O and opens the file in read-only mode; venue CRUD belongs to whatever
system owns the database.
"""

from __future__ import annotations

from pathlib import Path

import aiosqlite

from encore.interfaces.venue_store import IVenueStore
from encore.models.place import StoredVenue
from encore.utils.errors import ConfigurationError
from encore.utils.geo import parse_coordinates
from encore.utils.logging import get_logger

logger = get_logger(__name__)

_DEFAULT_DB_PATH = Path("data/venues.db")

_SELECT_VENUE_SQL = """\
SELECT id, name, latitude, longitude, city
FROM venues
WHERE id = ?;
"""


class SQLiteVenueStore(IVenueStore):
    """Read-only venue lookups against a SQLite file."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def get_venue(self, venue_id: int) -> StoredVenue | None:
        if not self._db_path.exists():
            raise ConfigurationError(
                message=f"Venue database not found at {self._db_path}",
                provider_name="venue_store",
            )

        uri = f"file:{self._db_path.resolve().as_posix()}?mode=ro"
        async with aiosqlite.connect(uri, uri=True) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(_SELECT_VENUE_SQL, (venue_id,)) as cursor:
                row = await cursor.fetchone()

        if row is None:
            logger.info("venue_not_in_store", venue_id=venue_id)
            return None

        return StoredVenue(
            id=row["id"],
            name=row["name"],
            coordinates=parse_coordinates(row["latitude"], row["longitude"]),
            city=row["city"],
        )
