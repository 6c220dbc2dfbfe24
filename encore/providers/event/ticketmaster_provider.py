"""Ticketmaster Discovery API provider implementing IEventProvider.

Searches music events by artist keyword and maps each result (with its
first embedded venue) into an :class:`EventCandidate`.  Venue coordinates
arrive as strings; values that do not parse leave the coordinates empty,
which makes the pipeline drop that event.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from encore.config.settings import Settings
from encore.interfaces.event_provider import IEventProvider
from encore.models.event import EventCandidate, EventStart, PriceRange, VenueDescriptor
from encore.utils.geo import parse_coordinates
from encore.utils.http_helpers import get_json
from encore.utils.logging import get_logger


def _name_of(block: Any) -> str | None:
    """Ticketmaster nests most labels as ``{"name": ...}``."""
    if isinstance(block, dict):
        return block.get("name")
    return None


def _decimal_or_none(value: Any) -> Decimal | None:
    if value is None:
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


class TicketmasterEventProvider(IEventProvider):
    """Event provider backed by the Ticketmaster Discovery v2 API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient``.
    settings:
        Supplies the base URL, API key, and page size.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._base_url = settings.ticketmaster_base_url.rstrip("/")
        self._api_key = settings.ticketmaster_api_key
        self._page_size = settings.event_search_size
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_venue(raw: dict[str, Any]) -> VenueDescriptor:
        location = raw.get("location") or {}
        state = raw.get("state") or {}
        country = raw.get("country") or {}
        return VenueDescriptor(
            name=raw.get("name"),
            address_line=(raw.get("address") or {}).get("line1"),
            city=_name_of(raw.get("city")),
            state=state.get("name"),
            state_code=state.get("stateCode"),
            country=country.get("name"),
            country_code=country.get("countryCode"),
            coordinates=parse_coordinates(location.get("latitude"), location.get("longitude")),
            url=raw.get("url"),
            timezone=raw.get("timezone"),
            parking_detail=raw.get("parkingDetail"),
            accessibility_detail=raw.get("accessibleSeatingDetail"),
        )

    @classmethod
    def _parse_event(cls, raw: dict[str, Any]) -> EventCandidate:
        dates = raw.get("dates") or {}
        start_raw = dates.get("start")
        start = None
        if isinstance(start_raw, dict):
            start = EventStart(
                local_date=start_raw.get("localDate"),
                local_time=start_raw.get("localTime"),
            )

        price_ranges = [
            PriceRange(
                type=pr.get("type"),
                currency=pr.get("currency"),
                min=_decimal_or_none(pr.get("min")),
                max=_decimal_or_none(pr.get("max")),
            )
            for pr in raw.get("priceRanges") or []
            if isinstance(pr, dict)
        ]

        venues = (raw.get("_embedded") or {}).get("venues") or []
        venue = cls._parse_venue(venues[0]) if venues and isinstance(venues[0], dict) else None

        return EventCandidate(
            name=raw.get("name") or "Untitled event",
            event_type=raw.get("type"),
            url=raw.get("url"),
            start=start,
            status_code=(dates.get("status") or {}).get("code"),
            price_ranges=price_ranges,
            venue=venue,
        )

    # ------------------------------------------------------------------
    # IEventProvider implementation
    # ------------------------------------------------------------------

    async def search_events_by_artist_name(self, name: str) -> list[EventCandidate]:
        data = await get_json(
            self._http,
            f"{self._base_url}/events.json",
            provider_name=self.get_provider_name(),
            params={
                "keyword": name,
                "classificationName": "music",
                "size": self._page_size,
                "sort": "date,asc",
                "apikey": self._api_key,
            },
        )

        raw_events = ((data or {}).get("_embedded") or {}).get("events") or []
        events = [self._parse_event(e) for e in raw_events if isinstance(e, dict)]

        self._logger.debug("ticketmaster_event_search", artist=name, result_count=len(events))
        return events

    def get_provider_name(self) -> str:
        return "ticketmaster"

    def is_available(self) -> bool:
        return bool(self._api_key)
