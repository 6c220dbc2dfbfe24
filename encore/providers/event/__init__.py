"""Live-event provider adapters (Ticketmaster Discovery v2)."""
