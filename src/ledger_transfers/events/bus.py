"""Application event bus (bubus)."""

from __future__ import annotations

from bubus import EventBus  # type: ignore[import-untyped]


def build_event_bus(name: str = "LedgerTransfers") -> EventBus:
    """Create the event bus for one application container."""
    return EventBus(
        name=name,
        max_history_size=100,
        wal_path=None,
    )
