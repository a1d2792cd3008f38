# -*- coding: utf-8 -*-
"""Domain events."""

from ledger_transfers.events.bus import build_event_bus
from ledger_transfers.events.transfer_events import (
    AnalyticsRefreshRequestedEvent,
    TransferConfirmedEvent,
    TransferFailedEvent,
    TransferSubmittedEvent,
)

__all__ = [
    "AnalyticsRefreshRequestedEvent",
    "TransferConfirmedEvent",
    "TransferFailedEvent",
    "TransferSubmittedEvent",
    "build_event_bus",
]
