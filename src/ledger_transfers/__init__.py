"""Ledger transfers: submit transfers with a message and aggregate the transfer log."""

from ledger_transfers.clients import LedgerClient, TransactionHandle
from ledger_transfers.config import get_settings
from ledger_transfers.DI import Container
from ledger_transfers.identity import Identity, IdentitySession
from ledger_transfers.models import TransferEvent
from ledger_transfers.services import (
    AggregationEngine,
    AnalyticsReport,
    AnalyticsSnapshot,
    SubmissionState,
    SubmissionStatus,
    SubmissionTracker,
)

__version__ = "0.0.1"
__all__ = [
    "AggregationEngine",
    "AnalyticsReport",
    "AnalyticsSnapshot",
    "Container",
    "Identity",
    "IdentitySession",
    "LedgerClient",
    "SubmissionState",
    "SubmissionStatus",
    "SubmissionTracker",
    "TransactionHandle",
    "TransferEvent",
    "get_settings",
]
