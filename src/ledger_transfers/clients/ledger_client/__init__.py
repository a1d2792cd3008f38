"""Ledger contract client."""

from ledger_transfers.clients.ledger_client.abi import (
    TRANSFER_EVENT_SIGNATURE,
    TRANSFER_EVENT_TOPIC,
    TRANSFER_LEDGER_ABI,
)
from ledger_transfers.clients.ledger_client.ledger_client import LedgerClient
from ledger_transfers.clients.ledger_client.transaction_handle import (
    TransactionHandle,
    TransferReceipt,
)

__all__ = [
    "LedgerClient",
    "TRANSFER_EVENT_SIGNATURE",
    "TRANSFER_EVENT_TOPIC",
    "TRANSFER_LEDGER_ABI",
    "TransactionHandle",
    "TransferReceipt",
]
