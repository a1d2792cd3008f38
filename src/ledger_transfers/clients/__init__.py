"""Ledger provider and contract clients."""

from ledger_transfers.clients.ledger_client import (
    LedgerClient,
    TransactionHandle,
    TransferReceipt,
)
from ledger_transfers.clients.web3_provider import build_web3, classify_submission_error

__all__ = [
    "LedgerClient",
    "TransactionHandle",
    "TransferReceipt",
    "build_web3",
    "classify_submission_error",
]
