"""Domain models."""

from ledger_transfers.models.transfer_event import TransferEvent

__all__ = ["TransferEvent"]
