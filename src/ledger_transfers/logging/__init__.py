"""Logging setup."""

from ledger_transfers.logging.config import configure_logging

__all__ = ["configure_logging"]
