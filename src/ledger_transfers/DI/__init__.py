"""Dependency injection."""

from ledger_transfers.DI.container import Container

__all__ = ["Container"]
