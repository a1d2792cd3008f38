"""Signing identity session."""

from ledger_transfers.identity.session import Identity, IdentitySession

__all__ = ["Identity", "IdentitySession"]
