"""Configuration subpackage."""

from ledger_transfers.config.config import (
    AppSettings,
    LedgerSettings,
    LoggingSettings,
    Settings,
    WalletSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "LedgerSettings",
    "LoggingSettings",
    "Settings",
    "WalletSettings",
    "get_settings",
]
