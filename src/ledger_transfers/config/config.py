# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, LEDGER__RPC_URL.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "ledger-transfers"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/ledger_transfers.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class LedgerSettings(BaseSettings):
    """Ledger endpoint and transfer contract (from env LEDGER__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    rpc_url: str = Field(
        default="",
        description="JSON-RPC endpoint of the ledger. Empty means no provider is available.",
    )
    contract_address: str = Field(
        default="0x542Ca7373628eE54d4f672e5500A41FD3F086Dc3",
        description="Address of the deployed transfer contract.",
    )
    deployment_block: int = Field(
        default=7840000,
        ge=0,
        description="Block the contract was deployed at; no Transfer events exist below it.",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="HTTP timeout for a single JSON-RPC request.",
    )
    confirmation_timeout_seconds: float = Field(
        default=120.0,
        ge=1.0,
        description="How long to wait for a transaction receipt before reporting a network error.",
    )
    refresh_delay_seconds: float = Field(
        default=10.0,
        ge=0.0,
        le=600.0,
        description="Settling delay between a confirmation and the analytics refresh.",
    )


class WalletSettings(BaseSettings):
    """Signing identity (from env WALLET__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    private_key: Optional[str] = Field(
        default=None,
        description="Local signing key. If unset, a node-managed account is used.",
    )
    account_index: int = Field(
        default=0,
        ge=0,
        description="Index into the node-managed accounts when no private key is set.",
    )


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, LEDGER__RPC_URL.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    wallet: WalletSettings = Field(default_factory=WalletSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.
        from_env(ledger={"rpc_url": "http://127.0.0.1:8545"}).
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from ledger_transfers.config import get_settings

        settings = get_settings()
        start = settings.ledger.deployment_block
    """
    return Settings()
