# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import pytest

from ledger_transfers.config import LedgerSettings, Settings, WalletSettings
from ledger_transfers.models import TransferEvent

SENDER = "0x2d27b6e21b3d4d7c9a43fdf58f12345678907706"
RECIPIENT = "0x9fb29aac15b9a4b7f17c3385939b007540f4d791"
CONTRACT = "0x542Ca7373628eE54d4f672e5500A41FD3F086Dc3"
WEI = 10**18


class FakeEventBus:
    """Minimal event bus fake for asserting dispatched events."""

    def __init__(self) -> None:
        self.dispatched: list[Any] = []

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)

    def of_type(self, event_type: type) -> list[Any]:
        return [e for e in self.dispatched if isinstance(e, event_type)]


@pytest.fixture
def sender() -> str:
    return SENDER


@pytest.fixture
def recipient() -> str:
    return RECIPIENT


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def D() -> Callable[[Any], Decimal]:
    """Decimal helper: D('1.23') -> Decimal('1.23')."""
    return lambda value: Decimal(str(value))


@pytest.fixture
def settings() -> Settings:
    """Settings with a local endpoint and no settling delay."""
    return Settings(
        ledger=LedgerSettings(
            rpc_url="http://127.0.0.1:8545",
            contract_address=CONTRACT,
            deployment_block=7840000,
            confirmation_timeout_seconds=30.0,
            refresh_delay_seconds=0.0,
        ),
        wallet=WalletSettings(private_key=None, account_index=0),
    )


@pytest.fixture
def event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def event_data_factory(now_utc: datetime) -> Callable[..., dict[str, Any]]:
    """Build a decoded Transfer log entry (web3 EventData shape)."""

    def _build(**overrides: Any) -> dict[str, Any]:
        args: dict[str, Any] = {
            "from": overrides.pop("sender", SENDER),
            "to": overrides.pop("recipient", RECIPIENT),
            "amount": overrides.pop("amount_wei", WEI),
            "message": overrides.pop("message", "hello"),
            "timestamp": overrides.pop("timestamp", int(now_utc.timestamp())),
        }
        for name in overrides.pop("drop", ()):
            args.pop(name, None)
        data: dict[str, Any] = {
            "event": "Transfer",
            "args": args,
            "blockNumber": overrides.pop("block_number", 7840001),
            "logIndex": overrides.pop("log_index", 0),
            "transactionHash": overrides.pop("transaction_hash", bytes.fromhex("ab" * 32)),
        }
        data.update(overrides)
        return data

    return _build


@pytest.fixture
def transfer_event_factory(
    now_utc: datetime,
    D: Callable[[Any], Decimal],
) -> Callable[..., TransferEvent]:
    """Build TransferEvent with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> TransferEvent:
        return TransferEvent(
            sender=overrides.pop("sender", SENDER),
            recipient=overrides.pop("recipient", RECIPIENT),
            amount=D(overrides.pop("amount", "1")),
            message=overrides.pop("message", "hello"),
            timestamp=overrides.pop("timestamp", now_utc),
            block_number=overrides.pop("block_number", None),
            transaction_hash=overrides.pop("transaction_hash", None),
            log_index=overrides.pop("log_index", None),
        )

    return _build
