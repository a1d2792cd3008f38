# -*- coding: utf-8 -*-
"""Unit tests for IdentitySession."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from ledger_transfers.config import LedgerSettings, Settings, WalletSettings
from ledger_transfers.exceptions import ProviderUnavailableError
from ledger_transfers.identity import Identity, IdentitySession
from ledger_transfers.identity.session import SIGNER_MIDDLEWARE_NAME

# Well-known development key (first default account of local test nodes).
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class _FakeEth:
    def __init__(self, accounts: list[str]) -> None:
        self._accounts = accounts
        self.default_account: str | None = None

    @property
    def accounts(self) -> Any:
        return AsyncMock(return_value=self._accounts)()


def _web3(*, accounts: list[str] | None = None, connected: bool = True) -> Any:
    return SimpleNamespace(
        is_connected=AsyncMock(return_value=connected),
        eth=_FakeEth(accounts or []),
        middleware_onion=MagicMock(),
    )


def _settings(*, private_key: str | None = None, account_index: int = 0) -> Settings:
    return Settings(
        ledger=LedgerSettings(rpc_url="http://127.0.0.1:8545"),
        wallet=WalletSettings(private_key=private_key, account_index=account_index),
    )


async def test_connect_without_provider_is_unavailable() -> None:
    session = IdentitySession(_settings(), None)

    with pytest.raises(ProviderUnavailableError):
        await session.connect()

    assert not session.is_connected


async def test_connect_to_unreachable_provider_is_unavailable() -> None:
    session = IdentitySession(_settings(), _web3(connected=False))

    with pytest.raises(ProviderUnavailableError):
        await session.connect()


async def test_connect_transport_error_is_unavailable() -> None:
    web3 = _web3()
    web3.is_connected = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))
    session = IdentitySession(_settings(), web3)

    with pytest.raises(ProviderUnavailableError) as exc_info:
        await session.connect()

    assert isinstance(exc_info.value.cause, aiohttp.ClientConnectionError)


async def test_connect_uses_node_managed_account_at_index() -> None:
    web3 = _web3(accounts=["0x2d27b6e21b3d4d7c9a43fdf58f12345678907706", DEV_ADDRESS.lower()])
    session = IdentitySession(_settings(account_index=1), web3)

    identity = await session.connect()

    assert identity == Identity(account=DEV_ADDRESS, managed_by_node=True)
    assert identity.address() == DEV_ADDRESS
    assert session.identity is identity
    assert web3.eth.default_account == DEV_ADDRESS
    web3.middleware_onion.inject.assert_not_called()


async def test_connect_without_accounts_is_unavailable() -> None:
    session = IdentitySession(_settings(), _web3(accounts=[]))

    with pytest.raises(ProviderUnavailableError):
        await session.connect()


async def test_connect_with_private_key_registers_signer() -> None:
    web3 = _web3()
    web3.middleware_onion.__contains__.return_value = False
    session = IdentitySession(_settings(private_key=DEV_PRIVATE_KEY), web3)

    identity = await session.connect()

    assert identity == Identity(account=DEV_ADDRESS, managed_by_node=False)
    assert web3.eth.default_account == DEV_ADDRESS
    web3.middleware_onion.inject.assert_called_once()
    assert web3.middleware_onion.inject.call_args.kwargs == {"name": SIGNER_MIDDLEWARE_NAME, "layer": 0}


async def test_connect_with_invalid_private_key_is_unavailable() -> None:
    session = IdentitySession(_settings(private_key="0x1234"), _web3())

    with pytest.raises(ProviderUnavailableError):
        await session.connect()


async def test_identity_before_connect_and_after_disconnect_raises() -> None:
    session = IdentitySession(_settings(), _web3(accounts=[DEV_ADDRESS]))

    with pytest.raises(ProviderUnavailableError):
        _ = session.identity

    await session.connect()
    assert session.is_connected
    session.disconnect()

    assert not session.is_connected
    with pytest.raises(ProviderUnavailableError):
        _ = session.identity
