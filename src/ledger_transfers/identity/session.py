# -*- coding: utf-8 -*-
"""IdentitySession: obtains and holds the signing identity for one connected session.

Signing itself stays in the provider stack: either the node manages the
account, or a local key is registered as sign-and-send middleware.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog
from eth_account import Account
from web3 import Web3
from web3.middleware import SignAndSendRawMiddlewareBuilder

from ledger_transfers.clients.web3_provider import PROVIDER_ERRORS, describe_error
from ledger_transfers.exceptions import ProviderUnavailableError
from ledger_transfers.utils.validation import mask_address

if TYPE_CHECKING:
    from web3 import AsyncWeb3

    from ledger_transfers.config import Settings

SIGNER_MIDDLEWARE_NAME = "identity_signer"


@dataclass(frozen=True, slots=True)
class Identity:
    """Connected signing identity."""

    account: str
    """Checksummed account identifier."""
    managed_by_node: bool

    def address(self) -> str:
        return self.account


class IdentitySession:
    """Connects a signing identity through the configured provider."""

    def __init__(
        self,
        settings: Settings,
        web3: AsyncWeb3 | None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            settings: Application settings (uses settings.wallet).
            web3: Async provider, or None when no ledger endpoint is configured.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._w3 = web3
        self._identity: Identity | None = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def is_connected(self) -> bool:
        return self._identity is not None

    @property
    def identity(self) -> Identity:
        """The connected identity.

        Raises:
            ProviderUnavailableError: If connect() has not succeeded.
        """
        if self._identity is None:
            raise ProviderUnavailableError("No identity connected")
        return self._identity

    async def connect(self) -> Identity:
        """Obtain the signing identity. May wait on an external approval step.

        Raises:
            ProviderUnavailableError: If there is no provider, it is unreachable,
                or it exposes no usable account.
        """
        w3 = self._w3
        if w3 is None:
            self._logger.warning("identity_provider_missing")
            raise ProviderUnavailableError("No ledger provider configured (LEDGER__RPC_URL)")

        try:
            reachable = await w3.is_connected()
        except PROVIDER_ERRORS as e:
            raise ProviderUnavailableError(describe_error(e), cause=e) from e
        if not reachable:
            raise ProviderUnavailableError("Ledger provider is not reachable")

        private_key = self._settings.wallet.private_key
        if private_key:
            identity = self._connect_local_key(w3, private_key)
        else:
            identity = await self._connect_node_account(w3)

        self._identity = identity
        self._logger.info(
            "identity_connected",
            account_masked=mask_address(identity.account),
            managed_by_node=identity.managed_by_node,
        )
        return identity

    def _connect_local_key(self, w3: AsyncWeb3, private_key: str) -> Identity:
        try:
            account = Account.from_key(private_key)
        except Exception as e:  # eth_keys ValidationError does not subclass ValueError
            raise ProviderUnavailableError("Configured private key is invalid", cause=e) from e

        if SIGNER_MIDDLEWARE_NAME in w3.middleware_onion:
            w3.middleware_onion.remove(SIGNER_MIDDLEWARE_NAME)
        w3.middleware_onion.inject(
            SignAndSendRawMiddlewareBuilder.build(account),
            name=SIGNER_MIDDLEWARE_NAME,
            layer=0,
        )
        w3.eth.default_account = account.address
        return Identity(account=account.address, managed_by_node=False)

    async def _connect_node_account(self, w3: AsyncWeb3) -> Identity:
        try:
            accounts = await w3.eth.accounts
        except PROVIDER_ERRORS as e:
            raise ProviderUnavailableError(describe_error(e), cause=e) from e

        index = self._settings.wallet.account_index
        if len(accounts) <= index:
            raise ProviderUnavailableError(
                f"Provider exposes {len(accounts)} account(s); account_index={index}"
            )
        address = Web3.to_checksum_address(accounts[index])
        w3.eth.default_account = address
        return Identity(account=address, managed_by_node=True)

    def disconnect(self) -> None:
        """Drop the identity; later submissions fail with ProviderUnavailableError."""
        if self._identity is not None:
            self._logger.info(
                "identity_disconnected",
                account_masked=mask_address(self._identity.account),
            )
        self._identity = None
