"""Awaitable handle for a dispatched transfer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from ledger_transfers.clients.web3_provider import PROVIDER_ERRORS, classify_submission_error
from ledger_transfers.exceptions import TransactionRevertedError

if TYPE_CHECKING:
    from web3 import AsyncWeb3


@dataclass(frozen=True, slots=True)
class TransferReceipt:
    """Mined transfer."""

    tx_hash: str
    block_number: int | None
    status: int


class TransactionHandle:
    """A dispatched, not yet confirmed transfer. Not revocable."""

    def __init__(
        self,
        web3: AsyncWeb3,
        tx_hash: str,
        *,
        timeout_seconds: float | None = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._w3 = web3
        self._tx_hash = tx_hash
        self._timeout = timeout_seconds
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def tx_hash(self) -> str:
        return self._tx_hash

    async def wait(self) -> TransferReceipt:
        """Wait until the transfer is mined.

        Raises:
            TransactionRevertedError: If the receipt reports failure.
            NetworkError: If the receipt does not arrive in time or the transport fails.
        """
        kwargs: dict[str, Any] = {}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        try:
            receipt = await self._w3.eth.wait_for_transaction_receipt(self._tx_hash, **kwargs)  # type: ignore[arg-type]
        except PROVIDER_ERRORS as e:
            error = classify_submission_error(e)
            self._logger.warning(
                "transfer_confirmation_failed",
                tx_hash=self._tx_hash,
                error_type=type(error).__name__,
                error_message=str(error),
            )
            raise error from e

        status = int(receipt.get("status", 0))
        block_number = receipt.get("blockNumber")
        if status != 1:
            self._logger.warning("transfer_reverted", tx_hash=self._tx_hash, block_number=block_number)
            raise TransactionRevertedError(self._tx_hash)

        self._logger.debug("transfer_mined", tx_hash=self._tx_hash, block_number=block_number)
        return TransferReceipt(
            tx_hash=self._tx_hash,
            block_number=int(block_number) if block_number is not None else None,
            status=status,
        )
