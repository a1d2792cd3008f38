# -*- coding: utf-8 -*-
"""LedgerClient: submit transfers to, and read the Transfer log of, the ledger contract.

Writes need a connected IdentitySession. Reads need only the provider.
The log is returned in delivery order; callers must not treat it as chronological.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bound_contextvars
from web3 import Web3

from ledger_transfers.clients.ledger_client.abi import (
    TRANSFER_EVENT_TOPIC,
    TRANSFER_LEDGER_ABI,
)
from ledger_transfers.clients.ledger_client.transaction_handle import TransactionHandle
from ledger_transfers.clients.web3_provider import (
    DECODE_ERRORS,
    PROVIDER_ERRORS,
    classify_submission_error,
    describe_error,
)
from ledger_transfers.exceptions import (
    FetchFailedError,
    InvalidAmountError,
    InvalidRecipientError,
    MalformedEventError,
    ProviderUnavailableError,
    SubmissionError,
)
from ledger_transfers.models import TransferEvent
from ledger_transfers.services.analytics import AggregationEngine, AnalyticsReport
from ledger_transfers.utils.amounts import parse_amount, to_base_units
from ledger_transfers.utils.validation import is_hex_address, mask_address

if TYPE_CHECKING:
    from web3 import AsyncWeb3
    from web3.types import BlockIdentifier

    from ledger_transfers.config import Settings
    from ledger_transfers.identity import IdentitySession


class LedgerClient:
    """Client for the transfer contract: sendFunds writes and Transfer log reads."""

    def __init__(
        self,
        settings: Settings,
        web3: AsyncWeb3 | None,
        *,
        identity_session: IdentitySession | None = None,
        aggregation_engine: AggregationEngine | None = None,
        contract: Any | None = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Application settings (uses settings.ledger).
            web3: Async provider, or None when no ledger endpoint is configured.
            identity_session: Session supplying the sender for submissions.
            aggregation_engine: Engine used by fetch_analytics (defaults to a new one).
            contract: Optional pre-built contract object (defaults to one built from settings).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._w3 = web3
        self._session = identity_session
        self._engine = aggregation_engine or AggregationEngine()
        self._contract = contract
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def contract_address(self) -> str:
        return Web3.to_checksum_address(self._settings.ledger.contract_address)

    def _require_web3(self) -> AsyncWeb3:
        if self._w3 is None:
            raise ProviderUnavailableError("No ledger provider configured (LEDGER__RPC_URL)")
        return self._w3

    def _get_contract(self) -> Any:
        if self._contract is None:
            self._contract = self._require_web3().eth.contract(
                address=self.contract_address,
                abi=TRANSFER_LEDGER_ABI,
            )
        return self._contract

    # --- Writes ---

    async def submit_transfer(
        self,
        recipient: str,
        message: str,
        amount: str | int | Decimal,
    ) -> TransactionHandle:
        """Dispatch sendFunds(recipient, message) carrying amount as value.

        Inputs are validated before any I/O.

        Returns:
            Handle whose wait() resolves once the transfer is mined.

        Raises:
            InvalidRecipientError: If recipient is not a 0x account identifier.
            InvalidAmountError: If amount is not a non-negative decimal with at most 18 places.
            ProviderUnavailableError: If there is no provider or no connected identity.
            RejectedByUserError, InsufficientFundsError, NetworkError, SubmissionError:
                If dispatch fails.
        """
        if not is_hex_address(recipient):
            raise InvalidRecipientError(recipient)
        if not isinstance(message, str):
            raise SubmissionError("message must be a string")
        try:
            value = parse_amount(amount)
            value_wei = to_base_units(value)
        except ValueError as e:
            raise InvalidAmountError(amount, str(e)) from e

        if self._session is None:
            raise ProviderUnavailableError("No identity session configured")
        sender = self._session.identity.address()
        web3 = self._require_web3()
        contract = self._get_contract()
        to_address = Web3.to_checksum_address(recipient.strip())

        with bound_contextvars(
            sender_masked=mask_address(sender),
            recipient_masked=mask_address(to_address),
        ):
            self._logger.info("transfer_dispatching", amount=str(value), value_wei=value_wei)
            try:
                raw_hash = await contract.functions.sendFunds(to_address, message).transact(
                    {"from": sender, "value": value_wei}
                )
            except PROVIDER_ERRORS as e:
                error = classify_submission_error(e)
                self._logger.warning(
                    "transfer_dispatch_failed",
                    error_type=type(error).__name__,
                    error_message=str(error),
                )
                raise error from e

            tx_hash = Web3.to_hex(raw_hash)
            self._logger.info("transfer_dispatched", tx_hash=tx_hash)

        return TransactionHandle(
            web3,
            tx_hash,
            timeout_seconds=self._settings.ledger.confirmation_timeout_seconds,
        )

    # --- Reads ---

    async def fetch_transfer_log(
        self,
        from_block: BlockIdentifier | None = None,
        to_block: BlockIdentifier = "latest",
    ) -> list[TransferEvent]:
        """Fetch and decode Transfer events in [from_block, to_block].

        Entries that cannot be decoded or lack required fields are dropped.

        Args:
            from_block: Lower bound; defaults to settings.ledger.deployment_block.
            to_block: Upper bound; defaults to "latest".

        Returns:
            Events in log delivery order.

        Raises:
            FetchFailedError: If the log cannot be retrieved at all.
        """
        start = self._settings.ledger.deployment_block if from_block is None else from_block
        try:
            web3 = self._require_web3()
            address = self.contract_address
        except (ProviderUnavailableError, ValueError) as e:
            raise FetchFailedError(describe_error(e), cause=e) from e

        filter_params: dict[str, Any] = {
            "address": address,
            "topics": [TRANSFER_EVENT_TOPIC],
            "fromBlock": start,
            "toBlock": to_block,
        }
        try:
            raw_logs = await web3.eth.get_logs(filter_params)  # type: ignore[arg-type]
        except PROVIDER_ERRORS as e:
            self._logger.exception(
                "ledger_fetch_failed",
                from_block=start,
                to_block=to_block,
                error_type=type(e).__name__,
                error_message=describe_error(e),
            )
            raise FetchFailedError(
                f"Could not fetch Transfer log: {describe_error(e)}",
                cause=e,
            ) from e

        events: list[TransferEvent] = []
        malformed = 0
        for raw in raw_logs:
            try:
                events.append(self._decode(raw))
            except MalformedEventError as e:
                malformed += 1
                self._logger.warning(
                    "ledger_malformed_event_dropped",
                    field=e.field,
                    error_message=str(e),
                    transaction_hash=_log_field(raw, "transactionHash"),
                )

        self._logger.info(
            "ledger_log_fetched",
            from_block=start,
            to_block=to_block,
            raw_entries=len(raw_logs),
            events=len(events),
            malformed_dropped=malformed,
        )
        return events

    def _decode(self, raw: Any) -> TransferEvent:
        try:
            data = self._get_contract().events.Transfer().process_log(raw)
        except DECODE_ERRORS as e:
            raise MalformedEventError(
                f"Undecodable Transfer log: {describe_error(e)}",
                cause=e,
            ) from e
        return TransferEvent.from_event_data(data)

    async def fetch_analytics(
        self,
        from_block: BlockIdentifier | None = None,
        to_block: BlockIdentifier = "latest",
    ) -> AnalyticsReport:
        """Fetch the log and aggregate it.

        A failed fetch returns the empty report, so "fetch failed" and
        "no transfers" look the same to callers; the failure is only visible
        in the logs.
        """
        try:
            events = await self.fetch_transfer_log(from_block, to_block)
        except FetchFailedError as e:
            self._logger.warning(
                "ledger_analytics_degraded_to_empty",
                error_message=str(e),
            )
            return AnalyticsReport.empty()
        return self._engine.build_report(events)


def _log_field(raw: Any, name: str) -> str | None:
    try:
        value = raw[name]
    except (KeyError, TypeError, IndexError):
        return None
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value) if value is not None else None
