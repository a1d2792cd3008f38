# -*- coding: utf-8 -*-
"""SubmissionTracker: one submit-and-confirm cycle with an observable status.

A second submit while one is SUBMITTING is rejected with
SubmissionInProgressError; it is not queued.

After a confirmation, one analytics refresh is scheduled after a settling
delay. The delay is a heuristic: the refreshed log may still lack the new
transfer.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import structlog

from ledger_transfers.events import (
    AnalyticsRefreshRequestedEvent,
    TransferConfirmedEvent,
    TransferFailedEvent,
    TransferSubmittedEvent,
)
from ledger_transfers.exceptions import SubmissionInProgressError
from ledger_transfers.services.submission.status import SubmissionState, SubmissionStatus
from ledger_transfers.utils.validation import mask_address

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from ledger_transfers.clients.ledger_client import LedgerClient

StatusListener = Callable[[SubmissionStatus], None]
RefreshCallback = Callable[[], Awaitable[Any]]


def _cause(exc: BaseException) -> str:
    text = str(exc).strip()
    return text or type(exc).__name__


class SubmissionTracker:
    """Runs submit -> confirm through LedgerClient and tracks the status."""

    def __init__(
        self,
        ledger_client: LedgerClient,
        *,
        settle_delay_seconds: float = 10.0,
        refresh: RefreshCallback | None = None,
        event_bus: EventBus | None = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the tracker.

        Args:
            ledger_client: Client used to dispatch and confirm transfers.
            settle_delay_seconds: Delay between confirmation and the refresh.
            refresh: Optional coroutine function run after the delay (e.g. re-fetch analytics).
            event_bus: Optional bus for lifecycle events.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._ledger = ledger_client
        self._settle_delay = max(0.0, settle_delay_seconds)
        self._refresh = refresh
        self._event_bus = event_bus
        self._status = SubmissionStatus.idle()
        self._listeners: list[StatusListener] = []
        self._refresh_task: asyncio.Task[None] | None = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def pending_refresh(self) -> asyncio.Task[None] | None:
        """The scheduled refresh, if one has not run yet."""
        task = self._refresh_task
        if task is None or task.done():
            return None
        return task

    def add_listener(self, listener: StatusListener) -> None:
        """Call listener with every new status."""
        self._listeners.append(listener)

    def _set_status(self, status: SubmissionStatus) -> None:
        self._status = status
        for listener in self._listeners:
            listener(status)

    def _dispatch(self, event: Any) -> None:
        if self._event_bus is not None:
            self._event_bus.dispatch(event)

    async def submit(
        self,
        recipient: str,
        message: str,
        amount: str | int | Decimal,
    ) -> SubmissionStatus:
        """Submit a transfer and wait for confirmation.

        The status is SUBMITTING before this coroutine first suspends. Any
        failure ends in FAILED with a readable cause; nothing is retried.

        Returns:
            The terminal status (CONFIRMED or FAILED).

        Raises:
            SubmissionInProgressError: If another submission is still SUBMITTING.
        """
        if self._status.state is SubmissionState.SUBMITTING:
            raise SubmissionInProgressError()
        self._set_status(SubmissionStatus.submitting())

        amount_text = str(amount)
        recipient_masked = mask_address(recipient if isinstance(recipient, str) else None)
        tx_hash: str | None = None
        try:
            handle = await self._ledger.submit_transfer(recipient, message, amount)
            tx_hash = handle.tx_hash
            self._dispatch(
                TransferSubmittedEvent(tx_hash=tx_hash, recipient=recipient, amount=amount_text)
            )
            receipt = await handle.wait()
        except asyncio.CancelledError:
            self._set_status(SubmissionStatus.failed("Abandoned before confirmation"))
            self._logger.warning(
                "submission_abandoned",
                recipient_masked=recipient_masked,
                tx_hash=tx_hash,
            )
            raise
        except Exception as e:
            cause = _cause(e)
            self._set_status(SubmissionStatus.failed(cause))
            self._logger.warning(
                "submission_failed",
                recipient_masked=recipient_masked,
                tx_hash=tx_hash,
                error_type=type(e).__name__,
                error_message=cause,
            )
            self._dispatch(
                TransferFailedEvent(
                    recipient=str(recipient),
                    amount=amount_text,
                    error_type=type(e).__name__,
                    error_message=cause,
                    tx_hash=tx_hash,
                )
            )
            return self._status

        self._set_status(SubmissionStatus.confirmed(receipt.tx_hash))
        self._logger.info(
            "submission_confirmed",
            recipient_masked=recipient_masked,
            tx_hash=receipt.tx_hash,
            block_number=receipt.block_number,
        )
        self._dispatch(
            TransferConfirmedEvent(
                tx_hash=receipt.tx_hash,
                recipient=recipient,
                amount=amount_text,
                block_number=receipt.block_number,
            )
        )
        self._schedule_refresh(receipt.tx_hash)
        return self._status

    # --- Deferred refresh ---

    def _schedule_refresh(self, tx_hash: str) -> None:
        self.cancel_pending_refresh()
        self._refresh_task = asyncio.create_task(
            self._refresh_after_delay(tx_hash),
            name=f"analytics-refresh-{tx_hash[:10]}",
        )

    async def _refresh_after_delay(self, tx_hash: str) -> None:
        await asyncio.sleep(self._settle_delay)
        self._logger.debug("analytics_refresh_requested", tx_hash=tx_hash)
        self._dispatch(AnalyticsRefreshRequestedEvent(tx_hash=tx_hash))
        if self._refresh is None:
            return
        try:
            await self._refresh()
        except Exception as e:
            self._logger.exception(
                "analytics_refresh_failed",
                tx_hash=tx_hash,
                error_type=type(e).__name__,
                error_message=str(e),
            )

    def cancel_pending_refresh(self) -> bool:
        """Cancel the scheduled refresh. Returns True if one was pending."""
        task = self.pending_refresh
        if task is None:
            return False
        task.cancel()
        return True

    async def wait_for_refresh(self) -> None:
        """Wait until the scheduled refresh (if any) has run or been cancelled."""
        task = self.pending_refresh
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def aclose(self) -> None:
        """Cancel the pending refresh and wait for it to finish."""
        if self.cancel_pending_refresh():
            await self.wait_for_refresh()
