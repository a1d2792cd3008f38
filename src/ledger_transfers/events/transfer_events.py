"""Transfer lifecycle events (emitted by SubmissionTracker)."""

from __future__ import annotations

from bubus import BaseEvent  # type: ignore[import-untyped]


class TransferSubmittedEvent(BaseEvent[None]):
    """Emitted when sendFunds has been dispatched and a hash is known."""

    tx_hash: str
    recipient: str
    amount: str


class TransferConfirmedEvent(BaseEvent[None]):
    """Emitted when the dispatched transfer has been mined successfully."""

    tx_hash: str
    recipient: str
    amount: str
    block_number: int | None = None


class TransferFailedEvent(BaseEvent[None]):
    """Emitted when a submission ends in the FAILED state."""

    recipient: str
    amount: str
    error_type: str
    error_message: str
    tx_hash: str | None = None
    """Set when dispatch succeeded but confirmation failed."""


class AnalyticsRefreshRequestedEvent(BaseEvent[None]):
    """Emitted after the settling delay that follows a confirmation.

    Best effort: the refreshed log may still lack the confirmed transfer.
    """

    tx_hash: str
