"""Custom exceptions for ledger submission and log retrieval."""

from __future__ import annotations


class LedgerError(Exception):
    """Base exception for ledger-related errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class MissingRequiredConfigError(LedgerError):
    """Raised when a required configuration value is missing."""

    pass


class ProviderUnavailableError(LedgerError):
    """Raised when no wallet/ledger provider is available or no identity is connected."""

    pass


class SubmissionError(LedgerError):
    """Raised when a transfer submission or its confirmation fails."""

    pass


class InvalidRecipientError(SubmissionError):
    """Raised before dispatch when the recipient is not a 0x account identifier."""

    def __init__(self, recipient: object) -> None:
        super().__init__(f"Invalid recipient address: {recipient!r}")
        self.recipient = recipient


class InvalidAmountError(SubmissionError):
    """Raised before dispatch when the amount is not a non-negative decimal."""

    def __init__(self, amount: object, reason: str = "must be a non-negative decimal") -> None:
        super().__init__(f"Invalid amount {amount!r}: {reason}")
        self.amount = amount


class RejectedByUserError(SubmissionError):
    """Raised when the signer refuses the request."""

    pass


class InsufficientFundsError(SubmissionError):
    """Raised when the sending account cannot cover value plus gas."""

    pass


class NetworkError(SubmissionError):
    """Raised when the transport fails or confirmation does not arrive in time."""

    pass


class TransactionRevertedError(SubmissionError):
    """Raised when the transaction was mined with a failed status."""

    def __init__(self, tx_hash: str) -> None:
        super().__init__(f"Transaction reverted: {tx_hash}")
        self.tx_hash = tx_hash


class SubmissionInProgressError(SubmissionError):
    """Raised when submit is called while another submission is still in flight."""

    def __init__(self) -> None:
        super().__init__("A submission is already in progress")


class FetchFailedError(LedgerError):
    """Raised when the whole transfer log could not be retrieved."""

    pass


class MalformedEventError(LedgerError):
    """Raised for a single log entry that is missing or has invalid fields."""

    def __init__(self, message: str, *, field: str | None = None, cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.field = field
