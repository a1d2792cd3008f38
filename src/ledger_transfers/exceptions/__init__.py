"""Exceptions subpackage."""

from ledger_transfers.exceptions.exceptions import (
    FetchFailedError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidRecipientError,
    LedgerError,
    MalformedEventError,
    MissingRequiredConfigError,
    NetworkError,
    ProviderUnavailableError,
    RejectedByUserError,
    SubmissionError,
    SubmissionInProgressError,
    TransactionRevertedError,
)

__all__ = [
    "FetchFailedError",
    "InsufficientFundsError",
    "InvalidAmountError",
    "InvalidRecipientError",
    "LedgerError",
    "MalformedEventError",
    "MissingRequiredConfigError",
    "NetworkError",
    "ProviderUnavailableError",
    "RejectedByUserError",
    "SubmissionError",
    "SubmissionInProgressError",
    "TransactionRevertedError",
]
