"""SubmissionStatus: transient state of one submit-and-confirm cycle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SubmissionState(str, Enum):
    """Submission lifecycle state."""

    IDLE = "IDLE"
    SUBMITTING = "SUBMITTING"
    CONFIRMED = "CONFIRMED"
    """Terminal until the next submit."""
    FAILED = "FAILED"
    """Terminal until the next submit."""


@dataclass(frozen=True, slots=True)
class SubmissionStatus:
    """Discriminated status: a hash only when CONFIRMED, an error only when FAILED."""

    state: SubmissionState = SubmissionState.IDLE
    tx_hash: str | None = None
    error: str | None = None

    @classmethod
    def idle(cls) -> SubmissionStatus:
        return cls()

    @classmethod
    def submitting(cls) -> SubmissionStatus:
        return cls(state=SubmissionState.SUBMITTING)

    @classmethod
    def confirmed(cls, tx_hash: str) -> SubmissionStatus:
        if not tx_hash:
            raise ValueError("tx_hash must be non-empty")
        return cls(state=SubmissionState.CONFIRMED, tx_hash=tx_hash)

    @classmethod
    def failed(cls, error: str) -> SubmissionStatus:
        return cls(state=SubmissionState.FAILED, error=error or "Unknown error")

    @property
    def is_terminal(self) -> bool:
        return self.state in (SubmissionState.CONFIRMED, SubmissionState.FAILED)

    def display(self) -> str:
        """Status line for the presentation layer."""
        if self.state is SubmissionState.SUBMITTING:
            return "Sending..."
        if self.state is SubmissionState.CONFIRMED:
            return f"Transaction sent! Hash: {self.tx_hash}"
        if self.state is SubmissionState.FAILED:
            return f"Transaction failed: {self.error}"
        return ""
