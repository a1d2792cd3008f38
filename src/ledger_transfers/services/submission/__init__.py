# -*- coding: utf-8 -*-
"""Transfer submission tracking."""

from ledger_transfers.services.submission.status import SubmissionState, SubmissionStatus
from ledger_transfers.services.submission.submission_tracker import (
    RefreshCallback,
    StatusListener,
    SubmissionTracker,
)

__all__ = [
    "RefreshCallback",
    "StatusListener",
    "SubmissionState",
    "SubmissionStatus",
    "SubmissionTracker",
]
