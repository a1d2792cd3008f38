# -*- coding: utf-8 -*-
"""Application services."""

from ledger_transfers.services.analytics import (
    AggregationEngine,
    AnalyticsReport,
    AnalyticsSnapshot,
)
from ledger_transfers.services.submission import (
    SubmissionState,
    SubmissionStatus,
    SubmissionTracker,
)

__all__ = [
    "AggregationEngine",
    "AnalyticsReport",
    "AnalyticsSnapshot",
    "SubmissionState",
    "SubmissionStatus",
    "SubmissionTracker",
]
