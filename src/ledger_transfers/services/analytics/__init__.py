# -*- coding: utf-8 -*-
"""Transfer log analytics (sync, pure)."""

from ledger_transfers.services.analytics.aggregation import (
    MOST_ACTIVE_LIMIT,
    ActivitySlice,
    AggregationEngine,
    AnalyticsReport,
    AnalyticsSnapshot,
    SeriesPoint,
)

__all__ = [
    "MOST_ACTIVE_LIMIT",
    "ActivitySlice",
    "AggregationEngine",
    "AnalyticsReport",
    "AnalyticsSnapshot",
    "SeriesPoint",
]
