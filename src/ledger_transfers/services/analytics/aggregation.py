# -*- coding: utf-8 -*-
"""AggregationEngine: pure analytics over a transfer log.

No I/O, no side effects, no state between calls. Input order is the log
delivery order; only the transaction history is re-sorted (by timestamp).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ledger_transfers.models import TransferEvent
from ledger_transfers.utils.amounts import format_amount
from ledger_transfers.utils.validation import abbreviate_address

MOST_ACTIVE_LIMIT = 5


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """Aggregate figures for one log window."""

    total_transactions: int = 0
    total_value_transferred: str = "0.0000"
    """Sum of all amounts, 4 decimal places."""
    most_active: tuple[tuple[str, int], ...] = ()
    """(sender, count) pairs, count descending, ties in first-seen order, at most 5."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTransactions": self.total_transactions,
            "totalValueTransferred": self.total_value_transferred,
            "mostActive": [[account, count] for account, count in self.most_active],
        }


@dataclass(frozen=True)
class SeriesPoint:
    """One bar/line point: the amount of the n-th transfer in log order."""

    index: int
    label: str
    amount: Decimal


@dataclass(frozen=True)
class ActivitySlice:
    """One pie slice: abbreviated sender name and its transfer count."""

    name: str
    value: int
    account: str
    """Full identifier; the abbreviated name is display-only."""


@dataclass(frozen=True)
class AnalyticsReport:
    """Snapshot plus the chart projections and history derived from the same log."""

    snapshot: AnalyticsSnapshot = field(default_factory=AnalyticsSnapshot)
    events: tuple[TransferEvent, ...] = ()
    """Events in log delivery order."""
    sender_activity: dict[str, int] = field(default_factory=dict)
    """Untruncated per-sender counts, first-seen order."""
    transaction_series: tuple[SeriesPoint, ...] = ()
    activity_distribution: tuple[ActivitySlice, ...] = ()
    history: tuple[TransferEvent, ...] = ()
    """Events sorted chronologically (timestamp, block, log index)."""

    @classmethod
    def empty(cls) -> AnalyticsReport:
        return cls()

    def to_dict(self) -> dict[str, Any]:
        data = self.snapshot.to_dict()
        data["transactions"] = [e.to_dict() for e in self.history]
        data["transactionSeries"] = [
            {"index": p.index, "name": p.label, "amount": str(p.amount)}
            for p in self.transaction_series
        ]
        data["activityDistribution"] = [
            {"name": s.name, "value": s.value, "account": s.account}
            for s in self.activity_distribution
        ]
        return data


class AggregationEngine:
    """Sync, pure service deriving analytics from a sequence of TransferEvent."""

    def __init__(self, most_active_limit: int = MOST_ACTIVE_LIMIT) -> None:
        self._limit = most_active_limit

    def aggregate(self, events: Sequence[TransferEvent]) -> AnalyticsSnapshot:
        """Compute totals and the most active senders."""
        return self.build_report(events).snapshot

    def build_report(self, events: Sequence[TransferEvent]) -> AnalyticsReport:
        """Compute the snapshot and the chart projections in one pass over events."""
        total_value = Decimal(0)
        activity: dict[str, int] = {}
        series: list[SeriesPoint] = []

        for index, event in enumerate(events):
            total_value += event.amount
            activity[event.sender] = activity.get(event.sender, 0) + 1
            series.append(SeriesPoint(index=index, label=f"Tx {index + 1}", amount=event.amount))

        # sorted() is stable, so equal counts keep first-seen order
        ranked = sorted(activity.items(), key=lambda item: item[1], reverse=True)
        most_active = tuple(ranked[: self._limit])

        snapshot = AnalyticsSnapshot(
            total_transactions=len(events),
            total_value_transferred=format_amount(total_value),
            most_active=most_active,
        )
        return AnalyticsReport(
            snapshot=snapshot,
            events=tuple(events),
            sender_activity=activity,
            transaction_series=tuple(series),
            activity_distribution=tuple(
                ActivitySlice(name=abbreviate_address(account), value=count, account=account)
                for account, count in most_active
            ),
            history=tuple(sorted(events, key=TransferEvent.chronological_key)),
        )
