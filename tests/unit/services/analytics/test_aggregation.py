# -*- coding: utf-8 -*-
"""Unit tests for AggregationEngine."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal

from ledger_transfers.models import TransferEvent
from ledger_transfers.services.analytics import AggregationEngine, AnalyticsReport, AnalyticsSnapshot

A = "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"
B = "0xbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"
C = "0xcccccccccccccccccccccccccccccccccccccccc"


def test_aggregate_empty_log_returns_all_zero_snapshot() -> None:
    snapshot = AggregationEngine().aggregate([])

    assert snapshot == AnalyticsSnapshot()
    assert snapshot.to_dict() == {
        "totalTransactions": 0,
        "totalValueTransferred": "0.0000",
        "mostActive": [],
    }


def test_build_report_for_empty_log_equals_empty_report() -> None:
    assert AggregationEngine().build_report([]) == AnalyticsReport.empty()


def test_aggregate_sums_exactly_and_rounds_half_up(
    transfer_event_factory: Callable[..., TransferEvent],
) -> None:
    events = [
        transfer_event_factory(amount="1.23456"),
        transfer_event_factory(amount="2.0"),
    ]

    snapshot = AggregationEngine().aggregate(events)

    assert snapshot.total_transactions == 2
    assert snapshot.total_value_transferred == "3.2346"


def test_aggregate_has_no_float_drift_over_many_small_amounts(
    transfer_event_factory: Callable[..., TransferEvent],
) -> None:
    events = [transfer_event_factory(amount="0.1") for _ in range(1000)]

    snapshot = AggregationEngine().aggregate(events)

    assert snapshot.total_value_transferred == "100.0000"


def test_most_active_breaks_ties_by_first_seen_order(
    transfer_event_factory: Callable[..., TransferEvent],
) -> None:
    events = [transfer_event_factory(sender=s) for s in (A, B, A, B, C)]

    snapshot = AggregationEngine().aggregate(events)

    assert snapshot.most_active == ((A, 2), (B, 2), (C, 1))


def test_most_active_sorts_by_count_descending(
    transfer_event_factory: Callable[..., TransferEvent],
) -> None:
    events = [transfer_event_factory(sender=s) for s in (C, A, B, B, B, A)]

    snapshot = AggregationEngine().aggregate(events)

    assert snapshot.most_active == ((B, 3), (A, 2), (C, 1))


def test_most_active_is_truncated_to_five_and_full_activity_sums_to_total(
    transfer_event_factory: Callable[..., TransferEvent],
) -> None:
    senders = [f"0x{str(i) * 40}" for i in range(1, 8)]
    events = [transfer_event_factory(sender=s) for s in senders]
    events.append(transfer_event_factory(sender=senders[-1]))

    report = AggregationEngine().build_report(events)
    snapshot = report.snapshot

    assert snapshot.total_transactions == 8
    assert len(snapshot.most_active) == 5
    assert snapshot.most_active[0] == (senders[-1], 2)
    assert sum(count for _, count in snapshot.most_active) < snapshot.total_transactions
    assert sum(report.sender_activity.values()) == snapshot.total_transactions


def test_most_active_counts_equal_total_when_at_most_five_senders(
    transfer_event_factory: Callable[..., TransferEvent],
) -> None:
    events = [transfer_event_factory(sender=s) for s in (A, B, C, A, C, C)]

    snapshot = AggregationEngine().aggregate(events)

    assert sum(count for _, count in snapshot.most_active) == snapshot.total_transactions


def test_projections_preserve_input_order_and_abbreviate_names(
    transfer_event_factory: Callable[..., TransferEvent],
) -> None:
    events = [
        transfer_event_factory(sender=A, amount="0.5"),
        transfer_event_factory(sender=B, amount="1.25"),
        transfer_event_factory(sender=A, amount="2"),
    ]

    report = AggregationEngine().build_report(events)

    assert [(p.index, p.label, p.amount) for p in report.transaction_series] == [
        (0, "Tx 1", Decimal("0.5")),
        (1, "Tx 2", Decimal("1.25")),
        (2, "Tx 3", Decimal("2")),
    ]
    assert [(s.name, s.value, s.account) for s in report.activity_distribution] == [
        ("0xaaaa...", 2, A),
        ("0xbbbb...", 1, B),
    ]


def test_grouping_is_case_sensitive_and_unaffected_by_abbreviation(
    transfer_event_factory: Callable[..., TransferEvent],
) -> None:
    upper = "0xAAAA" + "a" * 36
    events = [transfer_event_factory(sender=A), transfer_event_factory(sender=upper)]

    snapshot = AggregationEngine().aggregate(events)

    assert snapshot.most_active == ((A, 1), (upper, 1))


def test_history_is_sorted_by_timestamp_not_log_order(
    transfer_event_factory: Callable[..., TransferEvent],
    now_utc: datetime,
) -> None:
    late = transfer_event_factory(message="late", timestamp=now_utc + timedelta(minutes=5))
    early = transfer_event_factory(message="early", timestamp=now_utc)

    report = AggregationEngine().build_report([late, early])

    assert [e.message for e in report.events] == ["late", "early"]
    assert [e.message for e in report.history] == ["early", "late"]
    assert report.transaction_series[0].amount == late.amount


def test_report_to_dict_exposes_consumer_shapes(
    transfer_event_factory: Callable[..., TransferEvent],
) -> None:
    report = AggregationEngine().build_report([transfer_event_factory(sender=A, amount="1")])

    data = report.to_dict()

    assert data["totalTransactions"] == 1
    assert data["totalValueTransferred"] == "1.0000"
    assert data["mostActive"] == [[A, 1]]
    assert data["transactionSeries"] == [{"index": 0, "name": "Tx 1", "amount": "1"}]
    assert data["activityDistribution"] == [{"name": "0xaaaa...", "value": 1, "account": A}]
    assert len(data["transactions"]) == 1
