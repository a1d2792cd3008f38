# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from ledger_transfers.clients.ledger_client import LedgerClient
from ledger_transfers.clients.web3_provider import build_web3
from ledger_transfers.config import Settings, get_settings
from ledger_transfers.events import build_event_bus
from ledger_transfers.identity import IdentitySession
from ledger_transfers.services.analytics import AggregationEngine
from ledger_transfers.services.submission import SubmissionTracker


def _settle_delay(settings: Settings) -> float:
    return settings.ledger.refresh_delay_seconds


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, provider, identity, ledger client, tracker."""

    config = providers.Callable(get_settings)

    web3 = providers.Singleton(build_web3, config)

    event_bus = providers.Singleton(build_event_bus)

    identity_session = providers.Singleton(
        IdentitySession,
        settings=config,
        web3=web3,
    )

    aggregation_engine = providers.Singleton(AggregationEngine)

    ledger_client = providers.Singleton(
        LedgerClient,
        settings=config,
        web3=web3,
        identity_session=identity_session,
        aggregation_engine=aggregation_engine,
    )

    # refresh is a coroutine function supplied by the caller (e.g. re-render analytics)
    submission_tracker = providers.Factory(
        SubmissionTracker,
        ledger_client=ledger_client,
        settle_delay_seconds=providers.Callable(_settle_delay, config),
        event_bus=event_bus,
    )
