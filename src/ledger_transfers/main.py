# -*- coding: utf-8 -*-
"""
Entry point for the transfer dashboard.

Orchestrates: logging, settings, container, identity connect, analytics fetch.
Run with: python -m ledger_transfers.main

Notebook usage:
    from ledger_transfers.main import run, send
    report = await run()
    status = await send("0x...", "thanks!", "0.01")
"""
from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any

import structlog

from ledger_transfers.DI import Container
from ledger_transfers.config import get_settings
from ledger_transfers.exceptions import ProviderUnavailableError
from ledger_transfers.logging.config import configure_logging
from ledger_transfers.services.analytics import AnalyticsReport
from ledger_transfers.services.submission import SubmissionStatus
from ledger_transfers.utils import mask_address


def _log_report(logger: Any, report: AnalyticsReport) -> None:
    snapshot = report.snapshot
    logger.info(
        "analytics_snapshot",
        total_transactions=snapshot.total_transactions,
        total_value_transferred=snapshot.total_value_transferred,
        most_active=[
            {"account": mask_address(account), "count": count}
            for account, count in snapshot.most_active
        ],
    )
    for event in report.history:
        logger.debug(
            "analytics_history_entry",
            sender_masked=mask_address(event.sender),
            recipient_masked=mask_address(event.recipient),
            amount=str(event.amount),
            message=event.message,
            timestamp=event.timestamp.isoformat(),
        )


async def run(container: Container | None = None) -> AnalyticsReport:
    """Connect (if a provider is configured) and log the analytics for the contract."""
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    container = container or Container()

    session = container.identity_session()
    try:
        identity = await session.connect()
        logger.info("main_connected", account_masked=mask_address(identity.address()))
    except ProviderUnavailableError as e:
        logger.warning("main_no_identity", error_message=str(e))

    ledger_client = container.ledger_client()
    report = await ledger_client.fetch_analytics()
    logger.info(
        "main_analytics_loaded",
        contract_address=settings.ledger.contract_address,
        from_block=settings.ledger.deployment_block,
    )
    _log_report(logger, report)
    return report


async def send(
    recipient: str,
    message: str,
    amount: str | Decimal,
    *,
    container: Container | None = None,
) -> SubmissionStatus:
    """Submit one transfer, then wait for the deferred analytics refresh."""
    configure_logging()
    logger = structlog.get_logger("main")
    container = container or Container()

    session = container.identity_session()
    if not session.is_connected:
        try:
            await session.connect()
        except ProviderUnavailableError as e:
            # submit below then ends in FAILED with this cause
            logger.warning("main_no_identity", error_message=str(e))

    ledger_client = container.ledger_client()

    async def _refresh() -> None:
        _log_report(logger, await ledger_client.fetch_analytics())

    tracker = container.submission_tracker(refresh=_refresh)
    tracker.add_listener(lambda status: logger.info("main_status", status=status.display()))
    try:
        status = await tracker.submit(recipient, message, amount)
        await tracker.wait_for_refresh()
    finally:
        await tracker.aclose()
        await container.event_bus().stop()
    return status


def main() -> None:
    asyncio.run(run())


__all__ = ["main", "run", "send"]

if __name__ == "__main__":
    main()
