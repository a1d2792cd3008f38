# -*- coding: utf-8 -*-
"""Unit tests for the send() entry point."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from ledger_transfers import main as main_module
from ledger_transfers.exceptions import SubmissionInProgressError
from ledger_transfers.services.submission import SubmissionStatus


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "configure_logging", lambda *a, **k: None)


def _container(tracker: Any) -> Any:
    bus = SimpleNamespace(stop=AsyncMock())
    return SimpleNamespace(
        identity_session=Mock(return_value=SimpleNamespace(is_connected=True)),
        ledger_client=Mock(return_value=SimpleNamespace(fetch_analytics=AsyncMock())),
        submission_tracker=Mock(return_value=tracker),
        event_bus=Mock(return_value=bus),
        bus=bus,
    )


def _tracker(**overrides: Any) -> Any:
    tracker = SimpleNamespace(
        add_listener=Mock(),
        submit=AsyncMock(return_value=SubmissionStatus.confirmed("0xabc")),
        wait_for_refresh=AsyncMock(),
        aclose=AsyncMock(),
    )
    for name, value in overrides.items():
        setattr(tracker, name, value)
    return tracker


async def test_send_returns_status_and_stops_event_bus(recipient: str) -> None:
    tracker = _tracker()
    container = _container(tracker)

    status = await main_module.send(recipient, "hi", "1", container=container)

    assert status == SubmissionStatus.confirmed("0xabc")
    tracker.submit.assert_awaited_once_with(recipient, "hi", "1")
    tracker.wait_for_refresh.assert_awaited_once()
    tracker.aclose.assert_awaited_once()
    container.bus.stop.assert_awaited_once()


async def test_send_stops_event_bus_when_submit_raises(recipient: str) -> None:
    tracker = _tracker(submit=AsyncMock(side_effect=SubmissionInProgressError()))
    container = _container(tracker)

    with pytest.raises(SubmissionInProgressError):
        await main_module.send(recipient, "hi", "1", container=container)

    tracker.wait_for_refresh.assert_not_awaited()
    tracker.aclose.assert_awaited_once()
    container.bus.stop.assert_awaited_once()
