# -*- coding: utf-8 -*-
"""AsyncWeb3 construction and provider error classification."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import aiohttp
from eth_abi.exceptions import DecodingError
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import ProviderConnectionError, TimeExhausted, Web3Exception

from ledger_transfers.exceptions import (
    InsufficientFundsError,
    NetworkError,
    RejectedByUserError,
    SubmissionError,
)

if TYPE_CHECKING:
    from ledger_transfers.config import Settings

# Exceptions the provider stack raises for a failed request.
# Older providers report JSON-RPC errors as ValueError(dict).
PROVIDER_ERRORS: tuple[type[Exception], ...] = (
    Web3Exception,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    OSError,
    ValueError,
)

# Exceptions raised while decoding a single raw log entry.
DECODE_ERRORS: tuple[type[Exception], ...] = (
    Web3Exception,
    DecodingError,
    KeyError,
    IndexError,
    TypeError,
    ValueError,
)

USER_REJECTED_CODE = 4001


def build_web3(settings: Settings) -> AsyncWeb3 | None:
    """Build an AsyncWeb3 for settings.ledger.rpc_url, or None if no endpoint is configured."""
    url = settings.ledger.rpc_url.strip()
    if not url:
        return None
    timeout = aiohttp.ClientTimeout(total=settings.ledger.request_timeout_seconds)
    return AsyncWeb3(AsyncHTTPProvider(url, request_kwargs={"timeout": timeout}))


def _rpc_error(exc: Exception) -> Mapping[str, Any] | None:
    """Return the JSON-RPC error object carried by exc, if any."""
    response = getattr(exc, "rpc_response", None)
    if isinstance(response, Mapping):
        error = response.get("error")
        if isinstance(error, Mapping):
            return error
    if exc.args and isinstance(exc.args[0], Mapping):
        return exc.args[0]
    return None


def describe_error(exc: BaseException) -> str:
    """Human readable cause for status text and logs."""
    if isinstance(exc, Exception):
        error = _rpc_error(exc)
        if error is not None and error.get("message"):
            return str(error["message"])
    text = str(exc).strip()
    return text or type(exc).__name__


def classify_submission_error(exc: Exception) -> SubmissionError:
    """Map a provider/transport exception onto the submission error taxonomy."""
    if isinstance(exc, SubmissionError):
        return exc

    message = describe_error(exc)
    if isinstance(exc, (TimeExhausted, ProviderConnectionError, aiohttp.ClientError, asyncio.TimeoutError, OSError)):
        return NetworkError(message, cause=exc)

    error = _rpc_error(exc)
    code = error.get("code") if error is not None else None
    lowered = message.lower()
    if code == USER_REJECTED_CODE or "user rejected" in lowered or "user denied" in lowered:
        return RejectedByUserError(message, cause=exc)
    if "insufficient funds" in lowered:
        return InsufficientFundsError(message, cause=exc)
    return SubmissionError(message, cause=exc)
