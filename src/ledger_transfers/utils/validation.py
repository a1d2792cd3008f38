"""Validation helpers for account identifiers."""

from __future__ import annotations

import re
from typing import Any

_HEX_ADDRESS = re.compile(r"0x[0-9a-fA-F]{40}")


def is_hex_address(addr: Any) -> bool:
    """Return True if addr is 0x followed by exactly 40 hex digits (any case)."""
    if not isinstance(addr, str):
        return False
    return _HEX_ADDRESS.fullmatch(addr.strip()) is not None


def mask_address(addr: str | None) -> str:
    """Return a masked account identifier for logging (e.g. 0x1234...abcd)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"


def abbreviate_address(addr: str) -> str:
    """Return the display form used by charts: first 6 characters plus "..."."""
    return f"{addr[:6]}..."
