"""TransferEvent: one decoded Transfer log entry from the ledger contract.

Amounts are exact Decimals in ether units; timestamps are UTC datetimes built
from the epoch seconds the contract records. Log metadata (block number,
transaction hash, log index) is kept for explicit chronological ordering.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from ledger_transfers.exceptions import MalformedEventError
from ledger_transfers.utils.amounts import from_base_units


def _require(args: Mapping[str, Any], name: str) -> Any:
    if name not in args or args[name] is None:
        raise MalformedEventError(f"Transfer event missing field {name!r}", field=name)
    return args[name]


def _account(args: Mapping[str, Any], name: str) -> str:
    value = _require(args, name)
    if not isinstance(value, str) or not value.strip():
        raise MalformedEventError(f"Transfer event field {name!r} is not an account", field=name)
    return value


def _uint(args: Mapping[str, Any], name: str) -> int:
    value = _require(args, name)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MalformedEventError(f"Transfer event field {name!r} is not a uint", field=name)
    return value


def _hex_or_none(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)


@dataclass(frozen=True, slots=True)
class TransferEvent:
    """One historical transfer: who sent how much to whom, with a message."""

    sender: str
    recipient: str
    amount: Decimal
    """Exact amount in ether (never negative)."""
    message: str
    timestamp: datetime
    """UTC time the contract recorded for the transfer."""
    block_number: int | None = None
    transaction_hash: str | None = None
    log_index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Consumer-facing dict (amount as string, timestamp as ISO 8601)."""
        data = asdict(self)
        data["amount"] = str(self.amount)
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_event_data(cls, data: Mapping[str, Any]) -> TransferEvent:
        """Build from a decoded log entry (web3 EventData shape).

        Expects ``args`` with from/to/amount/message/timestamp; the log
        metadata keys are optional.

        Raises:
            MalformedEventError: If a required field is missing or has the wrong type.
        """
        args = data.get("args")
        if not isinstance(args, Mapping):
            raise MalformedEventError("Transfer event has no decoded args", field="args")

        sender = _account(args, "from")
        recipient = _account(args, "to")
        amount_raw = _uint(args, "amount")
        timestamp_raw = _uint(args, "timestamp")
        message = _require(args, "message")
        if not isinstance(message, str):
            raise MalformedEventError("Transfer event field 'message' is not a string", field="message")

        try:
            timestamp = datetime.fromtimestamp(timestamp_raw, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise MalformedEventError(
                f"Transfer event timestamp out of range: {timestamp_raw}",
                field="timestamp",
                cause=e,
            ) from e

        block_number = data.get("blockNumber")
        log_index = data.get("logIndex")
        return cls(
            sender=sender,
            recipient=recipient,
            amount=from_base_units(amount_raw),
            message=message,
            timestamp=timestamp,
            block_number=int(block_number) if block_number is not None else None,
            transaction_hash=_hex_or_none(data.get("transactionHash")),
            log_index=int(log_index) if log_index is not None else None,
        )

    def chronological_key(self) -> tuple[datetime, int, int]:
        """Sort key by timestamp, then block number, then position in block."""
        return (self.timestamp, self.block_number or 0, self.log_index or 0)
