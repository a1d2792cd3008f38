# -*- coding: utf-8 -*-
"""Utility modules."""

from ledger_transfers.utils.amounts import (
    format_amount,
    from_base_units,
    parse_amount,
    to_base_units,
)
from ledger_transfers.utils.validation import (
    abbreviate_address,
    is_hex_address,
    mask_address,
)

__all__ = [
    "abbreviate_address",
    "format_amount",
    "from_base_units",
    "is_hex_address",
    "mask_address",
    "parse_amount",
    "to_base_units",
]
