"""Interface of the deployed transfer contract.

Names and types must match the deployed contract exactly.
"""

from __future__ import annotations

from typing import Any

from web3 import Web3

SEND_FUNDS_FUNCTION = "sendFunds"
TRANSFER_EVENT = "Transfer"
TRANSFER_EVENT_SIGNATURE = "Transfer(address,address,uint256,string,uint256)"
TRANSFER_EVENT_TOPIC = Web3.to_hex(Web3.keccak(text=TRANSFER_EVENT_SIGNATURE))

TRANSFER_LEDGER_ABI: list[dict[str, Any]] = [
    {
        "inputs": [
            {"internalType": "address payable", "name": "_to", "type": "address"},
            {"internalType": "string", "name": "_message", "type": "string"},
        ],
        "name": SEND_FUNDS_FUNCTION,
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "from", "type": "address"},
            {"indexed": True, "internalType": "address", "name": "to", "type": "address"},
            {"indexed": False, "internalType": "uint256", "name": "amount", "type": "uint256"},
            {"indexed": False, "internalType": "string", "name": "message", "type": "string"},
            {"indexed": False, "internalType": "uint256", "name": "timestamp", "type": "uint256"},
        ],
        "name": TRANSFER_EVENT,
        "type": "event",
    },
]
