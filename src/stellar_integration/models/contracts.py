"""Read-only projections of on-chain contract state and events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TokenInfo:
    """Token metadata read from a token contract."""

    address: str
    name: str
    symbol: str
    decimals: int
    total_supply: str  # integer amount in base units, as a decimal string
    admin: str


@dataclass(frozen=True)
class FactoryState:
    """State of the token factory contract."""

    contract_id: str
    admin: str
    total_tokens: int
    tokens: list[str]
    is_paused: bool


@dataclass(frozen=True)
class ParsedContractEvent:
    """A decoded contract event.

    ``type`` is the first topic; ``topics`` holds the remaining ones.
    """

    type: str
    contract_id: str
    topics: list[Any] = field(default_factory=list)
    data: Any = None
    ledger: int = 0
    tx_hash: str = ""
    timestamp: str = ""  # ISO 8601


@dataclass(frozen=True)
class BurnEvent:
    """One ``burn`` event emitted by a token contract."""

    tx_hash: str
    ledger: int
    timestamp: str  # ISO 8601
    from_address: str
    amount: str
    token_address: str
