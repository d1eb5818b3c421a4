"""Protocols for the Horizon (ledger) and Soroban (contract) RPC surfaces."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from stellar_sdk import Account, TransactionEnvelope
from stellar_sdk.soroban_rpc import EventFilter


class LedgerRPC(Protocol):
    """Classic ledger API. Implemented by HorizonClient."""

    async def get_transaction(self, tx_hash: str) -> dict[str, Any]:
        """Return the raw transaction record.

        Raises NotFoundError when the ledger does not know the hash and
        StellarNetworkError for any other failure.
        """
        ...

    async def close(self) -> None:
        ...


class ContractRPC(Protocol):
    """Soroban RPC subset used for read-only calls and event queries.

    stellar_sdk.SorobanServerAsync satisfies this protocol.
    """

    async def get_account(self, account_id: str) -> Account:
        ...

    async def simulate_transaction(self, transaction_envelope: TransactionEnvelope) -> Any:
        """Return a response exposing ``error`` and ``results[*].xdr``."""
        ...

    async def get_events(
        self,
        start_ledger: int | None = None,
        filters: Sequence[EventFilter] | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> Any:
        """Return a response exposing ``events``."""
        ...

    async def close(self) -> None:
        ...
