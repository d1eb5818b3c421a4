"""Mock implementations of the RPC surfaces and timing primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Callable, Sequence

from stellar_sdk import Account, xdr

from stellar_integration.errors import NotFoundError


@dataclass
class Invocation:
    """Stand-in for the simulation envelope, recorded by MockSorobanServer."""

    contract_id: str
    method: str
    args: list
    account: Account


def build_stub_invocation(
    contract_id: str, method: str, args: Sequence[xdr.SCVal], account: Account,
) -> Invocation:
    """Replacement for ContractCaller._build_invocation in unit tests."""
    return Invocation(contract_id, method, list(args), account)


@dataclass
class SimulationError:
    """Simulation-level failure (the RPC answered, the contract call failed)."""

    message: str = "HostError: Error(Contract, #1)"


class MockSorobanServer:
    """Implements ContractRPC.

    ``results`` maps a contract method name to what the simulation returns:
    an SCVal (success), a SimulationError, an Exception instance (raised as a
    transport failure), or a list of those consumed one per call.
    """

    def __init__(self, results: dict[str, Any] | None = None) -> None:
        self.results: dict[str, Any] = dict(results or {})
        self.events: list[Any] = []
        self.events_error: Exception | None = None
        self.account_error: Exception | None = None

        self.simulate_calls: list[Invocation] = []
        self.get_events_calls: list[dict[str, Any]] = []
        self.get_account_calls: list[str] = []
        self.closed = False

    @property
    def total_calls(self) -> int:
        return len(self.simulate_calls) + len(self.get_events_calls) + len(self.get_account_calls)

    def methods_called(self) -> list[str]:
        return [inv.method for inv in self.simulate_calls]

    async def get_account(self, account_id: str) -> Account:
        self.get_account_calls.append(account_id)
        if self.account_error is not None:
            raise self.account_error
        return Account(account_id, 12345)

    async def simulate_transaction(self, transaction_envelope: Invocation) -> Any:
        self.simulate_calls.append(transaction_envelope)
        outcome = self.results[transaction_envelope.method]
        if isinstance(outcome, list):
            outcome = outcome.pop(0) if len(outcome) > 1 else outcome[0]

        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, SimulationError):
            return SimpleNamespace(error=outcome.message, results=None)
        if outcome is None:
            return SimpleNamespace(error=None, results=[])
        return SimpleNamespace(error=None, results=[SimpleNamespace(xdr=outcome.to_xdr())])

    async def get_events(self, start_ledger=None, filters=None, cursor=None, limit=None) -> Any:
        self.get_events_calls.append(
            {"start_ledger": start_ledger, "filters": filters, "cursor": cursor, "limit": limit}
        )
        if self.events_error is not None:
            raise self.events_error
        return SimpleNamespace(events=list(self.events), cursor=None)

    async def close(self) -> None:
        self.closed = True


class MockHorizon:
    """Implements LedgerRPC.

    ``responses`` maps a hash to a list of outcomes (record dict or
    Exception). The last outcome repeats once the list is drained; unknown
    hashes are not found.
    """

    def __init__(self, responses: dict[str, list[Any]] | None = None) -> None:
        self.responses: dict[str, list[Any]] = {k: list(v) for k, v in (responses or {}).items()}
        self.calls: list[str] = []
        self.closed = False

    async def get_transaction(self, tx_hash: str) -> dict[str, Any]:
        self.calls.append(tx_hash)
        outcomes = self.responses.get(tx_hash)
        if not outcomes:
            raise NotFoundError("Transaction", tx_hash)
        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Millisecond clock for RateLimiter tests."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@dataclass
class SleepRecorder:
    """Async sleep replacement that records requested delays (seconds)."""

    on_sleep: Callable[[float], None] | None = None
    calls: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(seconds)
