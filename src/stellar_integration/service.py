"""StellarService - the integration layer's single entry point."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from stellar_sdk import SorobanServerAsync, xdr

from stellar_integration.address import is_valid_address
from stellar_integration.interfaces.rpc import ContractRPC, LedgerRPC
from stellar_integration.models.config import StellarConfig
from stellar_integration.models.contracts import (
    BurnEvent,
    FactoryState,
    ParsedContractEvent,
    TokenInfo,
)
from stellar_integration.models.transactions import (
    MonitorTransactionResult,
    TransactionDetails,
)
from stellar_integration.resilience.ratelimit import RateLimiter
from stellar_integration.resilience.retry import RetryExecutor, Sleep
from stellar_integration.stellar.contracts import ContractCaller
from stellar_integration.stellar.events import BurnHistoryReader, parse_event
from stellar_integration.stellar.horizon import HorizonClient
from stellar_integration.stellar.transactions import (
    DEFAULT_MONITOR_ATTEMPTS,
    DEFAULT_POLL_INTERVAL_MS,
    TransactionFetcher,
    TransactionMonitor,
)

log = logging.getLogger(__name__)


class StellarService:
    """Stateless-per-call Stellar client.

    Holds the configuration and the one rate limiter shared by every
    operation. Build it once at startup and pass it to whoever needs it.
    """

    def __init__(
        self,
        cfg: StellarConfig,
        *,
        soroban: ContractRPC | None = None,
        horizon: LedgerRPC | None = None,
        rate_limiter: RateLimiter | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._cfg = cfg

        self.soroban: ContractRPC = soroban or SorobanServerAsync(cfg.soroban_rpc_url)
        self.horizon: LedgerRPC = horizon or HorizonClient(
            cfg.horizon_url, timeout=cfg.request_timeout_ms / 1000,
        )
        self.rate_limiter = rate_limiter or RateLimiter(
            cfg.rate_limit.max_requests, cfg.rate_limit.window_ms,
        )
        self.retry = RetryExecutor(cfg.retry, cfg.request_timeout_ms, sleep=sleep)

        self.contracts = ContractCaller(cfg, self.soroban, self.retry, self.rate_limiter)
        self.burns = BurnHistoryReader(self.soroban, self.retry, self.rate_limiter)
        self.fetcher = TransactionFetcher(self.horizon, self.retry, self.rate_limiter)
        self.monitor = TransactionMonitor(self.horizon, self.rate_limiter, sleep=sleep)

        log.info(
            "StellarService initialized on %s. Horizon: %s, Soroban: %s",
            cfg.network.value, cfg.horizon_url, cfg.soroban_rpc_url,
        )

    @property
    def config(self) -> StellarConfig:
        return self._cfg

    async def close(self) -> None:
        """Close the underlying HTTP sessions."""
        for client in (self.soroban, self.horizon):
            try:
                await client.close()
            except Exception as exc:
                log.debug("Error closing %s: %s", type(client).__name__, exc)

    async def __aenter__(self) -> StellarService:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── Public API ─────────────────────────────────────────

    def validate_address(self, address: str) -> bool:
        log.debug("Validating address: %s", address)
        return is_valid_address(address)

    def remaining_requests(self) -> int:
        return self.rate_limiter.remaining()

    async def call_read_only(
        self, contract_id: str, method: str, args: Sequence[xdr.SCVal] = (),
    ) -> Any:
        return await self.contracts.call_read_only(contract_id, method, args)

    async def get_token_info(self, token_address: str) -> TokenInfo:
        return await self.contracts.get_token_info(token_address)

    async def get_factory_state(self) -> FactoryState:
        return await self.contracts.get_factory_state()

    async def get_burn_history(self, token_address: str) -> list[BurnEvent]:
        return await self.burns.get_burn_history(token_address)

    def parse_event(self, raw: Any) -> ParsedContractEvent:
        return parse_event(raw)

    async def get_transaction(self, tx_hash: str) -> TransactionDetails:
        return await self.fetcher.get_transaction(tx_hash)

    async def monitor_transaction(
        self,
        tx_hash: str,
        max_attempts: int = DEFAULT_MONITOR_ATTEMPTS,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    ) -> MonitorTransactionResult:
        return await self.monitor.monitor(tx_hash, max_attempts, poll_interval_ms)

    def schedule_monitor(
        self,
        tx_hash: str,
        max_attempts: int = DEFAULT_MONITOR_ATTEMPTS,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    ) -> asyncio.Task[MonitorTransactionResult]:
        """Run monitor_transaction() as a task the caller may cancel."""
        return asyncio.get_running_loop().create_task(
            self.monitor_transaction(tx_hash, max_attempts, poll_interval_ms),
            name=f"monitor-{tx_hash[:12]}",
        )
