"""Read-only contract invocation through transaction simulation."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Sequence

from stellar_sdk import Account, Keypair, TransactionBuilder, TransactionEnvelope, xdr

from stellar_integration.address import assert_valid_address
from stellar_integration.errors import ContractCallError, StellarError, StellarNetworkError
from stellar_integration.interfaces.rpc import ContractRPC
from stellar_integration.models.config import StellarConfig
from stellar_integration.models.contracts import FactoryState, TokenInfo
from stellar_integration.resilience.ratelimit import RateLimiter
from stellar_integration.resilience.retry import RetryExecutor
from stellar_integration.stellar.codec import addr_str, decode_scval, text

log = logging.getLogger(__name__)

BASE_FEE = 100  # stroops; never charged, the envelope is only simulated


async def _all_or_nothing(calls: Sequence[Awaitable[Any]]) -> list[Any]:
    """Gather ``calls``; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(c) for c in calls]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class ContractCaller:
    """Simulates contract invocations and decodes their return values.

    Nothing is signed or submitted: the envelope is built from a placeholder
    source account and only sent to ``simulateTransaction``.
    """

    def __init__(
        self,
        config: StellarConfig,
        soroban: ContractRPC,
        retry: RetryExecutor,
        limiter: RateLimiter,
    ) -> None:
        self._config = config
        self._soroban = soroban
        self._retry = retry
        self._limiter = limiter

    async def call_read_only(
        self,
        contract_id: str,
        method: str,
        args: Sequence[xdr.SCVal] = (),
    ) -> Any:
        """Invoke ``method`` on ``contract_id`` in simulation and return the result."""
        assert_valid_address(contract_id)

        async def _call() -> Any:
            self._limiter.check_limit()
            account = await self._source_account()
            envelope = self._build_invocation(contract_id, method, args, account)
            try:
                simulation = await self._soroban.simulate_transaction(envelope)
            except StellarError:
                raise
            except Exception as exc:
                raise StellarNetworkError(f"Simulation request failed: {method}", exc) from exc

            if getattr(simulation, "error", None):
                raise ContractCallError(f"Contract call failed: {method}", simulation.error)

            results = getattr(simulation, "results", None)
            if not results:
                raise ContractCallError(f"No result from contract call: {method}")

            return decode_scval(results[0].xdr)

        return await self._retry.run(_call, f"{method}@{contract_id[:8]}")

    async def get_token_info(self, token_address: str) -> TokenInfo:
        """Fetch name, symbol, decimals, total supply and admin of a token."""
        assert_valid_address(token_address)
        log.info("Fetching token info for %s", token_address)

        try:
            name, symbol, decimals, total_supply, admin = await _all_or_nothing([
                self.call_read_only(token_address, "name"),
                self.call_read_only(token_address, "symbol"),
                self.call_read_only(token_address, "decimals"),
                self.call_read_only(token_address, "total_supply"),
                self.call_read_only(token_address, "admin"),
            ])
        except StellarError as exc:
            log.error("Failed to fetch token info for %s: %s", token_address, exc)
            raise ContractCallError(
                f"Failed to fetch token info for {token_address}", exc,
            ) from exc

        return TokenInfo(
            address=token_address,
            name=text(name),
            symbol=text(symbol),
            decimals=int(decimals),
            total_supply=str(total_supply),
            admin=addr_str(admin),
        )

    async def get_factory_state(self) -> FactoryState:
        """Fetch admin, token list and pause flag of the configured factory."""
        factory_id = self._config.factory_contract_id
        if not factory_id:
            raise ContractCallError("Factory contract ID is not configured")
        assert_valid_address(factory_id)
        log.info("Fetching factory state: %s", factory_id)

        try:
            admin, total_tokens, tokens, is_paused = await _all_or_nothing([
                self.call_read_only(factory_id, "get_admin"),
                self.call_read_only(factory_id, "get_token_count"),
                self.call_read_only(factory_id, "get_tokens"),
                self.call_read_only(factory_id, "is_paused"),
            ])
        except StellarError as exc:
            log.error("Failed to fetch factory state: %s", exc)
            raise ContractCallError("Failed to fetch factory state", exc) from exc

        return FactoryState(
            contract_id=factory_id,
            admin=addr_str(admin),
            total_tokens=int(total_tokens),
            tokens=[addr_str(t) for t in tokens or []],
            is_paused=bool(is_paused),
        )

    async def _source_account(self) -> Account:
        """Account to build the simulation envelope from.

        Simulation does not check signatures or sequence numbers, so any
        syntactically valid account works. A configured account is looked up
        first so providers that do check existence are satisfied.
        """
        account_id = self._config.simulation_account
        if account_id:
            try:
                return await self._soroban.get_account(account_id)
            except Exception as exc:
                log.debug("Simulation account %s unavailable (%s), using placeholder", account_id[:8], exc)
            return Account(account_id, 0)
        return Account(Keypair.random().public_key, 0)

    def _build_invocation(
        self,
        contract_id: str,
        method: str,
        args: Sequence[xdr.SCVal],
        account: Account,
    ) -> TransactionEnvelope:
        timeout = max(1, self._config.request_timeout_ms // 1000)
        return (
            TransactionBuilder(
                source_account=account,
                network_passphrase=self._config.network_passphrase,
                base_fee=BASE_FEE,
            )
            .append_invoke_contract_function_op(
                contract_id=contract_id,
                function_name=method,
                parameters=list(args),
            )
            .set_timeout(timeout)
            .build()
        )
