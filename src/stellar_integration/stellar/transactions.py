"""Transaction detail lookups and confirmation polling."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any

from stellar_integration.errors import NotFoundError, ParseError
from stellar_integration.interfaces.rpc import LedgerRPC
from stellar_integration.models.transactions import (
    MonitorTransactionResult,
    TransactionDetails,
    TransactionStatus,
)
from stellar_integration.resilience.ratelimit import RateLimiter
from stellar_integration.resilience.retry import RetryExecutor, Sleep

log = logging.getLogger(__name__)

DEFAULT_MONITOR_ATTEMPTS = 20
DEFAULT_POLL_INTERVAL_MS = 3000

_TX_HASH_RE = re.compile(r"[0-9a-fA-F]{64}")


def is_transaction_hash(value: object) -> bool:
    """True for a 64-character hex transaction hash."""
    return isinstance(value, str) and _TX_HASH_RE.fullmatch(value) is not None


def _require_hash(tx_hash: object) -> None:
    # Anything else would address a different Horizon resource
    if not is_transaction_hash(tx_hash):
        raise NotFoundError("Transaction", tx_hash)


def _status(record: dict[str, Any]) -> TransactionStatus:
    return TransactionStatus.SUCCESS if record.get("successful") else TransactionStatus.FAILED


def to_details(record: dict[str, Any]) -> TransactionDetails:
    """Map a Horizon transaction record to TransactionDetails."""
    try:
        return TransactionDetails(
            hash=record["hash"],
            ledger=int(record["ledger"]),
            created_at=record["created_at"],
            source_account=record["source_account"],
            fee=str(record.get("fee_charged", "")),
            status=_status(record),
            operation_count=int(record.get("operation_count", 0)),
            envelope_xdr=record.get("envelope_xdr", ""),
            result_xdr=record.get("result_xdr", ""),
            result_meta_xdr=record.get("result_meta_xdr", ""),
            memo=record.get("memo"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ParseError("Malformed transaction record", exc) from exc


class TransactionFetcher:
    """Fetches one transaction from Horizon through the retry executor."""

    def __init__(
        self,
        horizon: LedgerRPC,
        retry: RetryExecutor,
        limiter: RateLimiter,
    ) -> None:
        self._horizon = horizon
        self._retry = retry
        self._limiter = limiter

    async def get_transaction(self, tx_hash: str) -> TransactionDetails:
        _require_hash(tx_hash)
        log.info("Fetching transaction %s", tx_hash)

        async def _fetch() -> TransactionDetails:
            self._limiter.check_limit()
            return to_details(await self._horizon.get_transaction(tx_hash))

        return await self._retry.run(_fetch, "getTransaction")


class TransactionMonitor:
    """Polls Horizon until a transaction reaches a terminal state.

    States: polling (implicit) -> success | failed | not_found | pending.
    Running out of attempts is a result, never an exception. The poll sleeps
    are the only suspension points besides the lookups, so cancelling the
    task running monitor() stops it cleanly.
    """

    def __init__(
        self,
        horizon: LedgerRPC,
        limiter: RateLimiter,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._horizon = horizon
        self._limiter = limiter
        self._sleep = sleep

    async def monitor(
        self,
        tx_hash: str,
        max_attempts: int = DEFAULT_MONITOR_ATTEMPTS,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    ) -> MonitorTransactionResult:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        _require_hash(tx_hash)
        log.info("Monitoring transaction %s", tx_hash)
        attempts = 0

        while attempts < max_attempts:
            attempts += 1
            try:
                self._limiter.check_limit()
                # Direct lookup: this loop is the retry policy
                # A malformed record is a polling failure, not a verdict
                details = to_details(await self._horizon.get_transaction(tx_hash))
            except NotFoundError:
                log.debug(
                    "Transaction %s not found yet (attempt %d/%d)",
                    tx_hash, attempts, max_attempts,
                )
                if attempts < max_attempts:
                    await self._sleep(poll_interval_ms / 1000)
                    continue
                return MonitorTransactionResult(
                    hash=tx_hash, status=TransactionStatus.NOT_FOUND, attempts=attempts,
                )
            except Exception as exc:
                log.warning("Error polling transaction %s: %s", tx_hash, exc)
                if attempts < max_attempts:
                    await self._sleep(poll_interval_ms / 1000)
                continue

            status = details.status
            log.info(
                "Transaction %s reached status %s after %d attempt(s)",
                tx_hash, status.value, attempts,
            )
            return MonitorTransactionResult(
                hash=tx_hash,
                status=status,
                attempts=attempts,
                ledger=details.ledger,
                created_at=details.created_at,
                error_message=details.result_xdr if status is TransactionStatus.FAILED else None,
            )

        log.warning("Transaction %s monitoring gave up after %d attempts", tx_hash, attempts)
        return MonitorTransactionResult(
            hash=tx_hash, status=TransactionStatus.PENDING, attempts=attempts,
        )
