"""Contract event decoding and burn-history queries."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from stellar_sdk import scval
from stellar_sdk.soroban_rpc import EventFilter, EventFilterType

from stellar_integration.address import assert_valid_address
from stellar_integration.errors import ContractCallError, ParseError, StellarError
from stellar_integration.interfaces.rpc import ContractRPC
from stellar_integration.models.contracts import BurnEvent, ParsedContractEvent
from stellar_integration.resilience.ratelimit import RateLimiter
from stellar_integration.resilience.retry import RetryExecutor
from stellar_integration.stellar.codec import decode_scval

log = logging.getLogger(__name__)

# Pre-computed XDR base64 for the topic symbol used in filters
_TOPIC_BURN = scval.to_symbol("burn").to_xdr()

# Token burn events carry two topics: ("burn", from)
_BURN_TOPICS = [_TOPIC_BURN, "*"]

BURN_HISTORY_START_LEDGER = 1


def _iso_timestamp(value: datetime | str) -> str:
    """Normalize a close time to ISO 8601 UTC with a 'Z' suffix."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_event(info: Any) -> ParsedContractEvent:
    """Decode a raw event (stellar_sdk EventInfo or lookalike).

    Raises ParseError on any malformed topic, value or close time.
    """
    try:
        if not info.topic:
            raise ValueError("event has no topics")
        topics = [decode_scval(t) for t in info.topic]
        data = decode_scval(info.value)
        timestamp = _iso_timestamp(info.ledger_close_at)
    except Exception as exc:
        log.error("Failed to parse contract event %s: %s", getattr(info, "id", "?"), exc)
        raise ParseError("Failed to parse contract event", exc) from exc

    return ParsedContractEvent(
        type=str(topics[0]),
        contract_id=info.contract_id,
        topics=topics[1:],
        data=data,
        ledger=info.ledger,
        tx_hash=info.transaction_hash,
        timestamp=timestamp,
    )


def to_burn_event(parsed: ParsedContractEvent, token_address: str) -> BurnEvent:
    """Project a parsed ``burn`` event into a BurnEvent."""
    if not parsed.topics:
        raise ParseError("Failed to parse burn event", "missing 'from' topic")
    return BurnEvent(
        tx_hash=parsed.tx_hash,
        ledger=parsed.ledger,
        timestamp=parsed.timestamp,
        from_address=str(parsed.topics[0]),
        amount=str(parsed.data),
        token_address=token_address,
    )


class BurnHistoryReader:
    """Queries a token contract's burn events from Soroban RPC."""

    def __init__(
        self,
        soroban: ContractRPC,
        retry: RetryExecutor,
        limiter: RateLimiter,
    ) -> None:
        self._soroban = soroban
        self._retry = retry
        self._limiter = limiter

    async def get_burn_history(self, token_address: str) -> list[BurnEvent]:
        assert_valid_address(token_address)
        log.info("Fetching burn history for %s", token_address)

        filters = [
            EventFilter(
                event_type=EventFilterType.CONTRACT,
                contract_ids=[token_address],
                topics=[_BURN_TOPICS],
            )
        ]

        async def _query() -> list[Any]:
            self._limiter.check_limit()
            try:
                response = await self._soroban.get_events(
                    start_ledger=BURN_HISTORY_START_LEDGER,
                    filters=filters,
                )
            except StellarError as exc:
                if not exc.retryable:
                    raise
                raise ContractCallError(
                    f"Failed to fetch burn history for {token_address}", exc,
                ) from exc
            except Exception as exc:
                log.error("Burn history query failed for %s: %s", token_address, exc)
                raise ContractCallError(
                    f"Failed to fetch burn history for {token_address}", exc,
                ) from exc
            return list(response.events)

        raw_events = await self._retry.run(_query, "getBurnHistory")

        # Any malformed event aborts the batch
        burns = [to_burn_event(parse_event(e), token_address) for e in raw_events]
        log.debug("Parsed %d burn events for %s", len(burns), token_address)
        return burns
