"""Horizon transaction lookups over httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from stellar_integration.errors import NotFoundError, StellarNetworkError

log = logging.getLogger(__name__)


class HorizonClient:
    """Minimal async Horizon client for ``GET /transactions/{hash}``."""

    def __init__(
        self,
        horizon_url: str,
        timeout: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = horizon_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout, connect=10),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get_transaction(self, tx_hash: str) -> dict[str, Any]:
        try:
            resp = await self._client.get(f"/transactions/{tx_hash}")
        except httpx.HTTPError as exc:
            raise StellarNetworkError(f"Failed to fetch transaction {tx_hash}", exc) from exc

        if resp.status_code == 404:
            raise NotFoundError("Transaction", tx_hash)
        if resp.status_code != 200:
            log.debug("Horizon returned HTTP %d for %s: %s", resp.status_code, tx_hash, resp.text[:200])
            raise StellarNetworkError(
                f"Failed to fetch transaction {tx_hash}: HTTP {resp.status_code}",
                {"status": resp.status_code},
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise StellarNetworkError(f"Horizon returned invalid JSON for {tx_hash}", exc) from exc
