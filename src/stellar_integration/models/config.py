"""Configuration models for the client."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from stellar_sdk import Network


class StellarNetwork(str, Enum):
    """Which Stellar network the client talks to."""

    TESTNET = "testnet"
    MAINNET = "mainnet"


DEFAULT_URLS = {
    StellarNetwork.TESTNET: (
        "https://horizon-testnet.stellar.org",
        "https://soroban-testnet.stellar.org",
    ),
    StellarNetwork.MAINNET: (
        "https://horizon.stellar.org",
        "https://soroban-rpc.mainnet.stellar.gateway.fm",
    ),
}


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff settings for RetryExecutor."""

    max_attempts: int = 3
    initial_delay_ms: int = 1000
    max_delay_ms: int = 10_000
    backoff_factor: float = 2


@dataclass(frozen=True)
class RateLimitPolicy:
    """Sliding-window admission settings."""

    max_requests: int = 100
    window_ms: int = 60_000


@dataclass(frozen=True)
class StellarConfig:
    """Complete client configuration. Built once by load_config()."""

    network: StellarNetwork = StellarNetwork.TESTNET
    horizon_url: str = DEFAULT_URLS[StellarNetwork.TESTNET][0]
    soroban_rpc_url: str = DEFAULT_URLS[StellarNetwork.TESTNET][1]
    factory_contract_id: str = ""  # empty = not configured
    simulation_account: str = ""  # source account for read-only simulations
    request_timeout_ms: int = 30_000

    retry: RetryPolicy = field(default_factory=RetryPolicy)
    rate_limit: RateLimitPolicy = field(default_factory=RateLimitPolicy)

    @property
    def network_passphrase(self) -> str:
        if self.network is StellarNetwork.MAINNET:
            return Network.PUBLIC_NETWORK_PASSPHRASE
        return Network.TESTNET_NETWORK_PASSPHRASE
