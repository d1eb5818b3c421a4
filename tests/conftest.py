"""Shared fixtures for stellar_integration tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from stellar_integration.models.config import (
    RateLimitPolicy,
    RetryPolicy,
    StellarConfig,
    StellarNetwork,
)
from stellar_integration.resilience.ratelimit import RateLimiter
from stellar_integration.service import StellarService

from tests.mocks import (
    FakeClock,
    MockHorizon,
    MockSorobanServer,
    SleepRecorder,
    build_stub_invocation,
)

TEST_PUBLIC = "GDNAG4KFFVF5HCSGRWZIXZNL2SR2KBGJSHW2A6FI6DZI62XF6IBLO4GD"

TOKEN_ID = "CCEDYFIHUCJFITWEOT7BWUO2HBQQ72L244ZXQ4YNOC6FYRDN3MKDQFK7"
FACTORY_CONTRACT_ID = "CACBN6G2EPPLAQORDB3LXN3SULGVYBAETFZTNYTNDQ77B7JFRIBT66V2"


def pytest_configure(config):
    """Add network info to the report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Network"] = "Stellar Testnet (mocked unless -m testnet)"
    meta["Token Contract"] = TOKEN_ID
    meta["Factory Contract"] = FACTORY_CONTRACT_ID


def make_test_config(**overrides) -> StellarConfig:
    """Build a StellarConfig suitable for testing."""
    defaults = dict(
        network=StellarNetwork.TESTNET,
        horizon_url="https://horizon-testnet.stellar.org",
        soroban_rpc_url="https://soroban-testnet.stellar.org",
        factory_contract_id=FACTORY_CONTRACT_ID,
        request_timeout_ms=2000,
        retry=RetryPolicy(max_attempts=3, initial_delay_ms=1000, max_delay_ms=10_000, backoff_factor=2),
        rate_limit=RateLimitPolicy(max_requests=100, window_ms=60_000),
    )
    defaults.update(overrides)
    return StellarConfig(**defaults)


def make_service(
    cfg: StellarConfig,
    soroban: MockSorobanServer,
    horizon: MockHorizon,
    sleep=None,
    rate_limiter: RateLimiter | None = None,
) -> StellarService:
    """Wire a StellarService to mocks; envelopes are replaced by Invocation stubs."""
    kwargs = {"sleep": sleep} if sleep is not None else {}
    svc = StellarService(
        cfg, soroban=soroban, horizon=horizon, rate_limiter=rate_limiter, **kwargs,
    )
    svc.contracts._build_invocation = build_stub_invocation  # type: ignore[method-assign]
    return svc


@pytest.fixture
def test_config():
    """Default StellarConfig for tests."""
    return make_test_config()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def mock_soroban():
    return MockSorobanServer()


@pytest.fixture
def mock_horizon():
    return MockHorizon()


@pytest.fixture
def limiter(test_config, clock):
    return RateLimiter(
        test_config.rate_limit.max_requests, test_config.rate_limit.window_ms, clock=clock,
    )


@pytest.fixture
def service(test_config, mock_soroban, mock_horizon, sleeper, limiter):
    """Fully wired StellarService with mocked RPC surfaces and no real sleeps."""
    return make_service(test_config, mock_soroban, mock_horizon, sleep=sleeper, rate_limiter=limiter)
