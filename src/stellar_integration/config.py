"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from stellar_integration.models.config import (
    DEFAULT_URLS,
    RateLimitPolicy,
    RetryPolicy,
    StellarConfig,
    StellarNetwork,
)

# env suffix -> (section, key, converter)
_ENV_KEYS: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "NETWORK": ("stellar", "network", str),
    "HORIZON_URL": ("stellar", "horizon_url", str),
    "SOROBAN_RPC_URL": ("stellar", "soroban_rpc_url", str),
    "FACTORY_CONTRACT_ID": ("stellar", "factory_contract_id", str),
    "SIMULATION_ACCOUNT": ("stellar", "simulation_account", str),
    "REQUEST_TIMEOUT": ("stellar", "request_timeout_ms", int),
    "RETRY_MAX_ATTEMPTS": ("retry", "max_attempts", int),
    "RETRY_INITIAL_DELAY": ("retry", "initial_delay_ms", int),
    "RETRY_MAX_DELAY": ("retry", "max_delay_ms", int),
    "RETRY_BACKOFF_FACTOR": ("retry", "backoff_factor", float),
    "RATE_LIMIT_MAX": ("rate_limit", "max_requests", int),
    "RATE_LIMIT_WINDOW_MS": ("rate_limit", "window_ms", int),
}


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "STELLAR_",
) -> StellarConfig:
    """Build the client configuration from TOML and environment variables.

    Priority (highest wins):
        1. Environment variables (STELLAR_NETWORK, STELLAR_RETRY_MAX_ATTEMPTS, ...)
        2. TOML config file ([stellar], [retry], [rate_limit] tables)
        3. Defaults from StellarConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    sections: dict[str, dict[str, Any]] = {
        "stellar": dict(raw.get("stellar", {})),
        "retry": dict(raw.get("retry", {})),
        "rate_limit": dict(raw.get("rate_limit", {})),
    }

    # ── Environment variable overrides (highest priority) ──
    for suffix, (section, key, _) in _ENV_KEYS.items():
        if (value := os.environ.get(f"{env_prefix}{suffix}")) not in (None, ""):
            sections[section][key] = value

    converters = {(s, k): conv for s, k, conv in _ENV_KEYS.values()}

    def _get(section: str, key: str) -> Any:
        value = sections[section][key]
        conv = converters[(section, key)]
        try:
            return conv(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid {section}.{key}: {value!r}") from exc

    stellar = sections["stellar"]
    network = StellarNetwork(str(stellar.get("network", StellarNetwork.TESTNET.value)).lower())
    horizon_default, soroban_default = DEFAULT_URLS[network]

    kwargs: dict[str, Any] = {
        "network": network,
        "horizon_url": horizon_default,
        "soroban_rpc_url": soroban_default,
    }
    for key in ("horizon_url", "soroban_rpc_url", "factory_contract_id",
                "simulation_account", "request_timeout_ms"):
        if key in stellar:
            kwargs[key] = _get("stellar", key)

    retry = RetryPolicy(**{
        k: _get("retry", k) for k in sections["retry"] if ("retry", k) in converters
    })
    rate_limit = RateLimitPolicy(**{
        k: _get("rate_limit", k) for k in sections["rate_limit"] if ("rate_limit", k) in converters
    })

    cfg = StellarConfig(retry=retry, rate_limit=rate_limit, **kwargs)
    _validate(cfg)
    return cfg


def _validate(cfg: StellarConfig) -> None:
    if cfg.request_timeout_ms <= 0:
        raise ValueError("request_timeout_ms must be > 0")
    if cfg.retry.max_attempts < 1:
        raise ValueError("retry.max_attempts must be >= 1")
    if cfg.retry.initial_delay_ms < 0 or cfg.retry.max_delay_ms < 0:
        raise ValueError("retry delays must be >= 0")
    if cfg.retry.backoff_factor < 1:
        raise ValueError("retry.backoff_factor must be >= 1")
    if cfg.rate_limit.max_requests < 1 or cfg.rate_limit.window_ms <= 0:
        raise ValueError("rate_limit.max_requests and rate_limit.window_ms must be positive")
