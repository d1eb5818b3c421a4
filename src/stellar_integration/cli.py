"""CLI entry point for the stellar_integration client."""

from __future__ import annotations

import asyncio
import dataclasses
import json
import logging
import sys
from enum import Enum
from typing import Any, Awaitable, Callable

import click

from stellar_integration.address import is_account_address, is_contract_address
from stellar_integration.amounts import format_token_amount
from stellar_integration.config import load_config
from stellar_integration.errors import StellarError
from stellar_integration.models.config import StellarConfig
from stellar_integration.service import StellarService


def _jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {k: _jsonable(v) for k, v in dataclasses.asdict(value).items()}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bytes):
        return value.hex()
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _echo_json(value: Any) -> None:
    click.echo(json.dumps(_jsonable(value), indent=2))


def _run(cfg: StellarConfig, fn: Callable[[StellarService], Awaitable[Any]]) -> Any:
    """Run ``fn`` against a fresh service; StellarErrors exit with status 1."""

    async def _main() -> Any:
        async with StellarService(cfg) as service:
            return await fn(service)

    try:
        return asyncio.run(_main())
    except StellarError as exc:
        click.echo(f"Error [{exc.code.value}]: {exc.message}", err=True)
        sys.exit(1)


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """stellar-integration - query Stellar tokens, events and transactions."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _config(ctx: click.Context) -> StellarConfig:
    try:
        return load_config(ctx.obj["config_path"])
    except ValueError as exc:
        click.echo(f"Error: invalid configuration: {exc}", err=True)
        sys.exit(2)


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show client configuration."""
    cfg = _config(ctx)
    click.echo(f"Network:      {cfg.network.value}")
    click.echo(f"Horizon:      {cfg.horizon_url}")
    click.echo(f"Soroban RPC:  {cfg.soroban_rpc_url}")
    click.echo(f"Factory:      {cfg.factory_contract_id or '(not set)'}")
    click.echo(f"Timeout:      {cfg.request_timeout_ms}ms")
    click.echo(
        f"Retry:        {cfg.retry.max_attempts} attempts, "
        f"{cfg.retry.initial_delay_ms}-{cfg.retry.max_delay_ms}ms x{cfg.retry.backoff_factor}"
    )
    click.echo(
        f"Rate limit:   {cfg.rate_limit.max_requests} requests / {cfg.rate_limit.window_ms}ms"
    )


@cli.command()
@click.argument("address")
def validate(address: str) -> None:
    """Check an account (G...) or contract (C...) address."""
    if is_account_address(address):
        click.echo("valid account address")
    elif is_contract_address(address):
        click.echo("valid contract address")
    else:
        click.echo("invalid address", err=True)
        sys.exit(1)


# ── Contracts ──────────────────────────────────────────


@cli.command("token-info")
@click.argument("address")
@click.pass_context
def token_info(ctx: click.Context, address: str) -> None:
    """Read name, symbol, decimals, supply and admin of a token contract."""
    info = _run(_config(ctx), lambda s: s.get_token_info(address))
    _echo_json(info)
    click.echo(f"Total supply: {format_token_amount(info.total_supply, info.decimals)} {info.symbol}")


@cli.command()
@click.argument("address")
@click.pass_context
def burns(ctx: click.Context, address: str) -> None:
    """List burn events of a token contract."""
    _echo_json(_run(_config(ctx), lambda s: s.get_burn_history(address)))


@cli.command()
@click.pass_context
def factory(ctx: click.Context) -> None:
    """Show the configured factory contract's state."""
    _echo_json(_run(_config(ctx), lambda s: s.get_factory_state()))


# ── Transactions ───────────────────────────────────────


@cli.command()
@click.argument("tx_hash")
@click.pass_context
def tx(ctx: click.Context, tx_hash: str) -> None:
    """Fetch one transaction from Horizon."""
    _echo_json(_run(_config(ctx), lambda s: s.get_transaction(tx_hash)))


@cli.command()
@click.argument("tx_hash")
@click.option("--attempts", default=20, show_default=True, type=click.IntRange(min=1))
@click.option("--interval", default=3000, show_default=True, type=click.IntRange(min=0),
              help="Poll interval in milliseconds")
@click.pass_context
def monitor(ctx: click.Context, tx_hash: str, attempts: int, interval: int) -> None:
    """Poll a transaction until it succeeds, fails, or attempts run out."""
    result = _run(_config(ctx), lambda s: s.monitor_transaction(tx_hash, attempts, interval))
    _echo_json(result)
    if result.status.value in ("failed", "not_found"):
        sys.exit(1)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
