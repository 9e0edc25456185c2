from __future__ import annotations

import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any

import click
from loguru import logger

from armada_bootstrap.core.clients.Web3CallClient import Web3CallClient
from armada_bootstrap.core.config import get_addresses_dir, load_config
from armada_bootstrap.core.constants.base import DEFAULT_ENV_FILENAME
from armada_bootstrap.core.constants.contracts import ALL_CONTRACTS, SEAS_TOKEN, WIRING_PLAN
from armada_bootstrap.core.errors import CallRevertedError, DeploymentError
from armada_bootstrap.core.utils.units import format_units
from armada_bootstrap.core.utils.wallets import account_from_key
from armada_bootstrap.deploy.env_file import (
    contract_env_updates,
    patch_env_file,
    read_env_file,
)
from armada_bootstrap.deploy.provisioner import AgentProvisioner
from armada_bootstrap.deploy.registry import AddressRegistry, addresses_file_path
from armada_bootstrap.deploy.roster import build_roster
from armada_bootstrap.deploy.runner import DeploymentRunner, DeploymentSummary
from armada_bootstrap.deploy.settings import DeploymentConfig


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _configure_logging(log_level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=str(log_level).upper())


def _load_env(env_file: Path) -> dict[str, str]:
    # Process environment wins over the file, as with dotenv's default.
    env = read_env_file(env_file) if env_file.is_file() else {}
    env.update(os.environ)
    return env


def _summary_to_dict(summary: DeploymentSummary) -> dict[str, Any]:
    return {
        "chainId": summary.chain_id,
        "deployer": summary.deployer,
        "addresses": summary.addresses,
        "deployed": summary.deployed,
        "attached": summary.attached,
        "phases": {
            name: {
                "enabled": r.enabled,
                "passed": r.passed,
                "failed": r.failed,
                "skipped": r.skipped,
            }
            for name, r in summary.phases.items()
        },
        "catalog": [
            {"name": upgrade.name, "ok": ok, "detail": detail}
            for upgrade, (ok, detail) in summary.seeded
        ],
        "accounts": [
            {"alias": r.alias, "status": r.status, "detail": r.detail}
            for r in summary.accounts
        ],
        "agents": [
            {"alias": r.alias, "address": r.address, "status": r.status, "detail": r.detail}
            for r in summary.provisioning
        ],
        "addressesFile": summary.addresses_file,
        "envMissingKeys": summary.env_patch.missing if summary.env_patch else [],
    }


def _load_registry(addresses: Path | None, config: DeploymentConfig) -> AddressRegistry:
    path = addresses or addresses_file_path(config.chain_id, config.addresses_dir)
    if not path.is_file():
        raise click.ClickException(f"Address file not found: {path}")
    try:
        return AddressRegistry.load(path)
    except (ValueError, OSError) as exc:
        raise click.ClickException(f"Invalid address file {path}: {exc}") from exc


@click.group(name="armada", help="Deploy, wire and provision the Seven Seas contracts.")
@click.option(
    "--env-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_ENV_FILENAME,
    show_default=True,
    help="Env file read for keys/settings and patched with deployed addresses.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to config.json (RPC URLs, artifacts and output directories).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
)
@click.pass_context
def cli(ctx: click.Context, env_file: Path, config_path: Path | None, log_level: str):
    _configure_logging(log_level)
    if config_path is not None:
        load_config(config_path, require_exists=True)
    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file
    ctx.obj["env"] = _load_env(env_file)


def _base_config(ctx: click.Context, **overrides: Any) -> DeploymentConfig:
    try:
        return DeploymentConfig.from_env(ctx.obj["env"], **overrides)
    except DeploymentError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command(name="deploy", help="Deploy or attach, wire, seed, provision and persist.")
@click.option(
    "--baseline",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    default=None,
    help="Address file to start from instead of the built-in baseline.",
)
@click.option("--fresh", is_flag=True, help="Ignore any baseline and deploy everything.")
@click.option(
    "--contract",
    "contracts",
    multiple=True,
    type=click.Choice(list(ALL_CONTRACTS)),
    help="Restrict the run to these contracts (repeatable).",
)
@click.option(
    "--step",
    "steps",
    multiple=True,
    type=click.Choice([step.key for step in WIRING_PLAN]),
    help="Run only these wiring steps (repeatable).",
)
@click.option(
    "--out-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory for deployed-addresses-<chainId>.json.",
)
@click.option("--no-env-patch", is_flag=True, help="Do not rewrite the env file.")
@click.option("--append-missing", is_flag=True, help="Append env keys the file lacks.")
@click.option("--skip-wiring", is_flag=True)
@click.option("--skip-upgrades", is_flag=True)
@click.option("--skip-funding", is_flag=True)
@click.option("--skip-accounts", is_flag=True)
@click.option("--skip-registration", is_flag=True)
@click.pass_context
def deploy_cmd(
    ctx: click.Context,
    baseline: Path | None,
    fresh: bool,
    contracts: tuple[str, ...],
    steps: tuple[str, ...],
    out_dir: Path | None,
    no_env_patch: bool,
    append_missing: bool,
    skip_wiring: bool,
    skip_upgrades: bool,
    skip_funding: bool,
    skip_accounts: bool,
    skip_registration: bool,
) -> None:
    overrides: dict[str, Any] = {
        "addresses_dir": out_dir or get_addresses_dir(),
        "env_file": None if no_env_patch else ctx.obj["env_file"],
    }
    if contracts:
        overrides["contracts"] = tuple(contracts)
    if steps:
        overrides["wiring_steps"] = tuple(steps)
    # Flags only ever switch a phase off; the env file may already have done so.
    for key, value in (
        ("append_missing_env_keys", append_missing),
        ("skip_wiring", skip_wiring),
        ("skip_upgrades", skip_upgrades),
        ("skip_funding", skip_funding),
        ("skip_accounts", skip_accounts),
        ("skip_registration", skip_registration),
    ):
        if value:
            overrides[key] = True

    config = _base_config(ctx)
    try:
        if fresh:
            overrides["baseline"] = {}
        elif baseline is not None:
            overrides["baseline"] = AddressRegistry.load(baseline).as_dict()
        config = config.replace(**overrides)
        summary = asyncio.run(DeploymentRunner(config).run())
    except (DeploymentError, OSError, ValueError) as exc:
        logger.error(f"Deployment failed: {exc}")
        raise click.ClickException(str(exc)) from exc
    _echo_json(_summary_to_dict(summary))


@cli.command(name="provision", help="Create accounts and register agents on an existing deployment.")
@click.option(
    "--addresses",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Address file (defaults to deployed-addresses-<chainId>.json).",
)
@click.option("--skip-accounts", is_flag=True)
@click.option("--skip-funding", is_flag=True)
@click.pass_context
def provision_cmd(
    ctx: click.Context, addresses: Path | None, skip_accounts: bool, skip_funding: bool
) -> None:
    config = _base_config(ctx, addresses_dir=get_addresses_dir())
    if skip_funding:
        config = config.replace(skip_funding=True)
    registry = _load_registry(addresses, config)

    async def _run() -> dict[str, Any]:
        roster = build_roster(config.agent_keys, config.initial_bankroll)
        funder = (
            account_from_key(config.primary_key, label="PRIVATE_KEY")
            if config.primary_key
            else None
        )
        provisioner = AgentProvisioner(
            Web3CallClient(registry, config.chain_id),
            min_gas_balance=config.min_gas_balance,
            funding_mode=config.effective_funding_mode,
            fund_amount=config.fund_amount,
            funder=funder,
        )
        accounts = [] if skip_accounts else await provisioner.ensure_accounts(roster)
        results = await provisioner.provision(roster)
        return {
            "accounts": [{"alias": r.alias, "status": r.status} for r in accounts],
            "agents": [
                {"alias": r.alias, "address": r.address, "status": r.status, "detail": r.detail}
                for r in results
            ],
        }

    try:
        _echo_json(asyncio.run(_run()))
    except (DeploymentError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command(name="patch-env", help="Write contract addresses into the env file.")
@click.option(
    "--addresses",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Address file to take contract addresses from.",
)
@click.option("--append-missing", is_flag=True, help="Append keys the file lacks.")
@click.argument("pairs", nargs=-1)
@click.pass_context
def patch_env_cmd(
    ctx: click.Context, addresses: Path | None, append_missing: bool, pairs: tuple[str, ...]
) -> None:
    updates: dict[str, str] = {}
    if addresses is not None or not pairs:
        config = _base_config(ctx, addresses_dir=get_addresses_dir())
        updates.update(contract_env_updates(_load_registry(addresses, config)))
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected KEY=VALUE, got {pair!r}")
        updates[key.strip()] = value

    try:
        result = patch_env_file(
            ctx.obj["env_file"], updates, append_missing=append_missing
        )
    except OSError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo_json(
        {
            "path": result.path,
            "updated": result.updated,
            "appended": result.appended,
            "missing": result.missing,
        }
    )


@cli.command(name="balances", help="Show native and SEAS balances of the deployer and agents.")
@click.option(
    "--addresses",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
)
@click.pass_context
def balances_cmd(ctx: click.Context, addresses: Path | None) -> None:
    config = _base_config(ctx, addresses_dir=get_addresses_dir())
    path = addresses or addresses_file_path(config.chain_id, config.addresses_dir)
    registry = AddressRegistry.load(path) if path.is_file() else AddressRegistry()
    client = Web3CallClient(registry, config.chain_id)

    wallets: list[tuple[str, str]] = []
    if config.primary_key:
        wallets.append(
            ("deployer", account_from_key(config.primary_key, label="PRIVATE_KEY").address)
        )
    for agent in build_roster(config.agent_keys, config.initial_bankroll):
        wallets.append((agent.alias, agent.address))

    async def _row(label: str, address: str) -> dict[str, Any]:
        row: dict[str, Any] = {"label": label, "address": address}
        row["native"] = format_units(await client.native_balance(address))
        if SEAS_TOKEN in registry:
            try:
                row["seas"] = format_units(await client.token_balance(SEAS_TOKEN, address))
            except CallRevertedError as exc:
                row["seas_error"] = str(exc)
        return row

    async def _run() -> list[dict[str, Any]]:
        return list(await asyncio.gather(*[_row(label, addr) for label, addr in wallets]))

    _echo_json(asyncio.run(_run()))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
