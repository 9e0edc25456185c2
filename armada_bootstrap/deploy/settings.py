from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from armada_bootstrap.core.constants.base import (
    DEFAULT_AGENT_INITIAL_BANKROLL,
    DEFAULT_AGENT_SEAS_FUND,
    DEFAULT_MIN_BANKROLL,
    DEFAULT_MIN_GAS_BALANCE,
)
from armada_bootstrap.core.constants.chains import (
    CHAIN_ID_TO_NETWORK,
    NETWORK_TO_CHAIN_ID,
)
from armada_bootstrap.core.constants.contracts import (
    ALL_CONTRACTS,
    BASELINE_ADDRESSES,
    DEFAULT_ROSTER,
)
from armada_bootstrap.core.errors import ConfigurationError
from armada_bootstrap.core.types import FundingMode
from armada_bootstrap.core.utils.units import to_raw_units
from armada_bootstrap.deploy.roster import agent_key_env_name

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(env: Mapping[str, str], key: str) -> bool:
    return str(env.get(key, "")).strip().lower() in _TRUTHY


def _amount(env: Mapping[str, str], key: str, default: str) -> int:
    raw = str(env.get(key) or default).strip()
    try:
        return to_raw_units(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key}={raw!r} is not a valid amount") from exc


def _chain_id(env: Mapping[str, str]) -> int:
    explicit = str(env.get("CHAIN_ID", "")).strip()
    if explicit:
        try:
            return int(explicit)
        except ValueError as exc:
            raise ConfigurationError(f"CHAIN_ID={explicit!r} is not an integer") from exc

    network = str(env.get("NETWORK") or "testnet").strip().lower()
    if network not in NETWORK_TO_CHAIN_ID:
        raise ConfigurationError(
            f"Unknown NETWORK {network!r}; expected one of {sorted(NETWORK_TO_CHAIN_ID)}"
        )
    return NETWORK_TO_CHAIN_ID[network]


@dataclass(frozen=True)
class DeploymentConfig:
    chain_id: int
    primary_key: str | None = field(default=None, repr=False)
    agent_keys: tuple[str | None, ...] = field(default=(), repr=False)
    min_gas_balance: int = to_raw_units(DEFAULT_MIN_GAS_BALANCE)
    min_bankroll: int = to_raw_units(DEFAULT_MIN_BANKROLL)
    initial_bankroll: int = to_raw_units(DEFAULT_AGENT_INITIAL_BANKROLL)
    fund_amount: int = to_raw_units(DEFAULT_AGENT_SEAS_FUND)
    funding_mode: FundingMode = FundingMode.FAUCET
    skip_wiring: bool = False
    skip_upgrades: bool = False
    skip_funding: bool = False
    skip_accounts: bool = False
    skip_registration: bool = False
    append_missing_env_keys: bool = False
    baseline: Mapping[str, str] = field(default_factory=dict)
    contracts: tuple[str, ...] = ALL_CONTRACTS
    wiring_steps: tuple[str, ...] | None = None
    env_file: Path | None = None
    addresses_dir: Path = Path(".")

    def __post_init__(self) -> None:
        if self.initial_bankroll < self.min_bankroll:
            raise ConfigurationError(
                "AGENT_INITIAL_BANKROLL must be at least MIN_BANKROLL"
            )
        unknown = [name for name in self.contracts if name not in ALL_CONTRACTS]
        if unknown:
            raise ConfigurationError(f"Unknown contract(s): {', '.join(unknown)}")

    @property
    def network(self) -> str:
        return CHAIN_ID_TO_NETWORK.get(self.chain_id, str(self.chain_id))

    @property
    def effective_funding_mode(self) -> FundingMode:
        return FundingMode.NONE if self.skip_funding else self.funding_mode

    def replace(self, **changes: Any) -> DeploymentConfig:
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls, env: Mapping[str, str], **overrides: Any) -> DeploymentConfig:
        """Build a config from environment-style key/value pairs.

        ``overrides`` win over anything read from *env* (used by the CLI
        flags).
        """
        chain_id = _chain_id(env)

        mode_raw = str(env.get("FUNDING_MODE") or FundingMode.FAUCET).strip().lower()
        try:
            funding_mode = FundingMode(mode_raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"FUNDING_MODE={mode_raw!r}; expected one of {[m.value for m in FundingMode]}"
            ) from exc

        primary_key = str(env.get("PRIVATE_KEY") or "").strip() or None
        agent_keys = tuple(
            (str(env.get(agent_key_env_name(i)) or "").strip() or None)
            for i in range(len(DEFAULT_ROSTER))
        )

        values: dict[str, Any] = {
            "chain_id": chain_id,
            "primary_key": primary_key,
            "agent_keys": agent_keys,
            "min_gas_balance": _amount(env, "MIN_GAS_BALANCE", DEFAULT_MIN_GAS_BALANCE),
            "min_bankroll": _amount(env, "MIN_BANKROLL", DEFAULT_MIN_BANKROLL),
            "initial_bankroll": _amount(
                env, "AGENT_INITIAL_BANKROLL", DEFAULT_AGENT_INITIAL_BANKROLL
            ),
            "fund_amount": _amount(env, "AGENT_SEAS_FUND", DEFAULT_AGENT_SEAS_FUND),
            "funding_mode": funding_mode,
            "skip_wiring": _flag(env, "SKIP_WIRING"),
            "skip_upgrades": _flag(env, "SKIP_UPGRADES"),
            "skip_funding": _flag(env, "SKIP_FUNDING"),
            "skip_accounts": _flag(env, "SKIP_ACCOUNTS"),
            "skip_registration": _flag(env, "SKIP_REGISTRATION"),
            "append_missing_env_keys": _flag(env, "ENV_APPEND_MISSING"),
            "baseline": dict(BASELINE_ADDRESSES.get(chain_id, {})),
        }
        values.update(overrides)
        return cls(**values)
