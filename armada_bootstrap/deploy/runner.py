from __future__ import annotations

import asyncio
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from eth_account.signers.local import LocalAccount
from loguru import logger

from armada_bootstrap.core.clients.RemoteCallClient import RemoteCallClient
from armada_bootstrap.core.clients.Web3CallClient import Web3CallClient
from armada_bootstrap.core.constants.contracts import (
    ARMADA_TOKEN,
    BATTLE_PASS,
    DEFAULT_ROSTER,
    DEFAULT_UPGRADES,
    DEPLOY_ORDER,
    MANTLE_ARMADA,
    PROVISIONING_CONTRACTS,
    SHIP_NFT,
    WIRING_PLAN,
)
from armada_bootstrap.core.errors import ConfigurationError, ContractDeployError
from armada_bootstrap.core.types import (
    DEPLOYER,
    AgentRecord,
    ContractSpec,
    Ref,
    RosterSlot,
    UpgradeDefinition,
    WiringStep,
)
from armada_bootstrap.core.utils.units import format_units
from armada_bootstrap.core.utils.wallets import account_from_key
from armada_bootstrap.deploy.catalog import SeedOutcome, seed_catalog
from armada_bootstrap.deploy.env_file import (
    EnvPatchResult,
    contract_env_updates,
    patch_env_file,
)
from armada_bootstrap.deploy.provisioner import (
    AccountResult,
    AgentProvisioner,
    ProvisionResult,
)
from armada_bootstrap.deploy.registry import AddressRegistry
from armada_bootstrap.deploy.roster import build_roster
from armada_bootstrap.deploy.settings import DeploymentConfig
from armada_bootstrap.deploy.wiring import (
    WiringOrchestrator,
    WiringOutcome,
    select_steps,
    validate_plan,
)

T = TypeVar("T")

ClientFactory = Callable[[AddressRegistry], RemoteCallClient]

# (label, contract, method, args) read-only checks logged after setup.
_DIAGNOSTICS: tuple[tuple[str, str, str, tuple[Any, ...]], ...] = (
    ("ArmadaToken minter MantleArmada", ARMADA_TOKEN, "checkMinter", (Ref(MANTLE_ARMADA),)),
    ("ArmadaToken minter BattlePass", ARMADA_TOKEN, "checkMinter", (Ref(BATTLE_PASS),)),
    ("ArmadaToken minter ShipNFT", ARMADA_TOKEN, "checkMinter", (Ref(SHIP_NFT),)),
    ("MantleArmada next upgrade id", MANTLE_ARMADA, "nextUpgradeId", ()),
)


@dataclass
class PhaseReport:
    name: str
    enabled: bool = True
    passed: int = 0
    failed: int = 0
    skipped: int = 0


@dataclass
class DeploymentSummary:
    chain_id: int
    deployer: str
    addresses: dict[str, str] = field(default_factory=dict)
    deployed: list[str] = field(default_factory=list)
    attached: list[str] = field(default_factory=list)
    phases: dict[str, PhaseReport] = field(default_factory=dict)
    wiring: list[WiringOutcome] = field(default_factory=list)
    seeded: list[SeedOutcome] = field(default_factory=list)
    accounts: list[AccountResult] = field(default_factory=list)
    provisioning: list[ProvisionResult] = field(default_factory=list)
    addresses_file: Path | None = None
    env_patch: EnvPatchResult | None = None

    def add_phase(self, report: PhaseReport) -> PhaseReport:
        self.phases[report.name] = report
        return report


def pick_highest_balance(balances: Sequence[tuple[T, int]]) -> tuple[T, int]:
    """Entry with the largest balance; on a tie the earlier entry wins."""
    if not balances:
        raise ValueError("No candidates to choose from")
    best = balances[0]
    for candidate in balances[1:]:
        if candidate[1] > best[1]:
            best = candidate
    return best


async def select_deployer(
    candidates: Sequence[LocalAccount], client: RemoteCallClient
) -> tuple[LocalAccount, int]:
    unique: list[LocalAccount] = []
    seen: set[str] = set()
    for account in candidates:
        if account.address not in seen:
            seen.add(account.address)
            unique.append(account)

    balances = await asyncio.gather(
        *[client.native_balance(account.address) for account in unique]
    )
    return pick_highest_balance(list(zip(unique, balances, strict=True)))


def plan_deployments(
    targets: Collection[str],
    available: Collection[str],
    order: Sequence[ContractSpec] = DEPLOY_ORDER,
) -> list[ContractSpec]:
    """Targets in deploy order, checked so every constructor reference resolves."""
    have = set(available)
    planned: list[ContractSpec] = []
    for spec in order:
        if spec.name not in targets:
            continue
        if spec.name not in have:
            missing = [ref for ref in spec.references() if ref not in have]
            if missing:
                raise ConfigurationError(
                    f"{spec.name} needs {', '.join(missing)}, which is neither in "
                    "the baseline nor deployed before it"
                )
            have.add(spec.name)
        planned.append(spec)
    return planned


class DeploymentRunner:
    """Deploy-or-attach, wire, seed, provision and persist, in that order.

    Fatal problems raise ``DeploymentError`` before anything is persisted;
    per-item problems (catalog entries, single agents) are reported in the
    returned ``DeploymentSummary``.
    """

    def __init__(
        self,
        config: DeploymentConfig,
        *,
        client_factory: ClientFactory | None = None,
        wiring_plan: Sequence[WiringStep] = WIRING_PLAN,
        upgrades: Sequence[UpgradeDefinition] = DEFAULT_UPGRADES,
        roster_slots: Sequence[RosterSlot] = DEFAULT_ROSTER,
    ):
        self.config = config
        self.registry = AddressRegistry(config.baseline)
        self.client = (
            client_factory(self.registry)
            if client_factory is not None
            else Web3CallClient(self.registry, config.chain_id)
        )
        self.wiring_plan = list(wiring_plan)
        self.upgrades = list(upgrades)
        self.roster_slots = list(roster_slots)
        self.logger = logger.bind(phase="runner")

    def _primary_account(self) -> LocalAccount:
        if not self.config.primary_key:
            raise ConfigurationError("PRIVATE_KEY is not set; a deployer key is required")
        return account_from_key(self.config.primary_key, label="PRIVATE_KEY")

    @property
    def _provisioning_enabled(self) -> bool:
        return not (self.config.skip_accounts and self.config.skip_registration)

    def _preflight(
        self, roster: Sequence[AgentRecord]
    ) -> tuple[list[ContractSpec], list[WiringStep]]:
        cfg = self.config
        deployments = plan_deployments(cfg.contracts, self.registry.names)
        available = set(self.registry.names) | {spec.name for spec in deployments}

        steps = select_steps(self.wiring_plan, cfg.wiring_steps)
        if not cfg.skip_wiring:
            validate_plan(steps, available)

        if not cfg.skip_upgrades and self.upgrades and MANTLE_ARMADA not in available:
            raise ConfigurationError("Catalog seeding needs MantleArmada")

        if roster and self._provisioning_enabled:
            missing = [name for name in PROVISIONING_CONTRACTS if name not in available]
            if missing:
                raise ConfigurationError(
                    f"Agent provisioning needs {', '.join(missing)}"
                )

        if cfg.env_file is not None and not Path(cfg.env_file).is_file():
            raise FileNotFoundError(f"Env file not found: {cfg.env_file}")

        return deployments, steps

    async def run(self) -> DeploymentSummary:
        cfg = self.config
        primary = self._primary_account()
        roster = build_roster(cfg.agent_keys, cfg.initial_bankroll, self.roster_slots)
        deployments, steps = self._preflight(roster)

        deployer, balance = await select_deployer(
            [primary, *(agent.wallet for agent in roster)], self.client
        )
        self.logger.info(
            f"Deployer {deployer.address} on chain {cfg.chain_id} "
            f"(balance {format_units(balance)})"
        )
        summary = DeploymentSummary(chain_id=cfg.chain_id, deployer=deployer.address)

        await self._deploy_or_attach(deployments, deployer, summary)
        self.registry.check_collisions()

        wiring_report = summary.add_phase(
            PhaseReport("wiring", enabled=not cfg.skip_wiring)
        )
        if cfg.skip_wiring:
            self.logger.info("Skipping wiring (SKIP_WIRING)")
            wiring_report.skipped = len(steps)
        else:
            summary.wiring = await WiringOrchestrator(self.client, deployer).run(steps)
            wiring_report.passed = len(summary.wiring)

        catalog_report = summary.add_phase(
            PhaseReport("catalog", enabled=not cfg.skip_upgrades)
        )
        if cfg.skip_upgrades:
            self.logger.info("Skipping upgrade catalog (SKIP_UPGRADES)")
            catalog_report.skipped = len(self.upgrades)
        else:
            summary.seeded = await seed_catalog(self.client, deployer, self.upgrades)
            catalog_report.passed = sum(1 for _, (ok, _m) in summary.seeded if ok)
            catalog_report.failed = len(summary.seeded) - catalog_report.passed

        await self._log_diagnostics()

        await self._provision(roster, deployer, summary)

        self._persist(deployer, roster, summary)
        summary.addresses = self.registry.as_dict()
        self.logger.info(
            f"Deployment complete: {len(summary.deployed)} deployed, "
            f"{len(summary.attached)} attached"
        )
        return summary

    async def _deploy_or_attach(
        self,
        deployments: Sequence[ContractSpec],
        deployer: LocalAccount,
        summary: DeploymentSummary,
    ) -> None:
        report = summary.add_phase(PhaseReport("deploy"))
        total = len(deployments)
        for index, spec in enumerate(deployments, start=1):
            if spec.name in self.registry:
                self.logger.info(
                    f"[{index}/{total}] Attaching {spec.name} at {self.registry.get(spec.name)}"
                )
                summary.attached.append(spec.name)
                report.skipped += 1
                continue

            args = [self._constructor_arg(arg, deployer) for arg in spec.constructor_args]
            self.logger.info(f"[{index}/{total}] Deploying {spec.name}...")
            try:
                address = await self.client.deploy(spec.name, args, signer=deployer)
            except Exception as exc:
                self.logger.error(f"Deploying {spec.name} failed: {exc}")
                raise ContractDeployError(spec.name, str(exc)) from exc

            self.registry.set(spec.name, address)
            summary.deployed.append(spec.name)
            report.passed += 1
            self.logger.info(f"{spec.name}: {self.registry.get(spec.name)}")

    def _constructor_arg(self, arg: Any, deployer: LocalAccount) -> Any:
        if arg is DEPLOYER:
            return deployer.address
        if isinstance(arg, Ref):
            return self.registry.get(arg.name)
        return arg

    async def _log_diagnostics(self) -> None:
        checks = []
        for label, contract, method, args in _DIAGNOSTICS:
            names = [contract, *(a.name for a in args if isinstance(a, Ref))]
            if all(name in self.registry for name in names):
                resolved = [
                    self.registry.get(a.name) if isinstance(a, Ref) else a for a in args
                ]
                checks.append((label, self.client.call(contract, method, resolved)))

        if not checks:
            return
        values = await asyncio.gather(*[c for _, c in checks], return_exceptions=True)
        for (label, _), value in zip(checks, values, strict=True):
            if isinstance(value, Exception):
                self.logger.warning(f"Check {label!r} failed: {value}")
            else:
                self.logger.info(f"Check {label}: {value}")

    async def _provision(
        self,
        roster: Sequence[AgentRecord],
        deployer: LocalAccount,
        summary: DeploymentSummary,
    ) -> None:
        cfg = self.config
        accounts_report = summary.add_phase(
            PhaseReport("accounts", enabled=not cfg.skip_accounts)
        )
        provision_report = summary.add_phase(
            PhaseReport("provisioning", enabled=not cfg.skip_registration)
        )
        if not roster:
            self.logger.info("No agent keys configured, skipping agent setup")
            return

        provisioner = AgentProvisioner(
            self.client,
            min_gas_balance=cfg.min_gas_balance,
            funding_mode=cfg.effective_funding_mode,
            fund_amount=cfg.fund_amount,
            funder=deployer,
        )

        if cfg.skip_accounts:
            accounts_report.skipped = len(roster)
        else:
            summary.accounts = await provisioner.ensure_accounts(roster)
            accounts_report.passed = sum(1 for r in summary.accounts if r.ok)
            accounts_report.failed = len(summary.accounts) - accounts_report.passed

        if cfg.skip_registration:
            provision_report.skipped = len(roster)
        else:
            summary.provisioning = await provisioner.provision(roster)
            provision_report.skipped = sum(1 for r in summary.provisioning if r.skipped)
            provision_report.failed = sum(1 for r in summary.provisioning if not r.ok)
            provision_report.passed = (
                len(summary.provisioning)
                - provision_report.skipped
                - provision_report.failed
            )

    def _persist(
        self,
        deployer: LocalAccount,
        roster: Sequence[AgentRecord],
        summary: DeploymentSummary,
    ) -> None:
        cfg = self.config
        summary.addresses_file = self.registry.persist(
            cfg.chain_id,
            cfg.addresses_dir,
            network=cfg.network,
            deployer=deployer.address,
            agents=roster,
        )
        if cfg.env_file is not None:
            summary.env_patch = patch_env_file(
                cfg.env_file,
                contract_env_updates(self.registry),
                append_missing=cfg.append_missing_env_keys,
            )
