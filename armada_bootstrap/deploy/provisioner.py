from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from eth_account.signers.local import LocalAccount
from loguru import logger

from armada_bootstrap.core.clients.RemoteCallClient import RemoteCallClient
from armada_bootstrap.core.constants.contracts import (
    ACCOUNT_HP_INDEX,
    ACCOUNT_MAX_HP_INDEX,
    AGENT_CONTROLLER,
    MANTLE_ARMADA,
    SEAS_TOKEN,
)
from armada_bootstrap.core.errors import CallRevertedError
from armada_bootstrap.core.types import AgentRecord, FundingMode, StatusTuple
from armada_bootstrap.core.utils.units import format_units


class ProvisionStatus(StrEnum):
    REGISTERED = "REGISTERED"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    INSUFFICIENT_GAS = "INSUFFICIENT_GAS"
    FUNDING_FAILED = "FUNDING_FAILED"
    APPROVE_FAILED = "APPROVE_FAILED"
    REGISTER_FAILED = "REGISTER_FAILED"
    UNCONFIRMED = "UNCONFIRMED"
    ERROR = "ERROR"


class AccountStatus(StrEnum):
    CREATED = "CREATED"
    EXISTS = "EXISTS"
    INSUFFICIENT_GAS = "INSUFFICIENT_GAS"
    FAILED = "FAILED"


@dataclass(frozen=True)
class ProvisionResult:
    alias: str
    address: str
    status: ProvisionStatus
    detail: str = ""
    funded: bool = False

    @property
    def ok(self) -> bool:
        return self.status in (
            ProvisionStatus.REGISTERED,
            ProvisionStatus.ALREADY_REGISTERED,
        )

    @property
    def skipped(self) -> bool:
        return self.status == ProvisionStatus.ALREADY_REGISTERED


@dataclass(frozen=True)
class AccountResult:
    alias: str
    address: str
    status: AccountStatus
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status in (AccountStatus.CREATED, AccountStatus.EXISTS)


def account_exists(account: Any) -> bool:
    """True when an ``accounts(address)`` tuple has any hit points set."""
    if not account:
        return False
    return bool(account[ACCOUNT_HP_INDEX]) or bool(account[ACCOUNT_MAX_HP_INDEX])


class AgentProvisioner:
    """Brings each roster identity to the registered state.

    Identities are handled one after another and every mutating call is
    confirmed before the next; a failure ends that identity's run only.
    Re-running against an already provisioned roster submits nothing.
    """

    def __init__(
        self,
        client: RemoteCallClient,
        *,
        min_gas_balance: int,
        funding_mode: FundingMode = FundingMode.FAUCET,
        fund_amount: int = 0,
        funder: LocalAccount | None = None,
    ):
        if funding_mode in (FundingMode.MINT, FundingMode.TRANSFER) and funder is None:
            raise ValueError(f"funding mode {funding_mode} requires a funder account")
        self.client = client
        self.min_gas_balance = int(min_gas_balance)
        self.funding_mode = funding_mode
        self.fund_amount = int(fund_amount)
        self.funder = funder
        self.logger = logger.bind(phase="provisioning")

    async def _is_registered(self, agent: AgentRecord) -> bool:
        return bool(
            await self.client.call(AGENT_CONTROLLER, "isRegistered", [agent.address])
        )

    async def provision(self, roster: Sequence[AgentRecord]) -> list[ProvisionResult]:
        registered = await asyncio.gather(
            *[self._is_registered(agent) for agent in roster], return_exceptions=True
        )

        results: list[ProvisionResult] = []
        for agent, is_registered in zip(roster, registered, strict=True):
            log = self.logger.bind(agent=agent.alias)
            if isinstance(is_registered, Exception):
                log.error(f"{agent.alias}: registration check failed: {is_registered}")
                result = ProvisionResult(
                    agent.alias,
                    agent.address,
                    ProvisionStatus.ERROR,
                    f"isRegistered failed: {is_registered}",
                )
            elif is_registered:
                log.info(f"{agent.alias} already registered, skipping")
                result = ProvisionResult(
                    agent.alias, agent.address, ProvisionStatus.ALREADY_REGISTERED
                )
            else:
                try:
                    result = await self._provision_one(agent)
                except Exception as exc:
                    log.error(f"{agent.alias}: provisioning failed: {exc}")
                    result = ProvisionResult(
                        agent.alias, agent.address, ProvisionStatus.ERROR, str(exc)
                    )
            results.append(result)

        done = sum(1 for r in results if r.status == ProvisionStatus.REGISTERED)
        skipped = sum(1 for r in results if r.skipped)
        failed = sum(1 for r in results if not r.ok)
        self.logger.info(
            f"Provisioning finished: {done} registered, {skipped} skipped, {failed} failed"
        )
        return results

    async def _provision_one(self, agent: AgentRecord) -> ProvisionResult:
        log = self.logger.bind(agent=agent.alias)
        bankroll = agent.initial_bankroll

        def _result(status: ProvisionStatus, detail: str = "", funded: bool = False):
            return ProvisionResult(agent.alias, agent.address, status, detail, funded)

        native, tokens = await asyncio.gather(
            self.client.native_balance(agent.address),
            self.client.token_balance(SEAS_TOKEN, agent.address),
        )

        if native < self.min_gas_balance:
            detail = (
                f"native balance {format_units(native)} below "
                f"{format_units(self.min_gas_balance)} needed for gas"
            )
            log.warning(f"{agent.alias}: {detail}")
            return _result(ProvisionStatus.INSUFFICIENT_GAS, detail)

        funded = False
        if tokens < bankroll:
            log.info(
                f"{agent.alias}: SEAS balance {format_units(tokens)} below bankroll "
                f"{format_units(bankroll)}, funding via {self.funding_mode}"
            )
            ok, detail = await self._fund(agent)
            if not ok:
                log.warning(f"{agent.alias}: funding failed: {detail}")
                return _result(ProvisionStatus.FUNDING_FAILED, detail)
            funded = True

        controller = self.client.address_of(AGENT_CONTROLLER)
        try:
            await self.client.submit(
                SEAS_TOKEN, "approve", [controller, bankroll], signer=agent.wallet
            )
        except CallRevertedError as exc:
            log.warning(f"{agent.alias}: approve failed: {exc.reason}")
            return _result(ProvisionStatus.APPROVE_FAILED, exc.reason, funded)

        try:
            await self.client.submit(
                AGENT_CONTROLLER,
                "registerAgent",
                [int(agent.role), bankroll, agent.alias],
                signer=agent.wallet,
            )
        except CallRevertedError as exc:
            log.warning(f"{agent.alias}: registerAgent failed: {exc.reason}")
            return _result(ProvisionStatus.REGISTER_FAILED, exc.reason, funded)

        if not await self._is_registered(agent):
            log.warning(f"{agent.alias}: registerAgent confirmed but isRegistered is false")
            return _result(
                ProvisionStatus.UNCONFIRMED,
                "isRegistered still false after registration",
                funded,
            )

        log.info(
            f"{agent.alias} registered (type {int(agent.role)}, bankroll "
            f"{format_units(bankroll)} SEAS)"
        )
        return _result(ProvisionStatus.REGISTERED, funded=funded)

    async def _fund(self, agent: AgentRecord) -> StatusTuple:
        if self.funding_mode == FundingMode.NONE:
            return (False, "token funding is disabled")

        try:
            if self.funding_mode == FundingMode.FAUCET:
                await self.client.submit(
                    SEAS_TOKEN, "claimFaucet", [], signer=agent.wallet
                )
            else:
                await self.client.submit(
                    SEAS_TOKEN,
                    str(self.funding_mode),
                    [agent.address, self.fund_amount],
                    signer=self.funder,
                )
        except CallRevertedError as exc:
            return (False, exc.reason)

        balance = await self.client.token_balance(SEAS_TOKEN, agent.address)
        if balance < agent.initial_bankroll:
            return (
                False,
                f"balance {format_units(balance)} still below bankroll "
                f"{format_units(agent.initial_bankroll)} after funding",
            )
        return (True, f"balance now {format_units(balance)}")

    async def ensure_accounts(
        self, roster: Sequence[AgentRecord]
    ) -> list[AccountResult]:
        """Create the game account of every identity that does not have one yet."""
        results: list[AccountResult] = []
        for agent in roster:
            log = self.logger.bind(agent=agent.alias)
            try:
                account, native = await asyncio.gather(
                    self.client.call(MANTLE_ARMADA, "accounts", [agent.address]),
                    self.client.native_balance(agent.address),
                )
                if account_exists(account):
                    log.info(f"{agent.alias}: game account already exists")
                    results.append(
                        AccountResult(agent.alias, agent.address, AccountStatus.EXISTS)
                    )
                    continue

                if native < self.min_gas_balance:
                    detail = f"native balance {format_units(native)} too low for gas"
                    log.warning(f"{agent.alias}: {detail}")
                    results.append(
                        AccountResult(
                            agent.alias,
                            agent.address,
                            AccountStatus.INSUFFICIENT_GAS,
                            detail,
                        )
                    )
                    continue

                await self.client.submit(
                    MANTLE_ARMADA,
                    "createAccount",
                    [agent.account_name, agent.is_pirate, agent.location],
                    signer=agent.wallet,
                )
                faction = "Pirate" if agent.is_pirate else "Navy"
                log.info(
                    f"{agent.alias}: game account created ({faction}, loc {agent.location})"
                )
                results.append(
                    AccountResult(agent.alias, agent.address, AccountStatus.CREATED)
                )
            except Exception as exc:
                log.warning(f"{agent.alias}: game account creation failed: {exc}")
                results.append(
                    AccountResult(
                        agent.alias, agent.address, AccountStatus.FAILED, str(exc)
                    )
                )
        return results
