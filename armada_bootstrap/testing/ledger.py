"""In-memory stand-in for the chain, used as a pytest plugin.

``FakeLedger`` implements ``RemoteCallClient`` on plain dicts: native and
SEAS balances, allowances, agent registrations, game accounts, minters and
the upgrade catalog. Every mutating call is recorded in ``submitted`` so
tests can assert on what was sent and in which order.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address

from armada_bootstrap.core.clients.RemoteCallClient import CallReceipt, RemoteCallClient
from armada_bootstrap.core.constants.chains import CHAIN_ID_HARDHAT
from armada_bootstrap.core.constants.contracts import ALL_CONTRACTS
from armada_bootstrap.core.errors import CallRevertedError
from armada_bootstrap.core.types import AgentRecord
from armada_bootstrap.core.utils.units import to_raw_units
from armada_bootstrap.core.utils.wallets import account_from_key
from armada_bootstrap.deploy.registry import AddressRegistry
from armada_bootstrap.deploy.roster import build_roster

EMPTY_ACCOUNT: tuple[Any, ...] = ("", False) + (0,) * 17

PRIMARY_KEY = "0x" + "aa" * 32
AGENT_KEYS = tuple("0x" + f"{i + 1:064x}" for i in range(5))


@dataclass(frozen=True)
class SubmittedCall:
    contract: str
    method: str
    args: tuple[Any, ...]
    sender: str


def fake_address(n: int) -> str:
    return to_checksum_address(f"0x{0xC0DE0000 + n:040x}")


def full_baseline() -> dict[str, str]:
    return {name: fake_address(i + 1) for i, name in enumerate(ALL_CONTRACTS)}


class FakeLedger(RemoteCallClient):
    def __init__(
        self,
        registry: AddressRegistry | None = None,
        *,
        chain_id: int = CHAIN_ID_HARDHAT,
        faucet_amount: int = to_raw_units("1000"),
    ):
        super().__init__(registry if registry is not None else AddressRegistry())
        self._chain_id = chain_id
        self.faucet_amount = faucet_amount
        self.native: dict[str, int] = {}
        self.tokens: dict[str, int] = {}
        self.allowances: dict[tuple[str, str], int] = {}
        self.registered: set[str] = set()
        self.accounts: dict[str, tuple[Any, ...]] = {}
        self.minters: set[str] = set()
        self.upgrades: list[tuple[Any, ...]] = []
        self.submitted: list[SubmittedCall] = []
        self.deployed: list[tuple[str, tuple[Any, ...]]] = []
        self.failing_reads: set[tuple[str, str]] = set()
        # registerAgent succeeds on-chain but isRegistered stays false
        self.registration_sticks = True
        self._reverts: list[tuple[str, str, str, Callable[[SubmittedCall], bool]]] = []
        self._next_address = 0x100

    def attach(self, registry: AddressRegistry) -> FakeLedger:
        """Bind to the runner's registry (usable directly as a client factory)."""
        self.registry = registry
        return self

    @property
    def chain_id(self) -> int:
        return self._chain_id

    # --- test setup helpers ---

    def fund(self, address: str, *, native: int = 0, tokens: int = 0) -> None:
        self.native[address] = self.native.get(address, 0) + native
        self.tokens[address] = self.tokens.get(address, 0) + tokens

    def revert_on(
        self,
        contract: str,
        method: str,
        reason: str = "execution reverted",
        *,
        when: Callable[[SubmittedCall], bool] | None = None,
    ) -> None:
        self._reverts.append((contract, method, reason, when or (lambda _call: True)))

    def calls(self, method: str | None = None) -> list[SubmittedCall]:
        if method is None:
            return list(self.submitted)
        return [c for c in self.submitted if c.method == method]

    # --- RemoteCallClient ---

    async def native_balance(self, address: str) -> int:
        return self.native.get(address, 0)

    async def deploy(
        self,
        contract: str,
        constructor_args: list[Any] | tuple[Any, ...] = (),
        *,
        signer: LocalAccount,
    ) -> str:
        call = SubmittedCall(contract, "constructor", tuple(constructor_args), signer.address)
        self.submitted.append(call)
        self._maybe_revert(call)
        self._next_address += 1
        self.deployed.append((contract, tuple(constructor_args)))
        return fake_address(self._next_address)

    async def submit(
        self,
        contract: str,
        method: str,
        args: list[Any] | tuple[Any, ...] = (),
        *,
        signer: LocalAccount,
    ) -> CallReceipt:
        self.address_of(contract)
        call = SubmittedCall(contract, method, tuple(args), signer.address)
        self.submitted.append(call)
        self._maybe_revert(call)
        handler = getattr(self, f"_on_{method}", None)
        if handler is not None:
            handler(call)
        n = len(self.submitted)
        return CallReceipt(tx_hash=f"0x{n:064x}", block_number=n, gas_used=21000)

    async def call(
        self, contract: str, method: str, args: list[Any] | tuple[Any, ...] = ()
    ) -> Any:
        self.address_of(contract)
        if (contract, method) in self.failing_reads:
            raise CallRevertedError(contract, method, "rpc unavailable")
        if method == "isRegistered":
            return args[0] in self.registered
        if method == "balanceOf":
            return self.tokens.get(args[0], 0)
        if method == "accounts":
            return self.accounts.get(args[0], EMPTY_ACCOUNT)
        if method == "checkMinter":
            return args[0] in self.minters
        if method == "nextUpgradeId":
            return len(self.upgrades)
        raise CallRevertedError(contract, method, "no such view in FakeLedger")

    # --- contract behaviour ---

    def _maybe_revert(self, call: SubmittedCall) -> None:
        for contract, method, reason, when in self._reverts:
            if call.contract == contract and call.method == method and when(call):
                raise CallRevertedError(call.contract, call.method, reason)

    def _on_approve(self, call: SubmittedCall) -> None:
        spender, amount = call.args
        self.allowances[(call.sender, spender)] = int(amount)

    def _on_registerAgent(self, call: SubmittedCall) -> None:
        _agent_type, bankroll, _alias = call.args
        controller = self.address_of("AgentController")
        if call.sender in self.registered:
            raise CallRevertedError(call.contract, call.method, "Already registered")
        if self.allowances.get((call.sender, controller), 0) < bankroll:
            raise CallRevertedError(call.contract, call.method, "Insufficient allowance")
        if self.tokens.get(call.sender, 0) < bankroll:
            raise CallRevertedError(call.contract, call.method, "Insufficient balance")
        self.tokens[call.sender] -= bankroll
        self.allowances[(call.sender, controller)] -= bankroll
        if self.registration_sticks:
            self.registered.add(call.sender)

    def _on_claimFaucet(self, call: SubmittedCall) -> None:
        self.tokens[call.sender] = self.tokens.get(call.sender, 0) + self.faucet_amount

    def _on_mint(self, call: SubmittedCall) -> None:
        to, amount = call.args
        self.tokens[to] = self.tokens.get(to, 0) + int(amount)

    def _on_transfer(self, call: SubmittedCall) -> None:
        to, amount = call.args
        if self.tokens.get(call.sender, 0) < amount:
            raise CallRevertedError(call.contract, call.method, "Insufficient balance")
        self.tokens[call.sender] -= amount
        self.tokens[to] = self.tokens.get(to, 0) + int(amount)

    def _on_createAccount(self, call: SubmittedCall) -> None:
        name, is_pirate, location = call.args
        account = list(EMPTY_ACCOUNT)
        account[0], account[1] = name, is_pirate
        account[4] = account[5] = 100
        account[11] = location
        self.accounts[call.sender] = tuple(account)

    def _on_addUpgrade(self, call: SubmittedCall) -> None:
        self.upgrades.append(call.args)

    def _on_addMinter(self, call: SubmittedCall) -> None:
        self.minters.add(call.args[0])


@pytest.fixture
def primary_account() -> LocalAccount:
    return account_from_key(PRIMARY_KEY)


@pytest.fixture
def bankroll() -> int:
    return to_raw_units("1000")


@pytest.fixture
def roster(bankroll: int) -> list[AgentRecord]:
    return build_roster(AGENT_KEYS, bankroll)


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger(AddressRegistry(full_baseline()))
