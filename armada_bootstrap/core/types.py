from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import Any, Final

from eth_account.signers.local import LocalAccount

StatusTuple = tuple[bool, str]


@dataclass(frozen=True)
class Ref:
    """Placeholder for another contract's address, resolved through the registry."""

    name: str

    def __str__(self) -> str:
        return self.name


class _DeployerAddress:
    def __repr__(self) -> str:
        return "DEPLOYER"


# Resolved to the selected deployer's address (treasury arguments).
DEPLOYER: Final = _DeployerAddress()


@dataclass(frozen=True)
class ContractSpec:
    name: str
    constructor_args: tuple[Any, ...] = ()

    def references(self) -> tuple[str, ...]:
        return tuple(arg.name for arg in self.constructor_args if isinstance(arg, Ref))


@dataclass(frozen=True)
class WiringStep:
    key: str
    source: str
    operation: str
    args: tuple[Any, ...] = ()

    def references(self) -> tuple[str, ...]:
        refs = [arg.name for arg in self.args if isinstance(arg, Ref)]
        return (self.source, *refs)

    def describe(self) -> str:
        rendered = ", ".join(
            str(arg) if isinstance(arg, Ref) else repr(arg) for arg in self.args
        )
        return f"{self.source}.{self.operation}({rendered})"


@dataclass(frozen=True)
class UpgradeDefinition:
    name: str
    cost: int
    gpm_bonus: int = 0
    max_hp_bonus: int = 0
    speed_bonus: int = 0
    attack_bonus: int = 0
    defense_bonus: int = 0
    max_crew_bonus: int = 0

    def as_args(self) -> list[Any]:
        return [
            self.name,
            self.cost,
            self.gpm_bonus,
            self.max_hp_bonus,
            self.speed_bonus,
            self.attack_bonus,
            self.defense_bonus,
            self.max_crew_bonus,
        ]


class AgentType(IntEnum):
    AGGRESSIVE_RAIDER = 0
    DEFENSIVE_TRADER = 1
    ADAPTIVE_LEARNER = 2
    GUILD_COORDINATOR = 3
    BALANCED_ADMIRAL = 4


class FundingMode(StrEnum):
    FAUCET = "faucet"
    TRANSFER = "transfer"
    MINT = "mint"
    NONE = "none"


@dataclass(frozen=True)
class RosterSlot:
    alias: str
    role: AgentType
    location: int
    is_pirate: bool


@dataclass(frozen=True)
class AgentRecord:
    index: int
    alias: str
    wallet: LocalAccount = field(repr=False)
    role: AgentType
    initial_bankroll: int
    location: int
    is_pirate: bool

    @property
    def address(self) -> str:
        return self.wallet.address

    @property
    def account_name(self) -> str:
        # MantleArmada caps boat names at 12 characters.
        return self.alias[:12]
