from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from eth_account.signers.local import LocalAccount

if TYPE_CHECKING:
    from armada_bootstrap.deploy.registry import AddressRegistry


@dataclass(frozen=True)
class CallReceipt:
    tx_hash: str
    block_number: int | None = None
    gas_used: int | None = None


class RemoteCallClient(ABC):
    """Everything the orchestrator needs from the ledger.

    Contracts are addressed by logical name and resolved through the shared
    ``AddressRegistry``. ``submit`` and ``deploy`` only return once the
    transaction is confirmed; a rejected call raises ``CallRevertedError``.
    """

    def __init__(self, registry: AddressRegistry):
        self.registry = registry

    def address_of(self, contract: str) -> str:
        return self.registry.get(contract)

    @property
    @abstractmethod
    def chain_id(self) -> int:
        pass

    @abstractmethod
    async def submit(
        self,
        contract: str,
        method: str,
        args: list[Any] | tuple[Any, ...] = (),
        *,
        signer: LocalAccount,
    ) -> CallReceipt:
        pass

    @abstractmethod
    async def call(
        self, contract: str, method: str, args: list[Any] | tuple[Any, ...] = ()
    ) -> Any:
        pass

    @abstractmethod
    async def native_balance(self, address: str) -> int:
        pass

    @abstractmethod
    async def deploy(
        self,
        contract: str,
        constructor_args: list[Any] | tuple[Any, ...] = (),
        *,
        signer: LocalAccount,
    ) -> str:
        pass

    async def token_balance(self, token: str, address: str) -> int:
        return int(await self.call(token, "balanceOf", [address]))
