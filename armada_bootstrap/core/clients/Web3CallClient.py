from __future__ import annotations

from typing import TYPE_CHECKING, Any

from eth_account.signers.local import LocalAccount
from loguru import logger
from web3 import AsyncWeb3
from web3.exceptions import Web3Exception

from armada_bootstrap.core.clients.RemoteCallClient import CallReceipt, RemoteCallClient
from armada_bootstrap.core.constants.armada_abi import CONTRACT_ABIS
from armada_bootstrap.core.errors import CallRevertedError
from armada_bootstrap.core.utils.abi_caster import cast_args, get_function_inputs
from armada_bootstrap.core.utils.artifacts import ArtifactStore
from armada_bootstrap.core.utils.contracts import deploy_contract
from armada_bootstrap.core.utils.transaction import (
    GasEstimationError,
    TransactionRevertedError,
    encode_call,
    make_sign_callback,
    sign_and_send_transaction,
)
from armada_bootstrap.core.utils.web3 import web3_from_chain_id

if TYPE_CHECKING:
    from armada_bootstrap.deploy.registry import AddressRegistry

_SUBMIT_ERRORS = (
    TransactionRevertedError,
    GasEstimationError,
    Web3Exception,
    ValueError,
)


class Web3CallClient(RemoteCallClient):
    def __init__(
        self,
        registry: AddressRegistry,
        chain_id: int,
        artifacts: ArtifactStore | None = None,
    ):
        super().__init__(registry)
        self._chain_id = int(chain_id)
        self.artifacts = artifacts or ArtifactStore()
        self.logger = logger.bind(client=self.__class__.__name__)

    @property
    def chain_id(self) -> int:
        return self._chain_id

    def _abi(self, contract: str) -> list[dict[str, Any]]:
        abi = self.artifacts.abi_or_none(contract)
        if abi is not None:
            return abi
        if contract not in CONTRACT_ABIS:
            raise ValueError(f"No ABI known for contract {contract}")
        return CONTRACT_ABIS[contract]

    def _cast(
        self, abi: list[dict[str, Any]], method: str, args: list[Any] | tuple[Any, ...]
    ) -> list[Any]:
        inputs = get_function_inputs(abi, method, len(args))
        if inputs is None:
            return list(args)
        return cast_args(list(args), inputs)

    async def submit(
        self,
        contract: str,
        method: str,
        args: list[Any] | tuple[Any, ...] = (),
        *,
        signer: LocalAccount,
    ) -> CallReceipt:
        target = self.address_of(contract)
        abi = self._abi(contract)
        self.logger.debug(f"{contract}.{method} from {signer.address}")
        try:
            transaction = await encode_call(
                target=target,
                abi=abi,
                fn_name=method,
                args=self._cast(abi, method, args),
                from_address=signer.address,
                chain_id=self._chain_id,
            )
            tx_hash, receipt = await sign_and_send_transaction(transaction, signer)
        except _SUBMIT_ERRORS as exc:
            raise CallRevertedError(contract, method, str(exc)) from exc

        return CallReceipt(
            tx_hash=tx_hash,
            block_number=receipt.get("blockNumber"),
            gas_used=receipt.get("gasUsed"),
        )

    async def call(
        self, contract: str, method: str, args: list[Any] | tuple[Any, ...] = ()
    ) -> Any:
        target = self.address_of(contract)
        abi = self._abi(contract)
        async with web3_from_chain_id(self._chain_id) as web3:
            instance = web3.eth.contract(
                address=AsyncWeb3.to_checksum_address(target), abi=abi
            )
            fn = getattr(instance.functions, method)
            try:
                return await fn(*self._cast(abi, method, args)).call(
                    block_identifier="latest"
                )
            except Web3Exception as exc:
                raise CallRevertedError(contract, method, str(exc)) from exc

    async def native_balance(self, address: str) -> int:
        async with web3_from_chain_id(self._chain_id) as web3:
            return int(
                await web3.eth.get_balance(AsyncWeb3.to_checksum_address(address))
            )

    async def deploy(
        self,
        contract: str,
        constructor_args: list[Any] | tuple[Any, ...] = (),
        *,
        signer: LocalAccount,
    ) -> str:
        artifact = self.artifacts.get(contract)
        try:
            result = await deploy_contract(
                artifact=artifact,
                constructor_args=list(constructor_args),
                from_address=signer.address,
                chain_id=self._chain_id,
                sign_callback=make_sign_callback(signer),
            )
        except _SUBMIT_ERRORS as exc:
            raise CallRevertedError(contract, "constructor", str(exc)) from exc
        return result["contract_address"]
