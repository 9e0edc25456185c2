"""Contract deployment from pre-built artifacts.

Goes through ``send_transaction`` so nonce management, gas pricing,
broadcast and receipt waiting are shared with ordinary calls.
"""

from __future__ import annotations

from typing import Any

from loguru import logger
from web3 import AsyncWeb3

from armada_bootstrap.core.utils.abi_caster import cast_args, get_constructor_inputs
from armada_bootstrap.core.utils.artifacts import ContractArtifact
from armada_bootstrap.core.utils.transaction import SignCallback, send_transaction
from armada_bootstrap.core.utils.web3 import web3_from_chain_id


async def build_deploy_transaction(
    *,
    abi: list[dict[str, Any]],
    bytecode: str,
    constructor_args: list[Any] | None = None,
    from_address: str,
    chain_id: int,
) -> dict[str, Any]:
    """Build an unsigned contract-creation transaction.

    Casts constructor args via ``abi_caster`` and encodes them into the
    deployment bytecode.
    """
    async with web3_from_chain_id(chain_id) as w3:
        contract = w3.eth.contract(abi=abi, bytecode=bytecode)

        args: list[Any] = list(constructor_args or [])
        ctor_inputs = get_constructor_inputs(abi)
        if ctor_inputs or args:
            args = cast_args(args, ctor_inputs)

        tx = await contract.constructor(*args).build_transaction(
            {
                "chainId": chain_id,
                "from": AsyncWeb3.to_checksum_address(from_address),
                "value": 0,
            }
        )

    # Remove fields that send_transaction() will set
    tx.pop("gas", None)
    tx.pop("gasPrice", None)
    tx.pop("maxFeePerGas", None)
    tx.pop("maxPriorityFeePerGas", None)
    tx.pop("nonce", None)

    return dict(tx)


async def deploy_contract(
    *,
    artifact: ContractArtifact,
    constructor_args: list[Any] | None = None,
    from_address: str,
    chain_id: int,
    sign_callback: SignCallback,
) -> dict[str, Any]:
    """Deploy *artifact* and wait for it to be mined.

    Returns ``{"tx_hash", "contract_address"}``.
    """
    tx = await build_deploy_transaction(
        abi=artifact.abi,
        bytecode=artifact.bytecode,
        constructor_args=constructor_args,
        from_address=from_address,
        chain_id=chain_id,
    )

    tx_hash, receipt = await send_transaction(tx, sign_callback, wait_for_receipt=True)

    contract_address = receipt.get("contractAddress")
    if not contract_address:
        raise RuntimeError(
            f"Deploy tx {tx_hash} succeeded but no contractAddress in receipt"
        )

    contract_address = AsyncWeb3.to_checksum_address(contract_address)
    logger.info(f"Deployed {artifact.name} at {contract_address}")
    return {"tx_hash": tx_hash, "contract_address": contract_address}
