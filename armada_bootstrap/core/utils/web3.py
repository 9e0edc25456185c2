from contextlib import asynccontextmanager

from web3 import AsyncHTTPProvider, AsyncWeb3

from armada_bootstrap.core.config import get_rpc_urls_for_chain
from armada_bootstrap.core.constants.chains import CHAIN_EXPLORER_URLS


def _get_rpcs_for_chain_id(chain_id: int) -> list[str]:
    rpcs = get_rpc_urls_for_chain(chain_id)
    if not rpcs:
        raise ValueError(f"No RPCs configured for chain ID {chain_id}")
    return rpcs


def _get_web3(rpc: str) -> AsyncWeb3:
    provider = AsyncHTTPProvider(
        rpc, request_kwargs={"headers": AsyncHTTPProvider.get_request_headers()}
    )
    return AsyncWeb3(provider)


def get_transaction_chain_id(transaction: dict) -> int:
    if "chainId" not in transaction:
        raise ValueError("Transaction does not contain chainId")
    return int(transaction["chainId"])


def get_web3s_from_chain_id(chain_id: int) -> list[AsyncWeb3]:
    rpcs = _get_rpcs_for_chain_id(chain_id)
    return [_get_web3(rpc) for rpc in rpcs]


def get_explorer_transaction_link(chain_id: int, txn_hash: str) -> str | None:
    base = CHAIN_EXPLORER_URLS.get(int(chain_id))
    if not base:
        return None
    return f"{base}tx/{txn_hash}"


@asynccontextmanager
async def web3s_from_chain_id(chain_id: int):
    web3s = get_web3s_from_chain_id(chain_id)
    try:
        yield web3s
    finally:
        for web3 in web3s:
            await web3.provider.disconnect()


@asynccontextmanager
async def web3_from_chain_id(chain_id: int):
    web3s = get_web3s_from_chain_id(chain_id)
    try:
        yield web3s[0]
    finally:
        await web3s[0].provider.disconnect()
