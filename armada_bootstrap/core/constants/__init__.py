from armada_bootstrap.core.constants.base import ZERO_ADDRESS
from armada_bootstrap.core.constants.chains import (
    CHAIN_ID_HARDHAT,
    CHAIN_ID_MONAD_MAINNET,
    CHAIN_ID_MONAD_TESTNET,
    SUPPORTED_CHAINS,
)

__all__ = [
    "CHAIN_ID_HARDHAT",
    "CHAIN_ID_MONAD_MAINNET",
    "CHAIN_ID_MONAD_TESTNET",
    "SUPPORTED_CHAINS",
    "ZERO_ADDRESS",
]
