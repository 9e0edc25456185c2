CHAIN_ID_MONAD_TESTNET = 10143
CHAIN_ID_MONAD_MAINNET = 41454
CHAIN_ID_HARDHAT = 31337

NETWORK_TO_CHAIN_ID = {
    "testnet": CHAIN_ID_MONAD_TESTNET,
    "monad-testnet": CHAIN_ID_MONAD_TESTNET,
    "mainnet": CHAIN_ID_MONAD_MAINNET,
    "monad-mainnet": CHAIN_ID_MONAD_MAINNET,
    "local": CHAIN_ID_HARDHAT,
    "hardhat": CHAIN_ID_HARDHAT,
}

CHAIN_ID_TO_NETWORK: dict[int, str] = {
    CHAIN_ID_MONAD_TESTNET: "monad-testnet",
    CHAIN_ID_MONAD_MAINNET: "monad-mainnet",
    CHAIN_ID_HARDHAT: "hardhat",
}

SUPPORTED_CHAINS = [
    CHAIN_ID_MONAD_TESTNET,
    CHAIN_ID_MONAD_MAINNET,
    CHAIN_ID_HARDHAT,
]

# Env overrides take precedence over the public endpoints below.
RPC_URL_ENV_KEYS: dict[int, str] = {
    CHAIN_ID_MONAD_TESTNET: "MONAD_RPC_URL_TESTNET",
    CHAIN_ID_MONAD_MAINNET: "MONAD_RPC_URL_MAINNET",
}

DEFAULT_RPC_URLS: dict[int, str] = {
    CHAIN_ID_MONAD_TESTNET: "https://testnet-rpc.monad.xyz",
    CHAIN_ID_MONAD_MAINNET: "https://rpc.monad.xyz",
    CHAIN_ID_HARDHAT: "http://127.0.0.1:8545",
}

CHAIN_EXPLORER_URLS: dict[int, str] = {
    CHAIN_ID_MONAD_TESTNET: "https://testnet.monadexplorer.com/",
    CHAIN_ID_MONAD_MAINNET: "https://monadexplorer.com/",
}
