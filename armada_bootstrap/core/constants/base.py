GAS_BUFFER_MULTIPLIER = 1.1
SUGGESTED_PRIORITY_FEE_MULTIPLIER = 1.5
SUGGESTED_GAS_PRICE_MULTIPLIER = 1.5
MAX_BASE_FEE_GROWTH_MULTIPLIER = 2

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Timeout constants (seconds)
# Monad testnet RPCs occasionally lag on receipts under load.
DEFAULT_TRANSACTION_TIMEOUT = 180
DEFAULT_POLL_INTERVAL = 0.5
DEFAULT_CONFIRMATIONS = 1

# Native MON and the SEAS/ARMADA tokens all use 18 decimals.
TOKEN_DECIMALS = 18

DEFAULT_MIN_GAS_BALANCE = "0.01"
DEFAULT_MIN_BANKROLL = "100"
DEFAULT_AGENT_INITIAL_BANKROLL = "1000"
DEFAULT_AGENT_SEAS_FUND = "10000"

DEFAULT_ENV_FILENAME = ".env.local"
ADDRESSES_FILENAME_TEMPLATE = "deployed-addresses-{chain_id}.json"
DEFAULT_ARTIFACTS_DIR = "artifacts/contracts"
