DEFAULT_NETWORK = "mainnet"

# Name ethers/web3 tooling use for chain id 1; presented as DEFAULT_NETWORK.
CANONICAL_MAINNET_NAME = "homestead"

# Receipt wait used by TransactionResponse.wait() (seconds)
DEFAULT_TX_WAIT_TIMEOUT = 120.0

BLOCK_TAG_LATEST = "latest"
BLOCK_TAG_PENDING = "pending"

# Transaction override keys appended to every dispatch, in order.
OVERRIDE_KEYS = ("gasPrice", "nonce", "value", "chainId", "from", "gasLimit")

# Override keys renamed when handed to web3.py as TxParams.
TX_PARAM_RENAMES = {"gasLimit": "gas"}

# Environment variable prefix for custom RPC endpoints, e.g. COMPOUND_RPC_URL_MAINNET
RPC_URL_ENV_PREFIX = "COMPOUND_RPC_URL_"

# Default BIP-44 derivation path for mnemonic wallets
DEFAULT_HD_PATH = "m/44'/60'/0'/0/0"
