"""Configuration constants for launchpad-deployments library."""

TOKEN_REGISTRY = "TokenRegistry"
TOKEN_FACTORY = "TokenFactory"

# Blocks mined on top of a creation transaction before the explorer will index it
VERIFICATION_CONFIRMATIONS = 5

# Base reuses the Ethereum Uniswap V3 factory address; WETH is the OP-stack predeploy
UNISWAP_V3_FACTORY = "0x1F98431c8aD98523631AE4a59f267346ea31F984"
BASE_WETH = "0x4200000000000000000000000000000000000006"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Network configuration, keyed by the names used on the command line
NETWORK_CONFIG = {
    "hardhat": {
        "chain_id": 31337,
        "is_local": True,
        "rpc_env": "HARDHAT_RPC_URL",
        "default_rpc_url": "http://127.0.0.1:8545",
        "explorer_api_url": None,
        "explorer_browser_url": None,
        "uniswap_v3_factory": UNISWAP_V3_FACTORY,
        "weth": BASE_WETH,
    },
    "localhost": {
        "chain_id": 31337,
        "is_local": True,
        "rpc_env": "LOCALHOST_RPC_URL",
        "default_rpc_url": "http://127.0.0.1:8545",
        "explorer_api_url": None,
        "explorer_browser_url": None,
        "uniswap_v3_factory": UNISWAP_V3_FACTORY,
        "weth": BASE_WETH,
    },
    "baseSepolia": {
        "chain_id": 84532,
        "is_local": False,
        "rpc_env": "BASE_SEPOLIA_RPC_URL",
        "default_rpc_url": "https://sepolia.base.org",
        "explorer_api_url": "https://api-sepolia.basescan.org/api",
        "explorer_browser_url": "https://sepolia.basescan.org",
        "uniswap_v3_factory": UNISWAP_V3_FACTORY,
        "weth": BASE_WETH,
    },
    "baseMainnet": {
        "chain_id": 8453,
        "is_local": False,
        "rpc_env": "BASE_MAINNET_RPC_URL",
        "default_rpc_url": "https://mainnet.base.org",
        "explorer_api_url": "https://api.basescan.org/api",
        "explorer_browser_url": "https://basescan.org",
        "uniswap_v3_factory": UNISWAP_V3_FACTORY,
        "weth": BASE_WETH,
        "gas_price": 1_000_000_000,  # 1 gwei
    },
}
