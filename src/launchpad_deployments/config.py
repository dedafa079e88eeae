"""Run settings for launchpad-deployments, read from the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .constants import NETWORK_CONFIG
from .exceptions import NetworkNotFoundError
from .types import NetworkContext


@dataclass(frozen=True)
class DeploymentSettings:
    """Everything a run needs besides the contracts themselves."""

    network: NetworkContext
    rpc_url: str
    artifacts_dir: Path
    uniswap_v3_factory: str
    weth: str

    # Optional fields
    private_key: Optional[str] = field(default=None, repr=False)  # None: node account
    explorer_api_url: Optional[str] = None
    explorer_api_key: Optional[str] = field(default=None, repr=False)
    explorer_browser_url: Optional[str] = None
    gas_price: Optional[int] = None  # Wei; None lets the node price transactions


def get_network_config(network: str) -> Dict[str, Any]:
    """
    Look up a network in NETWORK_CONFIG.

    Raises:
        NetworkNotFoundError: If network is not configured
    """
    if network not in NETWORK_CONFIG:
        known = ", ".join(sorted(NETWORK_CONFIG))
        raise NetworkNotFoundError(f"Network '{network}' not configured (known: {known})")
    return NETWORK_CONFIG[network]


def network_context(network: str) -> NetworkContext:
    config = get_network_config(network)
    return NetworkContext(name=network, chain_id=config["chain_id"], is_local=config["is_local"])


def load_settings(
    network: str,
    env: Optional[Mapping[str, str]] = None,
    artifacts_dir: Optional[Union[Path, str]] = None,
) -> DeploymentSettings:
    """
    Build settings for a network from NETWORK_CONFIG and environment variables.

    Environment variables:
        PRIVATE_KEY: Deployer key (hex); optional on local networks
        <rpc_env>: RPC URL override, e.g. BASE_SEPOLIA_RPC_URL
        ETHERSCAN_API_KEY: Block explorer API key
        ARTIFACTS_DIR: Hardhat artifacts directory (defaults to ./artifacts)

    Args:
        network: Network name, e.g. "baseSepolia"
        env: Environment mapping (defaults to os.environ)
        artifacts_dir: Overrides ARTIFACTS_DIR

    Returns:
        DeploymentSettings

    Raises:
        NetworkNotFoundError: If network is not configured
    """
    if env is None:
        env = os.environ

    config = get_network_config(network)

    if artifacts_dir is None:
        artifacts_dir = env.get("ARTIFACTS_DIR") or Path.cwd() / "artifacts"

    # Treat empty values as unset, like `accounts: PRIVATE_KEY ? [PRIVATE_KEY] : []`
    private_key = env.get("PRIVATE_KEY") or None

    return DeploymentSettings(
        network=network_context(network),
        rpc_url=env.get(config["rpc_env"]) or config["default_rpc_url"],
        artifacts_dir=Path(artifacts_dir).absolute(),
        uniswap_v3_factory=config["uniswap_v3_factory"],
        weth=config["weth"],
        private_key=private_key,
        explorer_api_url=config.get("explorer_api_url"),
        explorer_api_key=env.get("ETHERSCAN_API_KEY") or None,
        explorer_browser_url=config.get("explorer_browser_url"),
        gas_price=config.get("gas_price"),
    )
