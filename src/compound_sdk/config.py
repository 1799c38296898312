import os
from dataclasses import dataclass, replace
from typing import Optional, Union

from .constants import CANONICAL_MAINNET_NAME, DEFAULT_NETWORK, RPC_URL_ENV_PREFIX

__all__ = ["NetworkConfig", "NETWORKS", "get_network", "get_network_config"]


@dataclass(frozen=True)
class NetworkConfig:
    name: str
    chain_id: int
    rpc_urls: tuple[str, ...]


NETWORKS: dict[str, NetworkConfig] = {
    CANONICAL_MAINNET_NAME: NetworkConfig(
        name=CANONICAL_MAINNET_NAME,
        chain_id=1,
        rpc_urls=(
            "https://cloudflare-eth.com",
            "https://ethereum-rpc.publicnode.com",
        ),
    ),
    "ropsten": NetworkConfig(name="ropsten", chain_id=3, rpc_urls=("https://rpc.ankr.com/eth_ropsten",)),
    "rinkeby": NetworkConfig(name="rinkeby", chain_id=4, rpc_urls=("https://rpc.ankr.com/eth_rinkeby",)),
    "goerli": NetworkConfig(name="goerli", chain_id=5, rpc_urls=("https://rpc.ankr.com/eth_goerli",)),
    "kovan": NetworkConfig(name="kovan", chain_id=42, rpc_urls=("https://kovan.poa.network",)),
    "sepolia": NetworkConfig(
        name="sepolia",
        chain_id=11155111,
        rpc_urls=("https://ethereum-sepolia-rpc.publicnode.com", "https://rpc.sepolia.org"),
    ),
    "holesky": NetworkConfig(
        name="holesky",
        chain_id=17000,
        rpc_urls=("https://ethereum-holesky-rpc.publicnode.com",),
    ),
}

_ALIASES = {DEFAULT_NETWORK: CANONICAL_MAINNET_NAME}


def get_network(network: Union[str, int, None]) -> Optional[NetworkConfig]:
    """Look up a known public network by name or chain id.

    Accepts a name ("mainnet", "sepolia"), a chain id (1) or its decimal
    string form ("1"). Returns None when the network is unknown.
    """
    if network is None or isinstance(network, bool):
        return None
    if isinstance(network, int):
        return _by_chain_id(network)
    if not isinstance(network, str):
        return None

    key = network.strip().lower()
    if key.isdigit():
        return _by_chain_id(int(key))
    return NETWORKS.get(_ALIASES.get(key, key))


def get_network_config(network: Union[str, int], rpc_url: Optional[str] = None) -> NetworkConfig:
    """Return the config for a known network with the effective endpoint list.

    ``rpc_url`` (or the ``COMPOUND_RPC_URL_<NAME>`` environment variable)
    is placed ahead of the public endpoints.

    Raises:
        KeyError: If the network is unknown.
    """
    cfg = get_network(network)
    if cfg is None:
        raise KeyError(f"unknown network: {network!r}")

    custom = rpc_url or _env_rpc_url(cfg)
    if custom:
        return replace(cfg, rpc_urls=(custom,) + tuple(u for u in cfg.rpc_urls if u != custom))
    return cfg


def _by_chain_id(chain_id: int) -> Optional[NetworkConfig]:
    for cfg in NETWORKS.values():
        if cfg.chain_id == chain_id:
            return cfg
    return None


def _env_rpc_url(cfg: NetworkConfig) -> Optional[str]:
    names = [cfg.name] + [alias for alias, target in _ALIASES.items() if target == cfg.name]
    for name in names:
        value = os.environ.get(RPC_URL_ENV_PREFIX + name.upper())
        if value:
            return value
    return None
